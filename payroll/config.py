# payroll/config.py
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings

# .env in the project root (or any parent of the cwd); exported variables win
load_dotenv(find_dotenv())


class Settings(BaseSettings):
    """Service settings, read from environment variables (case-insensitive)."""

    # Database: DATABASE_URL, or assembled from the DB_* parts
    database_url: Optional[str] = None
    db_driver: str = "mysql+mysqlconnector"
    db_user: str = "root"
    db_password: str = "root"
    db_host: str = "localhost"
    db_port: Optional[int] = None
    db_name: str = "payroll_db"

    # Server
    host: str = "0.0.0.0"
    port: int = 3070

    # CORS
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def _assemble_database_url(self):
        if not self.database_url:
            hostport = f"{self.db_host}:{self.db_port}" if self.db_port else self.db_host
            self.database_url = f"{self.db_driver}://{self.db_user}:{self.db_password}@{hostport}/{self.db_name}"
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list"""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
