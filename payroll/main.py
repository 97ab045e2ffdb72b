# payroll/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from payroll.config import Settings, get_settings
from payroll.database import create_db_engine, create_session_factory, init_db
from payroll.errors import PayslipValidationError, StorageError, ConflictError
from payroll.payslips.router import router as payslip_router
from payroll.reports.router import router as reports_router

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    # a failed init is logged, the service still starts
    init_db(engine)

    logger.info("Registered routes:")
    for r in app.routes:
        if hasattr(r, "methods"):
            logger.info("  %-40s %s", r.path, sorted(r.methods))

    yield

    logger.info("Shutting down, disposing connection pool")
    engine.dispose()


# -------------------- error bodies: {"error": "..."} --------------------
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = f"Invalid request: {loc}: {first.get('msg')}" if loc else f"Invalid request: {first.get('msg')}"
    else:
        msg = "Invalid request"
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, msg)
    return JSONResponse({"error": msg}, status_code=400)


async def _payslip_validation_error(request: Request, exc: PayslipValidationError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=400)


async def _storage_error(request: Request, exc: StorageError):
    # cause already logged where it was raised; never sent to the client
    if isinstance(exc, ConflictError):
        return JSONResponse({"error": exc.message}, status_code=409)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


async def _unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(title="Payslip Service", lifespan=lifespan)

    engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    origins = settings.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(PayslipValidationError, _payslip_validation_error)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(payslip_router)
    app.include_router(reports_router)

    @app.get("/")
    def home():
        return {
            "message": "Payslip Service running!",
            "endpoints": {
                "payslips": "/api/payslips",
                "payslip_by_month": "/api/payslips/{employeeId}/{YYYY-MM}",
                "pf_records": "/api/pf-records/{YYYY-MM}",
                "esic_records": "/api/esic-records/{YYYY-MM}",
                "tax_records": "/api/tax-records/{YYYY-MM}",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    _settings = app.state.settings
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())
