# payroll/utils/dates.py
from datetime import datetime, timezone
from typing import Optional, Tuple


def month_range(ym: str) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Half-open UTC interval covering the month ``YYYY-MM``:
    ``[YYYY-MM-01T00:00Z, first day of next month)``.

    Anything that is not a real year-month gives ``(None, None)``.
    """
    if not ym:
        return None, None
    try:
        parts = str(ym).strip().split("-")
        if len(parts) != 2 or len(parts[0]) != 4 or not parts[1].isdigit():
            return None, None
        y = int(parts[0])
        m = int(parts[1])
        start = datetime(y, m, 1, tzinfo=timezone.utc)
        if m == 12:
            end = datetime(y + 1, 1, 1, tzinfo=timezone.utc)
        else:
            end = datetime(y, m + 1, 1, tzinfo=timezone.utc)
    except ValueError:
        return None, None
    return start, end


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # sqlite / mysql hand back naive values; they were written as UTC
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        # e.g. 0001-01-01T00:00+14:00 lands before datetime.min in UTC
        raise ValueError("timestamp out of range")
