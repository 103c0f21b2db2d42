import secrets
import string
import time
from datetime import date, datetime, timezone

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def generate_id() -> str:
    """Short unique id: base36 millisecond timestamp plus random suffix."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return _to_base36(int(time.time() * 1000)) + suffix


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: str) -> date:
    """Parse 'YYYY-MM-DD' or a full ISO timestamp down to its calendar date."""
    return date.fromisoformat(value[:10])


def parse_datetime(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_date(value: date) -> str:
    """'January 5, 2024'"""
    return f"{value:%B} {value.day}, {value.year}"


def format_short_date(value: date) -> str:
    """'Jan 5'"""
    return f"{value:%b} {value.day}"


def is_today(value: date, today: date | None = None) -> bool:
    today = today or date.today()
    if isinstance(value, datetime):
        value = value.date()
    return value == today


def time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Relative label used for posts and last-taken times."""
    now = now or utcnow()
    hours = int((now - moment).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    days = hours // 24
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return format_short_date(moment)
