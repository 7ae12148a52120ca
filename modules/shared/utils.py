from uuid import uuid4
from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel

from modules.shared.errors import ValidationError


def generate_id(prefix: str) -> str:
    """Generate a unique record id such as 'req-3f9c...'"""
    return f"{prefix}-{uuid4().hex}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a 'Z' suffix"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_local_date(value: datetime) -> str:
    """en-IN short date, e.g. 5/1/2026"""
    return f"{value.day}/{value.month}/{value.year}"


def format_local_time(value: datetime) -> str:
    """en-IN time, e.g. 3:04:05 pm"""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value.minute:02d}:{value.second:02d} {suffix}"


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(model: BaseModel, fields: Iterable[str]) -> list:
    """Wire (camelCase) names of required fields that are absent or blank"""
    data = model.model_dump()
    model_fields = type(model).model_fields
    return [model_fields[name].alias or name for name in fields if is_blank(data.get(name))]


def require_fields(model: BaseModel, fields: Iterable[str], message: str = "Missing required fields") -> None:
    """Raise ValidationError naming every absent or blank field"""
    missing = missing_fields(model, fields)
    if missing:
        raise ValidationError(f"{message}: {', '.join(missing)}")
