from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import BR_DATE_FORMAT, DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def get_tz(name: str | None) -> ZoneInfo:
    try:
        return ZoneInfo(name or DEFAULT_TIMEZONE)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Fuso horário desconhecido: {name!r}") from e


def now_local(tz: ZoneInfo | None = None) -> datetime:
    """Current wall-clock time in `tz`, as a naive datetime.

    Timestamps are stored as local time, so the tzinfo is dropped here.
    Wrapped so tests can patch it.
    """
    return datetime.now(tz or get_tz(None)).replace(tzinfo=None)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Data inválida: {value!r} (use AAAA-MM-DD)")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Mês inválido: {value!r} (use AAAA-MM)")
    return parsed.year, parsed.month


def parse_client_timestamp(value: str, tz: ZoneInfo) -> datetime:
    """Parse an ISO-8601 timestamp sent by a client into naive local time.

    Aware values are converted to `tz`; naive values are taken as local.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Horário inválido: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def format_br_date(value: date) -> str:
    return value.strftime(BR_DATE_FORMAT)


def format_hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the month."""
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])
