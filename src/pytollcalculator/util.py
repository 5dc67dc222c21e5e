"""Shared utilities for validation and normalization."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from .exceptions import ConfigError, ValidationError

_TIME_OF_DAY_RE = re.compile(r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)(?::(?P<second>[0-5]\d))?$")
_WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def normalize_vehicle_type(vehicle_type: str) -> str:
    if not isinstance(vehicle_type, str):
        raise ValidationError("Vehicle type must be a string.")
    normalized = vehicle_type.strip().casefold()
    if not normalized:
        raise ValidationError("Vehicle type is empty after normalization.")
    return normalized


def ensure_timestamps(values: Iterable[Any]) -> list[datetime]:
    timestamps = list(values)
    for value in timestamps:
        if not isinstance(value, datetime):
            raise ValidationError("Timestamps must be datetime instances.")
    return timestamps


def parse_time_of_day(value: Any) -> time:
    if not isinstance(value, str):
        raise ConfigError("Time of day must be a string formatted as HH:mm.")
    match = _TIME_OF_DAY_RE.match(value.strip())
    if match is None:
        raise ConfigError(f"Time of day {value!r} is not formatted as HH:mm.")
    return time(
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"] or 0),
    )


def parse_weekday(value: Any) -> int:
    if not isinstance(value, str):
        raise ConfigError("Day of the week must be a string.")
    try:
        return _WEEKDAYS.index(value.strip().lower())
    except ValueError as exc:
        raise ConfigError(f"Unknown day of the week {value!r}.") from exc


def parse_amount(value: Any, field: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | float | str | Decimal):
        raise ConfigError(f"{field} must be a number.")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigError(f"{field} must be a number.") from exc
    if not amount.is_finite():
        raise ConfigError(f"{field} must be finite.")
    return amount


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        raise ConfigError("Timestamp must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ConfigError("Timestamp is not a valid ISO 8601 value.") from exc
    if parsed.tzinfo is None:
        # Offset-less validity horizons are published in UTC.
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    normalized = value.astimezone(UTC).replace(microsecond=0)
    return normalized.isoformat().replace("+00:00", "Z")
