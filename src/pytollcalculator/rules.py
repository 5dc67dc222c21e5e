"""Rule set parsing, validation and defaults."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from .exceptions import ConfigError, ValidationError
from .models import Fee, Interval, RuleSet, VehicleType
from .util import (
    normalize_vehicle_type,
    parse_amount,
    parse_time_of_day,
    parse_timestamp,
    parse_weekday,
)

_REQUIRED_KEYS = (
    "dailyMaxFee",
    "windowDurationMinutes",
    "fees",
    "exemptDaysOfTheWeek",
    "exemptVehicleTypes",
    "validUntil",
)


def _interval(start: tuple[int, int], end: tuple[int, int]) -> Interval:
    return Interval(start=time(*start), end=time(*end))


DEFAULT_RULES = RuleSet(
    daily_max_fee=Decimal("60"),
    window_duration=timedelta(minutes=60),
    fees=(
        Fee(
            amount=Decimal("8"),
            intervals=(
                _interval((6, 0), (6, 30)),
                _interval((8, 30), (15, 0)),
                _interval((17, 0), (18, 0)),
            ),
        ),
        Fee(
            amount=Decimal("13"),
            intervals=(
                _interval((6, 30), (7, 0)),
                _interval((8, 0), (8, 30)),
                _interval((15, 0), (15, 30)),
            ),
        ),
        Fee(
            amount=Decimal("18"),
            intervals=(
                _interval((7, 0), (8, 0)),
                _interval((15, 30), (17, 0)),
            ),
        ),
    ),
    exempt_weekdays=frozenset({5, 6}),
    exempt_vehicle_types=frozenset(
        normalize_vehicle_type(vehicle)
        for vehicle in (VehicleType.EMERGENCY, VehicleType.DIPLOMAT, VehicleType.MILITARY)
    ),
    valid_until=datetime(2026, 12, 31, tzinfo=UTC),
)


def validate_fee_table(fees: Iterable[Fee]) -> None:
    """Reject reversed, empty or overlapping intervals across the whole table."""
    intervals: list[Interval] = []
    for fee in fees:
        if fee.amount < 0:
            raise ConfigError("Fee amount must not be negative.")
        for interval in fee.intervals:
            if interval.end <= interval.start:
                raise ConfigError(
                    f"Interval {interval.start:%H:%M}-{interval.end:%H:%M} must end after it starts."
                )
            intervals.append(interval)
    intervals.sort(key=lambda interval: interval.start)
    for previous, current in zip(intervals, intervals[1:]):
        if current.start < previous.end:
            raise ConfigError(
                f"Interval {current.start:%H:%M}-{current.end:%H:%M} overlaps "
                f"{previous.start:%H:%M}-{previous.end:%H:%M}."
            )


def validate_rules(rules: RuleSet) -> RuleSet:
    if not isinstance(rules, RuleSet):
        raise ConfigError("Rules must be a RuleSet.")
    if rules.daily_max_fee < 0:
        raise ConfigError("dailyMaxFee must not be negative.")
    if rules.window_duration <= timedelta(0):
        raise ConfigError("windowDurationMinutes must be positive.")
    if rules.valid_until.tzinfo is None:
        raise ConfigError("validUntil must include timezone information.")
    validate_fee_table(rules.fees)
    return rules


def _parse_interval(data: Any) -> Interval:
    if not isinstance(data, dict):
        raise ConfigError("Fee interval must be a JSON object.")
    if "startTime" not in data or "endTime" not in data:
        raise ConfigError("Fee interval requires startTime and endTime.")
    return Interval(
        start=parse_time_of_day(data["startTime"]),
        end=parse_time_of_day(data["endTime"]),
    )


def _parse_fee(data: Any) -> Fee:
    if not isinstance(data, dict):
        raise ConfigError("Fee must be a JSON object.")
    intervals = data.get("intervals")
    if not isinstance(intervals, list):
        raise ConfigError("Fee intervals must be a list.")
    return Fee(
        amount=parse_amount(data.get("amount"), "Fee amount"),
        intervals=tuple(_parse_interval(item) for item in intervals),
    )


def _parse_list(data: dict, key: str) -> list[Any]:
    value = data[key]
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list.")
    return value


def parse_rules(data: Any) -> RuleSet:
    """Build a validated rule set from its JSON representation."""
    if not isinstance(data, dict):
        raise ConfigError("Rules must be a JSON object.")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigError(f"Rules missing keys: {', '.join(missing)}.")
    window_minutes = parse_amount(data["windowDurationMinutes"], "windowDurationMinutes")
    vehicle_types = _parse_list(data, "exemptVehicleTypes")
    if not all(isinstance(vehicle, str) for vehicle in vehicle_types):
        raise ConfigError("exemptVehicleTypes must be a list of strings.")
    try:
        exempt_vehicle_types = frozenset(normalize_vehicle_type(vehicle) for vehicle in vehicle_types)
    except ValidationError as exc:
        raise ConfigError("exemptVehicleTypes must not contain empty names.") from exc
    rules = RuleSet(
        daily_max_fee=parse_amount(data["dailyMaxFee"], "dailyMaxFee"),
        window_duration=timedelta(minutes=float(window_minutes)),
        fees=tuple(_parse_fee(item) for item in _parse_list(data, "fees")),
        exempt_weekdays=frozenset(
            parse_weekday(day) for day in _parse_list(data, "exemptDaysOfTheWeek")
        ),
        exempt_vehicle_types=exempt_vehicle_types,
        valid_until=parse_timestamp(data["validUntil"]),
    )
    return validate_rules(rules)
