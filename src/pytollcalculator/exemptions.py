"""Whole-day exemption resolution."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date

from .models import ZERO, PassageType, RuleSet, Window
from .util import normalize_vehicle_type


def is_exempt_vehicle(rules: RuleSet, vehicle_type: str) -> bool:
    return normalize_vehicle_type(vehicle_type) in rules.exempt_vehicle_types


def is_weekend(rules: RuleSet, day: date) -> bool:
    return day.weekday() in rules.exempt_weekdays


def resolve_day_exemption(
    rules: RuleSet,
    vehicle_type: str,
    day: date,
    is_public_holiday: Callable[[date], bool],
) -> PassageType | None:
    """Return the override for the whole day, or None when windows must be evaluated.

    Precedence is vehicle type, then weekend, then public holiday.
    """
    if is_exempt_vehicle(rules, vehicle_type):
        return PassageType.EXEMPTION_VEHICLE_TYPE
    if is_weekend(rules, day):
        return PassageType.EXEMPTION_WEEKEND
    if is_public_holiday(day):
        return PassageType.EXEMPTION_PUBLIC_HOLIDAY
    return None


def apply_day_exemption(windows: Iterable[Window], passage_type: PassageType) -> tuple[Window, ...]:
    return tuple(
        tuple(replace(passage, type=passage_type, charged_fee=ZERO) for passage in window)
        for window in windows
    )
