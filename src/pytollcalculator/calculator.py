"""Daily report computation."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime

from .classifier import classify_passage
from .evaluation import evaluate_windows
from .exemptions import apply_day_exemption, resolve_day_exemption
from .holiday import HolidayCalendar, SwedishHolidayCalendar
from .models import DailyReport, RuleSet
from .util import ensure_timestamps, normalize_vehicle_type
from .windowing import build_windows

_LOGGER = logging.getLogger(__name__)
_DEFAULT_CALENDAR: SwedishHolidayCalendar | None = None


def default_holiday_calendar() -> SwedishHolidayCalendar:
    global _DEFAULT_CALENDAR
    if _DEFAULT_CALENDAR is None:
        _DEFAULT_CALENDAR = SwedishHolidayCalendar()
    return _DEFAULT_CALENDAR


def _wall_clock(timestamp: datetime) -> datetime:
    return timestamp.replace(tzinfo=None)


def compute_daily_report(
    rules: RuleSet,
    vehicle_type: str,
    day: date,
    timestamps: Iterable[datetime],
    is_public_holiday: HolidayCalendar,
) -> DailyReport:
    passages = [
        classify_passage(rules, timestamp)
        for timestamp in sorted(timestamps, key=_wall_clock)
    ]
    windows = build_windows(passages, rules.window_duration)
    exemption = resolve_day_exemption(rules, vehicle_type, day, is_public_holiday)
    if exemption is not None:
        windows = apply_day_exemption(windows, exemption)
    else:
        windows = evaluate_windows(windows, rules.daily_max_fee)
    return DailyReport(date=day, windows=windows)


def compute_daily_reports(
    rules: RuleSet,
    vehicle_type: str,
    timestamps: Iterable[datetime],
    *,
    is_public_holiday: HolidayCalendar | None = None,
) -> list[DailyReport]:
    """Compute one report per calendar day, ordered by date.

    Timestamps are grouped and ordered by their own local wall-clock time;
    aware timestamps are not converted to UTC first, so naive and aware values
    may be mixed.
    """
    vehicle_type = normalize_vehicle_type(vehicle_type)
    calendar = is_public_holiday or default_holiday_calendar()
    by_day: dict[date, list[datetime]] = defaultdict(list)
    for timestamp in ensure_timestamps(timestamps):
        by_day[timestamp.date()].append(timestamp)
    reports = [
        compute_daily_report(rules, vehicle_type, day, by_day[day], calendar)
        for day in sorted(by_day)
    ]
    _LOGGER.debug(
        "Computed %d daily reports for vehicle type %s",
        len(reports),
        vehicle_type,
    )
    return reports
