"""pyTollCalculator package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .calculator import compute_daily_reports
from .client import TollCalculator
from .exceptions import (
    AuthError,
    ConfigError,
    NetworkError,
    ProviderError,
    RulesUnavailableError,
    ValidationError,
)
from .holiday import SwedishHolidayCalendar
from .models import DailyReport, Fee, Interval, Passage, PassageType, RuleSet, VehicleType
from .rules import DEFAULT_RULES, parse_rules
from .store import RulesStore

try:
    __version__ = version("pytollcalculator")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "DEFAULT_RULES",
    "AuthError",
    "ConfigError",
    "DailyReport",
    "Fee",
    "Interval",
    "NetworkError",
    "Passage",
    "PassageType",
    "ProviderError",
    "RuleSet",
    "RulesStore",
    "RulesUnavailableError",
    "SwedishHolidayCalendar",
    "TollCalculator",
    "ValidationError",
    "VehicleType",
    "__version__",
    "compute_daily_reports",
    "parse_rules",
]
