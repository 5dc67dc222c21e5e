"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import StrEnum

ZERO = Decimal("0")


class PassageType(StrEnum):
    UNKNOWN = "Unknown"
    STANDARD = "Standard"
    EXEMPTION_NO_FEE_INTERVAL = "ExemptionNoFeeInterval"
    EXEMPTION_WEEKEND = "ExemptionWeekend"
    EXEMPTION_PUBLIC_HOLIDAY = "ExemptionPublicHoliday"
    EXEMPTION_PARTIAL_DAILY_MAX = "ExemptionPartialDailyMax"
    EXEMPTION_FULL_DAILY_MAX = "ExemptionFullDailyMax"
    STANDARD_WINDOW_PEAK = "StandardWindowPeak"
    EXEMPTION_WINDOW_NON_PEAK = "ExemptionWindowNonPeak"
    EXEMPTION_VEHICLE_TYPE = "ExemptionVehicleType"


class VehicleType(StrEnum):
    """Known vehicle types. Any other non-empty string is accepted as well."""

    CAR = "Car"
    MOTORBIKE = "Motorbike"
    TRACTOR = "Tractor"
    EMERGENCY = "Emergency"
    DIPLOMAT = "Diplomat"
    FOREIGN = "Foreign"
    MILITARY = "Military"


@dataclass(frozen=True, slots=True)
class Interval:
    start: time
    end: time

    def contains(self, value: time) -> bool:
        return self.start <= value < self.end


@dataclass(frozen=True, slots=True)
class Fee:
    amount: Decimal
    intervals: tuple[Interval, ...]


@dataclass(frozen=True, slots=True)
class RuleSet:
    daily_max_fee: Decimal
    window_duration: timedelta
    fees: tuple[Fee, ...]
    exempt_weekdays: frozenset[int]
    exempt_vehicle_types: frozenset[str]
    valid_until: datetime


@dataclass(frozen=True, slots=True)
class Passage:
    time: time
    potential_fee: Decimal
    type: PassageType
    charged_fee: Decimal = ZERO


Window = tuple[Passage, ...]


@dataclass(frozen=True, slots=True)
class DailyReport:
    date: date
    windows: tuple[Window, ...]

    @property
    def passages(self) -> list[Passage]:
        return [passage for window in self.windows for passage in window]

    @property
    def total_fee(self) -> Decimal:
        return sum((passage.charged_fee for passage in self.passages), ZERO)
