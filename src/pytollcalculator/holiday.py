"""Public holiday calendars."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

import holidays
from holidays.constants import BANK, PUBLIC

HolidayCalendar = Callable[[date], bool]

# Eves that are free days but filed under the bank category; the category also
# holds afternoon-only closures that are not.
_SWEDISH_EVES = frozenset({"Julafton", "Midsommarafton", "Nyårsafton"})


class SwedishHolidayCalendar:
    """Swedish public holidays, including Christmas Eve, Midsummer Eve and New Year's Eve.

    Ordinary Sundays are left to the weekend rule of the rule set.
    """

    def __init__(self) -> None:
        self._public = holidays.Sweden(include_sundays=False, categories=(PUBLIC,))
        self._bank = holidays.Sweden(include_sundays=False, categories=(BANK,))

    def __call__(self, day: date) -> bool:
        return self.name(day) is not None

    def name(self, day: date) -> str | None:
        names = self._public.get_list(day)
        names.extend(name for name in self._bank.get_list(day) if name in _SWEDISH_EVES)
        return "; ".join(names) if names else None
