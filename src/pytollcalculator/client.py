"""Calculator facade owning the rules store and the HTTP session."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import aiohttp

from .calculator import compute_daily_reports, default_holiday_calendar
from .exceptions import ValidationError
from .holiday import HolidayCalendar
from .models import DailyReport, RuleSet
from .provider.base import BaseRulesProvider
from .provider.http import HttpRulesProvider
from .rules import DEFAULT_RULES
from .store import RulesStore

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class TollCalculator:
    """Facade computing daily toll reports against the current rule set."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        rules_path: str | None = None,
        rules: RuleSet | None = None,
        provider: BaseRulesProvider | None = None,
        holiday_calendar: HolidayCalendar | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if provider is not None and base_url is not None:
            raise ValidationError("Pass either provider or base_url, not both.")
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._base_url = base_url
        self._rules_path = rules_path
        self._retry_count = max(0, retry_count)
        self._provider = provider
        self._rules = rules
        self._holiday_calendar = holiday_calendar or default_holiday_calendar()
        self._store: RulesStore | None = None

    async def __aenter__(self) -> TollCalculator:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def get_rules(self) -> RuleSet:
        return await self._ensure_store().get_rules()

    async def get_daily_reports(
        self,
        vehicle_type: str,
        timestamps: Iterable[datetime],
    ) -> list[DailyReport]:
        rules = await self._ensure_store().get_rules()
        return compute_daily_reports(
            rules,
            vehicle_type,
            timestamps,
            is_public_holiday=self._holiday_calendar,
        )

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def _ensure_store(self) -> RulesStore:
        if self._store is None:
            provider = self._provider
            if provider is None and self._base_url is not None:
                provider = HttpRulesProvider(
                    self._ensure_session(),
                    base_url=self._base_url,
                    rules_path=self._rules_path,
                    timeout=self._timeout,
                    retry_count=self._retry_count,
                )
            initial = self._rules
            if provider is None and initial is None:
                initial = DEFAULT_RULES
            self._store = RulesStore(
                provider,
                initial=initial,
                refresh_timeout=self._timeout.total,
            )
        return self._store
