"""Rule set snapshot store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from .exceptions import AuthError, ConfigError, NetworkError, ProviderError, RulesUnavailableError
from .models import RuleSet
from .provider.base import BaseRulesProvider
from .rules import validate_rules
from .util import format_utc_timestamp

_LOGGER = logging.getLogger(__name__)
_DEFAULT_REFRESH_TIMEOUT = 30.0


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RulesStore:
    """Owns the current rule set snapshot and refreshes it from a provider.

    Snapshots are immutable and replaced by a single reference assignment, so
    callers already holding one keep computing against it. Refreshes run under
    a lock; readers of a valid snapshot never wait on it.
    """

    def __init__(
        self,
        provider: BaseRulesProvider | None = None,
        *,
        initial: RuleSet | None = None,
        refresh_timeout: float | None = _DEFAULT_REFRESH_TIMEOUT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if provider is None and initial is None:
            raise ConfigError("A rules provider or an initial rule set is required.")
        self._provider = provider
        self._snapshot = validate_rules(initial) if initial is not None else None
        self._fetched = False
        self._refresh_timeout = refresh_timeout
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> RuleSet | None:
        return self._snapshot

    @property
    def is_remote(self) -> bool:
        """True once a rule set from the provider is held."""
        return self._fetched

    def needs_refresh(self) -> bool:
        if self._provider is None:
            return False
        snapshot = self._snapshot
        if snapshot is None or not self._fetched:
            return True
        return self._clock() > snapshot.valid_until

    async def get_rules(self) -> RuleSet:
        """Return a usable snapshot, refreshing it first when it has expired."""
        snapshot = self._snapshot
        if snapshot is not None and not self.needs_refresh():
            return snapshot
        async with self._lock:
            if self._snapshot is not None and not self.needs_refresh():
                return self._snapshot
            return await self._refresh()

    async def refresh(self) -> RuleSet:
        """Fetch a new snapshot regardless of the current one's validity."""
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> RuleSet:
        previous = self._snapshot
        if self._provider is None:
            if previous is None:
                raise RulesUnavailableError("No rules provider is configured.")
            return previous
        _LOGGER.debug("Rules refresh started from provider %s", self._provider.provider_id)
        try:
            async with asyncio.timeout(self._refresh_timeout):
                fresh = validate_rules(await self._provider.fetch())
        except (AuthError, NetworkError, ProviderError, ConfigError, TimeoutError) as exc:
            if previous is None:
                raise RulesUnavailableError("Rules could not be loaded.") from exc
            _LOGGER.warning(
                "Rules refresh from provider %s failed (%s), keeping rules valid until %s",
                self._provider.provider_id,
                type(exc).__name__,
                format_utc_timestamp(previous.valid_until),
            )
            return previous
        self._snapshot = fresh
        self._fetched = True
        if self._clock() > fresh.valid_until:
            _LOGGER.warning(
                "Provider %s returned rules that expired at %s",
                self._provider.provider_id,
                format_utc_timestamp(fresh.valid_until),
            )
        _LOGGER.debug(
            "Rules refresh completed, valid until %s",
            format_utc_timestamp(fresh.valid_until),
        )
        return fresh
