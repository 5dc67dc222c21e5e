from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from pytollcalculator.exceptions import (
    AuthError,
    ConfigError,
    NetworkError,
    ProviderError,
    RulesUnavailableError,
)
from pytollcalculator.models import RuleSet
from pytollcalculator.provider.base import BaseRulesProvider
from pytollcalculator.provider.static import StaticRulesProvider
from pytollcalculator.rules import DEFAULT_RULES
from pytollcalculator.store import RulesStore

_NOW = datetime(2026, 6, 1, tzinfo=UTC)
_REMOTE_RULES = replace(
    DEFAULT_RULES,
    daily_max_fee=Decimal("90"),
    valid_until=datetime(2026, 7, 1, tzinfo=UTC),
)


class _SequenceProvider(BaseRulesProvider):
    def __init__(self, results: list[object], *, gate: asyncio.Event | None = None) -> None:
        self._results = results
        self._gate = gate
        self.started = asyncio.Event()
        self.calls = 0

    async def fetch(self) -> RuleSet:
        self.calls += 1
        self.started.set()
        if self._gate is not None:
            await self._gate.wait()
        result = self._results[min(self.calls, len(self._results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result  # type: ignore[return-value]


class _SlowProvider(BaseRulesProvider):
    async def fetch(self) -> RuleSet:
        await asyncio.sleep(10)
        return _REMOTE_RULES


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_store_requires_provider_or_rules() -> None:
    with pytest.raises(ConfigError):
        RulesStore()


def test_store_rejects_invalid_initial_rules() -> None:
    with pytest.raises(ConfigError):
        RulesStore(initial=replace(DEFAULT_RULES, daily_max_fee=Decimal("-1")))


@pytest.mark.asyncio
async def test_static_store_never_refreshes() -> None:
    store = RulesStore(initial=DEFAULT_RULES, clock=_Clock(datetime(2030, 1, 1, tzinfo=UTC)))
    assert store.needs_refresh() is False
    assert await store.get_rules() is DEFAULT_RULES
    assert store.is_remote is False


@pytest.mark.asyncio
async def test_store_fetches_when_nothing_fetched_yet() -> None:
    provider = _SequenceProvider([_REMOTE_RULES])
    store = RulesStore(provider, initial=DEFAULT_RULES, clock=_Clock(_NOW))
    assert store.needs_refresh() is True
    assert await store.get_rules() is _REMOTE_RULES
    assert store.is_remote is True
    assert store.snapshot is _REMOTE_RULES


@pytest.mark.asyncio
async def test_store_reuses_valid_snapshot() -> None:
    provider = _SequenceProvider([_REMOTE_RULES])
    store = RulesStore(provider, clock=_Clock(_NOW))
    await store.get_rules()
    await store.get_rules()
    assert provider.calls == 1


@pytest.mark.asyncio
async def test_store_refreshes_expired_snapshot() -> None:
    newer = replace(_REMOTE_RULES, valid_until=datetime(2026, 8, 1, tzinfo=UTC))
    provider = _SequenceProvider([_REMOTE_RULES, newer])
    clock = _Clock(_NOW)
    store = RulesStore(provider, clock=clock)
    held = await store.get_rules()
    clock.now = datetime(2026, 7, 2, tzinfo=UTC)
    assert await store.get_rules() is newer
    assert provider.calls == 2
    assert held.valid_until == datetime(2026, 7, 1, tzinfo=UTC)


@pytest.mark.asyncio
async def test_store_explicit_refresh() -> None:
    provider = _SequenceProvider([_REMOTE_RULES, _REMOTE_RULES])
    store = RulesStore(provider, clock=_Clock(_NOW))
    await store.get_rules()
    await store.refresh()
    assert provider.calls == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [NetworkError("down"), ProviderError("bad"), AuthError("no"), ConfigError("broken")],
)
async def test_store_keeps_stale_snapshot_on_failure(
    error: Exception,
    caplog: pytest.LogCaptureFixture,
) -> None:
    provider = _SequenceProvider([error])
    store = RulesStore(provider, initial=DEFAULT_RULES, clock=_Clock(_NOW))
    with caplog.at_level(logging.WARNING, logger="pytollcalculator.store"):
        assert await store.get_rules() is DEFAULT_RULES
    assert store.is_remote is False
    assert "keeping rules" in caplog.text


@pytest.mark.asyncio
async def test_store_keeps_fetched_snapshot_on_failure() -> None:
    provider = _SequenceProvider([_REMOTE_RULES, NetworkError("down")])
    clock = _Clock(_NOW)
    store = RulesStore(provider, clock=clock)
    await store.get_rules()
    clock.now = datetime(2026, 7, 2, tzinfo=UTC)
    assert await store.get_rules() is _REMOTE_RULES
    assert provider.calls == 2


@pytest.mark.asyncio
async def test_store_without_snapshot_raises_distinct_error() -> None:
    provider = _SequenceProvider([NetworkError("down")])
    store = RulesStore(provider, clock=_Clock(_NOW))
    with pytest.raises(RulesUnavailableError) as excinfo:
        await store.get_rules()
    assert isinstance(excinfo.value.__cause__, NetworkError)
    assert store.snapshot is None


@pytest.mark.asyncio
async def test_store_refresh_timeout_without_snapshot() -> None:
    store = RulesStore(_SlowProvider(), refresh_timeout=0.01, clock=_Clock(_NOW))
    with pytest.raises(RulesUnavailableError) as excinfo:
        await store.get_rules()
    assert isinstance(excinfo.value.__cause__, TimeoutError)


@pytest.mark.asyncio
async def test_store_refresh_timeout_with_snapshot() -> None:
    store = RulesStore(
        _SlowProvider(),
        initial=DEFAULT_RULES,
        refresh_timeout=0.01,
        clock=_Clock(_NOW),
    )
    assert await store.get_rules() is DEFAULT_RULES


@pytest.mark.asyncio
async def test_store_concurrent_callers_share_one_fetch() -> None:
    gate = asyncio.Event()
    provider = _SequenceProvider([_REMOTE_RULES], gate=gate)
    store = RulesStore(provider, clock=_Clock(_NOW))
    tasks = [asyncio.create_task(store.get_rules()) for _ in range(5)]
    await provider.started.wait()
    gate.set()
    results = await asyncio.gather(*tasks)
    assert provider.calls == 1
    assert all(result is _REMOTE_RULES for result in results)


@pytest.mark.asyncio
async def test_store_cancelled_refresh_keeps_previous_snapshot() -> None:
    gate = asyncio.Event()
    provider = _SequenceProvider([_REMOTE_RULES], gate=gate)
    store = RulesStore(provider, initial=DEFAULT_RULES, clock=_Clock(_NOW))
    task = asyncio.create_task(store.get_rules())
    await provider.started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert store.snapshot is DEFAULT_RULES
    assert store.is_remote is False


@pytest.mark.asyncio
async def test_store_with_static_provider() -> None:
    store = RulesStore(StaticRulesProvider(_REMOTE_RULES), clock=_Clock(_NOW))
    assert await store.get_rules() is _REMOTE_RULES
    assert store.needs_refresh() is False
