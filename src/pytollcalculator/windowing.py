"""Grouping of a day's passages into charging windows."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from .models import Passage, Window


def _elapsed(start: time, end: time) -> timedelta:
    return datetime.combine(date.min, end) - datetime.combine(date.min, start)


def build_windows(passages: Sequence[Passage], window_duration: timedelta) -> tuple[Window, ...]:
    """Partition chronologically sorted passages into windows.

    A window is anchored at its first passage and accepts fee-bearing passages
    until ``window_duration`` has elapsed from that anchor. Passages without a
    potential fee always form a window of their own and reset the anchor.
    """
    windows: list[Window] = []
    current: list[Passage] = []
    anchor: time | None = None
    for passage in passages:
        if passage.potential_fee == 0:
            if current:
                windows.append(tuple(current))
            windows.append((passage,))
            current = []
            anchor = None
            continue
        if anchor is not None and current and _elapsed(anchor, passage.time) >= window_duration:
            windows.append(tuple(current))
            current = []
            anchor = None
        if anchor is None:
            anchor = passage.time
        current.append(passage)
    if current:
        windows.append(tuple(current))
    return tuple(windows)
