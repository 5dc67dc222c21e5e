"""Peak selection and daily cap enforcement per window."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from .models import ZERO, Passage, PassageType, Window


def _evaluate_window(window: Window, allowed: Decimal) -> Window:
    peak_fee = max(passage.potential_fee for passage in window)
    peak_index = next(index for index, passage in enumerate(window) if passage.potential_fee == peak_fee)
    if allowed < peak_fee:
        peak_type = PassageType.EXEMPTION_PARTIAL_DAILY_MAX
    elif len(window) == 1:
        peak_type = PassageType.STANDARD
    else:
        peak_type = PassageType.STANDARD_WINDOW_PEAK

    evaluated: list[Passage] = []
    for index, passage in enumerate(window):
        if index == peak_index:
            evaluated.append(replace(passage, type=peak_type, charged_fee=allowed))
        elif passage.potential_fee > 0:
            evaluated.append(
                replace(passage, type=PassageType.EXEMPTION_WINDOW_NON_PEAK, charged_fee=ZERO)
            )
        else:
            evaluated.append(passage)
    return tuple(evaluated)


def evaluate_windows(windows: Iterable[Window], daily_max_fee: Decimal) -> tuple[Window, ...]:
    """Charge the peak passage of each window until the daily maximum is reached."""
    daily_total = ZERO
    evaluated: list[Window] = []
    for window in windows:
        if not window:
            continue
        if not any(passage.potential_fee > 0 for passage in window):
            evaluated.append(window)
            continue
        if daily_total >= daily_max_fee:
            evaluated.append(
                tuple(
                    replace(passage, type=PassageType.EXEMPTION_FULL_DAILY_MAX, charged_fee=ZERO)
                    for passage in window
                )
            )
            continue
        peak_fee = max(passage.potential_fee for passage in window)
        allowed = min(peak_fee, daily_max_fee - daily_total)
        daily_total += allowed
        evaluated.append(_evaluate_window(window, allowed))
    return tuple(evaluated)
