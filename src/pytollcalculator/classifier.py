"""Passage classification against the fee table."""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal

from .models import ZERO, Passage, PassageType, RuleSet


def potential_fee(rules: RuleSet, value: time) -> Decimal:
    """Return the amount of the first fee whose intervals contain ``value``."""
    for fee in rules.fees:
        if any(interval.contains(value) for interval in fee.intervals):
            return fee.amount
    return ZERO


def classify_passage(rules: RuleSet, timestamp: datetime) -> Passage:
    time_of_day = timestamp.time()
    amount = potential_fee(rules, time_of_day)
    passage_type = PassageType.EXEMPTION_NO_FEE_INTERVAL if amount == 0 else PassageType.UNKNOWN
    return Passage(time=time_of_day, potential_fee=amount, type=passage_type)
