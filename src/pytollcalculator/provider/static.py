"""Provider serving a fixed rule set."""

from __future__ import annotations

from ..models import RuleSet
from ..rules import validate_rules
from .base import BaseRulesProvider


class StaticRulesProvider(BaseRulesProvider):
    """Provider returning the same rule set on every fetch."""

    def __init__(self, rules: RuleSet) -> None:
        self._rules = validate_rules(rules)

    @property
    def provider_id(self) -> str:
        return "static"

    async def fetch(self) -> RuleSet:
        return self._rules
