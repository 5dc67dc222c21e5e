"""Rules provider base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import RuleSet


class BaseRulesProvider(ABC):
    """Base class for rule set sources."""

    @property
    def provider_id(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def fetch(self) -> RuleSet:
        """Return a freshly loaded, validated rule set."""
