"""HTTP rules provider."""

from .api import HttpRulesProvider

__all__ = ["HttpRulesProvider"]
