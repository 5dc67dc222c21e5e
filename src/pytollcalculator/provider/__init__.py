"""Rule set providers."""

from .base import BaseRulesProvider
from .http import HttpRulesProvider
from .static import StaticRulesProvider

__all__ = ["BaseRulesProvider", "HttpRulesProvider", "StaticRulesProvider"]
