"""HTTP rules provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...exceptions import AuthError, NetworkError, ProviderError, ValidationError
from ...models import RuleSet
from ...rules import parse_rules
from ...util import format_utc_timestamp
from ..base import BaseRulesProvider
from .const import DEFAULT_HEADERS, RULES_ENDPOINT

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class HttpRulesProvider(BaseRulesProvider):
    """Provider loading the rule set as JSON over HTTP."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str,
        rules_path: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._base_url = self._normalize_base_url(base_url)
        self._rules_path = rules_path if rules_path is not None else RULES_ENDPOINT
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._build_url(self._rules_path)

    @property
    def provider_id(self) -> str:
        return "http"

    @property
    def url(self) -> str:
        return self._build_url(self._rules_path)

    async def fetch(self) -> RuleSet:
        """Download and parse the rule set."""
        _LOGGER.debug("Provider %s fetch started", self.provider_id)
        data = await self._request_json("GET", self._rules_path)
        rules = parse_rules(data)
        _LOGGER.debug(
            "Provider %s fetch completed, rules valid until %s",
            self.provider_id,
            format_utc_timestamp(rules.valid_until),
        )
        return rules

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building rules requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        return await self._request(method, url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    headers=DEFAULT_HEADERS,
                    timeout=self._timeout,
                    ssl=True,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ProviderError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                last_error = exc
                _LOGGER.debug(
                    "Provider %s request attempt %d/%d failed",
                    self.provider_id,
                    attempt + 1,
                    attempts,
                )
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
        if last_error is not None:
            raise NetworkError("Network request failed.") from last_error
        raise ProviderError("Request failed.")

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status in (401, 403):
            raise AuthError("Authentication failed.")
        raise ProviderError(f"Rules request failed with status {response.status}.")

    def _normalize_base_url(self, base_url: str) -> str:
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")
