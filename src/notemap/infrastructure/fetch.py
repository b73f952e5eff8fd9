"""HTTP fetch of remote style documents.

Wraps an ``httpx.Client`` so timeouts and headers come from config in one
place, and so tests can pass a client built on ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from notemap.config.models import FetchConfig
from notemap.domain.locators import redact_access_token

logger = logging.getLogger(__name__)


class StyleFetchError(Exception):
    """The style document could not be retrieved or was not a JSON object."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch style {redact_access_token(url)}: {reason}")
        self.url = url
        self.reason = reason


def build_client(config: FetchConfig | None = None) -> httpx.Client:
    """Create an ``httpx.Client`` with the configured timeout and user agent."""
    config = config or FetchConfig()
    return httpx.Client(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": config.user_agent, "Accept": "application/json"},
    )


class StyleFetcher:
    """Fetches and decodes style JSON. Owns its client unless one is given."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or build_client(config)

    def fetch(self, url: str) -> dict[str, Any]:
        """GET *url* and return the decoded JSON object.

        Raises :class:`StyleFetchError` on transport errors, non-2xx
        responses, or a body that is not a JSON object.
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StyleFetchError(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise StyleFetchError(url, str(exc) or type(exc).__name__) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise StyleFetchError(url, "response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise StyleFetchError(url, "response is not a JSON object")
        logger.debug("Fetched style document from %s", url)
        return payload

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> StyleFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
