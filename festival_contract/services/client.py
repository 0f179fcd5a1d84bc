"""
HTTP transport for the festivals endpoint.

Turns one GET request into a ResponseDescriptor. Transport failures are
captured in the descriptor instead of being raised, so the gate and the
oracle can treat them as the first-class "error" outcome they are.
"""

import logging
import time
from typing import Optional

import httpx

from festival_contract.core.config import Settings, get_settings
from festival_contract.schemas.response import ResponseDescriptor

logger = logging.getLogger(__name__)


class FestivalsClient:
    """
    Synchronous client for the festivals listing endpoint.

    Usage:
        with FestivalsClient() as client:
            response = client.fetch()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            settings: Endpoint and timeout configuration (cached settings by default)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.settings = settings or get_settings()
        self._client = httpx.Client(
            headers={"accept": self.settings.accept_header},
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "FestivalsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self) -> ResponseDescriptor:
        """GET the festivals listing."""
        return self._get(self.settings.festivals_api_url)

    def fetch_path(self, sub_path: str) -> ResponseDescriptor:
        """GET a sub-path of the festivals endpoint, e.g. for 404 checks."""
        url = f"{self.settings.festivals_api_url.rstrip('/')}/{sub_path.lstrip('/')}"
        return self._get(url)

    def _get(self, url: str) -> ResponseDescriptor:
        started = time.perf_counter()
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.warning(f"GET {url} failed after {duration_ms:.0f}ms: {e}")
            return ResponseDescriptor.failed(str(e) or type(e).__name__, duration_ms=duration_ms)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"GET {url} -> {response.status_code} in {duration_ms:.0f}ms")
        return ResponseDescriptor.from_httpx(response, duration_ms)
