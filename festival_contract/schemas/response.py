"""
Response descriptor consumed by the gate predicates and the page-state oracle.

A descriptor is the engine's view of one HTTP exchange. It is built by the
transport adapter from a live request, or directly by a test harness that
intercepts the endpoint and substitutes a canned body or status code.
"""

import json
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field


class ResponseDescriptor(BaseModel):
    """Status code, duration and decoded body of one request."""
    model_config = ConfigDict(frozen=True)

    status_code: Optional[int] = Field(
        default=None,
        description="HTTP status code, None when the request failed at transport level",
    )
    duration_ms: float = Field(default=0.0, ge=0, description="Request duration in milliseconds")
    body: Any = Field(default=None, description="Decoded JSON body, raw text if not JSON")
    transport_error: Optional[str] = Field(
        default=None,
        description="Transport failure message (connection refused, timeout, ...)",
    )

    @property
    def is_success(self) -> bool:
        """True for a 2xx response that reached the server."""
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def is_failure(self) -> bool:
        """True for a transport failure or any non-2xx status."""
        return not self.is_success

    @classmethod
    def from_httpx(cls, response: httpx.Response, duration_ms: float) -> "ResponseDescriptor":
        """Build a descriptor from an httpx response, decoding JSON when possible."""
        try:
            body: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = response.text
        return cls(status_code=response.status_code, duration_ms=duration_ms, body=body)

    @classmethod
    def failed(cls, error: str, duration_ms: float = 0.0) -> "ResponseDescriptor":
        """Descriptor for a request that never produced a response."""
        return cls(status_code=None, duration_ms=duration_ms, transport_error=error)
