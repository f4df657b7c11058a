"""Transport abstraction and its httpx-backed implementation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx
from loguru import logger

from json_client.config import Settings, get_settings
from json_client.models.request import ResolvedRequest


class TransportFailure(str, Enum):
    """Structured reasons a transport can fail before producing a response."""

    CANCELLED = "cancelled"
    UNREACHABLE = "unreachable"


class TransportError(Exception):
    """Raised by transports for failures the client knows how to classify."""

    def __init__(self, kind: TransportFailure, message: str = ""):
        self.kind = kind
        self.message = message
        super().__init__(message or kind.value)


@dataclass(frozen=True)
class TransportResponse:
    """Raw response as produced by a transport."""

    status_code: int
    content: bytes = b""
    reason_phrase: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse the body as JSON; malformed or empty bodies raise ``JSONDecodeError``."""
        return json.loads(self.content)


@runtime_checkable
class Transport(Protocol):
    """Anything able to perform one HTTP exchange."""

    async def send(self, request: ResolvedRequest) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    """Transport performing requests with ``httpx.AsyncClient``."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=30.0))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "HttpxTransport":
        """Build a transport using timeouts from settings."""
        settings = settings or get_settings()
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.connect_timeout, read=settings.read_timeout)
        )
        transport = cls(client)
        transport._owns_client = True
        return transport

    async def send(self, request: ResolvedRequest) -> TransportResponse:
        try:
            response = await self._client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.content,
                follow_redirects=False,
            )
        except httpx.ConnectTimeout as exc:
            logger.debug("Transport timed out connecting to {url}: {error}", url=request.url, error=exc)
            raise TransportError(TransportFailure.UNREACHABLE, str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(TransportFailure.CANCELLED, str(exc)) from exc
        except (httpx.NetworkError, httpx.ProxyError) as exc:
            logger.debug("Transport could not reach {url}: {error}", url=request.url, error=exc)
            raise TransportError(TransportFailure.UNREACHABLE, str(exc)) from exc

        reason = response.extensions.get("reason_phrase", b"")
        if isinstance(reason, bytes):
            reason = reason.decode("ascii", errors="replace")
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            reason_phrase=reason,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
