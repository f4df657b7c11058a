"""In-memory transport returning scripted responses for local demos and tests."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from loguru import logger

from json_client.models.request import HttpMethod, ResolvedRequest
from json_client.services.transport import TransportResponse


@dataclass
class MockRoute:
    """Canned outcome for one (method, path) pair."""

    status_code: int = 200
    payload: Any = None
    content: Optional[bytes] = None
    reason_phrase: str = ""
    error: Optional[BaseException] = None
    delay: float = 0.0


class MockTransport:
    """Transport double keyed by HTTP method and URL path."""

    def __init__(self, routes: Optional[Dict[Tuple[str, str], MockRoute]] = None):
        self._routes: Dict[Tuple[str, str], MockRoute] = dict(routes or {})
        self.requests: List[ResolvedRequest] = []
        self.cancelled_requests: List[ResolvedRequest] = []
        self.closed = False

    def add(self, method: str | HttpMethod, path: str, route: MockRoute) -> None:
        """Register the outcome for ``method`` on ``path``."""
        self._routes[(HttpMethod(method).value, path)] = route

    def respond(
        self,
        method: str | HttpMethod,
        path: str,
        payload: Any = None,
        *,
        status_code: int = 200,
        reason_phrase: str = "",
    ) -> None:
        """Shortcut registering a JSON response."""
        self.add(
            method,
            path,
            MockRoute(status_code=status_code, payload=payload, reason_phrase=reason_phrase),
        )

    def fail(self, method: str | HttpMethod, path: str, error: BaseException) -> None:
        """Shortcut registering an error raised instead of a response."""
        self.add(method, path, MockRoute(error=error))

    @property
    def last_request(self) -> ResolvedRequest:
        return self.requests[-1]

    async def send(self, request: ResolvedRequest) -> TransportResponse:
        self.requests.append(request)
        path = urlsplit(request.url).path
        route = self._routes.get((request.method.value, path))
        if route is None:
            logger.debug("No mock route for {method} {path}", method=request.method.value, path=path)
            return TransportResponse(status_code=404, content=b'{"detail":"Not Found"}')

        if route.delay:
            try:
                await asyncio.sleep(route.delay)
            except asyncio.CancelledError:
                self.cancelled_requests.append(request)
                raise
        if route.error is not None:
            raise route.error

        if route.content is not None:
            content = route.content
        else:
            content = json.dumps(route.payload).encode("utf-8")
        return TransportResponse(
            status_code=route.status_code,
            content=content,
            reason_phrase=route.reason_phrase,
            headers={"content-type": "application/json"},
        )

    async def aclose(self) -> None:
        """Mock close to align with HttpxTransport interface."""
        self.closed = True
        await asyncio.sleep(0)
