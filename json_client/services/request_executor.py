"""Typed JSON client executing requests through an injected transport."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Type, TypeVar, cast

import httpx
from loguru import logger
from pydantic import JsonValue

from json_client.config import Settings, get_settings
from json_client.models.cancellation import CancellationToken
from json_client.models.request import (
    HttpMethod,
    QueryParams,
    RequestOptions,
    RequestSpec,
    ResolvedRequest,
    iter_query_pairs,
)
from json_client.services.errors import HttpError, NetworkError, RequestTimeoutError
from json_client.services.transport import (
    HttpxTransport,
    Transport,
    TransportError,
    TransportFailure,
    TransportResponse,
)

T = TypeVar("T")

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}


class RequestExecutor:
    """Build, send and classify JSON requests relative to a base URL.

    Usage:
        async with RequestExecutor("https://api.example.com", transport=transport) as client:
            thing = await client.get("/thing", result_type=Thing)
    """

    def __init__(self, base_url: str, *, transport: Optional[Transport] = None):
        url = httpx.URL(base_url)
        if not url.is_absolute_url:
            raise ValueError(f"Base URL must be absolute, got {base_url!r}")
        self._base_url = base_url
        self._base = url
        self._transport: Transport = transport or HttpxTransport()

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, *, transport: Optional[Transport] = None
    ) -> "RequestExecutor":
        """Create a client from environment-backed settings."""
        settings = settings or get_settings()
        return cls(
            str(settings.base_url),
            transport=transport or HttpxTransport.from_settings(settings),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()

    async def __aenter__(self) -> "RequestExecutor":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # --- Request construction ---

    def build_url(self, path: str, query_params: Optional[QueryParams] = None) -> str:
        """Resolve ``path`` against the base URL and append query parameters in order."""
        url = self._base.join(path)
        pairs = iter_query_pairs(query_params)
        if pairs:
            existing = list(url.params.multi_items())
            url = url.copy_with(params=httpx.QueryParams(existing + pairs))
        return str(url)

    def build_headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Overlay caller headers on the defaults; keys compare case-sensitively."""
        merged = dict(DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        return merged

    def resolve(self, path: str, spec: RequestSpec) -> ResolvedRequest:
        return ResolvedRequest(
            url=self.build_url(path, spec.query_params),
            method=spec.method,
            headers=self.build_headers(spec.headers),
            content=spec.serialized_body(),
        )

    # --- Execution ---

    async def request(
        self, path: str, spec: RequestSpec, *, result_type: Optional[Type[T]] = None
    ) -> T:
        """Execute ``spec`` and return the parsed JSON body.

        ``result_type`` only informs type checkers; the payload is not validated.

        Raises:
            RequestTimeoutError: the cancellation signal fired first.
            NetworkError: the transport could not reach the host.
            HttpError: the response status was not 2xx.
        """
        resolved = self.resolve(path, spec)
        logger.debug(
            "HTTP request {method} {url}", method=resolved.method.value, url=resolved.url
        )
        try:
            response = await self._send(resolved, spec.signal)
        except TransportError as exc:
            if exc.kind is TransportFailure.CANCELLED:
                logger.warning("Request {url} timed out", url=resolved.url)
                raise RequestTimeoutError(exc.message) from exc
            logger.warning("Network error on {url}: {error}", url=resolved.url, error=exc)
            raise NetworkError() from exc

        if not response.ok:
            logger.error(
                "HTTP error {status} on {url}: {body}",
                status=response.status_code,
                url=resolved.url,
                body=response.text,
            )
            raise HttpError(response.status_code, response.reason_phrase)
        return cast(T, response.json())

    async def _send(
        self, request: ResolvedRequest, signal: Optional[CancellationToken]
    ) -> TransportResponse:
        if signal is None:
            return await self._transport.send(request)
        if signal.cancelled:
            raise TransportError(TransportFailure.CANCELLED, signal.reason or "")

        send_task = asyncio.ensure_future(self._transport.send(request))
        signal_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            signal_task.cancel()
            if not send_task.done():
                send_task.cancel()

        if send_task in done:
            return send_task.result()
        await asyncio.gather(send_task, return_exceptions=True)
        raise TransportError(TransportFailure.CANCELLED, signal.reason or "")

    # --- Verbs ---

    async def get(
        self,
        path: str,
        options: Optional[RequestOptions] = None,
        *,
        result_type: Optional[Type[T]] = None,
    ) -> T:
        """Shortcut for GET requests."""
        return await self.request(path, _spec(HttpMethod.GET, options), result_type=result_type)

    async def post(
        self,
        path: str,
        body: JsonValue,
        options: Optional[RequestOptions] = None,
        *,
        result_type: Optional[Type[T]] = None,
    ) -> T:
        """Shortcut for POST requests with a JSON body."""
        return await self.request(
            path, _spec(HttpMethod.POST, options, body=body), result_type=result_type
        )

    async def put(
        self,
        path: str,
        body: JsonValue,
        options: Optional[RequestOptions] = None,
        *,
        result_type: Optional[Type[T]] = None,
    ) -> T:
        """Shortcut for PUT requests with a JSON body."""
        return await self.request(
            path, _spec(HttpMethod.PUT, options, body=body), result_type=result_type
        )

    async def patch(
        self,
        path: str,
        body: JsonValue,
        options: Optional[RequestOptions] = None,
        *,
        result_type: Optional[Type[T]] = None,
    ) -> T:
        """Shortcut for PATCH requests with a JSON body."""
        return await self.request(
            path, _spec(HttpMethod.PATCH, options, body=body), result_type=result_type
        )

    async def delete(
        self,
        path: str,
        options: Optional[RequestOptions] = None,
        *,
        result_type: Optional[Type[T]] = None,
    ) -> T:
        """Shortcut for DELETE requests."""
        return await self.request(
            path, _spec(HttpMethod.DELETE, options), result_type=result_type
        )


def _spec(method: HttpMethod, options: Optional[RequestOptions], **extra: Any) -> RequestSpec:
    if isinstance(options, RequestSpec):
        raise TypeError(
            f"{method.value} takes RequestOptions, not RequestSpec; use request() instead"
        )
    options = options or RequestOptions()
    return RequestSpec(
        method=method,
        headers=options.headers,
        query_params=options.query_params,
        signal=options.signal,
        **extra,
    )
