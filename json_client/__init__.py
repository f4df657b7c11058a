"""Typed JSON client over an injectable HTTP transport."""

from json_client.config import Settings, get_settings
from json_client.models.cancellation import CancellationToken
from json_client.models.request import (
    HttpMethod,
    QueryParams,
    RequestOptions,
    RequestSpec,
    ResolvedRequest,
)
from json_client.services.errors import (
    ClientError,
    ErrorKind,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    classify,
)
from json_client.services.mock_transport import MockRoute, MockTransport
from json_client.services.request_executor import RequestExecutor
from json_client.services.transport import (
    HttpxTransport,
    Transport,
    TransportError,
    TransportFailure,
    TransportResponse,
)

__all__ = [
    "CancellationToken",
    "ClientError",
    "ErrorKind",
    "HttpError",
    "HttpMethod",
    "HttpxTransport",
    "MockRoute",
    "MockTransport",
    "NetworkError",
    "QueryParams",
    "RequestExecutor",
    "RequestOptions",
    "RequestSpec",
    "RequestTimeoutError",
    "ResolvedRequest",
    "Settings",
    "Transport",
    "TransportError",
    "TransportFailure",
    "TransportResponse",
    "classify",
    "get_settings",
]
