"""Pydantic models describing a single client call."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    StrictBool,
    StrictInt,
    StrictStr,
    confloat,
)

from json_client.models.cancellation import CancellationToken

FiniteFloat = confloat(strict=True, allow_inf_nan=False)
QueryValue = Union[StrictBool, StrictInt, FiniteFloat, StrictStr]
QueryParams = Union[Dict[str, QueryValue], List[Tuple[str, QueryValue]]]


class HttpMethod(str, Enum):
    """HTTP verbs understood by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"


class RequestOptions(BaseModel):
    """Per-call options shared by every verb."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    headers: Optional[Dict[str, str]] = None
    query_params: Optional[QueryParams] = None
    signal: Optional[CancellationToken] = None


class RequestSpec(RequestOptions):
    """Full description of one call, including method and optional body.

    ``body`` counts as present only when it was set explicitly, so
    ``RequestSpec(method="POST", body=None)`` sends a JSON ``null`` while
    ``RequestSpec(method="GET")`` sends no payload at all.
    """

    method: HttpMethod = HttpMethod.GET
    body: JsonValue = Field(default=None)

    @property
    def has_body(self) -> bool:
        return "body" in self.model_fields_set

    def serialized_body(self) -> Optional[bytes]:
        """Return the compact JSON encoding of the body, or ``None`` if absent."""
        if not self.has_body:
            return None
        return json.dumps(
            self.body, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")


@dataclass(frozen=True)
class ResolvedRequest:
    """Fully materialized request handed to a transport."""

    url: str
    method: HttpMethod
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None


def to_query_value(value: Union[bool, int, float, str]) -> str:
    """Render a query parameter value in its canonical string form.

    Integral floats print as plain integers; other floats use the shortest
    round-tripping form, which may be exponent notation (``1e-07``).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Query parameter value must be finite, got {value!r}")
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return value


def iter_query_pairs(query_params: Optional[QueryParams]) -> List[Tuple[str, str]]:
    """Flatten mapping or pair-list query parameters into ordered string pairs."""
    if not query_params:
        return []
    items = query_params.items() if isinstance(query_params, dict) else query_params
    return [(key, to_query_value(value)) for key, value in items]
