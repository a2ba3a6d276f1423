"""Shared request data types."""

import base64
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def dump_json(value: Any) -> str:
    """Compact JSON encoding used for every body the proxy emits."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


@dataclass(frozen=True)
class InboundRequest:
    """Request descriptor handed over by the host runtime."""

    method: str
    body: str | None = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "InboundRequest":
        """Build from a function-host event (``httpMethod`` and ``body``).

        Bodies flagged with ``isBase64Encoded`` are decoded first.
        """
        body = event.get("body")
        if body and event.get("isBase64Encoded"):
            body = base64.b64decode(body)
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        return cls(method=str(event.get("httpMethod", "")), body=body)


@dataclass(frozen=True)
class OutboundResponse:
    """Response descriptor returned to the host runtime."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def to_event(self) -> dict[str, Any]:
        """Serialise to the function-host contract."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    method: str
    url: str
    headers: dict[str, str]
    content: str | None = None


@dataclass(frozen=True)
class UpstreamResult:
    """Decoded upstream response."""

    status_code: int
    data: Any
