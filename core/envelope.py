"""Client envelope parsing and upstream request construction."""

import json
from dataclasses import dataclass
from typing import Any

from core.exceptions import EnvelopeError
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest, dump_json

DEFAULT_METHOD = "GET"
WRITE_METHODS = frozenset({"PATCH", "POST", "PUT"})

_MISSING = object()


@dataclass(frozen=True)
class ClientEnvelope:
    """Upstream call described by the browser inside a POST body."""

    url: str
    method: str = DEFAULT_METHOD
    body: Any = _MISSING

    @property
    def has_body(self) -> bool:
        return bool(self.body) if self.body is not _MISSING else False

    @classmethod
    def parse(cls, raw: str | None) -> "ClientEnvelope":
        """Decode and validate a raw POST body.

        A missing body decodes as ``{}``. Decoding errors propagate as
        ``json.JSONDecodeError``; a missing or empty ``url`` raises
        ``EnvelopeError``.
        """
        data = json.loads(raw or "{}")
        if not isinstance(data, dict):
            raise TypeError("Request envelope must be a JSON object")

        url = data.get("url")
        if not url:
            raise EnvelopeError()
        if not isinstance(url, str):
            raise TypeError("URL must be a string")

        method = data.get("method")
        if method is None:
            method = DEFAULT_METHOD
        elif not isinstance(method, str):
            raise TypeError("Method must be a string")

        return cls(url=url, method=method, body=data.get("body", _MISSING))


class RequestBuilder:
    """Turn a client envelope into an authenticated upstream request."""

    def __init__(self, header_builder: HeaderBuilder) -> None:
        self._headers = header_builder

    def build(self, envelope: ClientEnvelope, api_key: str) -> PreparedRequest:
        # Body only travels with write methods, matched case-sensitively.
        content = None
        if envelope.has_body and envelope.method in WRITE_METHODS:
            content = dump_json(envelope.body)
        return PreparedRequest(
            method=envelope.method,
            url=envelope.url,
            headers=self._headers.build_upstream_headers(api_key),
            content=content,
        )
