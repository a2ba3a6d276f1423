"""Shared fixtures: configuration and a recording upstream stub."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from core.config import AirtableSettings, Config
from core.protocols import NullRequestLogger, RequestLogger
from core.request_types import InboundRequest, OutboundResponse
from services.proxy_service import ProxyHandler
from services.upstream import UpstreamClient

TOKEN = "patTESTTOKEN.0123456789abcdef"
TABLE_URL = "https://api.airtable.com/v0/app/T"


class RecordingUpstream:
    """httpx handler that records requests and replies with a canned response."""

    def __init__(self, status: int = 200, payload: Any = None, content: bytes | None = None) -> None:
        self.status = status
        self.payload = {} if payload is None else payload
        self.content = content
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "upstream was never called"
        return self.requests[-1]


@pytest.fixture()
def upstream() -> RecordingUpstream:
    return RecordingUpstream(payload={"id": "rec1"})


@pytest.fixture()
def config() -> Config:
    return Config(airtable=AirtableSettings(api_key=TOKEN))


@pytest.fixture()
def keyless_config() -> Config:
    return Config()


@pytest.fixture()
def run_proxy(upstream: RecordingUpstream) -> Callable[..., OutboundResponse]:
    """Run one invocation of the handler against the recording upstream."""

    def _run(
        config: Config,
        method: str,
        body: str | dict | None = None,
        logger: RequestLogger | None = None,
    ) -> OutboundResponse:
        if isinstance(body, dict):
            body = json.dumps(body)

        async def _invoke() -> OutboundResponse:
            async with httpx.AsyncClient(transport=upstream.transport) as client:
                proxy = ProxyHandler(
                    config=config,
                    logger=logger or NullRequestLogger(),
                    upstream=UpstreamClient(client, timeout=config.proxy.timeout),
                )
                return await proxy.handle(InboundRequest(method=method, body=body))

        return asyncio.run(_invoke())

    return _run
