"""Function-as-a-service entry point.

The host calls ``handler(event, context)`` with an event carrying
``httpMethod`` and ``body`` and expects ``{statusCode, headers, body}``.
Configuration is read from the environment on every invocation.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx

from core.config import Config, load_config
from core.protocols import NullRequestLogger, RequestLogger
from core.request_types import InboundRequest
from services.proxy_service import ProxyHandler
from services.upstream import UpstreamClient


async def handle_event(
    event: Mapping[str, Any],
    config: Config | None = None,
    logger: RequestLogger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Process one host event and return the host response mapping."""
    if config is None:
        config = load_config()
    async with httpx.AsyncClient(transport=transport) as client:
        proxy = ProxyHandler(
            config=config,
            logger=logger or NullRequestLogger(),
            upstream=UpstreamClient(client, timeout=config.proxy.timeout),
        )
        outbound = await proxy.handle(InboundRequest.from_event(event))
    return outbound.to_event()


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Synchronous wrapper for hosts that do not run an event loop."""
    return asyncio.run(handle_event(event))
