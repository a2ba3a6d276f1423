"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_diagnostic, handle_proxy
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.proxy_service import ProxyHandler
from services.upstream import UpstreamClient

PROXY_PATHS = ("/.netlify/functions/airtable-proxy", "/api/airtable-proxy")
DIAGNOSTIC_PATHS = ("/.netlify/functions/test", "/api/test")
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        airtable_client = httpx.AsyncClient(limits=limits, transport=transport)
        app.state.proxy_handler = ProxyHandler(
            config=config,
            logger=logger,
            upstream=UpstreamClient(airtable_client, timeout=config.proxy.timeout),
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await airtable_client.aclose()

    app = FastAPI(title="Airtable Proxy", version="0.1.0", lifespan=lifespan)

    async def proxy(request: Request):
        return await handle_proxy(request)

    async def diagnostic():
        return await handle_diagnostic(config)

    for path in PROXY_PATHS:
        app.add_api_route(path, proxy, methods=ALL_METHODS)
    for path in DIAGNOSTIC_PATHS:
        app.add_api_route(path, diagnostic, methods=ALL_METHODS)

    return app
