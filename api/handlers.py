"""FastAPI route handlers."""

from fastapi import Request, Response

from core.config import Config
from core.headers import HeaderBuilder
from core.request_types import InboundRequest, OutboundResponse, dump_json
from services.proxy_service import ProxyHandler, utc_timestamp

DIAGNOSTIC_MESSAGE = "Test function works!"


async def read_inbound(request: Request) -> InboundRequest:
    """Convert a Starlette request into the host-neutral descriptor."""
    raw_body = await request.body()
    body = raw_body.decode("utf-8", errors="replace") if raw_body else None
    return InboundRequest(method=request.method, body=body)


def to_response(outbound: OutboundResponse) -> Response:
    return Response(
        content=outbound.body,
        status_code=outbound.status_code,
        headers=outbound.headers,
    )


async def handle_proxy(request: Request) -> Response:
    """Handle the proxy endpoint for every HTTP method."""
    proxy: ProxyHandler = request.app.state.proxy_handler
    outbound = await proxy.handle(await read_inbound(request))
    return to_response(outbound)


async def handle_diagnostic(config: Config) -> Response:
    """Report that the function host is reachable and whether a key is set."""
    outbound = OutboundResponse(
        status_code=200,
        headers=HeaderBuilder().build_diagnostic_headers(),
        body=dump_json(
            {
                "message": DIAGNOSTIC_MESSAGE,
                "timestamp": utc_timestamp(),
                "hasApiKey": config.airtable.has_api_key,
            }
        ),
    )
    return to_response(outbound)
