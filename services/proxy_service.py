"""Request handling for the Airtable proxy.

The handler forwards to any URL named in the client envelope, not only
Airtable hosts. Whoever can reach the proxy can make authenticated
requests with the configured token to arbitrary destinations, so deploy
it only where that is acceptable.
"""

from datetime import UTC, datetime

from rich.console import Console

from core.config import Config
from core.envelope import ClientEnvelope, RequestBuilder
from core.exceptions import ConfigurationError, MethodNotAllowed, ProxyError, error_message
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, OutboundResponse, PreparedRequest, dump_json
from services.upstream import UpstreamClient

LIVENESS_MESSAGE = "Airtable Proxy is working!"

console = Console(stderr=True)


def utc_timestamp() -> str:
    """ISO-8601 UTC instant with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProxyHandler:
    """Turn one inbound invocation into one outbound response."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        upstream: UpstreamClient,
        header_builder: HeaderBuilder | None = None,
        request_builder: RequestBuilder | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._upstream = upstream
        self._headers = header_builder or HeaderBuilder()
        self._builder = request_builder or RequestBuilder(self._headers)

    async def handle(self, inbound: InboundRequest) -> OutboundResponse:
        """Dispatch on the inbound method; never raises."""
        if inbound.method == "OPTIONS":
            return self._respond(200, "")
        if inbound.method == "GET":
            return self._json(200, self.liveness())
        if inbound.method != "POST":
            return self._error(MethodNotAllowed())

        api_key = self._config.airtable.api_key
        if not api_key:
            return self._error(ConfigurationError())

        try:
            prepared, outbound = await self._proxy(inbound, api_key)
        except ProxyError as e:
            return self._error(e)
        except Exception as e:
            return self._fail(500, error_message(e))

        self._log_proxy(prepared, outbound.status_code)
        return outbound

    def liveness(self) -> dict:
        """Body of the GET probe."""
        return {
            "message": LIVENESS_MESSAGE,
            "timestamp": utc_timestamp(),
            "hasApiKey": self._config.airtable.has_api_key,
        }

    async def _proxy(
        self, inbound: InboundRequest, api_key: str
    ) -> tuple[PreparedRequest, OutboundResponse]:
        envelope = ClientEnvelope.parse(inbound.body)
        prepared = self._builder.build(envelope, api_key)
        result = await self._upstream.send(prepared)
        return prepared, self._json(result.status_code, result.data)

    def _error(self, exc: ProxyError) -> OutboundResponse:
        return self._fail(exc.status_code, error_message(exc))

    def _fail(self, status: int, message: str) -> OutboundResponse:
        try:
            self._logger.log_error(status, message)
        except Exception as e:
            console.print(f"[red]Failed to log error:[/red] {error_message(e)}")
        return self._json(status, {"error": message})

    def _log_proxy(self, prepared: PreparedRequest, status: int) -> None:
        try:
            self._logger.log_proxy(prepared.method, prepared.url, status, prepared.headers)
        except Exception as e:
            console.print(f"[red]Failed to log request:[/red] {error_message(e)}")

    def _json(self, status: int, payload) -> OutboundResponse:
        return self._respond(status, dump_json(payload))

    def _respond(self, status: int, body: str) -> OutboundResponse:
        return OutboundResponse(
            status_code=status,
            headers=self._headers.build_response_headers(),
            body=body,
        )
