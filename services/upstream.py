"""HTTP dispatch to the Airtable REST API."""

import httpx

from core.exceptions import UpstreamConnectionError, UpstreamTimeoutError
from core.request_types import PreparedRequest, UpstreamResult


class UpstreamClient:
    """Send prepared requests and decode the JSON reply."""

    def __init__(self, client: httpx.AsyncClient, timeout: float | None = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    async def send(self, prepared: PreparedRequest) -> UpstreamResult:
        """Execute the request and return the upstream status and JSON.

        A body that is not JSON raises ``ValueError``; transport failures
        are wrapped in ``UpstreamError`` subclasses.
        """
        req = self._client.build_request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
            timeout=self._timeout,
        )
        try:
            response = await self._client.send(req)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                f"Upstream timeout: {e}" if str(e) else "Upstream timeout",
                url=prepared.url,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamConnectionError(
                f"Upstream connection error: {e}", url=prepared.url
            ) from e

        return UpstreamResult(status_code=response.status_code, data=response.json())
