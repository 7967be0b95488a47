"""HTTP client wrapper for upstream requests."""

import httpx

from core.exceptions import UpstreamConnectionError, UpstreamError, UpstreamTimeoutError
from core.request_types import OutboundRequest, UpstreamResponse


def _encode_headers(headers: dict[str, str]) -> dict[str, bytes]:
    """Encode values as latin-1 so inbound header bytes go out unchanged."""
    return {name: value.encode("latin-1") for name, value in headers.items()}


class UpstreamClient:
    """Send prepared requests upstream and buffer the whole response."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: OutboundRequest) -> UpstreamResponse:
        """Dispatch ``request`` and read the full body as text."""
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=_encode_headers(request.headers),
                content=request.body,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(str(e) or "Upstream timeout") from e
        except httpx.RequestError as e:
            raise UpstreamConnectionError(str(e) or type(e).__name__) from e
        except httpx.InvalidURL as e:
            raise UpstreamError(str(e)) from e

        return UpstreamResponse(status_code=response.status_code, text=response.text)
