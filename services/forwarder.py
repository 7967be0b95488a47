"""Forward inbound requests to a Bybit upstream and relay the response."""

from fastapi import Response
from fastapi.responses import JSONResponse

from core.exceptions import error_message
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, OutboundRequest, UpstreamTarget
from core.router import build_upstream_url
from core.transform import BodyCodec
from services.upstream import UpstreamClient


class Forwarder:
    """Rewrite, project and relay a single request."""

    def __init__(
        self,
        upstream: UpstreamClient,
        logger: RequestLogger,
        header_builder: HeaderBuilder | None = None,
        codec: BodyCodec | None = None,
    ) -> None:
        self._upstream = upstream
        self._logger = logger
        self._headers = header_builder or HeaderBuilder()
        self._codec = codec or BodyCodec()

    def prepare(self, inbound: InboundRequest, target: UpstreamTarget) -> OutboundRequest:
        """Build the outbound request for ``target``."""
        method = inbound.method.upper()
        return OutboundRequest(
            method=method,
            url=build_upstream_url(inbound.original_url, target),
            headers=self._headers.build_upstream_headers(inbound.headers, method),
            body=self._codec.encode_outbound(method, inbound.body),
        )

    async def forward(self, inbound: InboundRequest, target: UpstreamTarget) -> Response:
        """Forward ``inbound`` to ``target``.

        Upstream error statuses are relayed as-is. Failures on our side of
        the wire become ``500 {"error": message}``.
        """
        try:
            outbound = self.prepare(inbound, target)
            upstream = await self._upstream.send(outbound)
        except Exception as e:
            message = error_message(e)
            self._logger.log_error(target.prefix, 500, message)
            return JSONResponse({"error": message}, status_code=500)

        self._logger.log_forward(target.prefix, outbound.method, outbound.url, upstream.status_code)
        return Response(
            content=upstream.text,
            status_code=upstream.status_code,
            media_type=upstream.content_type,
        )
