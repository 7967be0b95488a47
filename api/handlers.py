"""FastAPI route handlers."""

import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import InvalidJSON, RequestTooLarge
from core.request_types import InboundRequest
from core.transform import BodyCodec
from ui.log_utils import write_incoming_log

SERVICE_INFO = {
    "service": "Bybit Proxy",
    "status": "Running",
    "endpoints": {
        "mainnet": "/mainnet/*",
        "testnet": "/testnet/*",
        "health": "/health",
    },
}


def _original_url(request: Request) -> str:
    """Raw path plus query string, percent-encoding preserved."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


async def _read_inbound(request: Request, config: Config, codec: BodyCodec) -> InboundRequest:
    """Read and parse the request body into an InboundRequest."""
    raw_body = await request.body()
    if len(raw_body) > config.proxy.max_body_size:
        raise RequestTooLarge("Request body too large")

    body = codec.parse_inbound(raw_body, request.headers.get("content-type"))
    inbound = InboundRequest(
        method=request.method.upper(),
        original_url=_original_url(request),
        headers=request.headers,
        body=body,
    )
    if config.proxy.debug:
        write_incoming_log(inbound.method, inbound.original_url, dict(request.headers), body)
    return inbound


async def handle_forward(request: Request, config: Config, prefix: str) -> Response:
    """Handle /mainnet/* and /testnet/* by forwarding upstream."""
    try:
        inbound = await _read_inbound(request, config, request.app.state.codec)
    except RequestTooLarge as e:
        return JSONResponse({"error": str(e)}, status_code=413)
    except InvalidJSON as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    target = request.app.state.resolver.resolve(prefix)
    return await request.app.state.forwarder.forward(inbound, target)


async def handle_health(config: Config) -> dict:
    """Liveness probe."""
    return {
        "ok": True,
        "timestamp": int(time.time() * 1000),
        "region": config.proxy.region,
    }


async def handle_root() -> dict:
    return SERVICE_INFO
