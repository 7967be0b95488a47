"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_forward, handle_health, handle_root
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.router import TargetResolver
from core.transform import BodyCodec
from services.forwarder import Forwarder
from services.upstream import UpstreamClient

FORWARD_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            follow_redirects=True,
            transport=transport,
        )
        codec = BodyCodec()
        app.state.codec = codec
        app.state.resolver = TargetResolver.from_config(config)
        app.state.forwarder = Forwarder(
            upstream=UpstreamClient(client),
            logger=logger,
            header_builder=HeaderBuilder(user_agent=config.upstream.user_agent),
            codec=codec,
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Bybit Proxy", version="0.1.0", lifespan=lifespan)

    @app.get("/health")
    async def health():
        return await handle_health(config)

    @app.get("/")
    async def root():
        return await handle_root()

    @app.api_route("/mainnet/{path:path}", methods=FORWARD_METHODS)
    async def proxy_mainnet(request: Request, path: str):
        return await handle_forward(request, config, "mainnet")

    @app.api_route("/testnet/{path:path}", methods=FORWARD_METHODS)
    async def proxy_testnet(request: Request, path: str):
        return await handle_forward(request, config, "testnet")

    return app
