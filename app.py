"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import (
    handle_bridge_error,
    handle_deezer_auth,
    handle_gateway_forward,
    handle_lastfm_auth,
    handle_public_config,
)
from core.config import Config
from core.exceptions import BridgeError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.exchangers import DeezerExchanger, LastfmExchanger
from services.gateway import GatewayForwarder
from services.upstream import UpstreamClient

# Every method is routed so that the handlers answer 405 with CORS headers
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the network for the outbound client (tests).
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.upstream.max_connections,
            max_keepalive_connections=config.upstream.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            transport=transport,
        )
        upstream = UpstreamClient(client)
        app.state.deezer_exchanger = DeezerExchanger(config, upstream, logger)
        app.state.lastfm_exchanger = LastfmExchanger(config, upstream, logger)
        app.state.gateway_forwarder = GatewayForwarder(config, upstream, logger, HeaderBuilder())
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Music Auth Bridge", version="0.1.0", lifespan=lifespan)

    @app.exception_handler(BridgeError)
    async def bridge_error(request: Request, exc: BridgeError):
        return await handle_bridge_error(request, exc, logger)

    @app.api_route("/api/deezer-auth", methods=ALL_METHODS)
    async def deezer_auth(request: Request):
        return await handle_deezer_auth(request)

    @app.api_route("/api/lastfm-auth", methods=ALL_METHODS)
    async def lastfm_auth(request: Request):
        return await handle_lastfm_auth(request)

    @app.api_route("/api/deezer-proxy", methods=ALL_METHODS)
    async def deezer_proxy(request: Request):
        return await handle_gateway_forward(request)

    @app.api_route("/api/config", methods=ALL_METHODS)
    async def public_config(request: Request):
        return await handle_public_config(request, config)

    return app
