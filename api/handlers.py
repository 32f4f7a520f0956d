"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import BridgeError, MethodNotAllowed, RequestTooLarge
from core.headers import BODY_ENCODING_HEADER, HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, ProxiedResponse

MAX_BODY_SIZE = 10 * 1024 * 1024  # 10MB

_cors = HeaderBuilder().cors_headers


def _preflight() -> Response:
    return Response(status_code=204, headers=_cors())


def _require_post(request: Request) -> None:
    if request.method != "POST":
        raise MethodNotAllowed("Method not allowed")


async def _read_body(request: Request) -> bytes:
    raw_body = await request.body()
    if len(raw_body) > MAX_BODY_SIZE:
        raise RequestTooLarge("Request body too large")
    return raw_body


async def _inbound(request: Request) -> InboundRequest:
    """Capture everything the forwarder needs from the ASGI request."""
    headers = {key.lower(): value for key, value in request.headers.items()}
    encoding = headers.get(BODY_ENCODING_HEADER.lower(), "")
    return InboundRequest(
        method=request.method,
        raw_query=request.url.query,
        query_params=dict(request.query_params),
        headers=headers,
        body=await _read_body(request),
        is_base64_encoded=encoding.strip().lower() == "base64",
    )


def _relay(proxied: ProxiedResponse) -> Response:
    return Response(
        content=proxied.body,
        status_code=proxied.status_code,
        media_type=proxied.content_type,
        headers=_cors(),
    )


def error_response(error: BridgeError) -> JSONResponse:
    """Render any bridge error as ``{"error": ...}`` with CORS headers."""
    return JSONResponse(
        {"error": error.message},
        status_code=error.status_code,
        headers=_cors(),
    )


async def handle_deezer_auth(request: Request) -> Response:
    """Handle /api/deezer-auth: OAuth code -> access token."""
    if request.method == "OPTIONS":
        return _preflight()
    _require_post(request)

    exchanger = request.app.state.deezer_exchanger
    result = await exchanger.exchange(await _read_body(request))
    return JSONResponse(result.to_dict(), headers=_cors())


async def handle_lastfm_auth(request: Request) -> Response:
    """Handle /api/lastfm-auth: web-auth token -> session key."""
    if request.method == "OPTIONS":
        return _preflight()
    _require_post(request)

    exchanger = request.app.state.lastfm_exchanger
    return _relay(await exchanger.exchange(await _read_body(request)))


async def handle_gateway_forward(request: Request) -> Response:
    """Handle /api/deezer-proxy: relay to the private gateway."""
    if request.method == "OPTIONS":
        return _preflight()
    _require_post(request)

    forwarder = request.app.state.gateway_forwarder
    return _relay(await forwarder.forward(await _inbound(request)))


CONFIG_METHODS = "GET, OPTIONS"


async def handle_public_config(request: Request, config: Config) -> Response:
    """Expose the public client ids the frontend needs. No secrets."""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=_cors(CONFIG_METHODS))
    if request.method != "GET":
        raise MethodNotAllowed("Method not allowed")

    headers = {**_cors(CONFIG_METHODS), "Cache-Control": "public, max-age=3600"}
    return JSONResponse(
        {
            "spotifyClientId": config.spotify.client_id,
            "lastfmApiKey": config.lastfm.api_key,
        },
        headers=headers,
    )


async def handle_bridge_error(request: Request, exc: BridgeError, logger: RequestLogger) -> Response:
    """Exception handler: log once, answer with a single JSON error."""
    logger.log_error(request.url.path, exc.status_code, exc.message)
    return error_response(exc)
