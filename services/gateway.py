"""Forwarding to Deezer's private gateway (gw-light.php)."""

from urllib.parse import parse_qs, urlencode

from core.config import Config
from core.headers import ARL_HEADER, HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, ProxiedResponse
from services.upstream import UpstreamClient


def build_query_string(raw_query: str, params: dict[str, str]) -> str:
    """Rebuild the client's query, preferring the raw string as sent."""
    if raw_query:
        return f"?{raw_query}"
    if params:
        return f"?{urlencode(params)}"
    return ""


def extract_gateway_method(query: str) -> str:
    """Return the gateway ``method`` parameter from a query string, or "?"."""
    values = parse_qs(query.lstrip("?")).get("method")
    return values[0] if values else "?"


class GatewayForwarder:
    """Relay browser requests to the gateway, which refuses cross-origin calls.

    The session credential arrives in ``X-Deezer-ARL`` and is sent upstream as
    the ``arl`` cookie the gateway expects.
    """

    provider = "deezer"

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
    ) -> None:
        self._gateway_url = config.deezer.gateway_url
        self._upstream = upstream
        self._logger = logger
        self._headers = header_builder

    async def forward(self, inbound: InboundRequest) -> ProxiedResponse:
        """POST the decoded body upstream and relay the reply verbatim."""
        query = build_query_string(inbound.raw_query, inbound.query_params)
        # Fully decoded before sending so Content-Length is known up front
        body = inbound.decoded_body()
        headers = self._headers.build_gateway_headers(
            inbound.header("content-type"),
            len(body),
            inbound.header(ARL_HEADER),
        )

        response = await self._upstream.post(
            f"{self._gateway_url}{query}",
            body,
            headers,
            provider=self.provider,
        )
        self._logger.log_forward(
            extract_gateway_method(query),
            response.status_code,
            headers,
            body_bytes=len(body),
        )
        return ProxiedResponse(
            status_code=response.status_code,
            body=response.content,
            content_type=response.headers.get("content-type", "application/json"),
        )
