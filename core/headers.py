"""Header construction for client responses and upstream requests."""

ARL_HEADER = "X-Deezer-ARL"
BODY_ENCODING_HEADER = "Content-Transfer-Encoding"

DEFAULT_GATEWAY_CONTENT_TYPE = "text/plain;charset=UTF-8"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)
GATEWAY_ORIGIN = "https://www.deezer.com"


class HeaderBuilder:
    """Build CORS headers for clients and browser-like headers for the gateway."""

    def cors_headers(self, methods: str = "POST, OPTIONS") -> dict[str, str]:
        """Uniform CORS policy applied to every response."""
        return {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": f"Content-Type, {ARL_HEADER}, {BODY_ENCODING_HEADER}",
        }

    def build_gateway_headers(
        self,
        content_type: str,
        content_length: int,
        arl: str = "",
    ) -> dict[str, str]:
        """Mimic a browser on the upstream site, with the session cookie if any.

        Content-Length is always explicit: the gateway rejects chunked bodies.
        """
        headers = {
            "Content-Type": content_type or DEFAULT_GATEWAY_CONTENT_TYPE,
            "Content-Length": str(content_length),
            "User-Agent": BROWSER_USER_AGENT,
            "Accept": "*/*",
            "Accept-Language": "en-US,en;q=0.9",
            "Origin": GATEWAY_ORIGIN,
            "Referer": f"{GATEWAY_ORIGIN}/",
        }
        if arl:
            headers["Cookie"] = f"arl={arl}"
        return headers
