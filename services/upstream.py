"""HTTP utilities for upstream requests."""

import httpx

from core.exceptions import UpstreamTimeoutError, UpstreamUnreachable


class UpstreamClient:
    """Issue single, non-retried calls to upstream services.

    Transport failures are translated into the bridge's exception hierarchy;
    any HTTP status the upstream answers with is returned untouched.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def get(
        self,
        url: str,
        params: dict[str, str],
        *,
        provider: str,
        target: str,
    ) -> httpx.Response:
        """GET ``url`` with query ``params``."""
        try:
            return await self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                f"Failed to reach {target}: timed out ({_detail(e)})", provider
            ) from e
        except httpx.RequestError as e:
            raise UpstreamUnreachable(f"Failed to reach {target}: {_detail(e)}", provider) from e

    async def post(
        self,
        url: str,
        content: bytes,
        headers: dict[str, str],
        *,
        provider: str,
    ) -> httpx.Response:
        """POST a fully buffered body; ``url`` already carries its query string."""
        request = self._client.build_request("POST", url, content=content, headers=headers)
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"Proxy error: timed out ({_detail(e)})", provider) from e
        except httpx.RequestError as e:
            raise UpstreamUnreachable(f"Proxy error: {_detail(e)}", provider) from e


def _detail(exc: Exception) -> str:
    return str(exc) or type(exc).__name__
