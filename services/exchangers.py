"""Credential exchangers for Deezer and Last.fm.

Both trade a short-lived artifact from the browser for a durable credential,
signing or authenticating the upstream call with a secret that stays here.
"""

import json
from json import JSONDecodeError
from typing import Any

from core.config import Config
from core.exceptions import (
    BridgeError,
    ClientInputError,
    ServerMisconfigured,
    UpstreamProtocolError,
    UpstreamRejected,
)
from core.parsing import parse_upstream_body
from core.protocols import RequestLogger
from core.request_types import ExchangeResult, ProxiedResponse
from core.signing import sign_params
from services.upstream import UpstreamClient


def _require_string_field(raw_body: bytes, name: str) -> str:
    """Parse a JSON body and return the non-empty string field ``name``."""
    try:
        body = json.loads(raw_body.decode("utf-8") or "{}")
    except (JSONDecodeError, UnicodeDecodeError):
        raise ClientInputError("Invalid JSON body.") from None

    value = body.get(name) if isinstance(body, dict) else None
    if not value or not isinstance(value, str):
        raise ClientInputError(f'"{name}" is required.')
    return value


def _coerce_expires(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, float) and value.is_integer():
        return int(value) or None
    if isinstance(value, str):
        try:
            return int(value.strip()) or None
        except ValueError:
            return None
    return None


class DeezerExchanger:
    """Trade a Deezer OAuth ``code`` for an access token."""

    provider = "deezer"

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        logger: RequestLogger,
    ) -> None:
        self._settings = config.deezer
        self._upstream = upstream
        self._logger = logger

    async def exchange(self, raw_body: bytes) -> ExchangeResult:
        """Exchange the code, then look up the display name best-effort."""
        if not self._settings.configured:
            raise ServerMisconfigured("Deezer credentials not configured on the server.")

        code = _require_string_field(raw_body, "code")
        token_data = await self._request_token(code)

        error = token_data.get("error")
        if error:
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
            elif isinstance(error, str):
                message = error
            else:
                message = json.dumps(error)
            raise UpstreamRejected(f"Deezer token exchange failed: {message}", self.provider)

        access_token = token_data.get("access_token")
        if not access_token or not isinstance(access_token, str):
            preview = json.dumps(token_data)[:200]
            raise UpstreamProtocolError(
                f"Deezer did not return an access token. Response: {preview}",
                self.provider,
            )

        user_name = await self._fetch_user_name(access_token)
        result = ExchangeResult(
            access_token=access_token,
            expires=_coerce_expires(token_data.get("expires")),
            user_name=user_name,
        )
        self._logger.log_exchange(self.provider, 200, user_name=user_name)
        return result

    async def _request_token(self, code: str) -> dict[str, Any]:
        response = await self._upstream.get(
            self._settings.token_url,
            params={
                "app_id": self._settings.app_id,
                "secret": self._settings.app_secret,
                "code": code,
                "output": "json",
            },
            provider=self.provider,
            target="Deezer token endpoint",
        )
        return parse_upstream_body(response.text, self.provider)

    async def _fetch_user_name(self, access_token: str) -> str:
        """Return the profile name, or "" if the lookup fails for any reason."""
        try:
            response = await self._upstream.get(
                self._settings.profile_url,
                params={"access_token": access_token},
                provider=self.provider,
                target="Deezer profile endpoint",
            )
            profile = parse_upstream_body(response.text, self.provider)
        except BridgeError as e:
            self._logger.log_warning("deezer-auth", f"Could not fetch Deezer user profile: {e}")
            return ""

        name = profile.get("name") or profile.get("firstname") or ""
        return name if isinstance(name, str) else ""


class LastfmExchanger:
    """Trade a Last.fm web-auth ``token`` for a session key."""

    provider = "lastfm"
    method = "auth.getSession"

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        logger: RequestLogger,
    ) -> None:
        self._settings = config.lastfm
        self._upstream = upstream
        self._logger = logger

    async def exchange(self, raw_body: bytes) -> ProxiedResponse:
        """Call auth.getSession and relay Last.fm's reply as-is."""
        if not self._settings.configured:
            raise ServerMisconfigured("Last.fm credentials not configured on the server.")

        token = _require_string_field(raw_body, "token")
        api_sig = sign_params(
            {"api_key": self._settings.api_key, "method": self.method, "token": token},
            self._settings.shared_secret,
        )

        response = await self._upstream.get(
            self._settings.api_url,
            params={
                "method": self.method,
                "api_key": self._settings.api_key,
                "token": token,
                "api_sig": api_sig,
                "format": "json",
            },
            provider=self.provider,
            target="Last.fm",
        )
        self._logger.log_exchange(self.provider, response.status_code)
        return ProxiedResponse(status_code=response.status_code, body=response.content)
