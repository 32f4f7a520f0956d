"""Shared request data types."""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import ClientInputError


@dataclass(frozen=True)
class InboundRequest:
    """Client request as received by the front door.

    Header names are stored lowercased.
    """

    method: str
    raw_query: str = ""
    query_params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    is_base64_encoded: bool = False

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)

    def decoded_body(self) -> bytes:
        """Return the body as raw bytes, undoing base64 transit encoding.

        Line breaks are ignored, as MIME wraps base64 at 76 characters.
        """
        if not self.body or not self.is_base64_encoded:
            return self.body
        try:
            return base64.b64decode(b"".join(self.body.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ClientInputError("Body is not valid base64.") from e


@dataclass(frozen=True)
class ExchangeResult:
    """Durable credential handed back to the browser. Holds no server secret."""

    access_token: str
    expires: int | None = None
    user_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "expires": self.expires,
            "user_name": self.user_name,
        }


@dataclass(frozen=True)
class ProxiedResponse:
    """Upstream reply relayed to the client unmodified."""

    status_code: int
    body: bytes
    content_type: str = "application/json"
