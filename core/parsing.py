"""Normalize upstream reply bodies into a plain mapping."""

import json
from typing import Any
from urllib.parse import parse_qsl

from core.exceptions import UpstreamProtocolError


def parse_upstream_body(text: str, provider: str | None = None) -> dict[str, Any]:
    """Parse a reply that may be JSON or URL-encoded ``key=value`` pairs.

    Deezer's token endpoint ignores ``output=json`` on some paths and answers
    ``access_token=...&expires=...`` instead.
    """
    stripped = text.strip()
    if stripped.startswith(("{", "[")):
        try:
            data = json.loads(stripped)
        except (json.JSONDecodeError, ValueError) as e:
            raise UpstreamProtocolError(
                f"Failed to parse response: {stripped[:200]}", provider
            ) from e
        if not isinstance(data, dict):
            raise UpstreamProtocolError(
                f"Unexpected response shape: {stripped[:200]}", provider
            )
        return data

    return dict(parse_qsl(stripped, keep_blank_values=True))
