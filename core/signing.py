"""Request signing for the Last.fm web service."""

import hashlib
from collections.abc import Mapping


def sign_params(params: Mapping[str, str], secret: str) -> str:
    """Return the ``api_sig`` for a set of call parameters.

    Keys are sorted by code point, each contributes ``name + value`` with no
    separator, the shared secret is appended, and the result is MD5-hashed
    over its UTF-8 bytes (lowercase hex).
    """
    payload = "".join(f"{key}{params[key]}" for key in sorted(params)) + secret
    return hashlib.md5(payload.encode("utf-8")).hexdigest()
