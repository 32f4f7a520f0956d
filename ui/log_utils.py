"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "bridge.log"

# Session credentials are fully hidden, keys keep a recognizable prefix
_SESSION_MARKERS = ("cookie", "arl")
_KEY_MARKERS = ("key", "secret", "authorization")


def write_forward_log(
    gateway_method: str,
    status: int,
    headers: dict[str, str],
    body_bytes: int,
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single gateway forward log entry. The body is not recorded."""
    payload = {
        "timestamp": _utc_now(),
        "target": "gateway",
        "gateway_method": gateway_method,
        "status": status,
        "headers": _redact_headers(headers),
        "body_bytes": body_bytes,
    }
    return _write_json(log_root / "gateway", payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact session cookies, credentials and keys."""
    redacted = {}
    for key, value in headers.items():
        name = key.lower()
        if any(marker in name for marker in _SESSION_MARKERS):
            redacted[key] = "***"
        elif any(marker in name for marker in _KEY_MARKERS):
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
