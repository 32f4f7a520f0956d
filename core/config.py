"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "music-auth-bridge"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "BRIDGE_HOST": ("server", "host"),
    "BRIDGE_PORT": ("server", "port"),
    "BRIDGE_UPSTREAM_TIMEOUT": ("upstream", "timeout"),
    "DEEZER_APP_ID": ("deezer", "app_id"),
    "DEEZER_APP_SECRET": ("deezer", "app_secret"),
    "LASTFM_API_KEY": ("lastfm", "api_key"),
    "LASTFM_SHARED_SECRET": ("lastfm", "shared_secret"),
    "SPOTIFY_CLIENT_ID": ("spotify", "client_id"),
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ServerSettings(_Frozen):
    host: str = "127.0.0.1"
    port: int = 8888


class UpstreamSettings(_Frozen):
    timeout: float = 10.0
    max_connections: int = 100
    max_keepalive_connections: int = 20


class DeezerSettings(_Frozen):
    app_id: str = ""
    app_secret: str = ""
    token_url: str = "https://connect.deezer.com/oauth/access_token.php"
    profile_url: str = "https://api.deezer.com/user/me"
    gateway_url: str = "https://www.deezer.com/ajax/gw-light.php"

    @property
    def configured(self) -> bool:
        return bool(self.app_id.strip() and self.app_secret.strip())


class LastfmSettings(_Frozen):
    api_key: str = ""
    shared_secret: str = ""
    api_url: str = "https://ws.audioscrobbler.com/2.0/"

    @property
    def configured(self) -> bool:
        return bool(self.api_key.strip() and self.shared_secret.strip())


class SpotifySettings(_Frozen):
    client_id: str = ""


class Config(_Frozen):
    server: ServerSettings = Field(default_factory=ServerSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    deezer: DeezerSettings = Field(default_factory=DeezerSettings)
    lastfm: LastfmSettings = Field(default_factory=LastfmSettings)
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)


def load_config(
    path: Path = CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from an optional JSON file, then apply env overrides."""
    environ = os.environ if environ is None else environ
    data = _read_config_file(path)

    for var, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            data.setdefault(section, {})[field] = value

    return Config.model_validate(data)


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text())
        Config.model_validate(data)
        return data
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and continue with defaults
        backup = path.with_suffix(".json.bak")
        path.rename(backup)
        return {}
