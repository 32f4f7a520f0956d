"""Upstream credential status - reports what is configured, never the values."""

from rich.console import Console

from core.config import CONFIG_FILE, Config, load_config

console = Console()


def credential_status(config: Config) -> dict[str, bool]:
    """Map each upstream to whether its server-side secret pair is present."""
    return {
        "Deezer (DEEZER_APP_ID / DEEZER_APP_SECRET)": config.deezer.configured,
        "Last.fm (LASTFM_API_KEY / LASTFM_SHARED_SECRET)": config.lastfm.configured,
        "Spotify (SPOTIFY_CLIENT_ID)": bool(config.spotify.client_id.strip()),
    }


def print_credentials_status(config: Config) -> bool:
    """Print a line per upstream; return True when every pair is configured."""
    status = credential_status(config)
    for name, ok in status.items():
        if ok:
            console.print(f"[green]Configured[/green]      {name}")
        else:
            console.print(f"[yellow]Not configured[/yellow]  {name}")

    if not all(status.values()):
        console.print("\n[dim]Set the missing environment variables, or add them to:[/dim]")
        console.print(f"  {CONFIG_FILE}")
    return all(status.values())


def main():
    """CLI entry point for credential check."""
    print_credentials_status(load_config())


if __name__ == "__main__":
    main()
