"""CLI entry point for music-auth-bridge."""

import sys
from datetime import datetime

from pydantic import ValidationError
from rich.console import Console

from app import create_app
from auth import print_credentials_status
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ValidationError as e:
        console.print(f"[red][ERROR][/red] Invalid configuration: {e}")
        sys.exit(1)

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            print_credentials_status(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold]    {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    if not (config.deezer.configured or config.lastfm.configured):
        console.print("[yellow]Warning:[/yellow] No upstream credentials configured; "
                      "auth endpoints will answer 503 (run with --check)")

    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Bridge started", port=config.server.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Bridge stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Music Auth Bridge[/bold cyan]

Server-side credential exchange for Deezer and Last.fm, and a relay to
Deezer's private gateway for browser clients.

[bold]Usage:[/bold]
    music-auth-bridge              Start with live dashboard
    music-auth-bridge --check      Show which upstream credentials are configured
    music-auth-bridge --config     Show config and log locations
    music-auth-bridge --help       Show this help

[bold]Endpoints:[/bold]
    POST /api/deezer-auth     {"code": ...}  -> access token
    POST /api/lastfm-auth     {"token": ...} -> Last.fm session
    POST /api/deezer-proxy    relayed to gw-light.php (ARL via X-Deezer-ARL)
    GET  /api/config          public client ids
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
