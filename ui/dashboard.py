"""Real-time CLI dashboard for bridge monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_forward_log

console = Console()


class ForwardInfo:
    """Info about a single gateway forward."""

    def __init__(self, gateway_method: str, status: int, body_bytes: int, has_session: bool, timestamp: datetime):
        self.gateway_method = gateway_method
        self.status = status
        self.body_bytes = body_bytes
        self.has_session = has_session
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing credential exchanges and gateway traffic."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._forwards: list[ForwardInfo] = []
        self._max_forwards = 8
        self._exchanges: list[str] = []
        self._request_count = {"deezer": 0, "lastfm": 0, "gateway": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_exchange(
        self,
        provider: str,
        status: int,
        *,
        user_name: str | None = None,
    ) -> None:
        """Log a completed credential exchange."""
        with self._lock:
            self._request_count[provider] = self._request_count.get(provider, 0) + 1
            who = f" ({user_name})" if user_name else ""
            stamp = datetime.now().strftime("%H:%M:%S")
            self._exchanges.insert(0, f"{stamp} {provider} {status}{who}")
            self._exchanges = self._exchanges[:5]
            self._refresh()
            write_cli_log("EXCHANGE", provider, status=status)

    def log_forward(
        self,
        gateway_method: str,
        status: int,
        headers: dict[str, str],
        *,
        body_bytes: int,
    ) -> None:
        """Log a request relayed to the gateway."""
        with self._lock:
            self._request_count["gateway"] += 1
            info = ForwardInfo(
                gateway_method=gateway_method,
                status=status,
                body_bytes=body_bytes,
                has_session="Cookie" in headers,
                timestamp=datetime.now(),
            )
            self._forwards.insert(0, info)
            self._forwards = self._forwards[: self._max_forwards]

            write_forward_log(gateway_method, status, headers, body_bytes)
            write_cli_log("GATEWAY", gateway_method, status=status, bytes=body_bytes)

            self._refresh()

    def log_warning(self, route: str, message: str) -> None:
        """Log a non-fatal problem."""
        with self._lock:
            self._push_status(f"{route} warn: {message}")
            write_cli_log("WARNING", message[:200], route=route)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._push_status(f"{route} {status}: {message}")
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _push_status(self, line: str) -> None:
        truncated = line[:70] + "..." if len(line) > 70 else line
        self._errors.insert(0, truncated)
        self._errors = self._errors[:3]
        self._refresh()

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["body"].split_row(
            Layout(name="exchanges", ratio=1),
            Layout(name="gateway", ratio=2),
        )

        layout["header"].update(self._build_header())
        layout["exchanges"].update(self._build_exchanges_panel())
        layout["gateway"].update(self._build_gateway_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Music Auth Bridge", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Deezer auth: {self._request_count['deezer']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Last.fm auth: {self._request_count['lastfm']}", style="red")
        stats.append("  |  ")
        stats.append(f"Gateway: {self._request_count['gateway']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.server.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_exchanges_panel(self) -> Panel:
        """Build credential exchange panel."""
        if self._exchanges:
            content = Text("\n".join(self._exchanges))
        else:
            content = Text("No exchanges yet...", style="dim")

        return Panel(content, title="[magenta]Exchanges[/magenta]", border_style="magenta")

    def _build_gateway_panel(self) -> Panel:
        """Build gateway forwards panel."""
        if self._forwards:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", ratio=2)
            table.add_column("Status", width=6)
            table.add_column("Bytes", width=8)
            table.add_column("ARL", width=4)

            for fw in self._forwards:
                status_style = "green" if 200 <= fw.status < 300 else "red"
                table.add_row(
                    fw.timestamp.strftime("%H:%M:%S"),
                    fw.gateway_method[:40],
                    f"[{status_style}]{fw.status}[/{status_style}]",
                    str(fw.body_bytes),
                    "yes" if fw.has_session else "-",
                )

            content = table
        else:
            content = Text("No gateway requests yet...", style="dim")

        return Panel(content, title="[blue]Gateway[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Listening on http://{self.config.server.host}:{self.config.server.port}/api/",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
