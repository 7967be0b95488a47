"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log

console = Console()


class ForwardInfo:
    """Info about a single forwarded request."""

    def __init__(self, route: str, method: str, url: str, status: int, timestamp: datetime):
        self.route = route
        self.method = method
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing traffic per network."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[ForwardInfo] = []
        self._max_recent = 10
        self._request_count = {"mainnet": 0, "testnet": 0}
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

    @property
    def request_count(self) -> dict[str, int]:
        with self._lock:
            return dict(self._request_count)

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def log_forward(self, route: str, method: str, url: str, status: int) -> None:
        """Log a request relayed from upstream."""
        with self._lock:
            self._request_count[route] = self._request_count.get(route, 0) + 1
            info = ForwardInfo(route, method, url, status, datetime.now())
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]
            self._refresh()
            write_cli_log("FORWARD", f"{method} {url}", route=route, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

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

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Bybit Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Mainnet: {self._request_count.get('mainnet', 0)}", style="green")
        stats.append("  |  ")
        stats.append(f"Testnet: {self._request_count.get('testnet', 0)}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Net", width=8)
            table.add_column("Method", width=7)
            table.add_column("URL", ratio=3)
            table.add_column("Status", width=6)

            for info in self._recent:
                status_style = "green" if info.status < 400 else "red"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.route,
                    info.method,
                    escape(info.url),
                    Text(str(info.status), style=status_style),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent requests[/blue]", border_style="blue")

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
                f"Point clients at http://localhost:{self.config.proxy.port}/mainnet or /testnet",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
