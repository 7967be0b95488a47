"""Line-oriented console logger for headless deployments."""

from rich.console import Console
from rich.markup import escape

from ui.log_utils import write_cli_log


class ConsoleLogger:
    """Print one line per forwarded request or error."""

    def __init__(self, console: Console | None = None, verbose: bool = False):
        self.console = console or Console(stderr=True)
        self.verbose = verbose

    def log_forward(self, route: str, method: str, url: str, status: int) -> None:
        if self.verbose:
            self.console.print(f"[cyan]\\[{route}][/cyan] {method} {escape(url)} -> {status}")
        write_cli_log("FORWARD", f"{method} {url}", route=route, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        self.console.print(f"[red]\\[{route}] Error:[/red] {escape(message)}")
        write_cli_log("ERROR", message[:200], route=route, status=status)
