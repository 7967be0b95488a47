"""CLI entry point for bybit-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from core.exceptions import ConfigurationError
from ui.console_log import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        _print_help()
        return

    if "--config" in args:
        console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
        console.print_json(config.model_dump_json())
        return

    dashboard = Dashboard(config) if "--dashboard" in args else None
    logger = dashboard or ConsoleLogger(verbose=config.proxy.debug)

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        # Trust the cloud load balancer's X-Forwarded-* headers
        proxy_headers=config.proxy.trust_proxy,
        forwarded_allow_ips="*" if config.proxy.trust_proxy else None,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    else:
        console.print(f"[green]✓[/green] Bybit proxy running on port {config.proxy.port}")
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Bybit Proxy[/bold cyan]

Forwards /mainnet/* to api.bybit.com and /testnet/* to api-demo-testnet.bybit.com.

[bold]Usage:[/bold]
    bybit-proxy                Start the proxy
    bybit-proxy --dashboard    Start with live dashboard
    bybit-proxy --config       Show config location and effective settings
    bybit-proxy --help         Show this help

[bold]Environment:[/bold]
    PORT            Listening port (default 3000)
    HOST            Bind address (default 0.0.0.0)
    KOYEB_REGION    Region reported by /health
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
