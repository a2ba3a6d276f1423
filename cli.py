"""CLI entry point for airtable-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from auth import check_auth
from core.config import API_KEY_ENV, Config, load_config
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    config = load_config()

    if args:
        arg = args[0]

        if arg in ("--check", "--auth"):
            check_auth(config)
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    try:
        _apply_server_options(config, args)
    except ValueError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(2)

    # The proxy still answers OPTIONS and GET without a key
    if not config.airtable.has_api_key:
        console.print(f"[yellow]Warning:[/yellow] {API_KEY_ENV} not set, POST requests will fail")

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", host=config.proxy.host, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _apply_server_options(config: Config, args: list[str]) -> None:
    """Parse ``--host H`` and ``--port N`` into the proxy settings."""
    it = iter(args)
    for arg in it:
        if arg not in ("--host", "--port"):
            raise ValueError(f"Unknown option: {arg}")
        value = next(it, None)
        if value is None:
            raise ValueError(f"Missing value for {arg}")
        if arg == "--host":
            config.proxy.host = value
        else:
            try:
                config.proxy.port = int(value)
            except ValueError:
                raise ValueError(f"Invalid port: {value}") from None


def _print_help():
    """Print help message."""
    help_text = f"""
[bold cyan]Airtable Proxy[/bold cyan]

Forwards browser requests to the Airtable API with a server-held token.

[bold]Usage:[/bold]
    airtable-proxy                      Start with live dashboard
    airtable-proxy --host H --port N    Bind address (default 127.0.0.1:8888)
    airtable-proxy --check              Check API key status
    airtable-proxy --help               Show this help

[bold]Configuration:[/bold]
    Reads the Airtable token from the {API_KEY_ENV} environment variable.
    Any URL sent by a client is forwarded, not only Airtable hosts.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
