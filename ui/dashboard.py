"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from pathlib import Path
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import LOG_ROOT, describe_url, write_cli_log, write_upstream_log

console = Console()


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, method: str, url: str, status: int, timestamp: datetime):
        self.method = method
        target = describe_url(url)
        self.target = target[:60] + "..." if len(target) > 60 else target
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent upstream calls and errors."""

    def __init__(self, config: Config, log_root: Path = LOG_ROOT):
        self.config = config
        self._log_root = log_root
        self._lock = Lock()
        self._requests: list[RequestInfo] = []
        self._max_requests = 8
        self._request_count = {"ok": 0, "failed": 0}
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
        return dict(self._request_count)

    @property
    def recent_requests(self) -> list[RequestInfo]:
        return list(self._requests)

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def log_proxy(self, method: str, url: str, status: int, headers: dict[str, str]) -> None:
        """Log a request forwarded to Airtable."""
        with self._lock:
            self._request_count["ok" if status < 400 else "failed"] += 1
            self._requests.insert(0, RequestInfo(method, url, status, datetime.now()))
            self._requests = self._requests[: self._max_requests]
            self._refresh()

            write_upstream_log(method, url, status, headers, log_root=self._log_root)
            write_cli_log(
                "UPSTREAM",
                describe_url(url),
                log_file=self._log_root / "proxy.log",
                method=method,
                status=status,
            )

    def log_error(self, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log(
                "ERROR",
                message[:200],
                log_file=self._log_root / "proxy.log",
                status=status,
            )

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
        stats.append("Airtable Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"OK: {self._request_count['ok']}", style="green")
        stats.append("  |  ")
        stats.append(f"Failed: {self._request_count['failed']}", style="red")
        stats.append("  |  ")
        key_style = "green" if self.config.airtable.has_api_key else "yellow"
        key_state = "set" if self.config.airtable.has_api_key else "missing"
        stats.append(f"API key: {key_state}", style=key_style)
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._requests:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=1)

            for req in self._requests:
                status_style = "green" if req.status < 400 else "red"
                table.add_row(
                    req.timestamp.strftime("%H:%M:%S"),
                    req.method,
                    f"[{status_style}]{req.status}[/{status_style}]",
                    req.target,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Upstream Requests[/blue]", border_style="blue")

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
                f"POST to http://{self.config.proxy.host}:{self.config.proxy.port}"
                "/.netlify/functions/airtable-proxy",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
