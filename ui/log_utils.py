"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def describe_url(url: str) -> str:
    """Host and path of an upstream URL, without the query string."""
    parts = urlsplit(url)
    if not parts.netloc:
        return url
    return f"{parts.netloc}{parts.path}"


def write_upstream_log(
    method: str,
    url: str,
    status: int,
    headers: dict[str, str],
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single upstream request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "url": url,
        "status": status,
        "headers": _redact_headers(headers),
    }
    return _write_json(log_root / "upstream", payload)


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


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove logs left over from a previous run."""
    if log_root.exists():
        shutil.rmtree(log_root)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        if "key" in key.lower() or "authorization" in key.lower():
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 16:
        return "***"
    return value[:10] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
