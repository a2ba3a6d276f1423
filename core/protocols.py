"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_proxy(self, method: str, url: str, status: int, headers: dict[str, str]) -> None: ...
    def log_error(self, status: int, message: str) -> None: ...


class NullRequestLogger:
    """Discard all log events; used where no dashboard runs."""

    def log_proxy(self, method: str, url: str, status: int, headers: dict[str, str]) -> None:
        pass

    def log_error(self, status: int, message: str) -> None:
        pass
