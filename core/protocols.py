"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (console or dashboard)."""

    def log_forward(self, route: str, method: str, url: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
