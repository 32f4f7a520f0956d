"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_exchange(
        self,
        provider: str,
        status: int,
        *,
        user_name: str | None = None,
    ) -> None: ...
    def log_forward(
        self,
        gateway_method: str,
        status: int,
        headers: dict[str, str],
        *,
        body_bytes: int,
    ) -> None: ...
    def log_warning(self, route: str, message: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
