"""Errors raised while validating listing options."""

from __future__ import annotations


class InvalidPaginationError(ValueError):
    """Raised when pagination parameters are below one."""

    def __init__(self, name: str, value: int) -> None:
        """Build a consistent error message for the invalid parameter."""
        self.name = name
        self.value = value
        msg = f"{name} must be at least 1, got {value}"
        super().__init__(msg)
