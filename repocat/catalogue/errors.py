"""Errors raised by catalogue service operations."""

from __future__ import annotations


class RequestCancelledError(TimeoutError):
    """Raised when a catalogue operation exceeds its request deadline.

    No partial results are returned when this is raised.
    """

    def __init__(self, operation: str, timeout_s: float) -> None:
        """Record the aborted operation and the deadline it exceeded."""
        self.operation = operation
        self.timeout_s = timeout_s
        msg = f"{operation} cancelled after exceeding {timeout_s:g}s deadline"
        super().__init__(msg)
