"""Errors raised by access control."""

from __future__ import annotations


class AccessError(Exception):
    """Base class for access-control errors."""


class RepoUnauthorizedError(AccessError):
    """Raised when the actor may not read a specific repository."""

    def __init__(self, uri: str, reason: str | None = None) -> None:
        """Record the denied URI and an optional reason."""
        self.uri = uri
        self.reason = reason
        message = f"Unauthorized to access repository: {uri}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    @classmethod
    def anonymous(cls, uri: str) -> RepoUnauthorizedError:
        """Return an error for anonymous or token-less actors."""
        return cls(uri, "authenticated actor with a provider token required")

    @classmethod
    def not_recognized(cls, uri: str) -> RepoUnauthorizedError:
        """Return an error for URIs the provider does not host."""
        return cls(uri, "repository is not known to the provider")
