"""Errors specific to the repository store."""

from __future__ import annotations


class RepoStoreError(Exception):
    """Base class for repository store errors."""


class RepoNotFoundError(RepoStoreError):
    """Raised when a repository cannot be found by URI or ID."""

    def __init__(self, key: str | int) -> None:
        """Initialise with the missing repository key."""
        self.key = key
        super().__init__(f"Repository not found: {key}")


class RepoPersistError(RepoStoreError):
    """Raised when a conflicting insert leaves no row behind."""

    def __init__(self, uri: str) -> None:
        """Include the URI whose insert could not be confirmed."""
        self.uri = uri
        super().__init__(f"expected existing repository after conflict: {uri}")


class TimezoneAwareRequiredError(ValueError):
    """Raised when datetime inputs lack timezone information."""

    def __init__(self, context: str) -> None:
        """Attach a consistent message for the failing context."""
        super().__init__(f"{context} must be timezone aware")

    @classmethod
    def for_created_at(cls) -> TimezoneAwareRequiredError:
        """Return an error indicating created_at was naive."""
        return cls("created_at")
