"""GitHub access provider errors."""

from __future__ import annotations

import typing as typ

_NOT_FOUND_ERROR_TYPE = "NOT_FOUND"


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns an error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_types: frozenset[str] = frozenset(),
    ) -> None:
        """Initialise with a message, HTTP status and GraphQL error types."""
        self.status_code = status_code
        self.error_types = error_types
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(f"GitHub GraphQL HTTP {status_code}", status_code=status_code)

    @classmethod
    def graphql_errors(cls, errors: object) -> GitHubAPIError:
        """Return an error for GraphQL `errors` payloads."""
        error_types: set[str] = set()
        if isinstance(errors, list):
            for error in typ.cast("list[object]", errors):
                if isinstance(error, dict):
                    kind = typ.cast("dict[str, object]", error).get("type")
                    if isinstance(kind, str):
                        error_types.add(kind)
        return cls(
            f"GitHub GraphQL errors: {errors}", error_types=frozenset(error_types)
        )

    @property
    def is_not_found(self) -> bool:
        """Return True when GitHub reported the resource as missing."""
        return _NOT_FOUND_ERROR_TYPE in self.error_types


class GitHubResponseShapeError(RuntimeError):
    """Raised when GitHub GraphQL responses are missing expected fields."""

    @classmethod
    def missing(cls, field: str) -> GitHubResponseShapeError:
        """Return an error for a missing GraphQL response field."""
        return cls(f"GitHub GraphQL response missing expected field: {field}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub provider configuration is invalid."""

    @classmethod
    def invalid_timeout(cls, value: str) -> GitHubConfigError:
        """Return an error when the configured timeout is not a positive number."""
        return cls(
            f"REPOCAT_GITHUB_TIMEOUT_S must be a positive number, got {value!r}"
        )

    @classmethod
    def empty_value(cls, name: str) -> GitHubConfigError:
        """Return an error when a configured value is blank."""
        return cls(f"{name} must be non-empty")

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when the actor carries no GitHub token."""
        return cls("actor has no GitHub token to authenticate with")
