"""Observability primitives for catalogue operations.

Provides structured logging and error categorization for listings, inserts
and access-provider failures. All events are emitted as ``[event] key=value``
lines suitable for parsing by log aggregators.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

import httpx
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from repocat.access.errors import RepoUnauthorizedError
from repocat.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from repocat.logging import get_logger, log_debug, log_info, log_warning

if typ.TYPE_CHECKING:
    import datetime as dt

logger = get_logger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500


class CatalogueEventType(enum.StrEnum):
    """Structured log event types for catalogue observability."""

    LISTING_COMPLETED = "catalogue.listing.completed"
    PROVIDER_FAILED = "catalogue.access.provider_failed"
    REPO_CREATED = "catalogue.store.repo_created"
    INSERT_IGNORED = "catalogue.store.insert_ignored"
    REQUEST_CANCELLED = "catalogue.request.cancelled"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    UNAUTHORIZED = "unauthorized"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    DATABASE_CONNECTIVITY = "database_connectivity"
    DATA_INTEGRITY = "data_integrity"
    DATABASE_ERROR = "database_error"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (RepoUnauthorizedError, ErrorCategory.UNAUTHORIZED),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
    (httpx.TransportError, ErrorCategory.TRANSIENT),
    (TimeoutError, ErrorCategory.TRANSIENT),
    (OperationalError, ErrorCategory.DATABASE_CONNECTIVITY),
    (InterfaceError, ErrorCategory.DATABASE_CONNECTIVITY),
    (IntegrityError, ErrorCategory.DATA_INTEGRITY),
    (SQLAlchemyError, ErrorCategory.DATABASE_ERROR),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alerting purposes.

    Returns:
        ErrorCategory indicating the type of failure for alert routing.

    """
    # GitHubAPIError requires special handling for status code distinction
    if isinstance(exc, GitHubAPIError):
        if (
            exc.status_code is not None
            and exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD
        ):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


@dataclasses.dataclass(frozen=True, slots=True)
class ListingStats:
    """Counts gathered while running one listing pipeline."""

    query: str
    scanned: int
    matched: int
    visible: int
    returned: int
    provider_called: bool


class CatalogueEventLogger:
    """Emit structured catalogue events through femtologging.

    Success events are logged at INFO (DEBUG for ignored inserts), provider
    failures and cancellations at WARNING since neither is surfaced to the
    caller as a listing error.
    """

    def log_listing_completed(
        self,
        actor_login: str,
        stats: ListingStats,
        duration: dt.timedelta,
    ) -> None:
        """Log a completed listing with pipeline counts."""
        log_info(
            logger,
            "[%s] actor=%s query=%r duration_seconds=%.3f scanned=%d matched=%d "
            "visible=%d returned=%d provider_called=%s",
            CatalogueEventType.LISTING_COMPLETED,
            actor_login or "<anonymous>",
            stats.query,
            duration.total_seconds(),
            stats.scanned,
            stats.matched,
            stats.visible,
            stats.returned,
            stats.provider_called,
        )

    def log_provider_failed(self, actor_login: str, error: BaseException) -> None:
        """Log a provider failure that was resolved by excluding private repos."""
        log_warning(
            logger,
            "[%s] actor=%s error_type=%s error_category=%s error_message=%s",
            CatalogueEventType.PROVIDER_FAILED,
            actor_login or "<anonymous>",
            type(error).__name__,
            categorize_error(error),
            str(error),
            exc_info=error,
        )

    def log_repo_created(self, uri: str) -> None:
        """Log creation of a new catalogue repository."""
        log_info(logger, "[%s] uri=%s", CatalogueEventType.REPO_CREATED, uri)

    def log_insert_ignored(self, uri: str) -> None:
        """Log an insert that found the URI already present."""
        log_debug(logger, "[%s] uri=%s", CatalogueEventType.INSERT_IGNORED, uri)

    def log_request_cancelled(self, operation: str, timeout_s: float) -> None:
        """Log an operation aborted by its request deadline."""
        log_warning(
            logger,
            "[%s] operation=%s timeout_seconds=%.3f",
            CatalogueEventType.REQUEST_CANCELLED,
            operation,
            timeout_s,
        )
