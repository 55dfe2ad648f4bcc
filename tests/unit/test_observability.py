"""Unit tests for catalogue observability."""

from __future__ import annotations

import datetime as dt

import httpx
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from repocat.access import RepoUnauthorizedError
from repocat.catalogue import RequestCancelledError
from repocat.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from repocat.observability import (
    CatalogueEventLogger,
    CatalogueEventType,
    ErrorCategory,
    ListingStats,
    categorize_error,
)
from tests.helpers.femtologging_capture import capture_femto_logs


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (GitHubAPIError.http_error(502), ErrorCategory.TRANSIENT),
        (GitHubAPIError.http_error(401), ErrorCategory.CLIENT_ERROR),
        (
            GitHubAPIError.graphql_errors([{"message": "bad"}]),
            ErrorCategory.CLIENT_ERROR,
        ),
        (GitHubResponseShapeError.missing("viewer"), ErrorCategory.SCHEMA_DRIFT),
        (GitHubConfigError.missing_token(), ErrorCategory.CONFIGURATION),
        (RepoUnauthorizedError("a/b"), ErrorCategory.UNAUTHORIZED),
        (httpx.ConnectError("refused"), ErrorCategory.TRANSIENT),
        (RequestCancelledError("list", 1.0), ErrorCategory.TRANSIENT),
        (
            OperationalError("connect", None, Exception("x")),
            ErrorCategory.DATABASE_CONNECTIVITY,
        ),
        (IntegrityError("dupe", None, Exception("x")), ErrorCategory.DATA_INTEGRITY),
        (SQLAlchemyError("other"), ErrorCategory.DATABASE_ERROR),
        (ValueError("?"), ErrorCategory.UNKNOWN),
    ],
)
def test_categorize_error(exc: BaseException, expected: ErrorCategory) -> None:
    """Failures map to alerting categories."""
    assert categorize_error(exc) == expected


def test_graphql_error_types_are_recorded() -> None:
    """GraphQL error types are kept for denial detection."""
    exc = GitHubAPIError.graphql_errors([{"type": "NOT_FOUND"}, {"message": "x"}])

    assert exc.error_types == frozenset({"NOT_FOUND"})
    assert exc.is_not_found is True
    assert GitHubAPIError.http_error(404).is_not_found is False


class TestCatalogueEventLogger:
    """Tests for structured catalogue events."""

    def test_listing_completed_includes_counts(self) -> None:
        """Completion events carry every stage count."""
        stats = ListingStats(
            query="def",
            scanned=6,
            matched=6,
            visible=4,
            returned=2,
            provider_called=True,
        )

        with capture_femto_logs("repocat.observability") as capture:
            CatalogueEventLogger().log_listing_completed(
                "octo", stats, dt.timedelta(milliseconds=1500)
            )
            capture.wait_for_count(1)

        record = capture.records[0]
        assert record.level == "INFO"
        assert CatalogueEventType.LISTING_COMPLETED in record.message
        assert "actor=octo" in record.message
        assert "query='def'" in record.message
        assert "duration_seconds=1.500" in record.message
        assert "scanned=6 matched=6 visible=4 returned=2" in record.message
        assert "provider_called=True" in record.message

    def test_provider_failed_includes_category(self) -> None:
        """Provider failures are categorized and carry the exception."""
        error = GitHubAPIError.http_error(503)

        with capture_femto_logs("repocat.observability") as capture:
            CatalogueEventLogger().log_provider_failed("", error)
            capture.wait_for_count(1)

        record = capture.records[0]
        assert CatalogueEventType.PROVIDER_FAILED in record.message
        assert "actor=<anonymous>" in record.message
        assert "error_type=GitHubAPIError" in record.message
        assert "error_category=transient" in record.message
        assert "GitHub GraphQL HTTP 503" in record.message

    def test_request_cancelled(self) -> None:
        """Cancellation events name the operation and its deadline."""
        with capture_femto_logs("repocat.observability") as capture:
            CatalogueEventLogger().log_request_cancelled("get_by_uri", 0.25)
            capture.wait_for_count(1)

        record = capture.records[0]
        assert CatalogueEventType.REQUEST_CANCELLED in record.message
        assert "operation=get_by_uri" in record.message
        assert "timeout_seconds=0.250" in record.message
