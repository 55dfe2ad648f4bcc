"""Unit tests for the listing pipeline."""

from __future__ import annotations

import typing as typ

import pytest

from repocat.access import (
    AccessControlGate,
    Actor,
    ExternalRepo,
    RequestContext,
    StaticAccessProvider,
)
from repocat.listing import InvalidPaginationError, RepoListOp, RepoListPipeline
from repocat.observability import CatalogueEventType
from repocat.store import RepoStore
from tests.helpers.femtologging_capture import capture_femto_logs

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


async def _seed(store: RepoStore) -> None:
    await store.try_insert_new("a/def")
    await store.try_insert_new("b/def", fork=True)
    await store.try_insert_new("c/def", private=True)
    await store.try_insert_new("def/ghi")
    await store.try_insert_new("def/jkl", fork=True)
    await store.try_insert_new("def/mno", private=True)


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> RepoStore:
    """Return a store bound to the per-test database."""
    return RepoStore(session_factory)


class TestRepoListPipeline:
    """Tests for the scan, rank, filter and paginate stages."""

    @pytest.mark.asyncio
    async def test_pagination_applies_after_access_filter(
        self, store: RepoStore
    ) -> None:
        """Hidden repositories never occupy page slots."""
        await _seed(store)
        pipeline = RepoListPipeline(store, AccessControlGate(StaticAccessProvider()))

        page_one = await pipeline.run(
            RequestContext(), RepoListOp(query="def", page=1, per_page=2)
        )
        page_two = await pipeline.run(
            RequestContext(), RepoListOp(query="def", page=2, per_page=2)
        )

        assert [repo.uri for repo in page_one] == ["def/ghi", "def/jkl"]
        assert [repo.uri for repo in page_two] == ["a/def", "b/def"]

    @pytest.mark.asyncio
    async def test_invalid_pagination_raises_before_scanning(
        self, store: RepoStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Invalid pagination is rejected without touching storage."""

        async def fail_scan(contains: str | None = None) -> list[typ.Any]:
            pytest.fail("scan_all should not be called")

        monkeypatch.setattr(store, "scan_all", fail_scan)
        pipeline = RepoListPipeline(store, AccessControlGate(None))

        with pytest.raises(InvalidPaginationError):
            await pipeline.run(RequestContext(), RepoListOp(page=0, per_page=1))

    @pytest.mark.asyncio
    async def test_logs_listing_completed(self, store: RepoStore) -> None:
        """Each listing emits a completion event with stage counts."""
        await _seed(store)
        pipeline = RepoListPipeline(store, AccessControlGate(None))

        with capture_femto_logs("repocat.observability") as capture:
            await pipeline.run(RequestContext(), RepoListOp(query="def/"))
            capture.wait_for_count(1)

        records = capture.messages_containing(CatalogueEventType.LISTING_COMPLETED)
        assert len(records) == 1
        message = records[0].message
        assert "actor=<anonymous>" in message
        assert "scanned=3" in message
        assert "matched=3" in message
        assert "visible=2" in message
        assert "returned=2" in message
        assert "provider_called=False" in message

    @pytest.mark.asyncio
    async def test_logs_provider_failure(self, store: RepoStore) -> None:
        """Provider failures are logged as warnings and private repos hidden."""
        await _seed(store)
        provider = StaticAccessProvider(failure=RuntimeError("provider down"))
        pipeline = RepoListPipeline(store, AccessControlGate(provider))
        ctx = RequestContext(actor=Actor(uid="1", login="octo", github_token="t"))

        with capture_femto_logs("repocat.observability") as capture:
            repos = await pipeline.run(ctx, RepoListOp(query="def"))
            capture.wait_for_count(2)

        assert [repo.uri for repo in repos] == [
            "def/ghi",
            "def/jkl",
            "a/def",
            "b/def",
        ]
        failures = capture.messages_containing(CatalogueEventType.PROVIDER_FAILED)
        assert len(failures) == 1
        assert failures[0].level in {"WARN", "WARNING"}
        assert "actor=octo" in failures[0].message
        assert "error_type=RuntimeError" in failures[0].message

    @pytest.mark.asyncio
    async def test_provider_called_once_per_listing(self, store: RepoStore) -> None:
        """Every listing fetches its own accessible set exactly once."""
        await _seed(store)
        provider = StaticAccessProvider([ExternalRepo("c/def", private=True)])
        pipeline = RepoListPipeline(store, AccessControlGate(provider))
        ctx = RequestContext(actor=Actor(uid="1", login="octo", github_token="t"))

        first = await pipeline.run(ctx, RepoListOp(query="def"))
        second = await pipeline.run(ctx, RepoListOp(query="def"))

        assert [repo.uri for repo in first] == [repo.uri for repo in second]
        assert "c/def" in [repo.uri for repo in first]
        assert "def/mno" not in [repo.uri for repo in first]
        assert provider.list_call_count == 2
