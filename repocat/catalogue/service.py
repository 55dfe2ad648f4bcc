"""Catalogue service exposing inserts, direct reads and listings.

The service is the public entry point. It owns no mutable state between
calls: every operation builds its own unit of work against the store and, for
listings, fetches its own accessible-repo set from the provider.

Usage
-----
::

    service = RepoCatalogueService(session_factory, provider=provider)
    await service.try_insert_new("github.com/octo/reef", private=True)
    ctx = RequestContext(actor=Actor(uid="1", login="octo", github_token=token))
    repos = await service.list(ctx, RepoListOp(query="octo", per_page=20))

"""

from __future__ import annotations

import asyncio
import typing as typ

from repocat.access.gate import AccessControlGate
from repocat.catalogue.errors import RequestCancelledError
from repocat.listing.pipeline import RepoListPipeline
from repocat.observability import CatalogueEventLogger
from repocat.store.service import RepoStore

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sqlalchemy.ext.asyncio import AsyncEngine

    from repocat.access.models import RequestContext
    from repocat.access.provider import AccessProvider
    from repocat.listing.options import RepoListOp
    from repocat.store.models import Repo
    from repocat.store.service import SessionFactory


T = typ.TypeVar("T")


class RepoCatalogueService:
    """Insert, read and list catalogue repositories.

    Parameters
    ----------
    session_factory
        Async session factory bound to the catalogue database.
    provider
        External authorization provider. Without one, private repositories
        are only visible to insecure-skip callers.
    default_branch
        Branch recorded on new repositories when the caller gives none.
    request_timeout_s
        Deadline applied when the request context carries no timeout.
    event_logger
        Structured event logger. A default instance is used when omitted.
    engine
        Engine backing ``session_factory``, disposed by :meth:`aclose` when
        given.

    """

    def __init__(  # noqa: PLR0913
        self,
        session_factory: SessionFactory,
        *,
        provider: AccessProvider | None = None,
        default_branch: str = "master",
        request_timeout_s: float | None = None,
        event_logger: CatalogueEventLogger | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        """Wire the store, access gate and listing pipeline."""
        self._provider = provider
        self._engine = engine
        self._store = RepoStore(session_factory)
        self._gate = AccessControlGate(provider)
        self._event_logger = event_logger or CatalogueEventLogger()
        self._pipeline = RepoListPipeline(
            self._store, self._gate, event_logger=self._event_logger
        )
        self._default_branch = default_branch
        self._request_timeout_s = request_timeout_s

    @property
    def store(self) -> RepoStore:
        """Return the underlying repository store."""
        return self._store

    async def aclose(self) -> None:
        """Close the provider's HTTP resources and dispose the owned engine."""
        close_provider = getattr(self._provider, "aclose", None)
        if close_provider is not None:
            await close_provider()
        if self._engine is not None:
            await self._engine.dispose()

    async def try_insert_new(  # noqa: PLR0913
        self,
        uri: str,
        description: str = "",
        fork: bool = False,  # noqa: FBT001, FBT002
        private: bool = False,  # noqa: FBT001, FBT002
        *,
        default_branch: str | None = None,
        ctx: RequestContext | None = None,
    ) -> None:
        """Create ``uri`` unless it already exists.

        Duplicate creation is not an error; the existing record is left
        untouched.

        Raises
        ------
        ValueError
            If ``uri`` is blank or malformed.
        RequestCancelledError
            If the request deadline expires first.

        """

        async def insert() -> bool:
            return await self._store.try_insert_new(
                uri,
                description,
                fork=fork,
                private=private,
                default_branch=default_branch or self._default_branch,
            )

        created = await self._with_deadline("try_insert_new", ctx, insert)
        if created:
            self._event_logger.log_repo_created(uri)
        else:
            self._event_logger.log_insert_ignored(uri)

    async def get_by_uri(self, uri: str, *, ctx: RequestContext | None = None) -> Repo:
        """Return the repository stored under ``uri``.

        Without ``ctx`` this is a trusted internal read and no access check is
        made.

        Raises
        ------
        RepoNotFoundError
            If no repository is stored under ``uri``.
        RepoUnauthorizedError
            If ``ctx`` is given and its actor may not read the repository.

        """

        async def read() -> Repo:
            return await self._checked(ctx, await self._store.get_by_uri(uri))

        return await self._with_deadline("get_by_uri", ctx, read)

    async def get_by_id(
        self, repo_id: int, *, ctx: RequestContext | None = None
    ) -> Repo:
        """Return the repository with primary key ``repo_id``.

        See :meth:`get_by_uri` for the access rules.
        """

        async def read() -> Repo:
            return await self._checked(ctx, await self._store.get_by_id(repo_id))

        return await self._with_deadline("get_by_id", ctx, read)

    async def _checked(self, ctx: RequestContext | None, repo: Repo) -> Repo:
        if ctx is not None:
            await self._gate.verify_read_access(ctx, repo)
        return repo

    async def _with_deadline(
        self,
        operation: str,
        ctx: RequestContext | None,
        call: cabc.Callable[[], cabc.Awaitable[T]],
    ) -> T:
        """Await ``call`` under the request deadline, if one applies."""
        timeout_s = ctx.timeout_s if ctx is not None else None
        if timeout_s is None:
            timeout_s = self._request_timeout_s
        if timeout_s is None:
            return await call()

        deadline = asyncio.timeout(timeout_s)
        try:
            async with deadline:
                return await call()
        except TimeoutError as exc:
            if not deadline.expired():
                raise
            self._event_logger.log_request_cancelled(operation, timeout_s)
            raise RequestCancelledError(operation, timeout_s) from exc

    async def list(  # noqa: A003
        self, ctx: RequestContext, op: RepoListOp | None = None
    ) -> list[Repo]:
        """Return the visible repositories matching ``op``.

        Results are ranked by query match, filtered by access control and then
        windowed by ``op.page``/``op.per_page``. Authorization outcomes never
        fail a listing; repositories the actor cannot see are simply absent.

        Raises
        ------
        InvalidPaginationError
            If ``op`` carries a page or page size below one.
        RequestCancelledError
            If the request deadline expires first.

        """

        async def run() -> list[Repo]:
            return await self._pipeline.run(ctx, op)

        return await self._with_deadline("list", ctx, run)
