"""Listing pipeline: scan, rank, access-filter, paginate.

The stages always run in that order. Pagination windows the final filtered
sequence, so page boundaries never depend on what the actor cannot see.
"""

from __future__ import annotations

import datetime as dt
import time
import typing as typ

from repocat.listing.options import RepoListOp, paginate, validate_pagination
from repocat.observability import CatalogueEventLogger, ListingStats
from repocat.search.ranking import prefilter_substring, rank_repos

if typ.TYPE_CHECKING:
    from repocat.access.gate import AccessControlGate
    from repocat.access.models import RequestContext
    from repocat.store.models import Repo
    from repocat.store.service import RepoStore


class RepoListPipeline:
    """Run one catalogue listing against a store and an access gate.

    Parameters
    ----------
    store
        Repository store supplying candidates in ascending ID order.
    gate
        Access-control gate applied after ranking.
    event_logger
        Structured event logger. A default instance is used when omitted.

    """

    def __init__(
        self,
        store: RepoStore,
        gate: AccessControlGate,
        *,
        event_logger: CatalogueEventLogger | None = None,
    ) -> None:
        """Wire the pipeline stages."""
        self._store = store
        self._gate = gate
        self._event_logger = event_logger or CatalogueEventLogger()

    async def run(
        self, ctx: RequestContext, op: RepoListOp | None = None
    ) -> list[Repo]:
        """Return the visible, ranked page of repositories described by ``op``.

        Raises
        ------
        InvalidPaginationError
            If ``op`` carries a page or page size below one. Raised before
            any storage or provider call.

        """
        op = op or RepoListOp()
        validate_pagination(op)
        started_at = time.monotonic()

        candidates = await self._store.scan_all(contains=prefilter_substring(op.query))
        ranked = rank_repos(op.query, candidates)
        decision = await self._gate.filter_visible(ctx, ranked)
        if decision.provider_error is not None:
            self._event_logger.log_provider_failed(
                ctx.actor.login, decision.provider_error
            )
        page = paginate(decision.visible, op)

        self._event_logger.log_listing_completed(
            ctx.actor.login,
            ListingStats(
                query=op.query,
                scanned=len(candidates),
                matched=len(ranked),
                visible=len(decision.visible),
                returned=len(page),
                provider_called=decision.provider_called,
            ),
            dt.timedelta(seconds=time.monotonic() - started_at),
        )
        return page
