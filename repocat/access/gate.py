"""Access-control gate merging local records with the provider's accessible set.

Visibility rules
----------------
- Public repositories are visible to every actor, including anonymous ones.
- A private repository is visible only when the actor is authenticated,
  carries a provider token, and the provider lists the repository's URI in
  the actor's accessible set.
- ``RequestContext.insecure_skip`` disables the gate entirely.

The provider is consulted at most once per listing, and only when a private
candidate exists and the actor could possibly be authorized. Anything that
cannot be affirmatively confirmed is excluded rather than reported.
"""

from __future__ import annotations

import typing as typ

from repocat.access.errors import RepoUnauthorizedError
from repocat.access.models import AccessDecision

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from repocat.access.models import Actor, RequestContext
    from repocat.access.provider import AccessProvider
    from repocat.store.models import Repo


def may_consult_provider(actor: Actor) -> bool:
    """Return True when the actor is authenticated and holds a token."""
    return actor.is_authenticated and actor.has_token


def is_visible(repo: Repo, accessible_uris: cabc.Set[str]) -> bool:
    """Return True when ``repo`` is public or affirmed by the provider.

    ``accessible_uris`` holds lower-cased URIs; hosted owner and repository
    names are case-insensitive.
    """
    return not repo.private or repo.uri.lower() in accessible_uris


class AccessControlGate:
    """Filter repositories down to those an actor may see.

    Parameters
    ----------
    provider
        External authorization provider. When None, private repositories are
        only visible to insecure-skip callers.

    """

    def __init__(self, provider: AccessProvider | None) -> None:
        """Configure the gate with its provider."""
        self._provider = provider

    async def filter_visible(
        self,
        ctx: RequestContext,
        candidates: cabc.Sequence[Repo],
    ) -> AccessDecision:
        """Return the visible subset of ``candidates`` in their given order.

        A provider failure never escapes: it is recorded on the decision and
        every private candidate is excluded.

        Parameters
        ----------
        ctx
            Request context carrying the actor and insecure-skip flag.
        candidates
            Ranked candidates.

        Returns
        -------
        AccessDecision
            Visible repositories and whether the provider was called.

        """
        if ctx.insecure_skip:
            return AccessDecision(visible=list(candidates))

        if not any(repo.private for repo in candidates):
            return AccessDecision(visible=list(candidates))

        if self._provider is None or not may_consult_provider(ctx.actor):
            public = [repo for repo in candidates if not repo.private]
            return AccessDecision(visible=public)

        try:
            accessible = await self._provider.list_accessible_repos(ctx.actor)
        except Exception as exc:  # noqa: BLE001 - fail closed on any provider error
            public = [repo for repo in candidates if not repo.private]
            return AccessDecision(
                visible=public, provider_called=True, provider_error=exc
            )

        accessible_uris = frozenset(repo.uri.lower() for repo in accessible)
        visible = [repo for repo in candidates if is_visible(repo, accessible_uris)]
        return AccessDecision(visible=visible, provider_called=True)

    async def verify_read_access(self, ctx: RequestContext, repo: Repo) -> None:
        """Check that the actor may read a single, directly requested repo.

        Raises
        ------
        RepoUnauthorizedError
            If ``repo`` is private and the provider does not confirm access.

        """
        if ctx.insecure_skip or not repo.private:
            return

        if self._provider is None or not may_consult_provider(ctx.actor):
            raise RepoUnauthorizedError.anonymous(repo.uri)

        await self._provider.get_repo(ctx.actor, repo.uri)
