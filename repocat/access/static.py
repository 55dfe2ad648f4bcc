"""In-memory AccessProvider for testing and local development."""

from __future__ import annotations

import typing as typ

from repocat.access.errors import RepoUnauthorizedError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from repocat.access.models import Actor, ExternalRepo


class StaticAccessProvider:
    """Deterministic provider backed by a fixed accessible-repo set.

    Every call is recorded so callers can assert whether, and how often, the
    provider was consulted.

    Parameters
    ----------
    repos
        Repositories every actor is authorized to view.
    failure
        Optional exception raised by :meth:`list_accessible_repos`, used to
        simulate provider outages.

    Examples
    --------
    >>> import asyncio
    >>> from repocat.access import Actor, ExternalRepo, StaticAccessProvider
    >>> provider = StaticAccessProvider([ExternalRepo("github.com/o/r", private=True)])
    >>> repos = asyncio.run(provider.list_accessible_repos(Actor(login="o")))
    >>> [repo.uri for repo in repos], provider.list_call_count
    (['github.com/o/r'], 1)

    """

    def __init__(
        self,
        repos: cabc.Iterable[ExternalRepo] = (),
        *,
        failure: Exception | None = None,
    ) -> None:
        """Store the accessible set and initialise call tracking."""
        self._repos = {repo.uri.lower(): repo for repo in repos}
        self._failure = failure
        self.list_calls: list[Actor] = []
        self.get_calls: list[tuple[Actor, str]] = []

    @property
    def list_call_count(self) -> int:
        """Return how many times the accessible set was requested."""
        return len(self.list_calls)

    async def list_accessible_repos(self, actor: Actor) -> list[ExternalRepo]:
        """Return the configured repositories, or raise the configured failure."""
        self.list_calls.append(actor)
        if self._failure is not None:
            raise self._failure
        return list(self._repos.values())

    async def get_repo(self, actor: Actor, uri: str) -> ExternalRepo:
        """Return the configured repository for ``uri``."""
        self.get_calls.append((actor, uri))
        repo = self._repos.get(uri.lower())
        if repo is None:
            raise RepoUnauthorizedError.not_recognized(uri)
        return repo
