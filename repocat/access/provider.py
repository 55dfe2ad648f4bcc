"""AccessProvider protocol for external repository authorization."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from repocat.access.models import Actor, ExternalRepo


@typ.runtime_checkable
class AccessProvider(typ.Protocol):
    """Protocol for the external authority over private repository access.

    Implementations answer two questions for an actor: which repositories may
    they see, and may they see one particular repository. The GitHub GraphQL
    client is the production implementation; tests use an in-memory one.

    Examples
    --------
    >>> from repocat.access import AccessProvider, StaticAccessProvider
    >>> isinstance(StaticAccessProvider(), AccessProvider)
    True

    """

    async def list_accessible_repos(self, actor: Actor) -> list[ExternalRepo]:
        """Return every repository the actor is authorized to view.

        Parameters
        ----------
        actor
            Authenticated actor carrying a provider token.

        Returns
        -------
        list[ExternalRepo]
            The accessible-repo set for the actor.

        """
        ...

    async def get_repo(self, actor: Actor, uri: str) -> ExternalRepo:
        """Return a single repository the actor is authorized to view.

        Raises
        ------
        RepoUnauthorizedError
            If the provider denies access to ``uri`` or does not know it.

        """
        ...
