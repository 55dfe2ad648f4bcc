"""Request identity and access-decision types.

Actor identity and the insecure-skip override travel in an explicit
:class:`RequestContext` rather than ambient state, so every visibility rule
can be exercised by constructing a plain value.
"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    from repocat.store.models import Repo


@dataclasses.dataclass(frozen=True, slots=True)
class Actor:
    """Identity of the caller.

    Attributes
    ----------
    uid
        Opaque user identifier; empty for anonymous callers.
    login
        Login name. An empty login marks the actor as anonymous.
    github_token
        Optional external authorization token used to query the provider.

    """

    uid: str = ""
    login: str = ""
    github_token: str | None = dataclasses.field(default=None, repr=False)

    @classmethod
    def anonymous(cls) -> Actor:
        """Return an unauthenticated actor."""
        return cls()

    @property
    def is_authenticated(self) -> bool:
        """Return True when the actor has a non-empty login."""
        return bool(self.login)

    @property
    def has_token(self) -> bool:
        """Return True when the actor carries a usable provider token."""
        return bool(self.github_token and self.github_token.strip())


@dataclasses.dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-request parameters threaded through catalogue operations.

    Attributes
    ----------
    actor
        Identity of the caller. Defaults to an anonymous actor.
    insecure_skip
        When True, access control is bypassed entirely. Only trusted internal
        callers may set this.
    timeout_s
        Optional deadline in seconds for the whole operation.

    """

    actor: Actor = dataclasses.field(default_factory=Actor.anonymous)
    insecure_skip: bool = False
    timeout_s: float | None = None

    @classmethod
    def trusted(cls) -> RequestContext:
        """Return a context for internal callers that skips access control."""
        return cls(insecure_skip=True)


@dataclasses.dataclass(frozen=True, slots=True)
class ExternalRepo:
    """Repository as reported by the external authorization provider."""

    uri: str
    private: bool = False
    fork: bool = False
    description: str = ""
    default_branch: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class AccessDecision:
    """Outcome of filtering candidates through the access-control gate.

    Attributes
    ----------
    visible
        Candidates the actor may see, in their original order.
    provider_called
        Whether the external provider was asked for the accessible set.
    provider_error
        Failure raised by the provider, if any. Private candidates are
        excluded when this is set.

    """

    visible: list[Repo]
    provider_called: bool = False
    provider_error: Exception | None = None
