"""Access control for catalogue reads.

The gate combines the locally stored ``private`` flag with the accessible-repo
set reported by an external provider.

Usage
-----
Filter ranked candidates for an actor::

    from repocat.access import AccessControlGate, Actor, RequestContext

    gate = AccessControlGate(provider)
    ctx = RequestContext(actor=Actor(uid="1", login="octo", github_token=token))
    decision = await gate.filter_visible(ctx, candidates)
    print(decision.visible, decision.provider_called)

"""

from __future__ import annotations

from .errors import AccessError, RepoUnauthorizedError
from .gate import AccessControlGate, is_visible, may_consult_provider
from .models import AccessDecision, Actor, ExternalRepo, RequestContext
from .provider import AccessProvider
from .static import StaticAccessProvider

__all__ = [
    "AccessControlGate",
    "AccessDecision",
    "AccessError",
    "AccessProvider",
    "Actor",
    "ExternalRepo",
    "RepoUnauthorizedError",
    "RequestContext",
    "StaticAccessProvider",
    "is_visible",
    "may_consult_provider",
]
