"""Query matching and ranking over hierarchical repository URIs.

Queries are compared case-insensitively. Whitespace-separated tokens are
joined with ``/`` so that ``"jkl mno pqr"`` matches ``jkl/mno/pqr``. A
candidate matches when its URI contains the normalized query; matches are
then ranked in two tiers:

- ``PREFIX``: the query aligns with the start of the URI.
- ``INTERIOR``: the query matches further along the path.

Within a tier candidates keep their scan order. Repository flags such as
fork or private status never influence rank.

Example:
-------
>>> rank_uris("def", ["a/def", "def/ghi", "b/xyz"])
['def/ghi', 'a/def']

"""

from __future__ import annotations

import enum
import operator
import re
import typing as typ

from repocat.common.uri import URI_SEPARATOR

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from repocat.store.models import Repo


T = typ.TypeVar("T")

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


class MatchTier(enum.IntEnum):
    """Ranking buckets; lower values rank first."""

    PREFIX = 0
    INTERIOR = 1


def normalize_query(query: str) -> str:
    """Lower-case ``query`` and join its whitespace tokens with ``/``.

    Examples
    --------
    >>> normalize_query("  JKL mno  PQR ")
    'jkl/mno/pqr'
    >>> normalize_query("def/")
    'def/'

    """
    joined = URI_SEPARATOR.join(query.lower().split())
    return _REPEATED_SEPARATORS.sub(URI_SEPARATOR, joined)


def match_tier(normalized_query: str, uri: str) -> MatchTier | None:
    """Return the tier ``uri`` falls into, or None when it does not match.

    Parameters
    ----------
    normalized_query:
        Query already passed through :func:`normalize_query`.
    uri:
        Candidate repository URI.

    """
    position = uri.lower().find(normalized_query)
    if position < 0:
        return None
    return MatchTier.PREFIX if position == 0 else MatchTier.INTERIOR


def rank(
    query: str,
    candidates: cabc.Sequence[T],
    *,
    key: cabc.Callable[[T], str],
) -> list[T]:
    """Return the matching candidates ordered by ``(tier, scan index)``.

    Parameters
    ----------
    query:
        Raw user query. A blank query passes every candidate through in
        scan order.
    candidates:
        Candidates in scan order.
    key:
        Callable returning the URI of a candidate.

    Returns
    -------
    list[T]
        Matching candidates, prefix matches first.

    """
    normalized = normalize_query(query)
    if not normalized:
        return list(candidates)

    scored: list[tuple[MatchTier, int, T]] = []
    for index, candidate in enumerate(candidates):
        tier = match_tier(normalized, key(candidate))
        if tier is not None:
            scored.append((tier, index, candidate))

    scored.sort(key=operator.itemgetter(0, 1))
    return [candidate for _, _, candidate in scored]


def rank_uris(query: str, uris: cabc.Sequence[str]) -> list[str]:
    """Rank plain URI strings against ``query``."""
    return rank(query, uris, key=str)


def rank_repos(query: str, repos: cabc.Sequence[Repo]) -> list[Repo]:
    """Rank repositories against ``query`` by their URI."""
    return rank(query, repos, key=operator.attrgetter("uri"))


def prefilter_substring(query: str) -> str | None:
    """Return a substring every match must contain, for storage prefilters."""
    return normalize_query(query) or None
