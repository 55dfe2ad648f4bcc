"""Query matching and prefix-weighted ranking of repository URIs."""

from __future__ import annotations

from .ranking import (
    MatchTier,
    match_tier,
    normalize_query,
    prefilter_substring,
    rank,
    rank_repos,
    rank_uris,
)

__all__ = [
    "MatchTier",
    "match_tier",
    "normalize_query",
    "prefilter_substring",
    "rank",
    "rank_repos",
    "rank_uris",
]
