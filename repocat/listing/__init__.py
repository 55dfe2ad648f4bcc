"""Catalogue listing: options, pagination and the listing pipeline."""

from __future__ import annotations

from .errors import InvalidPaginationError
from .options import RepoListOp, paginate, validate_pagination
from .pipeline import RepoListPipeline

__all__ = [
    "InvalidPaginationError",
    "RepoListOp",
    "RepoListPipeline",
    "paginate",
    "validate_pagination",
]
