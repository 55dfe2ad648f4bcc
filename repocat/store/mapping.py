"""Mapping helpers for store DTOs."""

from __future__ import annotations

import typing as typ

from repocat.store.models import Repo

if typ.TYPE_CHECKING:
    from repocat.store.storage import RepoRecord


def to_repo(record: RepoRecord) -> Repo:
    """Convert a catalogue row to a Repo DTO.

    Parameters
    ----------
    record
        Repository row from the catalogue database.

    Returns
    -------
    Repo
        Detached repository snapshot suitable for callers.

    """
    return Repo(
        id=record.id,
        uri=record.uri,
        description=record.description,
        fork=record.fork,
        private=record.private,
        default_branch=record.default_branch,
        created_at=record.created_at,
    )
