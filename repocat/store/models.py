"""Data transfer objects for the repository store."""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    import datetime as dt


@dataclasses.dataclass(slots=True, frozen=True)
class Repo:
    """Immutable snapshot of a catalogue repository.

    Callers always receive these copies rather than ORM rows, so no caller
    can mutate shared store state.
    """

    id: int
    uri: str
    description: str
    fork: bool
    private: bool
    default_branch: str
    created_at: dt.datetime
