"""Unit-test fixtures for catalogue components."""

from __future__ import annotations

import datetime as dt
import itertools
import typing as typ

import pytest

from repocat.access import Actor, RequestContext
from repocat.store.models import Repo

_CREATED_AT = dt.datetime(2024, 1, 1, tzinfo=dt.UTC)


class MakeRepoFn(typ.Protocol):
    """Callable fixture for building in-memory repositories."""

    def __call__(
        self, uri: str, *, private: bool = False, fork: bool = False
    ) -> Repo:
        """Return a repository with the next sequential ID."""
        ...


@pytest.fixture
def make_repo() -> MakeRepoFn:
    """Return a factory for Repo snapshots with ascending IDs."""
    ids = itertools.count(1)

    def _make(uri: str, *, private: bool = False, fork: bool = False) -> Repo:
        return Repo(
            id=next(ids),
            uri=uri,
            description="",
            fork=fork,
            private=private,
            default_branch="master",
            created_at=_CREATED_AT,
        )

    return _make


@pytest.fixture
def authed_ctx() -> RequestContext:
    """Return a context for an authenticated actor holding a token."""
    return RequestContext(actor=Actor(uid="1", login="octo", github_token="t0k3n"))


@pytest.fixture
def anonymous_ctx() -> RequestContext:
    """Return a context for an anonymous actor."""
    return RequestContext()
