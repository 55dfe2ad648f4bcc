"""Repository store: durable records keyed by unique URI."""

from __future__ import annotations

from .errors import RepoNotFoundError, RepoPersistError, RepoStoreError
from .models import Repo
from .service import RepoStore
from .storage import Base, RepoRecord, init_repo_storage

__all__ = [
    "Base",
    "Repo",
    "RepoNotFoundError",
    "RepoPersistError",
    "RepoRecord",
    "RepoStore",
    "RepoStoreError",
    "init_repo_storage",
]
