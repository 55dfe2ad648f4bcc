"""Durable CRUD primitives over catalogue repository rows.

The store is the only component that talks to the database. It never hands
out ORM rows: every read returns detached :class:`~repocat.store.models.Repo`
snapshots.
"""

from __future__ import annotations

import typing as typ

from sqlalchemy import func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from repocat.common.time import utcnow
from repocat.common.uri import validate_uri
from repocat.store.errors import RepoNotFoundError, RepoPersistError
from repocat.store.mapping import to_repo
from repocat.store.storage import RepoRecord

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from repocat.store.models import Repo

SessionFactory: typ.TypeAlias = "async_sessionmaker[AsyncSession]"

# Core table; inserts bypass the ORM unit of work so rowcount is reliable.
_REPOS = RepoRecord.__table__

# Dialects whose INSERT supports ON CONFLICT DO NOTHING.
_CONFLICT_IGNORE_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RepoStore:
    """Keyed repository storage with insert-if-absent semantics.

    Parameters
    ----------
    session_factory:
        Async session factory bound to the catalogue database.

    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Store the session factory used for every unit of work."""
        self._session_factory = session_factory

    async def try_insert_new(
        self,
        uri: str,
        description: str = "",
        *,
        fork: bool = False,
        private: bool = False,
        default_branch: str = "master",
    ) -> bool:
        """Create a repository row unless one already exists for ``uri``.

        Uniqueness is enforced by the ``uq_repos_uri`` constraint, so racing
        callers cannot create duplicates and none of them observes an error.
        An existing row is never modified; its ID and ``created_at`` survive.

        Parameters
        ----------
        uri:
            Unique repository URI.
        description:
            Free-form repository description.
        fork:
            Whether the repository is a fork.
        private:
            Whether the repository is private.
        default_branch:
            Default branch recorded at creation.

        Returns
        -------
        bool
            True when a new row was written, False when ``uri`` was present.

        Raises
        ------
        ValueError
            If ``uri`` is blank or malformed.
        RepoPersistError
            If the database reports a conflict but no row can be found.

        """
        validate_uri(uri)
        values = {
            "uri": uri,
            "uri_folded": uri.lower(),
            "description": description,
            "fork": fork,
            "private": private,
            "default_branch": default_branch,
            "created_at": utcnow(),
        }

        async with self._session_factory() as session:
            dialect = session.get_bind().dialect.name
            conflict_insert = _CONFLICT_IGNORE_INSERTS.get(dialect)
            if conflict_insert is not None:
                stmt = (
                    conflict_insert(_REPOS)
                    .values(**values)
                    .on_conflict_do_nothing(index_elements=["uri"])
                )
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount == 1

            return await self._insert_or_confirm(session, values)

    @staticmethod
    async def _insert_or_confirm(
        session: AsyncSession, values: dict[str, typ.Any]
    ) -> bool:
        """Insert a row, treating a unique violation as an existing row."""
        try:
            await session.execute(insert(_REPOS).values(**values))
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            existing = await session.scalar(
                select(RepoRecord.id).where(RepoRecord.uri == values["uri"])
            )
            if existing is None:
                raise RepoPersistError(values["uri"]) from exc
            return False
        return True

    async def get_by_uri(self, uri: str) -> Repo:
        """Return the repository stored under ``uri``.

        Raises
        ------
        RepoNotFoundError
            If no repository has this URI.

        """
        async with self._session_factory() as session:
            record = await session.scalar(
                select(RepoRecord).where(RepoRecord.uri == uri)
            )
            if record is None:
                raise RepoNotFoundError(uri)
            return to_repo(record)

    async def get_by_id(self, repo_id: int) -> Repo:
        """Return the repository with primary key ``repo_id``.

        Raises
        ------
        RepoNotFoundError
            If no repository has this ID.

        """
        async with self._session_factory() as session:
            record = await session.get(RepoRecord, repo_id)
            if record is None:
                raise RepoNotFoundError(repo_id)
            return to_repo(record)

    async def scan_all(self, contains: str | None = None) -> list[Repo]:
        """Return listing candidates in ascending ID (creation) order.

        Parameters
        ----------
        contains:
            Optional case-insensitive URI substring used to narrow the scan.
            This is only a prefilter; callers must still rank and match.

        Returns
        -------
        list[Repo]
            Candidate repositories.

        """
        query = select(RepoRecord).order_by(RepoRecord.id)
        if contains:
            query = query.where(
                RepoRecord.uri_folded.contains(contains.lower(), autoescape=True)
            )

        async with self._session_factory() as session:
            records = await session.scalars(query)
            return [to_repo(record) for record in records]

    async def count(self) -> int:
        """Return the number of stored repositories."""
        async with self._session_factory() as session:
            total = await session.scalar(select(func.count()).select_from(RepoRecord))
            return int(total or 0)
