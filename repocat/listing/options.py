"""Listing options and page windowing.

Example:
-------
Fetch the second page of ten results matching ``octo``::

    op = RepoListOp(query="octo", page=2, per_page=10)
    repos = await service.list(ctx, op)

"""

from __future__ import annotations

import dataclasses
import typing as typ

from repocat.listing.errors import InvalidPaginationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


T = typ.TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class RepoListOp:
    """Repository listing options.

    Attributes
    ----------
    query
        Type: ``str``. Default: ``""``.

        Free-text query matched against repository URIs. Blank means every
        repository passes.
    page
        Type: ``int | None``. Default: ``None``.

        1-indexed page number. ``None`` means the first page.
    per_page
        Type: ``int | None``. Default: ``None``.

        Page size. ``None`` disables windowing and returns every result.

    """

    query: str = ""
    page: int | None = None
    per_page: int | None = None


def validate_pagination(op: RepoListOp) -> None:
    """Validate pagination parameters.

    Raises
    ------
    InvalidPaginationError
        If page or per_page is less than one.

    """
    if op.page is not None and op.page < 1:
        raise InvalidPaginationError("page", op.page)

    if op.per_page is not None and op.per_page < 1:
        raise InvalidPaginationError("per_page", op.per_page)


def paginate(items: cabc.Sequence[T], op: RepoListOp) -> list[T]:
    """Return the ``op.page`` window of ``items``.

    A page past the end yields an empty list.

    Examples
    --------
    >>> paginate(["r1", "r2", "r3"], RepoListOp(page=2, per_page=2))
    ['r3']
    >>> paginate(["r1", "r2", "r3"], RepoListOp(page=3, per_page=2))
    []

    """
    validate_pagination(op)
    if op.per_page is None:
        return list(items)

    page = op.page if op.page is not None else 1
    start = (page - 1) * op.per_page
    return list(items[start : start + op.per_page])
