"""Repository URI utilities.

Repository URIs are hierarchical identifiers such as ``github.com/owner/name``
or ``owner/name``. They are not filesystem paths, even though they use ``/``
as a separator, so they should be handled with these helpers rather than
``pathlib``.
"""

from __future__ import annotations

URI_SEPARATOR = "/"


def repo_uri(host: str, owner: str, name: str) -> str:
    """Build a hosted repository URI from its host, owner and name.

    Examples
    --------
    >>> repo_uri("github.com", "octo", "reef")
    'github.com/octo/reef'

    """
    return URI_SEPARATOR.join((host, owner, name))


def validate_uri(uri: str) -> str:
    """Return ``uri`` unchanged after checking it has no empty segments.

    Raises
    ------
    ValueError
        If the URI is blank or contains empty path segments.

    Examples
    --------
    >>> validate_uri("octo/reef")
    'octo/reef'

    """
    if not uri or not uri.strip():
        msg = "Invalid repository URI: must be non-empty"
        raise ValueError(msg)

    if any(not segment for segment in uri.split(URI_SEPARATOR)):
        msg = f"Invalid repository URI: empty path segment in {uri!r}"
        raise ValueError(msg)

    return uri


def parse_hosted_uri(uri: str, host: str) -> tuple[str, str]:
    """Parse a ``host/owner/name`` URI into owner and name.

    Parameters
    ----------
    uri:
        Repository URI to parse.
    host:
        Expected host prefix, compared case-insensitively.

    Returns
    -------
    tuple[str, str]
        ``(owner, name)``.

    Raises
    ------
    ValueError
        If the URI does not belong to ``host`` or has the wrong shape.

    Examples
    --------
    >>> parse_hosted_uri("github.com/octo/reef", "github.com")
    ('octo', 'reef')

    """
    parts = uri.split(URI_SEPARATOR)
    if len(parts) != 3 or parts[0].lower() != host.lower():  # noqa: PLR2004
        msg = f"Invalid repository URI: expected '{host}/owner/name', got {uri!r}"
        raise ValueError(msg)

    _, owner, name = parts
    if not owner or not name:
        msg = f"Invalid repository URI: expected '{host}/owner/name', got {uri!r}"
        raise ValueError(msg)

    return owner, name
