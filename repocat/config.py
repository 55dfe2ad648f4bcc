"""Configuration for the catalogue service.

Usage
-----
Create a configuration with defaults:

>>> config = CatalogueConfig()
>>> config.default_branch
'master'

Or load from environment variables such as ``REPOCAT_REQUEST_TIMEOUT_S=2.5``::

    config = CatalogueConfig.from_env()

"""

from __future__ import annotations

import dataclasses as dc
import os

_DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///repocat.db"
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_BRANCH = "master"


@dc.dataclass(frozen=True, slots=True)
class CatalogueConfig:
    """Configuration for :class:`~repocat.catalogue.RepoCatalogueService`.

    Attributes
    ----------
    database_url
        SQLAlchemy async database URL.
    log_level
        femtologging level name applied by :func:`repocat.logging.configure_logging`.
    request_timeout_s
        Deadline applied to operations whose request context sets none.
        ``None`` means no deadline.
    default_branch
        Branch recorded on new repositories when the caller gives none.

    """

    database_url: str = _DEFAULT_DATABASE_URL
    log_level: str = _DEFAULT_LOG_LEVEL
    request_timeout_s: float | None = None
    default_branch: str = _DEFAULT_BRANCH

    @staticmethod
    def _parse_timeout(env_var: str) -> float | None:
        """Read an optional positive float env var."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return None
        try:
            value = float(raw)
        except ValueError as exc:
            msg = f"{env_var} must be a number, got: {raw!r}"
            raise ValueError(msg) from exc
        if value <= 0:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls) -> CatalogueConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``REPOCAT_DATABASE_URL``: SQLAlchemy async database URL.
        - ``REPOCAT_LOG_LEVEL``: Log level name.
        - ``REPOCAT_REQUEST_TIMEOUT_S``: Optional positive deadline in seconds.
        - ``REPOCAT_DEFAULT_BRANCH``: Branch recorded on new repositories.

        Raises
        ------
        ValueError
            If the timeout is not a positive number or the default branch is
            blank.

        """
        default_branch = os.environ.get("REPOCAT_DEFAULT_BRANCH", _DEFAULT_BRANCH)
        if not default_branch.strip():
            msg = "REPOCAT_DEFAULT_BRANCH must be non-empty"
            raise ValueError(msg)

        return cls(
            database_url=os.environ.get("REPOCAT_DATABASE_URL", _DEFAULT_DATABASE_URL),
            log_level=os.environ.get("REPOCAT_LOG_LEVEL", _DEFAULT_LOG_LEVEL),
            request_timeout_s=cls._parse_timeout("REPOCAT_REQUEST_TIMEOUT_S"),
            default_branch=default_branch.strip(),
        )
