"""Factories for building a RepoCatalogueService from configuration.

Usage
-----
Build a service backed by the configured database and GitHub::

    from repocat.factory import bootstrap_catalogue_service

    service = await bootstrap_catalogue_service()
    try:
        ...
    finally:
        await service.aclose()

Or wire an existing session factory::

    service = build_catalogue_service(session_factory, config=config)

"""

from __future__ import annotations

import typing as typ

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from repocat.catalogue import RepoCatalogueService
from repocat.config import CatalogueConfig
from repocat.github import GitHubAccessProvider, GitHubProviderConfig
from repocat.logging import configure_logging, get_logger, log_info, log_warning
from repocat.observability import CatalogueEventLogger
from repocat.store import init_repo_storage

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

    from repocat.access.provider import AccessProvider

__all__ = [
    "bootstrap_catalogue_service",
    "build_catalogue_service",
    "open_catalogue_engine",
]

logger = get_logger(__name__)


async def open_catalogue_engine(database_url: str) -> AsyncEngine:
    """Create an engine for ``database_url`` and ensure the schema exists."""
    engine = create_async_engine(database_url)
    await init_repo_storage(engine)
    return engine


def build_catalogue_service(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    config: CatalogueConfig | None = None,
    provider: AccessProvider | None = None,
    engine: AsyncEngine | None = None,
) -> RepoCatalogueService:
    """Build a ``RepoCatalogueService`` from configuration.

    Parameters
    ----------
    session_factory
        Async session factory for database access.
    config
        Catalogue configuration. Read from the environment when omitted.
    provider
        Authorization provider. A :class:`GitHubAccessProvider` configured
        from the environment is used when omitted.
    engine
        Engine behind ``session_factory``. When given, the service disposes
        it on :meth:`~repocat.catalogue.RepoCatalogueService.aclose`.

    Returns
    -------
    RepoCatalogueService
        Configured service ready for catalogue operations.

    """
    config = config or CatalogueConfig.from_env()
    if provider is None:
        provider = GitHubAccessProvider(GitHubProviderConfig.from_env())

    return RepoCatalogueService(
        session_factory,
        provider=provider,
        default_branch=config.default_branch,
        request_timeout_s=config.request_timeout_s,
        event_logger=CatalogueEventLogger(),
        engine=engine,
    )


async def bootstrap_catalogue_service(
    config: CatalogueConfig | None = None,
    *,
    provider: AccessProvider | None = None,
) -> RepoCatalogueService:
    """Configure logging, open the database and build the service.

    The returned service owns the engine; call
    :meth:`~repocat.catalogue.RepoCatalogueService.aclose` when done.
    """
    config = config or CatalogueConfig.from_env()
    normalized_level, invalid_level = configure_logging(config.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid REPOCAT_LOG_LEVEL %r, falling back to %s",
            config.log_level,
            normalized_level,
        )

    engine = await open_catalogue_engine(config.database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    log_info(
        logger,
        "Catalogue storage ready at %s",
        make_url(config.database_url).render_as_string(hide_password=True),
    )
    return build_catalogue_service(
        session_factory, config=config, provider=provider, engine=engine
    )
