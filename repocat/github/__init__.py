"""GitHub-backed access provider."""

from __future__ import annotations

from .client import GitHubAccessProvider
from .config import GitHubProviderConfig
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError

__all__ = [
    "GitHubAPIError",
    "GitHubAccessProvider",
    "GitHubConfigError",
    "GitHubProviderConfig",
    "GitHubResponseShapeError",
]
