"""Configuration for the GitHub access provider."""

from __future__ import annotations

import dataclasses
import os

from repocat.github.errors import GitHubConfigError

_DEFAULT_ENDPOINT = "https://api.github.com/graphql"
_DEFAULT_HOST = "github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "repocat/0.1"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubProviderConfig:
    """Configuration for :class:`~repocat.github.client.GitHubAccessProvider`.

    Tokens are per actor and travel with each request, so none is configured
    here.

    Attributes
    ----------
    endpoint
        GraphQL endpoint URL.
    host
        Host prefix used when building catalogue URIs (``host/owner/name``).
    timeout_s
        HTTP request timeout in seconds.
    user_agent
        ``User-Agent`` header sent with every request.

    """

    endpoint: str = _DEFAULT_ENDPOINT
    host: str = _DEFAULT_HOST
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw_timeout = os.environ.get("REPOCAT_GITHUB_TIMEOUT_S")
        if raw_timeout is None:
            return _DEFAULT_TIMEOUT_S

        try:
            timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise GitHubConfigError.invalid_timeout(raw_timeout) from exc

        if timeout_s <= 0:
            raise GitHubConfigError.invalid_timeout(raw_timeout)

        return timeout_s

    @classmethod
    def from_env(cls) -> GitHubProviderConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``REPOCAT_GITHUB_ENDPOINT``: Optional endpoint override
        - ``REPOCAT_GITHUB_HOST``: Optional URI host prefix override
        - ``REPOCAT_GITHUB_TIMEOUT_S``: Optional timeout (positive number)

        Raises
        ------
        GitHubConfigError
            If a value is blank or the timeout is not a positive number.

        """
        endpoint = os.environ.get("REPOCAT_GITHUB_ENDPOINT", _DEFAULT_ENDPOINT).strip()
        if not endpoint:
            raise GitHubConfigError.empty_value("REPOCAT_GITHUB_ENDPOINT")

        host = os.environ.get("REPOCAT_GITHUB_HOST", _DEFAULT_HOST).strip()
        if not host:
            raise GitHubConfigError.empty_value("REPOCAT_GITHUB_HOST")

        return cls(
            endpoint=endpoint,
            host=host,
            timeout_s=cls._parse_timeout_from_env(),
        )
