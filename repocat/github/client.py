"""GitHub GraphQL implementation of the access provider."""

from __future__ import annotations

import typing as typ

import httpx
import msgspec

from repocat.access.errors import RepoUnauthorizedError
from repocat.access.models import ExternalRepo
from repocat.common.uri import parse_hosted_uri, repo_uri

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError

if typ.TYPE_CHECKING:
    from repocat.access.models import Actor

    from .config import GitHubProviderConfig


T = typ.TypeVar("T")


_VIEWER_REPOSITORIES_QUERY = """
query($after: String) {
  viewer {
    repositories(
      first: 100
      after: $after
      affiliations: [OWNER, COLLABORATOR, ORGANIZATION_MEMBER]
      orderBy: {field: NAME, direction: ASC}
    ) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        nameWithOwner
        isPrivate
        isFork
        description
        defaultBranchRef { name }
      }
    }
  }
}
"""

_REPOSITORY_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    nameWithOwner
    isPrivate
    isFork
    description
    defaultBranchRef { name }
  }
}
"""

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DENIED_STATUS_CODES = frozenset({401, 403, 404})


class _BranchRef(msgspec.Struct, kw_only=True):
    name: str


class _RepositoryNode(msgspec.Struct, kw_only=True, rename="camel"):
    name_with_owner: str
    is_private: bool = False
    is_fork: bool = False
    description: str | None = None
    default_branch_ref: _BranchRef | None = None


class _PageInfo(msgspec.Struct, kw_only=True, rename="camel"):
    has_next_page: bool
    end_cursor: str | None = None


class _RepositoryConnection(msgspec.Struct, kw_only=True, rename="camel"):
    page_info: _PageInfo
    nodes: list[_RepositoryNode | None]


def _parse_graphql_payload(payload_raw: object) -> dict[str, typ.Any]:
    """Parse and validate a GraphQL response payload, extracting data field."""
    if not isinstance(payload_raw, dict):
        raise GitHubResponseShapeError.missing("response")

    payload = typ.cast("dict[str, typ.Any]", payload_raw)
    errors = payload.get("errors")
    if errors:
        raise GitHubAPIError.graphql_errors(errors)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise GitHubResponseShapeError.missing("data")

    return typ.cast("dict[str, typ.Any]", data)


def _convert(node: object, target: type[T], *, field: str) -> T:
    try:
        return msgspec.convert(node, type=target)
    except msgspec.ValidationError as exc:
        raise GitHubResponseShapeError.missing(field) from exc


class GitHubAccessProvider:
    """Answer access questions for an actor using their own GitHub token.

    The accessible set is every repository returned by
    ``viewer.repositories`` across all pages. Single-repository checks use
    ``repository(owner, name)``; GitHub reports repositories the viewer may
    not see as missing, so both denial and absence raise
    :class:`~repocat.access.errors.RepoUnauthorizedError`.

    Parameters
    ----------
    config
        Endpoint, host and timeout settings.
    http_client
        Optional pre-configured client, mainly for tests. When omitted the
        provider owns its client and :meth:`aclose` closes it.

    """

    def __init__(
        self,
        config: GitHubProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the provider with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def list_accessible_repos(self, actor: Actor) -> list[ExternalRepo]:
        """Return every repository visible to ``actor`` on GitHub."""
        repos: list[ExternalRepo] = []
        after: str | None = None
        while True:
            data = await self._graphql(
                actor, _VIEWER_REPOSITORIES_QUERY, {"after": after}
            )
            viewer = data.get("viewer")
            if not isinstance(viewer, dict):
                raise GitHubResponseShapeError.missing("viewer")
            connection = _convert(
                typ.cast("dict[str, typ.Any]", viewer).get("repositories"),
                _RepositoryConnection,
                field="viewer.repositories",
            )
            repos.extend(
                self._to_external(node) for node in connection.nodes if node is not None
            )
            if not connection.page_info.has_next_page:
                return repos
            after = connection.page_info.end_cursor
            if after is None:
                raise GitHubResponseShapeError.missing(
                    "viewer.repositories.pageInfo.endCursor"
                )

    async def get_repo(self, actor: Actor, uri: str) -> ExternalRepo:
        """Return ``uri`` if GitHub confirms ``actor`` may view it.

        Raises
        ------
        RepoUnauthorizedError
            If the URI is not hosted on the configured host, or GitHub denies
            access or reports the repository as missing.
        GitHubAPIError
            For any other HTTP or GraphQL failure.

        """
        try:
            owner, name = parse_hosted_uri(uri, self._config.host)
        except ValueError as exc:
            raise RepoUnauthorizedError.not_recognized(uri) from exc

        try:
            data = await self._graphql(
                actor, _REPOSITORY_QUERY, {"owner": owner, "name": name}
            )
        except GitHubAPIError as exc:
            if exc.status_code in _DENIED_STATUS_CODES or exc.is_not_found:
                raise RepoUnauthorizedError.not_recognized(uri) from exc
            raise

        node = data.get("repository")
        if node is None:
            raise RepoUnauthorizedError.not_recognized(uri)
        return self._to_external(_convert(node, _RepositoryNode, field="repository"))

    def _to_external(self, node: _RepositoryNode) -> ExternalRepo:
        owner, _, name = node.name_with_owner.partition("/")
        branch = node.default_branch_ref
        return ExternalRepo(
            uri=repo_uri(self._config.host, owner, name),
            private=node.is_private,
            fork=node.is_fork,
            description=node.description or "",
            default_branch=branch.name if branch is not None else None,
        )

    async def _graphql(
        self, actor: Actor, query: str, variables: dict[str, typ.Any]
    ) -> dict[str, typ.Any]:
        """Execute a GraphQL query as ``actor`` and return the data field."""
        if not actor.has_token:
            raise GitHubConfigError.missing_token()

        response = await self._client.post(
            self._config.endpoint,
            json={"query": query, "variables": variables},
            headers={"Authorization": f"Bearer {actor.github_token}"},
        )
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code)
        return _parse_graphql_payload(response.json())
