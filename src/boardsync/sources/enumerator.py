"""SourceEnumerator - Lists repositories and their issues and pull requests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from boardsync.project import ContentReference
from boardsync.sources.models import Source, SourceKind

if TYPE_CHECKING:
    from boardsync.gateway import GitHubGateway

logger = logging.getLogger("boardsync.sources")


class SourceEnumerator:
    """Lazily enumerates the issues and pull requests of a source.

    Every sequence is fetched page by page through the gateway and is
    finite; iterating again re-queries GitHub.
    """

    def __init__(self, gateway: GitHubGateway) -> None:
        self.gateway = gateway

    def repositories(self, source: Source) -> Iterator[str]:
        """Yield the full names ("owner/name") of the source's repositories."""
        if source.kind is SourceKind.TOPIC:
            if not source.topic:
                raise ValueError(f"Topic source for {source.org} has no topic")
            # Same as https://github.com/search?q=topic:<topic>+org:<org>&type=Repositories
            repos = self.gateway.paginate(
                "/search/repositories",
                {"q": f"topic:{source.topic} org:{source.org}"},
                items_key="items",
            )
        else:
            repos = self.gateway.paginate(f"/orgs/{source.org}/repos")

        for repo in repos:
            yield repo.get("full_name") or f"{source.org}/{repo['name']}"

    def items(self, source: Source, repository: str) -> Iterator[ContentReference]:
        """Yield the open issues and pull requests of a repository.

        The issues endpoint returns pull requests too; they carry a
        "pull_request" key.
        """
        params: dict[str, Any] = {}
        if source.label:
            params["labels"] = source.label

        for issue in self.gateway.paginate(f"/repos/{repository}/issues", params):
            yield ContentReference(
                content_id=issue.get("node_id") or "",
                number=issue["number"],
                title=issue.get("title") or "",
                repository=repository,
                is_pull_request="pull_request" in issue,
            )

    def discover(self, source: Source) -> Iterator[tuple[str, ContentReference]]:
        """Yield (repository, content) pairs for every item of the source."""
        for repository in self.repositories(source):
            for content in self.items(source, repository):
                yield repository, content
