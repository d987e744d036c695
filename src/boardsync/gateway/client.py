"""GitHubGateway - Shared GitHub REST and GraphQL session."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

import httpx

from boardsync.gateway.deadline import Deadline
from boardsync.gateway.exceptions import DeadlineExceededError, TransportError
from boardsync.logging import sanitize_for_log

logger = logging.getLogger("boardsync.gateway")

# Number of items requested per REST page (GitHub maximum)
PER_PAGE = 100


def _text(body: bytes) -> str:
    return sanitize_for_log(body.decode("utf-8", errors="replace"))


def _decode_json(body: bytes, what: str) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise TransportError(f"{what} returned invalid JSON: {_text(body)[:200]!r}") from e


class GitHubGateway:
    """Thin session over the GitHub REST and GraphQL APIs.

    One instance is shared by every component of a run. It holds no mutable
    state beyond the lazily created HTTP client.
    """

    def __init__(
        self,
        token: str,
        deadline: Deadline | None = None,
        base_url: str = "https://api.github.com",
        graphql_url: str = "https://api.github.com/graphql",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the gateway.

        Args:
            token: GitHub token with repo, read:org and project scopes
            deadline: Run-wide deadline; requests fail once it has passed
            base_url: GitHub REST API base URL (for testing/enterprise)
            graphql_url: GitHub GraphQL endpoint (for testing/enterprise)
            timeout: Per-request timeout in seconds, capped by the deadline
        """
        self.token = token
        self.deadline = deadline
        self.base_url = base_url.rstrip("/")
        self.graphql_url = graphql_url
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(self, method: str, url: str, **kwargs: Any) -> tuple[httpx.Response, bytes]:
        """Send one request and read its body within the remaining deadline.

        The body is streamed and the deadline is checked after every chunk.

        Returns:
            The response (headers and status only) and its full body

        Raises:
            DeadlineExceededError: If the deadline passed before or during the call
            TransportError: On any other network failure
        """
        timeout = self.timeout
        if self.deadline is not None:
            self._check_deadline(f"before {method} {url}")
            timeout = min(timeout, self.deadline.remaining())

        try:
            with self.client.stream(method, url, timeout=timeout, **kwargs) as response:
                body = bytearray()
                for chunk in response.iter_bytes():
                    body.extend(chunk)
                    self._check_deadline(f"during {method} {url}")
        except httpx.TimeoutException as e:
            if self.deadline is not None and self.deadline.expired:
                raise DeadlineExceededError(
                    f"Run deadline of {self.deadline.seconds:g}s exceeded during {method} {url}"
                ) from e
            raise TransportError(f"{method} {url} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {sanitize_for_log(str(e))}") from e

        return response, bytes(body)

    def _check_deadline(self, when: str) -> None:
        if self.deadline is not None and self.deadline.expired:
            raise DeadlineExceededError(
                f"Run deadline of {self.deadline.seconds:g}s exceeded {when}"
            )

    def _graphql(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL document.

        Args:
            document: GraphQL query or mutation string
            variables: Document variables

        Returns:
            Response data

        Raises:
            TransportError: If the request fails or GraphQL reports errors
        """
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables

        response, body = self._request("POST", self.graphql_url, json=payload)

        if response.status_code != 200:
            raise TransportError(f"GraphQL request failed: {response.status_code} - {_text(body)}")

        data = _decode_json(body, "GraphQL request")
        if not isinstance(data, dict):
            raise TransportError(f"GraphQL request returned {type(data).__name__}, not an object")
        if data.get("errors"):
            raise TransportError(f"GraphQL errors: {data['errors']}", errors=data["errors"])

        return dict(data.get("data") or {})

    def query(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a read-only GraphQL query."""
        return self._graphql(document, variables)

    def mutate(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL mutation."""
        logger.debug("GraphQL mutation with variables %s", variables)
        return self._graphql(document, variables)

    def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        items_key: str | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Lazily iterate every item of a paginated REST listing.

        Follows the ``Link: rel="next"`` header until the last page.

        Args:
            path: API path, e.g. "/orgs/kubernetes/repos"
            params: Query parameters for the first page
            items_key: Key holding the item list when the page body is an
                object (search endpoints use "items")

        Yields:
            Each item of each page, in order

        Raises:
            TransportError: If any page cannot be fetched
        """
        url: str | None = path
        page_params: dict[str, Any] | None = {"per_page": PER_PAGE, **(params or {})}

        while url:
            response, body = self._request("GET", url, params=page_params)
            if response.status_code != 200:
                raise TransportError(f"GET {url} failed: {response.status_code} - {_text(body)}")

            data = _decode_json(body, f"GET {url}")
            items = data[items_key] if items_key else data
            yield from items

            next_link = response.links.get("next")
            url = next_link["url"] if next_link else None
            # The next URL already carries the query string
            page_params = None
