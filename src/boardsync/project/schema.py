"""SchemaResolver - Resolves a project board and its Status field options."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from boardsync.gateway import TransportError
from boardsync.project.exceptions import (
    ProjectNotFoundError,
    StatusFieldNotFoundError,
    StatusOptionNotFoundError,
)
from boardsync.project.models import BoardLocator, Project, StatusField, StatusOption

if TYPE_CHECKING:
    from boardsync.gateway import GitHubGateway

logger = logging.getLogger("boardsync.project.schema")

DEFAULT_STATUS_FIELD = "Status"

_PROJECT_FIELDS = """
    id
    title
    number
    field(name: $field) {
        ... on ProjectV2SingleSelectField {
            id
            name
            options {
                id
                name
            }
        }
    }
"""

_PROJECT_BY_NUMBER_QUERY = (
    """
query($owner: String!, $number: Int!, $field: String!) {
    organization(login: $owner) {
        projectV2(number: $number) {
            %s
        }
    }
}
"""
    % _PROJECT_FIELDS
)

_PROJECTS_PAGE_QUERY = (
    """
query($owner: String!, $cursor: String, $field: String!) {
    organization(login: $owner) {
        projectsV2(first: 100, after: $cursor) {
            nodes {
                %s
            }
            pageInfo {
                hasNextPage
                endCursor
            }
        }
    }
}
"""
    % _PROJECT_FIELDS
)


class SchemaResolver:
    """Read-only lookups of a project board's identity and Status field."""

    def __init__(self, gateway: GitHubGateway, status_field: str = DEFAULT_STATUS_FIELD) -> None:
        """Initialize the resolver.

        Args:
            gateway: Shared GitHub API gateway
            status_field: Name of the single-select field holding the status
        """
        self.gateway = gateway
        self.status_field = status_field

    def resolve_project(self, locator: BoardLocator) -> Project:
        """Resolve a board by number, or by exact title among the org's boards.

        Args:
            locator: Owner plus project number or title

        Returns:
            The Project with its Status field and options

        Raises:
            ProjectNotFoundError: If no project matches the locator
            StatusFieldNotFoundError: If the project has no single-select
                field with the configured name
        """
        logger.info("Resolving project %s", locator.describe())
        if locator.number is not None:
            node = self._fetch_by_number(locator.owner, locator.number)
        elif locator.title:
            node = self._fetch_by_title(locator.owner, locator.title)
        else:
            raise ValueError("Board locator needs a project number or title")

        if not node or not node.get("id"):
            raise ProjectNotFoundError(f"Project {locator.describe()} not found")

        project = Project(
            id=node["id"],
            title=node.get("title") or "",
            number=node.get("number") or 0,
            status_field=self._parse_status_field(node),
        )
        logger.info(
            "Resolved project %r (%s) with %d status option(s)",
            project.title,
            project.id,
            len(project.status_field.options),
        )
        return project

    def resolve_status_option(self, project: Project, label: str) -> tuple[str, str]:
        """Get the Status field ID and the ID of the option with this exact label.

        Args:
            project: Resolved project
            label: Status option label, matched exactly

        Returns:
            Tuple of (field_id, option_id)

        Raises:
            StatusOptionNotFoundError: If no option has exactly this label
        """
        field = project.status_field
        for option in field.options:
            if option.name == label:
                return field.id, option.id

        raise StatusOptionNotFoundError(
            f"Status option {label!r} not found in field {field.name!r}. "
            f"Available: {[option.name for option in field.options]}"
        )

    def _fetch_by_number(self, owner: str, number: int) -> dict[str, Any] | None:
        try:
            data = self.gateway.query(
                _PROJECT_BY_NUMBER_QUERY,
                {"owner": owner, "number": number, "field": self.status_field},
            )
        except TransportError as e:
            if e.not_found:
                raise ProjectNotFoundError(f"Project #{number} not found in org {owner}") from e
            raise

        organization = data.get("organization") or {}
        result: dict[str, Any] | None = organization.get("projectV2")
        return result

    def _fetch_by_title(self, owner: str, title: str) -> dict[str, Any] | None:
        cursor: str | None = None
        while True:
            try:
                data = self.gateway.query(
                    _PROJECTS_PAGE_QUERY,
                    {"owner": owner, "cursor": cursor, "field": self.status_field},
                )
            except TransportError as e:
                if e.not_found:
                    raise ProjectNotFoundError(f"Organization {owner} not found") from e
                raise

            projects = (data.get("organization") or {}).get("projectsV2") or {}
            for node in projects.get("nodes") or []:
                if node and node.get("title") == title:
                    return dict(node)

            page_info = projects.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                return None
            cursor = page_info.get("endCursor")

    def _parse_status_field(self, node: dict[str, Any]) -> StatusField:
        # A non-single-select field matches no fragment and comes back empty
        field = node.get("field") or {}
        if not field.get("id"):
            raise StatusFieldNotFoundError(
                f"Project {node.get('title')!r} has no single-select field "
                f"named {self.status_field!r}"
            )

        raw_options = field.get("options") or []
        options = [StatusOption(name=opt["name"], id=opt["id"]) for opt in raw_options]
        return StatusField(
            id=field["id"],
            name=field.get("name") or self.status_field,
            options=options,
        )
