"""ItemReconciler - Adds content to a board and sets its initial status."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from boardsync.gateway import DeadlineExceededError, GatewayError
from boardsync.project.exceptions import AddFailedError, UpdateFailedError
from boardsync.project.models import (
    BoardItem,
    ContentReference,
    Project,
    ReconcileOutcome,
    ReconcileResult,
)
from boardsync.project.schema import DEFAULT_STATUS_FIELD

if TYPE_CHECKING:
    from boardsync.gateway import GitHubGateway

logger = logging.getLogger("boardsync.project.reconciler")

_ADD_ITEM_MUTATION = """
mutation($projectId: ID!, $contentId: ID!, $field: String!) {
    addProjectV2ItemById(input: { projectId: $projectId, contentId: $contentId }) {
        item {
            id
            fieldValueByName(name: $field) {
                ... on ProjectV2ItemFieldSingleSelectValue {
                    name
                }
            }
        }
    }
}
"""

_UPDATE_STATUS_MUTATION = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
    updateProjectV2ItemFieldValue(
        input: {
            projectId: $projectId
            itemId: $itemId
            fieldId: $fieldId
            value: { singleSelectOptionId: $optionId }
        }
    ) {
        projectV2Item {
            id
        }
    }
}
"""


class ItemReconciler:
    """Puts one issue or pull request on the board with an initial status.

    Adding is idempotent at the API: an item already on the board is
    returned as is. The status is only written when the item has none, so a
    status set by a person or an earlier run is never overwritten. Nothing
    guards against the board changing between the add and the write.
    """

    def __init__(self, gateway: GitHubGateway, status_field: str = DEFAULT_STATUS_FIELD) -> None:
        """Initialize the reconciler.

        Args:
            gateway: Shared GitHub API gateway
            status_field: Name of the single-select field holding the status
        """
        self.gateway = gateway
        self.status_field = status_field

    def reconcile(
        self,
        project: Project,
        content: ContentReference,
        field_id: str,
        option_id: str,
    ) -> ReconcileResult:
        """Add content to the project and set its status if unset.

        Args:
            project: Target project
            content: Issue or pull request to add
            field_id: ID of the Status field
            option_id: ID of the status option to set on new items

        Returns:
            ReconcileResult with the board item ID and the branch taken

        Raises:
            AddFailedError: If the item could not be added
            UpdateFailedError: If the status could not be written
            DeadlineExceededError: If the run deadline passed
        """
        if not content.content_id:
            raise ValueError(f"[{content.number}] {content.title!r} has no content ID")

        item = self.add_item(project, content)

        if item.status:
            logger.info("status field already set for [%d] %r", content.number, content.title)
            return ReconcileResult(item_id=item.id, outcome=ReconcileOutcome.ALREADY_SET)

        logger.info("updating status field for [%d] %r", content.number, content.title)
        self.update_status(project, item, content, field_id, option_id)
        return ReconcileResult(item_id=item.id, outcome=ReconcileOutcome.WRITTEN)

    def add_item(self, project: Project, content: ContentReference) -> BoardItem:
        """Add content to the project, returning the new or existing item.

        Raises:
            AddFailedError: If the mutation fails or returns no item
        """
        try:
            data = self.gateway.mutate(
                _ADD_ITEM_MUTATION,
                {
                    "projectId": project.id,
                    "contentId": content.content_id,
                    "field": self.status_field,
                },
            )
        except DeadlineExceededError:
            raise
        except GatewayError as e:
            raise AddFailedError(
                f"Failed to add [{content.number}] {content.title!r} "
                f"from {content.repository or 'unknown repo'} to project: {e}"
            ) from e

        item = (data.get("addProjectV2ItemById") or {}).get("item")
        if not item or not item.get("id"):
            raise AddFailedError(
                f"Adding [{content.number}] {content.title!r} to project returned no item"
            )

        status_value = item.get("fieldValueByName") or {}
        return BoardItem(id=item["id"], status=status_value.get("name") or None)

    def update_status(
        self,
        project: Project,
        item: BoardItem,
        content: ContentReference,
        field_id: str,
        option_id: str,
    ) -> None:
        """Set the Status field of a board item.

        Raises:
            UpdateFailedError: If the mutation fails
        """
        try:
            self.gateway.mutate(
                _UPDATE_STATUS_MUTATION,
                {
                    "projectId": project.id,
                    "itemId": item.id,
                    "fieldId": field_id,
                    "optionId": option_id,
                },
            )
        except DeadlineExceededError:
            raise
        except GatewayError as e:
            raise UpdateFailedError(
                f"Failed to set status of [{content.number}] {content.title!r} "
                f"(item {item.id}): {e}"
            ) from e
