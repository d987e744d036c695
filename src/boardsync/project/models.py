"""Data models for project board operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TriageBucket(str, Enum):
    """Initial status label assigned to newly added items."""

    NEEDS_TRIAGE = "Needs Triage"
    SUBPROJECT_NEEDS_TRIAGE = "Subprojects - Needs Triage"


class ReconcileOutcome(str, Enum):
    """Which branch reconciliation of an item took."""

    WRITTEN = "written"
    ALREADY_SET = "already-set"


@dataclass(frozen=True)
class BoardLocator:
    """Identifies a project board within an organization.

    Exactly one of number or title is used; number wins when both are set.
    """

    owner: str
    number: int | None = None
    title: str | None = None

    def describe(self) -> str:
        if self.number is not None:
            return f"#{self.number} in org {self.owner}"
        return f"{self.title!r} in org {self.owner}"


@dataclass(frozen=True)
class StatusOption:
    """A single-select option of the Status field."""

    name: str
    id: str


@dataclass
class StatusField:
    """The single-select Status field of a project."""

    id: str
    name: str
    options: list[StatusOption] = field(default_factory=list)


@dataclass
class Project:
    """A GitHub Projects (v2) board."""

    id: str
    title: str
    number: int
    status_field: StatusField


@dataclass(frozen=True)
class ContentReference:
    """An issue or pull request that can be attached to a board.

    Attributes:
        content_id: GraphQL node id of the issue or pull request.
        number: Issue/PR number within its repository.
        title: Issue/PR title.
        repository: Repository in "owner/name" format.
        is_pull_request: Whether the content is a pull request.
    """

    content_id: str
    number: int
    title: str
    repository: str = ""
    is_pull_request: bool = False


@dataclass
class BoardItem:
    """An item of a project board; status is None until set."""

    id: str
    status: str | None = None


@dataclass
class ReconcileResult:
    """Result of reconciling one content object with the board."""

    item_id: str
    outcome: ReconcileOutcome
