"""Project board - schema resolution and item reconciliation for GitHub Projects."""

from boardsync.project.exceptions import (
    AddFailedError,
    NotFoundError,
    ProjectError,
    ProjectNotFoundError,
    StatusFieldNotFoundError,
    StatusOptionNotFoundError,
    UpdateFailedError,
)
from boardsync.project.models import (
    BoardItem,
    BoardLocator,
    ContentReference,
    Project,
    ReconcileOutcome,
    ReconcileResult,
    StatusField,
    StatusOption,
    TriageBucket,
)
from boardsync.project.reconciler import ItemReconciler
from boardsync.project.schema import DEFAULT_STATUS_FIELD, SchemaResolver

__all__ = [
    "DEFAULT_STATUS_FIELD",
    "AddFailedError",
    "BoardItem",
    "BoardLocator",
    "ContentReference",
    "ItemReconciler",
    "NotFoundError",
    "Project",
    "ProjectError",
    "ProjectNotFoundError",
    "ReconcileOutcome",
    "ReconcileResult",
    "SchemaResolver",
    "StatusField",
    "StatusFieldNotFoundError",
    "StatusOption",
    "StatusOptionNotFoundError",
    "TriageBucket",
    "UpdateFailedError",
]
