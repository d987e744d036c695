"""Integration tests: a full sync run against an in-memory board.

Resolver, reconciler, enumerator and orchestrator are the real ones; only
the GitHub gateway is replaced.
"""

import pytest

from boardsync.config import ProjectConfig, SyncConfig
from boardsync.orchestrator import SyncOrchestrator
from boardsync.project import (
    AddFailedError,
    ContentReference,
    ItemReconciler,
    ReconcileOutcome,
    SchemaResolver,
    StatusOptionNotFoundError,
)
from boardsync.project.models import BoardLocator
from boardsync.sources import Source, SourceKind

pytestmark = pytest.mark.integration

ORG_SOURCE = Source(kind=SourceKind.ORG, org="kubernetes", label="sig/auth")
TOPIC_SOURCE = Source(kind=SourceKind.TOPIC, org="kubernetes-sigs", topic="k8s-sig-auth")


def _issue(node_id: str, number: int, title: str) -> dict:
    return {"node_id": node_id, "number": number, "title": title}


@pytest.fixture
def populated_board(board):
    """Board whose sources hold two org issues and one subproject PR."""
    board.pages["/orgs/kubernetes/repos"] = [{"full_name": "kubernetes/kubernetes"}]
    board.pages["/repos/kubernetes/kubernetes/issues"] = [
        _issue("I_1", 42, "fix bug"),
        _issue("I_2", 43, "tighten RBAC"),
    ]
    board.pages["/search/repositories"] = [
        {"full_name": "kubernetes-sigs/secrets-store-csi-driver"}
    ]
    board.pages["/repos/kubernetes-sigs/secrets-store-csi-driver/issues"] = [
        {**_issue("PR_3", 7, "rotate secrets"), "pull_request": {}},
    ]
    return board


def _config() -> SyncConfig:
    return SyncConfig(
        project=ProjectConfig(owner="kubernetes", number=116),
        sources=[ORG_SOURCE, TOPIC_SOURCE],
    )


class TestReconcileScenario:
    """Add a fresh item, then reconcile it again."""

    def test_written_then_already_set(self, board) -> None:
        resolver = SchemaResolver(board)
        reconciler = ItemReconciler(board)
        project = resolver.resolve_project(BoardLocator(owner="kubernetes", number=116))
        field_id, option_id = resolver.resolve_status_option(project, "Needs Triage")
        content = ContentReference(content_id="I_1", number=42, title="fix bug")

        first = reconciler.reconcile(project, content, field_id, option_id)

        assert (field_id, option_id) == ("F", "A")
        assert first.outcome is ReconcileOutcome.WRITTEN
        assert board.status_of("I_1") == "Needs Triage"
        assert len(board.writes) == 1

        second = reconciler.reconcile(project, content, field_id, option_id)

        assert second.outcome is ReconcileOutcome.ALREADY_SET
        assert second.item_id == first.item_id
        assert len(board.items) == 1
        assert len(board.writes) == 1


class TestSyncRun:
    """Full runs through SyncOrchestrator."""

    def test_items_land_in_their_buckets(self, populated_board) -> None:
        summary = SyncOrchestrator.from_gateway(populated_board).run(_config())

        assert populated_board.status_of("I_1") == "Needs Triage"
        assert populated_board.status_of("I_2") == "Needs Triage"
        assert populated_board.status_of("PR_3") == "Subprojects - Needs Triage"
        assert summary.written == 3
        assert summary.already_set == 0

    def test_rerun_is_safe(self, populated_board) -> None:
        orchestrator = SyncOrchestrator.from_gateway(populated_board)
        orchestrator.run(_config())
        populated_board.set_status("I_2", "In Progress")

        summary = orchestrator.run(_config())

        assert summary.written == 0
        assert summary.already_set == 3
        assert len(populated_board.items) == 3
        assert len(populated_board.writes) == 3
        assert populated_board.status_of("I_2") == "In Progress"

    def test_processing_order(self, populated_board) -> None:
        SyncOrchestrator.from_gateway(populated_board).run(_config())

        assert populated_board.added == ["I_1", "I_2", "PR_3"]

    def test_fail_fast(self, board) -> None:
        board.pages["/orgs/kubernetes/repos"] = [{"full_name": "kubernetes/kubernetes"}]
        board.pages["/repos/kubernetes/kubernetes/issues"] = [
            _issue(f"I_{n}", n, f"issue {n}") for n in range(1, 6)
        ]
        board.fail_add_for.add("I_3")

        with pytest.raises(AddFailedError) as exc_info:
            SyncOrchestrator.from_gateway(board).run(_config())

        assert "[3] 'issue 3'" in str(exc_info.value)
        assert board.added == ["I_1", "I_2", "I_3"]
        assert "I_4" not in board.items
        assert "I_5" not in board.items

    def test_missing_bucket_leaves_board_untouched(self, populated_board) -> None:
        populated_board.project["field"]["options"] = [{"id": "A", "name": "Needs Triage"}]

        with pytest.raises(StatusOptionNotFoundError):
            SyncOrchestrator.from_gateway(populated_board).run(_config())

        assert populated_board.added == []
        assert populated_board.paginate_calls == []
