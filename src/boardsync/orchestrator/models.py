"""Data models for the sync orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field

from boardsync.project import ReconcileOutcome


@dataclass(frozen=True)
class StatusTarget:
    """A triage bucket resolved against the board's Status field.

    Attributes:
        label: Status option label.
        field_id: ID of the Status field.
        option_id: ID of the option with this label.
    """

    label: str
    field_id: str
    option_id: str


@dataclass
class SyncSummary:
    """Counts of a completed sync run.

    Attributes:
        written: Items whose status was set by this run.
        already_set: Items that already had a status.
        skipped: Items without a content ID, never sent to the board.
        per_source: Items processed per source description.
    """

    written: int = 0
    already_set: int = 0
    skipped: int = 0
    per_source: dict[str, int] = field(default_factory=dict)

    @property
    def processed(self) -> int:
        return self.written + self.already_set

    def record(self, source: str, outcome: ReconcileOutcome) -> None:
        if outcome is ReconcileOutcome.WRITTEN:
            self.written += 1
        else:
            self.already_set += 1
        self.per_source[source] = self.per_source.get(source, 0) + 1
