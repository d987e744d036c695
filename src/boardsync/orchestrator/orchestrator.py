"""SyncOrchestrator - Puts discovered issues and pull requests on the board."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from boardsync.orchestrator.models import StatusTarget, SyncSummary
from boardsync.project import (
    DEFAULT_STATUS_FIELD,
    ItemReconciler,
    SchemaResolver,
    TriageBucket,
)
from boardsync.sources import Source, SourceEnumerator, SourceKind

if TYPE_CHECKING:
    from boardsync.config import SyncConfig
    from boardsync.gateway import GitHubGateway
    from boardsync.project import ContentReference, Project

logger = logging.getLogger(__name__)

# Initial status for each kind of source, unless the source names its own
DEFAULT_BUCKETS = {
    SourceKind.ORG: TriageBucket.NEEDS_TRIAGE,
    SourceKind.TOPIC: TriageBucket.SUBPROJECT_NEEDS_TRIAGE,
}


class SyncOrchestrator:
    """Runs one sync: resolve the board, then reconcile every discovered item.

    Sources, their repositories and the items within a repository are
    processed strictly in order, one API round trip at a time. The first
    error aborts the run; re-running is safe because reconciliation never
    duplicates items or overwrites a status.
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        reconciler: ItemReconciler,
        enumerator: SourceEnumerator,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            resolver: Resolves the board and its status options.
            reconciler: Adds items and sets their initial status.
            enumerator: Discovers the items of each source.
        """
        self.resolver = resolver
        self.reconciler = reconciler
        self.enumerator = enumerator

    @classmethod
    def from_gateway(
        cls, gateway: GitHubGateway, status_field: str = DEFAULT_STATUS_FIELD
    ) -> SyncOrchestrator:
        """Build an orchestrator whose components share one gateway."""
        return cls(
            resolver=SchemaResolver(gateway, status_field),
            reconciler=ItemReconciler(gateway, status_field),
            enumerator=SourceEnumerator(gateway),
        )

    def run(self, config: SyncConfig) -> SyncSummary:
        """Sync every source of the config into the board.

        All status targets are resolved before the board is modified, so a
        missing project or status option fails the run without side effects.

        Args:
            config: The run configuration.

        Returns:
            SyncSummary of the completed run.

        Raises:
            NotFoundError: If the project or a status option does not exist.
            AddFailedError, UpdateFailedError: On the first failed item.
            GatewayError: On discovery failures or when the deadline passes.
        """
        project = self.resolver.resolve_project(config.project.locator())

        targets = [(source, self.resolve_target(project, source)) for source in config.sources]

        summary = SyncSummary()
        for source, target in targets:
            logger.info("Syncing %s with status %r", source.describe(), target.label)
            self._sync_source(project, source, target, summary)

        logger.info(
            "Sync complete: %d status(es) written, %d already set, %d skipped",
            summary.written,
            summary.already_set,
            summary.skipped,
        )
        return summary

    def resolve_target(self, project: Project, source: Source) -> StatusTarget:
        """Map a source to the Status option its new items receive."""
        label = source.status or DEFAULT_BUCKETS[source.kind].value
        field_id, option_id = self.resolver.resolve_status_option(project, label)
        return StatusTarget(label=label, field_id=field_id, option_id=option_id)

    def _sync_source(
        self,
        project: Project,
        source: Source,
        target: StatusTarget,
        summary: SyncSummary,
    ) -> None:
        for repository in self.enumerator.repositories(source):
            logger.info("Looking for issues and PRs in %s", repository)

            items = list(self.enumerator.items(source, repository))
            logger.info("found %d in repo %s", len(items), repository)

            for content in items:
                self._sync_item(project, source, repository, content, target, summary)

    def _sync_item(
        self,
        project: Project,
        source: Source,
        repository: str,
        content: ContentReference,
        target: StatusTarget,
        summary: SyncSummary,
    ) -> None:
        if not content.content_id:
            logger.warning(
                "skipping [%d] %r in %s: no content ID", content.number, content.title, repository
            )
            summary.skipped += 1
            return

        logger.info("adding [%d] %r to project", content.number, content.title)
        try:
            result = self.reconciler.reconcile(
                project, content, target.field_id, target.option_id
            )
        except Exception:
            logger.error(
                "Failed to sync [%d] %r from %s; aborting run",
                content.number,
                content.title,
                repository,
            )
            raise

        summary.record(source.describe(), result.outcome)
