"""Orchestrator - Drives discovery and reconciliation of a sync run."""

from boardsync.orchestrator.models import StatusTarget, SyncSummary
from boardsync.orchestrator.orchestrator import DEFAULT_BUCKETS, SyncOrchestrator

__all__ = [
    "DEFAULT_BUCKETS",
    "StatusTarget",
    "SyncOrchestrator",
    "SyncSummary",
]
