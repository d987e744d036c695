"""Sources - Discovers issues and pull requests to put on the board."""

from boardsync.sources.enumerator import SourceEnumerator
from boardsync.sources.models import Source, SourceKind

__all__ = [
    "Source",
    "SourceEnumerator",
    "SourceKind",
]
