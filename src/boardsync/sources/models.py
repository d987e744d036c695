"""Data models for source discovery."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceKind(str, Enum):
    """How repositories of a source are discovered."""

    ORG = "org"  # every repository of the organization
    TOPIC = "topic"  # repositories of the organization carrying a topic


@dataclass(frozen=True)
class Source:
    """A discovery category: where to look for issues and pull requests.

    Attributes:
        kind: Repository discovery strategy.
        org: Organization login.
        label: Only issues/PRs carrying this label, if set.
        topic: Repository topic, required for TOPIC sources.
        status: Status label overriding the default bucket of the kind.
    """

    kind: SourceKind
    org: str
    label: str | None = None
    topic: str | None = None
    status: str | None = None

    def describe(self) -> str:
        if self.kind is SourceKind.TOPIC:
            return f"repos with topic {self.topic!r} in {self.org}"
        if self.label:
            return f"repos in {self.org} labeled {self.label!r}"
        return f"repos in {self.org}"
