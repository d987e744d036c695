"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from boardsync.gateway import TransportError


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class FakeBoardGateway:
    """In-memory GitHub gateway backing a single project board.

    Answers the GraphQL documents the sync sends and serves REST listings
    from ``pages``, keyed by path.
    """

    def __init__(self) -> None:
        self.project = {
            "id": "PVT_1",
            "title": "SIG Auth",
            "number": 116,
            "field": {
                "id": "F",
                "name": "Status",
                "options": [
                    {"id": "A", "name": "Needs Triage"},
                    {"id": "B", "name": "Subprojects - Needs Triage"},
                    {"id": "C", "name": "In Progress"},
                ],
            },
        }
        self.items: dict[str, dict[str, Any]] = {}  # content id -> item
        self.pages: dict[str, list[dict[str, Any]]] = {}
        self.paginate_calls: list[tuple[str, dict[str, Any] | None]] = []
        self.added: list[str] = []
        self.writes: list[dict[str, Any]] = []
        self.fail_add_for: set[str] = set()

    def query(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return {"organization": {"projectV2": self.project}}

    def mutate(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        variables = variables or {}
        if "addProjectV2ItemById" in document:
            return self._add(variables)
        if "updateProjectV2ItemFieldValue" in document:
            return self._update(variables)
        raise AssertionError(f"unexpected mutation: {document}")

    def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        items_key: str | None = None,
    ) -> Iterator[dict[str, Any]]:
        self.paginate_calls.append((path, params))
        yield from self.pages.get(path, [])

    def set_status(self, content_id: str, status: str) -> None:
        """Simulate a person setting the status of an item on the board."""
        item = self.items.setdefault(
            content_id, {"id": f"PVTI_{len(self.items) + 1}", "status": None}
        )
        item["status"] = status

    def _add(self, variables: dict[str, Any]) -> dict[str, Any]:
        content_id = variables["contentId"]
        self.added.append(content_id)
        if content_id in self.fail_add_for:
            raise TransportError("GraphQL request failed: 502 - Bad Gateway")

        if content_id not in self.items:
            self.items[content_id] = {"id": f"PVTI_{len(self.items) + 1}", "status": None}
        item = self.items[content_id]
        value = {"name": item["status"]} if item["status"] else None
        return {"addProjectV2ItemById": {"item": {"id": item["id"], "fieldValueByName": value}}}

    def _update(self, variables: dict[str, Any]) -> dict[str, Any]:
        self.writes.append(variables)
        options = {opt["id"]: opt["name"] for opt in self.project["field"]["options"]}
        for item in self.items.values():
            if item["id"] == variables["itemId"]:
                item["status"] = options[variables["optionId"]]
                return {"updateProjectV2ItemFieldValue": {"projectV2Item": {"id": item["id"]}}}
        raise TransportError(f"item {variables['itemId']} not on board")

    def status_of(self, content_id: str) -> str | None:
        return self.items[content_id]["status"]


@pytest.fixture
def board() -> FakeBoardGateway:
    """An empty in-memory project board."""
    return FakeBoardGateway()
