"""Custom exceptions for the GitHub API gateway."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for GitHub API gateway errors."""


class TransportError(GatewayError):
    """HTTP, GraphQL or network failure talking to GitHub.

    Attributes:
        errors: The GraphQL ``errors`` array, when the failure came from one.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @property
    def not_found(self) -> bool:
        """Whether GitHub reported a NOT_FOUND GraphQL error."""
        return any(error.get("type") == "NOT_FOUND" for error in self.errors)


class DeadlineExceededError(GatewayError):
    """The run-wide deadline passed before the request could complete."""
