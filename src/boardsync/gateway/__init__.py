"""GitHub API gateway - REST pagination and GraphQL query/mutate primitives."""

from boardsync.gateway.client import GitHubGateway
from boardsync.gateway.deadline import DEFAULT_DEADLINE_SECONDS, Deadline
from boardsync.gateway.exceptions import (
    DeadlineExceededError,
    GatewayError,
    TransportError,
)

__all__ = [
    "DEFAULT_DEADLINE_SECONDS",
    "Deadline",
    "DeadlineExceededError",
    "GatewayError",
    "GitHubGateway",
    "TransportError",
]
