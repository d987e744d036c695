"""Configuration loading for boardsync runs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from boardsync.gateway import DEFAULT_DEADLINE_SECONDS
from boardsync.project import DEFAULT_STATUS_FIELD, BoardLocator
from boardsync.sources import Source, SourceKind

CONFIG_FILE_NAME = "boardsync.yaml"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

# SIG Auth project board: https://github.com/orgs/kubernetes/projects/116
DEFAULT_OWNER = "kubernetes"
DEFAULT_PROJECT_NUMBER = 116


def _default_sources() -> list[Source]:
    return [
        Source(kind=SourceKind.ORG, org="kubernetes", label="sig/auth"),
        Source(kind=SourceKind.TOPIC, org="kubernetes-sigs", topic="k8s-sig-auth"),
    ]


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ProjectConfig:
    """Target board configuration."""

    owner: str = DEFAULT_OWNER
    number: int | None = DEFAULT_PROJECT_NUMBER
    title: str | None = None
    status_field: str = DEFAULT_STATUS_FIELD

    def locator(self) -> BoardLocator:
        return BoardLocator(owner=self.owner, number=self.number, title=self.title)


@dataclass
class SyncConfig:
    """A full sync run: the target board and the sources feeding it."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    sources: list[Source] = field(default_factory=_default_sources)
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncConfig:
        """Create config from dictionary.

        Sections left out fall back to the defaults.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section is malformed.
        """
        config = cls()

        if "project" in data:
            config.project = _parse_project(data["project"])

        if "sources" in data:
            raw_sources = data["sources"]
            if not isinstance(raw_sources, list) or not raw_sources:
                raise ConfigError("'sources' must be a non-empty list")
            config.sources = [_parse_source(entry, i) for i, entry in enumerate(raw_sources)]

        if "deadline_seconds" in data:
            deadline = data["deadline_seconds"]
            valid = isinstance(deadline, (int, float)) and not isinstance(deadline, bool)
            if not valid or deadline <= 0:
                raise ConfigError("'deadline_seconds' must be a positive number")
            config.deadline_seconds = float(deadline)

        return config


def _parse_project(data: Any) -> ProjectConfig:
    if not isinstance(data, dict):
        raise ConfigError("'project' must be a mapping")

    number = data.get("number")
    title = data.get("title")
    if number is None and not title:
        raise ConfigError("'project' needs a 'number' or a 'title'")
    if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
        raise ConfigError(f"'project.number' must be an integer, got {number!r}")

    return ProjectConfig(
        owner=str(data.get("owner", DEFAULT_OWNER)),
        number=number,
        title=str(title) if title else None,
        status_field=str(data.get("status_field", DEFAULT_STATUS_FIELD)),
    )


def _parse_source(data: Any, index: int) -> Source:
    if not isinstance(data, dict):
        raise ConfigError(f"sources[{index}] must be a mapping")

    missing = [f for f in ("kind", "org") if f not in data]
    if missing:
        raise ConfigError(f"sources[{index}] missing required fields: {', '.join(missing)}")

    try:
        kind = SourceKind(data["kind"])
    except ValueError as e:
        valid = ", ".join(k.value for k in SourceKind)
        raise ConfigError(
            f"sources[{index}] has unknown kind {data['kind']!r} (expected one of: {valid})"
        ) from e

    if kind is SourceKind.TOPIC and not data.get("topic"):
        raise ConfigError(f"sources[{index}] of kind 'topic' needs a 'topic'")

    return Source(
        kind=kind,
        org=str(data["org"]),
        label=_parse_label(data.get("label"), index),
        topic=data.get("topic") or None,
        status=data.get("status") or None,
    )


def _parse_label(value: Any, index: int) -> str | None:
    # The issues API takes several labels as one comma-separated string
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value and all(isinstance(v, str) and v for v in value):
        return ",".join(value)
    raise ConfigError(f"sources[{index}] label must be a string or a list of strings")


def load_config(config_path: Path | str) -> SyncConfig:
    """Load sync configuration from a YAML file.

    Args:
        config_path: Path to boardsync.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return SyncConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return SyncConfig.from_dict(data)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find boardsync.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to boardsync.yaml, or None if there is none.
    """
    current = Path(start_path or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    return None


def resolve_token(token: str | None = None) -> str:
    """Get the GitHub token from the argument or the GITHUB_TOKEN variable.

    The token needs the repo, read:org and project scopes; they are not
    checked here.

    Raises:
        ConfigError: If no token is available.
    """
    token = token or os.environ.get(TOKEN_ENV_VAR)
    if not token:
        raise ConfigError(f"No GitHub token: set {TOKEN_ENV_VAR} or pass --token")
    return token
