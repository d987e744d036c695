"""CLI entry point for boardsync.

Adds the issues and pull requests of the configured sources to a GitHub
Projects board, giving new items an initial triage status.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from boardsync import __version__
from boardsync.config import ConfigError, SyncConfig, find_config, load_config, resolve_token
from boardsync.gateway import Deadline, DeadlineExceededError, GatewayError, GitHubGateway
from boardsync.logging import get_logger, setup_logging
from boardsync.orchestrator import SyncOrchestrator
from boardsync.project import NotFoundError, ProjectError

logger = get_logger("cli")


def _load(config_path: Path | None) -> SyncConfig:
    if config_path is None:
        config_path = find_config()
    if config_path is None:
        click.echo("No boardsync.yaml found, using built-in defaults")
        return SyncConfig()
    click.echo(f"Using configuration {config_path}")
    return load_config(config_path)


@click.command()
@click.version_option(version=__version__, prog_name="boardsync")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to boardsync.yaml (auto-detected if not specified)",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub token with repo, read:org and project scopes [env: GITHUB_TOKEN]",
)
@click.option("--owner", help="Organization owning the project board")
@click.option("--project-number", type=int, help="Project board number")
@click.option("--project-title", help="Project board title (exact match)")
@click.option(
    "--deadline",
    type=click.FloatRange(min=0, min_open=True),
    help="Run deadline in seconds (default: from config or 300)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write a rotating log file to this directory",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def main(
    config_path: Path | None,
    token: str | None,
    owner: str | None,
    project_number: int | None,
    project_title: str | None,
    deadline: float | None,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Sync issues and pull requests into a GitHub Projects board."""
    setup_logging(log_dir=log_dir, level="DEBUG" if verbose else None)

    try:
        config = _load(config_path)
        if owner:
            config.project.owner = owner
        if project_number is not None:
            config.project.number = project_number
            config.project.title = None
        elif project_title:
            config.project.number = None
            config.project.title = project_title
        if deadline is not None:
            config.deadline_seconds = deadline

        gateway = GitHubGateway(resolve_token(token), deadline=Deadline(config.deadline_seconds))
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        orchestrator = SyncOrchestrator.from_gateway(gateway, config.project.status_field)
        summary = orchestrator.run(config)
    except NotFoundError as e:
        click.echo(f"Board schema error: {e}", err=True)
        sys.exit(1)
    except ProjectError as e:
        click.echo(f"Sync failed: {e}", err=True)
        sys.exit(1)
    except DeadlineExceededError as e:
        click.echo(f"Timed out: {e}", err=True)
        sys.exit(1)
    except GatewayError as e:
        click.echo(f"GitHub API error: {e}", err=True)
        sys.exit(1)
    finally:
        gateway.close()

    logger.info(
        "sync finished: %d written, %d already set, %d skipped",
        summary.written,
        summary.already_set,
        summary.skipped,
    )
    click.echo(
        f"Done: {summary.processed} item(s) synced "
        f"({summary.written} status written, {summary.already_set} already set, "
        f"{summary.skipped} skipped)"
    )


if __name__ == "__main__":
    main()
