"""Unit tests for the boardsync command line."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from boardsync import get_version
from boardsync.cli import main
from boardsync.gateway import DeadlineExceededError, TransportError
from boardsync.orchestrator import SyncSummary
from boardsync.project import AddFailedError, ProjectNotFoundError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def orchestrator() -> MagicMock:
    """Patch the orchestrator built by the CLI."""
    with (
        patch("boardsync.cli.SyncOrchestrator") as cls,
        patch("boardsync.cli.setup_logging"),
        patch("boardsync.cli.find_config", return_value=None),
    ):
        instance = cls.from_gateway.return_value
        instance.run.return_value = SyncSummary(written=2, already_set=1)
        yield instance


@pytest.mark.unit
class TestMain:
    """Tests for the main command."""

    def test_successful_run(self, runner: CliRunner, orchestrator: MagicMock) -> None:
        """Exit code 0 and a summary line."""
        result = runner.invoke(main, ["--token", "t"])

        assert result.exit_code == 0, result.output
        assert "built-in defaults" in result.output
        assert "3 item(s) synced" in result.output
        assert "2 status written, 1 already set" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the package version without running a sync."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert f"boardsync, version {get_version()}" in result.output

    def test_token_from_environment(self, runner: CliRunner, orchestrator: MagicMock) -> None:
        """GITHUB_TOKEN is read when --token is absent."""
        result = runner.invoke(main, [], env={"GITHUB_TOKEN": "t"})

        assert result.exit_code == 0, result.output

    def test_missing_token(self, runner: CliRunner, orchestrator: MagicMock) -> None:
        """No token is a configuration error."""
        result = runner.invoke(main, [], env={"GITHUB_TOKEN": ""})

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        orchestrator.run.assert_not_called()

    def test_overrides_apply_to_config(self, runner: CliRunner, orchestrator: MagicMock) -> None:
        """Command-line options override the project locator and deadline."""
        result = runner.invoke(
            main,
            ["--token", "t", "--owner", "acme", "--project-title", "Triage", "--deadline", "60"],
        )

        assert result.exit_code == 0, result.output
        config = orchestrator.run.call_args.args[0]
        assert config.project.owner == "acme"
        assert config.project.number is None
        assert config.project.title == "Triage"
        assert config.deadline_seconds == 60.0

    def test_config_file(
        self, runner: CliRunner, orchestrator: MagicMock, tmp_path: Path
    ) -> None:
        """An explicit config file is loaded."""
        config_path = tmp_path / "boardsync.yaml"
        config_path.write_text("project:\n  owner: acme\n  number: 7\n")

        result = runner.invoke(main, ["--token", "t", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert orchestrator.run.call_args.args[0].project.number == 7

    @pytest.mark.parametrize(
        ("error", "prefix"),
        [
            (ProjectNotFoundError("Project #116 not found"), "Board schema error"),
            (AddFailedError("Failed to add [42] 'fix bug' to project"), "Sync failed"),
            (DeadlineExceededError("Run deadline of 300s exceeded"), "Timed out"),
            (TransportError("GET /orgs/kubernetes/repos failed: 500"), "GitHub API error"),
        ],
    )
    def test_errors_exit_non_zero(
        self, runner: CliRunner, orchestrator: MagicMock, error: Exception, prefix: str
    ) -> None:
        """Every failure is reported with its context and exits 1."""
        orchestrator.run.side_effect = error

        result = runner.invoke(main, ["--token", "t"])

        assert result.exit_code == 1
        assert prefix in result.output
        assert str(error) in result.output
