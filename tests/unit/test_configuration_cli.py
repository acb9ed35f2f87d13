"""Unit tests for the Typer CLI."""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from github_project_bootstrap.configuration.cli import typer_app
from github_project_bootstrap.processing.exceptions import DefinitionProcessingError
from github_project_bootstrap.synchronize.exceptions import MilestoneFetchError
from github_project_bootstrap.synchronize.results import (
    BootstrapResult,
    IssueReconciliationResult,
    MilestoneReconciliationResult,
    ReconciliationResult,
)

runner = CliRunner()

ENVIRONMENT_VARIABLES = (
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "DEBUG",
    "LABELS_PATH",
    "MILESTONES_PATH",
    "ISSUES_PATH",
    "REQUEST_DELAY",
    "REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def no_logging_configuration(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the CLI from reconfiguring structlog and isolate it from the environment."""
    monkeypatch.setattr("github_project_bootstrap.configuration.cli.configure_logging", lambda debug: None)
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def write_definitions(directory: Path, labels: Any, milestones: Any, issues: Any) -> list[str]:
    """Write definition files and return the matching CLI options."""
    options: list[str] = []
    for name, content in (("labels", labels), ("milestones", milestones), ("issues", issues)):
        path = directory / f"{name}.json"
        path.write_text(json.dumps(content))
        options += [f"--{name}-path", str(path)]
    return options


def make_result() -> BootstrapResult:
    """Build a result with one created entity of each type and one failure."""
    labels = ReconciliationResult("label")
    labels.created.append("bug")
    milestones = MilestoneReconciliationResult()
    milestones.created.append("Phase 1")
    milestones.milestone_numbers["Phase 1"] = 1
    issues = IssueReconciliationResult()
    issues.created.append("Do it")
    issues.unresolved_milestones.append({"issue_title": "Do it", "milestone_title": "Nonexistent"})
    issues.record_error("Broken", "GitHub 422 error")
    return BootstrapResult(labels, milestones, issues)


def test_bootstrap_requires_token() -> None:
    """Test that a missing token exits before any work is done."""
    with patch("github_project_bootstrap.configuration.cli.run_bootstrap_workflow", new=AsyncMock()) as mock_run:
        result = runner.invoke(typer_app, ["bootstrap", "--repo", "owner/repo"])

    assert result.exit_code == 1
    assert "GITHUB_TOKEN" in result.output
    mock_run.assert_not_awaited()


def test_bootstrap_rejects_malformed_repository() -> None:
    """Test that a malformed repository identifier exits with an error."""
    result = runner.invoke(typer_app, ["bootstrap", "--github-token", "token", "--repo", "owner-repo"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_bootstrap_reads_github_actions_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the token and repository are read from the GitHub Actions variables."""
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    with patch("github_project_bootstrap.configuration.cli.run_bootstrap_workflow", new=AsyncMock(return_value=make_result())) as mock_run:
        result = runner.invoke(typer_app, ["bootstrap", "--request-delay", "0"])

    assert result.exit_code == 0, result.output
    config = mock_run.await_args.args[0]
    assert config.github_token == "env-token"
    assert config.repo == "owner/repo"
    assert config.request_delay == 0.0
    assert "Target repository: owner/repo" in result.output


def test_bootstrap_prints_summary() -> None:
    """Test that the summary lists created counts, unresolved milestones and failures."""
    with patch("github_project_bootstrap.configuration.cli.run_bootstrap_workflow", new=AsyncMock(return_value=make_result())):
        result = runner.invoke(typer_app, ["bootstrap", "--github-token", "token", "--repo", "owner/repo"])

    assert result.exit_code == 0, result.output
    assert "Labels:     1 created" in result.output
    assert "Milestones: 1 created" in result.output
    assert "Issues:     1 created" in result.output
    assert "Do it (milestone 'Nonexistent')" in result.output
    assert "issue 'Broken': GitHub 422 error" in result.output


def test_bootstrap_definition_errors_exit_non_zero() -> None:
    """Test that invalid definitions are reported and exit with status 1."""
    error = DefinitionProcessingError([{"file": "labels.json", "error": "Invalid JSON"}])
    with patch("github_project_bootstrap.configuration.cli.run_bootstrap_workflow", new=AsyncMock(side_effect=error)):
        result = runner.invoke(typer_app, ["bootstrap", "--github-token", "token", "--repo", "owner/repo"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_bootstrap_milestone_fetch_failure_exits_non_zero() -> None:
    """Test that a milestone listing failure ends the run with status 1."""
    error = MilestoneFetchError("Failed to fetch existing milestones: boom")
    with patch("github_project_bootstrap.configuration.cli.run_bootstrap_workflow", new=AsyncMock(side_effect=error)):
        result = runner.invoke(typer_app, ["bootstrap", "--github-token", "token", "--repo", "owner/repo"])

    assert result.exit_code == 1
    assert "Fatal error" in result.output


def test_validate_accepts_consistent_definitions(tmp_path: Path) -> None:
    """Test that valid definitions are reported without contacting GitHub."""
    options = write_definitions(
        tmp_path,
        labels=[{"name": "bug", "color": "ff0000"}],
        milestones=[{"title": "Phase 1"}],
        issues=[{"title": "Do it", "labels": ["bug"], "milestone_title": "Phase 1"}],
    )

    result = runner.invoke(typer_app, ["validate", *options])

    assert result.exit_code == 0, result.output
    assert "Definitions are valid: 1 labels, 1 milestones, 1 issues" in result.output
    assert "Warning" not in result.output


def test_validate_warns_about_unknown_references(tmp_path: Path) -> None:
    """Test that references to undefined labels and milestones produce warnings."""
    options = write_definitions(
        tmp_path,
        labels=[],
        milestones=[],
        issues=[{"title": "Do it", "labels": ["bug"], "milestone_title": "Phase 9"}],
    )

    result = runner.invoke(typer_app, ["validate", *options])

    assert result.exit_code == 0, result.output
    assert "references labels not defined" in result.output
    assert "references milestone 'Phase 9'" in result.output


def test_validate_reports_invalid_definitions(tmp_path: Path) -> None:
    """Test that invalid definitions exit with status 1."""
    options = write_definitions(tmp_path, labels=[{"name": "bug", "color": "red"}], milestones=[], issues=[])

    result = runner.invoke(typer_app, ["validate", *options])

    assert result.exit_code == 1
    assert "labels.json" in result.output
