"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from github_project_bootstrap.configuration.driver import get_bootstrap_config
from github_project_bootstrap.configuration.exceptions import (
    InvalidConfigurationValueError,
    InvalidRepositoryError,
    RequiredConfigurationElementError,
)
from github_project_bootstrap.processing.exceptions import DefinitionProcessingError
from github_project_bootstrap.processing.json_processor import DefinitionProcessor
from github_project_bootstrap.synchronize.driver import run_bootstrap_workflow
from github_project_bootstrap.synchronize.exceptions import MilestoneFetchError
from github_project_bootstrap.synchronize.results import BootstrapResult
from github_project_bootstrap.utils.constants import DEFAULT_ISSUES_PATH, DEFAULT_LABELS_PATH, DEFAULT_MILESTONES_PATH
from github_project_bootstrap.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Bootstrap GitHub labels, milestones and issues from JSON definitions.")

LabelsPathOption = Annotated[Path, Option(envvar="LABELS_PATH", help="Path to the label definitions JSON file.")]
MilestonesPathOption = Annotated[Path, Option(envvar="MILESTONES_PATH", help="Path to the milestone definitions JSON file.")]
IssuesPathOption = Annotated[Path, Option(envvar="ISSUES_PATH", help="Path to the issue definitions JSON file.")]
DebugOption = Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")]


def echo_definition_errors(error: DefinitionProcessingError) -> None:
    """Print every collected definition error to stderr."""
    typer.echo("Error(s) encountered while reading definitions:", err=True)
    for err in error.errors:
        typer.echo(str(err), err=True)


def echo_summary(result: BootstrapResult) -> None:
    """Print a human readable summary of a bootstrap run."""
    typer.echo("")
    typer.echo("=" * 70)
    typer.echo("BOOTSTRAP SUMMARY")
    typer.echo("=" * 70)
    typer.echo(f"Labels:     {result.labels.created_count} created, {len(result.labels.existing)} already present")
    typer.echo(f"Milestones: {result.milestones.created_count} created, {len(result.milestones.existing)} already present")
    typer.echo(f"Issues:     {result.issues.created_count} created, {len(result.issues.existing)} already present")

    if result.issues.unresolved_milestones:
        typer.echo("")
        typer.echo(f"Issues created without their milestone: {len(result.issues.unresolved_milestones)}")
        for unresolved in result.issues.unresolved_milestones:
            typer.echo(f"  - {unresolved['issue_title']} (milestone '{unresolved['milestone_title']}')")

    if result.errors:
        typer.echo("")
        typer.echo(f"Failures: {len(result.errors)}")
        for err in result.errors:
            typer.echo(f"  - {err['entity_type']} '{err['key']}': {err['error']}")
    typer.echo("=" * 70)


@typer_app.command(name="bootstrap")
def bootstrap_cli(
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="GitHub access token.")] = None,
    repo: Annotated[str | None, Option(envvar="GITHUB_REPOSITORY", help="Repository name (owner/repo).")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    labels_path: LabelsPathOption = Path(DEFAULT_LABELS_PATH),
    milestones_path: MilestonesPathOption = Path(DEFAULT_MILESTONES_PATH),
    issues_path: IssuesPathOption = Path(DEFAULT_ISSUES_PATH),
    request_delay: Annotated[float | None, Option(envvar="REQUEST_DELAY", help="Seconds to wait after each creation and between pages.")] = None,
    request_timeout: Annotated[float | None, Option(envvar="REQUEST_TIMEOUT", help="Per-request timeout in seconds.")] = None,
    debug: DebugOption = False,
) -> None:
    """Create missing labels, milestones and issues in a GitHub repository."""
    configure_logging(debug)
    try:
        config = get_bootstrap_config(
            debug=debug,
            github_api_url=github_api_url,
            github_token=github_token,
            repo=repo,
            labels_path=labels_path,
            milestones_path=milestones_path,
            issues_path=issues_path,
            request_delay=request_delay,
            request_timeout=request_timeout,
        )
    except (RequiredConfigurationElementError, InvalidRepositoryError, InvalidConfigurationValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"Target repository: {config.repo}")

    try:
        result = asyncio.run(run_bootstrap_workflow(config))
    except DefinitionProcessingError as e:
        echo_definition_errors(e)
        raise typer.Exit(1) from e
    except MilestoneFetchError as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1) from e

    echo_summary(result)


@typer_app.command(name="validate")
def validate_cli(
    labels_path: LabelsPathOption = Path(DEFAULT_LABELS_PATH),
    milestones_path: MilestonesPathOption = Path(DEFAULT_MILESTONES_PATH),
    issues_path: IssuesPathOption = Path(DEFAULT_ISSUES_PATH),
    debug: DebugOption = False,
) -> None:
    """Validate the definition files without contacting GitHub."""
    configure_logging(debug)
    processor = DefinitionProcessor(raise_on_error=True)
    try:
        definitions = processor.load_definitions(labels_path, milestones_path, issues_path)
    except DefinitionProcessingError as e:
        echo_definition_errors(e)
        raise typer.Exit(1) from e

    known_labels = {label.name for label in definitions.labels}
    known_milestones = {milestone.title for milestone in definitions.milestones}
    for issue in definitions.issues:
        unknown_labels = [label for label in issue.labels if label not in known_labels]
        if unknown_labels:
            typer.echo(f"Warning: issue '{issue.title}' references labels not defined in {labels_path}: {', '.join(unknown_labels)}")
        if issue.milestone_title and issue.milestone_title not in known_milestones:
            typer.echo(f"Warning: issue '{issue.title}' references milestone '{issue.milestone_title}' not defined in {milestones_path}")

    typer.echo(
        f"Definitions are valid: {len(definitions.labels)} labels, {len(definitions.milestones)} milestones, {len(definitions.issues)} issues"
    )


if __name__ == "__main__":
    typer_app()
