"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio
from pathlib import Path

from github_project_bootstrap.configuration import reconcile
from github_project_bootstrap.configuration.models import BootstrapConfig


def get_bootstrap_config(
    debug: bool | None = None,
    github_api_url: str | None = None,
    github_token: str | None = None,
    repo: str | None = None,
    labels_path: Path | None = None,
    milestones_path: Path | None = None,
    issues_path: Path | None = None,
    request_delay: float | None = None,
    request_timeout: float | None = None,
) -> BootstrapConfig:
    """Synchronously get the reconciled bootstrap configuration."""
    return asyncio.run(
        reconcile.reconcile_bootstrap_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
            cli_repo=repo,
            cli_labels_path=labels_path,
            cli_milestones_path=milestones_path,
            cli_issues_path=issues_path,
            cli_request_delay=request_delay,
            cli_request_timeout=request_timeout,
        )
    )
