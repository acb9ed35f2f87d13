"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

import structlog

from github_project_bootstrap.configuration.env import Settings
from github_project_bootstrap.configuration.exceptions import (
    InvalidConfigurationValueError,
    RequiredConfigurationElementError,
)
from github_project_bootstrap.configuration.models import BootstrapConfig
from github_project_bootstrap.utils.constants import (
    DEFAULT_ISSUES_PATH,
    DEFAULT_LABELS_PATH,
    DEFAULT_MILESTONES_PATH,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_REQUEST_TIMEOUT,
)
from github_project_bootstrap.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def validate_github_token(github_token: str | None) -> str:
    """Validates that a GitHub access token is present.

    Args:
        github_token (str | None): The GitHub access token.

    Raises:
        RequiredConfigurationElementError: If the token is missing or blank.

    Returns:
        str: The token with surrounding whitespace removed.
    """
    if github_token is None or not github_token.strip():
        raise RequiredConfigurationElementError(name="GitHub token", cli_name="--github-token", env_name="GITHUB_TOKEN")
    return github_token.strip()


async def validate_throttling(request_delay: float, request_timeout: float) -> None:
    """Validates the request delay and timeout."""
    if request_delay < 0:
        raise InvalidConfigurationValueError(f"Request delay must not be negative, got {request_delay}.")
    if request_timeout <= 0:
        raise InvalidConfigurationValueError(f"Request timeout must be positive, got {request_timeout}.")


async def reconcile_bootstrap_configuration(
    cli_debug: bool | None = None,
    cli_github_api_url: str | None = None,
    cli_github_token: str | None = None,
    cli_repo: str | None = None,
    cli_labels_path: Path | None = None,
    cli_milestones_path: Path | None = None,
    cli_issues_path: Path | None = None,
    cli_request_delay: float | None = None,
    cli_request_timeout: float | None = None,
) -> BootstrapConfig:
    """Reconcile CLI values with environment settings into a BootstrapConfig.

    CLI values take precedence; missing values fall back to the environment
    (and an optional .env file), then to built-in defaults.

    Raises:
        RequiredConfigurationElementError: If the token or repository is missing.
        InvalidRepositoryError: If the repository is not in 'owner/repo' form.
        InvalidConfigurationValueError: If the delay or timeout is out of range.
    """
    settings = Settings()

    github_token = await validate_github_token(cli_github_token if cli_github_token is not None else settings.GITHUB_TOKEN)

    repo = cli_repo if cli_repo is not None else settings.GITHUB_REPOSITORY
    if repo is None or not repo.strip():
        raise RequiredConfigurationElementError(name="GitHub repository", cli_name="--repo", env_name="GITHUB_REPOSITORY")
    owner, repo_name = await split_repository_in_configuration(repo)

    request_delay = cli_request_delay if cli_request_delay is not None else DEFAULT_REQUEST_DELAY
    request_timeout = cli_request_timeout if cli_request_timeout is not None else DEFAULT_REQUEST_TIMEOUT
    await validate_throttling(request_delay, request_timeout)

    config = BootstrapConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        github_api_url=(cli_github_api_url or settings.GITHUB_API_URL).rstrip("/"),
        github_token=github_token,
        repo=f"{owner}/{repo_name}",
        owner=owner,
        repo_name=repo_name,
        labels_path=cli_labels_path or Path(DEFAULT_LABELS_PATH),
        milestones_path=cli_milestones_path or Path(DEFAULT_MILESTONES_PATH),
        issues_path=cli_issues_path or Path(DEFAULT_ISSUES_PATH),
        request_delay=request_delay,
        request_timeout=request_timeout,
    )
    logger.debug(
        "Reconciled bootstrap configuration",
        repo=config.repo,
        github_api_url=config.github_api_url,
        request_delay=config.request_delay,
        request_timeout=config.request_timeout,
    )
    return config
