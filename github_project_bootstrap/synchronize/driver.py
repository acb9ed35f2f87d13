"""Orchestrates the bootstrap of GitHub labels, milestones and issues."""

import time

import structlog

from github_project_bootstrap.configuration.models import BootstrapConfig
from github_project_bootstrap.github.abc import GitHubClientBase
from github_project_bootstrap.github.adapter import GitHubKitAdapter
from github_project_bootstrap.processing.json_processor import DefinitionProcessor
from github_project_bootstrap.synchronize.issues import sync_github_issues
from github_project_bootstrap.synchronize.labels import sync_github_labels
from github_project_bootstrap.synchronize.milestones import sync_github_milestones
from github_project_bootstrap.synchronize.results import BootstrapResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_bootstrap_workflow(config: BootstrapConfig, github_adapter: GitHubClientBase | None = None) -> BootstrapResult:
    """Run the bootstrap workflow: labels, then milestones, then issues.

    All definition documents are validated before the first request is sent.

    Raises:
        DefinitionProcessingError: If a definition document is missing or invalid.
        MilestoneFetchError: If existing milestones cannot be listed.
    """
    processor = DefinitionProcessor(raise_on_error=True)
    definitions = processor.load_definitions(config.labels_path, config.milestones_path, config.issues_path)

    if github_adapter is None:
        github_adapter = await GitHubKitAdapter.create(config)
    logger.info("Target repository", repo=config.repo)

    start_time = time.time()
    label_results = await sync_github_labels(definitions.labels, github_adapter, request_delay=config.request_delay)
    milestone_results = await sync_github_milestones(definitions.milestones, github_adapter, request_delay=config.request_delay)
    issue_results = await sync_github_issues(
        definitions.issues,
        milestone_results.milestone_numbers,
        github_adapter,
        request_delay=config.request_delay,
    )
    total_time = time.time() - start_time

    result = BootstrapResult(label_results, milestone_results, issue_results)
    logger.info("Final summary", repo=config.repo, duration=round(total_time, 2), failed=len(result.errors), **result.summary())
    return result
