"""Contains synchronization logic for GitHub labels."""

import asyncio

import structlog
from githubkit.exception import GitHubException

from github_project_bootstrap.github.abc import GitHubClientBase
from github_project_bootstrap.github.exceptions import GitHubRequestError, UnprocessableEntityError
from github_project_bootstrap.schemas.definitions import LabelDefinition
from github_project_bootstrap.synchronize.models import SyncDecision
from github_project_bootstrap.synchronize.results import ReconciliationResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def decide_github_label_sync_action(desired_label: LabelDefinition, existing_label_names: set[str]) -> SyncDecision:
    """Decide whether a label has to be created.

    Key is label name, compared case-sensitively.
    """
    if desired_label.name in existing_label_names:
        logger.info("Label already exists", label_name=desired_label.name)
        return SyncDecision.NOOP
    logger.info("Label not found in GitHub", label_name=desired_label.name)
    return SyncDecision.CREATE


async def sync_github_labels(
    desired_labels: list[LabelDefinition],
    github_adapter: GitHubClientBase,
    request_delay: float = 0.0,
) -> ReconciliationResult:
    """Create every desired label that does not exist in the repository yet.

    A listing failure ends the pass without creating anything; creation
    failures are recorded and the pass moves on to the next label.
    """
    result = ReconciliationResult("label")
    logger.info("Processing labels", desired_label_count=len(desired_labels))

    try:
        existing_labels = await github_adapter.list_labels()
    except (GitHubException, GitHubRequestError) as exc:
        logger.error("Failed to fetch existing labels, skipping label processing", error=str(exc))
        result.record_error("*", exc)
        return result

    existing_label_names = {label.name for label in existing_labels}
    logger.info("Found existing labels", existing_label_count=len(existing_label_names))

    for desired_label in desired_labels:
        decision = await decide_github_label_sync_action(desired_label, existing_label_names)
        if decision == SyncDecision.NOOP:
            result.existing.append(desired_label.name)
            continue

        logger.info("Creating label", label_name=desired_label.name, color=desired_label.color)
        try:
            await github_adapter.create_label(
                name=desired_label.name,
                color=desired_label.color,
                description=desired_label.description,
            )
        except UnprocessableEntityError as exc:
            if exc.already_exists:
                logger.info("Label already exists (GitHub reported a conflict)", label_name=desired_label.name)
                existing_label_names.add(desired_label.name)
                result.existing.append(desired_label.name)
                continue
            logger.error("Failed to create label, continuing", label_name=desired_label.name, error=str(exc))
            result.record_error(desired_label.name, exc)
            continue
        except (GitHubException, GitHubRequestError) as exc:
            logger.error("Failed to create label, continuing", label_name=desired_label.name, error=str(exc))
            result.record_error(desired_label.name, exc)
            continue

        logger.info("Created label", label_name=desired_label.name)
        existing_label_names.add(desired_label.name)
        result.created.append(desired_label.name)
        await asyncio.sleep(request_delay)

    logger.info("Finished processing labels", created=result.created_count, existing=len(result.existing), failed=len(result.errors))
    return result
