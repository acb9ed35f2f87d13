"""Contains synchronization logic for GitHub milestones."""

import asyncio

import structlog
from githubkit.exception import GitHubException

from github_project_bootstrap.github.abc import GitHubClientBase
from github_project_bootstrap.github.exceptions import GitHubRequestError
from github_project_bootstrap.schemas.definitions import MilestoneDefinition
from github_project_bootstrap.synchronize.exceptions import MilestoneFetchError
from github_project_bootstrap.synchronize.models import SyncDecision
from github_project_bootstrap.synchronize.results import MilestoneReconciliationResult
from github_project_bootstrap.utils.constants import MILESTONE_STATE_OPEN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def decide_github_milestone_sync_action(desired_milestone: MilestoneDefinition, milestone_numbers: dict[str, int]) -> SyncDecision:
    """Decide whether a milestone has to be created.

    Key is milestone title.
    """
    if desired_milestone.title in milestone_numbers:
        logger.info(
            "Milestone already exists",
            milestone_title=desired_milestone.title,
            milestone_number=milestone_numbers[desired_milestone.title],
        )
        return SyncDecision.NOOP
    logger.info("Milestone not found in GitHub", milestone_title=desired_milestone.title)
    return SyncDecision.CREATE


async def sync_github_milestones(
    desired_milestones: list[MilestoneDefinition],
    github_adapter: GitHubClientBase,
    request_delay: float = 0.0,
) -> MilestoneReconciliationResult:
    """Create every desired milestone that does not exist and map titles to numbers.

    Open and closed milestones are both considered existing, so a milestone
    closed by hand is never recreated. The returned map holds every existing
    milestone plus every milestone created here; titles whose creation failed
    are absent from it.

    Raises:
        MilestoneFetchError: If the existing milestones cannot be listed.
    """
    result = MilestoneReconciliationResult()
    logger.info("Processing milestones", desired_milestone_count=len(desired_milestones))

    try:
        existing_milestones = await github_adapter.list_milestones(state="all")
    except (GitHubException, GitHubRequestError) as exc:
        logger.error("Failed to fetch existing milestones", error=str(exc))
        raise MilestoneFetchError(f"Failed to fetch existing milestones: {exc}") from exc

    for milestone in existing_milestones:
        result.milestone_numbers[milestone.title] = milestone.number
    logger.info("Found existing milestones", existing_milestone_count=len(result.milestone_numbers))

    for desired_milestone in desired_milestones:
        decision = await decide_github_milestone_sync_action(desired_milestone, result.milestone_numbers)
        if decision == SyncDecision.NOOP:
            result.existing.append(desired_milestone.title)
            continue

        logger.info("Creating milestone", milestone_title=desired_milestone.title, due_on=desired_milestone.due_on)
        try:
            created_milestone = await github_adapter.create_milestone(
                title=desired_milestone.title,
                state=MILESTONE_STATE_OPEN,
                description=desired_milestone.description,
                due_on=desired_milestone.due_on,
            )
        except (GitHubException, GitHubRequestError) as exc:
            logger.error("Failed to create milestone, continuing", milestone_title=desired_milestone.title, error=str(exc))
            result.record_error(desired_milestone.title, exc)
            continue

        logger.info("Created milestone", milestone_title=created_milestone.title, milestone_number=created_milestone.number)
        result.milestone_numbers[desired_milestone.title] = created_milestone.number
        result.created.append(desired_milestone.title)
        await asyncio.sleep(request_delay)

    logger.info(
        "Finished processing milestones",
        created=result.created_count,
        existing=len(result.existing),
        failed=len(result.errors),
        milestone_numbers=result.milestone_numbers,
    )
    return result
