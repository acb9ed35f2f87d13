"""Contains synchronization logic for GitHub issues."""

import asyncio
from typing import Mapping

import structlog
from githubkit.exception import GitHubException

from github_project_bootstrap.github.abc import GitHubClientBase
from github_project_bootstrap.github.exceptions import GitHubRequestError, UnprocessableEntityError
from github_project_bootstrap.schemas.definitions import IssueDefinition
from github_project_bootstrap.synchronize.models import SyncDecision
from github_project_bootstrap.synchronize.results import IssueReconciliationResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def decide_github_issue_sync_action(desired_issue: IssueDefinition, existing_issue_titles: set[str]) -> SyncDecision:
    """Decide whether an issue has to be created.

    Key is issue title.
    """
    if desired_issue.title in existing_issue_titles:
        logger.info("Issue already exists", issue_title=desired_issue.title)
        return SyncDecision.NOOP
    logger.info("Issue not found in GitHub", issue_title=desired_issue.title)
    return SyncDecision.CREATE


async def resolve_issue_milestone(desired_issue: IssueDefinition, milestone_numbers: Mapping[str, int]) -> int | None:
    """Return the milestone number for an issue, or None if it has none or it cannot be resolved."""
    if not desired_issue.milestone_title:
        return None
    milestone_number = milestone_numbers.get(desired_issue.milestone_title)
    if milestone_number is None:
        logger.warning(
            "Milestone not found or failed to create, issue will be created without a milestone",
            issue_title=desired_issue.title,
            milestone_title=desired_issue.milestone_title,
        )
    return milestone_number


async def sync_github_issues(
    desired_issues: list[IssueDefinition],
    milestone_numbers: Mapping[str, int],
    github_adapter: GitHubClientBase,
    request_delay: float = 0.0,
) -> IssueReconciliationResult:
    """Create every desired issue whose title does not exist in the repository yet.

    Label names are passed to GitHub as-is. If the existing issues cannot be
    listed the pass is abandoned, because creating blindly could duplicate
    issues. Creation failures are recorded and the pass continues.
    """
    result = IssueReconciliationResult()
    logger.info("Processing issues", desired_issue_count=len(desired_issues))

    try:
        existing_issues = await github_adapter.list_issues(state="all")
    except (GitHubException, GitHubRequestError) as exc:
        logger.error("Failed to fetch existing issues, skipping issue processing", error=str(exc))
        result.record_error("*", exc)
        return result

    existing_issue_titles = {issue.title for issue in existing_issues}
    logger.info("Found existing issues", existing_issue_count=len(existing_issue_titles))

    for desired_issue in desired_issues:
        decision = await decide_github_issue_sync_action(desired_issue, existing_issue_titles)
        if decision == SyncDecision.NOOP:
            result.existing.append(desired_issue.title)
            continue

        milestone_number = await resolve_issue_milestone(desired_issue, milestone_numbers)
        if desired_issue.milestone_title and milestone_number is None:
            result.unresolved_milestones.append({"issue_title": desired_issue.title, "milestone_title": desired_issue.milestone_title})

        logger.info(
            "Creating issue",
            issue_title=desired_issue.title,
            milestone_number=milestone_number,
            labels=desired_issue.labels,
        )
        try:
            await github_adapter.create_issue(
                title=desired_issue.title,
                body=desired_issue.description,
                labels=desired_issue.labels,
                milestone=milestone_number,
            )
        except UnprocessableEntityError as exc:
            if exc.invalid_labels:
                logger.error(
                    "Failed to create issue, one or more labels might not exist or are invalid",
                    issue_title=desired_issue.title,
                    labels=desired_issue.labels,
                    body=exc.body,
                )
            else:
                logger.error("Failed to create issue, continuing", issue_title=desired_issue.title, error=str(exc))
            result.record_error(desired_issue.title, exc)
        except (GitHubException, GitHubRequestError) as exc:
            logger.error("Failed to create issue, continuing", issue_title=desired_issue.title, error=str(exc))
            result.record_error(desired_issue.title, exc)
        else:
            logger.info("Created issue", issue_title=desired_issue.title)
            existing_issue_titles.add(desired_issue.title)
            result.created.append(desired_issue.title)
        await asyncio.sleep(request_delay)

    logger.info("Finished processing issues", created=result.created_count, existing=len(result.existing), failed=len(result.errors))
    return result
