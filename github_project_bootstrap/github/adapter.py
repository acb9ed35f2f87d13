"""GitHub client adapter for the githubkit library."""

import asyncio
from datetime import datetime
from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.utils import UNSET
from githubkit.versions.latest.models import Issue, Label, Milestone
from pydantic import ValidationError

from github_project_bootstrap.configuration.models import BootstrapConfig
from github_project_bootstrap.utils.constants import DEFAULT_PER_PAGE, GITHUB_API_VERSION, NEXT_PAGE_LINK_RELATION
from github_project_bootstrap.utils.rate_limit import warn_on_rate_limit

from .abc import GitHubClientBase
from .client import get_github_token_client
from .exceptions import GitHubRequestError, UnexpectedStatusError, UnprocessableEntityError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
T = TypeVar("T")


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except ValueError:
                    error_data = {}
                if not isinstance(error_data, dict):
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.debug(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=str(getattr(exc.response, "url", None)),
                    status_code=422,
                )
                raise UnprocessableEntityError(
                    f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}",
                    errors=errors,
                    body=exc.response.text,
                ) from exc
            raise

    return wrapper  # type: ignore


def is_pull_request(issue: Any) -> bool:
    """Return True if an item from the issues endpoint is actually a pull request."""
    pull_request = getattr(issue, "pull_request", None)
    return pull_request is not None and pull_request is not UNSET


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: Any, owner: str, repo_name: str, request_delay: float = 0.0) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name
        self.request_delay = request_delay
        self.headers = {"X-GitHub-Api-Version": GITHUB_API_VERSION}

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(cls, config: BootstrapConfig) -> Self:
        """Create a new GitHub client adapter from the reconciled configuration.

        Args:
            config: Reconciled configuration holding the token, repository,
                API URL, request timeout and request delay

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=config.github_api_url,
            owner=config.owner,
            repo_name=config.repo_name,
        )
        client = await get_github_token_client(
            github_token=config.github_token,
            github_api_url=config.github_api_url,
            timeout=config.request_timeout,
        )
        return cls(client, config.owner, config.repo_name, request_delay=config.request_delay)

    @staticmethod
    def _expect_status(response: Response[Any], expected_status: int, action: str) -> None:
        """Raise UnexpectedStatusError unless the response carries the expected status code."""
        if response.status_code != expected_status:
            raise UnexpectedStatusError(
                f"Unexpected status {response.status_code} while trying to {action} (expected {expected_status})",
                status_code=response.status_code,
                body=response.text,
            )

    @staticmethod
    def _parse_response(response: Response[T], action: str) -> T:
        """Return the parsed body, raising GitHubRequestError if it does not match the githubkit model.

        Older GitHub Enterprise Server releases can omit fields that newer
        models require.
        """
        try:
            return response.parsed_data
        except ValidationError as exc:
            logger.warning(
                "GitHub response body did not match the expected schema",
                action=action,
                status_code=response.status_code,
                error_count=exc.error_count(),
            )
            raise GitHubRequestError(
                f"Unexpected response body while trying to {action}: {exc.error_count()} validation error(s)",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def _paginate(self, fetch_page: Callable[[int], Awaitable[Response[list[T]]]], resource: str) -> list[T]:
        """Fetch every page of a list endpoint.

        Pages are requested sequentially, sleeping the request delay between
        them, until a page is empty or the Link header has no next relation.
        """
        all_items: list[T] = []
        page: int = 1
        while True:
            logger.info("Fetching existing resources", resource=resource, page=page)
            response = await fetch_page(page)
            self._expect_status(response, 200, f"list {resource}")
            items: list[T] = self._parse_response(response, f"list {resource}")
            if not items:
                break
            all_items.extend(items)
            logger.debug("Fetched page of resources", resource=resource, page=page, count=len(items))
            if NEXT_PAGE_LINK_RELATION not in response.headers.get("link", ""):
                break
            page += 1
            await asyncio.sleep(self.request_delay)
        logger.info("Fetched all existing resources", resource=resource, total=len(all_items))
        return all_items

    # Label operations
    async def list_labels(self) -> list[Label]:
        """List all labels for a repository, handling pagination."""

        @warn_on_rate_limit()
        async def _fetch_page(page: int) -> Response[list[Label]]:
            return await self.client.rest.issues.async_list_labels_for_repo(
                owner=self.owner,
                repo=self.repo_name,
                per_page=DEFAULT_PER_PAGE,
                page=page,
                headers=self.headers,
            )

        return await self._paginate(_fetch_page, "labels")

    @handle_github_422
    @warn_on_rate_limit()
    async def create_label(self, name: str, color: str, description: str | None = None) -> Label:
        """Create a label for a repository."""
        params = self._omit_null_parameters(
            name=name,
            color=color,
            description=description or None,
        )
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=self.owner,
            repo=self.repo_name,
            headers=self.headers,
            **params,
        )
        self._expect_status(response, 201, f"create label '{name}'")
        return self._parse_response(response, f"create label '{name}'")

    # Milestone operations
    async def list_milestones(self, state: Literal["open", "closed", "all"] = "all") -> list[Milestone]:
        """List all milestones for a repository, handling pagination."""

        @warn_on_rate_limit()
        async def _fetch_page(page: int) -> Response[list[Milestone]]:
            return await self.client.rest.issues.async_list_milestones(
                owner=self.owner,
                repo=self.repo_name,
                state=state,
                per_page=DEFAULT_PER_PAGE,
                page=page,
                headers=self.headers,
            )

        return await self._paginate(_fetch_page, "milestones")

    @handle_github_422
    @warn_on_rate_limit()
    async def create_milestone(
        self,
        title: str,
        state: Literal["open", "closed"] = "open",
        description: str | None = None,
        due_on: datetime | None = None,
    ) -> Milestone:
        """Create a milestone for a repository."""
        params = self._omit_null_parameters(
            title=title,
            state=state,
            description=description or None,
            due_on=due_on,
        )
        response: Response[Milestone] = await self.client.rest.issues.async_create_milestone(
            owner=self.owner,
            repo=self.repo_name,
            headers=self.headers,
            **params,
        )
        self._expect_status(response, 201, f"create milestone '{title}'")
        return self._parse_response(response, f"create milestone '{title}'")

    # Issue operations
    async def list_issues(self, state: Literal["open", "closed", "all"] = "all") -> list[Issue]:
        """List all issues for a repository, handling pagination and skipping pull requests."""

        @warn_on_rate_limit()
        async def _fetch_page(page: int) -> Response[list[Issue]]:
            return await self.client.rest.issues.async_list_for_repo(
                owner=self.owner,
                repo=self.repo_name,
                state=state,
                per_page=DEFAULT_PER_PAGE,
                page=page,
                headers=self.headers,
            )

        items = await self._paginate(_fetch_page, "issues")
        return [item for item in items if not is_pull_request(item)]

    @handle_github_422
    @warn_on_rate_limit()
    async def create_issue(
        self,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        milestone: int | None = None,
    ) -> Issue:
        """Create an issue for a repository."""
        params = self._omit_null_parameters(
            title=title,
            body=body if body is not None else "",
            labels=labels or None,  # type: ignore
            milestone=milestone,
        )
        response: Response[Issue] = await self.client.rest.issues.async_create(
            owner=self.owner,
            repo=self.repo_name,
            headers=self.headers,
            **params,
        )
        self._expect_status(response, 201, f"create issue '{title}'")
        return self._parse_response(response, f"create issue '{title}'")
