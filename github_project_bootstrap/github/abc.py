"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients used by the reconcilers."""

    # Label operations
    @abstractmethod
    async def list_labels(self) -> list[Any]:
        """List all labels for a repository."""
        pass

    @abstractmethod
    async def create_label(self, name: str, color: str, description: str | None = None) -> Any:
        """Create a label for a repository."""
        pass

    # Milestone operations
    @abstractmethod
    async def list_milestones(self, state: Literal["open", "closed", "all"] = "all") -> list[Any]:
        """List all milestones for a repository."""
        pass

    @abstractmethod
    async def create_milestone(
        self,
        title: str,
        state: Literal["open", "closed"] = "open",
        description: str | None = None,
        due_on: datetime | None = None,
    ) -> Any:
        """Create a milestone for a repository."""
        pass

    # Issue operations
    @abstractmethod
    async def list_issues(self, state: Literal["open", "closed", "all"] = "all") -> list[Any]:
        """List all issues (excluding pull requests) for a repository."""
        pass

    @abstractmethod
    async def create_issue(
        self,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        milestone: int | None = None,
    ) -> Any:
        """Create an issue for a repository."""
        pass
