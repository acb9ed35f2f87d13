"""Fixtures for unit tests."""

from datetime import datetime
from types import SimpleNamespace
from typing import Any, Generator, Literal

import pytest
import structlog

from github_project_bootstrap.github.abc import GitHubClientBase
from github_project_bootstrap.github.exceptions import UnprocessableEntityError


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog and structlog.testing.capture_logs."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


class FakeGitHubAdapter(GitHubClientBase):
    """In-memory stand-in for a repository, recording every create call."""

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self.labels: list[SimpleNamespace] = []
        self.milestones: list[SimpleNamespace] = []
        self.issues: list[SimpleNamespace] = []
        self.create_calls: list[tuple[str, dict[str, Any]]] = []

    def add_label(self, name: str) -> None:
        """Seed an existing label."""
        self.labels.append(SimpleNamespace(name=name))

    def add_milestone(self, title: str, state: str = "open") -> int:
        """Seed an existing milestone and return its number."""
        number = len(self.milestones) + 1
        self.milestones.append(SimpleNamespace(title=title, number=number, state=state))
        return number

    def add_issue(self, title: str) -> None:
        """Seed an existing issue."""
        self.issues.append(SimpleNamespace(title=title, number=len(self.issues) + 1))

    async def list_labels(self) -> list[Any]:
        return list(self.labels)

    async def create_label(self, name: str, color: str, description: str | None = None) -> Any:
        self.create_calls.append(("label", {"name": name, "color": color, "description": description}))
        if any(label.name == name for label in self.labels):
            raise UnprocessableEntityError(
                "Validation Failed",
                errors=[{"resource": "Label", "code": "already_exists", "field": "name"}],
                body='{"message": "Validation Failed", "errors": [{"code": "already_exists"}]}',
            )
        label = SimpleNamespace(name=name, color=color, description=description)
        self.labels.append(label)
        return label

    async def list_milestones(self, state: Literal["open", "closed", "all"] = "all") -> list[Any]:
        return [milestone for milestone in self.milestones if state == "all" or milestone.state == state]

    async def create_milestone(
        self,
        title: str,
        state: Literal["open", "closed"] = "open",
        description: str | None = None,
        due_on: datetime | None = None,
    ) -> Any:
        self.create_calls.append(("milestone", {"title": title, "state": state, "description": description, "due_on": due_on}))
        number = self.add_milestone(title, state)
        return self.milestones[number - 1]

    async def list_issues(self, state: Literal["open", "closed", "all"] = "all") -> list[Any]:
        return list(self.issues)

    async def create_issue(
        self,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        milestone: int | None = None,
    ) -> Any:
        self.create_calls.append(("issue", {"title": title, "body": body, "labels": labels, "milestone": milestone}))
        self.add_issue(title)
        return self.issues[-1]

    def created(self, entity_type: str) -> list[dict[str, Any]]:
        """Return the arguments of every create call for one entity type."""
        return [arguments for kind, arguments in self.create_calls if kind == entity_type]


@pytest.fixture
def fake_github_adapter() -> FakeGitHubAdapter:
    """An empty in-memory repository."""
    return FakeGitHubAdapter()
