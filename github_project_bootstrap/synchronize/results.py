"""Contains results of application execution."""

from typing import Any


class ReconciliationResult:
    """Contains results of a single reconciliation pass."""

    def __init__(self, entity_type: str) -> None:
        """Initialize an empty result for the given entity type."""
        self.entity_type = entity_type
        self.created: list[str] = []
        self.existing: list[str] = []
        self.errors: list[dict[str, Any]] = []

    @property
    def created_count(self) -> int:
        """Number of entities created by this pass."""
        return len(self.created)

    def record_error(self, key: str, error: Exception | str) -> None:
        """Record a failure for the entity identified by key."""
        self.errors.append({"entity_type": self.entity_type, "key": key, "error": str(error)})


class MilestoneReconciliationResult(ReconciliationResult):
    """Contains results of the milestone pass, including the title to number map."""

    def __init__(self) -> None:
        """Initialize an empty milestone result."""
        super().__init__("milestone")
        self.milestone_numbers: dict[str, int] = {}


class IssueReconciliationResult(ReconciliationResult):
    """Contains results of the issue pass."""

    def __init__(self) -> None:
        """Initialize an empty issue result."""
        super().__init__("issue")
        self.unresolved_milestones: list[dict[str, str]] = []


class BootstrapResult:
    """Contains results of the whole bootstrap workflow."""

    def __init__(
        self,
        labels: ReconciliationResult,
        milestones: MilestoneReconciliationResult,
        issues: IssueReconciliationResult,
    ) -> None:
        """Initialize the result with the outcome of every pass."""
        self.labels = labels
        self.milestones = milestones
        self.issues = issues

    @property
    def errors(self) -> list[dict[str, Any]]:
        """All per-item errors recorded during the run, in pass order."""
        return self.labels.errors + self.milestones.errors + self.issues.errors

    def summary(self) -> dict[str, int]:
        """Created counts per entity type."""
        return {
            "labels_created": self.labels.created_count,
            "milestones_created": self.milestones.created_count,
            "issues_created": self.issues.created_count,
        }
