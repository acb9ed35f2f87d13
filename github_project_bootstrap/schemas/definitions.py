"""Pydantic schemas for the label, milestone and issue definition documents."""

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_COLOR_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")


class LabelDefinition(BaseModel):
    """Pydantic model for a label definition in labels.json."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    description: str | None = None
    color: str

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        """Accept a six digit hex color, tolerating a leading '#'."""
        color = value.strip().removeprefix("#")
        if not HEX_COLOR_PATTERN.match(color):
            raise ValueError(f"color must be a six digit hex code such as 'ff0000', got {value!r}")
        return color.lower()


class MilestoneDefinition(BaseModel):
    """Pydantic model for a milestone definition in milestones.json."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str | None = None
    due_on: datetime | None = None

    @field_validator("due_on")
    @classmethod
    def validate_due_on(cls, value: datetime | None) -> datetime | None:
        """Treat a date or a datetime without an offset as UTC."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class IssueDefinition(BaseModel):
    """Pydantic model for an issue definition in issues.json.

    Labels are referenced by name and milestones by title.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str | None = None
    labels: list[str] = Field(default_factory=list)
    milestone_title: str | None = None

    @field_validator("labels", mode="before")
    @classmethod
    def validate_labels(cls, value: Any) -> Any:
        """Read an explicit null as no labels."""
        return [] if value is None else value


class ProjectDefinitions(BaseModel):
    """All definitions consumed by a single bootstrap run."""

    labels: list[LabelDefinition]
    milestones: list[MilestoneDefinition]
    issues: list[IssueDefinition]
