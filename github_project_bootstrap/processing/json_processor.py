"""Handles reading and validating the JSON definition documents.

This module provides the DefinitionProcessor class, which loads labels.json,
milestones.json and issues.json, validates every entry against its Pydantic
schema, logs (and ignores) unknown fields, flags duplicate keys and collects
all errors so that a single run reports every problem at once. All logging is
performed using structlog.
"""

import json
from pathlib import Path
from typing import Any, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from structlog.stdlib import BoundLogger

from github_project_bootstrap.processing.exceptions import DefinitionProcessingError
from github_project_bootstrap.schemas.definitions import (
    IssueDefinition,
    LabelDefinition,
    MilestoneDefinition,
    ProjectDefinitions,
)

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

ModelT = TypeVar("ModelT", bound=BaseModel)

COMMENT_MARKERS = ("//", "/*", "#")


class DefinitionProcessor:
    """Loads and validates label, milestone and issue definitions from JSON documents.

    Each document must be a JSON array of objects. Comments are not valid JSON
    and cause the document to be rejected.
    """

    def __init__(self, raise_on_error: bool = True) -> None:
        """Initialize the processor.

        Args:
            raise_on_error (bool): Whether to raise a DefinitionProcessingError when errors were collected.
        """
        self.raise_on_error = raise_on_error

    def load_definitions(self, labels_path: Path, milestones_path: Path, issues_path: Path) -> ProjectDefinitions:
        """Load and validate all three definition documents."""
        errors: list[dict[str, Any]] = []
        labels = self._load_models(labels_path, LabelDefinition, "name", errors)
        milestones = self._load_models(milestones_path, MilestoneDefinition, "title", errors)
        issues = self._load_models(issues_path, IssueDefinition, "title", errors)
        if errors:
            logger.error("One or more errors occurred while processing definitions", errors=errors)
            if self.raise_on_error:
                raise DefinitionProcessingError(errors)
        logger.info(
            "Read definitions",
            label_count=len(labels),
            milestone_count=len(milestones),
            issue_count=len(issues),
        )
        return ProjectDefinitions(labels=labels, milestones=milestones, issues=issues)

    def _load_models(self, path: Path, schema: Type[ModelT], key: str, errors: list[dict[str, Any]]) -> list[ModelT]:
        entries = self._load_json_file(path, errors)
        if entries is None:
            return []
        models: list[ModelT] = []
        seen: set[str] = set()
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning(
                    "Definition entry is not an object and will be skipped",
                    file=str(path),
                    entry_index=idx,
                    actual_type=type(entry).__name__,
                )
                errors.append({"file": str(path), "entry_index": idx, "error": "Definition entry is not an object"})
                continue
            extra_fields = set(entry.keys()) - set(schema.model_fields.keys())
            if extra_fields:
                logger.warning(
                    "Extra fields in definition will be ignored",
                    file=str(path),
                    entry_index=idx,
                    extra_fields=sorted(extra_fields),
                )
            try:
                model = schema.model_validate(entry)
            except ValidationError as ve:
                logger.error("Validation error for definition", file=str(path), entry_index=idx, error=ve.errors())
                errors.append({"file": str(path), "entry_index": idx, "error": ve.errors()})
                continue
            identifier = getattr(model, key)
            if identifier in seen:
                logger.warning("Duplicate definition will only be created once", file=str(path), entry_index=idx, **{key: identifier})
            seen.add(identifier)
            models.append(model)
        logger.debug("Loaded definitions from file", file=str(path), count=len(models))
        return models

    def _load_json_file(self, path: Path, errors: list[dict[str, Any]]) -> list[Any] | None:
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            logger.error("Failed to read definition file", path=str(path), error=str(e))
            errors.append({"file": str(path), "error": str(e)})
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            message = f"Invalid JSON: {e}"
            if _looks_commented(text):
                message += " (comments are not allowed in definition files and must be removed)"
            logger.error("Failed to parse JSON file", path=str(path), error=message)
            errors.append({"file": str(path), "error": message})
            return None
        if not isinstance(data, list):
            logger.error("JSON file is not an array", path=str(path), actual_type=type(data).__name__)
            errors.append({"file": str(path), "error": "JSON document must be an array of definitions"})
            return None
        return data


def _looks_commented(text: str) -> bool:
    """Return True if any line of the document starts with a comment marker."""
    return any(line.lstrip().startswith(COMMENT_MARKERS) for line in text.splitlines())
