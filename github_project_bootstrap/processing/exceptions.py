"""Custom exceptions for the processing module."""

from typing import Any


class DefinitionProcessingError(Exception):
    """Raised when errors are encountered while reading definition documents."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Errors encountered while processing definition documents.")
        self.errors = errors
