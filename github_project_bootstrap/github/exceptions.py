"""Exceptions raised by the GitHub adapter."""

from typing import Any


class GitHubRequestError(Exception):
    """Raised when GitHub answers a request with an unusable response."""

    def __init__(self, message: str, status_code: int, body: str) -> None:
        """Initialize the exception with the response status code and raw body."""
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnexpectedStatusError(GitHubRequestError):
    """Raised when a request succeeds with a status code other than the expected one."""

    pass


class UnprocessableEntityError(GitHubRequestError):
    """Raised when GitHub rejects a request with 422 Unprocessable Entity."""

    def __init__(self, message: str, errors: list[Any], body: str) -> None:
        """Initialize the exception with GitHub's validation message and error list."""
        super().__init__(message, status_code=422, body=body)
        self.errors = errors

    @property
    def already_exists(self) -> bool:
        """Whether GitHub rejected the request because the resource already exists."""
        if any(isinstance(error, dict) and error.get("code") == "already_exists" for error in self.errors):
            return True
        return "already_exists" in self.body

    @property
    def invalid_labels(self) -> bool:
        """Whether GitHub rejected the request because of one or more labels."""
        if any(isinstance(error, dict) and error.get("field") == "labels" for error in self.errors):
            return True
        return "invalid label" in self.body.lower()
