"""Reconciled configuration passed explicitly through the application."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BootstrapConfig:
    """Configuration for a single bootstrap run."""

    debug: bool
    github_api_url: str
    github_token: str
    repo: str
    owner: str
    repo_name: str
    labels_path: Path
    milestones_path: Path
    issues_path: Path
    request_delay: float
    request_timeout: float
