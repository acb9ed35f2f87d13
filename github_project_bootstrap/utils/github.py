"""Contains utility functions for GitHub interactions."""

from github_project_bootstrap.configuration.exceptions import InvalidRepositoryError


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise InvalidRepositoryError("Repository is required in the format 'owner/repo'.")
    parts = [part.strip() for part in repo.split("/")]
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryError(f"Invalid repository '{repo}': expected the format 'owner/repo' with exactly one '/' separator.")
    owner, repository = parts
    return owner, repository
