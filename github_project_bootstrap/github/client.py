"""Sets up the authenticated githubkit client."""

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from github_project_bootstrap.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_REQUEST_TIMEOUT


async def get_github_token_client(
    github_token: str,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> GitHub[TokenAuthStrategy]:
    """Returns a GitHub client authenticated with an access token.

    HTTP caching is disabled to always get fresh data, and githubkit's own
    retry handling is turned off so that every request is sent exactly once.
    Supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_token:
        raise RuntimeError("GitHub token authentication requires a github_token.")
    return GitHub(
        auth=TokenAuthStrategy(github_token),
        base_url=github_api_url,
        timeout=timeout,
        http_cache=False,
        auto_retry=False,
    )
