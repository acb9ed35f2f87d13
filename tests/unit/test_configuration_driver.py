"""Unit tests for the configuration driver module."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

from github_project_bootstrap.configuration import driver
from github_project_bootstrap.configuration.models import BootstrapConfig


def test_get_bootstrap_config_returns_reconciled_config() -> None:
    """Test that get_bootstrap_config runs reconciliation and returns its result."""
    fake_config = BootstrapConfig(
        debug=False,
        github_api_url="https://api.github.com",
        github_token="token",
        repo="owner/repo",
        owner="owner",
        repo_name="repo",
        labels_path=Path("labels.json"),
        milestones_path=Path("milestones.json"),
        issues_path=Path("issues.json"),
        request_delay=1.0,
        request_timeout=20.0,
    )
    with patch(
        "github_project_bootstrap.configuration.reconcile.reconcile_bootstrap_configuration",
        new=AsyncMock(return_value=fake_config),
    ) as mock_reconcile:
        result = driver.get_bootstrap_config(github_token="token", repo="owner/repo", request_delay=1.0)

    mock_reconcile.assert_awaited_once()
    assert mock_reconcile.await_args is not None
    assert mock_reconcile.await_args.kwargs["cli_github_token"] == "token"
    assert mock_reconcile.await_args.kwargs["cli_repo"] == "owner/repo"
    assert mock_reconcile.await_args.kwargs["cli_request_delay"] == 1.0
    assert result == fake_config
