"""Shared constants used across the application."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API base URL. Override for GitHub Enterprise Server."""

GITHUB_API_VERSION = "2022-11-28"
"""Value sent in the X-GitHub-Api-Version header of every request."""

DEFAULT_PER_PAGE = 100
"""Page size used when listing labels, milestones and issues."""

NEXT_PAGE_LINK_RELATION = 'rel="next"'
"""Marker in the Link response header indicating another page exists."""

MILESTONE_STATE_OPEN = "open"
"""State every created milestone is given."""

# Throttling Constants
# --------------------

DEFAULT_REQUEST_DELAY = 1.0
"""Seconds slept after each creation and between list pages."""

DEFAULT_REQUEST_TIMEOUT = 20.0
"""Per-request timeout in seconds."""

# Definition File Constants
# -------------------------

DEFAULT_LABELS_PATH = "labels.json"
"""Default path to the label definitions document."""

DEFAULT_MILESTONES_PATH = "milestones.json"
"""Default path to the milestone definitions document."""

DEFAULT_ISSUES_PATH = "issues.json"
"""Default path to the issue definitions document."""
