"""Models shared by the synchronization passes."""

from enum import Enum


class SyncDecision(str, Enum):
    """Decision taken for a single desired entity."""

    CREATE = "create"
    NOOP = "noop"
