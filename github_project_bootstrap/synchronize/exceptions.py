"""Exceptions raised by the synchronization passes."""


class MilestoneFetchError(Exception):
    """Raised when existing milestones cannot be listed.

    Issue linking depends on the milestone title to number map, so this error
    aborts the run.
    """

    pass
