"""Errors surfaced by the paging engine."""


class FetchFailed(Exception):
    """A page fetch failed; `reason` is meant to be shown to the user as-is."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
