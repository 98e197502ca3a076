"""Typed exceptions for the document store (no logic)."""


class ValidationError(Exception):
    """Client error: bad query parameters (unknown field, bad limit, foreign cursor)."""


class StorageError(Exception):
    """Persistent storage failure (DB/file I/O)."""


class IndexRequiredError(StorageError):
    """The filter/order combination needs an index the store does not have."""
