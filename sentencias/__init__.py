from .browse import (
    BrowseSession,
    ExactMatch,
    FetchFailed,
    FilterInputs,
    NoFilter,
    Page,
    Paginator,
    PrefixRange,
    SortSpec,
    build_query,
)
from .logging_utils import setup_logging

__all__ = [
    "BrowseSession",
    "ExactMatch",
    "FetchFailed",
    "FilterInputs",
    "NoFilter",
    "Page",
    "Paginator",
    "PrefixRange",
    "SortSpec",
    "build_query",
    "setup_logging",
]
__version__ = "0.1.0"
