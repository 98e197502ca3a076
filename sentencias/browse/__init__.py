"""Filtered, sorted, cursor-paged browsing of the decisions collection."""

from .errors import FetchFailed
from .paginator import Paginator
from .query_builder import QueryPlan, build_query
from .schemas import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_CHOICES,
    ExactMatch,
    FilterInputs,
    FilterSpec,
    NoFilter,
    Page,
    PrefixRange,
    SortSpec,
)
from .session import BrowseSession

__all__ = [
    "BrowseSession",
    "DEFAULT_PAGE_SIZE",
    "ExactMatch",
    "FetchFailed",
    "FilterInputs",
    "FilterSpec",
    "NoFilter",
    "PAGE_SIZE_CHOICES",
    "Page",
    "Paginator",
    "PrefixRange",
    "QueryPlan",
    "SortSpec",
    "build_query",
]
