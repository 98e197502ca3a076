"""Caller-facing browsing session: filter/sort/page-size state plus navigation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sentencias.browse.errors import FetchFailed
from sentencias.browse.paginator import Paginator
from sentencias.browse.query_builder import QueryPlan, build_query
from sentencias.browse.schemas import DEFAULT_PAGE_SIZE, FilterSpec, NoFilter, Page, SortSpec
from sentencias.db.repo.document_store import DocumentStore
from sentencias.db.repo.schemas import COLLECTION


class BrowseSession:
    """
    One (filter, sort, page size) browsing session over the decisions collection.

    Every identity change (set_filter / set_sort / set_page_size) resets paging and
    loads page 1. `can_next` / `can_previous` describe the page currently shown,
    not an in-flight fetch. Fetch errors are kept in `error` and re-raised as FetchFailed.
    """

    def __init__(  # noqa: PLR0913
        self,
        store: DocumentStore,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: SortSpec | None = None,
        filter_spec: FilterSpec | None = None,
        composite_indexes: Iterable[tuple[str, str]] = (),
        collection: str = COLLECTION,
        exact_end: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.logger = logger or logging.getLogger("sentencias")
        self.paginator = Paginator(store, collection=collection, exact_end=exact_end, logger=self.logger)
        self.composite_indexes = frozenset(composite_indexes)

        self._filter: FilterSpec = filter_spec or NoFilter()
        self._sort = sort or SortSpec()
        self._page_size = page_size

        self.error: str | None = None
        self._identity = 0
        # пока первая страница текущего запроса не загружена, навигация запрещена
        self._needs_reset = True

    # ---------- state ----------

    @property
    def filter_spec(self) -> FilterSpec:
        return self._filter

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def identity(self) -> int:
        return self._identity

    @property
    def plan(self) -> QueryPlan:
        return build_query(self._filter, self._sort, composite_indexes=self.composite_indexes)

    @property
    def effective_sort(self) -> SortSpec:
        return self.plan.effective_sort

    @property
    def page(self) -> Page | None:
        return None if self._needs_reset else self.paginator.last_page

    @property
    def page_number(self) -> int:
        # старый стек курсоров к новому запросу не относится
        return 1 if self._needs_reset else self.paginator.page_number

    @property
    def can_next(self) -> bool:
        return not self._needs_reset and self.paginator.has_next

    @property
    def can_previous(self) -> bool:
        return not self._needs_reset and self.paginator.has_previous

    # ---------- identity changes ----------

    async def set_filter(self, filter_spec: FilterSpec | None) -> Page | None:
        self._filter = filter_spec or NoFilter()
        return await self.refresh()

    async def set_sort(self, sort: SortSpec) -> Page | None:
        self._sort = sort
        return await self.refresh()

    async def set_page_size(self, page_size: int) -> Page | None:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
        self._page_size = page_size
        return await self.refresh()

    async def refresh(self) -> Page | None:
        """Drop all cursors and load page 1 for the current identity."""
        self._identity += 1
        identity = self._identity
        self._needs_reset = True
        try:
            page = await self.paginator.reset_and_fetch_first_page(self.plan, self._page_size)
        except FetchFailed as e:
            if identity == self._identity:
                self.error = e.reason
            raise
        if identity == self._identity:
            self.error = None
            self._needs_reset = False
        return page

    # ---------- navigation ----------

    async def next(self) -> bool:
        """Step forward; True if the page changed."""
        if not self.can_next:
            return False
        return await self._step(self.paginator.fetch_next)

    async def previous(self) -> bool:
        """Step back; True if the page changed."""
        if not self.can_previous:
            return False
        return await self._step(self.paginator.fetch_previous)

    async def _step(self, fetch) -> bool:
        identity = self._identity
        before = self.paginator.page_number
        try:
            await fetch(self.plan, self._page_size)
        except FetchFailed as e:
            if identity == self._identity:
                self.error = e.reason
            raise
        if identity != self._identity:
            return False
        self.error = None
        return self.paginator.page_number != before
