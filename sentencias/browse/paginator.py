"""Cursor-based paging over a DocumentStore.

The paginator keeps a stack of page boundaries for the current query:
page N is fetched by starting after stack[N - 2] (page 1 has no start
position). Going back pops the stack and re-queries, so a displayed page
always reflects the store as it is now.

State changes only after a successful fetch: on FetchFailed the stack and
the last page are exactly what they were before the call, so retrying the
same action is safe. The page size is fixed by the last successful reset:
next/previous with a different size raise ValueError before any I/O.

Callers must not overlap fetches; a fetch that was superseded by a reset
while in flight is dropped and the current page is returned instead.
"""

from __future__ import annotations

import logging

from sentencias.browse.errors import FetchFailed
from sentencias.browse.query_builder import QueryPlan
from sentencias.browse.schemas import Page
from sentencias.db.repo.document_store import DocumentStore
from sentencias.db.repo.schemas import COLLECTION, Cursor


class Paginator:
    def __init__(
        self,
        store: DocumentStore,
        *,
        collection: str = COLLECTION,
        exact_end: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.store = store
        self.collection = collection
        # True: запрашиваем page_size + 1 и по лишней записи узнаём, есть ли ещё данные
        self.exact_end = exact_end
        self.logger = logger or logging.getLogger("sentencias")

        self._stack: list[Cursor] = []
        self.last_page: Page | None = None
        # размер страницы фиксирован на всю сессию, меняется только через reset
        self._page_size: int | None = None
        self._epoch = 0

    # ---------- read-only views ----------

    @property
    def cursor_stack(self) -> tuple[Cursor, ...]:
        return tuple(self._stack)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def has_next(self) -> bool:
        return self.last_page is not None and self.last_page.next_cursor is not None

    @property
    def has_previous(self) -> bool:
        return bool(self._stack)

    @property
    def page_number(self) -> int:
        return len(self._stack) + 1

    # ---------- fetch ----------

    async def _fetch(self, plan: QueryPlan, page_size: int, start_after: Cursor | None) -> Page:
        limit = page_size + 1 if self.exact_end else page_size
        try:
            docs = await self.store.query(self.collection, plan.predicates, plan.order_by, limit, start_after)
        except Exception as e:
            self.logger.warning("page_fetch failed order_by=%s error=%s", plan.order_by.field, e)
            raise FetchFailed(str(e) or e.__class__.__name__) from e

        if self.exact_end:
            has_more = len(docs) > page_size
            docs = docs[:page_size]
            next_cursor = docs[-1].cursor if has_more else None
        else:
            # короткая страница = последняя; полная последняя страница даст ещё один пустой запрос
            docs = docs[:page_size]
            next_cursor = docs[-1].cursor if docs and len(docs) == page_size else None

        page = Page(records=tuple(d.record for d in docs), next_cursor=next_cursor)
        self.logger.debug(
            "page_fetch ok order_by=%s dir=%s records=%d has_next=%s",
            plan.order_by.field,
            plan.order_by.direction,
            len(page.records),
            next_cursor is not None,
        )
        return page

    def _commit(self, epoch: int, stack: list[Cursor], page: Page, page_size: int | None = None) -> Page | None:
        if epoch != self._epoch:
            self.logger.debug("page_fetch discarded stale epoch=%d current=%d", epoch, self._epoch)
            return self.last_page
        self._stack = stack
        if page_size is not None:
            self._page_size = page_size
        self.last_page = page
        return page

    @staticmethod
    def _check_page_size(page_size: int) -> None:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")

    def _check_session_page_size(self, page_size: int) -> None:
        self._check_page_size(page_size)
        if self._page_size is not None and page_size != self._page_size:
            raise ValueError(
                f"page_size is fixed at {self._page_size} for this session, got {page_size}; reset to change it"
            )

    async def reset_and_fetch_first_page(self, plan: QueryPlan, page_size: int) -> Page | None:
        """Start a new session for `plan`; must follow any filter, sort or page-size change."""
        self._check_page_size(page_size)
        self._epoch += 1
        epoch = self._epoch
        self.logger.info(
            "paging reset order_by=%s dir=%s filters=%d page_size=%d",
            plan.order_by.field,
            plan.order_by.direction,
            len(plan.predicates),
            page_size,
        )
        page = await self._fetch(plan, page_size, None)
        return self._commit(epoch, [], page, page_size)

    async def fetch_next(self, plan: QueryPlan, page_size: int) -> Page | None:
        """No-op (returns the current page) when there is no next cursor."""
        self._check_session_page_size(page_size)
        if not self.has_next:
            return self.last_page
        epoch = self._epoch
        cursor = self.last_page.next_cursor
        stack = [*self._stack, cursor]
        page = await self._fetch(plan, page_size, cursor)
        return self._commit(epoch, stack, page)

    async def fetch_previous(self, plan: QueryPlan, page_size: int) -> Page | None:
        """No-op on page 1; otherwise pop one boundary and re-query from the new top."""
        self._check_session_page_size(page_size)
        if not self._stack:
            return self.last_page
        epoch = self._epoch
        stack = self._stack[:-1]
        page = await self._fetch(plan, page_size, stack[-1] if stack else None)
        return self._commit(epoch, stack, page)
