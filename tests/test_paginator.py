import asyncio
import logging

import pytest

from sentencias.browse.errors import FetchFailed
from sentencias.browse.paginator import Paginator
from sentencias.browse.query_builder import QueryPlan, build_query
from sentencias.browse.schemas import ExactMatch, NoFilter, PrefixRange, SortSpec
from sentencias.db.repo.errors import StorageError
from sentencias.db.repo.schemas import OrderBy, Predicate

BY_YEAR_DESC = build_query(NoFilter(), SortSpec("anio", "desc"))


def _ids(page):
    return [r.id for r in page.records]


def test_three_pages_by_year_desc(store, seed):
    seed(120)
    p = Paginator(store)

    async def walk():
        first = await p.reset_and_fetch_first_page(BY_YEAR_DESC, 50)
        second = await p.fetch_next(BY_YEAR_DESC, 50)
        third = await p.fetch_next(BY_YEAR_DESC, 50)
        return first, second, third

    first, second, third = asyncio.run(walk())

    assert len(first.records) == 50
    years = [r.anio for r in first.records]
    assert years == sorted(years, reverse=True)
    assert first.next_cursor is not None
    assert len(second.records) == 50
    assert len(third.records) == 20
    assert third.next_cursor is None
    assert p.page_number == 3

    all_ids = _ids(first) + _ids(second) + _ids(third)
    assert len(set(all_ids)) == 120


def test_exact_sala_single_short_page(store, seed):
    seed(3, sala_num=2)
    seed(40, start=3, sala_num=5)
    p = Paginator(store)

    page = asyncio.run(p.reset_and_fetch_first_page(build_query(ExactMatch.category("2"), SortSpec()), 50))

    assert len(page.records) == 3
    assert all(r.sala_num == 2 for r in page.records)
    assert page.next_cursor is None
    assert not p.has_next


def test_unmatched_prefix_is_empty_page(store, seed):
    seed(10)
    p = Paginator(store)

    page = asyncio.run(p.reset_and_fetch_first_page(build_query(PrefixRange.case_reference("AA-"), SortSpec()), 50))

    assert page.records == ()
    assert page.next_cursor is None


def test_two_steps_back_return_first_page(store, seed):
    seed(120)
    p = Paginator(store)

    async def walk():
        first = await p.reset_and_fetch_first_page(BY_YEAR_DESC, 50)
        await p.fetch_next(BY_YEAR_DESC, 50)
        await p.fetch_next(BY_YEAR_DESC, 50)
        await p.fetch_previous(BY_YEAR_DESC, 50)
        back = await p.fetch_previous(BY_YEAR_DESC, 50)
        return first, back

    first, back = asyncio.run(walk())

    assert _ids(back) == _ids(first)
    assert p.cursor_stack == ()
    assert not p.has_previous


@pytest.mark.parametrize("total,page_size", [(0, 5), (7, 5), (10, 5), (11, 3), (4, 10)])
def test_next_terminates_and_respects_page_bound(store, seed, total, page_size):
    seed(total)
    p = Paginator(store)

    async def walk():
        pages = [await p.reset_and_fetch_first_page(BY_YEAR_DESC, page_size)]
        while p.has_next:
            pages.append(await p.fetch_next(BY_YEAR_DESC, page_size))
            assert len(pages) <= total + 2
        return pages

    pages = asyncio.run(walk())

    for page in pages:
        assert len(page.records) <= page_size
        assert (page.next_cursor is None) == (len(page.records) < page_size)
    assert sum(len(pg.records) for pg in pages) == total


def test_full_last_page_costs_one_empty_fetch(store, seed):
    seed(100)
    p = Paginator(store)

    async def walk():
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 50)
        second = await p.fetch_next(BY_YEAR_DESC, 50)
        third = await p.fetch_next(BY_YEAR_DESC, 50)
        return second, third

    second, third = asyncio.run(walk())

    assert second.next_cursor is not None
    assert third.records == ()
    assert third.next_cursor is None


def test_exact_end_detects_full_last_page(flaky_store, seed):
    seed(100)
    p = Paginator(flaky_store, exact_end=True)

    async def walk():
        first = await p.reset_and_fetch_first_page(BY_YEAR_DESC, 50)
        second = await p.fetch_next(BY_YEAR_DESC, 50)
        return first, second

    first, second = asyncio.run(walk())

    assert len(first.records) == 50
    assert first.next_cursor is not None
    assert len(second.records) == 50
    assert second.next_cursor is None
    assert [c["limit"] for c in flaky_store.calls] == [51, 51]
    assert set(_ids(first)).isdisjoint(_ids(second))


def test_next_and_previous_are_noops_at_the_edges(flaky_store, seed):
    seed(5)
    p = Paginator(flaky_store)

    async def walk():
        first = await p.reset_and_fetch_first_page(BY_YEAR_DESC, 50)
        return first, await p.fetch_next(BY_YEAR_DESC, 50), await p.fetch_previous(BY_YEAR_DESC, 50)

    first, after_next, after_prev = asyncio.run(walk())

    assert after_next is first
    assert after_prev is first
    assert len(flaky_store.calls) == 1


def test_fetch_next_before_any_page_is_a_noop(store):
    p = Paginator(store)
    assert asyncio.run(p.fetch_next(BY_YEAR_DESC, 10)) is None
    assert asyncio.run(p.fetch_previous(BY_YEAR_DESC, 10)) is None


def test_reset_clears_cursor_stack(store, seed):
    seed(30)
    p = Paginator(store)
    other = build_query(NoFilter(), SortSpec("expediente", "asc"))

    async def walk():
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 10)
        await p.fetch_next(BY_YEAR_DESC, 10)
        await p.fetch_next(BY_YEAR_DESC, 10)
        assert len(p.cursor_stack) == 2
        return await p.reset_and_fetch_first_page(other, 10)

    page = asyncio.run(walk())

    assert p.cursor_stack == ()
    assert p.page_number == 1
    exps = [r.expediente for r in page.records]
    assert exps == sorted(exps)
    assert exps[0] == "00000"


@pytest.mark.parametrize("step", ["next", "previous", "reset"])
def test_failure_leaves_state_untouched_and_retry_works(flaky_store, seed, step):
    seed(30)
    p = Paginator(flaky_store)

    async def setup():
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 10)
        await p.fetch_next(BY_YEAR_DESC, 10)

    asyncio.run(setup())
    stack_before, page_before = p.cursor_stack, p.last_page

    actions = {
        "next": lambda: p.fetch_next(BY_YEAR_DESC, 10),
        "previous": lambda: p.fetch_previous(BY_YEAR_DESC, 10),
        "reset": lambda: p.reset_and_fetch_first_page(BY_YEAR_DESC, 10),
    }

    flaky_store.fail_with = StorageError("disk I/O error")
    with pytest.raises(FetchFailed) as exc:
        asyncio.run(actions[step]())

    assert exc.value.reason == "disk I/O error"
    assert isinstance(exc.value.__cause__, StorageError)
    assert p.cursor_stack == stack_before
    assert p.last_page is page_before

    flaky_store.fail_with = None
    page = asyncio.run(actions[step]())
    assert page is p.last_page
    assert p.page_number == {"next": 3, "previous": 1, "reset": 1}[step]


def test_store_rejection_surfaces_as_fetch_failed(store, seed):
    seed(5)
    p = Paginator(store)
    # range filter with a different order field: the store has no index for it
    plan = QueryPlan(
        predicates=(Predicate("expediente", ">=", "0"), Predicate("expediente", "<=", "1")),
        order_by=OrderBy("anio", "asc"),
    )

    with pytest.raises(FetchFailed) as exc:
        asyncio.run(p.reset_and_fetch_first_page(plan, 10))

    assert "ordering by 'expediente'" in exc.value.reason
    assert p.last_page is None


def test_failure_is_logged(flaky_store, caplog):
    p = Paginator(flaky_store)
    flaky_store.fail_with = RuntimeError("network down")
    caplog.set_level(logging.WARNING, logger="sentencias")

    with pytest.raises(FetchFailed):
        asyncio.run(p.reset_and_fetch_first_page(BY_YEAR_DESC, 10))

    assert any("page_fetch failed" in r.getMessage() for r in caplog.records)


def test_stale_next_is_discarded_after_reset(gated_store, seed):
    seed(30)
    p = Paginator(gated_store)
    by_exp = build_query(NoFilter(), SortSpec("expediente", "asc"))

    async def race():
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 10)
        gate = asyncio.Event()
        gated_store.gate = gate
        pending = asyncio.create_task(p.fetch_next(BY_YEAR_DESC, 10))
        await asyncio.sleep(0)
        fresh = await p.reset_and_fetch_first_page(by_exp, 10)
        gate.set()
        stale = await pending
        return fresh, stale

    fresh, stale = asyncio.run(race())

    assert stale is fresh
    assert p.last_page is fresh
    assert p.cursor_stack == ()


@pytest.mark.parametrize("bad", [0, -1, 2.5, True])
def test_invalid_page_size(store, bad):
    p = Paginator(store)
    with pytest.raises(ValueError):
        asyncio.run(p.reset_and_fetch_first_page(BY_YEAR_DESC, bad))


@pytest.mark.parametrize("step", ["next", "previous"])
def test_page_size_is_fixed_until_reset(flaky_store, seed, step):
    seed(40)
    p = Paginator(flaky_store)

    async def setup():
        first = await p.reset_and_fetch_first_page(BY_YEAR_DESC, 10)
        await p.fetch_next(BY_YEAR_DESC, 10)
        return first

    first = asyncio.run(setup())
    calls = len(flaky_store.calls)
    fetch = p.fetch_next if step == "next" else p.fetch_previous

    with pytest.raises(ValueError, match="fixed at 10"):
        asyncio.run(fetch(BY_YEAR_DESC, 20))

    assert len(flaky_store.calls) == calls
    assert p.page_number == 2

    back = asyncio.run(p.fetch_previous(BY_YEAR_DESC, 10))
    assert _ids(back) == _ids(first)


def test_reset_changes_the_fixed_page_size(store, seed):
    seed(40)
    p = Paginator(store)

    async def walk():
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 10)
        await p.fetch_next(BY_YEAR_DESC, 10)
        await p.reset_and_fetch_first_page(BY_YEAR_DESC, 20)
        return await p.fetch_next(BY_YEAR_DESC, 20)

    second = asyncio.run(walk())

    assert len(second.records) == 20
    assert p.page_number == 2
