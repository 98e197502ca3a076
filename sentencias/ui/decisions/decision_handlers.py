# ui/decisions/decision_handlers.py
from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass

import flet as ft

from sentencias.browse.errors import FetchFailed
from sentencias.browse.schemas import DEFAULT_PAGE_SIZE, FilterInputs, NoFilter, SortSpec
from sentencias.browse.session import BrowseSession

FILTER_PLACEHOLDERS = {
    "year": "Año (ej. 2009)",
    "sala": "Sala num (ej. 2)",
    "exp": "Prefijo expediente",
}


@dataclass
class DecisionsContext:
    session: BrowseSession
    filter_text_ref: ft.Ref[ft.TextField]
    render_table: callable
    _toast: callable
    state: dict  # {"inputs": FilterInputs, "busy": bool}
    table_column_ref: ft.Ref[ft.Column]


_snack = ft.SnackBar(content=ft.Text(""), open=False)


def _toast(page: ft.Page | None, msg: str):
    if page is None:
        return
    _snack.content.value = msg
    _snack.open = True
    if _snack not in page.overlay:
        page.overlay.append(_snack)
    page.update()


def _page_of(ctx: DecisionsContext) -> ft.Page | None:
    return getattr(ctx.filter_text_ref.current, "page", None)


async def _run(ctx: DecisionsContext, action: Awaitable) -> None:
    """Await one session call; one fetch at a time, errors go to the toast."""
    ctx.state["busy"] = True
    ctx.render_table()
    try:
        await action
    except FetchFailed as ex:
        ctx._toast(_page_of(ctx), ex.reason)
    finally:
        ctx.state["busy"] = False
        ctx.render_table()


def _scroll_top(ctx: DecisionsContext) -> None:
    if ctx.table_column_ref.current:
        ctx.table_column_ref.current.scroll_to(offset=0, duration=100)


async def on_select_filter(e: ft.ControlEvent | None, ctx: DecisionsContext, kind: str | None):
    if ctx.state.get("busy"):
        return
    ctx.state["inputs"] = ctx.state["inputs"].activate(kind)

    field = ctx.filter_text_ref.current
    field.value = ""
    field.visible = kind is not None
    field.label = FILTER_PLACEHOLDERS.get(kind, "")
    field.update()

    # остальные поля очищены, значит применённый фильтр больше не действует
    if not isinstance(ctx.session.filter_spec, NoFilter):
        await _run(ctx, ctx.session.set_filter(NoFilter()))
    else:
        ctx.render_table()


async def apply_filter(e: ft.ControlEvent | None, ctx: DecisionsContext):
    if ctx.state.get("busy"):
        return
    inputs = ctx.state["inputs"].with_text(ctx.filter_text_ref.current.value or "")
    try:
        spec = inputs.to_spec()
    except ValueError as ex:
        ctx._toast(_page_of(ctx), str(ex))
        return
    ctx.state["inputs"] = inputs
    await _run(ctx, ctx.session.set_filter(spec))


async def clear_filter(e: ft.ControlEvent | None, ctx: DecisionsContext):
    await on_select_filter(e, ctx, None)


async def on_change_direction(e: ft.ControlEvent, ctx: DecisionsContext):
    if ctx.state.get("busy"):
        return
    direction = "asc" if e.control.value == "asc" else "desc"
    await _run(ctx, ctx.session.set_sort(SortSpec(ctx.session.sort.field, direction)))


async def on_sort_column(e: ft.ControlEvent | None, ctx: DecisionsContext, field: str):
    if ctx.state.get("busy"):
        return
    current = ctx.session.effective_sort
    sort = current.toggled() if field == current.field else SortSpec(field, current.direction)
    await _run(ctx, ctx.session.set_sort(sort))


async def on_change_page_size(e: ft.ControlEvent, ctx: DecisionsContext):
    if ctx.state.get("busy"):
        return
    try:
        size = int(e.control.value)
    except (TypeError, ValueError):
        size = DEFAULT_PAGE_SIZE
    await _run(ctx, ctx.session.set_page_size(size))


async def on_reload(e: ft.ControlEvent | None, ctx: DecisionsContext):
    if ctx.state.get("busy"):
        return
    await _run(ctx, ctx.session.refresh())


async def on_prev(e: ft.ControlEvent | None, ctx: DecisionsContext):
    if ctx.state.get("busy") or not ctx.session.can_previous:
        return
    await _run(ctx, ctx.session.previous())
    _scroll_top(ctx)


async def on_next(e: ft.ControlEvent | None, ctx: DecisionsContext):
    if ctx.state.get("busy") or not ctx.session.can_next:
        return
    await _run(ctx, ctx.session.next())
    _scroll_top(ctx)


def new_state() -> dict:
    return {"inputs": FilterInputs(), "busy": False}
