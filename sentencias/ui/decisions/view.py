"""Decisions screen: filter bar, decisions table and cursor pager.

- All data comes from a BrowseSession; the screen never queries the store itself.
- I18n: takes `t(key: str) -> str`, identity by default.
"""

from __future__ import annotations

import flet as ft

from sentencias.browse.schemas import PAGE_SIZE_CHOICES, NoFilter
from sentencias.browse.session import BrowseSession
from sentencias.db.repo.schemas import DecisionRecord

from .decision_handlers import (
    FILTER_PLACEHOLDERS,
    DecisionsContext,
    _toast,
    apply_filter,
    clear_filter,
    new_state,
    on_change_direction,
    on_change_page_size,
    on_next,
    on_prev,
    on_reload,
    on_select_filter,
    on_sort_column,
)

TABLE_HEADERS: list[tuple[str, str]] = [
    ("Año", "anio"),
    ("Mes", "mes"),
    ("Día", "dia"),
    ("Sala", "sala"),
    ("#", "sala_num"),
    ("Expediente", "expediente"),
    ("Identificador", "identificador"),
    ("URL", "url"),
]

FILTER_BUTTONS: list[tuple[str, str | None]] = [
    ("Año", "year"),
    ("Sala", "sala"),
    ("Expediente", "exp"),
    ("Sin filtro", None),
]


def make_decisions_screen(  # noqa: PLR0915
    session: BrowseSession,
    t=lambda k: k,
) -> ft.Container:
    COL_SPACING = 8
    PAD = 12
    FS_BASE = 12
    TAB_H = 520

    state = new_state()

    root_ref = ft.Ref[ft.Container]()
    table_ref = ft.Ref[ft.DataTable]()
    table_column_ref = ft.Ref[ft.Column]()
    empty_hint_ref = ft.Ref[ft.Text]()
    status_ref = ft.Ref[ft.Text]()
    label_pages_ref = ft.Ref[ft.Text]()
    btn_prev_ref = ft.Ref[ft.ElevatedButton]()
    btn_next_ref = ft.Ref[ft.ElevatedButton]()
    chip_ref = ft.Ref[ft.Row]()
    filter_text_ref = ft.Ref[ft.TextField]()
    direction_ref = ft.Ref[ft.Dropdown]()
    filter_buttons: dict[str | None, ft.ElevatedButton] = {}

    def _txt(v, size=FS_BASE):
        return ft.Text(str(v), size=size)

    def make_row(r: DecisionRecord) -> ft.DataRow:
        async def _open(e, url=r.url):
            e.control.page.launch_url(url)

        return ft.DataRow(
            cells=[
                ft.DataCell(_txt(r.anio)),
                ft.DataCell(_txt(r.mes)),
                ft.DataCell(_txt(r.dia)),
                ft.DataCell(_txt(r.sala)),
                ft.DataCell(_txt(r.sala_num)),
                ft.DataCell(ft.Text(r.expediente, size=FS_BASE, font_family="monospace", selectable=True)),
                ft.DataCell(_txt(r.identificador)),
                ft.DataCell(ft.TextButton(t("Ver"), on_click=_open, disabled=not r.url)),
            ]
        )

    def _apply_state():
        """Copy session state into the controls (no update())."""
        page = session.page
        records = page.records if page else ()
        busy = state["busy"]

        table_ref.current.rows = [make_row(r) for r in records]
        sort = session.effective_sort
        fields = [f for _, f in TABLE_HEADERS]
        table_ref.current.sort_column_index = fields.index(sort.field) if sort.field in fields else None
        table_ref.current.sort_ascending = sort.direction == "asc"

        if busy:
            empty_hint_ref.current.value = t("Cargando…")
        elif page is None:
            empty_hint_ref.current.value = "" if session.error else t("Cargando…")
        elif not records:
            empty_hint_ref.current.value = t("Sin resultados. Intenta ajustar los filtros")
        else:
            empty_hint_ref.current.value = ""

        if session.error:
            status_ref.current.value = f"⚠️ {session.error}"
            status_ref.current.color = ft.Colors.RED
        else:
            status_ref.current.value = f"{len(records)} {t('resultados')}" if records else ""
            status_ref.current.color = None

        label_pages_ref.current.value = f"{t('Página')} {session.page_number}"
        btn_prev_ref.current.disabled = busy or not session.can_previous
        btn_next_ref.current.disabled = busy or not session.can_next

        kind = state["inputs"].kind
        for k, btn in filter_buttons.items():
            btn.bgcolor = ft.Colors.BLUE_600 if k == kind and k is not None else None
            btn.disabled = busy

        label = state["inputs"].active_label()
        chip_ref.current.visible = label is not None and not isinstance(session.filter_spec, NoFilter)
        chip_ref.current.controls[0].value = f"{label[0]}: {label[1]}" if label else ""
        direction_ref.current.value = session.sort.direction

    def render_table():
        _apply_state()
        if root_ref.current is not None and root_ref.current.page is not None:
            root_ref.current.update()

    ctx = DecisionsContext(
        session=session,
        filter_text_ref=filter_text_ref,
        render_table=render_table,
        _toast=_toast,
        state=state,
        table_column_ref=table_column_ref,
    )

    # flet ждёт именно корутинные функции, лямбды не подходят
    def _filter_handler(kind):
        async def _h(e):
            await on_select_filter(e, ctx, kind)

        return _h

    def _sort_handler(field):
        async def _h(e):
            await on_sort_column(e, ctx, field)

        return _h

    async def _apply(e):
        await apply_filter(e, ctx)

    async def _clear(e):
        await clear_filter(e, ctx)

    async def _direction(e):
        await on_change_direction(e, ctx)

    async def _page_size(e):
        await on_change_page_size(e, ctx)

    async def _reload(e):
        await on_reload(e, ctx)

    async def _prev(e):
        await on_prev(e, ctx)

    async def _next(e):
        await on_next(e, ctx)

    def build_filters():
        for label, kind in FILTER_BUTTONS:
            filter_buttons[kind] = ft.ElevatedButton(t(label), height=40, on_click=_filter_handler(kind))

        filter_text = ft.TextField(
            label=FILTER_PLACEHOLDERS.get(state["inputs"].kind, ""),
            dense=True,
            expand=True,
            visible=False,
            ref=filter_text_ref,
            on_submit=_apply,
        )
        direction = ft.Dropdown(
            width=120,
            dense=True,
            value=session.sort.direction,
            options=[ft.dropdown.Option("desc", "↓ Desc"), ft.dropdown.Option("asc", "↑ Asc")],
            on_change=_direction,
            ref=direction_ref,
        )
        btn_apply = ft.ElevatedButton(t("Aplicar"), height=40, on_click=_apply)
        btn_reload = ft.IconButton(ft.Icons.REFRESH, tooltip=t("Recargar"), on_click=_reload)

        chip = ft.Row(
            [ft.Text("", size=FS_BASE), ft.IconButton(ft.Icons.CLOSE, icon_size=14, on_click=_clear)],
            spacing=2,
            visible=False,
            ref=chip_ref,
        )

        return ft.Column(
            controls=[
                ft.Text(t("Filtrar por:"), size=FS_BASE),
                ft.Row(list(filter_buttons.values()), spacing=COL_SPACING, wrap=True),
                ft.Row([filter_text, direction, btn_apply, btn_reload], spacing=COL_SPACING),
                chip,
            ],
            spacing=COL_SPACING,
        )

    def build_table():
        table = ft.DataTable(
            ref=table_ref,
            columns=[ft.DataColumn(_txt(t(label)), on_sort=_sort_handler(field)) for label, field in TABLE_HEADERS],
            rows=[],
            column_spacing=COL_SPACING * 2,
            heading_row_height=36,
            data_row_max_height=40,
        )
        empty_hint = ft.Text("", ref=empty_hint_ref)
        return ft.Container(
            content=ft.Column(
                [ft.Row([table], scroll=ft.ScrollMode.AUTO), empty_hint],
                spacing=COL_SPACING,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
                ref=table_column_ref,
            ),
            height=TAB_H,
        )

    def build_pagination():
        page_size = ft.Dropdown(
            width=88,
            value=str(session.page_size),
            options=[ft.dropdown.Option(str(x)) for x in PAGE_SIZE_CHOICES],
            on_change=_page_size,
        )
        return ft.Row(
            controls=[
                ft.Text(t("Filas/página:")),
                page_size,
                ft.Text("", ref=status_ref),
                ft.Container(expand=True),
                ft.ElevatedButton(t("← Anterior"), ref=btn_prev_ref, on_click=_prev, disabled=True),
                ft.Text("", ref=label_pages_ref),
                ft.ElevatedButton(t("Siguiente →"), ref=btn_next_ref, on_click=_next, disabled=True),
            ],
            alignment=ft.MainAxisAlignment.START,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )

    layout = ft.Column(
        controls=[
            ft.Column(
                controls=[
                    ft.Text(t("Decisiones TSJ"), size=24, weight=ft.FontWeight.BOLD),
                    build_filters(),
                    build_table(),
                ],
                spacing=COL_SPACING,
                expand=True,
                alignment=ft.MainAxisAlignment.START,
                horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
            ),
            build_pagination(),
        ],
        spacing=0,
        expand=True,
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
    )

    container = ft.Container(
        layout,
        ref=root_ref,
        padding=ft.padding.only(left=PAD, right=PAD, top=COL_SPACING, bottom=PAD),
        expand=True,
    )
    container.data = ctx
    _apply_state()
    return container
