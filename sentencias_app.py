# 1) Imports
from __future__ import annotations

from sentencias import config
from sentencias.browse.errors import FetchFailed
from sentencias.browse.session import BrowseSession
from sentencias.db.repo.document_sql import SqlAlchemyDocumentStore
from sentencias.logging_utils import setup_logging

__all__ = ["build_session", "main"]


# 2) Сборка сессии из настроек окружения
def build_session(logger, *, store=None) -> BrowseSession:
    if store is None:
        store = SqlAlchemyDocumentStore(composite_indexes=config.COMPOSITE_INDEXES)
    return BrowseSession(
        store,
        page_size=config.initial_page_size(),
        composite_indexes=config.COMPOSITE_INDEXES,
        exact_end=config.exact_end(),
        logger=logger,
    )


# 3) Точка входа (инициализация и «провода»)
async def main(page):  # без аннотации, чтобы не тянуть Flet на импорте
    # локальные импорты: так monkeypatch в тестах перехватывает их корректно
    import sentencias.ui_builders as U  # noqa: PLC0415
    from sentencias.db.migrate import upgrade_to_head  # noqa: PLC0415
    from sentencias.ui.decisions.view import make_decisions_screen  # noqa: PLC0415

    upgrade_to_head()

    logger = setup_logging(
        enabled=config.LOG_ENABLED,
        debug=config.log_debug(),
        file_path=config.LOG_FILE,
        max_bytes=config.LOG_MAX_BYTES,
        backups=config.LOG_BACKUPS,
    )
    U.configure_window_and_theme(page)

    session = build_session(logger)
    screen = make_decisions_screen(session)
    page.add(U.compose_page(screen, U.build_footer()))
    page.update()

    try:
        await session.refresh()
    except FetchFailed as ex:
        # причина уже лежит в session.error и будет показана на экране
        logger.warning("initial_load failed reason=%s", ex.reason)
    screen.data.render_table()


if __name__ == "__main__":  # pragma: no cover
    import flet as ft

    ft.app(target=main)
