import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# сторонние логгеры, которые без debug только мешают читать лог пагинации
NOISY_LOGGERS = ("sqlalchemy.engine", "alembic", "flet", "flet_core", "flet_desktop")


def _tune_third_party(debug: bool) -> None:
    """
    В debug SQLAlchemy пишет SQL-запросы (INFO), остальные молчат до WARNING.
    Без debug все шумные логгеры подняты до WARNING.
    """
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def setup_logging(  # noqa: PLR0913
    *,
    enabled: bool = True,
    debug: bool = False,
    logger_name: str = "sentencias",
    file_path: str | None = "logs/app.log",
    max_bytes: int = 500_000,
    backups: int = 3,
) -> logging.Logger:
    """
    Настраивает логгер браузера решений.
    - enabled=False: только NullHandler, уровень WARNING (DEBUG при debug=True);
      события пагинации (reset/page_fetch) при этом никуда не пишутся.
    - enabled=True: консоль плюс, если задан file_path, RotatingFileHandler.
      Сторонние логгеры (SQLAlchemy, alembic, flet) приглушаются, см. _tune_third_party.
    """
    logger = logging.getLogger(logger_name)

    # main() может вызываться повторно (перезапуск страницы flet): не копим хендлеры
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if not enabled:
        logger.setLevel(logging.DEBUG if debug else logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    _tune_third_party(debug)

    fmt = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    logger.addHandler(console)

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(file_path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
        rotating.setFormatter(fmt)
        logger.addHandler(rotating)

    return logger
