"""Runtime settings read from the environment, with module-level defaults."""

from __future__ import annotations

import os

from sentencias.browse.schemas import DEFAULT_PAGE_SIZE, PAGE_SIZE_CHOICES

# (поле фильтра, поле сортировки), для которых в хранилище объявлен составной индекс.
# Пусто: при любом активном фильтре сортировка прижимается к полю фильтра.
COMPOSITE_INDEXES: frozenset[tuple[str, str]] = frozenset()

LOG_ENABLED = True
LOG_FILE = "logs/app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def _flag(name: str) -> bool:
    return os.getenv(name) == "1"


def log_debug() -> bool:
    return _flag("SENTENCIAS_DEBUG")


def exact_end() -> bool:
    return _flag("SENTENCIAS_EXACT_END")


def initial_page_size() -> int:
    """SENTENCIAS_PAGE_SIZE if it is one of PAGE_SIZE_CHOICES, else the default."""
    raw = os.getenv("SENTENCIAS_PAGE_SIZE", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_PAGE_SIZE
    return value if value in PAGE_SIZE_CHOICES else DEFAULT_PAGE_SIZE
