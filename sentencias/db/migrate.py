"""Programmatic Alembic upgrade for app startup (works with/without alembic.ini)."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from .paths import alembic_dir, db_url


def upgrade_to_head() -> None:
    """
    Ensure the local DB schema is at the latest Alembic head.
    Safe to call on every app start.
    """
    project_root = Path(__file__).resolve().parents[2]
    root_ini = project_root / "alembic_migrations" / "alembic.ini"

    cfg = Config(str(root_ini)) if root_ini.exists() else Config()

    cfg.set_main_option("script_location", str(alembic_dir()))
    cfg.set_main_option("sqlalchemy.url", db_url())

    command.upgrade(cfg, "head")
