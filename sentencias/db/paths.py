"""Centralized user-data and migrations paths for the decisions browser."""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path

APP_NAME = "SentenciasBrowser"
DB_FILE_NAME = "sentencias.db"

__all__ = ["APP_NAME", "DB_FILE_NAME", "user_data_dir", "db_path", "db_url", "alembic_dir"]


def _is_frozen() -> bool:
    """Detect PyInstaller runtime."""
    return bool(getattr(sys, "frozen", False)) and hasattr(sys, "_MEIPASS")


def user_data_dir() -> Path:
    """
    Return the per-OS user data directory for the app and ensure it exists.

    Windows: %APPDATA%/SentenciasBrowser
    macOS:   ~/Library/Application Support/SentenciasBrowser
    Linux:   ~/.local/share/SentenciasBrowser

    Override (for dev/tests): set env SENTENCIAS_DATA_DIR to an absolute path.
    """
    override = os.getenv("SENTENCIAS_DATA_DIR")
    if override:
        p = Path(override).expanduser().resolve()
        p.mkdir(parents=True, exist_ok=True)
        return p

    system = platform.system()
    if system == "Windows":
        base = os.getenv("APPDATA", str(Path.home() / "AppData" / "Roaming"))
        p = Path(base) / APP_NAME
    elif system == "Darwin":
        p = Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        p = Path.home() / ".local" / "share" / APP_NAME

    p.mkdir(parents=True, exist_ok=True)
    return p


def db_path() -> Path:
    """Path to the SQLite decisions database: <user_data_dir>/sentencias.db"""
    return user_data_dir() / DB_FILE_NAME


def db_url() -> str:
    return f"sqlite:///{db_path().as_posix()}"


def alembic_dir() -> Path:
    """
    Locate the Alembic migrations folder.

    Resolution order:
      1) Env override SENTENCIAS_ALEMBIC_DIR (absolute path).
      2) Frozen app: <_MEIPASS>/alembic_migrations.
      3) Dev: <project_root>/alembic_migrations
      4) Fallback: <user_data_dir>/alembic_migrations (created if missing).
    """
    override = os.getenv("SENTENCIAS_ALEMBIC_DIR")
    if override:
        p = Path(override).expanduser().resolve()
        if p.exists():
            return p

    if _is_frozen():
        p = Path(sys._MEIPASS) / "alembic_migrations"  # type: ignore[attr-defined]
        if p.exists():
            return p

    # sentencias/db/paths.py → project root is parents[2]
    project_root = Path(__file__).resolve().parents[2]
    p = project_root / "alembic_migrations"
    if p.exists():
        return p

    p = user_data_dir() / "alembic_migrations"
    p.mkdir(parents=True, exist_ok=True)
    return p
