"""ORM models for the decisions collection."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


# export models
from .decision import Decision  # noqa: E402,F401
