from __future__ import annotations

import uuid

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from . import Base


def new_document_id() -> str:
    return uuid.uuid4().hex


class Decision(Base):
    """One published court decision. Rows are inserted once and never updated."""

    __tablename__ = "sentencias"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_document_id)
    anio: Mapped[str] = mapped_column(String(4), nullable=False)
    mes: Mapped[str] = mapped_column(String(16), nullable=False)
    dia: Mapped[str] = mapped_column(String(2), nullable=False)
    sala: Mapped[str] = mapped_column(String(128), nullable=False)
    sala_num: Mapped[int] = mapped_column(Integer, nullable=False)
    expediente: Mapped[str] = mapped_column(String(64), nullable=False)
    identificador: Mapped[str] = mapped_column(String(128), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    __table_args__ = (
        Index("ix_sentencias_anio", "anio"),
        Index("ix_sentencias_sala_num", "sala_num"),
        Index("ix_sentencias_expediente", "expediente"),
    )
