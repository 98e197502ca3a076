"""Data contracts (DTO) for the decisions store. No business logic here."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

COLLECTION = "sentencias"

# sorts after every string sharing a prefix, closes the prefix range
PREFIX_SENTINEL = "\uf8ff"

FieldName = Literal["anio", "mes", "dia", "sala", "sala_num", "expediente", "identificador", "url"]
Direction = Literal["asc", "desc"]
Operator = Literal["==", ">=", "<="]

RECORD_FIELDS: tuple[str, ...] = ("anio", "mes", "dia", "sala", "sala_num", "expediente", "identificador", "url")
NUMERIC_FIELDS = frozenset({"sala_num"})
DIRECTIONS = ("asc", "desc")
OPERATORS = ("==", ">=", "<=")


@dataclass(slots=True, frozen=True)
class DecisionRecord:
    """
    Single stored decision.

    Note: before 'add' the 'id' is None (assigned by the store).
    """

    id: str | None
    anio: str
    mes: str
    dia: str
    sala: str
    sala_num: int
    expediente: str
    identificador: str
    url: str

    def get(self, name: str):
        return getattr(self, name)


@dataclass(slots=True, frozen=True)
class Predicate:
    field: str
    op: Operator
    value: str | int


@dataclass(slots=True, frozen=True)
class OrderBy:
    field: str
    direction: Direction = "asc"


@dataclass(slots=True, frozen=True)
class Cursor:
    """
    Opaque position right after one document of a query result.

    Only the store that issued it reads `token`; everyone else stores and replays it.
    """

    token: object = field(repr=False)


@dataclass(slots=True, frozen=True)
class StoredDocument:
    record: DecisionRecord
    cursor: Cursor
