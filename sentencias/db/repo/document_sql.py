"""SQLAlchemy-backed implementation of DocumentStore."""

from __future__ import annotations

import asyncio
import operator
from collections.abc import Iterable, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError

from sentencias.db.engine import get_session
from sentencias.db.models import Decision
from sentencias.db.repo.document_store import DocumentStore
from sentencias.db.repo.errors import IndexRequiredError, StorageError, ValidationError
from sentencias.db.repo.schemas import (
    COLLECTION,
    DIRECTIONS,
    NUMERIC_FIELDS,
    RECORD_FIELDS,
    Cursor,
    DecisionRecord,
    OrderBy,
    Predicate,
    StoredDocument,
)


def _to_record(row: Decision) -> DecisionRecord:
    return DecisionRecord(
        id=row.id,
        anio=row.anio or "",
        mes=row.mes or "",
        dia=row.dia or "",
        sala=row.sala or "",
        sala_num=row.sala_num or 0,
        expediente=row.expediente or "",
        identificador=row.identificador or "",
        url=row.url or "",
    )


def _query_key(predicates: tuple[Predicate, ...], order_by: OrderBy) -> tuple:
    return (predicates, order_by)


class SqlAlchemyDocumentStore(DocumentStore):
    """
    Concrete DocumentStore over the local SQLite database.

    Blocking session work runs in a worker thread, so callers only await at the store boundary.
    """

    _FIELD_MAP = {
        "anio": Decision.anio,
        "mes": Decision.mes,
        "dia": Decision.dia,
        "sala": Decision.sala,
        "sala_num": Decision.sala_num,
        "expediente": Decision.expediente,
        "identificador": Decision.identificador,
        "url": Decision.url,
    }

    _OPS = {
        "==": operator.eq,
        ">=": operator.ge,
        "<=": operator.le,
    }

    def __init__(self, composite_indexes: Iterable[tuple[str, str]] = ()):
        # пары (поле фильтра, поле сортировки), для которых "есть" составной индекс
        self.composite_indexes = frozenset(composite_indexes)

    # ---------- helpers ----------

    def _column(self, name: str):
        col = self._FIELD_MAP.get(name)
        if col is None:
            raise ValidationError(f"Unknown field: {name}")
        return col

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection != COLLECTION:
            raise ValidationError(f"Unknown collection: {collection}")

    def _check_indexes(self, predicates: tuple[Predicate, ...], order_by: OrderBy) -> None:
        range_fields = sorted({p.field for p in predicates if p.op != "=="})
        if len(range_fields) > 1:
            raise IndexRequiredError(f"Range filters on more than one field: {', '.join(range_fields)}")
        if range_fields and order_by.field != range_fields[0]:
            raise IndexRequiredError(
                f"Range filter on '{range_fields[0]}' requires ordering by '{range_fields[0]}', got '{order_by.field}'"
            )
        for p in predicates:
            if p.op != "==" or p.field == order_by.field:
                continue
            if (p.field, order_by.field) not in self.composite_indexes:
                raise IndexRequiredError(f"Query requires a composite index on ({p.field}, {order_by.field})")

    def _where(self, stmt, predicates: tuple[Predicate, ...]):
        for p in predicates:
            op = self._OPS.get(p.op)
            if op is None:
                raise ValidationError(f"Unknown operator: {p.op}")
            if p.field in NUMERIC_FIELDS and (isinstance(p.value, bool) or not isinstance(p.value, int)):
                raise ValidationError(f"Field {p.field} expects an integer, got {p.value!r}")
            stmt = stmt.where(op(self._column(p.field), p.value))
        return stmt

    @staticmethod
    def _after(cursor: Cursor, key: tuple, order_col, direction: str):
        token = cursor.token if isinstance(cursor, Cursor) else None
        if not (isinstance(token, tuple) and len(token) == 3 and token[0] == key):
            raise ValidationError("Cursor was issued for a different query")
        _, value, doc_id = token
        # строго "после": сначала по полю сортировки, при равенстве по id в том же направлении
        if direction == "desc":
            return or_(order_col < value, and_(order_col == value, Decision.id < doc_id))
        return or_(order_col > value, and_(order_col == value, Decision.id > doc_id))

    # ---------- sync bodies (run in a worker thread) ----------

    def _query_sync(
        self,
        collection: str,
        predicates: tuple[Predicate, ...],
        order_by: OrderBy,
        limit: int,
        start_after: Cursor | None,
    ) -> list[StoredDocument]:
        self._check_collection(collection)
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError("limit must be a positive integer")
        if order_by.direction not in DIRECTIONS:
            raise ValidationError(f"Unknown direction: {order_by.direction}")

        order_col = self._column(order_by.field)
        stmt = self._where(select(Decision), predicates)
        self._check_indexes(predicates, order_by)

        key = _query_key(predicates, order_by)
        if start_after is not None:
            stmt = stmt.where(self._after(start_after, key, order_col, order_by.direction))

        if order_by.direction == "desc":
            stmt = stmt.order_by(order_col.desc(), Decision.id.desc())
        else:
            stmt = stmt.order_by(order_col.asc(), Decision.id.asc())
        stmt = stmt.limit(limit)

        try:
            with get_session() as s:
                rows = s.execute(stmt).scalars().all()
                # собираем DTO внутри сессии
                return [
                    StoredDocument(
                        record=_to_record(r),
                        cursor=Cursor((key, getattr(r, order_by.field), r.id)),
                    )
                    for r in rows
                ]
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def _add_sync(self, collection: str, record: DecisionRecord) -> DecisionRecord:
        self._check_collection(collection)
        if isinstance(record.sala_num, bool) or not isinstance(record.sala_num, int):
            raise ValidationError("sala_num must be an integer")
        if not record.anio or not record.expediente:
            raise ValidationError("anio and expediente are required")

        values = {name: record.get(name) for name in RECORD_FIELDS}
        if record.id:
            values["id"] = record.id

        try:
            with get_session() as s:
                obj = Decision(**values)
                s.add(obj)
                s.flush()  # получаем id
                s.commit()
                return _to_record(obj)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def _get_by_id_sync(self, collection: str, id: str) -> DecisionRecord | None:
        self._check_collection(collection)
        if not isinstance(id, str) or not id:
            raise ValidationError("Invalid id")
        try:
            with get_session() as s:
                obj = s.get(Decision, id)
                return _to_record(obj) if obj is not None else None
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    # ---------- interface ----------

    async def query(
        self,
        collection: str,
        predicates: Sequence[Predicate],
        order_by: OrderBy,
        limit: int,
        start_after: Cursor | None = None,
    ) -> list[StoredDocument]:
        return await asyncio.to_thread(self._query_sync, collection, tuple(predicates), order_by, limit, start_after)

    async def add(self, collection: str, record: DecisionRecord) -> DecisionRecord:
        return await asyncio.to_thread(self._add_sync, collection, record)

    async def get_by_id(self, collection: str, id: str) -> DecisionRecord | None:
        return await asyncio.to_thread(self._get_by_id_sync, collection, id)
