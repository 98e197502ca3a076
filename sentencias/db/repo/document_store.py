"""Abstract interface for the document store (no implementation here)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .schemas import Cursor, DecisionRecord, OrderBy, Predicate, StoredDocument


class DocumentStore(ABC):
    """
    Contract for the read-mostly decisions collection.

    Implementations must:
      - return at most `limit` documents matching ALL predicates, ordered by `order_by`,
      - break ties on the order-by field by document id, in the order-by direction,
      - start strictly after `start_after` when given, and reject cursors issued for another query,
      - reject filter/order combinations they have no index for (IndexRequiredError).
    """

    @abstractmethod
    async def query(
        self,
        collection: str,
        predicates: Sequence[Predicate],
        order_by: OrderBy,
        limit: int,
        start_after: Cursor | None = None,
    ) -> list[StoredDocument]:
        """Return one ordered batch of documents. May raise ValidationError or StorageError."""
        raise NotImplementedError

    @abstractmethod
    async def add(self, collection: str, record: DecisionRecord) -> DecisionRecord:
        """Persist a new document and return the stored version with `id` set."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, collection: str, id: str) -> DecisionRecord | None:
        """Return the document with the given id, or None."""
        raise NotImplementedError
