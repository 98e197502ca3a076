"""Document store layer: contract, DTOs and the SQLAlchemy implementation."""

__all__ = ["document_store", "document_sql"]

from .document_sql import SqlAlchemyDocumentStore  # noqa: F401
