import os
import tempfile

# до импорта engine: БД приложения не должна появляться в домашнем каталоге
os.environ.setdefault("SENTENCIAS_DATA_DIR", tempfile.mkdtemp(prefix="sentencias-tests-"))

from contextlib import contextmanager  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from sentencias.db.models import Base, Decision  # noqa: E402
from sentencias.db.repo import document_sql  # noqa: E402
from sentencias.db.repo.document_sql import SqlAlchemyDocumentStore  # noqa: E402
from sentencias.db.repo.document_store import DocumentStore  # noqa: E402


def make_decision(i: int, **overrides) -> Decision:
    fields = {
        "anio": str(2000 + i % 20),
        "mes": "enero",
        "dia": f"{i % 28 + 1:02d}",
        "sala": "Sala Constitucional",
        "sala_num": 1 + i % 6,
        "expediente": f"{i:05d}",
        "identificador": f"id-{i}",
        "url": f"https://example.org/decisiones/{i}",
    }
    fields.update(overrides)
    return Decision(**fields)


class FlakyStore(DocumentStore):
    """Wraps a real store; raises `fail_with` while it is set and counts queries."""

    def __init__(self, inner: DocumentStore):
        self.inner = inner
        self.fail_with: Exception | None = None
        self.calls: list[dict] = []

    async def query(self, collection, predicates, order_by, limit, start_after=None):
        self.calls.append({"order_by": order_by, "limit": limit, "start_after": start_after})
        if self.fail_with is not None:
            raise self.fail_with
        return await self.inner.query(collection, predicates, order_by, limit, start_after)

    async def add(self, collection, record):
        return await self.inner.add(collection, record)

    async def get_by_id(self, collection, id):
        return await self.inner.get_by_id(collection, id)


class GatedStore(FlakyStore):
    """Holds the next query until `gate` is set, to let a test interleave calls."""

    def __init__(self, inner: DocumentStore):
        super().__init__(inner)
        self.gate = None

    async def query(self, collection, predicates, order_by, limit, start_after=None):
        gate, self.gate = self.gate, None
        if gate is not None:
            await gate.wait()
        return await super().query(collection, predicates, order_by, limit, start_after)


@pytest.fixture(scope="function")
def db_session():
    """Чистая in-memory SQLite БД на каждый тест (одно соединение на все потоки)."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(autouse=True)
def patch_get_session(monkeypatch, db_session):

    @contextmanager
    def fake_get_session():
        yield db_session

    monkeypatch.setattr(document_sql, "get_session", fake_get_session)


@pytest.fixture
def seed(db_session):
    """seed(n, start=0, **overrides) -> list[Decision]"""

    def _seed(n: int, start: int = 0, **overrides):
        rows = [make_decision(i, **overrides) for i in range(start, start + n)]
        db_session.add_all(rows)
        db_session.commit()
        return rows

    return _seed


@pytest.fixture
def store():
    return SqlAlchemyDocumentStore()


@pytest.fixture
def flaky_store(store):
    return FlakyStore(store)


@pytest.fixture
def gated_store(store):
    return GatedStore(store)
