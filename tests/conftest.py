"""Test configuration."""
import json
import os
from collections.abc import AsyncIterator, Callable, Iterator
from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Default env, before the app reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")

from halodkm.db import get_db  # noqa: E402
from halodkm.main import app  # noqa: E402
from halodkm.models import Base, Event  # noqa: E402
from halodkm.models.kas import Direction  # noqa: E402
from halodkm.schemas.event import EventCreate, EventTransactionCreate  # noqa: E402
from halodkm.services import events as events_service  # noqa: E402

ADMIN_ID = 1
JAMAAH_ID = 2


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine() -> Iterator[Engine]:
    # One in-memory database per test; services commit freely.
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        test_engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Iterator[Session]:
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_db_dependency(db_session: Session) -> Iterator[None]:
    def _get_db() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client


def _identity(user_id: int, role: str) -> dict[str, str]:
    return {"X-User-Info": json.dumps({"id": user_id, "role": role})}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _identity(ADMIN_ID, "admin")


@pytest.fixture
def jamaah_headers() -> dict[str, str]:
    return _identity(JAMAAH_ID, "jamaah")


@pytest.fixture
def make_event(db_session: Session) -> Callable[..., Event]:
    """Factory creating an active event, optionally with ledger rows.

    ``transactions`` is a list of ``(direction, amount)`` pairs.
    """

    def _factory(
        *,
        nama: str = "Santunan Anak Yatim",
        tipe: str = "penggalangan_dana",
        tanggal_mulai: date = date(2026, 3, 1),
        transactions: list[tuple[Direction, str]] | None = None,
    ) -> Event:
        event = events_service.create_event(
            db_session,
            EventCreate(nama=nama, tipe=tipe, tanggal_mulai=tanggal_mulai),
            actor_id=ADMIN_ID,
        )
        for index, (direction, amount) in enumerate(transactions or []):
            events_service.add_transaction(
                db_session,
                event.id,
                EventTransactionCreate(
                    type=direction,
                    amount=Decimal(amount),
                    description=f"Transaksi {index + 1}",
                    tanggal=tanggal_mulai,
                ),
                actor_id=ADMIN_ID,
            )
        return event

    return _factory
