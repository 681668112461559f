"""Pytest configuration and shared fixtures.

Tests run the real SQLAlchemy stores against an in-memory SQLite database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_URL"] = ""
os.environ["CREATE_TABLES_ON_STARTUP"] = "0"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from acceloka.db import get_session  # noqa: E402
from acceloka.domain import Ticket  # noqa: E402
from acceloka.main import app  # noqa: E402
from acceloka.models import Base  # noqa: E402
from acceloka.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402


def make_ticket(
    code: str = "T1",
    quota: int = 10,
    price: int = 100,
    category: str = "Concert",
    name: str | None = None,
    starts_in: timedelta = timedelta(days=30),
) -> Ticket:
    starts_at = datetime.now(timezone.utc) + starts_in
    return Ticket(
        ticket_code=code,
        ticket_name=name or f"Ticket {code}",
        category_name=category,
        event_date_minimum=starts_at,
        event_date_maximum=starts_at + timedelta(days=2),
        quota=quota,
        price=price,
    )


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(session) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session)


@pytest.fixture
def add_tickets(session_factory):
    """Commit catalog entries through their own unit of work."""

    async def _add(*tickets: Ticket) -> None:
        async with session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                for ticket in tickets:
                    await uow.catalog.add_ticket(ticket)
                await uow.commit()

    return _add


@pytest.fixture
def booked_total(session_factory):
    """Read the committed booked total for a ticket from a fresh session."""

    async def _total(ticket_code: str) -> int:
        async with session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                return await uow.ledger.sum_active_quantity(ticket_code)

    return _total


@pytest.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
