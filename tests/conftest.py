"""Shared test fixtures."""

import datetime as dt

import pytest
import sqlalchemy as sa
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from contact_identity.api.app import app
from contact_identity.api.deps import get_db
from contact_identity.models.base import Base
from contact_identity.models.contact import Contact, LinkPrecedence

BASE_TIME = dt.datetime(2023, 4, 1, 12, 0, 0)


def _make_contact(
    id: int,
    email: str | None = None,
    phone_number: str | None = None,
    linked_id: int | None = None,
    created_at: dt.datetime | None = None,
    deleted_at: dt.datetime | None = None,
) -> Contact:
    """Build a Contact; precedence follows from ``linked_id``."""
    created = created_at or BASE_TIME + dt.timedelta(days=id)
    return Contact(
        id=id,
        email=email,
        phone_number=phone_number,
        linked_id=linked_id,
        link_precedence=(
            LinkPrecedence.PRIMARY.value if linked_id is None else LinkPrecedence.SECONDARY.value
        ),
        created_at=created,
        updated_at=created,
        deleted_at=deleted_at,
    )


@pytest.fixture
def make_contact():
    """Factory for Contact rows with deterministic timestamps."""
    return _make_contact


@pytest.fixture
async def test_engine():
    """Create an async SQLite in-memory engine for tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
def seed(test_session_factory):
    """Insert contacts in one committed transaction."""

    async def _seed(*contacts: Contact) -> None:
        async with test_session_factory() as session:
            async with session.begin():
                session.add_all(contacts)

    return _seed


@pytest.fixture
def fetch_all(test_session_factory):
    """Load every contact row, ordered by id, from a fresh session."""
    async def _fetch() -> dict[int, Contact]:
        async with test_session_factory() as session:
            result = await session.execute(sa.select(Contact).order_by(Contact.id))
            return {c.id: c for c in result.scalars().all()}

    return _fetch


@pytest.fixture
async def api_client(test_engine, test_session_factory):
    """Async HTTP client hitting the FastAPI app with test DB."""

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
