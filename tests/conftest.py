"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base, get_db
from app.main import app
from app.models import Contact
from app.schemas.contact import ContactRequest
from app.services import ContactService


@pytest.fixture
async def engine():
    """Create a temporary in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", max_page_size=50)


@pytest.fixture
def service(db_session, settings):
    return ContactService(db_session, settings=settings)


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app, using the in-memory database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


def contact_request(
    first_name: str = "Ana",
    last_name: str = "Lee",
    phone_no: str = "555-0100",
    email: str = "ana@x.com",
    category: str = "work",
    is_active: Optional[bool] = None,
) -> ContactRequest:
    return ContactRequest(
        first_name=first_name,
        last_name=last_name,
        phone_no=phone_no,
        email=email,
        category=category,
        is_active=is_active,
    )


async def insert_contact(
    session: AsyncSession,
    *,
    first_name: str = "Ana",
    last_name: str = "Lee",
    phone_no: str = "555-0100",
    email: str = "ana@x.com",
    category: str = "work",
    is_active: bool = True,
    creation_date: Optional[datetime] = None,
) -> Contact:
    """Insert a row directly, optionally with a fixed creation date."""
    contact = Contact(
        first_name=first_name,
        last_name=last_name,
        phone_no=phone_no,
        email=email,
        category=category,
        is_active=is_active,
    )
    if creation_date is not None:
        contact.creation_date = creation_date
    session.add(contact)
    await session.commit()
    await session.refresh(contact)
    return contact


@pytest.fixture
async def sample_contacts(db_session):
    """A small mixed data set spread over categories, statuses and dates."""
    rows = [
        ("Ana", "Lee", "555-0100", "ana@x.com", "work", True, datetime(2026, 1, 1, 9, 0)),
        ("Bruno", "Costa", "555-0101", "bruno@acme.io", "work", False, datetime(2026, 1, 2, 9, 0)),
        ("Chen", "Wei", "555-0102", "chen@acme.io", "client", True, datetime(2026, 1, 3, 9, 0)),
        ("Dana", "Leeds", "555-0103", "dana@family.net", "family", True, datetime(2026, 1, 4, 9, 0)),
        ("Emil", "Novak", "555-0104", "emil@acme.io", "client", False, datetime(2026, 1, 5, 9, 0)),
        ("Farah", "Ashlee", "555-0105", "farah@school.org", "school", True, datetime(2026, 1, 6, 9, 0)),
        ("Gus", "Olsen", "555-0106", "gus@family.net", "family", False, datetime(2026, 1, 7, 9, 0)),
        ("Hana", "Mori", "555-0107", "hana@acme.io", "work", True, datetime(2026, 1, 8, 9, 0)),
    ]
    contacts = []
    for first, last, phone, email, category, active, created in rows:
        contacts.append(
            await insert_contact(
                db_session,
                first_name=first,
                last_name=last,
                phone_no=phone,
                email=email,
                category=category,
                is_active=active,
                creation_date=created.replace(tzinfo=timezone.utc),
            )
        )
    return contacts
