"""Async test fixtures for personal CRM tests using SQLite."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from personal_crm.database import get_db
from personal_crm.models.account import Account
from personal_crm.models.activity import ActivityType
from personal_crm.models.base import Base
from personal_crm.models.contact import Contact


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


async def _make_account(db: AsyncSession, slug: str) -> Account:
    account = Account(name=slug.title(), slug=slug, api_token=f"token-{slug}")
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account


@pytest_asyncio.fixture
async def account(db: AsyncSession):
    return await _make_account(db, "acme")


@pytest_asyncio.fixture
async def other_account(db: AsyncSession):
    return await _make_account(db, "globex")


@pytest_asyncio.fixture
async def contacts(db: AsyncSession, account: Account):
    """Three contacts owned by `account`."""
    people = [
        Contact(account_id=account.id, first_name="Bob", last_name="Stone"),
        Contact(account_id=account.id, first_name="Carol", last_name="King"),
        Contact(account_id=account.id, first_name="Dave"),
    ]
    db.add_all(people)
    await db.commit()
    return people


@pytest_asyncio.fixture
async def foreign_contact(db: AsyncSession, other_account: Account):
    contact = Contact(account_id=other_account.id, first_name="Mallory")
    db.add(contact)
    await db.commit()
    return contact


@pytest_asyncio.fixture
async def activity_type(db: AsyncSession, account: Account):
    kind = ActivityType(account_id=account.id, name="Ate at a restaurant", location_type="outside")
    db.add(kind)
    await db.commit()
    return kind


@pytest.fixture
def auth_headers(account: Account) -> dict[str, str]:
    return {"X-Account-Token": account.api_token}


@pytest.fixture
def payload(contacts):
    def build(**overrides):
        body = {
            "summary": "Lunch",
            "description": "Lunch with Bob",
            "date_it_happened": "2024-03-01",
            "contacts": [contacts[0].id],
        }
        body.update(overrides)
        return body

    return build


@pytest_asyncio.fixture
async def client(engine):
    """HTTPX async test client against the personal CRM app."""
    from personal_crm.app import app

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
