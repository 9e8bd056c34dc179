"""Test account-scoped lookups."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from personal_crm.models.account import Account
from personal_crm.models.contact import Contact
from personal_crm.services.errors import NotFound
from personal_crm.services.scoped import ScopedStore


@pytest.mark.asyncio
async def test_get_own_contact(db: AsyncSession, account: Account, contacts):
    store = ScopedStore(db, account.id)
    contact = await store.get(Contact, contacts[1].id)
    assert contact.first_name == "Carol"


@pytest.mark.asyncio
async def test_foreign_contact_is_not_found(db: AsyncSession, account: Account, foreign_contact):
    store = ScopedStore(db, account.id)
    assert await store.find(Contact, foreign_contact.id) is None
    with pytest.raises(NotFound) as info:
        await store.get(Contact, foreign_contact.id)
    assert info.value.message == "The contact has not been found."


@pytest.mark.asyncio
async def test_get_many_keeps_order_and_dedupes(db: AsyncSession, account: Account, contacts):
    store = ScopedStore(db, account.id)
    ids = [contacts[2].id, contacts[0].id, contacts[2].id]
    found = await store.get_many(Contact, ids)
    assert [c.id for c in found] == [contacts[2].id, contacts[0].id]


@pytest.mark.asyncio
async def test_get_many_fails_on_any_foreign_id(
    db: AsyncSession, account: Account, contacts, foreign_contact
):
    store = ScopedStore(db, account.id)
    with pytest.raises(NotFound):
        await store.get_many(Contact, [contacts[0].id, foreign_contact.id])


@pytest.mark.asyncio
async def test_ids_beyond_integer_range_are_not_found(db: AsyncSession, account: Account, contacts):
    store = ScopedStore(db, account.id)
    assert await store.find(Contact, 2**63) is None
    with pytest.raises(NotFound):
        await store.get(Contact, -(2**63) - 1)
    with pytest.raises(NotFound):
        await store.get_many(Contact, [contacts[0].id, 2**70])
