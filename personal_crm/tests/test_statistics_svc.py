"""Test activity statistics."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from personal_crm.models.account import Account
from personal_crm.services import activity_svc, statistics_svc


@pytest.mark.asyncio
async def test_yearly_account_statistics(
    db: AsyncSession, account: Account, other_account: Account, contacts, payload
):
    for day in ("2024-01-05", "2024-03-01", "2022-07-20"):
        await activity_svc.create_activity(db, account.id, payload(date_it_happened=day))

    stats = await statistics_svc.yearly_account_statistics(db, account.id)
    assert stats == [{"year": 2024, "count": 2}, {"year": 2022, "count": 1}]
    assert await statistics_svc.yearly_account_statistics(db, other_account.id) == []


@pytest.mark.asyncio
async def test_recalculate_contact_is_idempotent(db: AsyncSession, account: Account, contacts, payload):
    bob = contacts[0]
    await activity_svc.create_activity(db, account.id, payload())
    await activity_svc.create_activity(db, account.id, payload(date_it_happened="2024-11-11"))

    for _ in range(2):
        stats = await statistics_svc.recalculate_contact(db, bob.id, account.id)
        await db.commit()
        assert [(s.year, s.count) for s in stats] == [(2024, 2)]

    assert await statistics_svc.contact_statistics(db, bob.id) == {2024: 2}


@pytest.mark.asyncio
async def test_contact_without_activities_has_no_statistics(
    db: AsyncSession, account: Account, contacts
):
    stats = await statistics_svc.recalculate_contact(db, contacts[2].id, account.id)
    assert stats == []
    assert await statistics_svc.contact_activity_count(db, contacts[2].id) == 0
