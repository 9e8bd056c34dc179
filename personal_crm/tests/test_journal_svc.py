"""Test journal service."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from personal_crm.models.account import Account
from personal_crm.models.activity import Activity
from personal_crm.services import journal_svc


async def _activity(db: AsyncSession, account: Account, summary: str = "Hike") -> Activity:
    activity = Activity(
        account_id=account.id,
        summary=summary,
        description="Up the hill",
        date_it_happened=date(2024, 5, 4),
    )
    db.add(activity)
    await db.flush()
    return activity


@pytest.mark.asyncio
async def test_add_entry_snapshots_activity(db: AsyncSession, account: Account):
    activity = await _activity(db, account)
    entry = await journal_svc.add_entry(db, activity)
    await db.commit()

    assert entry.journalable_type == "activity"
    assert entry.journalable_id == activity.id
    assert entry.snapshot_json == {
        "summary": "Hike",
        "description": "Up the hill",
        "date_it_happened": "2024-05-04",
        "activity_type_id": None,
    }


@pytest.mark.asyncio
async def test_replace_entry_keeps_one(db: AsyncSession, account: Account):
    activity = await _activity(db, account)
    await journal_svc.add_entry(db, activity)
    activity.summary = "Long hike"
    await journal_svc.replace_entry(db, activity)
    await db.commit()

    entries = await journal_svc.list_entries(db, account.id, journalable_type="activity")
    assert len(entries) == 1
    assert entries[0].title == "Long hike"


@pytest.mark.asyncio
async def test_delete_entries(db: AsyncSession, account: Account):
    activity = await _activity(db, account)
    await journal_svc.add_entry(db, activity)
    await db.commit()

    assert await journal_svc.delete_entries(db, activity) == 1
    assert await journal_svc.delete_entries(db, activity) == 0
    assert await journal_svc.get_entry(db, activity) is None


@pytest.mark.asyncio
async def test_list_entries_scoped_to_account(
    db: AsyncSession, account: Account, other_account: Account
):
    mine = await _activity(db, account, "Mine")
    theirs = await _activity(db, other_account, "Theirs")
    await journal_svc.add_entry(db, mine)
    await journal_svc.add_entry(db, theirs)
    await db.commit()

    entries = await journal_svc.list_entries(db, account.id)
    assert [e.title for e in entries] == ["Mine"]
