"""Journal service - one audit entry per journalable entity."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.activity import Activity
from ..models.journal import JournalEntry

log = logging.getLogger(__name__)

ACTIVITY = "activity"


def _snapshot(activity: Activity) -> dict:
    return {
        "summary": activity.summary,
        "description": activity.description,
        "date_it_happened": activity.date_it_happened.isoformat(),
        "activity_type_id": activity.activity_type_id,
    }


async def add_entry(db: AsyncSession, activity: Activity) -> JournalEntry:
    """Record a journal entry from the activity's current values. Caller commits."""
    entry = JournalEntry(
        account_id=activity.account_id,
        entry_date=activity.date_it_happened,
        journalable_type=ACTIVITY,
        journalable_id=activity.id,
        title=activity.summary,
        snapshot_json=_snapshot(activity),
    )
    db.add(entry)
    await db.flush()
    return entry


async def delete_entries(db: AsyncSession, activity: Activity) -> int:
    """Delete every journal entry for the activity. Returns rows removed."""
    result = await db.execute(
        delete(JournalEntry).where(
            JournalEntry.journalable_type == ACTIVITY,
            JournalEntry.journalable_id == activity.id,
        )
    )
    return result.rowcount or 0


async def replace_entry(db: AsyncSession, activity: Activity) -> JournalEntry:
    removed = await delete_entries(db, activity)
    if removed > 1:
        log.warning("Activity %s had %d journal entries", activity.id, removed)
    return await add_entry(db, activity)


async def get_entry(db: AsyncSession, activity: Activity) -> JournalEntry | None:
    stmt = select(JournalEntry).where(
        JournalEntry.journalable_type == ACTIVITY,
        JournalEntry.journalable_id == activity.id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_entries(
    db: AsyncSession,
    account_id: int,
    *,
    journalable_type: str | None = None,
    limit: int = 50,
) -> list[JournalEntry]:
    stmt = select(JournalEntry).where(JournalEntry.account_id == account_id)
    if journalable_type:
        stmt = stmt.where(JournalEntry.journalable_type == journalable_type)
    stmt = stmt.order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc()).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())
