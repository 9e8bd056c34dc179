"""Activity statistics - per-contact yearly counts and account summaries."""

from __future__ import annotations

import logging

from sqlalchemy import delete, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.activity import Activity, ActivityContact
from ..models.statistic import ActivityStatistic

log = logging.getLogger(__name__)


async def recalculate_contact(
    db: AsyncSession, contact_id: int, account_id: int
) -> list[ActivityStatistic]:
    """Rebuild the contact's yearly activity counts from its current activities."""
    year = extract("year", Activity.date_it_happened)
    stmt = (
        select(year.label("year"), func.count(Activity.id))
        .select_from(ActivityContact)
        .join(Activity, Activity.id == ActivityContact.activity_id)
        .where(ActivityContact.contact_id == contact_id)
        .group_by(year)
    )
    rows = (await db.execute(stmt)).all()

    await db.execute(delete(ActivityStatistic).where(ActivityStatistic.contact_id == contact_id))
    stats = [
        ActivityStatistic(
            account_id=account_id,
            contact_id=contact_id,
            year=int(row_year),
            count=count,
        )
        for row_year, count in rows
    ]
    db.add_all(stats)
    await db.flush()
    log.debug("Recalculated activity statistics for contact %s: %d year(s)", contact_id, len(stats))
    return stats


async def contact_statistics(db: AsyncSession, contact_id: int) -> dict[int, int]:
    """Stored yearly counts for a contact, keyed by year."""
    stmt = (
        select(ActivityStatistic.year, ActivityStatistic.count)
        .where(ActivityStatistic.contact_id == contact_id)
        .order_by(ActivityStatistic.year.desc())
    )
    result = await db.execute(stmt)
    return {year: count for year, count in result.all()}


async def contact_activity_count(db: AsyncSession, contact_id: int) -> int:
    stats = await contact_statistics(db, contact_id)
    return sum(stats.values())


async def yearly_account_statistics(db: AsyncSession, account_id: int) -> list[dict[str, int]]:
    """Activity counts per year for an account, newest year first."""
    year = extract("year", Activity.date_it_happened)
    stmt = (
        select(year.label("year"), func.count(Activity.id))
        .where(Activity.account_id == account_id)
        .group_by(year)
        .order_by(year.desc())
    )
    result = await db.execute(stmt)
    return [{"year": int(y), "count": c} for y, c in result.all()]
