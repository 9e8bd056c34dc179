"""Journal and contact statistics JSON API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.account import Account
from ..models.contact import Contact
from ..schemas.journal import JournalEntryResponse
from ..services import activity_svc, journal_svc, statistics_svc
from ..services.errors import NotFound
from ..services.scoped import ScopedStore
from ..tenant.deps import get_current_account

router = APIRouter(prefix="/api", tags=["journal"])


@router.get("/journal")
async def journal_list(
    journalable_type: str | None = Query(None, alias="type"),
    limit: int = Query(50, ge=1, le=200),
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    entries = await journal_svc.list_entries(
        db, account.id, journalable_type=journalable_type, limit=limit
    )
    return {
        "data": [JournalEntryResponse.model_validate(e).model_dump(mode="json") for e in entries],
    }


@router.get("/activities/{activity_id}/journal")
async def activity_journal(
    activity_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_svc.get_activity(db, account.id, activity_id)
    entry = await journal_svc.get_entry(db, activity)
    if entry is None:
        raise NotFound("The journal entry has not been found.")
    return {"data": JournalEntryResponse.model_validate(entry).model_dump(mode="json")}


@router.get("/contacts/{contact_id}/statistics")
async def contact_statistics(
    contact_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    contact = await ScopedStore(db, account.id).get(Contact, contact_id)
    yearly = await statistics_svc.contact_statistics(db, contact.id)
    return {
        "data": [{"year": year, "count": count} for year, count in yearly.items()],
        "meta": {
            "contact_id": contact.id,
            "total": await statistics_svc.contact_activity_count(db, contact.id),
        },
    }
