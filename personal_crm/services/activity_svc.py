"""Activity service - CRUD, attendee reconciliation, journal and statistics upkeep."""

from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..config import settings
from ..models.activity import Activity, ActivityContact, ActivityType
from ..models.contact import Contact
from ..schemas.activity import ActivityPayload
from . import journal_svc, statistics_svc
from .errors import InvalidParameters, InvalidQuery, ValidationFailed
from .scoped import ScopedStore

log = logging.getLogger(__name__)

_LOAD_OPTIONS = (selectinload(Activity.contacts), selectinload(Activity.activity_type))


@dataclass
class Page:
    items: list[Activity]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_index(self) -> int | None:
        """1-based position of the first item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)


def parse_sort(sort: str | None) -> tuple[str, str]:
    """Split a `sort` query value into (field, direction). A leading '-' means descending."""
    raw = (sort or settings.api_default_sort).strip()
    if raw.startswith("-"):
        return raw[1:], "desc"
    return raw, "asc"


def _order_by(field: str, direction: str):
    column = Activity.__table__.columns.get(field)
    if column is None:
        raise InvalidQuery(f"Activities cannot be sorted by '{field}'.")
    if direction not in ("asc", "desc"):
        raise InvalidQuery(f"Unknown sort direction '{direction}'.")
    tiebreak = Activity.id.desc() if direction == "desc" else Activity.id.asc()
    return (column.desc() if direction == "desc" else column.asc()), tiebreak


async def _paginate(db: AsyncSession, stmt, *, sort: str, direction: str, page: int, limit: int) -> Page:
    if limit < 1 or limit > settings.api_max_limit:
        raise InvalidQuery(f"The limit parameter must be between 1 and {settings.api_max_limit}.")
    if page < 1:
        raise InvalidQuery("The page parameter must be at least 1.")
    ordering = _order_by(sort, direction)

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar() or 0

    stmt = (
        stmt.options(*_LOAD_OPTIONS)
        .execution_options(populate_existing=True)
        .order_by(*ordering)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return Page(items=list(result.scalars().all()), total=total, page=page, per_page=limit)


@asynccontextmanager
async def _atomic(db: AsyncSession, action: str):
    """Commit the enclosed writes together or roll all of them back."""
    try:
        yield
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        log.warning("Activity %s rejected by the database: %s", action, exc.orig)
        raise InvalidParameters() from exc
    except Exception:
        await db.rollback()
        raise


def _field_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.setdefault(field, []).append(err["msg"])
    return errors


async def _attendee_ids(db: AsyncSession, activity_id: int) -> list[int]:
    stmt = (
        select(ActivityContact.contact_id)
        .where(ActivityContact.activity_id == activity_id)
        .order_by(ActivityContact.contact_id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_activities(
    db: AsyncSession,
    account_id: int,
    *,
    sort: str,
    direction: str = "asc",
    page: int = 1,
    limit: int = 10,
) -> Page:
    """List the account's activities. Raises InvalidQuery on a bad sort or limit."""
    stmt = ScopedStore(db, account_id).select(Activity)
    return await _paginate(db, stmt, sort=sort, direction=direction, page=page, limit=limit)


async def list_contact_activities(
    db: AsyncSession,
    account_id: int,
    contact_id: int,
    *,
    sort: str,
    direction: str = "asc",
    page: int = 1,
    limit: int = 10,
) -> Page:
    """List activities a contact attended. Raises NotFound for a foreign contact."""
    store = ScopedStore(db, account_id)
    contact = await store.get(Contact, contact_id)
    stmt = (
        store.select(Activity)
        .join(ActivityContact, ActivityContact.activity_id == Activity.id)
        .where(ActivityContact.contact_id == contact.id)
    )
    return await _paginate(db, stmt, sort=sort, direction=direction, page=page, limit=limit)


async def get_activity(db: AsyncSession, account_id: int, activity_id: int) -> Activity:
    """Get a single activity with its type and attendees loaded."""
    return await ScopedStore(db, account_id).get(Activity, activity_id, *_LOAD_OPTIONS)


async def validate_payload(
    db: AsyncSession, account_id: int, data: object
) -> tuple[ActivityPayload, list[Contact]]:
    """Check a create/update body without writing anything.

    Returns the parsed payload and the attendee contacts. Raises
    ValidationFailed for malformed fields and NotFound when an attendee or
    the activity type belongs to another account.
    """
    try:
        payload = ActivityPayload.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailed(_field_errors(exc)) from exc

    store = ScopedStore(db, account_id)
    contacts = await store.get_many(Contact, payload.contacts)
    if payload.activity_type_id is not None:
        await store.get(ActivityType, payload.activity_type_id)
    return payload, contacts


async def create_activity(db: AsyncSession, account_id: int, data: object) -> Activity:
    payload, contacts = await validate_payload(db, account_id, data)

    async with _atomic(db, "create"):
        activity = Activity(account_id=account_id, **payload.activity_fields())
        db.add(activity)
        await db.flush()

        await journal_svc.add_entry(db, activity)

        for contact in contacts:
            db.add(ActivityContact(
                activity_id=activity.id, contact_id=contact.id, account_id=account_id
            ))
            await statistics_svc.recalculate_contact(db, contact.id, account_id)

    log.info("Created activity %s for account %s with %d attendee(s)",
             activity.id, account_id, len(contacts))
    return await get_activity(db, account_id, activity.id)


async def update_activity(
    db: AsyncSession, account_id: int, activity_id: int, data: object
) -> Activity:
    """Update fields, refresh the journal entry and reconcile attendees."""
    activity = await ScopedStore(db, account_id).get(Activity, activity_id)
    payload, contacts = await validate_payload(db, account_id, data)

    async with _atomic(db, "update"):
        for key, value in payload.activity_fields().items():
            setattr(activity, key, value)
        await db.flush()

        await journal_svc.replace_entry(db, activity)

        existing = await _attendee_ids(db, activity.id)
        wanted = [c.id for c in contacts]
        removed = [cid for cid in existing if cid not in wanted]
        added = [cid for cid in wanted if cid not in existing]

        if removed:
            await db.execute(
                delete(ActivityContact).where(
                    ActivityContact.activity_id == activity.id,
                    ActivityContact.contact_id.in_(removed),
                )
            )
        for contact_id in added:
            db.add(ActivityContact(
                activity_id=activity.id, contact_id=contact_id, account_id=account_id
            ))

        # The date may have moved years, so kept attendees are recounted too.
        for contact_id in dict.fromkeys(existing + added):
            await statistics_svc.recalculate_contact(db, contact_id, account_id)

    log.info("Updated activity %s (attendees +%d/-%d)", activity.id, len(added), len(removed))
    return await get_activity(db, account_id, activity.id)


async def delete_activity(db: AsyncSession, account_id: int, activity_id: int) -> int:
    """Delete an activity, its journal entry and attendee links. Returns the id."""
    activity = await ScopedStore(db, account_id).get(Activity, activity_id)

    async with _atomic(db, "delete"):
        attendees = await _attendee_ids(db, activity.id)
        await journal_svc.delete_entries(db, activity)
        await db.execute(delete(ActivityContact).where(ActivityContact.activity_id == activity.id))
        await db.delete(activity)
        await db.flush()
        for contact_id in attendees:
            await statistics_svc.recalculate_contact(db, contact_id, account_id)

    log.info("Deleted activity %s for account %s", activity_id, account_id)
    return activity_id
