"""Activity JSON API routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models.account import Account
from ..schemas.activity import ActivityResponse
from ..services import activity_svc, statistics_svc
from ..services.activity_svc import Page
from ..tenant.deps import get_current_account

router = APIRouter(prefix="/api", tags=["activities"])


class ListParams:
    """Query parameters shared by the activity list endpoints."""

    def __init__(
        self,
        sort: str | None = Query(None, description="Column to sort by, '-' prefix for descending"),
        page: int = Query(1, ge=1),
        limit: int | None = Query(None, ge=1),
    ) -> None:
        self.sort, self.direction = activity_svc.parse_sort(sort)
        self.page = page
        self.limit = limit or settings.api_default_limit

    def as_kwargs(self) -> dict:
        return {
            "sort": self.sort,
            "direction": self.direction,
            "page": self.page,
            "limit": self.limit,
        }


def _page_url(request: Request, page: int | None) -> str | None:
    if page is None:
        return None
    return str(request.url.include_query_params(page=page))


async def _collection(
    request: Request, db: AsyncSession, account: Account, page: Page
) -> dict:
    return {
        "data": [
            ActivityResponse.from_activity(a).model_dump(mode="json") for a in page.items
        ],
        "links": {
            "first": _page_url(request, 1),
            "last": _page_url(request, page.last_page),
            "prev": _page_url(request, page.page - 1 if page.page > 1 else None),
            "next": _page_url(request, page.page + 1 if page.page < page.last_page else None),
        },
        "meta": {
            "current_page": page.page,
            "from": page.first_index,
            "last_page": page.last_page,
            "path": str(request.url.remove_query_params("page")),
            "per_page": page.per_page,
            "to": page.last_index,
            "total": page.total,
            "statistics": await statistics_svc.yearly_account_statistics(db, account.id),
        },
    }


def _single(activity) -> dict:
    return {"data": ActivityResponse.from_activity(activity).model_dump(mode="json")}


@router.get("/activities")
async def activity_list(
    request: Request,
    params: ListParams = Depends(),
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    page = await activity_svc.list_activities(db, account.id, **params.as_kwargs())
    return await _collection(request, db, account, page)


@router.get("/activities/{activity_id}")
async def activity_detail(
    activity_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_svc.get_activity(db, account.id, activity_id)
    return _single(activity)


@router.post("/activities", status_code=201)
async def activity_create(
    payload: Any = Body(...),
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_svc.create_activity(db, account.id, payload)
    return _single(activity)


@router.api_route("/activities/{activity_id}", methods=["PUT", "PATCH"])
async def activity_update(
    activity_id: int,
    payload: Any = Body(...),
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    activity = await activity_svc.update_activity(db, account.id, activity_id, payload)
    return _single(activity)


@router.delete("/activities/{activity_id}")
async def activity_delete(
    activity_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await activity_svc.delete_activity(db, account.id, activity_id)
    return {"deleted": True, "id": deleted_id}


@router.get("/contacts/{contact_id}/activities")
async def contact_activity_list(
    request: Request,
    contact_id: int,
    params: ListParams = Depends(),
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    page = await activity_svc.list_contact_activities(
        db, account.id, contact_id, **params.as_kwargs()
    )
    return await _collection(request, db, account, page)
