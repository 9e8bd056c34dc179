"""FastAPI dependencies for resolving the calling account."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models.account import Account
from ..services.errors import Unauthorized


def _provided_token(request: Request) -> str:
    token = request.headers.get(settings.account_token_header, "").strip()
    if token:
        return token
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip()
    return ""


async def get_current_account(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Account:
    """Resolve the API token to its Account. Raises Unauthorized if missing or unknown."""
    token = _provided_token(request)
    if not token:
        raise Unauthorized()

    result = await db.execute(select(Account).where(Account.api_token == token))
    account = result.scalar_one_or_none()
    if not account:
        raise Unauthorized("Invalid account token.")
    return account

