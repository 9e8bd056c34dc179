"""Account-scoped lookups.

Every tenant-owned row is read through a ``ScopedStore`` bound to the
caller's account. A row owned by another account is reported exactly like a
missing one.
"""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import NotFound

M = TypeVar("M")

# Integer primary keys are signed 64-bit in every supported backend.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _storable_id(value: Any) -> bool:
    return not isinstance(value, int) or _MIN_ID <= value <= _MAX_ID


def _label(model: type) -> str:
    return getattr(model, "__tablename__", model.__name__).replace("_", " ")


class ScopedStore:
    """Repository view of the database limited to one account."""

    def __init__(self, db: AsyncSession, account_id: int) -> None:
        self.db = db
        self.account_id = account_id

    def select(self, model: type[M]) -> Select[tuple[M]]:
        return select(model).where(model.account_id == self.account_id)

    async def find(self, model: type[M], entity_id: Any, *options) -> M | None:
        if not _storable_id(entity_id):
            return None
        stmt = self.select(model).where(model.id == entity_id)
        if options:
            stmt = stmt.options(*options).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, model: type[M], entity_id: Any, *options) -> M:
        """Return the row or raise NotFound."""
        instance = await self.find(model, entity_id, *options)
        if instance is None:
            raise NotFound(f"The {_label(model)} has not been found.")
        return instance

    async def get_many(self, model: type[M], ids: Sequence[Any]) -> list[M]:
        """Return rows for every id, in the order given. Raises NotFound on any miss."""
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        if not all(_storable_id(i) for i in wanted):
            raise NotFound(f"The {_label(model)} has not been found.")
        result = await self.db.execute(self.select(model).where(model.id.in_(wanted)))
        found = {row.id: row for row in result.scalars().all()}
        missing = [i for i in wanted if i not in found]
        if missing:
            raise NotFound(f"The {_label(model)} has not been found.")
        return [found[i] for i in wanted]
