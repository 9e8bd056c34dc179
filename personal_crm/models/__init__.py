"""Personal CRM models - re-exports all models and Base.metadata."""

from .base import Base, IntegerIDMixin, TimestampMixin, TenantMixin
from .account import Account
from .contact import Contact
from .activity import Activity, ActivityContact, ActivityType
from .statistic import ActivityStatistic
from .journal import JournalEntry

__all__ = [
    "Base",
    "IntegerIDMixin",
    "TimestampMixin",
    "TenantMixin",
    "Account",
    "Contact",
    "Activity",
    "ActivityContact",
    "ActivityType",
    "ActivityStatistic",
    "JournalEntry",
]
