"""ccard_db: shared database access for CcardFinder.

Public exports
--------------
- ``Database``: owned engine + session factory; construct once, dispose on exit
- ``Base`` and the ORM models / enums
- Central Time helpers from ``ccard_db.timezone``
- ``Settings`` / ``get_settings``
"""
from ccard_db.config import Settings, get_settings
from ccard_db.database import Base, Database, create_db_engine, pin_session_timezone
from ccard_db.models import (
    Audience,
    Benefit,
    BenefitType,
    CardCategory,
    CreditCard,
    RewardRate,
    SpendCategory,
    SpendingProfile,
    User,
    UserCardComparison,
)
from ccard_db.timezone import (
    TIMEZONE,
    current_offset_label,
    format_full_timestamp,
    format_human_readable,
    is_daylight_saving,
    now_in_timezone,
    offset_label,
)

# Re-export SQLAlchemy metadata for migration tooling
metadata = Base.metadata

__all__ = [
    "Settings",
    "get_settings",
    "Base",
    "metadata",
    "Database",
    "create_db_engine",
    "pin_session_timezone",
    "Audience",
    "Benefit",
    "BenefitType",
    "CardCategory",
    "CreditCard",
    "RewardRate",
    "SpendCategory",
    "SpendingProfile",
    "User",
    "UserCardComparison",
    "TIMEZONE",
    "current_offset_label",
    "format_full_timestamp",
    "format_human_readable",
    "is_daylight_saving",
    "now_in_timezone",
    "offset_label",
]
