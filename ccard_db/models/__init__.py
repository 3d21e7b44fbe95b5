"""SQLAlchemy models package."""
from ccard_db.models.enums import Audience, BenefitType, CardCategory, SpendCategory
from ccard_db.models.user import SpendingProfile, User
from ccard_db.models.card import Benefit, CreditCard, RewardRate
from ccard_db.models.comparison import UserCardComparison

__all__ = [
    "Audience",
    "BenefitType",
    "CardCategory",
    "SpendCategory",
    "User",
    "SpendingProfile",
    "CreditCard",
    "RewardRate",
    "Benefit",
    "UserCardComparison",
]
