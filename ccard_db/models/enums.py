"""Enumerations shared by the models."""
import enum

from sqlalchemy import JSON, Enum as SAEnum
from sqlalchemy.types import TypeDecorator


class Audience(str, enum.Enum):
    """User segment a card is marketed to."""

    STUDENT = "STUDENT"
    PROFESSIONAL = "PROFESSIONAL"
    REGULAR = "REGULAR"
    BUSINESS = "BUSINESS"


class CardCategory(str, enum.Enum):
    TRAVEL = "TRAVEL"
    CASHBACK = "CASHBACK"
    PREMIUM = "PREMIUM"
    DINING = "DINING"
    STUDENT = "STUDENT"
    BUSINESS = "BUSINESS"
    BALANCE_TRANSFER = "BALANCE_TRANSFER"


class SpendCategory(str, enum.Enum):
    """Spending category, one per SpendingProfile column."""

    DINING = "DINING"
    TRAVEL = "TRAVEL"
    GROCERIES = "GROCERIES"
    GAS = "GAS"
    GENERAL = "GENERAL"


class BenefitType(str, enum.Enum):
    INSURANCE = "INSURANCE"
    CONCIERGE = "CONCIERGE"
    PURCHASE_PROTECTION = "PURCHASE_PROTECTION"
    EXTENDED_WARRANTY = "EXTENDED_WARRANTY"
    FRAUD_PROTECTION = "FRAUD_PROTECTION"
    LOUNGE_ACCESS = "LOUNGE_ACCESS"
    TRAVEL_CREDIT = "TRAVEL_CREDIT"
    OTHER = "OTHER"


# Column types. The audience type is shared by users.audience and
# credit_cards.target_audience so PostgreSQL creates a single enum.
AudienceType = SAEnum(Audience, name="audience")
CardCategoryType = SAEnum(CardCategory, name="card_category")
SpendCategoryType = SAEnum(SpendCategory, name="spend_category")
BenefitTypeType = SAEnum(BenefitType, name="benefit_type")


class AudienceList(TypeDecorator):
    """JSON list of Audience members, for dialects without native enum arrays."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return [Audience(tag).value for tag in value]

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return [Audience(tag) for tag in value]
