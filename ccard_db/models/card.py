"""Card-related models."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import relationship

from ccard_db.database import Base
from ccard_db.models.enums import AudienceList, AudienceType, BenefitTypeType, CardCategoryType, SpendCategoryType


class CreditCard(Base):
    """Issuer card product."""

    __tablename__ = "credit_cards"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    issuer = Column(String(50), nullable=False, index=True)
    image_url = Column(String(255))
    apply_url = Column(String(255))

    # Financial details
    annual_fee = Column(Numeric(10, 2), nullable=False, default=0)
    apr_min = Column(Numeric(5, 2))
    apr_max = Column(Numeric(5, 2))
    foreign_transaction_fee = Column(Numeric(5, 2), nullable=False, default=0)  # Percent
    credit_score_min = Column(Integer)
    income_requirement = Column(Numeric(12, 2))

    # Signup bonus
    signup_bonus = Column(Integer, nullable=False, default=0)  # Points
    signup_spend_req = Column(Numeric(10, 2), nullable=False, default=0)

    category = Column(CardCategoryType, nullable=False, index=True)
    # Native enum array on PostgreSQL, JSON list elsewhere
    target_audience = Column(ARRAY(AudienceType).with_variant(AudienceList(), "sqlite"), nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    reward_rates = relationship("RewardRate", back_populates="credit_card", cascade="all, delete-orphan")
    benefits = relationship("Benefit", back_populates="credit_card", cascade="all, delete-orphan")
    comparisons = relationship("UserCardComparison", back_populates="credit_card", cascade="all, delete-orphan")

    def reward_rate_for(self, category) -> "RewardRate | None":
        """Reward rate for a spending category, if the card has one."""
        for reward_rate in self.reward_rates:
            if reward_rate.category == category:
                return reward_rate
        return None


class RewardRate(Base):
    """Points multiplier for one spending category on a card."""

    __tablename__ = "reward_rates"
    __table_args__ = (
        UniqueConstraint("credit_card_id", "category", name="uq_reward_rate_card_category"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    credit_card_id = Column(String(36), ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False)
    category = Column(SpendCategoryType, nullable=False)
    rate = Column(Numeric(5, 2), nullable=False)  # e.g. 3 for 3x
    point_value = Column(Numeric(10, 4), nullable=False)  # Dollars per point
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    credit_card = relationship("CreditCard", back_populates="reward_rates")


class Benefit(Base):
    """Card perk (insurance, protections, concierge, ...)."""

    __tablename__ = "benefits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    credit_card_id = Column(String(36), ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    ai_summary = Column(Text)
    type = Column(BenefitTypeType, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    credit_card = relationship("CreditCard", back_populates="benefits")
