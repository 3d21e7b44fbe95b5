"""User and spending profile models."""
import uuid
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from ccard_db.database import Base
from ccard_db.models.enums import Audience, AudienceType, SpendCategory


class User(Base):
    """User account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255))  # Null for accounts without local credentials
    name = Column(String(100), nullable=False)

    # Eligibility inputs
    credit_score = Column(Integer)
    annual_income = Column(Numeric(12, 2))
    audience = Column(AudienceType, nullable=False, default=Audience.REGULAR)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    spending_profile = relationship(
        "SpendingProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    saved_cards = relationship("UserCardComparison", back_populates="user", cascade="all, delete-orphan")


class SpendingProfile(Base):
    """Monthly spend per category, one profile per user."""

    __tablename__ = "spending_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Monthly amounts
    dining_spend = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    travel_spend = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    groceries_spend = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    gas_spend = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    general_spend = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="spending_profile")

    def spend_for(self, category: SpendCategory | str) -> Decimal:
        """Monthly amount for a spending category."""
        value = getattr(self, f"{SpendCategory(category).value.lower()}_spend")
        return value if value is not None else Decimal("0")

    def monthly_total(self) -> Decimal:
        """Sum of all five monthly amounts."""
        return sum((self.spend_for(category) for category in SpendCategory), Decimal("0"))
