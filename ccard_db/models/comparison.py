"""Saved user/card comparisons."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship

from ccard_db.database import Base


class UserCardComparison(Base):
    """A card saved by a user along with its computed net annual value."""

    __tablename__ = "user_card_comparisons"
    __table_args__ = (
        UniqueConstraint("user_id", "credit_card_id", name="uq_user_card_comparison"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    credit_card_id = Column(String(36), ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False, index=True)
    calculated_nav = Column(Numeric(12, 2), nullable=False)  # Net annual value in dollars
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="saved_cards")
    credit_card = relationship("CreditCard", back_populates="comparisons")
