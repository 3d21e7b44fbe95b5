"""Seed script: add sample data to the database.

Run with: python -m ccard_db.examples.seed  (or the ``ccard-seed`` command)
"""
from decimal import Decimal
import logging
import sys

from sqlalchemy.orm import Session

from ccard_db.config import get_settings
from ccard_db.database import Database
from ccard_db.log import configure_logging
from ccard_db.models import (
    Audience,
    Benefit,
    CreditCard,
    RewardRate,
    SpendingProfile,
    User,
    UserCardComparison,
)
from ccard_db.services.card_loader import load_cards

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@ccardfinder.com"
FEATURED_CARD = "Chase Sapphire Preferred"
MONTHS_PER_YEAR = 12


def clear_database(db: Session) -> None:
    """Delete every row, children before parents."""
    for model in (UserCardComparison, Benefit, RewardRate, CreditCard, SpendingProfile, User):
        db.query(model).delete()


def estimate_nav(profile: SpendingProfile, card: CreditCard) -> Decimal:
    """Illustrative net annual value: yearly reward value minus the annual fee.

    Only categories the card has a reward rate for contribute.
    """
    value = sum(
        (
            profile.spend_for(rate.category) * rate.rate * rate.point_value * MONTHS_PER_YEAR
            for rate in card.reward_rates
        ),
        Decimal("0"),
    )
    return (value - card.annual_fee).quantize(Decimal("0.01"))


def table_counts(db: Session) -> dict[str, int]:
    return {
        "users": db.query(User).count(),
        "cards": db.query(CreditCard).count(),
        "reward_rates": db.query(RewardRate).count(),
        "benefits": db.query(Benefit).count(),
        "comparisons": db.query(UserCardComparison).count(),
    }


def top_cards_by_bonus(db: Session, limit: int = 3) -> list[CreditCard]:
    return db.query(CreditCard).order_by(CreditCard.signup_bonus.desc(), CreditCard.name).limit(limit).all()


def seed(db: Session) -> dict[str, int]:
    """Replace all data with the demo user, the card catalog and one saved comparison.

    Returns row counts per table.
    """
    logger.info("Cleaning existing data...")
    clear_database(db)
    db.flush()

    user = User(
        email=DEMO_EMAIL,
        name="Demo User",
        credit_score=750,
        annual_income=Decimal("85000"),
        audience=Audience.PROFESSIONAL,
        spending_profile=SpendingProfile(
            dining_spend=Decimal("800"),
            travel_spend=Decimal("1200"),
            groceries_spend=Decimal("600"),
            gas_spend=Decimal("200"),
            general_spend=Decimal("500"),
        ),
    )
    db.add(user)
    db.flush()
    logger.info(f"User created: {user.email} (monthly spending ${user.spending_profile.monthly_total()})")

    cards = load_cards(db)
    featured = next((card for card in cards if card.name == FEATURED_CARD), None)
    if featured is None:
        raise LookupError(f"{FEATURED_CARD} is missing from the card catalog")

    nav = estimate_nav(user.spending_profile, featured)
    db.add(
        UserCardComparison(
            user=user,
            credit_card=featured,
            calculated_nav=nav,
            notes="Best travel card for your spending pattern",
        )
    )
    db.flush()
    logger.info(f"Saved comparison for {featured.name}: NAV = ${nav:.2f}")

    return table_counts(db)


def main() -> int:
    settings = get_settings()
    configure_logging(logging.INFO, orm_level=None if settings.debug else settings.log_level)
    logger.info("Seeding database...")

    try:
        with Database(settings) as database:
            database.create_all()
            with database.session() as db:
                counts = seed(db)
                logger.info(f"Database summary: {counts}")

                logger.info("Top cards by signup bonus:")
                for card in top_cards_by_bonus(db):
                    logger.info(f"  {card.name}: {card.signup_bonus} points (${card.annual_fee} AF)")
    except Exception:
        logger.exception("Error seeding database")
        return 1

    logger.info("Seeding complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
