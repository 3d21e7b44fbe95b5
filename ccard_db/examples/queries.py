"""Example queries against the card database.

Run with: python -m ccard_db.examples.queries  (or the ``ccard-queries`` command)
"""
from decimal import Decimal
import logging
import sys

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from ccard_db.config import get_settings
from ccard_db.database import Database
from ccard_db.log import configure_logging
from ccard_db.models import Benefit, CardCategory, CreditCard, RewardRate, SpendCategory, User, UserCardComparison
from ccard_db.services.card_loader import get_cards

logger = logging.getLogger(__name__)


def cards_by_issuer(db: Session, issuer: str) -> list[CreditCard]:
    """Cards from one issuer, reward rates loaded."""
    return (
        db.query(CreditCard)
        .options(selectinload(CreditCard.reward_rates))
        .filter(CreditCard.issuer == issuer)
        .order_by(CreditCard.name)
        .all()
    )


def affordable_cards(db: Session, max_fee: Decimal = Decimal("100")) -> list[CreditCard]:
    """Cards with an annual fee below ``max_fee``, cheapest first."""
    return (
        db.query(CreditCard)
        .filter(CreditCard.annual_fee < max_fee)
        .order_by(CreditCard.annual_fee.asc(), CreditCard.name)
        .all()
    )


def eligible_cards(db: Session, credit_score: int) -> list[CreditCard]:
    """Cards whose minimum credit score is at or below ``credit_score``."""
    return (
        db.query(CreditCard)
        .filter(or_(CreditCard.credit_score_min.is_(None), CreditCard.credit_score_min <= credit_score))
        .order_by(CreditCard.name)
        .all()
    )


def cards_with_min_rate(
    db: Session, category: SpendCategory, min_rate: Decimal
) -> list[tuple[CreditCard, RewardRate]]:
    """(card, matching reward rate) pairs earning at least ``min_rate`` in ``category``."""
    rows = (
        db.query(CreditCard, RewardRate)
        .join(CreditCard.reward_rates)
        .filter(RewardRate.category == category, RewardRate.rate >= min_rate)
        .order_by(RewardRate.rate.desc(), CreditCard.name)
        .all()
    )
    return [(card, reward_rate) for card, reward_rate in rows]


def first_user_with_saved_cards(db: Session) -> User | None:
    return (
        db.query(User)
        .options(
            selectinload(User.spending_profile),
            selectinload(User.saved_cards).selectinload(UserCardComparison.credit_card),
        )
        .order_by(User.created_at, User.email)
        .first()
    )


def issuer_statistics(db: Session) -> list[dict]:
    """Card count, average annual fee and average signup bonus per issuer."""
    rows = (
        db.query(
            CreditCard.issuer,
            func.count(CreditCard.id),
            func.avg(CreditCard.annual_fee),
            func.avg(CreditCard.signup_bonus),
        )
        .group_by(CreditCard.issuer)
        .order_by(CreditCard.issuer)
        .all()
    )
    return [
        {
            "issuer": issuer,
            "cards": count,
            "avg_fee": Decimal(str(avg_fee or 0)).quantize(Decimal("0.01")),
            "avg_bonus": round(float(avg_bonus or 0)),
        }
        for issuer, count, avg_fee, avg_bonus in rows
    ]


def search_cards(db: Session, term: str) -> list[CreditCard]:
    """Case-insensitive substring search over card name and issuer."""
    pattern = f"%{term}%"
    return (
        db.query(CreditCard)
        .filter(or_(CreditCard.name.ilike(pattern), CreditCard.issuer.ilike(pattern)))
        .order_by(CreditCard.name)
        .all()
    )


def totals(db: Session) -> dict[str, int]:
    return {
        "users": db.query(User).count(),
        "cards": db.query(CreditCard).count(),
        "travel_cards": db.query(CreditCard).filter(CreditCard.category == CardCategory.TRAVEL).count(),
        "premium_cards": db.query(CreditCard).filter(CreditCard.category == CardCategory.PREMIUM).count(),
        "reward_rates": db.query(RewardRate).count(),
        "benefits": db.query(Benefit).count(),
    }


def run_examples(db: Session) -> None:
    """Run every example query and log the results."""
    all_cards = get_cards(db)
    logger.info(f"All credit cards: {len(all_cards)}")
    for card in all_cards:
        logger.info(f"  - {card.name} by {card.issuer} (${card.annual_fee})")

    chase_cards = cards_by_issuer(db, "Chase")
    logger.info(f"Chase cards: {len(chase_cards)}")
    for card in chase_cards:
        logger.info(f"  - {card.name}: {len(card.reward_rates)} reward rates")

    logger.info(f"Cards with annual fee under $100: {len(affordable_cards(db))}")
    logger.info(f"Cards for credit score 720: {len(eligible_cards(db, 720))}")

    dining_cards = cards_with_min_rate(db, SpendCategory.DINING, Decimal("3"))
    logger.info(f"Cards with 3x+ dining rewards: {len(dining_cards)}")
    for card, reward_rate in dining_cards:
        logger.info(f"  - {card.name}: {reward_rate.rate}x on dining")

    user = first_user_with_saved_cards(db)
    if user:
        logger.info(f"User: {user.name} ({user.email}), credit score {user.credit_score}")
        if user.spending_profile:
            logger.info(f"  Monthly dining: ${user.spending_profile.dining_spend}")
        logger.info(f"  Saved cards: {len(user.saved_cards)}")
        for saved in user.saved_cards:
            logger.info(f"    - {saved.credit_card.name} (NAV: ${saved.calculated_nav:.2f})")

    logger.info("Card statistics by issuer:")
    for stat in issuer_statistics(db):
        logger.info(
            f"  {stat['issuer']}: {stat['cards']} cards, avg fee ${stat['avg_fee']}, "
            f"avg bonus {stat['avg_bonus']} points"
        )

    results = search_cards(db, "sapphire")
    logger.info(f"Search for 'sapphire': {len(results)} results")
    for card in results:
        logger.info(f"  - {card.name}")

    logger.info(f"Database totals: {totals(db)}")


def main() -> int:
    settings = get_settings()
    configure_logging(logging.INFO, orm_level=None if settings.debug else settings.log_level)
    logger.info("Running example queries...")

    try:
        with Database(settings) as database:
            with database.session() as db:
                run_examples(db)
    except Exception:
        logger.exception("Error running example queries")
        return 1

    logger.info("Query examples complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
