"""Load the credit card catalog from YAML files into the database."""
from decimal import Decimal, InvalidOperation
import logging
from pathlib import Path

import yaml
from sqlalchemy.orm import Session

from ccard_db.config import get_settings
from ccard_db.models.card import Benefit, CreditCard, RewardRate
from ccard_db.models.enums import Audience, BenefitType, CardCategory, SpendCategory

logger = logging.getLogger(__name__)

_DECIMAL_FIELDS = (
    "annual_fee",
    "apr_min",
    "apr_max",
    "foreign_transaction_fee",
    "income_requirement",
    "signup_spend_req",
)
_INTEGER_FIELDS = ("credit_score_min", "signup_bonus")
_TEXT_FIELDS = ("image_url", "apply_url")


def _to_decimal(value) -> Decimal | None:
    if value is None:
        return None
    # Go through str so 0.0125 in YAML does not pick up float noise
    return Decimal(str(value))


def load_cards(db: Session, cards_dir: Path | None = None) -> list[CreditCard]:
    """Load all card definitions from YAML files and upsert them.

    Cards are matched on (name, issuer). The session is flushed but not
    committed; the caller owns the transaction.

    Returns list of loaded/updated CreditCard objects.
    """
    cards_dir = Path(cards_dir) if cards_dir is not None else get_settings().cards_dir
    if not cards_dir.exists():
        logger.warning(f"Card catalog directory not found: {cards_dir}")
        return []

    loaded_cards = []

    for yaml_file in sorted(cards_dir.glob("*.yaml")):
        try:
            data = _parse_card_file(yaml_file)
        except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.error(f"Failed to load card definition from {yaml_file}: {e}")
            continue

        if data is None:
            continue
        loaded_cards.append(_upsert_card(db, data))

    db.flush()
    logger.info(f"Loaded {len(loaded_cards)} credit cards")
    return loaded_cards


def _parse_card_file(yaml_path: Path) -> dict | None:
    """Read and validate a single card file without touching the session."""
    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping at the top of {yaml_path.name}, got {type(data).__name__}")

    name = data.get("name")
    if not name:
        logger.warning(f"Card definition missing name: {yaml_path}")
        return None

    fields = {
        "name": name,
        "issuer": data.get("issuer", "Unknown"),
        "category": CardCategory(data["category"]),
        "target_audience": [Audience(tag) for tag in data.get("target_audience", [])],
    }
    for field in _DECIMAL_FIELDS:
        fields[field] = _to_decimal(data.get(field))
    for field in _INTEGER_FIELDS:
        fields[field] = int(data[field]) if data.get(field) is not None else None
    for field in _TEXT_FIELDS:
        fields[field] = data.get(field)

    # Columns with non-null defaults
    for field in ("annual_fee", "foreign_transaction_fee", "signup_spend_req"):
        if fields[field] is None:
            fields[field] = Decimal("0")
    if fields["signup_bonus"] is None:
        fields["signup_bonus"] = 0

    reward_rates = [
        {
            "category": SpendCategory(rate["category"]),
            "rate": _to_decimal(rate["rate"]),
            "point_value": _to_decimal(rate["point_value"]),
        }
        for rate in data.get("reward_rates", [])
    ]
    categories = [rate["category"] for rate in reward_rates]
    if len(categories) != len(set(categories)):
        raise ValueError(f"duplicate reward rate category in {yaml_path.name}")

    benefits = [
        {
            "title": benefit["title"],
            "description": benefit["description"],
            "ai_summary": benefit.get("ai_summary"),
            "type": BenefitType(benefit["type"]),
        }
        for benefit in data.get("benefits", [])
    ]

    return {"fields": fields, "reward_rates": reward_rates, "benefits": benefits}


def _upsert_card(db: Session, data: dict) -> CreditCard:
    fields = data["fields"]
    existing = (
        db.query(CreditCard)
        .filter(CreditCard.name == fields["name"], CreditCard.issuer == fields["issuer"])
        .first()
    )

    if existing:
        for key, value in fields.items():
            setattr(existing, key, value)
        # Flush removals before re-adding so the per-category unique constraint holds
        existing.reward_rates.clear()
        existing.benefits.clear()
        db.flush()
        card = existing
        logger.debug(f"Updated credit card: {card.name}")
    else:
        card = CreditCard(**fields)
        db.add(card)
        logger.debug(f"Created credit card: {card.name}")

    card.reward_rates.extend(RewardRate(**rate) for rate in data["reward_rates"])
    card.benefits.extend(Benefit(**benefit) for benefit in data["benefits"])
    return card


def get_cards(db: Session) -> list[CreditCard]:
    """Get all credit cards from database."""
    return db.query(CreditCard).order_by(CreditCard.name).all()
