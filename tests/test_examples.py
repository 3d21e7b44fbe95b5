from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ccard_db.config import get_settings
from ccard_db.database import Base
from ccard_db.examples import queries, seed
from ccard_db.models import CreditCard, SpendCategory, SpendingProfile, UserCardComparison


def _build_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)()


@pytest.fixture
def seeded_session():
    session = _build_session()
    seed.seed(session)
    session.commit()
    return session


@pytest.fixture
def sqlite_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'examples.db'}")
    monkeypatch.delenv("TZ", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_seed_creates_demo_data():
    session = _build_session()

    counts = seed.seed(session)
    session.commit()

    assert counts == {"users": 1, "cards": 3, "reward_rates": 8, "benefits": 9, "comparisons": 1}
    comparison = session.query(UserCardComparison).one()
    assert comparison.user.email == seed.DEMO_EMAIL
    assert comparison.credit_card.name == "Chase Sapphire Preferred"
    # (1200*5 + 800*3 + 500*1) * 0.0125 * 12 - 95
    assert comparison.calculated_nav == Decimal("1240.00")


def test_seed_replaces_existing_data(seeded_session):
    counts = seed.seed(seeded_session)
    seeded_session.commit()

    assert counts == {"users": 1, "cards": 3, "reward_rates": 8, "benefits": 9, "comparisons": 1}


def test_estimate_nav_only_counts_rewarded_categories(seeded_session):
    profile = seeded_session.query(SpendingProfile).one()
    amex = seeded_session.query(CreditCard).filter_by(name="American Express Gold Card").one()

    # (800*4 + 600*4 + 500*1) * 0.01 * 12 - 250
    assert seed.estimate_nav(profile, amex) == Decimal("482.00")


def test_top_cards_by_bonus(seeded_session):
    top = seed.top_cards_by_bonus(seeded_session)

    assert [card.name for card in top] == [
        "Capital One Venture Rewards",
        "American Express Gold Card",
        "Chase Sapphire Preferred",
    ]


def test_example_queries(seeded_session):
    assert [card.name for card in queries.cards_by_issuer(seeded_session, "Chase")] == ["Chase Sapphire Preferred"]
    assert [card.name for card in queries.affordable_cards(seeded_session)] == [
        "Capital One Venture Rewards",
        "Chase Sapphire Preferred",
    ]
    assert len(queries.eligible_cards(seeded_session, 720)) == 3
    assert len(queries.eligible_cards(seeded_session, 680)) == 2

    dining = queries.cards_with_min_rate(seeded_session, SpendCategory.DINING, Decimal("3"))
    assert [(card.name, rate.rate) for card, rate in dining] == [
        ("American Express Gold Card", Decimal("4")),
        ("Chase Sapphire Preferred", Decimal("3")),
    ]

    assert [card.name for card in queries.search_cards(seeded_session, "SAPPHIRE")] == ["Chase Sapphire Preferred"]
    assert [card.name for card in queries.search_cards(seeded_session, "capital")] == ["Capital One Venture Rewards"]


def test_first_user_with_saved_cards(seeded_session):
    user = queries.first_user_with_saved_cards(seeded_session)

    assert user.email == seed.DEMO_EMAIL
    assert user.spending_profile.dining_spend == Decimal("800")
    assert [saved.credit_card.name for saved in user.saved_cards] == ["Chase Sapphire Preferred"]


def test_issuer_statistics_and_totals(seeded_session):
    stats = queries.issuer_statistics(seeded_session)

    assert [stat["issuer"] for stat in stats] == ["American Express", "Capital One", "Chase"]
    chase = stats[-1]
    assert chase["cards"] == 1
    assert chase["avg_fee"] == Decimal("95.00")
    assert chase["avg_bonus"] == 60000

    assert queries.totals(seeded_session) == {
        "users": 1,
        "cards": 3,
        "travel_cards": 2,
        "premium_cards": 1,
        "reward_rates": 8,
        "benefits": 9,
    }


def test_scripts_exit_zero_on_success(sqlite_env):
    assert seed.main() == 0
    assert queries.main() == 0


def test_seed_exits_one_on_failure(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'missing' / 'dir' / 'examples.db'}")
    monkeypatch.delenv("TZ", raising=False)
    get_settings.cache_clear()
    try:
        assert seed.main() == 1
    finally:
        get_settings.cache_clear()

    assert "Error seeding database" in caplog.text
