"""Unit tests for category and overall aggregation"""

import pytest
from sme_readiness.domain.aggregation import aggregate
from sme_readiness.domain.models import Category, RiskTier, ScoredAnswer


def test_category_score_is_weighted_mean(mini_catalog):
    """Test Σ(score*weight)/Σ(weight) within a category"""
    scored = [
        ScoredAnswer("cash_runway", 100, RiskTier.LOW),  # weight 0.2
        ScoredAnswer("old_receivables", 40, RiskTier.HIGH),  # weight 0.1
    ]

    overall, categories = aggregate(scored, mini_catalog)

    # (100*0.2 + 40*0.1) / 0.3 = 80
    assert categories[Category.FINANCIAL_HEALTH] == pytest.approx(80)
    assert overall == pytest.approx(80)


def test_overall_uses_raw_weights_across_categories(mini_catalog):
    """Test overall score is not an average of category averages"""
    scored = [
        ScoredAnswer("cash_runway", 100, RiskTier.LOW),  # financial, weight 0.2
        ScoredAnswer("digital_share", 0, RiskTier.CRITICAL),  # market, weight 0.05
    ]

    overall, categories = aggregate(scored, mini_catalog)

    assert categories[Category.FINANCIAL_HEALTH] == 100
    assert categories[Category.MARKET_POSITION] == 0
    # 100*0.2 / 0.25 = 80, not (100 + 0) / 2
    assert overall == pytest.approx(80)


def test_unanswered_categories_report_zero(mini_catalog):
    """Test categories without answers are 0, and every category is present"""
    overall, categories = aggregate([ScoredAnswer("team_rating", 80, RiskTier.LOW)], mini_catalog)

    assert set(categories) == set(Category)
    assert categories[Category.OPERATIONAL_RESILIENCE] == pytest.approx(80)
    assert categories[Category.GROWTH_READINESS] == 0
    assert overall == pytest.approx(80)


def test_empty_batch(mini_catalog):
    overall, categories = aggregate([], mini_catalog)

    assert overall == 0
    assert all(score == 0 for score in categories.values())


def test_unknown_question_ids_are_ignored(mini_catalog):
    scored = [
        ScoredAnswer("retired_question", 0, RiskTier.CRITICAL),
        ScoredAnswer("has_plan", 100, RiskTier.LOW),
    ]

    overall, categories = aggregate(scored, mini_catalog)

    assert overall == 100
    assert categories[Category.GROWTH_READINESS] == 100
