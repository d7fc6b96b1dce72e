"""
Integration tests for the full analysis pipeline.

Runs seed + court documents through AuctionAnalyzer and checks the
cross-stage guarantees: determinism, policy isolation, score isolation
and JSON-serializable output.
"""

import json
import pytest
from datetime import date, datetime, timezone
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from auction import (
    DEFAULT_POLICY,
    AuctionAnalyzer,
    BidRound,
    InvalidCourtDocs,
    InvalidSeed,
    Outcome,
    PropertySeed,
    RiskLabel,
    merge_policy,
)
from auction.analysis import Rights
from auction.intake import PropertyNormalizer
from auction.models import CourtDocsRaw
from auction.scoring import ScoreCalculationError, ScoreCalculator
from reporting.samples import create_sample_scenario


FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def analyzer():
    return AuctionAnalyzer(reference_date=date(2025, 6, 1), clock=lambda: FIXED_NOW)


@pytest.fixture
def scenario():
    return create_sample_scenario()


@pytest.fixture
def seed(scenario):
    return scenario.property.to_seed()


@pytest.fixture
def court_docs(scenario):
    return scenario.court_docs.to_raw()


# =============================================================================
# Test: analyze
# =============================================================================

class TestAnalyze:
    def test_sample_round(self, analyzer, seed, court_docs):
        result = analyzer.analyze(seed, court_docs, 300_000_000)

        assert result.property.id == "sample-apt-001"
        assert result.property.auction_step == 2
        assert result.user_bid == 300_000_000
        assert result.policy_version == "2.2"
        assert result.court_docs.case_number == "2024타경10234"
        assert result.summary.generated_at == FIXED_NOW

    def test_sample_rights(self, analyzer, seed, court_docs):
        rights = analyzer.analyze(seed, court_docs).rights

        # One protected tenant paid the policy extra
        assert rights.assumable_rights_total == 12_000_000
        assert rights.tenant_count == 1
        assert rights.warnings == ()
        # (1 + 1 + 5) / 3 lines / 5
        assert rights.eviction_risk == pytest.approx(7 / 15)

    def test_sample_summary(self, analyzer, seed, court_docs):
        summary = analyzer.analyze(seed, court_docs).summary
        assert summary.risk_label is RiskLabel.MEDIUM

    def test_without_court_docs(self, analyzer, seed):
        result = analyzer.analyze(seed)

        assert result.court_docs is None
        assert result.rights == Rights.empty()
        assert result.summary.risk_label is RiskLabel.SAFE

    def test_negative_bid_recorded_as_zero(self, analyzer, seed):
        assert analyzer.analyze(seed, user_bid=-100).user_bid == 0

    def test_deterministic(self, seed, court_docs):
        first = AuctionAnalyzer(reference_date=date(2025, 6, 1), clock=lambda: FIXED_NOW)
        second = AuctionAnalyzer(reference_date=date(2025, 6, 1), clock=lambda: FIXED_NOW)

        assert (
            first.analyze(seed, court_docs, 250_000_000).to_dict()
            == second.analyze(seed, court_docs, 250_000_000).to_dict()
        )

    def test_explicit_policy(self, analyzer, seed):
        policy = merge_policy(DEFAULT_POLICY, {"version": "classroom-1"})
        result = analyzer.analyze(seed, policy=policy)
        assert result.policy_version == "classroom-1"

    def test_difficulty_selects_overlay(self, analyzer):
        seed = PropertySeed(
            type="apartment", category="residential", size_m2=84,
            address="서울 마포구", year_built=2015, difficulty="easy",
        )
        easy = analyzer.analyze(seed)
        normal = analyzer.analyze(
            PropertySeed(
                type="apartment", category="residential", size_m2=84,
                address="서울 마포구", year_built=2015, difficulty="normal",
            )
        )
        # Easy recommends a higher window (0.99-1.05 vs 0.97-1.03)
        assert (
            easy.valuation.recommended_bid_range.max
            > normal.valuation.recommended_bid_range.max
        )

    def test_base_policy_not_mutated(self, analyzer, seed, court_docs):
        before = DEFAULT_POLICY.to_dict()
        analyzer.analyze(seed, court_docs, 300_000_000)
        analyzer.submit_bid(seed, court_docs, 300_000_000)
        assert DEFAULT_POLICY.to_dict() == before

    def test_invalid_seed(self, analyzer):
        with pytest.raises(InvalidSeed):
            analyzer.analyze(PropertySeed(type="castle", category="residential", size_m2=10))

    def test_invalid_court_docs(self, analyzer, seed):
        docs = CourtDocsRaw(case_number="X", base_right_date="someday")
        with pytest.raises(InvalidCourtDocs):
            analyzer.analyze(seed, docs)

    def test_result_json_serializable(self, analyzer, seed, court_docs):
        data = analyzer.analyze(seed, court_docs, 300_000_000).to_dict()
        encoded = json.dumps(data, ensure_ascii=False)

        assert '"12m"' in encoded
        assert data["summary"]["generated_at"] == "2025-06-01T12:00:00+00:00"


# =============================================================================
# Test: submit_bid
# =============================================================================

class TestSubmitBid:
    def test_bid_round(self, analyzer, seed, court_docs):
        bid_round = analyzer.submit_bid(seed, court_docs, 300_000_000)

        assert isinstance(bid_round, BidRound)
        assert bid_round.user_bid == 300_000_000
        assert len(bid_round.competitor_bids) == 4
        assert isinstance(bid_round.outcome, Outcome)
        assert bid_round.score_available
        assert bid_round.score_error is None

    def test_low_bid_loses(self, analyzer, seed, court_docs):
        bid_round = analyzer.submit_bid(seed, court_docs, 1_000)
        assert bid_round.outcome is Outcome.LOSE

    def test_level_info_with_exp(self, analyzer, seed, court_docs):
        bid_round = analyzer.submit_bid(seed, court_docs, 300_000_000, prev_total_exp=2_950)

        info = bid_round.score.level_info
        assert info.total_exp == 2_950 + bid_round.score.exp_gain

    def test_easy_round_has_two_rivals(self, analyzer, court_docs):
        seed = PropertySeed(
            type="villa", category="residential", size_m2=59,
            address="인천 남동구", year_built=2010, difficulty="easy",
        )
        bid_round = analyzer.submit_bid(seed, court_docs, 150_000_000)
        assert len(bid_round.competitor_bids) == 2

    def test_hard_round_has_six_rivals(self, analyzer):
        seed = PropertySeed(
            type="office", category="commercial", size_m2=120,
            address="부산 해운대구", year_built=2005, difficulty="hard",
        )
        bid_round = analyzer.submit_bid(seed, None, 500_000_000)
        assert len(bid_round.competitor_bids) == 6

    def test_score_failure_keeps_analysis(self, analyzer, seed, court_docs, monkeypatch):
        def broken(self, result, user_bid, prev_total_exp=None):
            raise ScoreCalculationError("roi undefined")

        monkeypatch.setattr(ScoreCalculator, "calculate", broken)

        bid_round = analyzer.submit_bid(seed, court_docs, 300_000_000)

        assert bid_round.score is None
        assert not bid_round.score_available
        assert bid_round.score_error == "Score unavailable: roi undefined"
        assert bid_round.result.valuation.adjusted_fmv > 0
        assert isinstance(bid_round.outcome, Outcome)

    def test_seed_normalized_once(self, analyzer, seed, court_docs, monkeypatch):
        calls = []
        original = PropertyNormalizer.normalize

        def counting(self, raw):
            calls.append(raw)
            return original(self, raw)

        monkeypatch.setattr(PropertyNormalizer, "normalize", counting)

        analyzer.submit_bid(seed, court_docs, 300_000_000)

        assert len(calls) == 1

    def test_round_json_serializable(self, analyzer, seed, court_docs):
        data = analyzer.submit_bid(seed, court_docs, 300_000_000, prev_total_exp=0).to_dict()
        json.dumps(data, ensure_ascii=False)

        assert data["outcome"] in {"win", "lose", "overpay"}
        assert data["score"]["level_info"]["tier"] == "Bronze"

    def test_same_round_same_rivals(self, seed, court_docs):
        first = AuctionAnalyzer(reference_date=date(2025, 6, 1), clock=lambda: FIXED_NOW)
        second = AuctionAnalyzer(reference_date=date(2025, 6, 1), clock=lambda: FIXED_NOW)

        assert (
            first.submit_bid(seed, court_docs, 300_000_000).to_dict()
            == second.submit_bid(seed, court_docs, 300_000_000).to_dict()
        )
