"""
Auction Analyzer - Integrated Analysis Pipeline

seed + court docs
  → PropertyNormalizer → ValuationCalculator
  → (CourtDocumentNormalizer → RightsAssessor)
  → CostCalculator → ProfitProjector → OutcomeGrader
  → AuctionAnalysisResult

Scoring and competitor simulation consume the result on demand. A scoring
failure never invalidates the analysis: submit_bid reports it on the round
and still returns valuation, rights, costs and profit.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from .analysis import (
    AuctionAnalysisResult,
    assess_rights,
    evaluate_costs,
    evaluate_valuation,
    grade_outcome,
    project_profit,
)
from .competitors import determine_outcome, generate_competitor_bids
from .intake import PropertyNormalizer, normalize_court_docs
from .models import CourtDocsRaw, Outcome, Property, PropertySeed
from .policy import DEFAULT_POLICY, Policy, policy_for_difficulty
from .scoring import ScoreBreakdown, ScoreCalculationError, ScoreCalculator


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BidRound:
    """
    One submitted bid: analysis, skill score, rivals and outcome.

    score is None when scoring failed; score_error then says why.
    """
    result: AuctionAnalysisResult
    user_bid: int
    competitor_bids: List[int]
    outcome: Outcome
    score: Optional[ScoreBreakdown] = None
    score_error: Optional[str] = None

    @property
    def score_available(self) -> bool:
        return self.score is not None

    def to_dict(self) -> dict:
        return {
            "result": self.result.to_dict(),
            "user_bid": self.user_bid,
            "competitor_bids": list(self.competitor_bids),
            "outcome": self.outcome.value,
            "score": self.score.to_dict() if self.score else None,
            "score_error": self.score_error,
        }


class AuctionAnalyzer:
    """
    Runs the full analysis for auction rounds.

    Each call recomputes every stage from its inputs; nothing is cached
    between calls and the base policy is never mutated.
    """

    def __init__(
        self,
        base_policy: Policy = DEFAULT_POLICY,
        reference_date: date = None,
        clock: Callable[[], datetime] = None,
    ):
        """
        Initialize analyzer.

        Args:
            base_policy: Policy the difficulty overlays are applied to
            reference_date: "Today" for property ages (default: today)
            clock: Timestamp source for summaries (default: UTC now)
        """
        self._base_policy = base_policy
        self._normalizer = PropertyNormalizer(reference_date=reference_date)
        self._clock = clock or _utc_now
        self._scorer = ScoreCalculator()

    @property
    def base_policy(self) -> Policy:
        return self._base_policy

    def policy_for(self, prop: Property) -> Policy:
        """Base policy merged with the overlay for the property's difficulty."""
        return policy_for_difficulty(prop.difficulty, base=self._base_policy)

    def normalize(self, seed: PropertySeed) -> Property:
        return self._normalizer.normalize(seed)

    def analyze(
        self,
        seed: PropertySeed,
        court_docs: Optional[CourtDocsRaw] = None,
        user_bid: int = 0,
        policy: Optional[Policy] = None,
    ) -> AuctionAnalysisResult:
        """
        Run the analysis pipeline for one round.

        Args:
            seed: Property seed
            court_docs: Raw court documents, or None
            user_bid: Bid in won (0 = no bid yet)
            policy: Explicit policy; default merges the base policy with
                the seed's difficulty overlay

        Returns:
            Immutable AuctionAnalysisResult

        Raises:
            InvalidSeed: If the seed is malformed
            InvalidCourtDocs: If the court documents hold unparseable dates
        """
        prop = self._normalizer.normalize(seed)
        return self._analyze_property(prop, court_docs, user_bid, policy)

    def _analyze_property(
        self,
        prop: Property,
        court_docs: Optional[CourtDocsRaw],
        user_bid: int,
        policy: Optional[Policy],
    ) -> AuctionAnalysisResult:
        policy = policy or self.policy_for(prop)

        valuation = evaluate_valuation(prop, policy)

        normalized_docs = normalize_court_docs(court_docs) if court_docs else None
        rights = assess_rights(normalized_docs, policy)

        costs = evaluate_costs(prop, rights, user_bid, policy)
        profit = project_profit(valuation, costs, policy)
        summary = grade_outcome(valuation, rights, profit, self._clock())

        logger.info(
            "Analyzed %s (%s, step %d): fmv=%s min_bid=%s grade=%s",
            prop.id,
            prop.difficulty.value,
            prop.auction_step,
            valuation.adjusted_fmv,
            valuation.min_bid,
            summary.grade.value,
        )

        return AuctionAnalysisResult(
            property=prop,
            valuation=valuation,
            rights=rights,
            costs=costs,
            profit=profit,
            summary=summary,
            user_bid=max(0, int(user_bid)),
            policy_version=policy.version,
            court_docs=normalized_docs,
        )

    def score(
        self,
        result: AuctionAnalysisResult,
        prev_total_exp: Optional[int] = None,
    ) -> ScoreBreakdown:
        """Bidding skill score for the bid the result was computed at."""
        return self._scorer.calculate(result, result.user_bid, prev_total_exp)

    def submit_bid(
        self,
        seed: PropertySeed,
        court_docs: Optional[CourtDocsRaw],
        user_bid: int,
        policy: Optional[Policy] = None,
        prev_total_exp: Optional[int] = None,
    ) -> BidRound:
        """
        Analyze, score and resolve a submitted bid.

        Args:
            seed: Property seed
            court_docs: Raw court documents, or None
            user_bid: The user's bid in won
            policy: Explicit policy (default: difficulty-merged base)
            prev_total_exp: Cumulative EXP before this round, if tracked

        Returns:
            BidRound; score is None with score_error set if scoring failed
        """
        prop = self._normalizer.normalize(seed)
        policy = policy or self.policy_for(prop)
        result = self._analyze_property(prop, court_docs, user_bid, policy)

        competitor_bids = generate_competitor_bids(result.property, result.valuation, policy)
        outcome = determine_outcome(result, user_bid, policy)

        score = None
        score_error = None
        try:
            score = self.score(result, prev_total_exp)
        except (ScoreCalculationError, ArithmeticError, ValueError) as e:
            logger.exception("Score calculation failed for %s", result.property.id)
            score_error = f"Score unavailable: {e}"

        return BidRound(
            result=result,
            user_bid=result.user_bid,
            competitor_bids=competitor_bids,
            outcome=outcome,
            score=score,
            score_error=score_error,
        )
