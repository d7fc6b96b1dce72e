"""
Bidding skill score.

Scores how well the user bid, on a 0-1000 scale:
- Accuracy (0-400): distance from the recommended range midpoint
- Profitability (0-400): 12-month annualized ROI plus margin bonuses
- Risk control (0-200): rights burden, eviction risk and eviction cost

This is separate from the investment grade on AuctionSummary, which rates
the deal itself regardless of who bid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from auction.analysis.models import AuctionAnalysisResult
from auction.models import Grade
from auction.numeric import clamp, lerp, map_range, round_half_up


class ScoreCalculationError(ArithmeticError):
    """Raised when a score cannot be computed from the analysis result."""


class Tier(Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    DIAMOND = "Diamond"


@dataclass(frozen=True)
class LevelInfo:
    tier: Tier
    level: int
    total_exp: int
    leveled_up: bool

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "level": self.level,
            "total_exp": self.total_exp,
            "leveled_up": self.leveled_up,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    accuracy_score: int
    profitability_score: int
    risk_control_score: int
    final_score: int
    grade: Grade
    exp_gain: int
    level_info: Optional[LevelInfo] = None

    def to_dict(self) -> dict:
        return {
            "accuracy_score": self.accuracy_score,
            "profitability_score": self.profitability_score,
            "risk_control_score": self.risk_control_score,
            "final_score": self.final_score,
            "grade": self.grade.value,
            "exp_gain": self.exp_gain,
            "level_info": self.level_info.to_dict() if self.level_info else None,
        }


# =============================================================================
# Experience levels
# =============================================================================

# (minimum total EXP, tier), checked in order
TIER_THRESHOLDS = (
    (30_000, Tier.DIAMOND),
    (18_001, Tier.PLATINUM),
    (9_001, Tier.GOLD),
    (3_001, Tier.SILVER),
)

# (upper EXP bound, first level, EXP per level, offset, max level)
LEVEL_BANDS = (
    (3_000, 1, 300, 0, 10),
    (9_000, 11, 600, 3_001, 20),
    (18_000, 21, 900, 9_001, 30),
    (30_000, 31, 1_200, 18_001, 40),
)
TOP_BAND = (41, 2_000, 30_001, 99)


def tier_for(total_exp: int) -> Tier:
    for threshold, tier in TIER_THRESHOLDS:
        if total_exp >= threshold:
            return tier
    return Tier.BRONZE


def level_for(total_exp: int) -> int:
    """Level within the tier ladder; steps widen as EXP grows."""
    if total_exp <= 0:
        return 1
    for upper, first_level, step, offset, max_level in LEVEL_BANDS:
        if total_exp <= upper:
            return min(max_level, first_level + (total_exp - offset) // step)
    first_level, step, offset, max_level = TOP_BAND
    return min(max_level, first_level + (total_exp - offset) // step)


def level_info(prev_total_exp: int, exp_gain: int) -> LevelInfo:
    total = max(0, prev_total_exp) + exp_gain
    return LevelInfo(
        tier=tier_for(total),
        level=level_for(total),
        total_exp=total,
        leveled_up=level_for(total) > level_for(max(0, prev_total_exp)),
    )


class ScoreCalculator:
    """
    Calculates the 0-1000 bidding skill score.

    Scoring methodology:
    - Accuracy (max 400): 400 minus 400 × relative distance from the
      recommended midpoint
    - Profitability (max 400): piecewise base on 12m annualized ROI plus
      ROI (50), safety margin (30) and breakeven (20) bonuses
    - Risk control (max 200): rights burden (120), eviction risk (50),
      eviction cost (30)
    """

    MAX_ACCURACY = 400
    MAX_PROFITABILITY = 400
    MAX_RISK_CONTROL = 200
    MAX_SCORE = 1000

    # Final score grade bands
    GRADE_S = 900
    GRADE_A = 750
    GRADE_B = 600
    GRADE_C = 450

    EXP_RATE = 0.6

    # Eviction cost above 2% of FMV scores zero
    EVICTION_COST_CAP = 0.02

    def calculate(
        self,
        result: AuctionAnalysisResult,
        user_bid: int,
        prev_total_exp: Optional[int] = None,
    ) -> ScoreBreakdown:
        """
        Score a bid.

        Args:
            result: Analysis result computed at user_bid
            user_bid: The user's bid in won
            prev_total_exp: Cumulative EXP before this round, if tracked

        Returns:
            ScoreBreakdown (with LevelInfo when prev_total_exp is given)

        Raises:
            ScoreCalculationError: If the result holds non-finite values
        """
        accuracy = self._calculate_accuracy(result, user_bid)
        profitability = self._calculate_profitability(result)
        risk_control = self._calculate_risk_control(result)

        total = accuracy + profitability + risk_control
        if not math.isfinite(total):
            raise ScoreCalculationError(f"non-finite score components: {total!r}")

        final_score = int(clamp(round_half_up(total), 0, self.MAX_SCORE))
        exp_gain = round_half_up(final_score * self.EXP_RATE)

        return ScoreBreakdown(
            accuracy_score=round_half_up(accuracy),
            profitability_score=round_half_up(profitability),
            risk_control_score=round_half_up(risk_control),
            final_score=final_score,
            grade=self.grade_for(final_score),
            exp_gain=exp_gain,
            level_info=(
                level_info(prev_total_exp, exp_gain) if prev_total_exp is not None else None
            ),
        )

    def grade_for(self, final_score: int) -> Grade:
        if final_score >= self.GRADE_S:
            return Grade.S
        elif final_score >= self.GRADE_A:
            return Grade.A
        elif final_score >= self.GRADE_B:
            return Grade.B
        elif final_score >= self.GRADE_C:
            return Grade.C
        else:
            return Grade.D

    def _calculate_accuracy(self, result: AuctionAnalysisResult, user_bid: int) -> float:
        """400 at the midpoint, falling linearly with relative distance."""
        mid = result.valuation.recommended_bid_range.midpoint
        if mid <= 0 or user_bid <= 0:
            return 0
        penalty = abs(user_bid - mid) / mid * self.MAX_ACCURACY
        return clamp(round_half_up(self.MAX_ACCURACY - penalty), 0, self.MAX_ACCURACY)

    def _calculate_profitability(self, result: AuctionAnalysisResult) -> float:
        scenario = result.profit.scenarios.m12
        roi = scenario.annualized_roi
        if not math.isfinite(roi):
            raise ScoreCalculationError(f"non-finite annualized ROI: {roi!r}")

        if roi >= 0.2:
            base = lerp(0.2, 0.35, 350, 400, min(roi, 0.35))
        elif roi >= 0.1:
            base = lerp(0.1, 0.19, 280, 340, roi)
        elif roi >= 0:
            base = lerp(0, 0.09, 150, 260, roi)
        else:
            base = lerp(-0.3, 0, 0, 120, max(roi, -0.3))

        roi_bonus = map_range(clamp(roi, 0, 0.3), 0, 0.3, 0, 50)

        margin = result.profit.initial_safety_margin
        margin_bonus = map_range(clamp(margin, 0, 0.2), 0, 0.2, 0, 30)

        # Lower breakeven relative to FMV earns more
        fmv = max(1, result.valuation.adjusted_fmv)
        breakeven_ratio = clamp(result.profit.breakeven_exit.m12 / fmv, 0.6, 1.0)
        breakeven_bonus = map_range(breakeven_ratio, 1.0, 0.6, 0, 20)

        total = base + roi_bonus + margin_bonus + breakeven_bonus
        return clamp(round_half_up(total), 0, self.MAX_PROFITABILITY)

    def _calculate_risk_control(self, result: AuctionAnalysisResult) -> float:
        rights = result.rights
        fmv = max(1, result.valuation.adjusted_fmv)

        burden = clamp(rights.assumable_rights_total / fmv, 0, 1)
        rights_score = map_range(burden, 1, 0, 0, 120)

        # eviction_risk is 0-1; the component reads it on the 0-5 line scale
        risk_scale = clamp(rights.eviction_risk * 5, 0, 5)
        eviction_risk_score = map_range(risk_scale, 5, 0, 0, 50)

        cost_ratio = clamp(rights.eviction_cost_estimated / fmv, 0, self.EVICTION_COST_CAP)
        eviction_cost_score = map_range(cost_ratio, self.EVICTION_COST_CAP, 0, 0, 30)

        total = rights_score + eviction_risk_score + eviction_cost_score
        return clamp(total, 0, self.MAX_RISK_CONTROL)


def calculate_score(
    result: AuctionAnalysisResult,
    user_bid: int,
    prev_total_exp: Optional[int] = None,
) -> ScoreBreakdown:
    """Score a bid with the default ScoreCalculator."""
    return ScoreCalculator().calculate(result, user_bid, prev_total_exp)
