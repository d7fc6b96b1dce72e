"""
Outcome Grader

Investment-quality verdict for a round: letter grade from 12-month
annualized ROI, risk label from the eviction risk score, and the best
holding horizon.
"""

from datetime import datetime
from typing import Final, Tuple

from auction.models import Grade, Horizon, RiskLabel

from .models import AuctionSummary, Profit, Rights, Valuation


# (minimum 12-month annualized ROI, grade), checked in order
GRADE_BANDS: Final[Tuple[Tuple[float, Grade], ...]] = (
    (0.50, Grade.S),
    (0.35, Grade.A),
    (0.20, Grade.B),
    (0.10, Grade.C),
)

HIGH_RISK_THRESHOLD: Final = 0.6
MEDIUM_RISK_THRESHOLD: Final = 0.3


def investment_grade(annualized_roi_12m: float) -> Grade:
    for threshold, grade in GRADE_BANDS:
        if annualized_roi_12m >= threshold:
            return grade
    return Grade.D


def risk_label(eviction_risk: float) -> RiskLabel:
    if eviction_risk >= HIGH_RISK_THRESHOLD:
        return RiskLabel.HIGH
    if eviction_risk >= MEDIUM_RISK_THRESHOLD:
        return RiskLabel.MEDIUM
    return RiskLabel.SAFE


def best_holding_period(profit: Profit) -> Horizon:
    """Horizon with the highest annualized ROI; ties go to the longer hold."""
    best = Horizon.M3
    for horizon, scenario in profit.scenarios.items():
        if scenario.annualized_roi >= profit.scenarios[best].annualized_roi:
            best = horizon
    return best


def grade_outcome(
    valuation: Valuation,
    rights: Rights,
    profit: Profit,
    generated_at: datetime,
) -> AuctionSummary:
    """
    Summarize a round.

    Args:
        valuation: Valuation (recommended range)
        rights: Rights assessment (eviction risk)
        profit: Profit projection
        generated_at: Timestamp recorded on the summary

    Returns:
        AuctionSummary
    """
    return AuctionSummary(
        grade=investment_grade(profit.scenarios.m12.annualized_roi),
        risk_label=risk_label(rights.eviction_risk),
        is_profitable=any(s.net_profit > 0 for _, s in profit.scenarios.items()),
        recommended_bid_range=valuation.recommended_bid_range,
        best_holding_period=best_holding_period(profit),
        generated_at=generated_at,
    )
