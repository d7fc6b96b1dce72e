"""
Difficulty overlays.

Easy widens the cushion (looser clamp, higher LTV, fewer rivals); hard
tightens it. Normal uses the base policy unchanged.
"""

from typing import Final, Mapping

from auction.models import DifficultyMode

from .defaults import DEFAULT_POLICY
from .merge import merge_policy
from .schema import Policy


EASY_OVERRIDES: Final = {
    "valuation": {
        "fmv_volatility_range": {"min": -0.02, "max": 0.04},
        "fmv_clamp": {"min": 0.90, "max": 1.10},
        "exit_discount_rate": 0.98,
        "future_recovery_factor": 1.03,
        "recommended_range_ratio": {"min": 0.99, "max": 1.05},
    },
    "cost": {
        "loan_ltv_default": 0.8,
        "repair_rate": 0.05,
    },
    "profit": {
        "target_margin_rate": 0.05,
        "target_annual_roi": 0.07,
    },
    "competitor": {
        "count": 2,
        "bid_range": {"min": 0.98, "max": 1.08},
    },
}

HARD_OVERRIDES: Final = {
    "valuation": {
        "fmv_volatility_range": {"min": -0.08, "max": 0.02},
        "fmv_clamp": {"min": 0.82, "max": 1.04},
        "exit_discount_rate": 0.92,
        "future_recovery_factor": 1.00,
        "recommended_range_ratio": {"min": 0.93, "max": 0.98},
    },
    "cost": {
        "loan_ltv_default": 0.6,
        "repair_rate": 0.10,
    },
    "profit": {
        "target_margin_rate": 0.15,
        "target_annual_roi": 0.20,
    },
    "competitor": {
        "count": 6,
        "bid_range": {"min": 0.92, "max": 1.20},
    },
}

DIFFICULTY_OVERRIDES: Final[Mapping[DifficultyMode, Mapping]] = {
    DifficultyMode.EASY: EASY_OVERRIDES,
    DifficultyMode.NORMAL: {},
    DifficultyMode.HARD: HARD_OVERRIDES,
}


def policy_for_difficulty(
    difficulty: DifficultyMode,
    base: Policy = DEFAULT_POLICY,
) -> Policy:
    """
    Return base merged with the overlay for the given difficulty.

    Args:
        difficulty: Difficulty mode of the round
        base: Policy to overlay (default: the v2.2 default policy)

    Returns:
        Merged policy (base itself for normal)
    """
    return merge_policy(base, DIFFICULTY_OVERRIDES.get(difficulty, {}))
