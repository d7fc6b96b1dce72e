"""
Valuation Calculator

Derives fair-market value, the round's minimum bid, exit prices for each
holding horizon and the recommended bid window from a normalized Property.

Pipeline:
1. BASE FMV - appraisal × per-type FMV rate
2. CLAMP - keep FMV within the policy band around the appraisal
3. MIN BID - appraisal × initial rate × reduction^(step - 1)
4. EXIT - adjusted FMV × fixed horizon ratio
5. RANGE - adjusted FMV × recommended range ratios
"""

import logging
import math
from typing import Final, Mapping

from auction.models import Horizon, PerHorizon, Property
from auction.numeric import clamp, round_k
from auction.policy import Policy

from .models import BidRange, Valuation


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

# Used when the policy has no rate for the property type
DEFAULT_FMV_RATE: Final = 0.95

# Resale price relative to adjusted FMV after each holding period.
# These ratios are authoritative; policy exit_discount_rate and
# future_recovery_factor are not applied.
EXIT_PRICE_RATIOS: Final[Mapping[Horizon, float]] = {
    Horizon.M3: 0.96,
    Horizon.M6: 0.98,
    Horizon.M12: 1.00,
}

VALUATION_METHOD: Final = "fmv-weighted"
VALUATION_CONFIDENCE: Final = 0.25


def minimum_bid(appraisal_value: int, auction_step: int, policy: Policy) -> int:
    """
    Minimum bid for an auction round.

    Each failed round reduces the previous minimum by the policy reduction
    rate, so the result never increases with the step.
    """
    rates = policy.valuation
    steps_failed = max(0, auction_step - 1)
    raw = appraisal_value * rates.initial_min_bid_rate * rates.min_bid_reduction_rate ** steps_failed
    return round_k(raw)


def evaluate_valuation(prop: Property, policy: Policy) -> Valuation:
    """
    Value a property for the current round.

    Args:
        prop: Normalized property
        policy: Merged policy for the round

    Returns:
        Valuation with FMV, min bid, exit prices and recommended range
    """
    rates = policy.valuation
    appraisal = prop.appraisal_value
    notes = []

    # Step 1: Base FMV from the per-type rate
    fmv_rate = rates.base_fmv_rate.get(prop.type)
    if fmv_rate is None:
        fmv_rate = DEFAULT_FMV_RATE
        notes.append(f"No FMV rate for {prop.type.value}; default {DEFAULT_FMV_RATE:.2f} used")
    base_fmv = round_k(appraisal * fmv_rate)
    notes.append(f"FMV = appraisal × {fmv_rate:.2f}")

    # Step 2: Clamp to the allowed band (integer bounds inside the band)
    lower = math.ceil(round(appraisal * rates.fmv_clamp.min, 6))
    upper = math.floor(round(appraisal * rates.fmv_clamp.max, 6))
    adjusted_fmv = int(clamp(base_fmv, lower, upper))
    if adjusted_fmv != base_fmv:
        notes.append(
            f"FMV clamped to {rates.fmv_clamp.min:.2f}-{rates.fmv_clamp.max:.2f} × appraisal"
        )

    # Step 3: Minimum bid for the round
    min_bid = minimum_bid(appraisal, prop.auction_step, policy)
    if prop.auction_step > 1:
        notes.append(
            f"Round {prop.auction_step}: minimum bid reduced "
            f"{prop.auction_step - 1} time(s) by {rates.min_bid_reduction_rate:.2f}"
        )

    # Step 4: Exit prices per horizon
    exit_price = PerHorizon.build(lambda h: round_k(adjusted_fmv * EXIT_PRICE_RATIOS[h]))

    # Step 5: Recommended bid window
    ratio = rates.recommended_range_ratio
    recommended = BidRange(
        min=round_k(adjusted_fmv * ratio.min),
        max=round_k(adjusted_fmv * ratio.max),
    )

    logger.debug(
        "Valuation %s: appraisal=%s fmv=%s min_bid=%s",
        prop.id,
        appraisal,
        adjusted_fmv,
        min_bid,
    )

    return Valuation(
        appraisal_value=appraisal,
        base_fmv=base_fmv,
        adjusted_fmv=adjusted_fmv,
        min_bid=min_bid,
        exit_price=exit_price,
        recommended_bid_range=recommended,
        confidence=VALUATION_CONFIDENCE,
        method=VALUATION_METHOD,
        notes=tuple(notes),
    )
