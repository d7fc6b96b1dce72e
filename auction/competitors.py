"""
Competitor bid simulation and round outcome.

Synthetic rival bids are drawn inside a window derived from the minimum
bid and the recommended range, widened or narrowed by difficulty. Draws
are keyed by the property's stable fields, so the same seed always yields
the same field of competitors.
"""

import logging
from typing import Final, List

from auction.analysis.models import AuctionAnalysisResult, Valuation
from auction.models import Outcome, Property
from auction.policy import DistributionType, Policy
from auction.randomness import SeededRandom


logger = logging.getLogger(__name__)


# Window ceiling relative to the top of the recommended range
RECOMMENDED_CEILING_FACTOR: Final = 1.2

# Bids above recommended max × this are overpayment
OVERPAY_FACTOR: Final = 1.1

# Normal distribution: the window spans ±3σ
SIGMA_DIVISOR: Final = 6


def bid_window(prop: Property, valuation: Valuation, policy: Policy):
    """
    (low, high) window for competitor bids.

    Returns None when the policy has no competitor section.
    """
    competitor = policy.competitor
    if competitor is None:
        return None

    low = valuation.min_bid * competitor.bid_range.min
    high = min(
        valuation.min_bid * competitor.bid_range.max,
        valuation.recommended_bid_range.max * RECOMMENDED_CEILING_FACTOR,
    )
    high = max(low, high)

    multiplier = competitor.multiplier_for(prop.difficulty)
    adjusted_high = low + (high - low) * multiplier
    return low, adjusted_high


def _draw(rng: SeededRandom, distribution: DistributionType, low: float, high: float) -> float:
    if high <= low:
        return low
    if distribution is DistributionType.NORMAL:
        mean = (low + high) / 2
        std = (high - low) / SIGMA_DIVISOR
        return min(high, max(low, rng.gauss(mean, std)))
    if distribution is DistributionType.SKEWED:
        # Most rivals bid near the floor
        return rng.triangular(low, high, low)
    return rng.uniform(low, high)


def generate_competitor_bids(
    prop: Property, valuation: Valuation, policy: Policy
) -> List[int]:
    """
    Generate the synthetic competitor field.

    Args:
        prop: Normalized property (seed fields key the generator)
        valuation: Valuation of the property
        policy: Merged policy for the round

    Returns:
        policy.competitor.count unique bids, sorted descending; empty when
        the policy has no competitor section
    """
    window = bid_window(prop, valuation, policy)
    if window is None or policy.competitor.count == 0:
        return []
    low, high = window

    rng = SeededRandom(
        prop.id,
        prop.address,
        prop.type.value,
        prop.size_m2,
        prop.year_built,
        prop.difficulty.value,
        prop.auction_step,
    )

    bids = set()
    for index in range(policy.competitor.count):
        draw = _draw(rng.child(index), policy.competitor.distribution, low, high)
        bid = max(valuation.min_bid, round(draw))
        # Collisions step upward one won at a time
        while bid in bids:
            bid += 1
        bids.add(bid)

    result = sorted(bids, reverse=True)
    logger.debug("Competitor bids for %s: %s", prop.id, result)
    return result


def determine_outcome(
    result: AuctionAnalysisResult,
    user_bid: int,
    policy: Policy,
) -> Outcome:
    """
    Decide the round outcome for a bid.

    Below the minimum bid loses; above recommended max × 1.1 is overpay;
    otherwise the bid must strictly beat every competitor (ties lose).
    Without competitors a valid bid wins.
    """
    valuation = result.valuation
    if user_bid <= 0 or user_bid < valuation.min_bid:
        return Outcome.LOSE
    if user_bid > valuation.recommended_bid_range.max * OVERPAY_FACTOR:
        return Outcome.OVERPAY

    competitor_bids = generate_competitor_bids(result.property, valuation, policy)
    if competitor_bids and user_bid <= competitor_bids[0]:
        return Outcome.LOSE
    return Outcome.WIN
