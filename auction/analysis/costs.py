"""
Cost Calculator

Acquisition cost, financing split and per-horizon holding/interest cost
for a given bid. Components are rounded to the thousand before they are
summed, so every total equals the sum of its reported parts.
"""

import logging

from auction.models import Horizon, PerHorizon, Property
from auction.numeric import round_k
from auction.policy import Policy

from .models import AcquisitionCost, Costs, HorizonCost, Rights


logger = logging.getLogger(__name__)


def acquisition_cost(prop: Property, rights: Rights, bid: int, policy: Policy) -> AcquisitionCost:
    """Up-front cost of winning at bid, and how it is financed."""
    rates = policy.cost

    taxes = round_k(bid * rates.acquisition_tax_rate)
    legal_fees = round_k(rates.legal_fee_flat)
    repair_cost = round_k(prop.appraisal_value * rates.repair_rate)
    eviction_cost = rights.eviction_cost_estimated

    total = (
        bid
        + rights.assumable_rights_total
        + taxes
        + legal_fees
        + repair_cost
        + eviction_cost
    )

    loan_principal = min(round_k(bid * rates.loan_ltv_default), bid)
    own_cash = max(0, total - loan_principal)

    return AcquisitionCost(
        bid=bid,
        assumable_rights_total=rights.assumable_rights_total,
        taxes=taxes,
        legal_fees=legal_fees,
        repair_cost=repair_cost,
        eviction_cost=eviction_cost,
        total_acquisition=total,
        loan_principal=loan_principal,
        own_cash=own_cash,
    )


def horizon_cost(
    acquisition: AcquisitionCost, horizon: Horizon, policy: Policy
) -> HorizonCost:
    """Holding and interest cost for one horizon."""
    rates = policy.cost
    months = horizon.months

    holding = round_k(acquisition.bid * rates.holding_monthly_rate * months)
    interest = round_k(acquisition.loan_principal * rates.loan_interest_rate * months / 12)

    return HorizonCost(
        months=months,
        holding_cost=holding,
        interest_cost=interest,
        total_cost=acquisition.total_acquisition + holding + interest,
    )


def evaluate_costs(prop: Property, rights: Rights, bid: int, policy: Policy) -> Costs:
    """
    Compute acquisition and holding costs.

    Args:
        prop: Normalized property
        rights: Rights assessment for the case
        bid: Bid amount in won (0 when no bid has been placed)
        policy: Merged policy for the round

    Returns:
        Costs with the acquisition block and one block per horizon
    """
    bid = max(0, int(bid))
    acquisition = acquisition_cost(prop, rights, bid, policy)
    by_horizon = PerHorizon.build(lambda h: horizon_cost(acquisition, h, policy))

    logger.debug(
        "Costs %s at bid %s: acquisition=%s own_cash=%s",
        prop.id,
        bid,
        acquisition.total_acquisition,
        acquisition.own_cash,
    )
    return Costs(acquisition=acquisition, by_horizon=by_horizon)
