"""
Profit Projector

Net profit, ROI on own cash, annualized ROI and margin for every holding
horizon, plus the initial safety margin against FMV.
"""

import logging

from auction.models import Horizon, PerHorizon
from auction.numeric import safe_divide
from auction.policy import Policy

from .models import Costs, Profit, ProfitScenario, Valuation


logger = logging.getLogger(__name__)


def annualize(roi: float, months: int) -> float:
    """
    Compound a holding-period ROI to a 12-month rate.

    A total loss (roi <= -1) annualizes to -1.
    """
    if roi <= -1:
        return -1.0
    return (1 + roi) ** (12 / months) - 1


def project_scenario(
    valuation: Valuation, costs: Costs, horizon: Horizon, policy: Policy
) -> ProfitScenario:
    exit_price = valuation.exit_price[horizon]
    total_cost = costs.by_horizon[horizon].total_cost
    net_profit = exit_price - total_cost

    roi = safe_divide(net_profit, costs.acquisition.own_cash)
    annualized = annualize(roi, horizon.months)
    margin = net_profit / exit_price if exit_price > 0 else 0.0

    targets = policy.profit
    return ProfitScenario(
        exit_price=exit_price,
        total_cost=total_cost,
        net_profit=net_profit,
        roi=roi,
        annualized_roi=annualized,
        projected_profit_margin=margin,
        meets_target_margin=margin >= targets.target_margin_rate,
        meets_target_roi=annualized >= targets.target_annual_roi,
    )


def project_profit(valuation: Valuation, costs: Costs, policy: Policy) -> Profit:
    """
    Project profit for each horizon.

    Args:
        valuation: Valuation of the property
        costs: Costs at the user's bid
        policy: Merged policy (profit targets)

    Returns:
        Profit with per-horizon scenarios and breakeven exit prices
    """
    fmv = valuation.adjusted_fmv
    safety_margin = (
        (fmv - costs.acquisition.total_acquisition) / fmv if fmv > 0 else 0.0
    )

    scenarios = PerHorizon.build(lambda h: project_scenario(valuation, costs, h, policy))
    # Exit price at which that horizon's net profit is zero
    breakeven = PerHorizon.build(lambda h: costs.by_horizon[h].total_cost)

    logger.debug(
        "Profit: safety_margin=%.3f net_12m=%s",
        safety_margin,
        scenarios.m12.net_profit,
    )

    return Profit(
        initial_safety_margin=safety_margin,
        breakeven_exit=breakeven,
        scenarios=scenarios,
    )
