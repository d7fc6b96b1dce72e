"""
Analysis pipeline stages: valuation, rights, costs, profit and grading.
"""

from .models import (
    BidRange,
    Valuation,
    RightLine,
    Rights,
    AcquisitionCost,
    HorizonCost,
    Costs,
    ProfitScenario,
    Profit,
    AuctionSummary,
    AuctionAnalysisResult,
)
from .valuation import evaluate_valuation, minimum_bid, EXIT_PRICE_RATIOS
from .rights import assess_rights
from .costs import evaluate_costs
from .profit import project_profit, annualize
from .grading import grade_outcome, investment_grade, risk_label, best_holding_period

__all__ = [
    "BidRange",
    "Valuation",
    "RightLine",
    "Rights",
    "AcquisitionCost",
    "HorizonCost",
    "Costs",
    "ProfitScenario",
    "Profit",
    "AuctionSummary",
    "AuctionAnalysisResult",
    "evaluate_valuation",
    "minimum_bid",
    "EXIT_PRICE_RATIOS",
    "assess_rights",
    "evaluate_costs",
    "project_profit",
    "annualize",
    "grade_outcome",
    "investment_grade",
    "risk_label",
    "best_holding_period",
]
