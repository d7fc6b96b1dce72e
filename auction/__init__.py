"""
Auction Trainer - Auction Analysis Engine

Deterministic, policy-parameterized analysis of foreclosure auction rounds:
1. Intake (PropertySeed / CourtDocsRaw normalization)
2. Valuation (FMV, minimum bid, exit prices, recommended range)
3. Rights (assumable liabilities, eviction cost and risk)
4. Costs and Profit (per holding horizon)
5. Outcome grading, skill scoring and competitor simulation
"""

from .models import (
    PropertyCategory,
    PropertyType,
    DifficultyMode,
    Region,
    Horizon,
    PerHorizon,
    RightType,
    EvictionRiskLevel,
    RiskLabel,
    Grade,
    Outcome,
    FloorInfo,
    PropertySeed,
    Property,
    RegisteredRightRaw,
    OccupantRaw,
    CourtDocsRaw,
    RegisteredRight,
    Occupant,
    CourtDocsNormalized,
)
from .policy import (
    Policy,
    PolicyError,
    DEFAULT_POLICY,
    EASY_OVERRIDES,
    HARD_OVERRIDES,
    deep_merge,
    merge_policy,
    policy_for_difficulty,
    load_policy,
)
from .intake import (
    PropertyNormalizer,
    InvalidSeed,
    InvalidCourtDocs,
    normalize_court_docs,
    ScenarioInput,
)
from .analysis import (
    Valuation,
    Rights,
    Costs,
    Profit,
    AuctionSummary,
    AuctionAnalysisResult,
    evaluate_valuation,
    assess_rights,
    evaluate_costs,
    project_profit,
    grade_outcome,
)
from .scoring import (
    ScoreCalculator,
    ScoreBreakdown,
    ScoreCalculationError,
    LevelInfo,
    Tier,
    calculate_score,
)
from .competitors import generate_competitor_bids, determine_outcome
from .randomness import SeededRandom
from .analyzer import AuctionAnalyzer, BidRound

__all__ = [
    # Models
    "PropertyCategory",
    "PropertyType",
    "DifficultyMode",
    "Region",
    "Horizon",
    "PerHorizon",
    "RightType",
    "EvictionRiskLevel",
    "RiskLabel",
    "Grade",
    "Outcome",
    "FloorInfo",
    "PropertySeed",
    "Property",
    "RegisteredRightRaw",
    "OccupantRaw",
    "CourtDocsRaw",
    "RegisteredRight",
    "Occupant",
    "CourtDocsNormalized",
    # Policy
    "Policy",
    "PolicyError",
    "DEFAULT_POLICY",
    "EASY_OVERRIDES",
    "HARD_OVERRIDES",
    "deep_merge",
    "merge_policy",
    "policy_for_difficulty",
    "load_policy",
    # Intake
    "PropertyNormalizer",
    "InvalidSeed",
    "InvalidCourtDocs",
    "normalize_court_docs",
    "ScenarioInput",
    # Analysis
    "Valuation",
    "Rights",
    "Costs",
    "Profit",
    "AuctionSummary",
    "AuctionAnalysisResult",
    "evaluate_valuation",
    "assess_rights",
    "evaluate_costs",
    "project_profit",
    "grade_outcome",
    # Scoring
    "ScoreCalculator",
    "ScoreBreakdown",
    "ScoreCalculationError",
    "LevelInfo",
    "Tier",
    "calculate_score",
    # Competitors
    "generate_competitor_bids",
    "determine_outcome",
    "SeededRandom",
    # Orchestrator
    "AuctionAnalyzer",
    "BidRound",
]
