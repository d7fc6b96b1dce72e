"""
Result records produced by the analysis pipeline.

Every record is frozen and recomputed on each engine invocation.
to_dict() output is plain JSON (horizons keyed "3m"/"6m"/"12m").
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional, Tuple

from auction.models import (
    CourtDocsNormalized,
    Grade,
    Horizon,
    PerHorizon,
    Property,
    RightType,
    RiskLabel,
)


@dataclass(frozen=True)
class BidRange:
    """Recommended bid window in won."""
    min: int
    max: int

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


# =============================================================================
# Valuation
# =============================================================================

@dataclass(frozen=True)
class Valuation:
    appraisal_value: int
    base_fmv: int
    adjusted_fmv: int
    min_bid: int
    exit_price: PerHorizon[int]
    recommended_bid_range: BidRange
    confidence: float
    method: str
    notes: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "appraisal_value": self.appraisal_value,
            "base_fmv": self.base_fmv,
            "adjusted_fmv": self.adjusted_fmv,
            "min_bid": self.min_bid,
            "exit_price": self.exit_price.to_dict(),
            "recommended_bid_range": self.recommended_bid_range.to_dict(),
            "confidence": self.confidence,
            "method": self.method,
            "notes": list(self.notes),
        }


# =============================================================================
# Rights
# =============================================================================

@dataclass(frozen=True)
class RightLine:
    """
    One liability line: a registered right or an occupant.

    classified is False only for registered rights whose free-text type
    matched nothing; raw_type keeps the original text for audit.
    """
    right_type: RightType
    label: str
    inheritable: bool
    payout: int
    risk: int
    source: str
    raw_type: str = ""
    classified: bool = True

    def to_dict(self) -> dict:
        return {
            "right_type": self.right_type.value,
            "label": self.label,
            "inheritable": self.inheritable,
            "payout": self.payout,
            "risk": self.risk,
            "source": self.source,
            "raw_type": self.raw_type,
            "classified": self.classified,
        }


@dataclass(frozen=True)
class Rights:
    assumable_rights_total: int
    eviction_cost_estimated: int
    eviction_risk: float
    risk_flags: Tuple[str, ...] = ()
    breakdown: Tuple[RightLine, ...] = ()
    warnings: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "Rights":
        """All-zero result used when no court documents are supplied."""
        return cls(assumable_rights_total=0, eviction_cost_estimated=0, eviction_risk=0.0)

    @property
    def tenant_count(self) -> int:
        return sum(1 for line in self.breakdown if line.source == "occupant")

    def has(self, right_type: RightType) -> bool:
        return any(line.right_type is right_type for line in self.breakdown)

    def to_dict(self) -> dict:
        return {
            "assumable_rights_total": self.assumable_rights_total,
            "eviction_cost_estimated": self.eviction_cost_estimated,
            "eviction_risk": self.eviction_risk,
            "risk_flags": list(self.risk_flags),
            "breakdown": [line.to_dict() for line in self.breakdown],
            "warnings": list(self.warnings),
        }


# =============================================================================
# Costs
# =============================================================================

@dataclass(frozen=True)
class AcquisitionCost:
    bid: int
    assumable_rights_total: int
    taxes: int
    legal_fees: int
    repair_cost: int
    eviction_cost: int
    total_acquisition: int
    loan_principal: int
    own_cash: int


@dataclass(frozen=True)
class HorizonCost:
    months: int
    holding_cost: int
    interest_cost: int
    total_cost: int


@dataclass(frozen=True)
class Costs:
    acquisition: AcquisitionCost
    by_horizon: PerHorizon[HorizonCost]

    def to_dict(self) -> dict:
        return {
            "acquisition": asdict(self.acquisition),
            "by_horizon": self.by_horizon.to_dict(asdict),
        }


# =============================================================================
# Profit
# =============================================================================

@dataclass(frozen=True)
class ProfitScenario:
    exit_price: int
    total_cost: int
    net_profit: int
    roi: float
    annualized_roi: float
    projected_profit_margin: float
    meets_target_margin: bool
    meets_target_roi: bool


@dataclass(frozen=True)
class Profit:
    initial_safety_margin: float
    breakeven_exit: PerHorizon[int]
    scenarios: PerHorizon[ProfitScenario]

    def to_dict(self) -> dict:
        return {
            "initial_safety_margin": self.initial_safety_margin,
            "breakeven_exit": self.breakeven_exit.to_dict(),
            "scenarios": self.scenarios.to_dict(asdict),
        }


# =============================================================================
# Summary and result
# =============================================================================

@dataclass(frozen=True)
class AuctionSummary:
    """
    Investment-quality verdict for the round.

    grade rates the deal itself (12-month annualized ROI). The bidding-skill
    grade lives on ScoreBreakdown.
    """
    grade: Grade
    risk_label: RiskLabel
    is_profitable: bool
    recommended_bid_range: BidRange
    best_holding_period: Horizon
    generated_at: datetime

    def to_dict(self) -> dict:
        return {
            "grade": self.grade.value,
            "risk_label": self.risk_label.value,
            "is_profitable": self.is_profitable,
            "recommended_bid_range": self.recommended_bid_range.to_dict(),
            "best_holding_period": self.best_holding_period.key,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class AuctionAnalysisResult:
    property: Property
    valuation: Valuation
    rights: Rights
    costs: Costs
    profit: Profit
    summary: AuctionSummary
    user_bid: int
    policy_version: str
    court_docs: Optional[CourtDocsNormalized] = None

    def to_dict(self) -> dict:
        """Single self-contained JSON-serializable value."""
        return {
            "property": self.property.to_dict(),
            "valuation": self.valuation.to_dict(),
            "rights": self.rights.to_dict(),
            "costs": self.costs.to_dict(),
            "profit": self.profit.to_dict(),
            "court_docs": self.court_docs.to_dict() if self.court_docs else None,
            "summary": self.summary.to_dict(),
            "user_bid": self.user_bid,
            "policy_version": self.policy_version,
        }
