"""
Policy Schema - Parameter Tables for the Analysis Engine

A Policy holds only the numeric parameters read by the pipeline stages.
Every stage receives the Policy explicitly; nothing reads a module-level
default from inside a computation.

Policies are frozen. Per-type and per-difficulty tables are exposed as
read-only mappings. Overlays never mutate a Policy; they build a new one
from the merged dictionary form (see merge.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, Tuple

from auction.models import DifficultyMode, PropertyType


class PolicyError(ValueError):
    """Raised when policy data is malformed or names unknown keys."""


class DistributionType(Enum):
    """Shape of the competitor bid distribution."""
    NORMAL = "normal"
    UNIFORM = "uniform"
    SKEWED = "skewed"


# =============================================================================
# Dictionary helpers
# =============================================================================

def _require_mapping(data: Any, section: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise PolicyError(f"{section}: expected a mapping, got {type(data).__name__}")
    return data


def _check_keys(data: Mapping[str, Any], allowed, section: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise PolicyError(f"{section}: unknown keys {unknown}")
    missing = sorted(set(allowed) - set(data))
    if missing:
        raise PolicyError(f"{section}: missing keys {missing}")


def _number(data: Mapping[str, Any], key: str, section: str) -> float:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PolicyError(f"{section}.{key}: expected a number, got {value!r}")
    return value


# =============================================================================
# Sections
# =============================================================================

@dataclass(frozen=True)
class RateRange:
    """Closed [min, max] ratio range."""
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise PolicyError(f"range min {self.min} exceeds max {self.max}")

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    @classmethod
    def from_dict(cls, data: Any, section: str) -> "RateRange":
        data = _require_mapping(data, section)
        _check_keys(data, ("min", "max"), section)
        return cls(min=_number(data, "min", section), max=_number(data, "max", section))

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class ValuationPolicy:
    """
    Valuation parameters.

    exit_discount_rate and future_recovery_factor travel with the policy
    but exit prices use the fixed horizon ratios in analysis.valuation.
    fmv_volatility_range is reserved for scenario generation.
    """
    base_fmv_rate: Mapping[PropertyType, float]
    fmv_volatility_range: RateRange
    fmv_clamp: RateRange
    exit_discount_rate: float
    future_recovery_factor: float
    initial_min_bid_rate: float
    min_bid_reduction_rate: float
    recommended_range_ratio: RateRange

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "base_fmv_rate",
        "fmv_volatility_range",
        "fmv_clamp",
        "exit_discount_rate",
        "future_recovery_factor",
        "initial_min_bid_rate",
        "min_bid_reduction_rate",
        "recommended_range_ratio",
    )

    def __post_init__(self) -> None:
        if not 0 < self.min_bid_reduction_rate <= 1:
            raise PolicyError("valuation.min_bid_reduction_rate must be in (0, 1]")
        if self.initial_min_bid_rate <= 0:
            raise PolicyError("valuation.initial_min_bid_rate must be positive")

    @classmethod
    def from_dict(cls, data: Any) -> "ValuationPolicy":
        section = "valuation"
        data = _require_mapping(data, section)
        _check_keys(data, cls.FIELDS, section)

        rates = {}
        for key, value in _require_mapping(data["base_fmv_rate"], "valuation.base_fmv_rate").items():
            property_type = PropertyType.from_string(key)
            if property_type is None:
                raise PolicyError(f"valuation.base_fmv_rate: unknown property type {key!r}")
            rates[property_type] = _number({key: value}, key, "valuation.base_fmv_rate")

        return cls(
            base_fmv_rate=MappingProxyType(rates),
            fmv_volatility_range=RateRange.from_dict(
                data["fmv_volatility_range"], "valuation.fmv_volatility_range"
            ),
            fmv_clamp=RateRange.from_dict(data["fmv_clamp"], "valuation.fmv_clamp"),
            exit_discount_rate=_number(data, "exit_discount_rate", section),
            future_recovery_factor=_number(data, "future_recovery_factor", section),
            initial_min_bid_rate=_number(data, "initial_min_bid_rate", section),
            min_bid_reduction_rate=_number(data, "min_bid_reduction_rate", section),
            recommended_range_ratio=RateRange.from_dict(
                data["recommended_range_ratio"], "valuation.recommended_range_ratio"
            ),
        )

    def to_dict(self) -> dict:
        return {
            "base_fmv_rate": {t.value: rate for t, rate in self.base_fmv_rate.items()},
            "fmv_volatility_range": self.fmv_volatility_range.to_dict(),
            "fmv_clamp": self.fmv_clamp.to_dict(),
            "exit_discount_rate": self.exit_discount_rate,
            "future_recovery_factor": self.future_recovery_factor,
            "initial_min_bid_rate": self.initial_min_bid_rate,
            "min_bid_reduction_rate": self.min_bid_reduction_rate,
            "recommended_range_ratio": self.recommended_range_ratio.to_dict(),
        }


@dataclass(frozen=True)
class RightsPolicy:
    eviction_base_cost: int
    eviction_risk_weight: float
    protected_tenant_extra: Optional[int]

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "eviction_base_cost",
        "eviction_risk_weight",
        "protected_tenant_extra",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "RightsPolicy":
        section = "rights"
        data = _require_mapping(data, section)
        _check_keys(data, cls.FIELDS, section)
        extra = data["protected_tenant_extra"]
        return cls(
            eviction_base_cost=_number(data, "eviction_base_cost", section),
            eviction_risk_weight=_number(data, "eviction_risk_weight", section),
            protected_tenant_extra=(
                None if extra is None else _number(data, "protected_tenant_extra", section)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "eviction_base_cost": self.eviction_base_cost,
            "eviction_risk_weight": self.eviction_risk_weight,
            "protected_tenant_extra": self.protected_tenant_extra,
        }


@dataclass(frozen=True)
class CostPolicy:
    acquisition_tax_rate: float
    legal_fee_flat: int
    repair_rate: float
    holding_months_default: int
    holding_monthly_rate: float
    loan_ltv_default: float
    loan_interest_rate: float

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "acquisition_tax_rate",
        "legal_fee_flat",
        "repair_rate",
        "holding_months_default",
        "holding_monthly_rate",
        "loan_ltv_default",
        "loan_interest_rate",
    )

    def __post_init__(self) -> None:
        if not 0 <= self.loan_ltv_default <= 1:
            raise PolicyError("cost.loan_ltv_default must be in [0, 1]")

    @classmethod
    def from_dict(cls, data: Any) -> "CostPolicy":
        section = "cost"
        data = _require_mapping(data, section)
        _check_keys(data, cls.FIELDS, section)
        return cls(**{key: _number(data, key, section) for key in cls.FIELDS})

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.FIELDS}


@dataclass(frozen=True)
class ProfitPolicy:
    target_margin_rate: float
    target_annual_roi: float

    FIELDS: ClassVar[Tuple[str, ...]] = ("target_margin_rate", "target_annual_roi")

    @classmethod
    def from_dict(cls, data: Any) -> "ProfitPolicy":
        section = "profit"
        data = _require_mapping(data, section)
        _check_keys(data, cls.FIELDS, section)
        return cls(**{key: _number(data, key, section) for key in cls.FIELDS})

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.FIELDS}


@dataclass(frozen=True)
class CompetitorPolicy:
    """Synthetic competitor field. bid_range is relative to the minimum bid."""
    count: int
    bid_range: RateRange
    difficulty_multiplier: Mapping[DifficultyMode, float]
    distribution: DistributionType

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "count",
        "bid_range",
        "difficulty_multiplier",
        "distribution",
    )

    def __post_init__(self) -> None:
        if self.count < 0:
            raise PolicyError("competitor.count must not be negative")

    def multiplier_for(self, difficulty: DifficultyMode) -> float:
        return self.difficulty_multiplier.get(difficulty, 1.0)

    @classmethod
    def from_dict(cls, data: Any) -> "CompetitorPolicy":
        section = "competitor"
        data = _require_mapping(data, section)
        _check_keys(data, cls.FIELDS, section)

        count = data["count"]
        if isinstance(count, bool) or not isinstance(count, int):
            raise PolicyError(f"competitor.count: expected an integer, got {count!r}")

        multipliers = {}
        raw = _require_mapping(data["difficulty_multiplier"], "competitor.difficulty_multiplier")
        for key, value in raw.items():
            difficulty = DifficultyMode.from_string(key)
            if difficulty is None:
                raise PolicyError(f"competitor.difficulty_multiplier: unknown difficulty {key!r}")
            multipliers[difficulty] = _number(raw, key, "competitor.difficulty_multiplier")

        try:
            distribution = DistributionType(data["distribution"])
        except ValueError:
            raise PolicyError(f"competitor.distribution: unknown type {data['distribution']!r}")

        return cls(
            count=count,
            bid_range=RateRange.from_dict(data["bid_range"], "competitor.bid_range"),
            difficulty_multiplier=MappingProxyType(multipliers),
            distribution=distribution,
        )

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "bid_range": self.bid_range.to_dict(),
            "difficulty_multiplier": {
                d.value: m for d, m in self.difficulty_multiplier.items()
            },
            "distribution": self.distribution.value,
        }


# =============================================================================
# Policy
# =============================================================================

@dataclass(frozen=True)
class Policy:
    """
    Versioned engine policy.

    competitor is optional; without it no synthetic bids are generated and
    outcomes fall back to the minimum-bid / overpay rule.
    """
    version: str
    updated_at: str
    valuation: ValuationPolicy
    rights: RightsPolicy
    cost: CostPolicy
    profit: ProfitPolicy
    competitor: Optional[CompetitorPolicy] = None

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "version",
        "updated_at",
        "valuation",
        "rights",
        "cost",
        "profit",
        "competitor",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "Policy":
        """
        Build a Policy from its dictionary form.

        Args:
            data: Mapping with every section present. "competitor" may be None.

        Returns:
            A new frozen Policy

        Raises:
            PolicyError: On unknown or missing keys and malformed values
        """
        data = _require_mapping(data, "policy")
        _check_keys(data, cls.FIELDS, "policy")
        competitor = data["competitor"]
        return cls(
            version=str(data["version"]),
            updated_at=str(data["updated_at"]),
            valuation=ValuationPolicy.from_dict(data["valuation"]),
            rights=RightsPolicy.from_dict(data["rights"]),
            cost=CostPolicy.from_dict(data["cost"]),
            profit=ProfitPolicy.from_dict(data["profit"]),
            competitor=None if competitor is None else CompetitorPolicy.from_dict(competitor),
        )

    def to_dict(self) -> dict:
        """Convert to a plain, JSON-serializable dictionary."""
        return {
            "version": self.version,
            "updated_at": self.updated_at,
            "valuation": self.valuation.to_dict(),
            "rights": self.rights.to_dict(),
            "cost": self.cost.to_dict(),
            "profit": self.profit.to_dict(),
            "competitor": self.competitor.to_dict() if self.competitor else None,
        }
