"""
Default engine policy (v2.2).

DEFAULT_POLICY_DATA is the dictionary form; DEFAULT_POLICY is the frozen
Policy built from it. Difficulty overlays are applied on top of this base.
"""

from typing import Final

from .schema import Policy


DEFAULT_POLICY_DATA: Final = {
    "version": "2.2",
    "updated_at": "2025-11-14",
    "valuation": {
        "base_fmv_rate": {
            "apartment": 0.98,
            "villa": 0.92,
            "officetel": 0.96,
            "multi_house": 0.90,
            "detached": 0.88,
            "res_land": 0.85,
            "store": 0.90,
            "office": 0.92,
            "factory": 0.82,
            "warehouse": 0.80,
            "com_land": 0.88,
        },
        "fmv_volatility_range": {"min": -0.05, "max": 0.03},
        "fmv_clamp": {"min": 0.85, "max": 1.12},
        "exit_discount_rate": 0.96,
        "future_recovery_factor": 1.025,
        "initial_min_bid_rate": 0.7,
        "min_bid_reduction_rate": 0.8,
        "recommended_range_ratio": {"min": 0.97, "max": 1.03},
    },
    "rights": {
        "eviction_base_cost": 800_000,
        "eviction_risk_weight": 0.6,
        "protected_tenant_extra": 12_000_000,
    },
    "cost": {
        "acquisition_tax_rate": 0.045,
        "legal_fee_flat": 900_000,
        "repair_rate": 0.06,
        "holding_months_default": 6,
        "holding_monthly_rate": 0.0009,
        "loan_ltv_default": 0.7,
        "loan_interest_rate": 0.055,
    },
    "profit": {
        "target_margin_rate": 0.08,
        "target_annual_roi": 0.10,
    },
    "competitor": {
        "count": 4,
        "bid_range": {"min": 0.95, "max": 1.15},
        "difficulty_multiplier": {"easy": 0.6, "normal": 1.0, "hard": 1.5},
        "distribution": "normal",
    },
}

DEFAULT_POLICY: Final = Policy.from_dict(DEFAULT_POLICY_DATA)
