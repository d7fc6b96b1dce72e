"""
Policy store: schema, v2.2 defaults, difficulty overlays and merge.
"""

from .schema import (
    Policy,
    PolicyError,
    ValuationPolicy,
    RightsPolicy,
    CostPolicy,
    ProfitPolicy,
    CompetitorPolicy,
    RateRange,
    DistributionType,
)
from .defaults import DEFAULT_POLICY, DEFAULT_POLICY_DATA
from .merge import deep_merge, merge_policy
from .difficulty import (
    EASY_OVERRIDES,
    HARD_OVERRIDES,
    DIFFICULTY_OVERRIDES,
    policy_for_difficulty,
)
from .loader import load_policy
from .rights_table import (
    RightReference,
    RIGHTS_TABLE,
    KEYWORD_TABLE,
    classify_right,
    reference_for,
)

__all__ = [
    "Policy",
    "PolicyError",
    "ValuationPolicy",
    "RightsPolicy",
    "CostPolicy",
    "ProfitPolicy",
    "CompetitorPolicy",
    "RateRange",
    "DistributionType",
    "DEFAULT_POLICY",
    "DEFAULT_POLICY_DATA",
    "deep_merge",
    "merge_policy",
    "EASY_OVERRIDES",
    "HARD_OVERRIDES",
    "DIFFICULTY_OVERRIDES",
    "policy_for_difficulty",
    "load_policy",
    "RightReference",
    "RIGHTS_TABLE",
    "KEYWORD_TABLE",
    "classify_right",
    "reference_for",
]
