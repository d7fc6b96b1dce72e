"""
Intake: seed and court-document normalization, JSON payload models.
"""

from .property_normalizer import (
    PropertyNormalizer,
    InvalidSeed,
    clamp_auction_step,
    infer_region,
)
from .court_docs import (
    InvalidCourtDocs,
    normalize_court_docs,
    small_claim_threshold,
    eviction_risk_level,
    parse_doc_date,
)
from .payloads import (
    PropertySeedInput,
    CourtDocsInput,
    ScenarioInput,
)

__all__ = [
    "PropertyNormalizer",
    "InvalidSeed",
    "clamp_auction_step",
    "infer_region",
    "InvalidCourtDocs",
    "normalize_court_docs",
    "small_claim_threshold",
    "eviction_risk_level",
    "parse_doc_date",
    "PropertySeedInput",
    "CourtDocsInput",
    "ScenarioInput",
]
