"""
Rights Assessor

Converts normalized court documents into the liability the winning bidder
inherits, the estimated eviction cost and a 0-1 eviction risk score.
"""

import logging
from typing import Final, List, Optional

from auction.models import CourtDocsNormalized, Occupant, RegisteredRight, RightType
from auction.numeric import round_k
from auction.policy import Policy
from auction.policy.rights_table import classify_right, reference_for

from .models import RightLine, Rights


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

# Eviction cost multiplier added per occupant
TENANT_EVICTION_FACTOR: Final = 0.4

MAX_LINE_RISK: Final = 5

# Residual risk when documents list neither rights nor occupants
RESIDUAL_EVICTION_RISK: Final = 0.15

HIGH_EVICTION_RISK: Final = 0.6

FLAG_HIGH_EVICTION_RISK: Final = "명도 리스크 高"
FLAG_LIEN: Final = "유치권 존재"
FLAG_STATUTORY_SURFACE: Final = "법정지상권 우려"

SOURCE_REGISTRY: Final = "registry"
SOURCE_OCCUPANT: Final = "occupant"


def right_line(right: RegisteredRight) -> RightLine:
    """Classify one registered right and price it from the reference table."""
    right_type = classify_right(right.type)
    reference = reference_for(right_type)
    return RightLine(
        right_type=right_type,
        label=reference.label,
        inheritable=reference.inheritable,
        payout=reference.base_payout,
        risk=reference.risk,
        source=SOURCE_REGISTRY,
        raw_type=right.type,
        classified=right_type is not RightType.UNCLASSIFIED,
    )


def tenant_line(occupant: Occupant, policy: Policy) -> RightLine:
    """
    Price an occupant.

    Occupants with countervailing power or small-claim protection are paid
    out by the buyer; others are evicted without payout.
    """
    if occupant.has_countervailing_power or occupant.is_small_claim_tenant:
        reference = reference_for(RightType.TENANT_PROTECTED)
        extra = policy.rights.protected_tenant_extra
        return RightLine(
            right_type=RightType.TENANT_PROTECTED,
            label=reference.label,
            inheritable=True,
            payout=int(extra if extra is not None else occupant.deposit),
            risk=reference.risk,
            source=SOURCE_OCCUPANT,
            raw_type=occupant.name,
        )

    reference = reference_for(RightType.TENANT_UNPROTECTED)
    return RightLine(
        right_type=RightType.TENANT_UNPROTECTED,
        label=reference.label,
        inheritable=False,
        payout=0,
        risk=reference.risk,
        source=SOURCE_OCCUPANT,
        raw_type=occupant.name,
    )


def assess_rights(court_docs: Optional[CourtDocsNormalized], policy: Policy) -> Rights:
    """
    Assess legal liabilities for a case.

    Args:
        court_docs: Normalized documents, or None when the case has none
        policy: Merged policy for the round

    Returns:
        Rights; an all-zero result when court_docs is None
    """
    if court_docs is None:
        return Rights.empty()

    breakdown: List[RightLine] = []
    warnings: List[str] = []

    for right in court_docs.registered_rights:
        line = right_line(right)
        if not line.classified:
            message = (
                f"Unrecognized right type {right.type!r} (rank {right.rank}); "
                f"priced as mortgage"
            )
            logger.warning("%s in case %s", message, court_docs.case_number)
            warnings.append(message)
        breakdown.append(line)

    for occupant in court_docs.occupants:
        breakdown.append(tenant_line(occupant, policy))

    assumable_total = sum(line.payout for line in breakdown)
    tenant_count = len(court_docs.occupants)

    rights_policy = policy.rights
    risk_sum = sum(line.risk for line in breakdown)
    eviction_cost = round_k(
        rights_policy.eviction_base_cost
        * (
            1
            + risk_sum * rights_policy.eviction_risk_weight
            + tenant_count * TENANT_EVICTION_FACTOR
        )
    )

    if breakdown:
        eviction_risk = min(1.0, (risk_sum / len(breakdown)) / MAX_LINE_RISK)
    else:
        eviction_risk = RESIDUAL_EVICTION_RISK

    risk_flags = []
    if eviction_risk > HIGH_EVICTION_RISK:
        risk_flags.append(FLAG_HIGH_EVICTION_RISK)
    if any(line.right_type is RightType.LIEN for line in breakdown):
        risk_flags.append(FLAG_LIEN)
    if any(line.right_type is RightType.STATUTORY_SURFACE for line in breakdown):
        risk_flags.append(FLAG_STATUTORY_SURFACE)

    logger.debug(
        "Rights %s: assumable=%s eviction_cost=%s risk=%.2f",
        court_docs.case_number,
        assumable_total,
        eviction_cost,
        eviction_risk,
    )

    return Rights(
        assumable_rights_total=int(assumable_total),
        eviction_cost_estimated=eviction_cost,
        eviction_risk=eviction_risk,
        risk_flags=tuple(risk_flags),
        breakdown=tuple(breakdown),
        warnings=tuple(warnings),
    )
