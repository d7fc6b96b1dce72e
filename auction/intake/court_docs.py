"""
Court document normalization.

Derives the legal-priority flags for every occupant (countervailing power,
fixed date, small-claim tenant, eviction risk level) and ranks registered
rights by document order.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Final, Mapping, Optional

from auction.models import (
    CourtDocsNormalized,
    CourtDocsRaw,
    EvictionRiskLevel,
    Occupant,
    OccupantRaw,
    RegisteredRight,
    RegisteredRightRaw,
    Region,
)


logger = logging.getLogger(__name__)


# Small-claim tenant deposit ceilings (won)
SMALL_CLAIM_THRESHOLDS: Final[Mapping[Region, int]] = {
    Region.SEOUL: 15_000_000,
    Region.GYEONGGI: 13_000_000,
    Region.INCHEON: 12_000_000,
    Region.BUSAN: 11_000_000,
    Region.DAEGU: 10_000_000,
    Region.GWANGJU: 10_000_000,
}
DEFAULT_SMALL_CLAIM_THRESHOLD: Final = 15_000_000

DATE_FORMATS: Final = ("%Y-%m-%d", "%Y.%m.%d", "%Y/%m/%d", "%Y%m%d")


class InvalidCourtDocs(ValueError):
    """Raised when a court document snapshot cannot be parsed."""


def parse_doc_date(value, field_name: str) -> date:
    """
    Parse a court document date.

    Accepts date/datetime objects, ISO timestamps and the dotted/slashed
    formats used on court records.

    Raises:
        InvalidCourtDocs: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise InvalidCourtDocs(f"{field_name}: missing or non-string date {value!r}")

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidCourtDocs(f"{field_name}: unparseable date {value!r}")


def small_claim_threshold(region: Optional[str]) -> int:
    """Deposit ceiling for small-claim protection in a region."""
    resolved = region if isinstance(region, Region) else Region.from_string(region)
    if resolved is None:
        return DEFAULT_SMALL_CLAIM_THRESHOLD
    return SMALL_CLAIM_THRESHOLDS[resolved]


def eviction_risk_level(
    has_countervailing_power: bool,
    has_fixed_date: bool,
    is_business: bool,
) -> EvictionRiskLevel:
    if has_countervailing_power and has_fixed_date:
        return EvictionRiskLevel.HIGH
    if has_countervailing_power or is_business:
        return EvictionRiskLevel.MEDIUM
    return EvictionRiskLevel.LOW


def normalize_occupant(
    occupant: OccupantRaw,
    base_right_date: date,
    region: Optional[str],
    index: int,
) -> Occupant:
    move_in = parse_doc_date(occupant.move_in_date, f"occupants[{index}].move_in_date")
    fixed = (
        parse_doc_date(occupant.fixed_date, f"occupants[{index}].fixed_date")
        if occupant.fixed_date
        else None
    )

    has_countervailing_power = move_in < base_right_date
    has_fixed_date = fixed is not None and fixed < base_right_date
    is_small_claim = occupant.deposit <= small_claim_threshold(region)

    return Occupant(
        name=occupant.name,
        move_in_date=move_in,
        fixed_date=fixed,
        deposit=occupant.deposit,
        rent=occupant.rent,
        dividend_requested=occupant.dividend_requested,
        is_business=occupant.is_business,
        has_countervailing_power=has_countervailing_power,
        has_fixed_date=has_fixed_date,
        is_small_claim_tenant=is_small_claim,
        eviction_risk_level=eviction_risk_level(
            has_countervailing_power, has_fixed_date, occupant.is_business
        ),
    )


def normalize_right(right: RegisteredRightRaw, index: int) -> RegisteredRight:
    return RegisteredRight(
        rank=index + 1,
        type=right.type,
        date=parse_doc_date(right.date, f"registered_rights[{index}].date"),
        creditor=right.creditor,
        amount=right.amount,
        is_base_right=right.is_base_right,
    )


def normalize_court_docs(raw: CourtDocsRaw) -> CourtDocsNormalized:
    """
    Normalize a raw court document snapshot.

    Args:
        raw: Snapshot with free-text right types and string dates

    Returns:
        CourtDocsNormalized with derived occupant flags and ranked rights

    Raises:
        InvalidCourtDocs: If any date cannot be parsed
    """
    base_right_date = parse_doc_date(raw.base_right_date, "base_right_date")

    occupants = tuple(
        normalize_occupant(occ, base_right_date, raw.region, i)
        for i, occ in enumerate(raw.occupants)
    )
    rights = tuple(normalize_right(right, i) for i, right in enumerate(raw.registered_rights))

    logger.debug(
        "Normalized court docs %s: %d rights, %d occupants",
        raw.case_number,
        len(rights),
        len(occupants),
    )

    return CourtDocsNormalized(
        case_number=raw.case_number,
        property_details=raw.property_details,
        base_right_date=base_right_date,
        registered_rights=rights,
        occupants=occupants,
        region=raw.region,
        remarks=raw.remarks,
    )
