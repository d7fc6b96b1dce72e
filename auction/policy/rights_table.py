"""
Rights reference table and free-text classification.

Each canonical right type carries a display label, whether the winning
bidder inherits it, a base payout (won) and a 0-5 eviction risk weight.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping, Optional, Tuple

from auction.models import RightType


@dataclass(frozen=True)
class RightReference:
    label: str
    inheritable: bool
    base_payout: int
    risk: int


RIGHTS_TABLE: Final[Mapping[RightType, RightReference]] = MappingProxyType({
    RightType.MORTGAGE: RightReference("근저당권", False, 0, 1),
    RightType.PLEDGE: RightReference("질권", False, 0, 1),
    RightType.PROVISIONAL_SEIZURE: RightReference("가압류", False, 0, 1),
    RightType.SEIZURE: RightReference("압류", False, 0, 1),
    RightType.INJUNCTION: RightReference("가처분", False, 0, 2),
    RightType.LEASEHOLD: RightReference("임차권", True, 40_000_000, 4),
    RightType.TENANT_PROTECTED: RightReference("대항력+확정일자 세입자", True, 80_000_000, 5),
    RightType.TENANT_UNPROTECTED: RightReference("미보증금 세입자", False, 0, 3),
    RightType.LIEN: RightReference("유치권", True, 30_000_000, 5),
    RightType.STATUTORY_SURFACE: RightReference("법정지상권", True, 0, 4),
    RightType.SURFACE_RIGHT: RightReference("지상권", True, 15_000_000, 4),
    RightType.EASEMENT: RightReference("지역권", True, 5_000_000, 2),
    RightType.GRAVE_RIGHT: RightReference("분묘기지권", True, 0, 5),
    RightType.PRIOR_LEASEHOLD: RightReference("선순위 임차권", True, 60_000_000, 5),
    RightType.PRIOR_TENANT: RightReference("선순위 대항력 세입자", True, 90_000_000, 5),
    RightType.TAX_LIEN: RightReference("조세채권", False, 0, 2),
    RightType.NOTICE_REGISTRY: RightReference("예고등기", True, 20_000_000, 3),
    RightType.PROVISIONAL_REGISTRY: RightReference("가등기", True, 12_000_000, 3),
})

# Unmapped rights are priced like a mortgage
UNCLASSIFIED_REFERENCE: Final = RightReference("미분류 권리", False, 0, 1)

# First match wins; longer phrases precede the shorter ones they contain
# (법정지상권 before 지상권, 가압류 before 압류, 선순위 before 임차권).
KEYWORD_TABLE: Final[Tuple[Tuple[str, RightType], ...]] = (
    ("법정지상권", RightType.STATUTORY_SURFACE),
    ("근저당", RightType.MORTGAGE),
    ("저당", RightType.MORTGAGE),
    ("선순위대항력", RightType.PRIOR_TENANT),
    ("선순위임차", RightType.PRIOR_LEASEHOLD),
    ("전세", RightType.LEASEHOLD),
    ("임차권", RightType.LEASEHOLD),
    ("가등기", RightType.PROVISIONAL_REGISTRY),
    ("예고등기", RightType.NOTICE_REGISTRY),
    ("가처분", RightType.INJUNCTION),
    ("가압류", RightType.PROVISIONAL_SEIZURE),
    ("압류", RightType.SEIZURE),
    ("유치권", RightType.LIEN),
    ("지상권", RightType.SURFACE_RIGHT),
    ("지역권", RightType.EASEMENT),
    ("분묘", RightType.GRAVE_RIGHT),
    ("질권", RightType.PLEDGE),
    ("조세", RightType.TAX_LIEN),
    ("당해세", RightType.TAX_LIEN),
    ("임차인", RightType.TENANT_UNPROTECTED),
    # English spellings
    ("statutorysurface", RightType.STATUTORY_SURFACE),
    ("priortenant", RightType.PRIOR_TENANT),
    ("priorleasehold", RightType.PRIOR_LEASEHOLD),
    ("provisionalregistry", RightType.PROVISIONAL_REGISTRY),
    ("noticeregistry", RightType.NOTICE_REGISTRY),
    ("mortgage", RightType.MORTGAGE),
    ("leasehold", RightType.LEASEHOLD),
    ("provisionalseizure", RightType.PROVISIONAL_SEIZURE),
    ("injunction", RightType.INJUNCTION),
    ("seizure", RightType.SEIZURE),
    ("tax", RightType.TAX_LIEN),
    ("lien", RightType.LIEN),
    ("surfaceright", RightType.SURFACE_RIGHT),
    ("easement", RightType.EASEMENT),
    ("grave", RightType.GRAVE_RIGHT),
    ("pledge", RightType.PLEDGE),
)

_SEPARATORS = re.compile(r"[\s_\-]+")


def classify_right(text: Optional[str]) -> RightType:
    """
    Map a free-text right type to a canonical RightType.

    Exact canonical values ("provisional_seizure") match first, then the
    ordered keyword table on the lowercased text with separators removed.

    Returns:
        The matched type, or RightType.UNCLASSIFIED
    """
    if not text:
        return RightType.UNCLASSIFIED

    value = str(text).strip().lower()
    for member in RightType:
        if member.value == value and member is not RightType.UNCLASSIFIED:
            return member

    compact = _SEPARATORS.sub("", value)
    for keyword, right_type in KEYWORD_TABLE:
        if keyword in compact:
            return right_type

    return RightType.UNCLASSIFIED


def reference_for(right_type: RightType) -> RightReference:
    """Reference values for a right type (mortgage values for unclassified)."""
    return RIGHTS_TABLE.get(right_type, UNCLASSIFIED_REFERENCE)
