"""
Domain models for the Auction Analysis Engine.

Defines the closed vocabularies (property types, difficulty modes, right
types, horizons, outcomes) and the immutable records passed between the
pipeline stages: property seed/property, raw and normalized court documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar


T = TypeVar("T")


class PropertyCategory(Enum):
    """Broad usage category of an auctioned property."""
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"

    @classmethod
    def from_string(cls, value: str) -> Optional["PropertyCategory"]:
        """Convert string to PropertyCategory, case-insensitive."""
        normalised = str(value).lower().strip()
        for member in cls:
            if member.value == normalised:
                return member
        return None


class PropertyType(Enum):
    """
    Property type classification.

    Values match the wire format used by scenario payloads.
    """
    APARTMENT = "apartment"
    VILLA = "villa"
    OFFICETEL = "officetel"
    MULTI_HOUSE = "multi_house"
    DETACHED = "detached"
    RES_LAND = "res_land"
    STORE = "store"
    OFFICE = "office"
    FACTORY = "factory"
    WAREHOUSE = "warehouse"
    COM_LAND = "com_land"

    @classmethod
    def from_string(cls, value: str) -> Optional["PropertyType"]:
        """Convert string to PropertyType, case-insensitive."""
        normalised = str(value).lower().strip().replace("-", "_")
        for member in cls:
            if member.value == normalised:
                return member
        return None

    @property
    def is_land(self) -> bool:
        return self in (PropertyType.RES_LAND, PropertyType.COM_LAND)


class DifficultyMode(Enum):
    """Simulation difficulty. Selects the policy overlay and competitor field."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def from_string(cls, value: str) -> Optional["DifficultyMode"]:
        """Convert string to DifficultyMode, case-insensitive."""
        normalised = str(value).lower().strip()
        for member in cls:
            if member.value == normalised:
                return member
        return None


class Region(Enum):
    """Metropolitan regions with their own price rows and tenant thresholds."""
    SEOUL = "서울"
    GYEONGGI = "경기"
    INCHEON = "인천"
    BUSAN = "부산"
    DAEGU = "대구"
    GWANGJU = "광주"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["Region"]:
        """
        Resolve a region from a Korean or romanized name.

        Accepts full administrative names ("서울특별시", "경기도") and
        English spellings ("Seoul", "gyeonggi-do").
        """
        if not value:
            return None
        token = str(value).strip()
        for member in cls:
            if token.startswith(member.value):
                return member
        lowered = token.lower()
        for member in cls:
            if lowered.startswith(member.name.lower()):
                return member
        return None


class Horizon(Enum):
    """Holding periods evaluated for every round, in months."""
    M3 = 3
    M6 = 6
    M12 = 12

    @property
    def months(self) -> int:
        return self.value

    @property
    def key(self) -> str:
        """Wire key, e.g. "3m"."""
        return f"{self.value}m"


class RightType(Enum):
    """
    Canonical legal right/tenant classification.

    UNCLASSIFIED marks a registered right whose free-text type could not be
    mapped. It is priced like a mortgage but stays distinguishable for audit.
    """
    MORTGAGE = "mortgage"
    PLEDGE = "pledge"
    PROVISIONAL_SEIZURE = "provisional_seizure"
    SEIZURE = "seizure"
    INJUNCTION = "injunction"
    LEASEHOLD = "leasehold"
    TENANT_PROTECTED = "tenant_protected"
    TENANT_UNPROTECTED = "tenant_unprotected"
    LIEN = "lien"
    STATUTORY_SURFACE = "statutory_surface"
    SURFACE_RIGHT = "surface_right"
    EASEMENT = "easement"
    GRAVE_RIGHT = "grave_right"
    PRIOR_LEASEHOLD = "prior_leasehold"
    PRIOR_TENANT = "prior_tenant"
    TAX_LIEN = "tax_lien"
    NOTICE_REGISTRY = "notice_registry"
    PROVISIONAL_REGISTRY = "provisional_registry"
    UNCLASSIFIED = "unclassified"


class EvictionRiskLevel(Enum):
    """Per-occupant eviction difficulty."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLabel(Enum):
    """Round-level risk label derived from the eviction risk score."""
    SAFE = "safe"
    MEDIUM = "medium"
    HIGH = "high"


class Grade(Enum):
    """Letter grade shared by the investment summary and the skill score."""
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Outcome(Enum):
    """Result of a bid against the synthetic competitor field."""
    WIN = "win"
    LOSE = "lose"
    OVERPAY = "overpay"


# =============================================================================
# Per-horizon record
# =============================================================================

@dataclass(frozen=True)
class PerHorizon(Generic[T]):
    """
    Exhaustive record holding one value per holding horizon.

    Indexing with a Horizon can never miss a key.
    """
    m3: T
    m6: T
    m12: T

    def __getitem__(self, horizon: Horizon) -> T:
        if horizon is Horizon.M3:
            return self.m3
        if horizon is Horizon.M6:
            return self.m6
        return self.m12

    def items(self) -> Iterator[Tuple[Horizon, T]]:
        for horizon in Horizon:
            yield horizon, self[horizon]

    @classmethod
    def build(cls, factory) -> "PerHorizon":
        """Build a record by calling factory(horizon) for every horizon."""
        return cls(
            m3=factory(Horizon.M3),
            m6=factory(Horizon.M6),
            m12=factory(Horizon.M12),
        )

    def to_dict(self, convert=None) -> dict:
        """Serialize using the "3m"/"6m"/"12m" wire keys."""
        result = {}
        for horizon, value in self.items():
            result[horizon.key] = convert(value) if convert else value
        return result


# =============================================================================
# Property
# =============================================================================

@dataclass(frozen=True)
class FloorInfo:
    total: Optional[int] = 1
    current: Optional[int] = 1


@dataclass(frozen=True)
class PropertySeed:
    """
    Partially specified property description from the scenario generator.

    Enum-valued fields may arrive as plain strings; PropertyNormalizer
    validates and resolves them.
    """
    type: object
    category: object
    size_m2: float
    id: Optional[str] = None
    land_size_m2: Optional[float] = None
    year_built: Optional[int] = None
    floor_info: Optional[FloorInfo] = None
    address: Optional[str] = None
    auction_step: Optional[int] = None
    difficulty: Optional[object] = None
    building_use: Optional[str] = None


@dataclass(frozen=True)
class Property:
    """Fully resolved property used by every downstream stage."""
    id: str
    category: PropertyCategory
    type: PropertyType
    size_m2: float
    land_size_m2: float
    year_built: int
    appraisal_value: int
    auction_step: int
    address: str
    region: Optional[Region]
    difficulty: DifficultyMode
    floor_info: FloorInfo
    building_use: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "type": self.type.value,
            "size_m2": self.size_m2,
            "land_size_m2": self.land_size_m2,
            "year_built": self.year_built,
            "appraisal_value": self.appraisal_value,
            "auction_step": self.auction_step,
            "address": self.address,
            "region": self.region.value if self.region else None,
            "difficulty": self.difficulty.value,
            "floor_info": {
                "total": self.floor_info.total,
                "current": self.floor_info.current,
            },
            "building_use": self.building_use,
        }


# =============================================================================
# Court documents
# =============================================================================

@dataclass(frozen=True)
class RegisteredRightRaw:
    """A registered right as written in the court file (free-text type)."""
    type: str
    date: str
    creditor: str
    amount: int = 0
    is_base_right: bool = False


@dataclass(frozen=True)
class OccupantRaw:
    name: str
    move_in_date: str
    deposit: int = 0
    rent: int = 0
    fixed_date: Optional[str] = None
    dividend_requested: bool = False
    is_business: bool = False


@dataclass(frozen=True)
class CourtDocsRaw:
    """Raw legal-document snapshot for one auction case."""
    case_number: str
    base_right_date: str
    registered_rights: List[RegisteredRightRaw] = field(default_factory=list)
    occupants: List[OccupantRaw] = field(default_factory=list)
    property_details: str = ""
    region: Optional[str] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class RegisteredRight:
    rank: int
    type: str
    date: date
    creditor: str
    amount: int
    is_base_right: bool = False

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "type": self.type,
            "date": self.date.isoformat(),
            "creditor": self.creditor,
            "amount": self.amount,
            "is_base_right": self.is_base_right,
        }


@dataclass(frozen=True)
class Occupant:
    name: str
    move_in_date: date
    fixed_date: Optional[date]
    deposit: int
    rent: int
    dividend_requested: bool
    is_business: bool
    has_countervailing_power: bool
    has_fixed_date: bool
    is_small_claim_tenant: bool
    eviction_risk_level: EvictionRiskLevel

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "move_in_date": self.move_in_date.isoformat(),
            "fixed_date": self.fixed_date.isoformat() if self.fixed_date else None,
            "deposit": self.deposit,
            "rent": self.rent,
            "dividend_requested": self.dividend_requested,
            "is_business": self.is_business,
            "has_countervailing_power": self.has_countervailing_power,
            "has_fixed_date": self.has_fixed_date,
            "is_small_claim_tenant": self.is_small_claim_tenant,
            "eviction_risk_level": self.eviction_risk_level.value,
        }


@dataclass(frozen=True)
class CourtDocsNormalized:
    case_number: str
    property_details: str
    base_right_date: date
    registered_rights: Tuple[RegisteredRight, ...]
    occupants: Tuple[Occupant, ...]
    region: Optional[str] = None
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "case_number": self.case_number,
            "property_details": self.property_details,
            "base_right_date": self.base_right_date.isoformat(),
            "registered_rights": [r.to_dict() for r in self.registered_rights],
            "occupants": [o.to_dict() for o in self.occupants],
            "region": self.region,
            "remarks": self.remarks,
        }
