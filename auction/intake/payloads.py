"""
JSON payload models for scenario files.

Payloads check shape and primitive types only. Enum membership, size and
date semantics are validated by the normalizers so that every domain error
surfaces as InvalidSeed / InvalidCourtDocs.
"""

from typing import List, Optional

from pydantic import BaseModel

from auction.models import (
    CourtDocsRaw,
    FloorInfo,
    OccupantRaw,
    PropertySeed,
    RegisteredRightRaw,
)


class FloorInfoInput(BaseModel):
    total: Optional[int] = None
    current: Optional[int] = None


class PropertySeedInput(BaseModel):
    """Property seed as produced by the scenario generator."""
    type: str
    category: str
    size_m2: float
    id: Optional[str] = None
    land_size_m2: Optional[float] = None
    year_built: Optional[int] = None
    floor_info: Optional[FloorInfoInput] = None
    address: Optional[str] = None
    auction_step: Optional[int] = None
    difficulty: Optional[str] = None
    building_use: Optional[str] = None

    def to_seed(self) -> PropertySeed:
        floor_info = None
        if self.floor_info is not None:
            floor_info = FloorInfo(total=self.floor_info.total, current=self.floor_info.current)
        return PropertySeed(
            type=self.type,
            category=self.category,
            size_m2=self.size_m2,
            id=self.id,
            land_size_m2=self.land_size_m2,
            year_built=self.year_built,
            floor_info=floor_info,
            address=self.address,
            auction_step=self.auction_step,
            difficulty=self.difficulty,
            building_use=self.building_use,
        )


class RegisteredRightInput(BaseModel):
    type: str
    date: str
    creditor: str = ""
    amount: int = 0
    is_base_right: bool = False


class OccupantInput(BaseModel):
    name: str
    move_in_date: str
    deposit: int = 0
    rent: int = 0
    fixed_date: Optional[str] = None
    dividend_requested: bool = False
    is_business: bool = False


class CourtDocsInput(BaseModel):
    """Legal-document snapshot for one case."""
    case_number: str
    base_right_date: str
    registered_rights: List[RegisteredRightInput] = []
    occupants: List[OccupantInput] = []
    property_details: str = ""
    region: Optional[str] = None
    remarks: Optional[str] = None

    def to_raw(self) -> CourtDocsRaw:
        return CourtDocsRaw(
            case_number=self.case_number,
            base_right_date=self.base_right_date,
            registered_rights=[
                RegisteredRightRaw(
                    type=r.type,
                    date=r.date,
                    creditor=r.creditor,
                    amount=r.amount,
                    is_base_right=r.is_base_right,
                )
                for r in self.registered_rights
            ],
            occupants=[
                OccupantRaw(
                    name=o.name,
                    move_in_date=o.move_in_date,
                    deposit=o.deposit,
                    rent=o.rent,
                    fixed_date=o.fixed_date,
                    dividend_requested=o.dividend_requested,
                    is_business=o.is_business,
                )
                for o in self.occupants
            ],
            property_details=self.property_details,
            region=self.region,
            remarks=self.remarks,
        )


class ScenarioInput(BaseModel):
    """A complete round: property seed, optional court docs and a bid."""
    property: PropertySeedInput
    court_docs: Optional[CourtDocsInput] = None
    user_bid: int = 0
    policy_overrides: Optional[dict] = None
