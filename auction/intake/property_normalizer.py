"""
Property Normalizer - Seed Validation and Appraisal Estimate

Turns a partially specified PropertySeed into a fully resolved Property.
Invalid seeds fail as a whole with every problem listed; no partial
Property is ever returned.

Appraisal estimate:
    size_m2 × base_price_per_m2(region, type) × region_multiplier(region)
            × type_adjustment(type) × depreciation(age)
"""

from __future__ import annotations

import hashlib
import logging
from datetime import date
from typing import List, Optional, Tuple

from auction.models import (
    DifficultyMode,
    FloorInfo,
    Property,
    PropertyCategory,
    PropertySeed,
    PropertyType,
    Region,
)
from .presets import (
    BASE_PRICE_PER_M2,
    BUILDING_USE_BY_TYPE,
    CATEGORY_BY_TYPE,
    FALLBACK_AGE_BY_TYPE,
    FALLBACK_PRICE_REGION,
    REGION_MULTIPLIERS,
    TYPE_ADJUSTMENTS,
    UNKNOWN_REGION_MULTIPLIER,
    depreciation_multiplier,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

MIN_AUCTION_STEP = 1
MAX_AUCTION_STEP = 5

DEFAULT_ADDRESS = "주소 정보 없음"


class InvalidSeed(ValueError):
    """Raised when a property seed fails validation. Carries every error."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid property seed: " + "; ".join(self.errors))


def clamp_auction_step(step: Optional[int]) -> int:
    """Clamp an auction round to 1..5 (missing or < 1 becomes 1)."""
    if not step or step < MIN_AUCTION_STEP:
        return MIN_AUCTION_STEP
    return min(int(step), MAX_AUCTION_STEP)


def infer_region(address: Optional[str]) -> Optional[Region]:
    """Infer the region from the first token of an address."""
    if not address or not address.strip():
        return None
    first_token = address.split()[0]
    return Region.from_string(first_token)


def _resolve(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return None
    return enum_cls.from_string(value)


class PropertyNormalizer:
    """
    Validates seeds and completes them into Property records.

    The reference date fixes "now" for age and fallback-year calculations
    so results are reproducible.
    """

    def __init__(self, reference_date: date = None):
        """
        Initialize normalizer.

        Args:
            reference_date: Date used as "today" (default: today)
        """
        self._reference_date = reference_date or date.today()

    @property
    def reference_year(self) -> int:
        return self._reference_date.year

    def normalize(self, seed: PropertySeed) -> Property:
        """
        Validate a seed and resolve every default.

        Args:
            seed: Partially specified property description

        Returns:
            Fully resolved, immutable Property

        Raises:
            InvalidSeed: If type, category, size or difficulty is invalid
        """
        property_type, category, difficulty = self._validate(seed)

        if CATEGORY_BY_TYPE[property_type] is not category:
            logger.warning(
                "Seed category %s does not match type %s",
                category.value,
                property_type.value,
            )

        year_built = seed.year_built or self._fallback_year_built(property_type)
        if year_built > self.reference_year:
            # Depreciation treats the building as new
            logger.warning(
                "year_built %d is after reference year %d; using age 0",
                year_built,
                self.reference_year,
            )

        floor_info = FloorInfo(
            total=(seed.floor_info.total if seed.floor_info and seed.floor_info.total else 1),
            current=(seed.floor_info.current if seed.floor_info and seed.floor_info.current else 1),
        )

        address = seed.address.strip() if seed.address and seed.address.strip() else DEFAULT_ADDRESS
        region = infer_region(seed.address)
        appraisal_value = self.estimate_appraisal_value(
            property_type, float(seed.size_m2), region, year_built
        )

        prop = Property(
            id=seed.id or self._stable_id(seed, property_type, difficulty),
            category=category,
            type=property_type,
            size_m2=float(seed.size_m2),
            land_size_m2=float(seed.land_size_m2 or 0),
            year_built=year_built,
            appraisal_value=appraisal_value,
            auction_step=clamp_auction_step(seed.auction_step),
            address=address,
            region=region,
            difficulty=difficulty,
            floor_info=floor_info,
            building_use=seed.building_use or BUILDING_USE_BY_TYPE[property_type],
        )

        logger.debug(
            "Normalized property %s (%s, %.1fm², appraisal %s)",
            prop.id,
            prop.type.value,
            prop.size_m2,
            prop.appraisal_value,
        )
        return prop

    def estimate_appraisal_value(
        self,
        property_type: PropertyType,
        size_m2: float,
        region: Optional[Region],
        year_built: int,
    ) -> int:
        """
        Estimate the court appraisal value in won.

        Args:
            property_type: Resolved property type
            size_m2: Floor (or land) area in m²
            region: Inferred region, or None when unknown
            year_built: Construction year

        Returns:
            Appraisal value rounded to the won
        """
        price_region = region or FALLBACK_PRICE_REGION
        base_price = BASE_PRICE_PER_M2[price_region][property_type]
        region_multiplier = (
            REGION_MULTIPLIERS.get(region, 1.0) if region else UNKNOWN_REGION_MULTIPLIER
        )
        type_adjustment = TYPE_ADJUSTMENTS.get(property_type, 1.0)

        age = max(0, self.reference_year - year_built)
        depreciation = depreciation_multiplier(age)

        return round(size_m2 * base_price * region_multiplier * type_adjustment * depreciation)

    # =========================================================================
    # Internals
    # =========================================================================

    def _validate(
        self, seed: PropertySeed
    ) -> Tuple[PropertyType, PropertyCategory, DifficultyMode]:
        errors: List[str] = []

        property_type = _resolve(PropertyType, seed.type)
        if property_type is None:
            errors.append(f"Invalid type: {seed.type!r}")

        category = _resolve(PropertyCategory, seed.category)
        if category is None:
            errors.append(f"Invalid category: {seed.category!r}")

        size = seed.size_m2
        if isinstance(size, bool) or not isinstance(size, (int, float)) or not size > 0:
            errors.append(f"size_m2 must be a positive number, got {size!r}")

        difficulty = DifficultyMode.NORMAL
        if seed.difficulty is not None:
            difficulty = _resolve(DifficultyMode, seed.difficulty)
            if difficulty is None:
                errors.append(f"Invalid difficulty: {seed.difficulty!r}")

        if errors:
            raise InvalidSeed(errors)

        return property_type, category, difficulty

    def _fallback_year_built(self, property_type: PropertyType) -> int:
        return self.reference_year - FALLBACK_AGE_BY_TYPE[property_type]

    @staticmethod
    def _stable_id(
        seed: PropertySeed, property_type: PropertyType, difficulty: DifficultyMode
    ) -> str:
        """Deterministic id derived from the seed fields."""
        parts = [
            property_type.value,
            str(seed.size_m2),
            str(seed.year_built or ""),
            seed.address or "",
            str(seed.auction_step or ""),
            difficulty.value,
        ]
        digest = hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
        return f"prop_{digest[:10]}"
