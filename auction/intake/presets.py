"""
Market presets used to estimate appraisal values.

Prices are median transaction prices per m² (won) by region and type.
"""

from typing import Final, Mapping

from auction.models import PropertyCategory, PropertyType, Region


# =============================================================================
# Price matrix (won / m²)
# =============================================================================

BASE_PRICE_PER_M2: Final[Mapping[Region, Mapping[PropertyType, int]]] = {
    Region.SEOUL: {
        PropertyType.APARTMENT: 18_000_000,
        PropertyType.OFFICETEL: 11_000_000,
        PropertyType.VILLA: 9_000_000,
        PropertyType.MULTI_HOUSE: 8_500_000,
        PropertyType.DETACHED: 7_000_000,
        PropertyType.STORE: 13_000_000,
        PropertyType.OFFICE: 15_000_000,
        PropertyType.FACTORY: 5_500_000,
        PropertyType.WAREHOUSE: 4_800_000,
        PropertyType.RES_LAND: 2_500_000,
        PropertyType.COM_LAND: 3_300_000,
    },
    Region.GYEONGGI: {
        PropertyType.APARTMENT: 13_500_000,
        PropertyType.OFFICETEL: 8_000_000,
        PropertyType.VILLA: 6_200_000,
        PropertyType.MULTI_HOUSE: 6_000_000,
        PropertyType.DETACHED: 5_000_000,
        PropertyType.STORE: 9_500_000,
        PropertyType.OFFICE: 10_000_000,
        PropertyType.FACTORY: 5_000_000,
        PropertyType.WAREHOUSE: 4_200_000,
        PropertyType.RES_LAND: 1_900_000,
        PropertyType.COM_LAND: 2_500_000,
    },
    Region.INCHEON: {
        PropertyType.APARTMENT: 11_000_000,
        PropertyType.OFFICETEL: 7_500_000,
        PropertyType.VILLA: 5_200_000,
        PropertyType.MULTI_HOUSE: 5_000_000,
        PropertyType.DETACHED: 4_200_000,
        PropertyType.STORE: 8_500_000,
        PropertyType.OFFICE: 9_000_000,
        PropertyType.FACTORY: 4_500_000,
        PropertyType.WAREHOUSE: 4_000_000,
        PropertyType.RES_LAND: 1_600_000,
        PropertyType.COM_LAND: 2_200_000,
    },
    Region.BUSAN: {
        PropertyType.APARTMENT: 12_000_000,
        PropertyType.OFFICETEL: 8_500_000,
        PropertyType.VILLA: 6_000_000,
        PropertyType.MULTI_HOUSE: 5_800_000,
        PropertyType.DETACHED: 5_000_000,
        PropertyType.STORE: 10_000_000,
        PropertyType.OFFICE: 11_000_000,
        PropertyType.FACTORY: 4_700_000,
        PropertyType.WAREHOUSE: 4_000_000,
        PropertyType.RES_LAND: 1_700_000,
        PropertyType.COM_LAND: 2_300_000,
    },
    Region.DAEGU: {
        PropertyType.APARTMENT: 8_500_000,
        PropertyType.OFFICETEL: 6_000_000,
        PropertyType.VILLA: 4_500_000,
        PropertyType.MULTI_HOUSE: 4_300_000,
        PropertyType.DETACHED: 3_800_000,
        PropertyType.STORE: 7_000_000,
        PropertyType.OFFICE: 7_500_000,
        PropertyType.FACTORY: 3_800_000,
        PropertyType.WAREHOUSE: 3_200_000,
        PropertyType.RES_LAND: 1_200_000,
        PropertyType.COM_LAND: 1_800_000,
    },
    Region.GWANGJU: {
        PropertyType.APARTMENT: 7_800_000,
        PropertyType.OFFICETEL: 5_700_000,
        PropertyType.VILLA: 4_200_000,
        PropertyType.MULTI_HOUSE: 4_100_000,
        PropertyType.DETACHED: 3_600_000,
        PropertyType.STORE: 6_800_000,
        PropertyType.OFFICE: 7_000_000,
        PropertyType.FACTORY: 3_500_000,
        PropertyType.WAREHOUSE: 3_000_000,
        PropertyType.RES_LAND: 1_100_000,
        PropertyType.COM_LAND: 1_700_000,
    },
}

# Rows are already regional, so known regions apply no extra multiplier.
# Addresses without a recognizable region use the Seoul row at a discount.
FALLBACK_PRICE_REGION: Final = Region.SEOUL
REGION_MULTIPLIERS: Final[Mapping[Region, float]] = {region: 1.0 for region in Region}
UNKNOWN_REGION_MULTIPLIER: Final = 0.8

# Liquidity adjustment per type (auction appraisals on illiquid stock run low)
TYPE_ADJUSTMENTS: Final[Mapping[PropertyType, float]] = {
    PropertyType.APARTMENT: 1.0,
    PropertyType.OFFICETEL: 0.97,
    PropertyType.VILLA: 0.95,
    PropertyType.MULTI_HOUSE: 0.95,
    PropertyType.DETACHED: 0.95,
    PropertyType.RES_LAND: 1.0,
    PropertyType.STORE: 0.95,
    PropertyType.OFFICE: 0.97,
    PropertyType.FACTORY: 0.9,
    PropertyType.WAREHOUSE: 0.9,
    PropertyType.COM_LAND: 1.0,
}


# =============================================================================
# Defaults by type
# =============================================================================

# Years before the reference year when year_built is missing
FALLBACK_AGE_BY_TYPE: Final[Mapping[PropertyType, int]] = {
    PropertyType.APARTMENT: 10,
    PropertyType.OFFICETEL: 10,
    PropertyType.VILLA: 15,
    PropertyType.MULTI_HOUSE: 15,
    PropertyType.DETACHED: 25,
    PropertyType.STORE: 20,
    PropertyType.OFFICE: 20,
    PropertyType.FACTORY: 30,
    PropertyType.WAREHOUSE: 30,
    PropertyType.RES_LAND: 0,
    PropertyType.COM_LAND: 0,
}

CATEGORY_BY_TYPE: Final[Mapping[PropertyType, PropertyCategory]] = {
    PropertyType.APARTMENT: PropertyCategory.RESIDENTIAL,
    PropertyType.VILLA: PropertyCategory.RESIDENTIAL,
    PropertyType.OFFICETEL: PropertyCategory.RESIDENTIAL,
    PropertyType.MULTI_HOUSE: PropertyCategory.RESIDENTIAL,
    PropertyType.DETACHED: PropertyCategory.RESIDENTIAL,
    PropertyType.RES_LAND: PropertyCategory.RESIDENTIAL,
    PropertyType.STORE: PropertyCategory.COMMERCIAL,
    PropertyType.OFFICE: PropertyCategory.COMMERCIAL,
    PropertyType.FACTORY: PropertyCategory.COMMERCIAL,
    PropertyType.WAREHOUSE: PropertyCategory.COMMERCIAL,
    PropertyType.COM_LAND: PropertyCategory.COMMERCIAL,
}

BUILDING_USE_BY_TYPE: Final[Mapping[PropertyType, str]] = {
    PropertyType.APARTMENT: "apt",
    PropertyType.VILLA: "villa",
    PropertyType.OFFICETEL: "officetel",
    PropertyType.MULTI_HOUSE: "multi_house",
    PropertyType.DETACHED: "detached",
    PropertyType.RES_LAND: "res_land",
    PropertyType.STORE: "store",
    PropertyType.OFFICE: "office",
    PropertyType.FACTORY: "factory",
    PropertyType.WAREHOUSE: "warehouse",
    PropertyType.COM_LAND: "com_land",
}


# =============================================================================
# Depreciation bands (age in years -> multiplier)
# =============================================================================

DEPRECIATION_BANDS: Final = (
    (10, 1.0),
    (20, 0.9),
    (30, 0.8),
)
DEPRECIATION_FLOOR: Final = 0.7


def depreciation_multiplier(age: int) -> float:
    """Banded depreciation: <=10y 1.0, <=20y 0.9, <=30y 0.8, older 0.7."""
    for max_age, multiplier in DEPRECIATION_BANDS:
        if age <= max_age:
            return multiplier
    return DEPRECIATION_FLOOR
