"""
Tests for seed validation and appraisal estimation.
"""

import logging
import pytest
from datetime import date
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from auction.intake import InvalidSeed, PropertyNormalizer, clamp_auction_step, infer_region
from auction.intake.presets import depreciation_multiplier
from auction.intake.property_normalizer import DEFAULT_ADDRESS
from auction.models import (
    DifficultyMode,
    FloorInfo,
    PropertyCategory,
    PropertySeed,
    PropertyType,
    Region,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def reference_date():
    """Fixed reference date for deterministic tests."""
    return date(2025, 6, 1)


@pytest.fixture
def normalizer(reference_date):
    return PropertyNormalizer(reference_date=reference_date)


@pytest.fixture
def seoul_seed():
    return PropertySeed(
        type="apartment",
        category="residential",
        size_m2=84.9,
        year_built=2020,
        address="서울 강남구 역삼동 123-4",
        auction_step=1,
    )


# =============================================================================
# Test: Appraisal estimate
# =============================================================================

class TestAppraisalEstimate:
    """size × regional price × multipliers × depreciation."""

    def test_known_region(self, normalizer, seoul_seed):
        prop = normalizer.normalize(seoul_seed)

        assert prop.region is Region.SEOUL
        # 84.9m² × 18,000,000, 5 years old
        assert prop.appraisal_value == pytest.approx(1_528_200_000, abs=1)

    def test_gyeonggi_row(self, normalizer):
        seed = PropertySeed(
            type="apartment",
            category="residential",
            size_m2=100,
            year_built=2020,
            address="경기도 성남시 분당구",
        )
        prop = normalizer.normalize(seed)

        assert prop.region is Region.GYEONGGI
        assert prop.appraisal_value == pytest.approx(1_350_000_000, abs=1)

    def test_unknown_region_uses_seoul_row_discounted(self, normalizer):
        seed = PropertySeed(
            type="villa",
            category="residential",
            size_m2=50,
            year_built=2015,
            address="Somewhere Else",
        )
        prop = normalizer.normalize(seed)

        assert prop.region is None
        # 50 × 9,000,000 × 0.8 (unknown) × 0.95 (villa)
        assert prop.appraisal_value == pytest.approx(342_000_000, abs=1)

    def test_depreciation_applied(self, normalizer):
        new = normalizer.estimate_appraisal_value(PropertyType.APARTMENT, 100, Region.SEOUL, 2024)
        old = normalizer.estimate_appraisal_value(PropertyType.APARTMENT, 100, Region.SEOUL, 1990)

        assert old == pytest.approx(new * 0.7, abs=1)

    @pytest.mark.parametrize("age,expected", [
        (0, 1.0),
        (10, 1.0),
        (11, 0.9),
        (20, 0.9),
        (30, 0.8),
        (31, 0.7),
        (80, 0.7),
    ])
    def test_depreciation_bands(self, age, expected):
        assert depreciation_multiplier(age) == expected

    def test_appraisal_is_integer(self, normalizer, seoul_seed):
        prop = normalizer.normalize(seoul_seed)
        assert isinstance(prop.appraisal_value, int)


# =============================================================================
# Test: Defaults
# =============================================================================

class TestSeedDefaults:
    """Missing seed fields resolve to documented defaults."""

    def test_minimal_seed(self, normalizer):
        seed = PropertySeed(type="apartment", category="residential", size_m2=59)
        prop = normalizer.normalize(seed)

        assert prop.year_built == 2015
        assert prop.auction_step == 1
        assert prop.difficulty is DifficultyMode.NORMAL
        assert prop.address == DEFAULT_ADDRESS
        assert prop.region is None
        assert prop.floor_info == FloorInfo(total=1, current=1)
        assert prop.building_use == "apt"
        assert prop.land_size_m2 == 0.0

    def test_land_fallback_year_is_reference_year(self, normalizer):
        seed = PropertySeed(type="res_land", category="residential", size_m2=300)
        prop = normalizer.normalize(seed)
        assert prop.year_built == 2025

    def test_stable_generated_id(self, normalizer, seoul_seed):
        first = normalizer.normalize(seoul_seed)
        second = normalizer.normalize(seoul_seed)

        assert first.id == second.id
        assert first.id.startswith("prop_")
        assert len(first.id) == len("prop_") + 10

    def test_explicit_id_kept(self, normalizer):
        seed = PropertySeed(id="case-42", type="store", category="commercial", size_m2=40)
        assert normalizer.normalize(seed).id == "case-42"

    def test_enum_values_accepted(self, normalizer):
        seed = PropertySeed(
            type=PropertyType.OFFICE,
            category=PropertyCategory.COMMERCIAL,
            size_m2=120,
            difficulty=DifficultyMode.HARD,
        )
        prop = normalizer.normalize(seed)
        assert prop.type is PropertyType.OFFICE
        assert prop.difficulty is DifficultyMode.HARD

    def test_string_values_case_insensitive(self, normalizer):
        seed = PropertySeed(type="Apartment", category="RESIDENTIAL", size_m2=84, difficulty="Easy")
        prop = normalizer.normalize(seed)
        assert prop.type is PropertyType.APARTMENT
        assert prop.difficulty is DifficultyMode.EASY

    def test_category_mismatch_warns(self, normalizer, caplog):
        seed = PropertySeed(type="store", category="residential", size_m2=40)
        with caplog.at_level(logging.WARNING):
            prop = normalizer.normalize(seed)

        assert prop.category is PropertyCategory.RESIDENTIAL
        assert "does not match" in caplog.text

    def test_partial_floor_info(self, normalizer):
        seed = PropertySeed(
            type="apartment",
            category="residential",
            size_m2=84,
            floor_info=FloorInfo(total=20, current=None),
        )
        prop = normalizer.normalize(seed)
        assert prop.floor_info == FloorInfo(total=20, current=1)


class TestAuctionStep:
    @pytest.mark.parametrize("step,expected", [
        (None, 1),
        (0, 1),
        (-3, 1),
        (1, 1),
        (4, 4),
        (5, 5),
        (9, 5),
    ])
    def test_clamped(self, step, expected):
        assert clamp_auction_step(step) == expected


class TestInferRegion:
    @pytest.mark.parametrize("address,expected", [
        ("서울특별시 강남구", Region.SEOUL),
        ("부산광역시 해운대구 우동", Region.BUSAN),
        ("인천 연수구", Region.INCHEON),
        ("Seoul Gangnam-gu", Region.SEOUL),
        ("강원도 춘천시", None),
        ("", None),
        (None, None),
    ])
    def test_first_token(self, address, expected):
        assert infer_region(address) is expected


# =============================================================================
# Test: Validation
# =============================================================================

class TestSeedValidation:
    """Invalid seeds fail as a whole with every error listed."""

    def test_collects_all_errors(self, normalizer):
        seed = PropertySeed(type="castle", category="royal", size_m2=-5)

        with pytest.raises(InvalidSeed) as exc_info:
            normalizer.normalize(seed)

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("type" in e for e in errors)
        assert any("category" in e for e in errors)
        assert any("size_m2" in e for e in errors)

    @pytest.mark.parametrize("size", [0, -1, float("nan"), True, "84"])
    def test_bad_sizes(self, normalizer, size):
        seed = PropertySeed(type="apartment", category="residential", size_m2=size)
        with pytest.raises(InvalidSeed):
            normalizer.normalize(seed)

    def test_unknown_difficulty(self, normalizer):
        seed = PropertySeed(type="apartment", category="residential", size_m2=84, difficulty="nightmare")
        with pytest.raises(InvalidSeed, match="difficulty"):
            normalizer.normalize(seed)

    def test_future_year_built_treated_as_new(self, normalizer, caplog):
        future = PropertySeed(type="apartment", category="residential", size_m2=84, year_built=2030)
        current = PropertySeed(type="apartment", category="residential", size_m2=84, year_built=2025)

        with caplog.at_level(logging.WARNING):
            prop = normalizer.normalize(future)

        assert prop.year_built == 2030
        assert prop.appraisal_value == normalizer.normalize(current).appraisal_value
        assert "year_built 2030" in caplog.text

    def test_next_year_allowed(self, normalizer):
        seed = PropertySeed(type="apartment", category="residential", size_m2=84, year_built=2026)
        assert normalizer.normalize(seed).year_built == 2026

    def test_invalid_seed_is_value_error(self):
        assert issubclass(InvalidSeed, ValueError)
