"""
Tests for the policy store.

Covers:
- Default policy values and dictionary form
- Overlay merge semantics (nested merge, explicit None assigned, no mutation)
- Difficulty overlays
- JSON overlay loading
- Right type classification
"""

import copy
import json
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from auction.models import DifficultyMode, PropertyType, RightType
from auction.policy import (
    DEFAULT_POLICY,
    DEFAULT_POLICY_DATA,
    EASY_OVERRIDES,
    DistributionType,
    Policy,
    PolicyError,
    RateRange,
    classify_right,
    deep_merge,
    load_policy,
    merge_policy,
    policy_for_difficulty,
    reference_for,
)


# =============================================================================
# Test: Defaults
# =============================================================================

class TestDefaultPolicy:
    """Tests for the v2.2 default policy."""

    def test_version(self):
        assert DEFAULT_POLICY.version == "2.2"
        assert DEFAULT_POLICY.updated_at == "2025-11-14"

    def test_valuation_defaults(self):
        valuation = DEFAULT_POLICY.valuation
        assert valuation.base_fmv_rate[PropertyType.APARTMENT] == 0.98
        assert valuation.base_fmv_rate[PropertyType.WAREHOUSE] == 0.80
        assert valuation.fmv_clamp.min == 0.85
        assert valuation.fmv_clamp.max == 1.12
        assert valuation.initial_min_bid_rate == 0.7
        assert valuation.min_bid_reduction_rate == 0.8

    def test_competitor_defaults(self):
        competitor = DEFAULT_POLICY.competitor
        assert competitor.count == 4
        assert competitor.distribution is DistributionType.NORMAL
        assert competitor.multiplier_for(DifficultyMode.HARD) == 1.5

    def test_dictionary_form_rebuilds_equal_policy(self):
        assert Policy.from_dict(DEFAULT_POLICY.to_dict()) == DEFAULT_POLICY

    def test_to_dict_is_json_serializable(self):
        json.dumps(DEFAULT_POLICY.to_dict())

    def test_policy_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POLICY.version = "9.9"

    def test_rate_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_POLICY.valuation.base_fmv_rate[PropertyType.APARTMENT] = 0.5


# =============================================================================
# Test: Schema validation
# =============================================================================

class TestPolicyValidation:
    """Malformed policy data fails loudly."""

    def test_missing_section_rejected(self):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        del data["cost"]
        with pytest.raises(PolicyError, match="missing keys"):
            Policy.from_dict(data)

    def test_unknown_key_rejected(self):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        data["profit"]["target_irr"] = 0.2
        with pytest.raises(PolicyError, match="unknown keys"):
            Policy.from_dict(data)

    def test_non_numeric_value_rejected(self):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        data["cost"]["repair_rate"] = "high"
        with pytest.raises(PolicyError):
            Policy.from_dict(data)

    def test_unknown_distribution_rejected(self):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        data["competitor"]["distribution"] = "poisson"
        with pytest.raises(PolicyError):
            Policy.from_dict(data)

    def test_inverted_range_rejected(self):
        with pytest.raises(PolicyError):
            RateRange(min=1.2, max=0.8)

    def test_competitor_section_optional(self):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        data["competitor"] = None
        policy = Policy.from_dict(data)
        assert policy.competitor is None
        assert policy.to_dict()["competitor"] is None

    def test_policy_error_is_value_error(self):
        assert issubclass(PolicyError, ValueError)


# =============================================================================
# Test: Merge
# =============================================================================

class TestDeepMerge:
    """Tests for nested overlay merge."""

    def test_nested_mappings_merge_key_by_key(self):
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        merged = deep_merge(base, {"a": {"y": 20}})
        assert merged == {"a": {"x": 1, "y": 20}, "b": 3}

    def test_absent_keys_keep_base_value(self):
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        merged = deep_merge(base, {"a": {"x": 5}})
        assert merged == {"a": {"x": 5, "y": 2}, "b": 3}

    def test_explicit_none_is_assigned(self):
        base = {"a": {"x": 1}, "b": 3}
        merged = deep_merge(base, {"a": None, "b": {"c": None}})
        assert merged == {"a": None, "b": {"c": None}}

    def test_sequences_replace_wholesale(self):
        base = {"tags": [1, 2, 3]}
        merged = deep_merge(base, {"tags": [9]})
        assert merged == {"tags": [9]}

    def test_inputs_not_mutated(self):
        base = {"a": {"x": 1}}
        overrides = {"a": {"x": 2}}
        deep_merge(base, overrides)
        assert base == {"a": {"x": 1}}
        assert overrides == {"a": {"x": 2}}


class TestMergePolicy:
    """Tests for merge_policy."""

    def test_empty_overrides_return_base(self):
        assert merge_policy(DEFAULT_POLICY, {}) is DEFAULT_POLICY

    def test_partial_override(self):
        merged = merge_policy(DEFAULT_POLICY, {"cost": {"repair_rate": 0.1}})
        assert merged.cost.repair_rate == 0.1
        assert merged.cost.acquisition_tax_rate == DEFAULT_POLICY.cost.acquisition_tax_rate
        assert DEFAULT_POLICY.cost.repair_rate == 0.06

    def test_per_type_rate_override(self):
        merged = merge_policy(
            DEFAULT_POLICY, {"valuation": {"base_fmv_rate": {"villa": 0.5}}}
        )
        assert merged.valuation.base_fmv_rate[PropertyType.VILLA] == 0.5
        assert merged.valuation.base_fmv_rate[PropertyType.APARTMENT] == 0.98

    def test_unknown_key_in_overlay_rejected(self):
        with pytest.raises(PolicyError):
            merge_policy(DEFAULT_POLICY, {"valuation": {"fmv_boost": 1.1}})

    def test_version_override(self):
        merged = merge_policy(DEFAULT_POLICY, {"version": "2.2-custom"})
        assert merged.version == "2.2-custom"

    def test_null_competitor_removes_section(self):
        merged = merge_policy(DEFAULT_POLICY, {"competitor": None})
        assert merged.competitor is None
        assert merged.valuation == DEFAULT_POLICY.valuation

    def test_null_protected_tenant_extra(self):
        merged = merge_policy(DEFAULT_POLICY, {"rights": {"protected_tenant_extra": None}})
        assert merged.rights.protected_tenant_extra is None
        assert merged.rights.eviction_base_cost == DEFAULT_POLICY.rights.eviction_base_cost

    def test_null_required_value_rejected(self):
        with pytest.raises(PolicyError):
            merge_policy(DEFAULT_POLICY, {"cost": {"repair_rate": None}})


# =============================================================================
# Test: Difficulty overlays
# =============================================================================

class TestDifficultyOverlays:
    """Tests for easy/normal/hard policy overlays."""

    def test_normal_is_base(self):
        assert policy_for_difficulty(DifficultyMode.NORMAL) is DEFAULT_POLICY

    def test_easy_overlay(self):
        policy = policy_for_difficulty(DifficultyMode.EASY)
        assert policy.competitor.count == 2
        assert policy.cost.loan_ltv_default == 0.8
        assert policy.valuation.fmv_clamp.min == 0.90
        # Untouched keys keep the base value
        assert policy.cost.acquisition_tax_rate == 0.045

    def test_hard_overlay(self):
        policy = policy_for_difficulty(DifficultyMode.HARD)
        assert policy.competitor.count == 6
        assert policy.competitor.bid_range.max == 1.20
        assert policy.profit.target_annual_roi == 0.20
        # difficulty_multiplier survives the merge
        assert policy.competitor.multiplier_for(DifficultyMode.HARD) == 1.5

    def test_overlay_keeps_min_bid_rate(self):
        easy = merge_policy(DEFAULT_POLICY, EASY_OVERRIDES)
        assert easy.valuation.initial_min_bid_rate == DEFAULT_POLICY.valuation.initial_min_bid_rate

    def test_overlay_does_not_mutate_base(self):
        before = DEFAULT_POLICY.to_dict()
        policy_for_difficulty(DifficultyMode.HARD)
        policy_for_difficulty(DifficultyMode.EASY)
        assert DEFAULT_POLICY.to_dict() == before

    def test_overlay_applies_to_custom_base(self):
        base = merge_policy(DEFAULT_POLICY, {"version": "custom"})
        policy = policy_for_difficulty(DifficultyMode.EASY, base=base)
        assert policy.version == "custom"
        assert policy.competitor.count == 2


# =============================================================================
# Test: Loader
# =============================================================================

class TestLoadPolicy:
    """Tests for JSON overlay files."""

    def test_load_overlay(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"profit": {"target_margin_rate": 0.12}}), encoding="utf-8")

        policy = load_policy(path)

        assert policy.profit.target_margin_rate == 0.12
        assert policy.profit.target_annual_roi == 0.10

    def test_overlay_file_can_disable_competitors(self, tmp_path):
        path = tmp_path / "solo.json"
        path.write_text(json.dumps({"competitor": None}), encoding="utf-8")

        assert load_policy(path).competitor is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PolicyError, match="invalid JSON"):
            load_policy(path)

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(PolicyError):
            load_policy(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_policy(tmp_path / "absent.json")


# =============================================================================
# Test: Right classification
# =============================================================================

class TestClassifyRight:
    """Free-text right types map onto the canonical table."""

    @pytest.mark.parametrize("text,expected", [
        ("근저당권", RightType.MORTGAGE),
        ("저당권", RightType.MORTGAGE),
        ("가압류", RightType.PROVISIONAL_SEIZURE),
        ("압류", RightType.SEIZURE),
        ("가처분", RightType.INJUNCTION),
        ("전세권", RightType.LEASEHOLD),
        ("임차권등기", RightType.LEASEHOLD),
        ("선순위 임차권", RightType.PRIOR_LEASEHOLD),
        ("선순위 대항력 임차인", RightType.PRIOR_TENANT),
        ("유치권", RightType.LIEN),
        ("법정지상권", RightType.STATUTORY_SURFACE),
        ("지상권", RightType.SURFACE_RIGHT),
        ("지역권", RightType.EASEMENT),
        ("분묘기지권", RightType.GRAVE_RIGHT),
        ("소유권이전청구권가등기", RightType.PROVISIONAL_REGISTRY),
        ("예고등기", RightType.NOTICE_REGISTRY),
        ("당해세", RightType.TAX_LIEN),
    ])
    def test_korean_terms(self, text, expected):
        assert classify_right(text) is expected

    @pytest.mark.parametrize("text,expected", [
        ("provisional_seizure", RightType.PROVISIONAL_SEIZURE),
        ("Provisional Seizure", RightType.PROVISIONAL_SEIZURE),
        ("Mortgage", RightType.MORTGAGE),
        ("tax lien", RightType.TAX_LIEN),
        ("lien", RightType.LIEN),
        ("surface-right", RightType.SURFACE_RIGHT),
        ("provisional registry", RightType.PROVISIONAL_REGISTRY),
        ("Notice Registry", RightType.NOTICE_REGISTRY),
        ("prior tenant", RightType.PRIOR_TENANT),
        ("prior-leasehold", RightType.PRIOR_LEASEHOLD),
    ])
    def test_english_terms(self, text, expected):
        assert classify_right(text) is expected

    def test_unknown_text_unclassified(self):
        assert classify_right("기타 특수권리") is RightType.UNCLASSIFIED
        assert classify_right("") is RightType.UNCLASSIFIED
        assert classify_right(None) is RightType.UNCLASSIFIED

    def test_labels_match_classification(self):
        assert reference_for(classify_right("가등기")).label == "가등기"
        assert reference_for(classify_right("예고등기")).label == "예고등기"

    def test_unclassified_priced_as_mortgage(self):
        unclassified = reference_for(RightType.UNCLASSIFIED)
        mortgage = reference_for(RightType.MORTGAGE)
        assert unclassified.base_payout == mortgage.base_payout
        assert unclassified.risk == mortgage.risk
        assert unclassified.inheritable == mortgage.inheritable
        assert unclassified.label == "미분류 권리"
