"""
Tests for the rights assessment stage.
"""

import copy
import logging
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from auction.analysis import Rights, assess_rights
from auction.intake import normalize_court_docs
from auction.models import CourtDocsRaw, OccupantRaw, RegisteredRightRaw, RightType
from auction.policy import DEFAULT_POLICY, DEFAULT_POLICY_DATA, Policy, merge_policy


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def make_docs():
    """Factory fixture: normalized docs from right type strings and occupants."""
    def _create(right_types=(), occupants=()):
        raw = CourtDocsRaw(
            case_number="2024타경777",
            base_right_date="2020-05-01",
            registered_rights=[
                RegisteredRightRaw(type=t, date="2020-05-01", creditor="채권자", amount=10_000_000)
                for t in right_types
            ],
            occupants=list(occupants),
            region="서울",
        )
        return normalize_court_docs(raw)
    return _create


def protected_tenant(deposit=80_000_000):
    # Moved in before the base right
    return OccupantRaw(name="선순위", move_in_date="2019-01-01", fixed_date="2019-01-02",
                       deposit=deposit)


def unprotected_tenant(deposit=50_000_000):
    return OccupantRaw(name="후순위", move_in_date="2022-01-01", deposit=deposit)


# =============================================================================
# Test: Empty inputs
# =============================================================================

class TestEmptyDocuments:
    def test_no_documents(self):
        rights = assess_rights(None, DEFAULT_POLICY)

        assert rights == Rights.empty()
        assert rights.assumable_rights_total == 0
        assert rights.eviction_cost_estimated == 0
        assert rights.eviction_risk == 0.0

    def test_documents_without_entries(self, make_docs):
        rights = assess_rights(make_docs(), DEFAULT_POLICY)

        assert rights.assumable_rights_total == 0
        assert rights.eviction_cost_estimated == 800_000
        assert rights.eviction_risk == 0.15
        assert rights.risk_flags == ()


# =============================================================================
# Test: Registered rights
# =============================================================================

class TestRegisteredRights:
    def test_single_mortgage(self, make_docs):
        rights = assess_rights(make_docs(["근저당권"]), DEFAULT_POLICY)

        assert rights.assumable_rights_total == 0
        # 800,000 × (1 + 1 × 0.6)
        assert rights.eviction_cost_estimated == 1_280_000
        assert rights.eviction_risk == pytest.approx(0.2)

        line = rights.breakdown[0]
        assert line.right_type is RightType.MORTGAGE
        assert line.label == "근저당권"
        assert line.inheritable is False
        assert line.source == "registry"
        assert line.classified is True

    def test_lien_flags(self, make_docs):
        rights = assess_rights(make_docs(["유치권"]), DEFAULT_POLICY)

        assert rights.assumable_rights_total == 30_000_000
        assert rights.eviction_risk == pytest.approx(1.0)
        assert rights.risk_flags == ("명도 리스크 高", "유치권 존재")

    def test_statutory_surface_flag(self, make_docs):
        rights = assess_rights(make_docs(["근저당권", "법정지상권"]), DEFAULT_POLICY)
        assert "법정지상권 우려" in rights.risk_flags
        assert rights.has(RightType.STATUTORY_SURFACE)

    def test_inheritable_payouts_summed(self, make_docs):
        rights = assess_rights(make_docs(["전세권", "지상권", "가압류"]), DEFAULT_POLICY)
        assert rights.assumable_rights_total == 40_000_000 + 15_000_000

    def test_risk_never_exceeds_one(self, make_docs):
        rights = assess_rights(
            make_docs(["유치권", "분묘기지권", "선순위 임차권"], [protected_tenant()]),
            DEFAULT_POLICY,
        )
        assert 0 <= rights.eviction_risk <= 1


class TestUnclassifiedRights:
    """Unrecognized right types are priced as mortgages but stay visible."""

    def test_unclassified_line(self, make_docs):
        rights = assess_rights(make_docs(["특수 미등록 권리"]), DEFAULT_POLICY)
        line = rights.breakdown[0]

        assert line.right_type is RightType.UNCLASSIFIED
        assert line.classified is False
        assert line.raw_type == "특수 미등록 권리"
        assert line.label == "미분류 권리"
        assert line.payout == 0
        assert line.risk == 1

    def test_warning_recorded(self, make_docs, caplog):
        with caplog.at_level(logging.WARNING):
            rights = assess_rights(make_docs(["근저당권", "정체불명"]), DEFAULT_POLICY)

        assert len(rights.warnings) == 1
        assert "정체불명" in rights.warnings[0]
        assert "rank 2" in rights.warnings[0]
        assert "정체불명" in caplog.text

    def test_priced_like_mortgage(self, make_docs):
        unknown = assess_rights(make_docs(["정체불명"]), DEFAULT_POLICY)
        mortgage = assess_rights(make_docs(["근저당권"]), DEFAULT_POLICY)

        assert unknown.assumable_rights_total == mortgage.assumable_rights_total
        assert unknown.eviction_cost_estimated == mortgage.eviction_cost_estimated
        assert unknown.eviction_risk == mortgage.eviction_risk


# =============================================================================
# Test: Occupants
# =============================================================================

class TestOccupantLines:
    def test_protected_tenant_uses_policy_extra(self, make_docs):
        rights = assess_rights(make_docs(["근저당권"], [protected_tenant()]), DEFAULT_POLICY)

        tenant = rights.breakdown[1]
        assert tenant.right_type is RightType.TENANT_PROTECTED
        assert tenant.payout == 12_000_000
        assert tenant.source == "occupant"
        assert rights.assumable_rights_total == 12_000_000
        # 800,000 × (1 + 6 × 0.6 + 1 × 0.4)
        assert rights.eviction_cost_estimated == 4_000_000
        assert rights.eviction_risk == pytest.approx(0.6)
        # 0.6 is not above the high-risk threshold
        assert "명도 리스크 高" not in rights.risk_flags

    def test_protected_tenant_without_extra_pays_deposit(self, make_docs):
        data = copy.deepcopy(DEFAULT_POLICY_DATA)
        data["rights"]["protected_tenant_extra"] = None
        policy = Policy.from_dict(data)

        rights = assess_rights(make_docs(occupants=[protected_tenant(75_000_000)]), policy)
        assert rights.assumable_rights_total == 75_000_000

    def test_overlay_null_extra_pays_deposit(self, make_docs):
        policy = merge_policy(DEFAULT_POLICY, {"rights": {"protected_tenant_extra": None}})

        rights = assess_rights(make_docs(occupants=[protected_tenant(75_000_000)]), policy)
        assert rights.breakdown[0].payout == 75_000_000

    def test_small_claim_tenant_protected(self, make_docs):
        rights = assess_rights(
            make_docs(occupants=[unprotected_tenant(deposit=10_000_000)]), DEFAULT_POLICY
        )
        assert rights.breakdown[0].right_type is RightType.TENANT_PROTECTED

    def test_unprotected_tenant(self, make_docs):
        rights = assess_rights(make_docs(occupants=[unprotected_tenant()]), DEFAULT_POLICY)
        tenant = rights.breakdown[0]

        assert tenant.right_type is RightType.TENANT_UNPROTECTED
        assert tenant.payout == 0
        assert tenant.risk == 3
        assert rights.assumable_rights_total == 0

    def test_tenant_count(self, make_docs):
        rights = assess_rights(
            make_docs(["근저당권"], [protected_tenant(), unprotected_tenant()]),
            DEFAULT_POLICY,
        )
        assert rights.tenant_count == 2

    def test_more_tenants_cost_more(self, make_docs):
        one = assess_rights(make_docs(occupants=[unprotected_tenant()]), DEFAULT_POLICY)
        two = assess_rights(
            make_docs(occupants=[unprotected_tenant(), unprotected_tenant()]), DEFAULT_POLICY
        )
        assert two.eviction_cost_estimated > one.eviction_cost_estimated

    def test_to_dict(self, make_docs):
        data = assess_rights(make_docs(["정체불명"], [protected_tenant()]), DEFAULT_POLICY).to_dict()

        assert data["breakdown"][0]["classified"] is False
        assert data["breakdown"][1]["right_type"] == "tenant_protected"
        assert len(data["warnings"]) == 1
