"""
Built-in sample round for the CLI and for smoke tests.
"""

from auction.intake.payloads import ScenarioInput


SAMPLE_SCENARIO = {
    "property": {
        "id": "sample-apt-001",
        "type": "apartment",
        "category": "residential",
        "size_m2": 84.9,
        "year_built": 2012,
        "floor_info": {"total": 25, "current": 12},
        "address": "경기 성남시 분당구 정자동 123",
        "auction_step": 2,
        "difficulty": "normal",
    },
    "court_docs": {
        "case_number": "2024타경10234",
        "base_right_date": "2019-03-15",
        "property_details": "아파트 84.9m² (12층/25층)",
        "region": "경기",
        "registered_rights": [
            {
                "type": "근저당권",
                "date": "2019-03-15",
                "creditor": "국민은행",
                "amount": 180_000_000,
                "is_base_right": True,
            },
            {
                "type": "가압류",
                "date": "2022-07-01",
                "creditor": "신한카드",
                "amount": 12_000_000,
            },
        ],
        "occupants": [
            {
                "name": "홍길동",
                "move_in_date": "2018-11-02",
                "fixed_date": "2018-11-05",
                "deposit": 60_000_000,
                "dividend_requested": True,
            },
        ],
    },
    "user_bid": 0,
}


def create_sample_scenario(user_bid: int = 0) -> ScenarioInput:
    """
    Sample round: a Bundang apartment on its second round with one
    protected tenant.
    """
    data = dict(SAMPLE_SCENARIO)
    data["user_bid"] = user_bid
    return ScenarioInput.model_validate(data)
