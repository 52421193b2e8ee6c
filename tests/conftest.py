"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
from typing import Dict, Any

from addyverify.database import Location
from addyverify.models import TransportResult


@pytest.fixture
def matched_address() -> Dict[str, Any]:
    """Addy address details for 80A Queen Street."""
    return {
        "id": 2012771,
        "dpid": 3305812,
        "linzid": 1934521,
        "parcelid": 3972334,
        "meshblock": 429000,
        "number": "80",
        "rdnumber": None,
        "alpha": "A",
        "unittype": None,
        "unitnumber": None,
        "floor": None,
        "street": "Queen Street",
        "suburb": "Auckland Central",
        "city": "Auckland",
        "mailtown": "Auckland",
        "territory": "Auckland",
        "region": "Auckland Region",
        "postcode": "1010",
        "building": None,
        "full": "80A Queen Street, Auckland Central, Auckland 1010",
        "displayline": "80A Queen Street",
        "address1": "80A Queen Street",
        "address2": "Auckland Central",
        "address3": "Auckland 1010",
        "address4": None,
        "type": "Urban",
        "boxbagnumber": None,
        "boxbaglobby": None,
        "x": "174.7633",
        "y": "-36.8485",
        "modified": "2019-06-12",
        "paf": True,
        "deleted": False,
    }


@pytest.fixture
def confident_payload(matched_address) -> Dict[str, Any]:
    return {
        "address": matched_address,
        "alternatives": [],
        "reason": "Exact match",
        "foundPrefix": False,
        "prefix": None,
    }


@pytest.fixture
def ambiguous_payload() -> Dict[str, Any]:
    return {
        "address": None,
        "alternatives": [
            {"id": 101, "a": "80 Queen Street, Auckland Central, Auckland 1010"},
            {"id": 102, "a": "80 Queen Street, Onehunga, Auckland 1061"},
        ],
        "reason": "Multiple matches",
        "foundPrefix": False,
    }


@pytest.fixture
def ok_result():
    """Build a 200 TransportResult from a payload dict."""
    def _build(payload: Dict[str, Any]) -> TransportResult:
        return TransportResult(200, "OK", json.dumps(payload))
    return _build


@pytest.fixture
def location() -> Location:
    """An unsaved location with prior coordinates."""
    return Location(
        street1="80A Queen Street",
        street2="",
        city="Auckland",
        state="",
        postal_code="1010",
        latitude=-1.0,
        longitude=1.0,
    )
