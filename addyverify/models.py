"""
Address records returned by the Addy validation API.

Field names follow the JSON keys in the Addy address details API
(https://www.addy.co.nz/address-details-api). Values the service leaves out or
sends as null stay None; an absent id is never the same as id 0.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class VerificationOutcome(str, Enum):
    NONE = "none"
    STANDARDIZED = "standardized"
    CONNECTION_ERROR = "connection_error"


@dataclass
class AddressCandidate:
    """A single address matched by Addy."""

    id: Optional[int] = None
    dpid: Optional[int] = None  # NZ Post id, null for non-mail-deliverable addresses
    linzid: Optional[int] = None
    parcelid: Optional[int] = None
    meshblock: Optional[int] = None

    number: Optional[str] = None  # "80" in "80A Queen Street"
    rdnumber: Optional[str] = None
    alpha: Optional[str] = None  # "A" in "80A Queen Street"
    unittype: Optional[str] = None
    unitnumber: Optional[str] = None
    floor: Optional[str] = None
    street: Optional[str] = None
    suburb: Optional[str] = None
    city: Optional[str] = None
    mailtown: Optional[str] = None
    territory: Optional[str] = None
    region: Optional[str] = None
    postcode: Optional[str] = None
    building: Optional[str] = None

    full: Optional[str] = None
    displayline: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    address4: Optional[str] = None

    type: Optional[str] = None  # Urban, Rural, PostBox, NonPostal
    boxbagnumber: Optional[str] = None
    boxbaglobby: Optional[str] = None

    # WGS84, sent as strings
    x: Optional[str] = None
    y: Optional[str] = None

    modified: Optional[str] = None
    paf: bool = False
    deleted: bool = False

    @property
    def has_coordinates(self) -> bool:
        return _is_present(self.x) and _is_present(self.y)


@dataclass
class AlternativeReference:
    """One of several possible matches, listed only for the operator."""

    id: Optional[int] = None
    a: Optional[str] = None

    @property
    def label(self) -> str:
        return self.a or ""


@dataclass
class VerificationResponse:
    address: Optional[AddressCandidate] = None
    alternatives: List[AlternativeReference] = field(default_factory=list)
    reason: Optional[str] = None
    found_prefix: bool = False
    prefix: Optional[str] = None


@dataclass
class TransportResult:
    """Raw result of one HTTP round trip to Addy."""

    status_code: int
    status_description: str
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _is_present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""
