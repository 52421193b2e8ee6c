"""
Reconcile an Addy validation result against a Location.

verify() turns one transport result into an outcome code and a short
operator message, updating the location in place when Addy returned a
single confident match. The caller owns the location and any commit.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from .classifier import Ambiguous, Confident, NoMatch, classify
from .errors import CoordinateParseFailure, MalformedResponse
from .logger import get_logger
from .models import AddressCandidate, AlternativeReference, TransportResult, VerificationOutcome
from .payload import parse_response
from .transport import AddyClient

logger = get_logger()

SERVICE_NAME = "Addy"
MAX_MESSAGE_LENGTH = 200
LISTING_THRESHOLD = 195
TOO_MANY_MSG = "Too many to display..."
COORDINATES_UPDATED_MSG = "Coordinates updated."
COORDINATES_NOT_UPDATED_MSG = "Coordinates NOT updated."


def build_address_string(
    street1: Optional[str] = None,
    street2: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    postal_code: Optional[str] = None,
) -> str:
    """Join the non-empty address parts with single spaces."""
    parts = [street1, street2, city, state, postal_code]
    return " ".join(p for p in parts if p)


def address_from_location(location) -> str:
    return build_address_string(
        location.street1,
        location.street2,
        location.city,
        location.state,
        location.postal_code,
    )


def update_location(location, candidate: AddressCandidate) -> bool:
    """
    Copy a matched address onto a location.

    Returns:
        True if coordinates were applied, False if the candidate has none
        or the location rejected them.

    Raises:
        CoordinateParseFailure: If x or y is present but not a number
    """
    location.street1 = candidate.address1
    location.street2 = candidate.address2
    location.city = candidate.city
    location.state = ""
    location.postal_code = candidate.postcode
    location.standardized_at = datetime.now()

    if not candidate.has_coordinates:
        return False

    try:
        longitude = float(candidate.x)
        latitude = float(candidate.y)
    except ValueError as e:
        raise CoordinateParseFailure(candidate.x, candidate.y) from e

    applied = location.set_location_point(latitude, longitude)
    if applied:
        location.geocoded_at = datetime.now()
    return applied


def format_alternatives(reason: Optional[str], alternatives: List[AlternativeReference]) -> str:
    """
    Build the "Not verified" message, listing as many alternatives as fit.

    Alternatives are appended in the order Addy returned them until the
    next one would reach LISTING_THRESHOLD; the rest are replaced by
    TOO_MANY_MSG, or "..." when even that would overflow.
    """
    message = f"Not verified: {reason or ''}"
    for alternative in alternatives:
        label = alternative.label
        if len(message) + len(label) >= LISTING_THRESHOLD:
            if len(message) + len(TOO_MANY_MSG) <= MAX_MESSAGE_LENGTH:
                message += TOO_MANY_MSG
            else:
                message += "..."
            break
        message += label + "; "
    return message


def _verified_message(linzid, input_address: str, geocoded: bool) -> str:
    """Success message; a long input address is shortened so the coordinates sentence always fits."""
    head = f"Verified with {SERVICE_NAME} to match LINZ: {linzid}. Input address: "
    tail = ". " + (COORDINATES_UPDATED_MSG if geocoded else COORDINATES_NOT_UPDATED_MSG)
    room = MAX_MESSAGE_LENGTH - len(head) - len(tail)
    if len(input_address) > room:
        input_address = input_address[:max(room - 3, 0)] + "..."
    return head + input_address + tail


def _bounded(message: str) -> str:
    if len(message) <= MAX_MESSAGE_LENGTH:
        return message
    return message[:MAX_MESSAGE_LENGTH - 3] + "..."


def _stamp_attempts(location) -> None:
    now = datetime.now()
    location.standardize_attempted_service = SERVICE_NAME
    location.standardize_attempted_at = now
    location.geocode_attempted_service = SERVICE_NAME
    location.geocode_attempted_at = now


def verify(
    input_address: str,
    transport_result: TransportResult,
    location,
) -> Tuple[VerificationOutcome, str]:
    """
    Decide the outcome of one Addy lookup and update the location.

    Args:
        input_address: The address string that was sent to Addy
        transport_result: Status and body of the HTTP call
        location: Location to update; mutated in place, never committed

    Returns:
        Tuple of (outcome, message); message is at most 200 characters

    Raises:
        MalformedResponse: If the body is not a usable Addy reply
        CoordinateParseFailure: If a confident match has non-numeric coordinates
    """
    geocoded = False
    try:
        if not transport_result.ok:
            outcome = VerificationOutcome.CONNECTION_ERROR
            message = transport_result.status_description or ""
        else:
            match = classify(parse_response(transport_result.body))
            if isinstance(match, Confident):
                candidate = match.candidate
                geocoded = update_location(location, candidate)
                linzid = candidate.linzid if candidate.linzid is not None else "unknown"
                if candidate.linzid is not None:
                    location.standardize_attempted_result = str(candidate.linzid)
                message = _verified_message(linzid, input_address, geocoded)
                outcome = VerificationOutcome.STANDARDIZED
            elif isinstance(match, Ambiguous):
                outcome = VerificationOutcome.NONE
                message = format_alternatives(match.reason, match.alternatives)
            elif isinstance(match, NoMatch):
                if match.reason is None or not match.reason.strip():
                    raise MalformedResponse(
                        "Addy response has no address, no alternatives and no reason"
                    )
                outcome = VerificationOutcome.NONE
                message = match.reason
            else:
                raise TypeError(f"Unhandled match outcome: {match!r}")
    except (MalformedResponse, CoordinateParseFailure) as e:
        logger.record_error(type(e).__name__)
        logger.error("Addy verification failed", address=input_address, error=str(e))
        raise
    finally:
        _stamp_attempts(location)

    logger.record_verification(outcome.value, geocoded=geocoded)
    logger.info(
        "Addy verification complete",
        address=input_address,
        outcome=outcome.value,
        geocoded=geocoded,
    )
    return outcome, _bounded(message)


class AddyVerifier:
    """Runs a full lookup for a Location: build the query, call Addy, reconcile."""

    def __init__(self, client: AddyClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "AddyVerifier":
        return cls(
            AddyClient(
                settings.api_key,
                settings.api_secret,
                base_url=settings.base_url,
                timeout=settings.timeout,
            )
        )

    def verify_location(self, location) -> Tuple[VerificationOutcome, str]:
        address = address_from_location(location)
        transport_result = self.client.validate(address)
        return verify(address, transport_result, location)
