"""Turn Addy JSON bodies into VerificationResponse objects."""

import json
from dataclasses import fields
from typing import Any, Dict, Optional

from .errors import MalformedResponse
from .models import AddressCandidate, AlternativeReference, VerificationResponse

_ID_FIELDS = {"id", "dpid", "linzid", "parcelid", "meshblock"}
_BOOL_FIELDS = {"paf", "deleted"}
_CANDIDATE_FIELDS = {f.name for f in fields(AddressCandidate)}


def _optional_int(key: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedResponse(f"Field '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Field '{key}' must be an integer, got {value!r}") from e


def _strict_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise MalformedResponse(f"Field '{key}' must be true or false, got {value!r}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def candidate_from_dict(data: Dict[str, Any]) -> AddressCandidate:
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in _CANDIDATE_FIELDS or value is None:
            continue
        if key in _ID_FIELDS:
            kwargs[key] = _optional_int(key, value)
        elif key in _BOOL_FIELDS:
            kwargs[key] = _strict_bool(key, value)
        else:
            kwargs[key] = _optional_str(value)
    return AddressCandidate(**kwargs)


def alternative_from_dict(data: Dict[str, Any]) -> AlternativeReference:
    return AlternativeReference(
        id=_optional_int("id", data.get("id")),
        a=_optional_str(data.get("a")),
    )


def response_from_dict(data: Dict[str, Any]) -> VerificationResponse:
    """Build a VerificationResponse from decoded JSON.

    Unknown keys are ignored and null values are treated as absent.
    """
    if not isinstance(data, dict):
        raise MalformedResponse("Addy response must be a JSON object")

    address = data.get("address")
    if address is not None and not isinstance(address, dict):
        raise MalformedResponse("Field 'address' must be an object")

    alternatives = data.get("alternatives") or []
    if not isinstance(alternatives, list):
        raise MalformedResponse("Field 'alternatives' must be a list")
    if not all(isinstance(alt, dict) for alt in alternatives):
        raise MalformedResponse("Field 'alternatives' must contain objects")

    found_prefix = data.get("foundPrefix")

    return VerificationResponse(
        address=candidate_from_dict(address) if address is not None else None,
        alternatives=[alternative_from_dict(alt) for alt in alternatives],
        reason=_optional_str(data.get("reason")),
        found_prefix=_strict_bool("foundPrefix", found_prefix) if found_prefix is not None else False,
        prefix=_optional_str(data.get("prefix")),
    )


def parse_response(body: str) -> VerificationResponse:
    """Decode an Addy response body."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedResponse(f"Addy response is not valid JSON: {e}") from e
    return response_from_dict(data)
