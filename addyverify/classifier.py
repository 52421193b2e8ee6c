"""
Classify an Addy response by match cardinality.

A response is exactly one of Confident, Ambiguous or NoMatch. When the
service sends both a matched address and alternatives, the alternatives
win and the match is not trusted.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from .models import AddressCandidate, AlternativeReference, VerificationResponse


@dataclass(frozen=True)
class Confident:
    candidate: AddressCandidate


@dataclass(frozen=True)
class Ambiguous:
    alternatives: List[AlternativeReference]
    reason: Optional[str]


@dataclass(frozen=True)
class NoMatch:
    reason: Optional[str]


MatchOutcome = Union[Confident, Ambiguous, NoMatch]


def classify(response: VerificationResponse) -> MatchOutcome:
    """Return the match outcome for a response. Never raises."""
    alternatives = list(response.alternatives or [])
    if alternatives:
        return Ambiguous(alternatives=alternatives, reason=response.reason)
    if response.address is not None:
        return Confident(candidate=response.address)
    return NoMatch(reason=response.reason)
