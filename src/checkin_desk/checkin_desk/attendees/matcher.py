from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import MatchType
from .model import AttendeeRecord, Candidate

VISIBLE_PREFIX = 3
VISIBLE_SUFFIX = 4


@dataclass(frozen=True)
class MatchResult:
    exact: Optional[AttendeeRecord]
    candidates: tuple[Candidate, ...]


def phone_distance(a: str, b: str) -> Optional[int]:
    """Number of differing positions, or None when lengths differ."""
    if len(a) != len(b):
        return None
    return sum(1 for x, y in zip(a, b) if x != y)


def is_similar_phone(stored: str, phone: str) -> bool:
    return phone_distance(stored, phone) == 1


def mask_phone(phone: str) -> str:
    """Keep the first 3 and last 4 characters, star the rest.

    >>> mask_phone("13800000001")
    '138****0001'
    """
    hidden = len(phone) - VISIBLE_PREFIX - VISIBLE_SUFFIX
    if hidden <= 0:
        return phone
    return phone[:VISIBLE_PREFIX] + "*" * hidden + phone[-VISIBLE_SUFFIX:]


def find_exact(records: Sequence[AttendeeRecord], phone: str) -> Optional[int]:
    """Index of the first record whose phone equals `phone`."""
    for idx, record in enumerate(records):
        if record.phone == phone:
            return idx
    return None


def find_candidates(records: Sequence[AttendeeRecord], name: str, phone: str) -> MatchResult:
    exact_idx = find_exact(records, phone)

    phone_matches = [r for r in records if is_similar_phone(r.phone, phone)]
    name_matches = [r for r in records if r.name == name]

    seen: set[str] = set()
    candidates: list[Candidate] = []
    for record in phone_matches + name_matches:
        if record.phone in seen:
            continue
        seen.add(record.phone)
        candidates.append(
            Candidate(
                name=record.name,
                phone=record.phone,
                masked_phone=mask_phone(record.phone),
                match_type=MatchType.SAME_NAME if record.name == name else MatchType.SIMILAR_PHONE,
            )
        )

    return MatchResult(
        exact=records[exact_idx] if exact_idx is not None else None,
        candidates=tuple(candidates),
    )
