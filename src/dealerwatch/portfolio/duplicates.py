"""
Duplicate detection across the dealer directory.

Dealers sharing a phone number, company registration number, postcode or
address are grouped together. Values are compared after removing all
whitespace and lower-casing, so "PE10 9QD" and "pe109qd" match.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from ..models import Dealer


_WHITESPACE = re.compile(r"\s+")


class DuplicateType(str, Enum):
    """Dealer field a duplicate group was found on."""
    PHONE = "phone"
    # Companies House registration number; value matches dismiss-tracking keys
    REGISTRATION = "companiesHouse"
    POSTCODE = "postcode"
    ADDRESS = "address"


# Dealer attribute compared for each duplicate type
_FIELDS: dict[DuplicateType, str] = {
    DuplicateType.PHONE: "phone",
    DuplicateType.REGISTRATION: "registration_number",
    DuplicateType.POSTCODE: "postcode",
    DuplicateType.ADDRESS: "address",
}


def normalise(value: Optional[str]) -> str:
    """Strip all whitespace and lower-case."""
    if not value:
        return ""
    return _WHITESPACE.sub("", value).lower()


@dataclass(frozen=True)
class DuplicateMember:
    index: int
    name: str
    value: str


@dataclass(frozen=True)
class DuplicateGroup:
    """
    Two or more dealers sharing one normalised field value.

    Attributes:
        key: Stable group key, "dup_{type}_{normalised}"
        type: Field the dealers share
        normalised: The shared normalised value
        members: Dealers in the group, in directory order
    """
    key: str
    type: DuplicateType
    normalised: str
    members: tuple[DuplicateMember, ...]

    @property
    def indices(self) -> list[int]:
        return [m.index for m in self.members]

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "type": self.type.value,
            "normalised": self.normalised,
            "members": [
                {"index": m.index, "name": m.name, "value": m.value}
                for m in self.members
            ],
        }


def detect_duplicates(dealers: Iterable[Dealer]) -> list[DuplicateGroup]:
    """
    Find every group of dealers sharing a normalised field value.

    Args:
        dealers: Dealers in directory order (position is the index)

    Returns:
        Groups ordered by type (phone, registration, postcode, address),
        then by the index of their first member
    """
    buckets: dict[tuple[DuplicateType, str], list[DuplicateMember]] = {}
    for index, dealer in enumerate(dealers):
        for dup_type, attribute in _FIELDS.items():
            raw = getattr(dealer, attribute)
            norm = normalise(raw)
            if not norm:
                continue
            buckets.setdefault((dup_type, norm), []).append(
                DuplicateMember(index=index, name=dealer.name, value=raw)
            )

    groups = [
        DuplicateGroup(
            key=f"dup_{dup_type.value}_{norm}",
            type=dup_type,
            normalised=norm,
            members=tuple(members),
        )
        for (dup_type, norm), members in buckets.items()
        if len(members) >= 2
    ]
    type_order = list(DuplicateType)
    groups.sort(key=lambda g: (type_order.index(g.type), g.members[0].index))
    return groups


def duplicates_for_dealer(groups: Iterable[DuplicateGroup], index: int) -> list[DuplicateGroup]:
    """Groups that include the dealer at `index`."""
    return [g for g in groups if index in g.indices]
