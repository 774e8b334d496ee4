"""
DealerWatch Generation: Dealer Directory

The dealer directory is the once-built, read-only collection of dealer
identities. It is created by build_dealer_directory() at process start and
injected into every caller (service state, CLI, test fixtures).

Duplicate injection is declarative: DUPLICATE_RULES lists which fields a
target dealer copies from a source dealer, so downstream duplicate
detection always has known pairs to find.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from ..config import Settings
from ..exceptions import DealerNotFoundError
from ..models.dealer import Dealer
from ..models.enums import GenerationMode
from .identity import REAL_DEALERS, DealerIdentityGenerator

logger = logging.getLogger(__name__)


# =============================================================================
# Duplicate Injection Rules
# =============================================================================

DUPLICATE_FIELDS = frozenset({"phone", "postcode", "address", "registration_number"})


@dataclass(frozen=True)
class DuplicateRule:
    """
    Copy fields from one dealer onto another after generation.

    Attributes:
        target_index: Directory position receiving the values
        source_index: Directory position the values are copied from
        fields: Dealer attribute names to copy
    """
    target_index: int
    source_index: int
    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        unknown = set(self.fields) - DUPLICATE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported duplicate fields: {sorted(unknown)}")
        if self.target_index == self.source_index:
            raise ValueError("target_index and source_index must differ")


DUPLICATE_RULES: tuple[DuplicateRule, ...] = (
    # Two pairs sharing a phone number
    DuplicateRule(target_index=17, source_index=5, fields=("phone",)),
    DuplicateRule(target_index=88, source_index=42, fields=("phone",)),
    # One pair sharing postcode and address
    DuplicateRule(target_index=63, source_index=29, fields=("postcode", "address")),
    # Two pairs sharing a registration number
    DuplicateRule(target_index=121, source_index=77, fields=("registration_number",)),
    DuplicateRule(target_index=150, source_index=9, fields=("registration_number",)),
)


def apply_duplicate_rules(
    dealers: list[Dealer],
    rules: Sequence[DuplicateRule] = DUPLICATE_RULES,
) -> list[Dealer]:
    """
    Apply duplicate-injection rules as a post-processing pass.

    Rules that reference a position outside the collection are skipped, so
    small test directories still build.

    Returns:
        A new list; the input list is not modified
    """
    result = list(dealers)
    for rule in rules:
        if rule.target_index >= len(result) or rule.source_index >= len(result):
            logger.debug(
                "Skipping duplicate rule outside directory: %s -> %s",
                rule.source_index,
                rule.target_index,
            )
            continue
        source = result[rule.source_index]
        changes = {name: getattr(source, name) for name in rule.fields}
        result[rule.target_index] = result[rule.target_index].with_fields(**changes)
    return result


# =============================================================================
# Dealer Directory
# =============================================================================

class DealerDirectory:
    """
    Immutable, index-addressable collection of dealers.

    The position of a dealer in the directory is its stable index, which
    seeds its audit generation.
    """

    def __init__(self, dealers: Sequence[Dealer], generation_mode: GenerationMode) -> None:
        self._dealers: tuple[Dealer, ...] = tuple(dealers)
        self._positions: dict[str, int] = {}
        for position, dealer in enumerate(self._dealers):
            # First occurrence wins for repeated names
            self._positions.setdefault(dealer.name, position)
        self.generation_mode = generation_mode

    def __len__(self) -> int:
        return len(self._dealers)

    def __iter__(self) -> Iterator[Dealer]:
        return iter(self._dealers)

    def __getitem__(self, index: int) -> Dealer:
        return self._dealers[index]

    @property
    def dealers(self) -> tuple[Dealer, ...]:
        return self._dealers

    def get(self, index: int) -> Dealer:
        """
        Get the dealer at an index.

        Raises:
            DealerNotFoundError: If the index is outside the directory
        """
        if not 0 <= index < len(self._dealers):
            raise DealerNotFoundError(
                message=f"No dealer at index {index}",
                details={"index": index, "size": len(self._dealers)},
            )
        return self._dealers[index]

    def index_of(self, name: str) -> Optional[int]:
        """Position of the first dealer with this exact name, or None."""
        return self._positions.get(name)

    def find(self, name: str) -> tuple[int, Dealer]:
        """
        Look up a dealer by exact name.

        Raises:
            DealerNotFoundError: If no dealer has this name
        """
        position = self.index_of(name)
        if position is None:
            raise DealerNotFoundError(
                message=f"No dealer named {name!r}",
                dealer_name=name,
            )
        return position, self._dealers[position]

    def items(self) -> Iterator[tuple[int, Dealer]]:
        """Iterate (index, dealer) pairs."""
        return enumerate(self._dealers)


def build_dealer_directory(
    settings: Optional[Settings] = None,
    *,
    mode: Optional[GenerationMode] = None,
    seed: Optional[int] = None,
    dealer_count: Optional[int] = None,
    rules: Sequence[DuplicateRule] = DUPLICATE_RULES,
) -> DealerDirectory:
    """
    Build the dealer directory.

    The four real dealers occupy positions 0-3; generated dealers follow,
    each generated with its own position as its index. Keyword arguments
    override the matching settings fields.

    Args:
        settings: Runtime settings (defaults to Settings())
        mode: Generation mode override
        seed: Directory seed override
        dealer_count: Number of generated dealers override
        rules: Duplicate-injection rules to apply

    Returns:
        A new DealerDirectory
    """
    settings = settings or Settings()
    mode = mode or settings.generation_mode
    seed = settings.directory_seed if seed is None else seed
    count = settings.dealer_count if dealer_count is None else dealer_count

    generator = DealerIdentityGenerator(mode=mode, seed=seed)
    offset = len(REAL_DEALERS)
    dealers = list(REAL_DEALERS)
    dealers.extend(generator.generate(offset + i) for i in range(count))
    dealers = apply_duplicate_rules(dealers, rules)

    logger.info(
        "Built dealer directory",
        extra={"dealer_count": len(dealers), "generation_mode": mode.value},
    )
    return DealerDirectory(dealers, generation_mode=mode)
