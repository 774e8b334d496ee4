"""
DealerWatch Generation

Deterministic synthesis of dealer identities and per-section controls.
"""
from __future__ import annotations

from .controls import (
    RATING_FOR_RESULT,
    SECTION_GENERATORS,
    SECTION_PRIMES,
    generate_controls,
)
from .directory import (
    DUPLICATE_RULES,
    DealerDirectory,
    DuplicateRule,
    apply_duplicate_rules,
    build_dealer_directory,
)
from .identity import (
    REAL_DEALER_NAMES,
    REAL_DEALERS,
    DealerIdentityGenerator,
    audit_date,
    dealer_name,
    firm_type_for_index,
    pseudo_random,
)

__all__ = [
    # Controls
    "RATING_FOR_RESULT",
    "SECTION_GENERATORS",
    "SECTION_PRIMES",
    "generate_controls",
    # Directory
    "DUPLICATE_RULES",
    "DealerDirectory",
    "DuplicateRule",
    "apply_duplicate_rules",
    "build_dealer_directory",
    # Identity
    "REAL_DEALER_NAMES",
    "REAL_DEALERS",
    "DealerIdentityGenerator",
    "audit_date",
    "dealer_name",
    "firm_type_for_index",
    "pseudo_random",
]
