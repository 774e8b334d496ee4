"""
Test helpers for DealerWatch audit tests.

Modules:
- assertions: Audit invariant checks shared across test modules
"""
from .assertions import (
    assert_audit_invariants,
    assert_rating_correlation,
    assert_section_counts,
)

__all__ = [
    "assert_audit_invariants",
    "assert_rating_correlation",
    "assert_section_counts",
]
