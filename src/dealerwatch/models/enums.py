"""
DealerWatch Enumerations

All enumeration types used by the audit engine, organized by domain area.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# RAG Status
# =============================================================================

class RagStatus(str, Enum):
    """Red/amber/green compliance rating, used for controls, sections and dealers."""
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


# =============================================================================
# Control Outcomes
# =============================================================================

class ControlResult(str, Enum):
    """
    Outcome of a single control check.

    By convention PASS pairs with GREEN, PARTIAL with AMBER and FAIL with RED,
    but the result and the risk rating are stored independently.
    """
    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"


# =============================================================================
# Dealer Identity
# =============================================================================

class FirmType(str, Enum):
    """Regulatory status of the dealer."""
    AR = "AR"    # Appointed Representative (has a principal firm)
    DA = "DA"    # Directly Authorised


class Trend(str, Enum):
    """Direction of the dealer's score since the previous audit."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class GenerationMode(str, Enum):
    """
    How the non-structural dealer fields (RAG band, score, trend) are drawn.

    SEEDED reproduces the same directory on every build; RANDOM draws fresh
    demo data each time the directory is built.
    """
    SEEDED = "seeded"
    RANDOM = "random"


# =============================================================================
# Key Actions
# =============================================================================

class ActionPriority(str, Enum):
    """Priority of a key action."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ActionStatus(str, Enum):
    """Lifecycle status of a key action."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    PLANNED = "Planned"
    COMPLETE = "Complete"
    BAU = "BAU"              # Business as usual
    OPTIONAL = "Optional"
