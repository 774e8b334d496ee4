"""
DealerWatch Exception Hierarchy

Errors raised at the edges of the audit engine: configuration, directory
lookups, the override pack and plain-structure deserialization.

The generation core itself never raises for a valid (name, index) pair.

Exception codes follow the pattern: DW_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class DealerWatchError(Exception):
    """
    Base exception for all DealerWatch errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (DW_*)
        details: Additional context about the error
        dealer_name: Associated dealer if applicable
    """
    message: str
    code: str = "DW_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    dealer_name: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.dealer_name:
            parts.append(f"(dealer: {self.dealer_name})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.dealer_name:
            result["dealer_name"] = self.dealer_name
        return result


# =============================================================================
# Configuration Errors
# =============================================================================

@dataclass
class ConfigurationError(DealerWatchError):
    """Environment settings are missing or invalid."""
    code: str = "DW_CONFIG_INVALID"


# =============================================================================
# Directory Errors
# =============================================================================

@dataclass
class DealerNotFoundError(DealerWatchError):
    """Requested dealer index or name is not in the directory."""
    code: str = "DW_DEALER_NOT_FOUND"


# =============================================================================
# Generation Errors
# =============================================================================

@dataclass
class UnknownSectionError(DealerWatchError):
    """Section id is not one of the nine audit sections."""
    code: str = "DW_UNKNOWN_SECTION"


# =============================================================================
# Override Pack Errors
# =============================================================================

@dataclass
class OverridePackError(DealerWatchError):
    """Failed to read the override pack file."""
    code: str = "DW_OVERRIDE_PACK_LOAD_ERROR"


@dataclass
class OverridePackValidationError(OverridePackError):
    """Override pack failed schema validation."""
    code: str = "DW_OVERRIDE_PACK_VALIDATION_ERROR"


# =============================================================================
# Serialization Errors
# =============================================================================

@dataclass
class AuditDeserializationError(DealerWatchError):
    """Plain structure could not be converted back into an audit record."""
    code: str = "DW_AUDIT_DESERIALIZATION_ERROR"
