"""
DealerWatch Override Pack Schemas

Pydantic models for validating the override pack YAML file.

The pack holds hand-authored audits for the real dealers. Each dealer
entry gives per-section control counts rather than individual controls;
the registry fabricates the controls from those counts.

Schema versioning:
- schema_version field tracks breaking changes
- The loader rejects packs with a different major version
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.audit import SECTION_IDS


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

RagValue = Literal["green", "amber", "red"]

FirmTypeValue = Literal["AR", "DA"]

PriorityValue = Literal["High", "Medium", "Low"]

ActionStatusValue = Literal[
    "Pending", "In Progress", "Planned", "Complete", "BAU", "Optional"
]


# =============================================================================
# Component Schemas
# =============================================================================

class SentimentCategorySchema(BaseModel):
    """Schema for one sentiment sub-category."""
    label: str
    score: float = Field(..., ge=0, le=10)
    trend: float

    model_config = {"extra": "forbid"}


class SentimentSchema(BaseModel):
    """Schema for the headline sentiment block."""
    score: float = Field(..., ge=0, le=10)
    trend: float
    categories: list[SentimentCategorySchema] = Field(..., min_length=3, max_length=3)

    model_config = {"extra": "forbid"}


class SectionCountsSchema(BaseModel):
    """Schema for one section's fixed control counts."""
    green: int = Field(..., ge=0)
    amber: int = Field(..., ge=0)
    red: int = Field(..., ge=0)
    notes: str

    model_config = {"extra": "forbid"}


class KeyActionSchema(BaseModel):
    """Schema for a hand-authored key action."""
    id: str
    section: str
    action: str
    priority: PriorityValue
    owner: str
    due_date: str
    status: ActionStatusValue
    notes: str = ""

    model_config = {"extra": "forbid"}


class OverrideDealerSchema(BaseModel):
    """Schema for one real dealer's audit."""
    dealer_name: str = Field(..., min_length=1)
    overall_rag: RagValue
    overall_score: int = Field(..., ge=0, le=100)
    firm_type: FirmTypeValue
    last_audit_date: str
    sentiment: SentimentSchema
    sections: dict[str, SectionCountsSchema]
    key_actions: list[KeyActionSchema] = Field(default_factory=list, max_length=12)
    assurance_statement: str

    @field_validator("sections")
    @classmethod
    def validate_section_ids(
        cls, v: dict[str, SectionCountsSchema]
    ) -> dict[str, SectionCountsSchema]:
        """Require exactly the nine audit sections."""
        missing = [s for s in SECTION_IDS if s not in v]
        unknown = [s for s in v if s not in SECTION_IDS]
        if missing or unknown:
            raise ValueError(
                f"sections must list every audit section exactly once "
                f"(missing: {missing}, unknown: {unknown})"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_action_ids(self) -> OverrideDealerSchema:
        """Key action ids must be unique within a dealer."""
        ids = [a.id for a in self.key_actions]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate key action ids: {duplicates}")
        return self

    model_config = {"extra": "forbid"}


# =============================================================================
# Root Pack Schema
# =============================================================================

class OverridePackSchema(BaseModel):
    """Root schema for the override pack file."""
    schema_version: str = Field(default=SCHEMA_VERSION)
    pack_id: str
    description: str = ""
    dealers: list[OverrideDealerSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_dealers(self) -> OverridePackSchema:
        """Dealer names are the lookup key and must be unique."""
        names = [d.dealer_name for d in self.dealers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate dealer names: {duplicates}")
        return self

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_override_pack(data: dict[str, Any]) -> OverridePackSchema:
    """
    Validate an override pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return OverridePackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """Check that the pack's major schema version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
