"""
DealerWatch Audit Models

Models for a dealer's compliance audit record.

Key components:
- ControlCheck: One discrete compliance test within a section
- SectionSummary: Green/amber/red roll-up of a section's controls
- AuditSection: A named domain grouping of controls
- KeyAction: Remediation, BAU or optional action item
- DealerAudit: The assembled record handed to every consumer

Every model serializes with to_dict() and rebuilds with from_dict(); the
round trip preserves all fields and the section order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..exceptions import AuditDeserializationError
from .enums import ActionPriority, ActionStatus, ControlResult, FirmType, RagStatus


# =============================================================================
# Section Definitions
# =============================================================================

@dataclass(frozen=True)
class SectionDefinition:
    """Static identity of one audit section."""
    id: str
    name: str
    icon: str


# Fixed order of the nine audit sections
AUDIT_SECTIONS: tuple[SectionDefinition, ...] = (
    SectionDefinition("governance", "Corporate Governance", "Building2"),
    SectionDefinition("digital-reporting", "Digital & Reporting", "Monitor"),
    SectionDefinition("permissions", "Permissions", "ShieldCheck"),
    SectionDefinition("sales", "Sales Process", "Receipt"),
    SectionDefinition("consumer-duty", "Consumer Duty", "Users"),
    SectionDefinition("financial-crime", "Financial Crime / Fraud", "AlertTriangle"),
    SectionDefinition("financial-promotions", "Financial Promotions", "Megaphone"),
    SectionDefinition("communications", "Communications & Complaints", "MessageSquare"),
    SectionDefinition("conduct", "Conduct Oversight", "Eye"),
)

SECTION_IDS: tuple[str, ...] = tuple(s.id for s in AUDIT_SECTIONS)


def _require(data: dict[str, Any], key: str, model: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError):
        raise AuditDeserializationError(
            message=f"{model} is missing required field '{key}'",
            details={"model": model, "field": key},
        )


def _enum(enum_cls: type, value: Any, model: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise AuditDeserializationError(
            message=f"{model} has invalid {enum_cls.__name__} value {value!r}",
            details={"model": model, "value": value},
        )


def _number(convert: Callable[[Any], Any], data: dict[str, Any], key: str, model: str) -> Any:
    value = _require(data, key, model)
    try:
        return convert(value)
    except (TypeError, ValueError):
        raise AuditDeserializationError(
            message=f"{model} field '{key}' is not a valid {convert.__name__}: {value!r}",
            details={"model": model, "field": key, "value": value},
        )


# =============================================================================
# Control Check
# =============================================================================

@dataclass
class ControlCheck:
    """
    One compliance check within an audit section.

    Attributes:
        id: Stable control identifier (e.g., "crime-3")
        control_area: Name of the control area
        objective: What the control is meant to confirm
        source_method: How the check is sourced
        evidence: Evidence gathered for the check
        result: pass / partial / fail
        frequency: Review cadence
        risk_rating: green / amber / red
        comments: Free-text reviewer comment
        automated: Whether the check runs without manual input
    """
    id: str
    control_area: str
    objective: str
    source_method: str
    evidence: str
    result: ControlResult
    frequency: str
    risk_rating: RagStatus
    comments: str
    automated: bool

    @property
    def needs_remediation(self) -> bool:
        """Check if the control failed or only partially passed."""
        return self.result in (ControlResult.FAIL, ControlResult.PARTIAL)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "control_area": self.control_area,
            "objective": self.objective,
            "source_method": self.source_method,
            "evidence": self.evidence,
            "result": self.result.value,
            "frequency": self.frequency,
            "risk_rating": self.risk_rating.value,
            "comments": self.comments,
            "automated": self.automated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ControlCheck:
        """Rebuild from a to_dict() structure."""
        return cls(
            id=_require(data, "id", "ControlCheck"),
            control_area=_require(data, "control_area", "ControlCheck"),
            objective=_require(data, "objective", "ControlCheck"),
            source_method=_require(data, "source_method", "ControlCheck"),
            evidence=_require(data, "evidence", "ControlCheck"),
            result=_enum(ControlResult, _require(data, "result", "ControlCheck"), "ControlCheck"),
            frequency=_require(data, "frequency", "ControlCheck"),
            risk_rating=_enum(RagStatus, _require(data, "risk_rating", "ControlCheck"), "ControlCheck"),
            comments=_require(data, "comments", "ControlCheck"),
            automated=bool(_require(data, "automated", "ControlCheck")),
        )


# =============================================================================
# Section Summary / Audit Section
# =============================================================================

@dataclass
class SectionSummary:
    """Roll-up of a section's controls by risk rating."""
    green: int
    amber: int
    red: int
    rag_status: RagStatus
    notes: str

    @property
    def total(self) -> int:
        return self.green + self.amber + self.red

    def to_dict(self) -> dict[str, Any]:
        return {
            "green": self.green,
            "amber": self.amber,
            "red": self.red,
            "rag_status": self.rag_status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SectionSummary:
        return cls(
            green=_number(int, data, "green", "SectionSummary"),
            amber=_number(int, data, "amber", "SectionSummary"),
            red=_number(int, data, "red", "SectionSummary"),
            rag_status=_enum(RagStatus, _require(data, "rag_status", "SectionSummary"), "SectionSummary"),
            notes=_require(data, "notes", "SectionSummary"),
        )


@dataclass
class AuditSection:
    """
    A named domain grouping of control checks.

    Invariant: summary.green + summary.amber + summary.red == len(controls)
    """
    id: str
    name: str
    icon: str
    controls: list[ControlCheck]
    summary: SectionSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "controls": [c.to_dict() for c in self.controls],
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditSection:
        return cls(
            id=_require(data, "id", "AuditSection"),
            name=_require(data, "name", "AuditSection"),
            icon=_require(data, "icon", "AuditSection"),
            controls=[ControlCheck.from_dict(c) for c in _require(data, "controls", "AuditSection")],
            summary=SectionSummary.from_dict(_require(data, "summary", "AuditSection")),
        )


# =============================================================================
# Key Action
# =============================================================================

@dataclass
class KeyAction:
    """A remediation, business-as-usual or optional action item."""
    id: str
    section: str
    action: str
    priority: ActionPriority
    owner: str
    due_date: str
    status: ActionStatus
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "section": self.section,
            "action": self.action,
            "priority": self.priority.value,
            "owner": self.owner,
            "due_date": self.due_date,
            "status": self.status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeyAction:
        return cls(
            id=_require(data, "id", "KeyAction"),
            section=_require(data, "section", "KeyAction"),
            action=_require(data, "action", "KeyAction"),
            priority=_enum(ActionPriority, _require(data, "priority", "KeyAction"), "KeyAction"),
            owner=_require(data, "owner", "KeyAction"),
            due_date=_require(data, "due_date", "KeyAction"),
            status=_enum(ActionStatus, _require(data, "status", "KeyAction"), "KeyAction"),
            notes=_require(data, "notes", "KeyAction"),
        )


# =============================================================================
# Sentiment
# =============================================================================

@dataclass
class SentimentCategory:
    """One customer-sentiment sub-category (Reputation, Visibility, Performance)."""
    label: str
    score: float
    trend: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "score": self.score, "trend": self.trend}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SentimentCategory:
        return cls(
            label=_require(data, "label", "SentimentCategory"),
            score=_number(float, data, "score", "SentimentCategory"),
            trend=_number(float, data, "trend", "SentimentCategory"),
        )


# =============================================================================
# Dealer Audit
# =============================================================================

@dataclass
class DealerAudit:
    """
    The assembled compliance audit for one dealer.

    Built fresh on every call to the assembler; consumers treat it as
    read-only.

    Attributes:
        dealer_name: Dealer the audit belongs to
        overall_rag: Portfolio-wide red > amber > green roll-up
        overall_score: Percentage of controls passed (0-100)
        customer_sentiment_score: Headline sentiment (0-10)
        customer_sentiment_trend: Change in sentiment since last period
        sentiment_categories: Reputation / Visibility / Performance
        last_audit_date: "DD Mon YYYY"
        sections: The nine audit sections in fixed order
        key_actions: Ordered action list (remediation first)
        firm_type: AR or DA
        assurance_statement: Free-text conclusion
    """
    dealer_name: str
    overall_rag: RagStatus
    overall_score: int
    customer_sentiment_score: float
    customer_sentiment_trend: float
    sentiment_categories: list[SentimentCategory]
    last_audit_date: str
    sections: list[AuditSection]
    key_actions: list[KeyAction]
    firm_type: FirmType
    assurance_statement: str

    @property
    def all_controls(self) -> list[ControlCheck]:
        """Every control across all sections, in section order."""
        return [c for s in self.sections for c in s.controls]

    def get_section(self, section_id: str) -> Optional[AuditSection]:
        """Get a section by id."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain structure (JSON-compatible)."""
        return {
            "dealer_name": self.dealer_name,
            "overall_rag": self.overall_rag.value,
            "overall_score": self.overall_score,
            "customer_sentiment_score": self.customer_sentiment_score,
            "customer_sentiment_trend": self.customer_sentiment_trend,
            "sentiment_categories": [c.to_dict() for c in self.sentiment_categories],
            "last_audit_date": self.last_audit_date,
            "sections": [s.to_dict() for s in self.sections],
            "key_actions": [a.to_dict() for a in self.key_actions],
            "firm_type": self.firm_type.value,
            "assurance_statement": self.assurance_statement,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DealerAudit:
        """
        Rebuild an audit from a to_dict() structure.

        Raises:
            AuditDeserializationError: If a field is missing or has an invalid value
        """
        if not isinstance(data, dict):
            raise AuditDeserializationError(
                message="DealerAudit payload must be a mapping",
                details={"type": type(data).__name__},
            )
        return cls(
            dealer_name=_require(data, "dealer_name", "DealerAudit"),
            overall_rag=_enum(RagStatus, _require(data, "overall_rag", "DealerAudit"), "DealerAudit"),
            overall_score=_number(int, data, "overall_score", "DealerAudit"),
            customer_sentiment_score=_number(float, data, "customer_sentiment_score", "DealerAudit"),
            customer_sentiment_trend=_number(float, data, "customer_sentiment_trend", "DealerAudit"),
            sentiment_categories=[
                SentimentCategory.from_dict(c)
                for c in _require(data, "sentiment_categories", "DealerAudit")
            ],
            last_audit_date=_require(data, "last_audit_date", "DealerAudit"),
            sections=[AuditSection.from_dict(s) for s in _require(data, "sections", "DealerAudit")],
            key_actions=[KeyAction.from_dict(a) for a in _require(data, "key_actions", "DealerAudit")],
            firm_type=_enum(FirmType, _require(data, "firm_type", "DealerAudit"), "DealerAudit"),
            assurance_statement=_require(data, "assurance_statement", "DealerAudit"),
        )
