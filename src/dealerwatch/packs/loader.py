"""
DealerWatch Override Pack Loader

Loads and validates the override pack from YAML.

Converts Pydantic schema models to DealerWatch domain models.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import OverridePackError, OverridePackValidationError
from ..models import (
    SECTION_IDS,
    ActionPriority,
    ActionStatus,
    FirmType,
    KeyAction,
    OverrideRecord,
    RagStatus,
    SectionCounts,
    SentimentCategory,
)
from .schema import (
    SCHEMA_VERSION,
    KeyActionSchema,
    OverrideDealerSchema,
    OverridePackSchema,
    SectionCountsSchema,
    check_schema_version,
    validate_override_pack,
)

logger = logging.getLogger(__name__)

DEFAULT_PACK_PATH = Path(__file__).resolve().parent.parent / "data" / "real_dealers.yaml"


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_section(section_id: str, schema: SectionCountsSchema) -> SectionCounts:
    return SectionCounts(
        section_id=section_id,
        green=schema.green,
        amber=schema.amber,
        red=schema.red,
        notes=schema.notes,
    )


def _convert_key_action(schema: KeyActionSchema) -> KeyAction:
    return KeyAction(
        id=schema.id,
        section=schema.section,
        action=schema.action,
        priority=ActionPriority(schema.priority),
        owner=schema.owner,
        due_date=schema.due_date,
        status=ActionStatus(schema.status),
        notes=schema.notes,
    )


def _convert_dealer(schema: OverrideDealerSchema) -> OverrideRecord:
    """Convert one dealer entry, ordering sections by the fixed section order."""
    return OverrideRecord(
        dealer_name=schema.dealer_name,
        overall_rag=RagStatus(schema.overall_rag),
        overall_score=schema.overall_score,
        firm_type=FirmType(schema.firm_type),
        last_audit_date=schema.last_audit_date,
        customer_sentiment_score=schema.sentiment.score,
        customer_sentiment_trend=schema.sentiment.trend,
        sentiment_categories=tuple(
            SentimentCategory(label=c.label, score=c.score, trend=c.trend)
            for c in schema.sentiment.categories
        ),
        sections=tuple(
            _convert_section(section_id, schema.sections[section_id])
            for section_id in SECTION_IDS
        ),
        key_actions=tuple(_convert_key_action(a) for a in schema.key_actions),
        assurance_statement=schema.assurance_statement,
    )


def _convert_override_pack(schema: OverridePackSchema) -> list[OverrideRecord]:
    return [_convert_dealer(d) for d in schema.dealers]


# =============================================================================
# Loading
# =============================================================================

def parse_override_pack(data: Any, source: str = "<string>") -> list[OverrideRecord]:
    """
    Validate already-parsed pack data and convert it to domain records.

    Args:
        data: Structure produced by yaml.safe_load
        source: Description of where the data came from, for error details

    Raises:
        OverridePackValidationError: If the data does not match the schema
    """
    if not isinstance(data, dict):
        raise OverridePackValidationError(
            message="Override pack must be a mapping at the top level",
            details={"path": source, "type": type(data).__name__},
        )

    if not check_schema_version(data):
        pack_version = data.get("schema_version", "unknown")
        raise OverridePackValidationError(
            message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
            details={
                "path": source,
                "pack_version": pack_version,
                "expected_version": SCHEMA_VERSION,
            },
        )

    try:
        schema = validate_override_pack(data)
    except ValidationError as e:
        raise OverridePackValidationError(
            message=f"Override pack validation failed: {e.error_count()} errors",
            details={
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
                "path": source,
            },
        )

    return _convert_override_pack(schema)


def load_override_pack(path: Optional[Union[str, Path]] = None) -> list[OverrideRecord]:
    """
    Load the override pack from a YAML file.

    Args:
        path: Pack file (defaults to the pack shipped with the package)

    Returns:
        One OverrideRecord per dealer, in file order

    Raises:
        OverridePackError: If the file cannot be read or parsed
        OverridePackValidationError: If the content fails validation
    """
    path = Path(path) if path is not None else DEFAULT_PACK_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise OverridePackError(
            message=f"Failed to load override pack: {e}",
            details={"path": str(path), "error": str(e)},
        )

    records = parse_override_pack(data, source=str(path))
    logger.debug("Loaded override pack %s with %d dealers", path, len(records))
    return records


def load_override_pack_from_string(content: str) -> list[OverrideRecord]:
    """
    Load an override pack from a YAML string.

    Raises:
        OverridePackError: If the string is not valid YAML
        OverridePackValidationError: If the content fails validation
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise OverridePackError(
            message=f"Failed to parse override pack: {e}",
            details={"error": str(e)},
        )
    return parse_override_pack(data)


@lru_cache(maxsize=1)
def default_override_records() -> tuple[OverrideRecord, ...]:
    """Records from the bundled pack, read once per process."""
    return tuple(load_override_pack())
