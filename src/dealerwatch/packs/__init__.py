"""
DealerWatch Override Packs

YAML data packs holding the hand-authored audits of the real dealers.

Usage:
    from dealerwatch.packs import load_override_pack

    records = load_override_pack()          # bundled pack
    records = load_override_pack("my.yaml") # custom pack
"""
from __future__ import annotations

from .loader import (
    DEFAULT_PACK_PATH,
    default_override_records,
    load_override_pack,
    load_override_pack_from_string,
    parse_override_pack,
)
from .schema import (
    SCHEMA_VERSION,
    KeyActionSchema,
    OverrideDealerSchema,
    OverridePackSchema,
    SectionCountsSchema,
    SentimentCategorySchema,
    SentimentSchema,
    check_schema_version,
    validate_override_pack,
)

__all__ = [
    # Loader
    "DEFAULT_PACK_PATH",
    "default_override_records",
    "load_override_pack",
    "load_override_pack_from_string",
    "parse_override_pack",
    # Schema
    "SCHEMA_VERSION",
    "KeyActionSchema",
    "OverrideDealerSchema",
    "OverridePackSchema",
    "SectionCountsSchema",
    "SentimentCategorySchema",
    "SentimentSchema",
    "check_schema_version",
    "validate_override_pack",
]
