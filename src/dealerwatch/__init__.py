"""
DealerWatch - Dealer Compliance Audit Engine

DealerWatch produces the compliance audit record for each dealer in a
monitored motor-finance portfolio. Audits are synthesized deterministically
from a dealer's stable index, except for a handful of real dealers whose
audits are hand-authored in a YAML pack.

Key Features:
- Reproducible per-control results across nine audit sections
- Red > amber > green roll-up at section and dealer level
- Remediation, BAU and optional key actions
- Portfolio analytics: stats, duplicates, alerts, benchmarks, re-checks

Quick Start:
    from dealerwatch import build_dealer_directory, generate_dealer_audit

    directory = build_dealer_directory()
    index, dealer = directory.find("Thurlby Motors")
    audit = generate_dealer_audit(dealer.name, index)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

from .config import Settings
from .engine import AuditAssembler, OverrideRegistry, generate_dealer_audit
from .exceptions import (
    AuditDeserializationError,
    ConfigurationError,
    DealerNotFoundError,
    DealerWatchError,
    OverridePackError,
    OverridePackValidationError,
    UnknownSectionError,
)
from .generation import DealerDirectory, build_dealer_directory, generate_controls
from .models import (
    AuditSection,
    ControlCheck,
    Dealer,
    DealerAudit,
    KeyAction,
    RagStatus,
)

__all__ = [
    "__version__",
    # Config
    "Settings",
    # Engine
    "AuditAssembler",
    "OverrideRegistry",
    "generate_dealer_audit",
    # Generation
    "DealerDirectory",
    "build_dealer_directory",
    "generate_controls",
    # Models
    "AuditSection",
    "ControlCheck",
    "Dealer",
    "DealerAudit",
    "KeyAction",
    "RagStatus",
    # Exceptions
    "AuditDeserializationError",
    "ConfigurationError",
    "DealerNotFoundError",
    "DealerWatchError",
    "OverridePackError",
    "OverridePackValidationError",
    "UnknownSectionError",
]
