"""
DealerWatch Portfolio Analytics

Read-only consumers of the dealer directory and the audit engine.
"""
from __future__ import annotations

from .alerts import Alert, alerts_for_audit, collect_alerts
from .benchmark import (
    PORTFOLIO_LABEL,
    DealerBenchmark,
    SectionBenchmark,
    benchmark_against_dealer,
    benchmark_against_portfolio,
    portfolio_section_averages,
    section_pass_rates,
)
from .duplicates import (
    DuplicateGroup,
    DuplicateMember,
    DuplicateType,
    detect_duplicates,
    duplicates_for_dealer,
    normalise,
)
from .rechecks import (
    RecheckItem,
    RecheckStatus,
    add_months,
    dealer_rechecks,
    generate_recheck_schedule,
    overdue_rechecks,
    parse_audit_date,
    urgent_rechecks,
)
from .stats import PortfolioStats, portfolio_stats

__all__ = [
    # Alerts
    "Alert",
    "alerts_for_audit",
    "collect_alerts",
    # Benchmark
    "PORTFOLIO_LABEL",
    "DealerBenchmark",
    "SectionBenchmark",
    "benchmark_against_dealer",
    "benchmark_against_portfolio",
    "portfolio_section_averages",
    "section_pass_rates",
    # Duplicates
    "DuplicateGroup",
    "DuplicateMember",
    "DuplicateType",
    "detect_duplicates",
    "duplicates_for_dealer",
    "normalise",
    # Rechecks
    "RecheckItem",
    "RecheckStatus",
    "add_months",
    "dealer_rechecks",
    "generate_recheck_schedule",
    "overdue_rechecks",
    "parse_audit_date",
    "urgent_rechecks",
    # Stats
    "PortfolioStats",
    "portfolio_stats",
]
