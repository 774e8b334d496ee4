"""
Pytest configuration and fixtures for DealerWatch tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest

from dealerwatch.config import Settings
from dealerwatch.engine import AuditAssembler, OverrideRegistry
from dealerwatch.generation import build_dealer_directory
from dealerwatch.models import (
    AuditSection,
    ControlCheck,
    ControlResult,
    Dealer,
    FirmType,
    GenerationMode,
    RagStatus,
    SectionSummary,
    Trend,
)


TEST_SEED = 1234

RESULT_FOR_RATING = {
    RagStatus.GREEN: ControlResult.PASS,
    RagStatus.AMBER: ControlResult.PARTIAL,
    RagStatus.RED: ControlResult.FAIL,
}


# =============================================================================
# Factory Helpers
# =============================================================================

def make_control(
    id: str = "gov-1",
    rating: RagStatus = RagStatus.GREEN,
    result: ControlResult = None,
    control_area: str = None,
    comments: str = "Operating effectively",
    automated: bool = True,
) -> ControlCheck:
    """Create a ControlCheck; result follows the rating unless given."""
    return ControlCheck(
        id=id,
        control_area=control_area or f"Control {id}",
        objective="Verify compliance with regulatory requirements",
        source_method="API / Manual Review",
        evidence="Documented evidence",
        result=result or RESULT_FOR_RATING[rating],
        frequency="Quarterly",
        risk_rating=rating,
        comments=comments,
        automated=automated,
    )


def make_section(
    id: str = "governance",
    name: str = "Corporate Governance",
    ratings: list = None,
) -> AuditSection:
    """Create an AuditSection with one control per rating."""
    ratings = ratings if ratings is not None else [RagStatus.GREEN]
    controls = [
        make_control(id=f"{id}-{n}", rating=rating)
        for n, rating in enumerate(ratings)
    ]
    green = sum(1 for r in ratings if r == RagStatus.GREEN)
    amber = sum(1 for r in ratings if r == RagStatus.AMBER)
    red = sum(1 for r in ratings if r == RagStatus.RED)
    rag = RagStatus.RED if red else RagStatus.AMBER if amber else RagStatus.GREEN
    return AuditSection(
        id=id,
        name=name,
        icon="Building2",
        controls=controls,
        summary=SectionSummary(green=green, amber=amber, red=red, rag_status=rag, notes=""),
    )


def make_dealer(
    name: str = "Test Motors",
    score: int = 85,
    rag: RagStatus = RagStatus.GREEN,
    last_audit: str = "05 Feb 2026",
    phone: str = "01234 567890",
    postcode: str = "AB1 2CD",
    address: str = "1 High Street",
    registration_number: str = "12345678",
) -> Dealer:
    """Create a Dealer with required fields."""
    return Dealer(
        name=name,
        trading_name=f"{name} Ltd",
        score=score,
        rag=rag,
        region="London",
        firm_type=FirmType.AR,
        principal_firm="Carlyle Motor Finance Ltd",
        address=address,
        postcode=postcode,
        phone=phone,
        registration_number=registration_number,
        last_audit=last_audit,
        trend=Trend.STABLE,
    )


def make_settings(**overrides) -> Settings:
    """Create Settings with a fixed seed."""
    values = {
        "generation_mode": GenerationMode.SEEDED,
        "directory_seed": TEST_SEED,
        "dealer_count": 200,
    }
    values.update(overrides)
    return Settings(**values)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def settings() -> Settings:
    return make_settings()


@pytest.fixture(scope="session")
def directory(settings):
    """Full-size seeded directory, built once per test session."""
    return build_dealer_directory(settings)


@pytest.fixture(scope="session")
def small_directory():
    """Real dealers plus 20 generated dealers."""
    return build_dealer_directory(make_settings(dealer_count=20))


@pytest.fixture(scope="session")
def registry() -> OverrideRegistry:
    return OverrideRegistry.default()


@pytest.fixture
def assembler(registry) -> AuditAssembler:
    return AuditAssembler(registry)
