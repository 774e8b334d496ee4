"""
DealerWatch Generation: Control Generators

One generator per audit section. Each derives a seed from the dealer index
and a section-specific prime, then uses `seed % k == 0` per control to pick
the non-pass branch. List lengths and control ids are fixed per section;
only outcomes and comments vary.

Generated controls always pair pass with green, partial with amber and
fail with red.
"""

from __future__ import annotations

from typing import Callable

from ..exceptions import UnknownSectionError
from ..models.audit import ControlCheck
from ..models.enums import ControlResult, RagStatus


# =============================================================================
# Constants
# =============================================================================

RATING_FOR_RESULT: dict[ControlResult, RagStatus] = {
    ControlResult.PASS: RagStatus.GREEN,
    ControlResult.PARTIAL: RagStatus.AMBER,
    ControlResult.FAIL: RagStatus.RED,
}

SECTION_PRIMES: dict[str, int] = {
    "governance": 7,
    "digital-reporting": 41,
    "permissions": 11,
    "sales": 13,
    "consumer-duty": 17,
    "financial-crime": 19,
    "financial-promotions": 23,
    "communications": 29,
    "conduct": 31,
}


def _check(
    control_id: str,
    area: str,
    objective: str,
    source_method: str,
    evidence: str,
    frequency: str,
    automated: bool,
    comments: str,
    result: ControlResult = ControlResult.PASS,
) -> ControlCheck:
    return ControlCheck(
        id=control_id,
        control_area=area,
        objective=objective,
        source_method=source_method,
        evidence=evidence,
        result=result,
        frequency=frequency,
        risk_rating=RATING_FOR_RESULT[result],
        comments=comments,
        automated=automated,
    )


def _outcome(issue: bool, failing: ControlResult) -> ControlResult:
    return failing if issue else ControlResult.PASS


# =============================================================================
# Section Generators
# =============================================================================

def generate_governance_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["governance"]
    names_issue = seed % 5 == 0
    media_issue = seed % 8 == 0
    return [
        _check(
            "gov-1", "Legal Entity Status",
            "Confirm the entity is valid and operational",
            "Companies House API Lookup", "Extract from registry", "Quarterly", True,
            "All correct and verified via Co House look up",
        ),
        _check(
            "gov-2", "Entity/Trading Names Alignment",
            "Confirm consistency of trading identity (FCA, ICO, website)",
            "Hybrid (Web scan + Manual confirm)", "Screenshots & Registry Records", "Quarterly", False,
            "Minor discrepancy in trading name on ICO register" if names_issue
            else "FCA & ICO confirmed; names aligned",
            _outcome(names_issue, ControlResult.PARTIAL),
        ),
        _check(
            "gov-3", "Directors / PSCs Change History",
            "Confirm governance structure stability",
            "API Lookup", "PSC Change Log", "Biannual", True,
            "Enables trigger-based enhanced checks via CreditSafe",
        ),
        _check(
            "gov-4", "Adverse Media / Sanctions / PEP Screening",
            "Identify potential compliance risks for directors & controllers",
            "Screening Service", "Report & Case Notes", "Continuous / Quarterly Review", True,
            "High lender concern – adverse media flag requires review" if media_issue
            else "No adverse findings; CreditSafe checks completed",
            _outcome(media_issue, ControlResult.FAIL),
        ),
        _check(
            "gov-5", "Declaration of Sanctions / DBS",
            "Confirm no undisclosed sanctions",
            "Signed Attestation Declaration", "Onboarding + Annual", "Annual", False,
            "Self-declaration received; DBS status confirmed",
        ),
    ]


def generate_digital_reporting_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["digital-reporting"]
    mi_issue = seed % 7 == 0
    return [
        _check(
            "digital-1", "MI Dashboard & Reporting",
            "Ensure management information is accurate and timely",
            "System Review", "MI Pack + Dashboard Screenshots", "Monthly", True,
            "MI pack delayed by 5 days; needs process tightening" if mi_issue
            else "Mostly effective reporting; continue to monitor",
            _outcome(mi_issue, ControlResult.PARTIAL),
        ),
        _check(
            "digital-2", "Data Quality & Integrity",
            "Verify data accuracy across systems",
            "Reconciliation checks", "Reconciliation report", "Quarterly", True,
            "Data reconciliation within tolerance; no escalation required",
        ),
    ]


def generate_permissions_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["permissions"]
    register_issue = seed % 12 == 0
    training_issue = seed % 4 == 0
    names_issue = seed % 6 == 0
    return [
        _check(
            "perm-1", "FCA Authorisation & Permissions",
            "Verify authorisation status including AR status",
            "FCA Register API Lookup", "FCA register snapshot", "Quarterly + Alert", True,
            "AR status verification required – register discrepancy" if register_issue
            else "Register checked, correct status; self-declaration on permissions",
            _outcome(register_issue, ControlResult.FAIL),
        ),
        _check(
            "perm-2", "Competence Training Matrix (SAF + Lender-specific)",
            "Ensure staff have required knowledge and training",
            "Training Records Review", "Certificates verified; Upload & Sampling", "Annual", False,
            "2 staff overdue for refresher training on Klassify" if training_issue
            else "All training current; certificates verified",
            _outcome(training_issue, ControlResult.PARTIAL),
        ),
        _check(
            "perm-3", "SMF Allocation for Oversight",
            "Ensure clear responsibility and oversight touchpoints",
            "Org Chart + FCA API check", "SMF Attestation + Org chart", "Annual + Alert", False,
            "No SMF required for ARs; clear oversight structure documented",
        ),
        _check(
            "perm-4", "Trading Names Cross-Reference",
            "Match Companies House, FCA, and website identity",
            "Cross-check validation", "Comparison report", "Annual", True,
            "Website trading name needs updating to match FCA register" if names_issue
            else "All names aligned; partial automation reduces manual effort",
            _outcome(names_issue, ControlResult.PARTIAL),
        ),
    ]


def generate_sales_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["sales"]
    idd_issue = seed % 9 == 0
    dn_issue = seed % 7 == 0
    afford_issue = seed % 11 == 0
    return [
        _check(
            "sales-1", "Pre-contract Disclosure",
            "Ensure IDD and disclosure provided before agreement",
            "API / iVendi Assurance via Klassify", "Event log + documents checked", "Per Application", True,
            "Missing IDD identified for finance deal – remediation required" if idd_issue
            else "All disclosures timestamped and logged via Klassify",
            _outcome(idd_issue, ControlResult.FAIL),
        ),
        _check(
            "sales-2", "Demands & Needs Statement",
            "Ensure D&N completed for all finance customers",
            "API / iVendi Assurance", "D&N document trail", "Per Application", True,
            "Missing Demands & Needs Statement – should be completed prior to pay out" if dn_issue
            else "D&N sent to customer for review prior to payout",
            _outcome(dn_issue, ControlResult.FAIL),
        ),
        _check(
            "sales-3", "Affordability / Eligibility Checks",
            "Verify customer can afford product per lender policy",
            "API / iVendi Assurance", "Decisioning trace + policy map", "Per Application", True,
            "Some manual overrides noted; TCG Access system review required" if afford_issue
            else "Automated checks passing; manual checks for ARs evidenced",
            _outcome(afford_issue, ControlResult.PARTIAL),
        ),
    ]


def generate_consumer_duty_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["consumer-duty"]
    value_issue = seed % 5 == 0
    product_issue = seed % 6 == 0
    support_issue = seed % 4 == 0
    return [
        _check(
            "duty-1", "Fair Value Benchmarking",
            "APR vs aggregated iVendi benchmark comparison",
            "iVendi Analytics", "Benchmark report + outlier list", "Quarterly", True,
            "APR outliers detected; visible through the finance proposal" if value_issue
            else "Within benchmark range; no outliers identified",
            _outcome(value_issue, ControlResult.FAIL),
        ),
        _check(
            "duty-2", "Products and Services Review",
            "Confirm products meet FCA Consumer Duty standards",
            "Product review / iVendi + Klassify", "Survey results, Measures", "Quarterly", False,
            "Partial product selection reviewed; automation reduces manual effort" if product_issue
            else "All products compliant; Klassify system used",
            _outcome(product_issue, ControlResult.PARTIAL),
        ),
        _check(
            "duty-3", "Consumer Understanding",
            "Assess whether consumers understand products, terms, and obligations",
            "Customer communications / test campaign",
            "Call monitoring reports, Trustpilot, Google reviews", "Quarterly", False,
            "Customer comprehension verified through call monitoring and review analysis",
        ),
        _check(
            "duty-4", "Consumer Support & Complaint Handling",
            "Assess effectiveness of customer support and complaint resolution",
            "Call logs, complaint reports, SQ, Withdrawals and CSS",
            "Complaint records, resolution logs", "Monthly", False,
            "Response times need improvement; recent 1-star reviews noted" if support_issue
            else "No complaints outstanding; sentiment positive",
            _outcome(support_issue, ControlResult.PARTIAL),
        ),
        _check(
            "duty-5", "Vulnerability Identification & Treatment",
            "Identify and treat vulnerable customers appropriately",
            "iVendi Flags + application checks + file note reviews",
            "Flags + file notes; all VC logged on Klassify", "Per Application", True,
            "Vulnerability flags active; all cases logged on Klassify",
        ),
    ]


def generate_financial_crime_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["financial-crime"]
    geo_issue = seed % 10 == 0
    payout_issue = seed % 15 == 0
    return [
        _check(
            "crime-1", "KYC / IDV Completion",
            "Identity verification for each applicant",
            "Vendor API result", "Pass/fail + reason codes", "Per Application", True,
            "Ensures identity verification is performed; critical for regulatory "
            "compliance and reducing fraud risk",
        ),
        _check(
            "crime-2", "Sanctions / PEP Screening at Application",
            "Screen against sanctions lists at point of application",
            "Service Vendor", "Screening review", "Per Application", True,
            "Eliminates manual review duplication; all clear",
        ),
        _check(
            "crime-3", "Device/IP Geolocation Anomaly",
            "Detect fraud patterns via telemetry",
            "Telemetry analytics via KYC", "Anomaly flag + score", "Per Application", True,
            "Some anomalies flagged for review" if geo_issue
            else "Addresses emerging fraud patterns; NA on AR",
            _outcome(geo_issue, ControlResult.PARTIAL),
        ),
        _check(
            "crime-4", "Velocity / Patterning",
            "Detect multiple apps per customer/device/email",
            "iVendi Analytics", "Velocity score", "Per Application + Daily Cohort", True,
            "Lender assurance beyond SUP; velocity within normal range",
        ),
        _check(
            "crime-5", "Bank Detail / Payout Mismatch",
            "Detect payout fraud risk from lender data",
            "From Lender", "Mismatch log", "Triggered", True,
            "Mismatch detected – investigation required" if payout_issue
            else "Key payout risk control; not applicable for AR",
            _outcome(payout_issue, ControlResult.FAIL),
        ),
    ]


def generate_financial_promotions_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["financial-promotions"]
    website_issue = seed % 3 == 0
    social_issue = seed % 4 == 0
    return [
        _check(
            "promo-1", "Website Financial Promotions",
            "Ensure promotions are clear, fair, not misleading",
            "TCG / Sedric Web Scan", "Scan report + screenshots", "Risk Based", True,
            "Missing representative APR on website where finance is incentivised" if website_issue
            else "Compliant promotions; Sedric automated checks confirm",
            _outcome(website_issue, ControlResult.PARTIAL),
        ),
        _check(
            "promo-2", "Privacy Policy & Cookie Management",
            "Verify GDPR compliance and cookie consent",
            "Website Review", "Policy documents", "Annual", False,
            "Policies up to date; cookie management compliant",
        ),
        _check(
            "promo-3", "Social Media Monitoring",
            "Monitor for non-compliant financial promotion posts",
            "Feed monitor + manual confirm via Sedric", "Posts archive", "Risk Based", True,
            "Missing representative APR on social media channels where finance is incentivised"
            if social_issue
            else "Social content compliant; Sedric automated monitoring",
            _outcome(social_issue, ControlResult.PARTIAL),
        ),
    ]


def generate_communications_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["communications"]
    channel_issue = seed % 4 == 0
    complaints_issue = seed % 3 == 0
    rca_issue = seed % 5 == 0
    return [
        _check(
            "comms-1", "Alternative Channels Monitoring",
            "Ensure WhatsApp/SMS/Phone communications monitored & retained",
            "Policy review + sampling",
            "Majority comms logs via Klassify; pre-delivery checklist", "Monthly", False,
            "Sampling gaps in invoice & warranty document retention" if channel_issue
            else "Channels monitored; readability for lenders confirmed",
            _outcome(channel_issue, ControlResult.PARTIAL),
        ),
        _check(
            "comms-2", "Complaints Benchmarking vs CSS",
            "Compare complaint volume vs customer sentiment score",
            "Data reconciliation via Klassify MI", "MI pack + Customer Sentiment score", "Monthly", True,
            "Complaint ratio above threshold; Google reviews showing negative trend" if complaints_issue
            else "Within acceptable range; no complaints outstanding",
            _outcome(complaints_issue, ControlResult.FAIL),
        ),
        _check(
            "comms-3", "Root Cause Analysis & Remediation",
            "Track and address complaint root causes; harm prevention",
            "Policy Based", "RCA managed register", "Monthly", False,
            "RCA register incomplete; addresses harm prevention" if rca_issue
            else "RCA process effective; consumer outcomes tested",
            _outcome(rca_issue, ControlResult.FAIL),
        ),
    ]


def generate_conduct_controls(dealer_index: int) -> list[ControlCheck]:
    seed = dealer_index * SECTION_PRIMES["conduct"]
    arrears_issue = seed % 10 == 0
    return [
        _check(
            "conduct-1", "Arrears/Forbearance Referral Patterns",
            "Early warning of poor outcome for dealer-level trends",
            "Trigger from Lender", "Trend chart", "Triggered from Lender", True,
            "Elevated arrears pattern noted; retain as early-warning control" if arrears_issue
            else "Patterns within normal range; NA trends for ARs",
            _outcome(arrears_issue, ControlResult.PARTIAL),
        ),
    ]


# =============================================================================
# Dispatch
# =============================================================================

SECTION_GENERATORS: dict[str, Callable[[int], list[ControlCheck]]] = {
    "governance": generate_governance_controls,
    "digital-reporting": generate_digital_reporting_controls,
    "permissions": generate_permissions_controls,
    "sales": generate_sales_controls,
    "consumer-duty": generate_consumer_duty_controls,
    "financial-crime": generate_financial_crime_controls,
    "financial-promotions": generate_financial_promotions_controls,
    "communications": generate_communications_controls,
    "conduct": generate_conduct_controls,
}


def generate_controls(section_id: str, dealer_index: int) -> list[ControlCheck]:
    """
    Generate the control checks for one section of a dealer's audit.

    Raises:
        UnknownSectionError: If section_id is not one of the nine sections
    """
    generator = SECTION_GENERATORS.get(section_id)
    if generator is None:
        raise UnknownSectionError(
            message=f"Unknown audit section: {section_id}",
            details={"section_id": section_id, "known": list(SECTION_GENERATORS)},
        )
    return generator(dealer_index)
