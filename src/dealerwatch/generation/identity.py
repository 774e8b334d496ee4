"""
DealerWatch Generation: Dealer Identity Module

Produces dealer identity records from a collection position.

Key components:
- pseudo_random: sine-based deterministic draw keyed by index + offset
- DealerIdentityGenerator: builds a Dealer for a given index
- REAL_DEALERS: the four dealers with hand-authored identity and audit

Design Principles:
- Structural fields (name, phone, registration number, postcode, address,
  audit date, trading name, principal firm) depend only on the index.
- Score, RAG band and trend come from the generator's RNG, which is either
  seeded (reproducible) or unseeded (fresh demo data per build).

Example:
    >>> generator = DealerIdentityGenerator(GenerationMode.SEEDED, seed=7)
    >>> dealer = generator.generate(12)
    >>> dealer.name == generator.generate(12).name
    True
"""

from __future__ import annotations

import hashlib
import math
import random
from typing import Optional

from ..models.dealer import RAG_SCORE_BANDS, Dealer
from ..models.enums import FirmType, GenerationMode, RagStatus, Trend


# =============================================================================
# Constants
# =============================================================================

DEALER_PREFIXES = [
    "Redline", "Stratstone", "Apex", "Arnold Clark", "Sytner", "Lookers", "Pendragon",
    "Vertu", "JCT600", "Inchcape", "Marshall", "Listers", "Jardine", "Swansway",
    "TrustFord", "Bristol Street", "Evans Halshaw", "CarShop", "Motorpoint", "Big Motoring World",
    "Caffyns", "Hendy", "Snows", "Dick Lovett", "HR Owen", "Harwoods", "Vindis",
    "Glyn Hopkin", "Peter Vardy", "Eastern Western", "Parks", "Macklin", "Robins & Day",
    "Perrys", "Johnsons", "Sandicliffe", "Stoneacre", "TC Harrison", "Rybrook", "Sinclair",
    "Bowker", "RRG", "Hartwell", "Williams", "JMK", "Citygate", "Marriott", "Greenhous",
    "Mill", "Breeze", "Hughes", "Westover", "Beadles", "Corkills", "Lancaster", "Gates",
    "Yeomans", "Howards", "Brayleys", "Chorley", "Roadside", "Platinum", "Prestige", "Premier",
    "Elite", "Superior", "Exclusive", "Diamond", "Crown", "Royal", "Imperial", "Sovereign",
]

DEALER_SUFFIXES = [
    "Motors", "BMW", "Mercedes", "Audi", "Volkswagen", "Ford", "Toyota", "Honda",
    "Nissan", "Mazda", "Kia", "Hyundai", "Volvo", "Jaguar", "Land Rover", "Porsche",
    "Ferrari", "Bentley", "Rolls-Royce", "Aston Martin", "McLaren", "Specialist Cars",
    "Auto Centre", "Car Sales", "Motor Group", "Automotive", "Car Supermarket", "Vehicle Centre",
    "Car World", "Motor Village", "Auto Sales", "Car Store", "Motor Mall", "Auto Hub",
]

LOCATIONS = [
    "London", "Birmingham", "Manchester", "Leeds", "Glasgow", "Liverpool", "Newcastle",
    "Sheffield", "Bristol", "Edinburgh", "Cardiff", "Belfast", "Nottingham", "Southampton",
    "Leicester", "Coventry", "Bradford", "Hull", "Stoke", "Wolverhampton", "Derby",
    "Swansea", "Plymouth", "Reading", "Aberdeen", "Bournemouth", "Middlesbrough", "Bolton",
    "Luton", "Sunderland", "Norwich", "Preston", "Milton Keynes", "Brighton", "Oxford",
]

# Postcode area per location (same order as LOCATIONS)
POSTCODE_AREAS = [
    "E", "B", "M", "LS", "G", "L", "NE",
    "S", "BS", "EH", "CF", "BT", "NG", "SO",
    "LE", "CV", "BD", "HU", "ST", "WV", "DE",
    "SA", "PL", "RG", "AB", "BH", "TS", "BL",
    "LU", "SR", "NR", "PR", "MK", "BN", "OX",
]

STREETS = [
    "High Street", "Station Road", "London Road", "Victoria Road", "Church Street",
    "Manor Road", "Park Road", "Mill Lane", "Queens Road", "Kings Road",
    "Brook Street", "Ring Road", "Trading Estate", "Motor Park", "Retail Park",
]

TRADING_SUFFIXES = ["Ltd", "Limited", "Group Ltd", "Motor Company Ltd"]

PRINCIPAL_FIRMS = [
    "Carlyle Motor Finance Ltd",
    "Northgate Principal Services Ltd",
    "Meridian Retail Finance Ltd",
    "Albion Credit Broking Ltd",
    "Harbour Point Finance Ltd",
]

AUDIT_DAYS = ["01", "05", "08", "10", "12", "15", "18", "20", "22", "25", "28"]
AUDIT_MONTHS = ["Jan", "Feb", "Dec", "Nov", "Oct", "Sep"]
AUDIT_YEARS = ["2026", "2026", "2026", "2025", "2025"]

_POSTCODE_LETTERS = "ABDEFGHJLNPQRSTUWXYZ"

# Band thresholds: ~69% green, ~24.5% amber, ~6.5% red
GREEN_THRESHOLD = 0.69
AMBER_THRESHOLD = 0.935

# Trend odds per band: (P(down), P(down or stable))
TREND_THRESHOLDS: dict[RagStatus, tuple[float, float]] = {
    RagStatus.RED: (0.6, 0.8),
    RagStatus.AMBER: (0.4, 0.7),
    RagStatus.GREEN: (0.15, 0.5),
}

# Per-field offsets for pseudo_random
_OFFSET_PHONE_AREA = 11
_OFFSET_PHONE_LINE = 13
_OFFSET_REGISTRATION = 17
_OFFSET_POSTCODE_DIGIT = 19
_OFFSET_POSTCODE_FIRST = 23
_OFFSET_POSTCODE_SECOND = 29
_OFFSET_HOUSE_NUMBER = 31
_OFFSET_STREET = 37
_OFFSET_TRADING = 41
_OFFSET_PRINCIPAL = 43


# =============================================================================
# Real Dealers
# =============================================================================

# Prepended to every directory, in this order, at positions 0-3.
REAL_DEALERS: tuple[Dealer, ...] = (
    Dealer(
        name="Thurlby Motors",
        trading_name="Thurlby Motors Automotive",
        score=72,
        rag=RagStatus.AMBER,
        region="Bourne",
        firm_type=FirmType.AR,
        principal_firm="Carlyle Motor Finance Ltd",
        address="2 Northfields Industrial Estate",
        postcode="PE10 9QD",
        phone="01778 420377",
        registration_number="04417186",
        last_audit="05 Feb 2026",
        trend=Trend.UP,
    ),
    Dealer(
        name="Dynasty Partners Limited",
        trading_name="Dynasty Partners",
        score=68,
        rag=RagStatus.AMBER,
        region="London",
        firm_type=FirmType.DA,
        principal_firm=None,
        address="41 Great Portland Street",
        postcode="W1W 7LA",
        phone="0207 946 0321",
        registration_number="11592034",
        last_audit="05 Feb 2026",
        trend=Trend.STABLE,
    ),
    Dealer(
        name="Shirlaws Limited",
        trading_name="Shirlaws Car Sales",
        score=38,
        rag=RagStatus.RED,
        region="Sheffield",
        firm_type=FirmType.AR,
        principal_firm="Meridian Retail Finance Ltd",
        address="118 Penistone Road",
        postcode="S6 2GZ",
        phone="0114 496 0712",
        registration_number="09873310",
        last_audit="05 Feb 2026",
        trend=Trend.DOWN,
    ),
    Dealer(
        name="Platinum Vehicle Specialists",
        trading_name="Platinum Vehicle Specialists Ltd",
        score=42,
        rag=RagStatus.RED,
        region="Manchester",
        firm_type=FirmType.AR,
        principal_firm="Albion Credit Broking Ltd",
        address="7 Trafford Park Road",
        postcode="M17 1HG",
        phone="0161 496 0458",
        registration_number="08246617",
        last_audit="05 Feb 2026",
        trend=Trend.DOWN,
    ),
)

REAL_DEALER_NAMES: frozenset[str] = frozenset(d.name for d in REAL_DEALERS)


# =============================================================================
# Deterministic Field Derivation
# =============================================================================

def pseudo_random(index: int, offset: int) -> float:
    """
    Deterministic draw in [0, 1) from an index and a fixed offset.

    Same (index, offset) always yields the same value.
    """
    x = math.sin(index * 9301 + offset) * 10000
    return x - math.floor(x)


def _pick(items: list[str], index: int, offset: int) -> str:
    return items[int(pseudo_random(index, offset) * len(items))]


def dealer_name(index: int) -> str:
    """Build the dealer name for a position."""
    prefix = DEALER_PREFIXES[index % len(DEALER_PREFIXES)]
    suffix = DEALER_SUFFIXES[(index // 3) % len(DEALER_SUFFIXES)]
    location = LOCATIONS[index % len(LOCATIONS)]

    patterns = [
        f"{prefix} {suffix}",
        f"{prefix} {suffix} {location}",
        f"{location} {prefix} {suffix}",
        f"{prefix} {location}",
    ]
    return patterns[index % len(patterns)]


def audit_date(index: int) -> str:
    """Date of the last audit for a position, "DD Mon YYYY"."""
    day = AUDIT_DAYS[index % len(AUDIT_DAYS)]
    month = AUDIT_MONTHS[index % len(AUDIT_MONTHS)]
    year = AUDIT_YEARS[index % len(AUDIT_YEARS)]
    return f"{day} {month} {year}"


def firm_type_for_index(index: int) -> FirmType:
    """Every fifth dealer is directly authorised; the rest are ARs."""
    return FirmType.DA if index % 5 == 0 else FirmType.AR


def phone_number(index: int) -> str:
    area = int(pseudo_random(index, _OFFSET_PHONE_AREA) * 900) + 100
    line = int(pseudo_random(index, _OFFSET_PHONE_LINE) * 900000) + 100000
    return f"01{area} {line}"


def registration_number(index: int) -> str:
    return f"{int(pseudo_random(index, _OFFSET_REGISTRATION) * 90000000) + 10000000:08d}"


def postcode(index: int) -> str:
    area = POSTCODE_AREAS[index % len(POSTCODE_AREAS)]
    district = (index // len(POSTCODE_AREAS)) % 20 + 1
    digit = int(pseudo_random(index, _OFFSET_POSTCODE_DIGIT) * 9) + 1
    first = _pick(list(_POSTCODE_LETTERS), index, _OFFSET_POSTCODE_FIRST)
    second = _pick(list(_POSTCODE_LETTERS), index, _OFFSET_POSTCODE_SECOND)
    return f"{area}{district} {digit}{first}{second}"


def street_address(index: int) -> str:
    number = int(pseudo_random(index, _OFFSET_HOUSE_NUMBER) * 200) + 1
    return f"{number} {_pick(STREETS, index, _OFFSET_STREET)}"


def trading_name(index: int) -> str:
    return f"{dealer_name(index)} {_pick(TRADING_SUFFIXES, index, _OFFSET_TRADING)}"


def principal_firm(index: int) -> Optional[str]:
    """Principal firm reference; only appointed representatives have one."""
    if firm_type_for_index(index) is FirmType.DA:
        return None
    return _pick(PRINCIPAL_FIRMS, index, _OFFSET_PRINCIPAL)


# =============================================================================
# Identity Generator
# =============================================================================

class DealerIdentityGenerator:
    """
    Generates dealer identity records.

    Usage:
        >>> generator = DealerIdentityGenerator(GenerationMode.SEEDED, seed=42)
        >>> dealers = [generator.generate(i) for i in range(4, 204)]
    """

    def __init__(
        self,
        mode: GenerationMode = GenerationMode.SEEDED,
        seed: int = 0,
    ) -> None:
        """
        Initialize the generator.

        Args:
            mode: SEEDED for a reproducible RNG, RANDOM for a fresh one
            seed: Seed used in SEEDED mode (ignored in RANDOM mode)
        """
        self.mode = mode
        self.seed = seed
        self._rng = self._init_rng()

    def _init_rng(self) -> random.Random:
        """Initialize the RNG for score, band and trend draws."""
        if self.mode is GenerationMode.RANDOM:
            return random.Random()
        seed_hash = hashlib.sha256(f"dealerwatch:{self.seed}".encode()).digest()
        return random.Random(int.from_bytes(seed_hash[:8], "big"))

    def _draw_band(self) -> RagStatus:
        draw = self._rng.random()
        if draw < GREEN_THRESHOLD:
            return RagStatus.GREEN
        if draw < AMBER_THRESHOLD:
            return RagStatus.AMBER
        return RagStatus.RED

    def _draw_trend(self, rag: RagStatus) -> Trend:
        down, stable = TREND_THRESHOLDS[rag]
        draw = self._rng.random()
        if draw < down:
            return Trend.DOWN
        if draw < stable:
            return Trend.STABLE
        return Trend.UP

    def generate(self, index: int) -> Dealer:
        """
        Generate the dealer at a collection position.

        Consumes three RNG draws (band, score, trend), so the non-structural
        fields depend on the order in which indices are generated.
        """
        rag = self._draw_band()
        low, high = RAG_SCORE_BANDS[rag]
        score = self._rng.randint(low, high)
        trend = self._draw_trend(rag)

        return Dealer(
            name=dealer_name(index),
            trading_name=trading_name(index),
            score=score,
            rag=rag,
            region=LOCATIONS[index % len(LOCATIONS)],
            firm_type=firm_type_for_index(index),
            principal_firm=principal_firm(index),
            address=street_address(index),
            postcode=postcode(index),
            phone=phone_number(index),
            registration_number=registration_number(index),
            last_audit=audit_date(index),
            trend=trend,
        )
