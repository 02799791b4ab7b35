from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# GeoNames uses admin1 "00" for records that cover a whole country.
COUNTRY_ADMIN1_CODE = "00"

FEATURE_CLASS_ADMIN = "A"
FEATURE_CLASS_POPULATED = "P"


@dataclass(frozen=True)
class GeoRecord:
    """Gazetteer entry. Shared and read-only across requests."""

    geoname_id: int
    name: str
    latitude: float
    longitude: float
    population: int = 0
    feature_class: str = ""
    feature_code: str = ""
    country_code: str = ""
    admin1_code: str = ""
    alternate_names: Tuple[str, ...] = ()

    @property
    def is_country(self) -> bool:
        return self.admin1_code == COUNTRY_ADMIN1_CODE

    @property
    def is_city(self) -> bool:
        return self.feature_class == FEATURE_CLASS_POPULATED

    @property
    def is_admin_region(self) -> bool:
        return self.feature_class == FEATURE_CLASS_ADMIN

    def has_name(self, text: str) -> bool:
        """True when ``text`` is the primary or an alternate name (case-insensitive)."""
        needle = text.strip().casefold()
        if self.name.casefold() == needle:
            return True
        return any(alt.casefold() == needle for alt in self.alternate_names)


@dataclass(frozen=True)
class MentionOccurrence:
    """Place mention found by extraction."""

    text: str
    position: int
    sentence_id: Optional[str] = None


@dataclass(frozen=True)
class Candidate:
    """Gazetteer record proposed for a mention, with its rank (0 = best)."""

    record: GeoRecord
    rank: int
    score: Optional[float] = None
    fuzzy: bool = False


@dataclass
class CandidateGroup:
    """One mention and its ordered, non-empty candidate list."""

    occurrence: MentionOccurrence
    candidates: Tuple[Candidate, ...]

    def __post_init__(self) -> None:
        self.candidates = tuple(self.candidates)
        if not self.candidates:
            raise ValueError(
                f"Candidate group for '{self.occurrence.text}' has no candidates."
            )

    @property
    def top(self) -> Candidate:
        return self.candidates[0]


@dataclass(frozen=True)
class ResolvedLocation:
    """Disambiguation result. Confidence is the winning rank, lower is better."""

    record: GeoRecord
    occurrence: MentionOccurrence
    confidence: int
    resolved_by: Optional[str] = None


@dataclass(frozen=True)
class FocusLocation:
    """Aboutness entry at one granularity."""

    record: GeoRecord
    score: float


@dataclass
class FocusResult:
    countries: List[FocusLocation] = field(default_factory=list)
    states: List[FocusLocation] = field(default_factory=list)
    cities: List[FocusLocation] = field(default_factory=list)


@dataclass
class ResolvedPerson:
    name: str
    occurrence_count: int


@dataclass
class ResolvedOrganization:
    name: str
    occurrence_count: int


@dataclass
class ExtractedEntities:
    """Raw extraction output, ordered by position in text."""

    locations: List[MentionOccurrence] = field(default_factory=list)
    people: List[MentionOccurrence] = field(default_factory=list)
    organizations: List[MentionOccurrence] = field(default_factory=list)

    def extend(self, other: "ExtractedEntities") -> None:
        self.locations.extend(other.locations)
        self.people.extend(other.people)
        self.organizations.extend(other.organizations)

    def is_empty(self) -> bool:
        return not (self.locations or self.people or self.organizations)


@dataclass
class ResolvedEntities:
    """Resolution output for one request."""

    locations: List[ResolvedLocation] = field(default_factory=list)
    people: List[ResolvedPerson] = field(default_factory=list)
    organizations: List[ResolvedOrganization] = field(default_factory=list)
