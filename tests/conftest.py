"""Shared fixtures for geoparse pipeline tests."""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

import pytest

from geoparse_pipeline.errors import UnknownGeoNameIdError
from geoparse_pipeline.types import (
    Candidate,
    CandidateGroup,
    ExtractedEntities,
    GeoRecord,
    MentionOccurrence,
    ResolvedLocation,
)


# ---------------------------------------------------------------------------
# Record constants
# ---------------------------------------------------------------------------

COUNTRY_DOMINICAN_REPUBLIC = 3508796
CITY_SANTO_DOMINGO = 3492908
CITY_SANTO_DOMINGO_PH = 1687006
COUNTRY_UNITED_STATES = 6252001
STATE_MASSACHUSETTS = 6254926
CITY_BOSTON = 4930956
CITY_CAMBRIDGE_US = 4931972
CITY_CAMBRIDGE_GB = 2653941
CITY_PARIS = 2988507
CITY_PARIS_TX = 4717560
CONTINENT_AFRICA = 6255146


def make_record(
    geoname_id: int,
    name: str,
    feature_class: str = "P",
    feature_code: str = "PPL",
    country_code: str = "US",
    admin1_code: str = "MA",
    population: int = 1000,
    alternate_names: Sequence[str] = (),
) -> GeoRecord:
    return GeoRecord(
        geoname_id=geoname_id,
        name=name,
        latitude=0.0,
        longitude=0.0,
        population=population,
        feature_class=feature_class,
        feature_code=feature_code,
        country_code=country_code,
        admin1_code=admin1_code,
        alternate_names=tuple(alternate_names),
    )


def make_group(text: str, records: Sequence[GeoRecord], position: int = 0,
               fuzzy: bool = False) -> CandidateGroup:
    return CandidateGroup(
        occurrence=MentionOccurrence(text=text, position=position),
        candidates=tuple(
            Candidate(record=record, rank=rank, fuzzy=fuzzy)
            for rank, record in enumerate(records)
        ),
    )


def make_resolved(record: GeoRecord, text: Optional[str] = None, position: int = 0,
                  confidence: int = 0) -> ResolvedLocation:
    return ResolvedLocation(
        record=record,
        occurrence=MentionOccurrence(text=text or record.name, position=position),
        confidence=confidence,
    )


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def santo_domingo_capital() -> GeoRecord:
    return make_record(
        CITY_SANTO_DOMINGO, "Santo Domingo", feature_code="PPLC",
        country_code="DO", admin1_code="34", population=2201941,
    )


@pytest.fixture
def santo_domingo_minor() -> GeoRecord:
    return make_record(
        CITY_SANTO_DOMINGO_PH, "Santo Domingo",
        country_code="PH", admin1_code="05", population=3500,
    )


@pytest.fixture
def dominican_republic() -> GeoRecord:
    return make_record(
        COUNTRY_DOMINICAN_REPUBLIC, "Dominican Republic", feature_class="A",
        feature_code="PCLI", country_code="DO", admin1_code="00", population=10648791,
    )


@pytest.fixture
def boston() -> GeoRecord:
    return make_record(CITY_BOSTON, "Boston", feature_code="PPLA", population=617594)


@pytest.fixture
def cambridge_us() -> GeoRecord:
    return make_record(CITY_CAMBRIDGE_US, "Cambridge", population=105162)


@pytest.fixture
def cambridge_gb() -> GeoRecord:
    return make_record(
        CITY_CAMBRIDGE_GB, "Cambridge", feature_code="PPLA2",
        country_code="GB", admin1_code="ENG", population=128488,
    )


@pytest.fixture
def massachusetts() -> GeoRecord:
    return make_record(
        STATE_MASSACHUSETTS, "Massachusetts", feature_class="A",
        feature_code="ADM1", population=6433422,
    )


# ---------------------------------------------------------------------------
# Mock classes
# ---------------------------------------------------------------------------


class MockGazetteer:
    """In-memory gazetteer returning records in the order they were given."""

    def __init__(self, records: Optional[List[GeoRecord]] = None):
        self._records: Dict[int, GeoRecord] = {}
        self.lookups: List[str] = []
        for record in records or []:
            self._records[record.geoname_id] = record

    def candidates(self, name: str, max_results: int = 10, fuzzy: bool = False) -> List[Candidate]:
        self.lookups.append(name)
        hits = [r for r in self._records.values() if r.has_name(name)]
        return [Candidate(record=r, rank=i) for i, r in enumerate(hits[:max_results])]

    def get_by_id(self, geoname_id: int) -> GeoRecord:
        try:
            return self._records[geoname_id]
        except KeyError as exc:
            raise UnknownGeoNameIdError(geoname_id) from exc

    def country_record(self, country_code: str) -> Optional[GeoRecord]:
        for record in self._records.values():
            if record.country_code == country_code and record.feature_code == "PCLI":
                return record
        return None

    def admin1_record(self, country_code: str, admin1_code: str) -> Optional[GeoRecord]:
        for record in self._records.values():
            if (
                record.feature_code == "ADM1"
                and record.country_code == country_code
                and record.admin1_code == admin1_code
            ):
                return record
        return None


class FailingGazetteer(MockGazetteer):
    """Gazetteer whose lookups always fail."""

    def candidates(self, name: str, max_results: int = 10, fuzzy: bool = False) -> List[Candidate]:
        raise RuntimeError("gazetteer index unavailable")

    def get_by_id(self, geoname_id: int) -> GeoRecord:
        raise RuntimeError("gazetteer index unavailable")


class MockExtractor:
    """Extractor returning predefined entities."""

    def __init__(self, entities: Optional[ExtractedEntities] = None):
        self._entities = entities or ExtractedEntities()
        self.calls: List[str] = []

    def extract(self, text: str, sentence_id: Optional[str] = None) -> ExtractedEntities:
        self.calls.append(text)
        return self._entities


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_data_dir() -> Path:
    """Path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def sample_gazetteer_path(test_data_dir: Path) -> Path:
    """Path to the sample GeoNames JSONL file."""
    return test_data_dir / "sample_gazetteer.jsonl"


@pytest.fixture
def minimal_config_dict(sample_gazetteer_path: Path) -> Dict:
    """Config dict for a lightweight pipeline (regex extractor, sample gazetteer)."""
    return {
        "extractor": {"name": "simple", "params": {"min_len": 3}},
        "gazetteer": {"name": "jsonl", "params": {"path": str(sample_gazetteer_path)}},
        "focus_strategy": {"name": "frequency"},
        "max_results": 10,
        "fuzzy": False,
    }


@pytest.fixture
def temp_config_file(minimal_config_dict: Dict) -> Iterator[str]:
    """Temporary config JSON file for CLI testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(minimal_config_dict, f)
        path = f.name
    yield path
    os.unlink(path)
