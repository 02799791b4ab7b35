"""
JSON-ready response records.

Key names are kept stable for existing consumers of the geoparser output.
"""

from typing import Any, Dict, List, Optional

from geoparse_pipeline.gazetteer.base import Gazetteer
from geoparse_pipeline.types import (
    FocusLocation,
    FocusResult,
    GeoRecord,
    ResolvedEntities,
    ResolvedLocation,
)

# Major: new capabilities. Minor: result format or disambiguation changes. Revision: fixes.
PARSER_VERSION = "1.4.1"

STATUS_OK = "ok"
STATUS_ERROR = "error"


def response_envelope(results: Dict[str, Any]) -> Dict[str, Any]:
    return {"status": STATUS_OK, "version": PARSER_VERSION, "results": results}


def error_envelope(message: str) -> Dict[str, Any]:
    """All errors sent to clients share this shape."""
    return {"status": STATUS_ERROR, "version": PARSER_VERSION, "details": message}


def geo_record_to_dict(record: GeoRecord, gazetteer: Optional[Gazetteer] = None) -> Dict[str, Any]:
    country_geoname_id = ""
    state_geoname_id = ""
    if gazetteer is not None and record.country_code:
        country = gazetteer.country_record(record.country_code)
        if country is not None:
            country_geoname_id = str(country.geoname_id)
        state = gazetteer.admin1_record(record.country_code, record.admin1_code)
        if state is not None:
            state_geoname_id = str(state.geoname_id)

    return {
        "id": record.geoname_id,
        "name": record.name,
        "lat": record.latitude,
        "lon": record.longitude,
        "population": record.population,
        "featureClass": record.feature_class,
        "featureCode": record.feature_code,
        "countryCode": record.country_code,
        "countryGeoNameId": country_geoname_id,
        "stateCode": record.admin1_code,
        "stateGeoNameId": state_geoname_id,
    }


def resolved_location_to_dict(
    location: ResolvedLocation, gazetteer: Optional[Gazetteer] = None
) -> Dict[str, Any]:
    loc = geo_record_to_dict(location.record, gazetteer)
    loc["confidence"] = location.confidence  # low is good
    source: Dict[str, Any] = {
        "string": location.occurrence.text,
        "charIndex": location.occurrence.position,
    }
    if location.occurrence.sentence_id is not None:
        source["storySentencesId"] = location.occurrence.sentence_id
    loc["source"] = source
    return loc


def focus_location_to_dict(
    location: FocusLocation, gazetteer: Optional[Gazetteer] = None
) -> Dict[str, Any]:
    loc = geo_record_to_dict(location.record, gazetteer)
    loc["score"] = location.score
    return loc


def assemble_results(
    entities: ResolvedEntities,
    focus: FocusResult,
    gazetteer: Optional[Gazetteer] = None,
) -> Dict[str, Any]:
    """Combine mentions, focus, people and organizations into one results dict."""

    def focus_list(locations: List[FocusLocation]) -> List[Dict[str, Any]]:
        return [focus_location_to_dict(loc, gazetteer) for loc in locations]

    return {
        "places": {
            "mentions": [resolved_location_to_dict(loc, gazetteer) for loc in entities.locations],
            "focus": {
                "countries": focus_list(focus.countries),
                "states": focus_list(focus.states),
                "cities": focus_list(focus.cities),
            },
        },
        "people": [
            {"name": person.name, "count": person.occurrence_count} for person in entities.people
        ],
        "organizations": [
            {"name": org.name, "count": org.occurrence_count} for org in entities.organizations
        ],
    }
