from typing import List, Optional, Protocol

from geoparse_pipeline.types import Candidate, GeoRecord


class Gazetteer(Protocol):
    """Read-only lookup from surface strings to ranked geographic records."""

    def candidates(self, name: str, max_results: int = 10, fuzzy: bool = False) -> List[Candidate]:
        ...

    def get_by_id(self, geoname_id: int) -> GeoRecord:
        ...

    def country_record(self, country_code: str) -> Optional[GeoRecord]:
        ...

    def admin1_record(self, country_code: str, admin1_code: str) -> Optional[GeoRecord]:
        ...
