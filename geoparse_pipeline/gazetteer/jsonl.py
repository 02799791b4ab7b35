import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from rapidfuzz import fuzz, process

from geoparse_pipeline.errors import UnknownGeoNameIdError
from geoparse_pipeline.registry import gazetteers
from geoparse_pipeline.types import Candidate, GeoRecord

logger = logging.getLogger(__name__)

COUNTRY_FEATURE_CODES = frozenset({"PCL", "PCLI", "PCLD", "PCLF", "PCLIX", "PCLS"})
ADMIN1_FEATURE_CODE = "ADM1"


def _alternate_names(raw) -> Tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        raw = raw.split(",")
    return tuple(name.strip() for name in raw if name and name.strip())


def record_from_dict(item: Dict) -> GeoRecord:
    """Build a GeoRecord from a GeoNames-style JSON object."""
    return GeoRecord(
        geoname_id=int(item["geonameid"]),
        name=item["name"],
        latitude=float(item["latitude"]),
        longitude=float(item["longitude"]),
        population=int(item.get("population") or 0),
        feature_class=item.get("feature_class") or "",
        feature_code=item.get("feature_code") or "",
        country_code=item.get("country_code") or "",
        admin1_code=item.get("admin1_code") or "",
        alternate_names=_alternate_names(item.get("alternatenames")),
    )


@gazetteers.register("jsonl")
class JSONLGazetteer:
    """Loads GeoNames records from a JSONL file.

    Each line holds ``geonameid``, ``name``, ``latitude``, ``longitude`` and
    optionally ``population``, ``feature_class``, ``feature_code``,
    ``country_code``, ``admin1_code`` and ``alternatenames`` (list or
    comma-separated string).

    Exact matches on the primary or alternate names are ranked by population,
    then id. Fuzzy matching fills the remaining slots with rapidfuzz matches
    scoring at least ``score_cutoff``.
    """

    def __init__(self, path: Optional[str] = None, records: Optional[Iterable[GeoRecord]] = None,
                 score_cutoff: float = 85.0):
        self.score_cutoff = score_cutoff
        self.records: Dict[int, GeoRecord] = {}
        self._by_name: Dict[str, List[int]] = {}
        self._countries: Dict[str, GeoRecord] = {}
        self._admin1: Dict[Tuple[str, str], GeoRecord] = {}

        if path is not None:
            records = self._read(path)
        for record in records or ():
            self._add(record)

        self._names: List[str] = list(self._by_name)
        for ids in self._by_name.values():
            ids.sort(key=lambda i: (-self.records[i].population, i))
        logger.info(f"Gazetteer loaded: {len(self.records)} records, {len(self._names)} names")

    @staticmethod
    def _read(path: str) -> Iterable[GeoRecord]:
        with Path(path).open(encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                yield record_from_dict(json.loads(line))

    def _add(self, record: GeoRecord) -> None:
        self.records[record.geoname_id] = record
        for name in (record.name,) + record.alternate_names:
            ids = self._by_name.setdefault(name.casefold(), [])
            if record.geoname_id not in ids:
                ids.append(record.geoname_id)
        if record.feature_code in COUNTRY_FEATURE_CODES and record.country_code:
            self._countries.setdefault(record.country_code, record)
        elif record.feature_code == ADMIN1_FEATURE_CODE:
            self._admin1.setdefault((record.country_code, record.admin1_code), record)

    def candidates(self, name: str, max_results: int = 10, fuzzy: bool = False) -> List[Candidate]:
        query = name.strip().casefold()
        if not query or max_results <= 0:
            return []

        hits: List[Tuple[GeoRecord, float, bool]] = [
            (self.records[i], 100.0, False) for i in self._by_name.get(query, [])
        ]

        if fuzzy and len(hits) < max_results:
            seen = {record.geoname_id for record, _, _ in hits}
            matches = process.extract(
                query,
                self._names,
                scorer=fuzz.WRatio,
                limit=max_results,
                score_cutoff=self.score_cutoff,
            )
            for matched_name, score, _ in matches:
                if matched_name == query:
                    continue
                for i in self._by_name[matched_name]:
                    if i not in seen:
                        seen.add(i)
                        hits.append((self.records[i], float(score), True))

        return [
            Candidate(record=record, rank=rank, score=score, fuzzy=is_fuzzy)
            for rank, (record, score, is_fuzzy) in enumerate(hits[:max_results])
        ]

    def get_by_id(self, geoname_id: int) -> GeoRecord:
        try:
            return self.records[int(geoname_id)]
        except (KeyError, ValueError) as exc:
            raise UnknownGeoNameIdError(geoname_id) from exc

    def country_record(self, country_code: str) -> Optional[GeoRecord]:
        return self._countries.get(country_code)

    def admin1_record(self, country_code: str, admin1_code: str) -> Optional[GeoRecord]:
        return self._admin1.get((country_code, admin1_code))

    def __len__(self) -> int:
        return len(self.records)
