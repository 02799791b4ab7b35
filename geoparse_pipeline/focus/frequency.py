"""
Frequency-of-mention focus scoring.

Resolved locations are grouped per granularity and each group is scored by
how often it was mentioned. Ties go to the group with the larger aggregate
population, then to the smaller identifier, so the ranking is deterministic.
"""

from collections import Counter
from typing import Callable, Dict, Hashable, List, Optional, Sequence

from geoparse_pipeline.registry import focus_strategies
from geoparse_pipeline.types import FocusLocation, FocusResult, GeoRecord, ResolvedLocation

GroupKey = Callable[[GeoRecord], Optional[Hashable]]


def country_key(record: GeoRecord) -> Optional[Hashable]:
    return record.country_code or None


def state_key(record: GeoRecord) -> Optional[Hashable]:
    if not (record.is_city or record.is_admin_region):
        return None
    if not record.country_code or not record.admin1_code or record.is_country:
        return None
    return (record.country_code, record.admin1_code)


def city_key(record: GeoRecord) -> Optional[Hashable]:
    return record.geoname_id if record.is_city else None


@focus_strategies.register("frequency")
class FrequencyOfMentionFocusStrategy:
    """Scores each place by the number of mentions that resolved to it."""

    def weight(self, location: ResolvedLocation) -> float:
        return 1

    def select_countries(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        return self._rank(resolved, country_key)

    def select_states(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        return self._rank(resolved, state_key)

    def select_cities(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        return self._rank(resolved, city_key)

    def compute_focus(self, resolved: Sequence[ResolvedLocation]) -> FocusResult:
        return FocusResult(
            countries=self.select_countries(resolved),
            states=self.select_states(resolved),
            cities=self.select_cities(resolved),
        )

    def _rank(self, resolved: Sequence[ResolvedLocation], key: GroupKey) -> List[FocusLocation]:
        scores: Dict[Hashable, float] = {}
        members: Dict[Hashable, Counter] = {}
        records: Dict[int, GeoRecord] = {}

        for location in resolved:
            group = key(location.record)
            if group is None:
                continue
            scores[group] = scores.get(group, 0) + self.weight(location)
            members.setdefault(group, Counter())[location.record.geoname_id] += 1
            records[location.record.geoname_id] = location.record

        ranked = []
        for group, score in scores.items():
            counts = members[group]
            population = sum(records[i].population for i in counts)
            representative = records[
                min(counts, key=lambda i: (-counts[i], -records[i].population, i))
            ]
            ranked.append((-score, -population, group, representative, score))

        ranked.sort(key=lambda item: item[:3])
        return [FocusLocation(record=item[3], score=item[4]) for item in ranked]


@focus_strategies.register("confidence_weighted")
class ConfidenceWeightedFocusStrategy(FrequencyOfMentionFocusStrategy):
    """Like frequency of mention, but top-ranked resolutions count for more."""

    def weight(self, location: ResolvedLocation) -> float:
        return 1.0 / (1 + location.confidence)
