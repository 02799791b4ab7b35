"""
Disambiguation passes, ordered from most to least confident.

Each pass encodes one narrow rule. Passes only read the locations accepted
by earlier passes, so groups inside a pass are decided independently.
"""

from typing import List, Optional, Sequence

from geoparse_pipeline.registry import disambiguation_passes
from geoparse_pipeline.types import Candidate, CandidateGroup, ResolvedLocation

from .base import (
    Resolution,
    accepted_admin1s,
    accepted_countries,
    is_exact_match,
    is_populated,
)

LARGE_AREA_FEATURE_CODES = frozenset({"CONT", "OCN", "SEA", "PCLI"})


@disambiguation_passes.register("large_areas")
class LargeAreasPass:
    description = "Pick continents, oceans and independent countries that match exactly"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        resolved: List[Resolution] = []
        for group in groups:
            for candidate in group.candidates:
                if (
                    candidate.record.feature_code in LARGE_AREA_FEATURE_CODES
                    and is_populated(candidate)
                    and is_exact_match(candidate, group)
                ):
                    resolved.append((group, candidate))
                    break
        return resolved


@disambiguation_passes.register("exact_admin1")
class ExactAdmin1MatchPass:
    description = "Pick states and provinces that match exactly"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        resolved: List[Resolution] = []
        for group in groups:
            for candidate in group.candidates:
                if (
                    candidate.record.feature_code == "ADM1"
                    and is_populated(candidate)
                    and is_exact_match(candidate, group)
                ):
                    resolved.append((group, candidate))
                    break
        return resolved


@disambiguation_passes.register("exact_colocations")
class ExactColocationsPass:
    description = "Pick exact matches in the same state as a place already picked"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        admin1s = accepted_admin1s(accepted)
        if not admin1s:
            return []
        resolved: List[Resolution] = []
        for group in groups:
            for candidate in group.candidates:
                record = candidate.record
                if (
                    (record.country_code, record.admin1_code) in admin1s
                    and is_exact_match(candidate, group)
                ):
                    resolved.append((group, candidate))
                    break
        return resolved


@disambiguation_passes.register("top_admin_populated")
class TopAdminPopulatedPass:
    description = "Pick the most populated exact-match city or administrative region"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        resolved: List[Resolution] = []
        for group in groups:
            best: Optional[Candidate] = None
            for candidate in group.candidates:
                record = candidate.record
                if not (record.is_city or record.is_admin_region):
                    continue
                if not (is_populated(candidate) and is_exact_match(candidate, group)):
                    continue
                # strict comparison keeps the better-ranked candidate on ties
                if best is None or record.population > best.record.population:
                    best = candidate
            if best is not None:
                resolved.append((group, best))
        return resolved


@disambiguation_passes.register("top_preferring_colocated")
class TopPreferringColocatedPass:
    description = "Pick the best-ranked candidate in a country already picked"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        countries = accepted_countries(accepted)
        if not countries:
            return []
        resolved: List[Resolution] = []
        for group in groups:
            for candidate in group.candidates:
                if candidate.record.country_code in countries:
                    resolved.append((group, candidate))
                    break
        return resolved


@disambiguation_passes.register("fuzzy_countries")
class FuzzyMatchedCountriesPass:
    description = "Pick countries that might not be an exact match"

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        resolved: List[Resolution] = []
        for group in groups:
            top = group.top
            if is_populated(top) and top.record.is_country:
                resolved.append((group, top))
        return resolved


DEFAULT_PASSES = [
    "large_areas",
    "exact_admin1",
    "exact_colocations",
    "top_admin_populated",
    "top_preferring_colocated",
    "fuzzy_countries",
]
