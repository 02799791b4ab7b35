from typing import Iterable, List, Protocol, Sequence, Tuple

from geoparse_pipeline.types import Candidate, CandidateGroup, ResolvedLocation

Resolution = Tuple[CandidateGroup, Candidate]


class DisambiguationPass(Protocol):
    """One heuristic in the disambiguation chain.

    A pass looks at the still-unresolved groups, plus the locations accepted
    by earlier passes, and returns the groups it can resolve paired with the
    chosen candidate. It must not reorder candidates or touch ``accepted``.
    """

    description: str

    def disambiguate(
        self, groups: Sequence[CandidateGroup], accepted: Sequence[ResolvedLocation]
    ) -> List[Resolution]:
        ...


def is_exact_match(candidate: Candidate, group: CandidateGroup) -> bool:
    return not candidate.fuzzy and candidate.record.has_name(group.occurrence.text)


def is_populated(candidate: Candidate) -> bool:
    return candidate.record.population > 0


def accepted_countries(accepted: Iterable[ResolvedLocation]) -> set:
    return {loc.record.country_code for loc in accepted if loc.record.country_code}


def accepted_admin1s(accepted: Iterable[ResolvedLocation]) -> set:
    return {
        (loc.record.country_code, loc.record.admin1_code)
        for loc in accepted
        if loc.record.country_code and loc.record.admin1_code and not loc.record.is_country
    }
