from typing import List, Protocol, Sequence

from geoparse_pipeline.types import FocusLocation, FocusResult, ResolvedLocation


class FocusStrategy(Protocol):
    """Ranks which countries, states and cities a text is about."""

    def select_countries(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        ...

    def select_states(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        ...

    def select_cities(self, resolved: Sequence[ResolvedLocation]) -> List[FocusLocation]:
        ...

    def compute_focus(self, resolved: Sequence[ResolvedLocation]) -> FocusResult:
        ...
