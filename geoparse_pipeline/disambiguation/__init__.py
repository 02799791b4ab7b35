"""Toponym disambiguation: heuristic passes and the resolver that runs them."""

from .passes import (  # noqa: F401
    DEFAULT_PASSES,
    ExactAdmin1MatchPass,
    ExactColocationsPass,
    FuzzyMatchedCountriesPass,
    LargeAreasPass,
    TopAdminPopulatedPass,
    TopPreferringColocatedPass,
)
from .resolver import FALLBACK, MultiplePassResolver, disambiguate  # noqa: F401
