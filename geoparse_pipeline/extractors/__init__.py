"""Entity extractors."""

from .simple import SimpleRegexExtractor  # noqa: F401
from .spacy import SpacyExtractor  # noqa: F401
