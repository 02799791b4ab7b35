import re
from typing import Optional

from geoparse_pipeline.registry import extractors
from geoparse_pipeline.types import ExtractedEntities, MentionOccurrence


@extractors.register("simple")
class SimpleRegexExtractor:
    """Lightweight regex-based extractor for quick tests (no external deps).

    Every capitalized span is treated as a place mention; spans with no
    gazetteer candidates are dropped later in the pipeline.
    """

    def __init__(self, min_len: int = 3):
        self.pattern = re.compile(
            r"\b([A-Z][a-zA-Z0-9_-]+(?:\s+[A-Z][a-zA-Z0-9_-]+)*)\b"
        )
        self.min_len = min_len

    def extract(self, text: str, sentence_id: Optional[str] = None) -> ExtractedEntities:
        entities = ExtractedEntities()
        for match in self.pattern.finditer(text):
            span = match.group(1)
            if len(span) < self.min_len:
                continue
            entities.locations.append(
                MentionOccurrence(
                    text=span,
                    position=match.start(1),
                    sentence_id=sentence_id,
                )
            )
        return entities
