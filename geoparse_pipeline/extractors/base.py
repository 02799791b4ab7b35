from typing import Optional, Protocol

from geoparse_pipeline.types import ExtractedEntities


class EntityExtractor(Protocol):
    """Finds place, person and organization mentions in raw text."""

    def extract(self, text: str, sentence_id: Optional[str] = None) -> ExtractedEntities:
        ...
