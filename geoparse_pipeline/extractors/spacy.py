import logging
from typing import Iterable, Optional

import spacy
from spacy.language import Language

from geoparse_pipeline.registry import extractors
from geoparse_pipeline.types import ExtractedEntities, MentionOccurrence

logger = logging.getLogger(__name__)

LOCATION_LABELS = ("GPE", "LOC", "FAC")
PERSON_LABELS = ("PERSON",)
ORGANIZATION_LABELS = ("ORG",)


@extractors.register("spacy")
class SpacyExtractor:
    """spaCy NER, split into locations, people and organizations by label."""

    def __init__(
        self,
        model: str = "en_core_web_sm",
        nlp: Optional[Language] = None,
        location_labels: Iterable[str] = LOCATION_LABELS,
        person_labels: Iterable[str] = PERSON_LABELS,
        organization_labels: Iterable[str] = ORGANIZATION_LABELS,
    ) -> None:
        if nlp is None:
            logger.info(f"Loading spaCy model: {model}")
            nlp = spacy.load(model)
        self.nlp = nlp
        self.location_labels = set(location_labels)
        self.person_labels = set(person_labels)
        self.organization_labels = set(organization_labels)

    def extract(self, text: str, sentence_id: Optional[str] = None) -> ExtractedEntities:
        entities = ExtractedEntities()
        if not text or not text.strip():
            return entities

        doc = self.nlp(text)
        for ent in sorted(doc.ents, key=lambda e: e.start_char):
            occurrence = MentionOccurrence(
                text=ent.text,
                position=ent.start_char,
                sentence_id=sentence_id,
            )
            if ent.label_ in self.location_labels:
                entities.locations.append(occurrence)
            elif ent.label_ in self.person_labels:
                entities.people.append(occurrence)
            elif ent.label_ in self.organization_labels:
                entities.organizations.append(occurrence)
        return entities
