import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type

# Ensure component registration by importing modules with registry decorators.
from geoparse_pipeline import extractors as _extractors_pkg  # noqa: F401
from geoparse_pipeline import gazetteer as _gazetteer_pkg  # noqa: F401
from geoparse_pipeline import disambiguation as _disamb_pkg  # noqa: F401
from geoparse_pipeline import focus as _focus_pkg  # noqa: F401

from .config import PipelineConfig
from .disambiguation.resolver import MultiplePassResolver
from .errors import EmptyInputError, UnknownGeoNameIdError
from .extractors.base import EntityExtractor
from .focus.base import FocusStrategy
from .focus.frequency import FrequencyOfMentionFocusStrategy
from .gazetteer.base import Gazetteer
from .registry import extractors, focus_strategies, gazetteers
from .responses import (
    assemble_results,
    error_envelope,
    geo_record_to_dict,
    response_envelope,
)
from .types import (
    CandidateGroup,
    ExtractedEntities,
    FocusResult,
    MentionOccurrence,
    ResolvedEntities,
    ResolvedOrganization,
    ResolvedPerson,
)

logger = logging.getLogger(__name__)


def _count_by_name(occurrences: Iterable[MentionOccurrence], cls: Type) -> List:
    """Count mentions per name, keeping first-seen order."""
    counts: Dict[str, int] = {}
    for occurrence in occurrences:
        counts[occurrence.text] = counts.get(occurrence.text, 0) + 1
    return [cls(name=name, occurrence_count=count) for name, count in counts.items()]


class GeoParser:
    """Extracts entities, resolves places and summarises geographic focus.

    Components are injected; use ``from_config`` to build them from the
    registries. One instance can serve many requests: the gazetteer is only
    read and all per-request state lives inside each call.
    """

    def __init__(
        self,
        extractor: EntityExtractor,
        gazetteer: Gazetteer,
        resolver: Optional[MultiplePassResolver] = None,
        focus_strategy: Optional[FocusStrategy] = None,
        max_results: int = 10,
        fuzzy: bool = False,
    ) -> None:
        self.extractor = extractor
        self.gazetteer = gazetteer
        self.resolver = resolver or MultiplePassResolver()
        self.focus_strategy = focus_strategy or FrequencyOfMentionFocusStrategy()
        self.max_results = max_results
        self.fuzzy = fuzzy

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "GeoParser":
        gazetteer = gazetteers.get(config.gazetteer.name)(**config.gazetteer.params)
        extractor = extractors.get(config.extractor.name)(**config.extractor.params)
        focus_strategy = focus_strategies.get(config.focus_strategy.name)(
            **config.focus_strategy.params
        )
        resolver = MultiplePassResolver(passes=config.passes, max_sweeps=config.max_sweeps)
        logger.info("Created parser successfully")
        return cls(
            extractor=extractor,
            gazetteer=gazetteer,
            resolver=resolver,
            focus_strategy=focus_strategy,
            max_results=config.max_results,
            fuzzy=config.fuzzy,
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def build_candidate_groups(
        self, occurrences: Sequence[MentionOccurrence]
    ) -> List[CandidateGroup]:
        """Look up candidates per mention; mentions without any are dropped."""
        lookups: Dict[str, list] = {}
        groups: List[CandidateGroup] = []
        for occurrence in occurrences:
            if occurrence.text not in lookups:
                lookups[occurrence.text] = self.gazetteer.candidates(
                    occurrence.text, max_results=self.max_results, fuzzy=self.fuzzy
                )
            candidates = lookups[occurrence.text]
            if not candidates:
                logger.debug(f"No gazetteer candidates for '{occurrence.text}', dropping")
                continue
            groups.append(CandidateGroup(occurrence=occurrence, candidates=candidates))
        return groups

    def resolve(self, entities: ExtractedEntities) -> ResolvedEntities:
        if entities.is_empty():
            logger.debug("No place, person or organization entities found")
            return ResolvedEntities()
        groups = self.build_candidate_groups(entities.locations)
        locations = self.resolver.disambiguate(groups)
        return ResolvedEntities(
            locations=locations,
            people=_count_by_name(entities.people, ResolvedPerson),
            organizations=_count_by_name(entities.organizations, ResolvedOrganization),
        )

    def extract_and_resolve(self, text: str) -> ResolvedEntities:
        if not text or not text.strip():
            raise EmptyInputError("No text")
        return self.resolve(self.extractor.extract(text))

    def extract_and_resolve_sentences(self, sentences: Sequence[Dict[str, Any]]) -> ResolvedEntities:
        """Extract per sentence; each item has ``sentence`` and ``story_sentences_id``."""
        entities = ExtractedEntities()
        for sentence in sentences:
            sentence_id = sentence.get("story_sentences_id")
            entities.extend(
                self.extractor.extract(
                    sentence.get("sentence", ""),
                    sentence_id=None if sentence_id is None else str(sentence_id),
                )
            )
        return self.resolve(entities)

    def compute_focus(self, entities: ResolvedEntities) -> FocusResult:
        return self.focus_strategy.compute_focus(entities.locations)

    # ------------------------------------------------------------------
    # Request API: always returns a response envelope, never raises
    # ------------------------------------------------------------------

    def parse_from_entities(self, entities: ResolvedEntities) -> Dict[str, Any]:
        results = assemble_results(entities, self.compute_focus(entities), self.gazetteer)
        return response_envelope(results)

    def parse_text(self, text: str) -> Dict[str, Any]:
        return self._timed(text, lambda: self.extract_and_resolve(text))

    def parse_sentences(self, json_text: str) -> Dict[str, Any]:
        return self._timed(
            json_text, lambda: self.extract_and_resolve_sentences(json.loads(json_text))
        )

    def parse_entities_json(self, json_text: str) -> Dict[str, Any]:
        """Resolve pre-extracted entities, skipping extraction.

        Expects ``{"locations": [...], "people": [...], "organizations": [...]}``
        where each item has ``text`` and optionally ``charIndex`` and
        ``storySentencesId``.
        """
        return self._timed(json_text, lambda: self.resolve(entities_from_json(json_text)))

    def geoname_info(self, geoname_id: int) -> Dict[str, Any]:
        try:
            record = self.gazetteer.get_by_id(geoname_id)
            results = geo_record_to_dict(record, self.gazetteer)
        except UnknownGeoNameIdError as exc:
            logger.warning(str(exc))
            return error_envelope(f"Invalid GeoNames id {geoname_id}")
        except Exception as exc:
            logger.error(f"GeoNames lookup failed: {exc}", exc_info=True)
            return error_envelope(f"{type(exc).__name__}: {exc}")
        return response_envelope(results)

    def log_stats(self) -> None:
        self.resolver.log_stats()

    def _timed(self, raw: str, work: Callable[[], ResolvedEntities]) -> Dict[str, Any]:
        start = time.monotonic()
        if not raw or not raw.strip():
            return error_envelope("No text")
        try:
            response = self.parse_from_entities(work())
        except EmptyInputError:
            return error_envelope("No text")
        except Exception as exc:
            logger.error(f"Parse failed: {exc}", exc_info=True)
            response = error_envelope(f"{type(exc).__name__}: {exc}")
        response["milliseconds"] = int((time.monotonic() - start) * 1000)
        return response


def entities_from_json(json_text: str) -> ExtractedEntities:
    data = json.loads(json_text)

    def occurrences(key: str) -> List[MentionOccurrence]:
        items = []
        for item in data.get(key) or []:
            sentence_id = item.get("storySentencesId")
            items.append(
                MentionOccurrence(
                    text=item["text"],
                    position=int(item.get("charIndex", 0)),
                    sentence_id=None if sentence_id is None else str(sentence_id),
                )
            )
        return items

    return ExtractedEntities(
        locations=occurrences("locations"),
        people=occurrences("people"),
        organizations=occurrences("organizations"),
    )
