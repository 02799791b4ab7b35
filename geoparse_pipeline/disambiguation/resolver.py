"""
Multi-pass toponym resolver.

Runs the disambiguation passes in priority order over the unresolved candidate
groups, then resolves whatever is left to its top-ranked candidate. Every input
group yields exactly one ResolvedLocation, in input order.
"""

import logging
import threading
from collections import Counter
from typing import Dict, List, Optional, Sequence, Union

from geoparse_pipeline.registry import disambiguation_passes
from geoparse_pipeline.types import CandidateGroup, ResolvedLocation

from .base import DisambiguationPass
from .passes import DEFAULT_PASSES

logger = logging.getLogger(__name__)

FALLBACK = "fallback"


class MultiplePassResolver:
    """Drives the pass chain to completion and applies the top-rank fallback.

    ``max_sweeps`` bounds how many times the whole chain is tried; a further
    sweep only runs when the previous one resolved at least one group.
    """

    def __init__(
        self,
        passes: Optional[Sequence[Union[str, DisambiguationPass]]] = None,
        max_sweeps: int = 1,
    ):
        if max_sweeps < 1:
            raise ValueError("max_sweeps must be at least 1.")
        if passes is None:
            passes = DEFAULT_PASSES
        self.passes: List[DisambiguationPass] = [
            disambiguation_passes.get(p)() if isinstance(p, str) else p for p in passes
        ]
        self.max_sweeps = max_sweeps
        self._stats: Counter = Counter()
        self._lock = threading.Lock()

    def disambiguate(self, groups: Sequence[CandidateGroup]) -> List[ResolvedLocation]:
        groups = list(groups)
        pending: List[int] = list(range(len(groups)))
        resolved: Dict[int, ResolvedLocation] = {}
        accepted: List[ResolvedLocation] = []
        counts: Counter = Counter()

        for _ in range(self.max_sweeps):
            resolved_this_sweep = 0
            for disambiguation_pass in self.passes:
                if not pending:
                    break
                batch = [groups[i] for i in pending]
                # The same group object may occur more than once; its slots
                # are handed out in input order.
                slots: Dict[int, List[int]] = {}
                for group, i in zip(batch, pending):
                    slots.setdefault(id(group), []).append(i)
                # Snapshot so the pass only sees locations from earlier passes.
                resolutions = disambiguation_pass.disambiguate(batch, tuple(accepted))

                newly: List[ResolvedLocation] = []
                for group, candidate in resolutions:
                    free = slots.get(id(group))
                    if not free:
                        continue
                    idx = free.pop(0)
                    location = ResolvedLocation(
                        record=candidate.record,
                        occurrence=group.occurrence,
                        confidence=group.candidates.index(candidate),
                        resolved_by=disambiguation_pass.description,
                    )
                    resolved[idx] = location
                    newly.append(location)

                if newly:
                    accepted.extend(newly)
                    pending = [i for i in pending if i not in resolved]
                    counts[disambiguation_pass.description] += len(newly)
                    resolved_this_sweep += len(newly)
                    logger.debug(
                        f"Pass '{disambiguation_pass.description}' resolved {len(newly)} group(s)"
                    )

            if not pending or resolved_this_sweep == 0:
                break

        for i in pending:
            group = groups[i]
            resolved[i] = ResolvedLocation(
                record=group.top.record,
                occurrence=group.occurrence,
                confidence=0,
                resolved_by=FALLBACK,
            )
        if pending:
            counts[FALLBACK] += len(pending)
            logger.debug(f"Fallback resolved {len(pending)} group(s) to their top candidate")

        with self._lock:
            self._stats.update(counts)

        return [resolved[i] for i in range(len(groups))]

    def stats(self) -> Dict[str, int]:
        """Cumulative resolution counts per pass description (diagnostics only)."""
        with self._lock:
            return dict(self._stats)

    def log_stats(self) -> None:
        for description, count in sorted(self.stats().items()):
            logger.info(f"{count:6d} resolved by: {description}")


def disambiguate(
    groups: Sequence[CandidateGroup],
    passes: Optional[Sequence[Union[str, DisambiguationPass]]] = None,
    max_sweeps: int = 1,
) -> List[ResolvedLocation]:
    """Resolve every candidate group with a fresh resolver."""
    return MultiplePassResolver(passes=passes, max_sweeps=max_sweeps).disambiguate(groups)
