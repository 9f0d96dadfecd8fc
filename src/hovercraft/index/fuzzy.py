"""Approximate matching over hover text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process, utils

from hovercraft.models import Entry

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class FuzzyMatch:
    item: Entry
    score: float
    ref_index: int


class FuzzyMatcher:
    """Scores entries against a free-text query with ``rapidfuzz``.

    Scores are distances in ``[0, 1]``: 0 is a perfect match. Entries scoring
    above ``threshold`` are dropped. ``order`` fixes the result ordering for
    every search made through this matcher.
    """

    def __init__(
        self,
        entries: Sequence[Entry] = (),
        *,
        threshold: float = 0.6,
        order: str = "ascending",
    ) -> None:
        if order not in ("ascending", "descending"):
            raise ValueError(f"Unknown fuzzy order: {order!r}")
        self._entries: Tuple[Entry, ...] = tuple(entries)
        self._choices: List[Optional[str]] = [entry.text for entry in self._entries]
        self.threshold = threshold
        self.order = order

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, query: str, *, limit: Optional[int] = None) -> List[FuzzyMatch]:
        if not query.strip() or not self._entries:
            return []

        # None choices are skipped by rapidfuzz, leaving text-less entries unmatchable.
        raw = process.extract(
            query,
            self._choices,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=None,
            score_cutoff=(1.0 - self.threshold) * 100.0,
        )
        matches = [
            FuzzyMatch(item=self._entries[index], score=round(1.0 - similarity / 100.0, 6), ref_index=index)
            for _, similarity, index in raw
        ]
        if self.order == "ascending":
            matches.sort(key=lambda match: (match.score, match.ref_index))
        else:
            matches.sort(key=lambda match: (-match.score, match.ref_index))
        LOGGER.debug("Fuzzy query %r matched %d of %d entries", query, len(matches), len(self._entries))
        if limit is not None:
            matches = matches[:limit]
        return matches
