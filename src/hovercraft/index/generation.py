"""One consistent snapshot of the entry store and both indexes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from hovercraft.index.exact import ExactTokenIndex
from hovercraft.index.fuzzy import FuzzyMatcher
from hovercraft.index.store import EntryStore
from hovercraft.models import Entry, Project


@dataclass(slots=True, frozen=True)
class IndexGeneration:
    """Store and indexes built together; replaced as a whole, never patched."""

    store: EntryStore = field(default_factory=EntryStore)
    exact: ExactTokenIndex = field(default_factory=ExactTokenIndex)
    fuzzy: FuzzyMatcher = field(default_factory=FuzzyMatcher)

    @classmethod
    def build(
        cls,
        projects: Sequence[Project],
        *,
        fuzzy_threshold: float = 0.6,
        fuzzy_order: str = "ascending",
    ) -> "IndexGeneration":
        store = EntryStore(projects)
        exact = ExactTokenIndex()
        entries: List[Entry] = []
        for doc_id, entry in enumerate(store.iter_entries()):
            exact.add(doc_id, entry)
            entries.append(entry)
        fuzzy = FuzzyMatcher(entries, threshold=fuzzy_threshold, order=fuzzy_order)
        return cls(store=store, exact=exact, fuzzy=fuzzy)

    @property
    def project_ids(self) -> List[str]:
        return self.store.project_ids

    @property
    def is_empty(self) -> bool:
        return len(self.store) == 0
