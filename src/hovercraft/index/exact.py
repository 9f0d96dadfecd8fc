"""Forward-tokenized exact search index."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Literal, Optional, Set, Union, overload

from hovercraft.models import Entry, IndexedDocument
from hovercraft.utils.text import Encoder, encode, iter_prefixes

DEFAULT_MAX_PREFIX = 64


class ExactTokenIndex:
    """Inverted index over every prefix of every token of the hover text.

    A query token matches a document when it is a prefix of one of the
    document's tokens; multi-token queries require every token to match.
    The encoder is fixed for the lifetime of the index so that documents and
    queries are always tokenized identically.

    Only the first ``max_prefix`` characters of a token are expanded into
    prefixes, which bounds memory for long unbroken tokens such as URLs.
    Longer query tokens are looked up by their capped prefix and then checked
    against the document tokens, so matching stays exact.
    """

    def __init__(self, encoder: Encoder = encode, *, max_prefix: int = DEFAULT_MAX_PREFIX) -> None:
        if max_prefix < 1:
            raise ValueError("max_prefix must be positive")
        self._encoder = encoder
        self.max_prefix = max_prefix
        self._postings: Dict[str, List[int]] = defaultdict(list)
        self._documents: Dict[int, IndexedDocument] = {}

    @property
    def encoder(self) -> Encoder:
        return self._encoder

    def __len__(self) -> int:
        return len(self._documents)

    def add(self, doc_id: int, entry: Entry) -> None:
        if doc_id in self._documents:
            raise ValueError(f"Document id {doc_id} already indexed")
        self._documents[doc_id] = IndexedDocument(id=doc_id, contents=entry)

        text = entry.text
        if not text:
            return
        seen: Set[str] = set()
        for token in self._encoder(text):
            for prefix in iter_prefixes(token[: self.max_prefix]):
                if prefix not in seen:
                    seen.add(prefix)
                    self._postings[prefix].append(doc_id)

    @overload
    def search(
        self, query: str, *, enrich: Literal[False] = ..., limit: Optional[int] = ...
    ) -> List[int]: ...

    @overload
    def search(
        self, query: str, *, enrich: Literal[True], limit: Optional[int] = ...
    ) -> List[IndexedDocument]: ...

    def search(
        self, query: str, *, enrich: bool = False, limit: Optional[int] = None
    ) -> Union[List[int], List[IndexedDocument]]:
        """Return matching ids (or documents when ``enrich``) in ingestion order."""
        tokens = list(dict.fromkeys(self._encoder(query)))
        if not tokens:
            return []

        matched: Optional[Set[int]] = None
        for token in tokens:
            postings = self._postings.get(token[: self.max_prefix])
            if not postings:
                return []
            candidates = set(postings)
            if len(token) > self.max_prefix:
                candidates = {doc_id for doc_id in candidates if self._has_prefix(doc_id, token)}
            matched = candidates if matched is None else matched & candidates
            if not matched:
                return []

        ids = sorted(matched or ())
        if limit is not None:
            ids = ids[:limit]
        if enrich:
            return [self._documents[doc_id] for doc_id in ids]
        return ids

    def _has_prefix(self, doc_id: int, token: str) -> bool:
        text = self._documents[doc_id].contents.text or ""
        return any(candidate.startswith(token) for candidate in self._encoder(text))
