"""Text helpers shared by the indexes and the display layer."""

from __future__ import annotations

import re
from typing import Callable, List

Encoder = Callable[[str], List[str]]

_WHITESPACE = re.compile(r"\s+")


def encode(text: str) -> List[str]:
    """Case-fold text and split it into whitespace-separated tokens.

    The same encoder must be used for indexing and querying, otherwise
    lookups silently miss.
    """
    return [token for token in _WHITESPACE.split(text.casefold()) if token]


def iter_prefixes(token: str) -> List[str]:
    """Return every non-empty prefix of ``token``, shortest first."""
    return [token[:end] for end in range(1, len(token) + 1)]


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def snippet(text: str | None, *, max_chars: int = 180) -> str:
    """Single-line preview of hover text for tables and logs."""
    if not text:
        return ""
    flat = collapse_whitespace(text)
    if len(flat) <= max_chars:
        return flat
    return flat[: max_chars - 1].rstrip() + "…"
