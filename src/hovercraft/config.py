"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PAYLOAD_PATH = Path("data/hovercraft.json")
FUZZY_ORDERS = ("ascending", "descending")


@dataclass(slots=True)
class AppConfig:
    payload_path: Path | None = DEFAULT_PAYLOAD_PATH
    # When set, the payload is fetched over HTTP instead of read from disk.
    payload_url: str | None = None
    remote_search_url: str | None = None
    fuzzy_threshold: float = 0.6
    fuzzy_order: str = "ascending"
    result_limit: int | None = None
    http_timeout: float | None = None

    def __post_init__(self) -> None:
        if self.payload_path is not None:
            self.payload_path = Path(self.payload_path)
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise ValueError(f"fuzzy_threshold must be within [0, 1], got {self.fuzzy_threshold}")
        if self.fuzzy_order not in FUZZY_ORDERS:
            raise ValueError(f"fuzzy_order must be one of {FUZZY_ORDERS}, got {self.fuzzy_order!r}")
        if self.result_limit is not None and self.result_limit < 1:
            raise ValueError("result_limit must be positive")

    def resolve_payload_path(self, base_dir: Path | None = None) -> Path | None:
        if self.payload_path is None:
            return None
        if self.payload_path.is_absolute() or base_dir is None:
            return self.payload_path
        return base_dir / self.payload_path
