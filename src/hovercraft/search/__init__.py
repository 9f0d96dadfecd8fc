"""Search backends and query routing."""
