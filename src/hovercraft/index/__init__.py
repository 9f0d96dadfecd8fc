"""In-memory indexes and their builder."""
