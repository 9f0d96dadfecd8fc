"""Tests for index generations."""

from __future__ import annotations

from typing import Any, Dict

from hovercraft.index.generation import IndexGeneration
from hovercraft.ingestion.payload_loader import parse_projects


class TestIndexGeneration:
    """Test IndexGeneration.build."""

    def test_empty_generation(self) -> None:
        """A fresh generation answers every query with nothing."""
        generation = IndexGeneration()

        assert generation.is_empty
        assert generation.project_ids == []
        assert generation.exact.search("open") == []
        assert generation.fuzzy.search("open") == []

    def test_both_indexes_built_in_lockstep(self, nested_payload: Dict[str, Any]) -> None:
        """Exact ids and fuzzy positions refer to the same entries."""
        generation = IndexGeneration.build(parse_projects(nested_payload))

        entries = list(generation.store.iter_entries())
        assert len(generation.exact) == len(generation.fuzzy) == len(entries) == 4
        for document in generation.exact.search("open", enrich=True):
            assert entries[document.id] is document.contents
        for match in generation.fuzzy.search("open file"):
            assert entries[match.ref_index] is match.item

    def test_dense_ids_from_zero(self, nested_payload: Dict[str, Any]) -> None:
        generation = IndexGeneration.build(parse_projects(nested_payload))

        assert generation.exact.search("open") == [0, 3]

    def test_project_ids(self, nested_payload: Dict[str, Any]) -> None:
        generation = IndexGeneration.build(parse_projects(nested_payload))
        assert generation.project_ids == ["p1", "p2"]

    def test_fuzzy_settings_forwarded(self, nested_payload: Dict[str, Any]) -> None:
        generation = IndexGeneration.build(
            parse_projects(nested_payload), fuzzy_threshold=0.2, fuzzy_order="descending"
        )

        assert generation.fuzzy.threshold == 0.2
        assert generation.fuzzy.order == "descending"

    def test_rebuild_idempotent(self, nested_payload: Dict[str, Any]) -> None:
        """Two builds from the same projects give the same matches."""
        projects = parse_projects(nested_payload)
        first = IndexGeneration.build(projects)
        second = IndexGeneration.build(projects)

        for query in ("open", "file", "widg", "sock"):
            assert first.exact.search(query) == second.exact.search(query)
            assert [(m.ref_index, m.score) for m in first.fuzzy.search(query)] == [
                (m.ref_index, m.score) for m in second.fuzzy.search(query)
            ]

    def test_shapes_index_identically(
        self, nested_payload: Dict[str, Any], flat_payload: Dict[str, Any]
    ) -> None:
        nested = IndexGeneration.build(parse_projects(nested_payload))
        flat = IndexGeneration.build(parse_projects(flat_payload))

        assert [e.text for e in nested.store.iter_entries()] == [e.text for e in flat.store.iter_entries()]
        assert nested.exact.search("open") == flat.exact.search("open")
