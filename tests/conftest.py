"""Shared fixtures for hover documentation payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest


def make_entry(text: str | None, uri: str = "file:///a", root_path: str = "/a") -> Dict[str, Any]:
    hover: Dict[str, Any] = {"contents": {"kind": "markdown", "value": text}} if text is not None else {}
    return {
        "hover": hover,
        "definition": {"uri": uri, "range": {"start": {"line": 0, "character": 0}}},
        "moniker": None,
        "rootPath": root_path,
    }


@pytest.fixture
def nested_payload() -> Dict[str, Any]:
    """Payload with ``{projectId, pages}`` records."""
    return {
        "p1": {
            "projectId": "p1",
            "pages": [
                {"entries": [make_entry("open file", "file:///p1/a"), make_entry("close file", "file:///p1/a")]},
                {"entries": [make_entry("Returns the Widget count", "file:///p1/b")]},
            ],
        },
        "p2": {
            "projectId": "p2",
            "pages": [{"entries": [make_entry("open socket", "file:///p2/a")]}],
        },
    }


@pytest.fixture
def flat_payload() -> Dict[str, Any]:
    """The same logical entries as ``nested_payload`` as bare page lists."""
    return {
        "p1": [
            {"document": {"uri": "file:///p1/a"}, "entries": [make_entry("open file", "file:///p1/a"), make_entry("close file", "file:///p1/a")]},
            {"document": {"uri": "file:///p1/b"}, "entries": [make_entry("Returns the Widget count", "file:///p1/b")]},
        ],
        "p2": [
            {"document": {"uri": "file:///p2/a"}, "entries": [make_entry("open socket", "file:///p2/a")]},
        ],
    }


@pytest.fixture
def connection_entries() -> List[Dict[str, Any]]:
    return [
        make_entry("initialize connection"),
        make_entry("close connection"),
        make_entry("connect"),
    ]


@pytest.fixture
def payload_file(tmp_path: Path, nested_payload: Dict[str, Any]) -> Path:
    path = tmp_path / "hovercraft.json"
    path.write_text(json.dumps(nested_payload), encoding="utf-8")
    return path
