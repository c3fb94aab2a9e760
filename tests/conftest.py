"""Shared fixtures for umlviz tests."""

import json
from pathlib import Path

import pytest

from umlviz.config import UmlvizConfig
from umlviz.graph import DiagramGenerator, DotRenderer
from umlviz.models import SchemaGraph

HEADER = "digraph G {\n"
FOOTER = "}\n"


def schema_document() -> dict:
    """A -> B -> C with B inheriting from D, plus a closure diagram over A."""
    return {
        "entities": [
            {"id": "A", "kind": "record", "fields": [{"id": "b", "return": {"typeId": "B"}}]},
            {
                "id": "B",
                "kind": "record",
                "fields": [{"id": "c", "return": {"typeId": "C"}}],
                "parents": [{"typeId": "D"}],
            },
            {"id": "C", "kind": "record"},
            {"id": "D", "kind": "record"},
        ],
        "diagrams": [
            {"name": "closure", "groups": [["A", "!"]]},
            {"name": "explicit", "groups": [["A", "B"]]},
            {"name": "empty", "groups": []},
        ],
    }


def edge_lines(description: str) -> list[str]:
    """Edge statements of a DOT description."""
    return [line for line in description.splitlines() if " -> " in line]


@pytest.fixture
def graph() -> SchemaGraph:
    """Sample schema graph."""
    return SchemaGraph.model_validate(schema_document())


@pytest.fixture
def schema_file(tmp_path) -> Path:
    """Sample schema written to a JSON file."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema_document()), encoding="utf-8")
    return path


@pytest.fixture
def renderer() -> DotRenderer:
    """DOT renderer with a minimal header and footer."""
    return DotRenderer(header=HEADER, footer=FOOTER)


@pytest.fixture
def generator(renderer) -> DiagramGenerator:
    """Diagram generator without a render backend."""
    return DiagramGenerator(UmlvizConfig(), renderer)
