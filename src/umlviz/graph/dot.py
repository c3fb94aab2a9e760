"""Graphviz DOT renderer for schema diagrams."""

import logging
import re
from pathlib import Path

from ..config import UmlvizConfig
from ..models.schema import Entity
from .framework import GraphRenderer
from .labels import node_label
from .models import EdgeSpec, EdgeStyle, SubgraphSpec

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# DOT keywords are case-insensitive and cannot be used as bare IDs
DOT_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})
_PLAIN_ID = re.compile(r"[^\W\d]\w*")


def quote_id(identifier: str) -> str:
    """Identifier as a DOT ID: bare when it is a plain name, otherwise quoted.

    ``Node``, ``my-type`` or ``Order Line`` are quoted; ``Person`` is not.
    """
    if _PLAIN_ID.fullmatch(identifier) and identifier.lower() not in DOT_KEYWORDS:
        return identifier
    return f'"{escape_string(identifier)}"'


def escape_string(text: str) -> str:
    return text.replace('"', '\\"')


def load_template(name: str, override: str | Path | None = None) -> str:
    """Read a header/footer template, preferring an override path."""
    path = Path(override) if override else TEMPLATES_DIR / f"{name}.dot"
    with open(path, encoding="utf-8") as f:
        return f.read()


class DotRenderer(GraphRenderer):
    """Emits subgraph blocks and edges as Graphviz DOT text."""

    def __init__(self, header: str | None = None, footer: str | None = None):
        self.header = header if header is not None else load_template("header")
        self.footer = footer if footer is not None else load_template("footer")

    @classmethod
    def from_config(cls, config: UmlvizConfig) -> "DotRenderer":
        return cls(
            header=load_template("header", config.templates.header),
            footer=load_template("footer", config.templates.footer),
        )

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def render_node(self, entity: Entity) -> str:
        return f'  {quote_id(entity.id)} [label = "{{{node_label(entity)}}}"]'

    def render_subgraph(self, subgraph: SubgraphSpec, edges: list[EdgeSpec]) -> str:
        """Subgraph block with its node declarations, followed by its edges."""
        lines = [f"subgraph {quote_id(subgraph.id)} {{", f'  label = "{escape_string(subgraph.id)}"']
        lines.extend(self.render_node(entity) for entity in subgraph.nodes.values())
        lines.append("}")
        block = "\n".join(lines) + "\n"
        return block + "".join(self.render_edge(edge) for edge in edges)

    def edge_statement(self, edge: EdgeSpec) -> str:
        return f"{quote_id(edge.source)} -> {quote_id(edge.target)}"

    def render_edge(self, edge: EdgeSpec) -> str:
        statement = self.edge_statement(edge)
        if edge.style == EdgeStyle.PARAMETER_USE:
            return f"{statement} [style=dotted]\n"
        elif edge.style == EdgeStyle.INHERITANCE:
            # Arrowhead is a global edge attribute: switch it for this edge only
            return f'edge [arrowhead = "empty"]\n{statement}\nedge [arrowhead = "open"]\n'
        return f"{statement}\n"

    def render_document(self, bodies: list[str]) -> str:
        return f"{self.header}{''.join(bodies)}{self.footer}"
