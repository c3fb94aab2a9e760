"""Graph data structures used while emitting a diagram."""

from dataclasses import dataclass, field
from enum import Enum

from ..models.schema import Diagram, Entity


class EdgeStyle(str, Enum):
    """Visual styles of an edge between two entities."""
    ASSOCIATION = "association"
    PARAMETER_USE = "parameter-use"
    INHERITANCE = "inheritance"


@dataclass(frozen=True)
class EdgeSpec:
    """A derived edge from one entity to a referenced type."""
    source: str
    target: str
    style: EdgeStyle

    @property
    def text(self) -> str:
        """``src -> dst`` text identifying the edge within a diagram."""
        return f"{self.source} -> {self.target}"


@dataclass
class SubgraphSpec:
    """Entities selected for one group, plus the diagram being rendered.

    ``current`` is None when rendering the overview of every entity.
    """
    nodes: dict[str, Entity] = field(default_factory=dict)
    current: Diagram | None = None

    @property
    def id(self) -> str | None:
        """Subgraph identifier: the id of its first entity."""
        return next(iter(self.nodes), None)

    def group_set(self) -> set[str]:
        """Entity ids named by the current diagram's groups."""
        if self.current is None:
            return set()
        return self.current.group_members()

    def draws_edge_to(self, type_id: str) -> bool:
        """Whether an edge towards type_id belongs in this subgraph."""
        return type_id in self.group_set() or type_id in self.nodes


@dataclass
class RenderContext:
    """Per-diagram state: edges already emitted in this rendering pass.

    Create one per diagram; never share an instance between diagrams.
    """
    diagram_name: str
    seen: set[tuple[EdgeStyle, str]] = field(default_factory=set)

    def claim(self, edge: EdgeSpec) -> bool:
        """Record edge and return True unless it was already emitted."""
        key = (edge.style, edge.text)
        if key in self.seen:
            return False
        self.seen.add(key)
        return True
