"""Diagram generation for umlviz.

Selects entities per diagram group, collects deduplicated edges and emits
Graphviz DOT descriptions that a render backend turns into images.
"""

from .backend import GraphvizBackend, RenderBackend, RenderError
from .dot import DotRenderer
from .edges import collect_edges
from .framework import DiagramGenerator, GraphRenderer, RenderReport
from .models import EdgeSpec, EdgeStyle, RenderContext, SubgraphSpec
from .reachability import closure
from .selection import resolve_group, select_subset

__all__ = [
    "DiagramGenerator",
    "GraphRenderer",
    "RenderReport",
    "DotRenderer",
    "RenderBackend",
    "GraphvizBackend",
    "RenderError",
    "EdgeSpec",
    "EdgeStyle",
    "RenderContext",
    "SubgraphSpec",
    "closure",
    "collect_edges",
    "resolve_group",
    "select_subset",
]
