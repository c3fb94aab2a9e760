"""Resolution of diagram groups into entity subsets."""

import logging
from collections.abc import Iterable

from ..diagnostics import DiagnosticCode, DiagnosticCollector
from ..models.schema import Diagram, SchemaGraph, group_ids, is_closure_group
from .models import SubgraphSpec
from .reachability import closure

logger = logging.getLogger(__name__)


def resolve_group(
    group: list[str],
    graph: SchemaGraph,
    diagnostics: DiagnosticCollector | None = None,
) -> set[str]:
    """Entity ids a group denotes.

    A group ending with the closure marker stands for everything reachable
    from its seeds; any other group is an explicit list of ids.
    """
    ids = group_ids(group)
    if is_closure_group(group):
        resolved = closure(ids, graph, diagnostics)
        logger.debug(f"Group {ids} expanded to {len(resolved)} entities")
        return resolved
    return set(ids)


def select_subset(
    required_ids: Iterable[str],
    graph: SchemaGraph,
    diagram: Diagram | None = None,
    diagnostics: DiagnosticCollector | None = None,
) -> SubgraphSpec:
    """Restrict the graph's entities to required_ids.

    Entities keep their declaration order. Ids not defined in the graph are
    dropped.

    Args:
        required_ids: Ids to keep
        graph: Schema graph
        diagram: Diagram being rendered, used to decide which edges are drawn
        diagnostics: Optional collector for dropped ids

    Returns:
        SubgraphSpec with the selected entities and the current diagram
    """
    required = set(required_ids)

    if diagnostics is not None:
        for missing in sorted(required - set(graph.entities)):
            diagnostics.warn(
                DiagnosticCode.MISSING_ENTITY,
                f"entity '{missing}' is not defined",
                diagram=diagram.name if diagram else None,
                entity_id=missing,
            )

    nodes = {
        entity_id: entity
        for entity_id, entity in graph.entities.items()
        if entity_id in required
    }
    return SubgraphSpec(nodes=nodes, current=diagram)
