"""Edge collection for a selected subgraph."""

import logging

from ..models.schema import Entity
from .models import EdgeSpec, EdgeStyle, RenderContext, SubgraphSpec

logger = logging.getLogger(__name__)


def entity_edges(entity: Entity, subgraph: SubgraphSpec) -> list[EdgeSpec]:
    """Candidate edges of one entity, before deduplication.

    Field and method return types give association edges, method parameters
    give parameter-use edges and parents give inheritance edges. Only types
    that are named by the current diagram's groups or selected in the
    subgraph produce an edge.
    """
    edges = []

    for field in entity.fields:
        if subgraph.draws_edge_to(field.return_type.type_id):
            edges.append(EdgeSpec(entity.id, field.return_type.type_id, EdgeStyle.ASSOCIATION))

    for field in entity.fields:
        if not field.is_method:
            continue
        for param in field.params:
            if subgraph.draws_edge_to(param.type_id):
                edges.append(EdgeSpec(entity.id, param.type_id, EdgeStyle.PARAMETER_USE))

    for parent in entity.parents:
        if subgraph.draws_edge_to(parent.type_id):
            edges.append(EdgeSpec(entity.id, parent.type_id, EdgeStyle.INHERITANCE))

    return edges


def collect_edges(subgraph: SubgraphSpec, context: RenderContext) -> list[EdgeSpec]:
    """Edges of the subgraph not yet emitted in this diagram.

    The same source, target and style are emitted at most once per
    RenderContext, however many fields or groups produce them.
    """
    new_edges = []
    for entity in subgraph.nodes.values():
        for edge in entity_edges(entity, subgraph):
            if context.claim(edge):
                new_edges.append(edge)

    logger.debug(f"Collected {len(new_edges)} edges for {context.diagram_name}")
    return new_edges
