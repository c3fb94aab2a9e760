"""Transitive closure of entity references."""

import logging
from collections.abc import Iterable

from ..diagnostics import DiagnosticCode, DiagnosticCollector
from ..models.schema import Entity, SchemaGraph
from ..utils.primitives import is_user_defined

logger = logging.getLogger(__name__)


def referenced_types(entity: Entity) -> list[str]:
    """Non-primitive type ids referenced by an entity, without duplicates.

    Covers field and method return types, method parameter types and
    parents, in that order.
    """
    type_ids = []
    for field in entity.fields:
        type_ids.append(field.return_type.type_id)
        type_ids.extend(param.type_id for param in field.params)
    type_ids.extend(parent.type_id for parent in entity.parents)

    return list(dict.fromkeys(t for t in type_ids if is_user_defined(t)))


def closure(
    seed_ids: Iterable[str],
    graph: SchemaGraph,
    diagnostics: DiagnosticCollector | None = None,
) -> set[str]:
    """Ids of every entity reachable from seed_ids, seeds included.

    Ids that are not defined in the graph contribute nothing and are not
    part of the result.

    Args:
        seed_ids: Entity ids to start from
        graph: Schema graph to traverse
        diagnostics: Optional collector for dangling references

    Returns:
        Set of reachable entity ids
    """
    visited: set[str] = set()
    stack = []

    for seed in seed_ids:
        if graph.get(seed) is None:
            if diagnostics is not None:
                diagnostics.warn(
                    DiagnosticCode.MISSING_ENTITY,
                    f"closure seed '{seed}' is not defined",
                    entity_id=seed,
                )
            continue
        stack.append(seed)

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)

        for type_id in referenced_types(graph.entities[current]):
            if type_id in visited:
                continue
            if graph.get(type_id) is None:
                if diagnostics is not None:
                    diagnostics.warn(
                        DiagnosticCode.UNKNOWN_TYPE,
                        f"reference to undefined type '{type_id}'",
                        entity_id=current,
                    )
                continue
            stack.append(type_id)

    logger.debug(f"Closure of {len(visited)} entities")
    return visited
