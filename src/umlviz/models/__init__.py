"""Schema data models for umlviz."""

from .schema import (
    CLOSURE_MARKER,
    Diagram,
    Entity,
    EntityField,
    EntityKind,
    Parameter,
    SchemaGraph,
    SchemaLoadError,
    TypeRef,
    group_ids,
    is_closure_group,
    load_schema,
)

__all__ = [
    "CLOSURE_MARKER",
    "Diagram",
    "Entity",
    "EntityField",
    "EntityKind",
    "Parameter",
    "SchemaGraph",
    "SchemaLoadError",
    "TypeRef",
    "group_ids",
    "is_closure_group",
    "load_schema",
]
