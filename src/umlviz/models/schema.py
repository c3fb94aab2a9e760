"""Schema models: entities, fields, type references and diagrams."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

# Last element of a group that switches it to "closure from these seeds"
CLOSURE_MARKER = "!"


class SchemaLoadError(ValueError):
    """Raised when a schema document cannot be read or validated."""
    pass


class EntityKind(str, Enum):
    """Kinds of schema entity."""
    RECORD = "record"
    INTERFACE = "interface"
    ENUM = "enum"


_KIND_ALIASES = {"type": EntityKind.RECORD}


class TypeRef(BaseModel):
    """Reference to a primitive or entity type, with arity and optionality."""
    type_id: str = Field(alias="typeId")
    arity: tuple[int, int | str] = (1, 1)  # [min, max]; max may be "n"
    required: bool = True

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Parameter(TypeRef):
    """Named method argument."""
    id: str


class EntityField(BaseModel):
    """Attribute or method declared on a record or interface."""
    id: str
    return_type: TypeRef = Field(alias="return")
    is_method: bool = Field(alias="isMethod", default=False)
    params: list[Parameter] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def params_imply_method(cls, data):
        """A field that declares params is a method, with or without ``isMethod``."""
        if isinstance(data, dict) and data.get("params"):
            data = {k: v for k, v in data.items() if k not in ("isMethod", "is_method")}
            data["isMethod"] = True
        return data


class Entity(BaseModel):
    """A record, interface or enum definition. Identity is ``id``."""
    id: str
    kind: Annotated[EntityKind | str, Field(union_mode="left_to_right")]
    fields: list[EntityField] = Field(default_factory=list)
    values: list[str] = Field(default_factory=list)
    parents: list[TypeRef] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        """Accept ``type`` for records; unknown kinds are kept as plain strings."""
        if isinstance(v, str) and v.lower() in _KIND_ALIASES:
            return _KIND_ALIASES[v.lower()]
        return v

    def __hash__(self) -> int:
        return hash(self.id)


class Diagram(BaseModel):
    """Named collection of entity groups rendered into one artifact."""
    name: str
    groups: list[list[str]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def group_members(self) -> set[str]:
        """Flattened set of entity ids named by any group, without markers."""
        return {
            entity_id
            for group in self.groups
            for entity_id in group
            if entity_id != CLOSURE_MARKER
        }


def is_closure_group(group: list[str]) -> bool:
    """Whether the group asks for the closure from its seed ids."""
    return bool(group) and group[-1] == CLOSURE_MARKER


def group_ids(group: list[str]) -> list[str]:
    """Entity ids of a group: the seeds of a closure group or the explicit list."""
    return list(group[:-1]) if is_closure_group(group) else list(group)


class SchemaGraph(BaseModel):
    """Entities keyed by id and diagrams keyed by name.

    Both sections accept either a mapping or a list on input; list items are
    keyed by their ``id`` (entities) or ``name`` (diagrams).
    """
    entities: dict[str, Entity] = Field(default_factory=dict)
    diagrams: dict[str, Diagram] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("entities", mode="before")
    @classmethod
    def key_entities(cls, v):
        if isinstance(v, list):
            return {_item_key(item, "id"): item for item in v}
        return v

    @field_validator("diagrams", mode="before")
    @classmethod
    def key_diagrams(cls, v):
        if isinstance(v, list):
            return {_item_key(item, "name"): item for item in v}
        if isinstance(v, dict):
            # Allow {"name": {"groups": [...]}} without repeating the name
            return {
                name: ({"name": name, **item} if isinstance(item, dict) and "name" not in item else item)
                for name, item in v.items()
            }
        return v

    def get(self, entity_id: str) -> Entity | None:
        """Entity by id, or None when the id is not defined."""
        return self.entities.get(entity_id)


def _item_key(item: Any, key: str) -> str:
    if isinstance(item, BaseModel):
        return getattr(item, key)
    if isinstance(item, dict) and key in item:
        return item[key]
    raise ValueError(f"list item has no '{key}': {item!r}")


def load_schema(path: str | Path) -> SchemaGraph:
    """Load a schema graph from a JSON document.

    Args:
        path: JSON file with ``entities`` and ``diagrams`` sections

    Returns:
        SchemaGraph: Validated, read-only schema graph

    Raises:
        SchemaLoadError: If the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise SchemaLoadError(f"Schema file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e}") from e

    try:
        graph = SchemaGraph.model_validate(document)
    except ValidationError as e:
        raise SchemaLoadError(f"Invalid schema in {path}: {e}") from e

    logger.debug(f"Loaded {len(graph.entities)} entities and {len(graph.diagrams)} diagrams from {path}")
    return graph
