"""Record-shape compartment labels for entities.

Output is written for Graphviz ``shape = "record"`` nodes: compartments are
separated by ``|`` and each line ends with the left-justify escape ``\\l``.
"""

import logging

from ..models.schema import Entity, EntityField, EntityKind, TypeRef

logger = logging.getLogger(__name__)

LEFT_JUSTIFY = "\\l"
INTERFACE_STEREOTYPE = "\\<\\<interface\\>\\>"
ENUM_STEREOTYPE = "\\<\\<enum\\>\\>"


def arity_label(arity: tuple) -> str:
    """Empty for a fixed count, otherwise ``[min..max]``."""
    low, high = arity
    if low == high:
        return ""
    return f"[{low}..{high}]"


def required_label(type_ref: TypeRef) -> str:
    return "" if type_ref.required else "?"


def type_label(type_ref: TypeRef) -> str:
    """Type name followed by its arity and optional marker."""
    return f"{type_ref.type_id}{arity_label(type_ref.arity)}{required_label(type_ref)}"


def attribute_label(field: EntityField) -> str:
    return f"{field.id}: {type_label(field.return_type)}{LEFT_JUSTIFY}"


def method_args_label(field: EntityField) -> str:
    return ", ".join(f"{param.id}: {type_label(param)}" for param in field.params)


def method_label(field: EntityField) -> str:
    return f"{field.id}({method_args_label(field)}): {type_label(field.return_type)}{LEFT_JUSTIFY}"


def fields_label(fields: list[EntityField]) -> str:
    """Attributes and methods in declaration order."""
    return "".join(
        method_label(field) if field.is_method else attribute_label(field)
        for field in fields
    )


def values_label(values: list[str]) -> str:
    return "".join(f"{value}{LEFT_JUSTIFY}" for value in values)


def node_label(entity: Entity) -> str:
    """Compartment string for an entity, chosen by its kind.

    Unknown kinds produce an empty label.
    """
    if entity.kind == EntityKind.RECORD:
        return f"{entity.id}|{fields_label(entity.fields)}"
    elif entity.kind == EntityKind.INTERFACE:
        return f"{INTERFACE_STEREOTYPE}{entity.id}|{fields_label(entity.fields)}"
    elif entity.kind == EntityKind.ENUM:
        return f"{ENUM_STEREOTYPE}{entity.id}|{values_label(entity.values)}"

    logger.debug(f"Unknown kind '{entity.kind}' for entity {entity.id}, rendering empty label")
    return ""
