"""Classification of type names into built-in primitives and user entities."""

PRIMITIVE_TYPES = ("String", "Float", "Integer", "Boolean", "DateTime", "ID")

_PRIMITIVE_KEYS = frozenset(name.lower() for name in PRIMITIVE_TYPES)


def is_primitive(type_id: str) -> bool:
    """Whether type_id names a built-in primitive (case-insensitive)."""
    return type_id.lower() in _PRIMITIVE_KEYS


def is_user_defined(type_id: str) -> bool:
    """Whether type_id names a schema entity rather than a primitive."""
    return not is_primitive(type_id)
