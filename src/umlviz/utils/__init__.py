"""Utility helpers for umlviz."""

from .primitives import PRIMITIVE_TYPES, is_primitive, is_user_defined

__all__ = ["PRIMITIVE_TYPES", "is_primitive", "is_user_defined"]
