"""umlviz - Class diagrams for schema definitions.

umlviz turns a parsed schema of records, interfaces and enums into Graphviz
DOT descriptions, one per named diagram plus an overview of every entity,
and hands them to the ``dot`` renderer.
"""

__version__ = "0.1.0"
__author__ = "umlviz contributors"
__description__ = "Class diagrams for schema definitions"

from umlviz.config import UmlvizConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "UmlvizConfig",
]
