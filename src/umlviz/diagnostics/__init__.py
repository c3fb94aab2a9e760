"""Diagnostics collection for umlviz runs.

Provides the warning channel for tolerated input problems and the error
record for renderer failures.
"""

from .collector import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticCollector,
    DiagnosticSeverity,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticCollector",
    "DiagnosticSeverity",
]
