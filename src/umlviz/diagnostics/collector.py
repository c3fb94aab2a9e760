"""Run-scoped collection of diagnostics for umlviz.

Lenient cases (dangling references, unknown kinds, empty groups) never fail
a run; they are recorded here as warnings. Render failures are recorded as
errors so a batch can report them after every diagram has been attempted.
"""

import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticSeverity(str, Enum):
    """Diagnostic severity levels."""
    ERROR = "error"      # Diagram could not be produced
    WARNING = "warning"  # Input was tolerated but looks wrong


class DiagnosticCode(str, Enum):
    """What a diagnostic is about."""
    MISSING_ENTITY = "missing-entity"        # Group or seed id not in the graph
    UNKNOWN_TYPE = "unknown-type"            # Non-primitive reference to an undefined type
    UNKNOWN_KIND = "unknown-kind"            # Entity kind with no label format
    EMPTY_GROUP = "empty-group"              # Group resolved to no entities
    OUTPUT_COLLISION = "output-collision"    # Two diagram names map to one file name
    RENDER_FAILED = "render-failed"          # Renderer reported failure


@dataclass
class Diagnostic:
    """A single diagnostic raised while generating diagrams."""
    code: DiagnosticCode
    severity: DiagnosticSeverity
    message: str
    diagram: str | None = None
    entity_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["code"] = self.code.value
        data["severity"] = self.severity.value
        return data

    def __str__(self) -> str:
        location = ""
        if self.diagram:
            location += f" in {self.diagram}"
        if self.entity_id:
            location += f" at {self.entity_id}"
        return f"[{self.severity.value.upper()}] {self.code.value}: {self.message}{location}"


class DiagnosticCollector:
    """Collects diagnostics during a single generation run."""

    def __init__(self):
        self.run_id = str(uuid.uuid4())[:8]
        self.started_at = datetime.now(UTC)
        self.diagnostics: list[Diagnostic] = []

    def warn(
        self,
        code: DiagnosticCode,
        message: str,
        diagram: str | None = None,
        entity_id: str | None = None,
        **details: Any,
    ) -> Diagnostic:
        """Record a warning and log it."""
        diagnostic = Diagnostic(
            code=code,
            severity=DiagnosticSeverity.WARNING,
            message=message,
            diagram=diagram,
            entity_id=entity_id,
            details=details,
        )
        self.diagnostics.append(diagnostic)
        logger.warning(str(diagnostic))
        return diagnostic

    def error(
        self,
        code: DiagnosticCode,
        error: Exception,
        diagram: str | None = None,
        **details: Any,
    ) -> Diagnostic:
        """Record an error caused by an exception and log it."""
        diagnostic = Diagnostic(
            code=code,
            severity=DiagnosticSeverity.ERROR,
            message=str(error),
            diagram=diagram,
            details={"error_type": type(error).__name__, **details},
        )
        self.diagnostics.append(diagnostic)
        logger.error(str(diagnostic))
        return diagnostic

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR]

    def has_errors(self) -> bool:
        return bool(self.errors)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def to_dict(self) -> dict[str, Any]:
        """Summary of the run for JSON serialization."""
        return {
            "schema_version": "1.0.0",
            "run_id": self.run_id,
            "started_at": self.started_at.isoformat(),
            "total": len(self.diagnostics),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def flush(self, output_dir: Path) -> Path | None:
        """Write diagnostics.json to output_dir when anything was collected.

        Returns:
            Path to the written file, or None if there was nothing to write
        """
        if not self.diagnostics:
            return None

        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / "diagnostics.json"
        with open(target, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Wrote {len(self.diagnostics)} diagnostics to {target}")
        return target
