"""Diagram generation framework: groups to subgraphs to rendered artifacts."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from slugify import slugify

from ..config import UmlvizConfig
from ..diagnostics import DiagnosticCode, DiagnosticCollector
from ..models.schema import Diagram, EntityKind, SchemaGraph
from .backend import RenderBackend, RenderError
from .edges import collect_edges
from .models import EdgeSpec, RenderContext, SubgraphSpec
from .selection import resolve_group, select_subset

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for diagram description formats."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass

    @abstractmethod
    def render_subgraph(self, subgraph: SubgraphSpec, edges: list[EdgeSpec]) -> str:
        """Render one group's nodes and edges."""
        pass

    @abstractmethod
    def render_document(self, bodies: list[str]) -> str:
        """Wrap rendered subgraphs into a complete description."""
        pass


@dataclass
class RenderReport:
    """Outcome of rendering a batch of diagram descriptions."""
    rendered: dict[str, Path] = field(default_factory=dict)
    sources: dict[str, Path] = field(default_factory=dict)
    failed: dict[str, RenderError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class DiagramGenerator:
    """Builds one description per diagram plus an overview of all entities."""

    def __init__(
        self,
        config: UmlvizConfig,
        renderer: GraphRenderer,
        backend: RenderBackend | None = None,
        diagnostics: DiagnosticCollector | None = None,
    ):
        self.config = config
        self.renderer = renderer
        self.backend = backend
        self.diagnostics = diagnostics or DiagnosticCollector()

    @property
    def all_name(self) -> str:
        return self.config.output.all_name

    def generate(
        self,
        graph: SchemaGraph,
        diagram_names: list[str] | None = None,
        include_all: bool = True,
    ) -> dict[str, str]:
        """Generate descriptions keyed by diagram name.

        Args:
            graph: Schema graph to draw
            diagram_names: Diagrams to generate (default: all, in declaration order)
            include_all: Also generate the overview of every entity

        Returns:
            Mapping of diagram name to description; the overview comes last
        """
        if diagram_names is None:
            diagram_names = list(graph.diagrams)

        unknown = [name for name in diagram_names if name not in graph.diagrams]
        if unknown:
            available = list(graph.diagrams)
            raise ValueError(f"Unknown diagram(s) {unknown}. Available: {available}")

        descriptions = {}
        for name in diagram_names:
            descriptions[name] = self.generate_diagram(graph, graph.diagrams[name])

        if include_all:
            if self.all_name in descriptions:
                logger.warning(f"Diagram '{self.all_name}' is replaced by the overview of all entities")
            descriptions[self.all_name] = self.generate_all(graph)

        logger.info(f"Generated {len(descriptions)} diagram descriptions")
        return descriptions

    def generate_diagram(self, graph: SchemaGraph, diagram: Diagram) -> str:
        """Description of one diagram: one subgraph per non-empty group."""
        context = RenderContext(diagram.name)
        bodies = []

        for index, group in enumerate(diagram.groups):
            required = resolve_group(group, graph, self.diagnostics)
            subgraph = select_subset(required, graph, diagram, self.diagnostics)

            if not subgraph.nodes:
                self.diagnostics.warn(
                    DiagnosticCode.EMPTY_GROUP,
                    f"group {index} selects no entities",
                    diagram=diagram.name,
                )
                continue

            self._check_kinds(subgraph, diagram.name)
            edges = collect_edges(subgraph, context)
            bodies.append(self.renderer.render_subgraph(subgraph, edges))

        logger.debug(
            f"Diagram {diagram.name}: {len(bodies)} subgraphs, {len(context.seen)} edges"
        )
        return self.renderer.render_document(bodies)

    def generate_all(self, graph: SchemaGraph) -> str:
        """Description of every entity in the graph, regardless of diagrams."""
        context = RenderContext(self.all_name)
        subgraph = SubgraphSpec(nodes=dict(graph.entities))

        if not subgraph.nodes:
            return self.renderer.render_document([])

        self._check_kinds(subgraph, self.all_name)
        edges = collect_edges(subgraph, context)
        return self.renderer.render_document([self.renderer.render_subgraph(subgraph, edges)])

    def output_paths(
        self,
        names: Iterable[str],
        output_dir: Path | None = None,
        extension: str | None = None,
    ) -> dict[str, Path]:
        """One distinct artifact path per diagram name inside the output directory.

        A name whose file name is already taken by an earlier name (compared
        case-insensitively) gets a numeric suffix, and the rename is reported
        as a warning.
        """
        directory = Path(output_dir) if output_dir else Path(self.config.output.dir)
        suffix = extension or self.config.output.extension

        paths = {}
        taken = set()
        for name in names:
            stem = slugify(name, lowercase=False) or "diagram"
            candidate, counter = stem, 2
            while candidate.lower() in taken:
                candidate = f"{stem}-{counter}"
                counter += 1
            if candidate != stem:
                self.diagnostics.warn(
                    DiagnosticCode.OUTPUT_COLLISION,
                    f"file name '{stem}' is already used by another diagram, writing '{candidate}'",
                    diagram=name,
                )
            taken.add(candidate.lower())
            paths[name] = directory / f"{candidate}{suffix}"
        return paths

    def write_sources(self, descriptions: dict[str, str], targets: dict[str, Path]) -> dict[str, Path]:
        """Write each description as text to its target path."""
        written = {}
        for name, description in descriptions.items():
            target = targets[name]
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8") as f:
                f.write(description)
            written[name] = target
        return written

    def render_diagrams(self, descriptions: dict[str, str], output_dir: Path | None = None) -> RenderReport:
        """Render each description through the backend, one at a time.

        A failing diagram is recorded in the report and diagnostics; the
        remaining diagrams are still rendered.
        """
        report = RenderReport()
        targets = self.output_paths(descriptions, output_dir)

        if self.config.output.write_source:
            source_extension = self.renderer.get_file_extension()
            report.sources = self.write_sources(
                descriptions,
                {name: target.with_suffix(source_extension) for name, target in targets.items()},
            )

        if self.backend is None or not self.config.renderer.enabled:
            logger.info("Rendering disabled, skipping image generation")
            return report

        for name, description in descriptions.items():
            target = targets[name]
            logger.info(f"Saving {target}")
            try:
                self.backend.render(description, target)
            except RenderError as e:
                report.failed[name] = e
                self.diagnostics.error(
                    DiagnosticCode.RENDER_FAILED,
                    e,
                    diagram=name,
                    output_path=str(target),
                    returncode=e.returncode,
                )
                continue
            report.rendered[name] = target

        return report

    def _check_kinds(self, subgraph: SubgraphSpec, diagram_name: str) -> None:
        for entity in subgraph.nodes.values():
            if not isinstance(entity.kind, EntityKind):
                self.diagnostics.warn(
                    DiagnosticCode.UNKNOWN_KIND,
                    f"unknown entity kind '{entity.kind}'",
                    diagram=diagram_name,
                    entity_id=entity.id,
                )
