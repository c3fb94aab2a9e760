"""Tests for DOT text emission."""

from pathlib import Path

from umlviz.config import TemplateConfig, UmlvizConfig
from umlviz.graph.dot import DotRenderer, load_template, quote_id
from umlviz.graph.models import EdgeSpec, EdgeStyle
from umlviz.graph.selection import select_subset
from umlviz.models import Entity, SchemaGraph


class TestDotRenderer:
    """Test DotRenderer output."""

    def test_subgraph_block(self, graph, renderer):
        """Test subgraph is named after its first entity and lists record nodes."""
        subgraph = select_subset(["A", "C"], graph)
        text = renderer.render_subgraph(subgraph, [])

        assert text == (
            "subgraph A {\n"
            '  label = "A"\n'
            '  A [label = "{A|b: B\\l}"]\n'
            '  C [label = "{C|}"]\n'
            "}\n"
        )

    def test_edges_follow_block(self, graph, renderer):
        """Test edges are appended after the subgraph block."""
        subgraph = select_subset(["A", "B"], graph)
        text = renderer.render_subgraph(subgraph, [EdgeSpec("A", "B", EdgeStyle.ASSOCIATION)])
        assert text.endswith("}\nA -> B\n")

    def test_association_edge(self, renderer):
        """Test plain edges use the default arrow."""
        assert renderer.render_edge(EdgeSpec("A", "B", EdgeStyle.ASSOCIATION)) == "A -> B\n"

    def test_parameter_edge_dotted(self, renderer):
        """Test parameter-use edges are dotted."""
        assert renderer.render_edge(EdgeSpec("A", "B", EdgeStyle.PARAMETER_USE)) == "A -> B [style=dotted]\n"

    def test_inheritance_edge_toggles_arrowhead(self, renderer):
        """Test inheritance switches to an empty arrowhead and restores it."""
        assert renderer.render_edge(EdgeSpec("B", "D", EdgeStyle.INHERITANCE)) == (
            'edge [arrowhead = "empty"]\nB -> D\nedge [arrowhead = "open"]\n'
        )

    def test_document_wraps_bodies(self, renderer):
        """Test header and footer surround the concatenated bodies."""
        assert renderer.render_document(["x\n", "y\n"]) == "digraph G {\nx\ny\n}\n"
        assert renderer.render_document([]) == "digraph G {\n}\n"


class TestQuoteId:
    """Test DOT identifiers for entity ids."""

    def test_plain_names_stay_bare(self):
        """Test ordinary names are written as-is."""
        assert quote_id("Person") == "Person"
        assert quote_id("order_line2") == "order_line2"

    def test_keywords_quoted_case_insensitively(self):
        """Test names that are DOT keywords in any case are quoted."""
        for name in ("Node", "Edge", "Graph", "Subgraph", "digraph", "STRICT"):
            assert quote_id(name) == f'"{name}"'

    def test_non_identifier_characters_quoted(self):
        """Test hyphens, spaces, leading digits and quotes force quoting."""
        assert quote_id("my-type") == '"my-type"'
        assert quote_id("Order Line") == '"Order Line"'
        assert quote_id("2fa") == '"2fa"'
        assert quote_id('say"hi') == '"say\\"hi"'

    def test_keyword_entity_in_nodes_and_edges(self, renderer):
        """Test an entity named Node is quoted in its subgraph, node and edges."""
        graph = SchemaGraph.model_validate({"entities": [
            {"id": "Node", "kind": "record", "fields": [{"id": "next", "return": {"typeId": "Edge"}}]},
            {"id": "Edge", "kind": "record"},
        ]})
        subgraph = select_subset(["Node", "Edge"], graph)

        text = renderer.render_subgraph(subgraph, [EdgeSpec("Node", "Edge", EdgeStyle.ASSOCIATION)])

        assert text == (
            'subgraph "Node" {\n'
            '  label = "Node"\n'
            '  "Node" [label = "{Node|next: Edge\\l}"]\n'
            '  "Edge" [label = "{Edge|}"]\n'
            "}\n"
            '"Node" -> "Edge"\n'
        )

    def test_quoted_inheritance_edge(self, renderer):
        """Test quoting applies inside the arrowhead toggle."""
        assert renderer.render_edge(EdgeSpec("my-type", "Base", EdgeStyle.INHERITANCE)) == (
            'edge [arrowhead = "empty"]\n"my-type" -> Base\nedge [arrowhead = "open"]\n'
        )

    def test_label_text_unchanged(self, renderer):
        """Test the record label keeps the raw id."""
        entity = Entity(id="Graph", kind="enum", values=["A"])
        assert renderer.render_node(entity) == '  "Graph" [label = "{\\<\\<enum\\>\\>Graph|A\\l}"]'


class TestTemplates:
    """Test packaged and overridden templates."""

    def test_packaged_templates(self):
        """Test default header opens a digraph with record nodes and footer closes it."""
        header = load_template("header")
        assert header.startswith("digraph G {")
        assert 'shape = "record"' in header
        assert 'arrowhead = "open"' in header
        assert load_template("footer").strip() == "}"

    def test_config_override(self, tmp_path: Path):
        """Test template paths from configuration are used."""
        header = tmp_path / "h.dot"
        header.write_text("digraph Custom {\n", encoding="utf-8")
        config = UmlvizConfig(templates=TemplateConfig(header=str(header)))

        renderer = DotRenderer.from_config(config)

        assert renderer.header == "digraph Custom {\n"
        assert renderer.footer.strip() == "}"
        assert renderer.format_name == "dot"
        assert renderer.get_file_extension() == ".dot"
