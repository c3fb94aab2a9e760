"""Unit tests for the umlviz CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from conftest import edge_lines
from umlviz import __version__
from umlviz.cli import app
from umlviz.graph import GraphvizBackend, RenderError

runner = CliRunner()


class TestRenderCommand:
    """Test the render command."""

    def test_source_only_writes_dot_files(self, schema_file: Path, tmp_path: Path):
        """Test --source-only writes one .dot per diagram plus the overview."""
        out = tmp_path / "out"
        result = runner.invoke(app, ["render", str(schema_file), "--out", str(out), "--source-only"])

        assert result.exit_code == 0, result.output
        for name in ["closure", "explicit", "empty", "all"]:
            assert (out / f"{name}.dot").exists()
        assert not list(out.glob("*.png"))

        closure_text = (out / "closure.dot").read_text(encoding="utf-8")
        assert edge_lines(closure_text) == ["A -> B", "B -> C", "B -> D"]

    def test_selected_diagram_without_overview(self, schema_file: Path, tmp_path: Path):
        """Test --diagram and --no-all limit the outputs."""
        out = tmp_path / "out"
        result = runner.invoke(app, [
            "render", str(schema_file), "-o", str(out), "--source-only",
            "--diagram", "explicit", "--no-all",
        ])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.glob("*.dot")) == ["explicit.dot"]

    def test_renders_through_backend(self, schema_file: Path, tmp_path: Path, monkeypatch):
        """Test images are requested for every diagram with the chosen format."""
        rendered = []
        monkeypatch.setattr(GraphvizBackend, "render", lambda self, text, path: rendered.append(path))
        out = tmp_path / "out"

        result = runner.invoke(app, ["render", str(schema_file), "-o", str(out), "-f", "svg"])

        assert result.exit_code == 0, result.output
        assert [p.name for p in rendered] == ["closure.svg", "explicit.svg", "empty.svg", "all.svg"]

    def test_render_failure_exits_nonzero(self, schema_file: Path, tmp_path: Path, monkeypatch):
        """Test a renderer failure is reported after the other diagrams render."""
        rendered = []

        def fake_render(self, text, path):
            if path.stem == "explicit":
                raise RenderError("Renderer exited with status 1", path, returncode=1, output="syntax error")
            rendered.append(path.stem)

        monkeypatch.setattr(GraphvizBackend, "render", fake_render)

        result = runner.invoke(app, ["render", str(schema_file), "-o", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert rendered == ["closure", "empty", "all"]
        assert "syntax error" in result.stdout
        assert (tmp_path / "out" / "diagnostics.json").exists()

    def test_invalid_format(self, schema_file: Path, tmp_path: Path):
        """Test an unsupported image format is rejected."""
        result = runner.invoke(app, ["render", str(schema_file), "-o", str(tmp_path), "-f", "bmp"])

        assert result.exit_code == 1
        assert "Invalid format 'bmp'" in result.stdout

    def test_unknown_diagram(self, schema_file: Path, tmp_path: Path):
        """Test asking for an undefined diagram fails."""
        result = runner.invoke(app, ["render", str(schema_file), "-o", str(tmp_path), "-d", "nope", "--source-only"])

        assert result.exit_code == 1
        assert "Unknown diagram" in result.stdout

    def test_missing_schema(self, tmp_path: Path):
        """Test a missing schema file fails cleanly."""
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Schema file not found" in result.stdout


class TestShowCommand:
    """Test the show command."""

    def test_show_overview(self, schema_file: Path):
        """Test the overview is printed verbatim, brackets included."""
        result = runner.invoke(app, ["show", str(schema_file)])

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("digraph G {")
        assert '  A [label = "{A|b: B\\l}"]' in result.stdout
        assert result.stdout.rstrip().endswith("}")

    def test_show_diagram(self, schema_file: Path):
        """Test a named diagram is printed."""
        result = runner.invoke(app, ["show", str(schema_file), "--diagram", "closure"])

        assert result.exit_code == 0, result.output
        assert 'edge [arrowhead = "empty"]' in result.stdout
        assert edge_lines(result.stdout) == ["A -> B", "B -> C", "B -> D"]

    def test_show_unknown_diagram(self, schema_file: Path):
        """Test an undefined diagram name fails."""
        result = runner.invoke(app, ["show", str(schema_file), "-d", "nope"])
        assert result.exit_code == 1
        assert "Unknown diagram 'nope'" in result.stdout


class TestOtherCommands:
    """Test closure, entities and version."""

    def test_closure(self, schema_file: Path):
        """Test reachable ids are printed one per line, sorted."""
        result = runner.invoke(app, ["closure", str(schema_file), "B"])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[:3] == ["B", "C", "D"]

    def test_closure_missing_seed(self, schema_file: Path):
        """Test undefined seeds are mentioned without failing."""
        result = runner.invoke(app, ["closure", str(schema_file), "C", "Ghost"])

        assert result.exit_code == 0
        assert "Not defined: Ghost" in result.stdout

    def test_entities(self, schema_file: Path):
        """Test the entity table lists every entity."""
        result = runner.invoke(app, ["entities", str(schema_file)])

        assert result.exit_code == 0, result.output
        assert "Entities (4)" in result.stdout
        assert "record" in result.stdout

    def test_entities_kinds(self, tmp_path: Path):
        """Test enum values are counted and unknown kinds are shown by name."""
        schema = tmp_path / "kinds.json"
        schema.write_text(json.dumps({"entities": [
            {"id": "Color", "kind": "enum", "values": ["RED", "GREEN"]},
            {"id": "W", "kind": "widget"},
        ]}), encoding="utf-8")

        result = runner.invoke(app, ["entities", str(schema)])

        assert result.exit_code == 0, result.output
        assert "enum" in result.stdout
        assert "widget" in result.stdout

    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
