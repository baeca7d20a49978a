"""
Tests for org chart visualization exports.
"""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from dino_tree import DinoTree, VisualizationError, export_graphviz, export_json


@pytest.fixture
def wide(wide_roster) -> DinoTree:
    return DinoTree(wide_roster)


class TestGraphVizExport:
    """Tests for GraphViz DOT format export."""

    def test_empty_tree(self) -> None:
        """Test exporting an empty chart."""
        dot = export_graphviz(DinoTree([]))

        assert dot.startswith("digraph {")
        assert dot.endswith("}")
        assert "->" not in dot

    def test_nodes_and_edges(self, wide) -> None:
        """Test that every placed record and reporting line appears."""
        dot = export_graphviz(wide)

        assert '"u1" [label="Alice Adams\\nCEO", fillcolor="lightyellow"];' in dot
        assert '"u6" [label="Dave Doe", fillcolor="lightblue"];' in dot
        assert '"u1" -> "u5";' in dot
        assert '"u4" -> "u6";' in dot
        assert '"u2" -> "u7";' in dot
        assert dot.count("->") == 5
        assert '"u8"' not in dot

    def test_without_titles(self, wide) -> None:
        """Test omitting titles from labels."""
        assert "CEO" not in export_graphviz(wide, include_titles=False)

    def test_quotes_escaped(self, make_dino) -> None:
        """Test that quotes in names do not break DOT syntax."""
        dot = export_graphviz(DinoTree([make_dino("u1", "e1", None, 'Al "Big"')]))
        assert 'label="Al \\"Big\\""' in dot

    def test_write_file(self, wide) -> None:
        """Test writing DOT output to a file."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "charts" / "org.dot"
            dot = export_graphviz(wide, output_path=path)

            assert path.read_text() == dot


class TestJsonExport:
    """Tests for JSON export."""

    def test_nested(self, wide) -> None:
        """Test that nested export is the full chart."""
        assert export_json(wide) == wide.full_orgchart()

    def test_node_link(self, wide) -> None:
        """Test node-link structure."""
        data = export_json(wide, format_type="node-link")

        assert [n["id"] for n in data["nodes"]] == ["u1", "u2", "u5", "u3", "u4", "u7", "u6"]
        assert data["nodes"][6]["parent"] == 4
        assert {"source": "u4", "target": "u6"} in data["links"]
        assert len(data["links"]) == 5
        assert data["tree_info"]["node_count"] == 7
        assert data["tree_info"]["root_count"] == 2

    def test_write_file(self, wide) -> None:
        """Test that writing returns the JSON text."""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "org.json"
            content = export_json(wide, output_path=path)

            assert isinstance(content, str)
            assert json.loads(path.read_text()) == wide.full_orgchart()

    def test_unknown_format(self, wide) -> None:
        """Test that an unknown format is wrapped in VisualizationError."""
        with pytest.raises(VisualizationError, match="Unknown format"):
            export_json(wide, format_type="xml")
