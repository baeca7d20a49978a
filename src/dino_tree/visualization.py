"""
Visualization export utilities for org charts.

This module provides functions to export a built DinoTree in formats that
external tools can render:
- GraphViz (DOT format) for tools like Graphviz, Gephi, yEd
- JSON, either nested (one tree per root) or node-link (D3.js, Cytoscape.js)
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .models import DinoNode

if TYPE_CHECKING:
    from .queries import DinoTree

logger = logging.getLogger(__name__)


class VisualizationError(Exception):
    """Raised when visualization export fails."""

    pass


def export_graphviz(
    tree: "DinoTree",
    output_path: Path | str | None = None,
    include_titles: bool = True,
) -> str:
    """
    Export the chart as GraphViz DOT format.

    Args:
        tree: DinoTree instance to export
        output_path: Optional path to write DOT file. If None, returns string.
        include_titles: Add the business title under each name

    Returns:
        DOT format string

    Raises:
        VisualizationError: If export fails
    """
    try:
        lines: list[str] = []
        lines.append("digraph {")
        lines.append("    rankdir=TB;")
        lines.append("    node [shape=box, style=filled, fillcolor=lightblue];")

        nodes = tree.flat_tree.nodes
        for node in nodes:
            label = _format_node_label(node, include_titles)
            color = "lightyellow" if node.is_root else "lightblue"
            lines.append(f'    "{node.dino.user_id}" [label="{label}", fillcolor="{color}"];')

        for node in nodes:
            for child in node.children_range:
                lines.append(f'    "{node.dino.user_id}" -> "{nodes[child].dino.user_id}";')

        lines.append("}")

        dot_content = "\n".join(lines)

        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dot_content)
            logger.info(f"Exported GraphViz format to {output_path}")

        return dot_content

    except Exception as e:
        logger.error(f"Failed to export GraphViz: {e}", exc_info=True)
        raise VisualizationError(f"GraphViz export failed: {e}") from e


def export_json(
    tree: "DinoTree",
    output_path: Path | str | None = None,
    format_type: str = "nested",
) -> list[dict[str, Any]] | dict[str, Any] | str:
    """
    Export the chart as JSON.

    Args:
        tree: DinoTree instance to export
        output_path: Optional path to write JSON file. If None, returns the structure.
        format_type: "nested" (full_orgchart output) or "node-link"

    Returns:
        The exported structure, or the JSON string if output_path provided

    Raises:
        VisualizationError: If export fails
    """
    try:
        if format_type == "nested":
            data = tree.full_orgchart()
        elif format_type == "node-link":
            data = _export_json_node_link(tree)
        else:
            raise ValueError(f"Unknown format: {format_type}. Use 'nested' or 'node-link'.")

        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            json_content = json.dumps(data, indent=2, default=str)
            path.write_text(json_content)
            logger.info(f"Exported JSON format to {output_path}")
            return json_content

        return data

    except Exception as e:
        logger.error(f"Failed to export JSON: {e}", exc_info=True)
        raise VisualizationError(f"JSON export failed: {e}") from e


def _export_json_node_link(tree: "DinoTree") -> dict[str, Any]:
    """
    Export the chart as node-link JSON.

    Nodes keep their arena index so links can be followed without lookups.
    """
    nodes = tree.flat_tree.nodes
    nodes_list: list[dict[str, Any]] = []
    links_list: list[dict[str, Any]] = []

    for index, node in enumerate(nodes):
        nodes_list.append(
            {
                "id": node.dino.user_id,
                "index": index,
                "parent": node.parent,
                "data": node.dino.data.to_dict(),
            }
        )
        for child in node.children_range:
            links_list.append({"source": node.dino.user_id, "target": nodes[child].dino.user_id})

    return {
        "nodes": nodes_list,
        "links": links_list,
        "tree_info": {
            "node_count": tree.node_count,
            "root_count": tree.root_count,
            "timestamp": datetime.now().isoformat(),
        },
    }


def _format_node_label(node: DinoNode, include_titles: bool) -> str:
    """Format node label for DOT output."""
    data = node.dino.data
    label = _escape(data.display_name or data.user_id)
    if include_titles and data.title:
        label += f"\\n{_escape(data.title)}"
    return label


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
