"""Interactive HTML report that draws the dependency graph with vis-network."""

import logging
import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from ..graph import DependencyGraph
from ..parser import ProjectAnalysis

logger = logging.getLogger(__name__)

# Files ranked this high are drawn as top risks
HIGHLIGHT_LIMIT = 10

TOP_RISK_COLOR = "#ef4444"
DEPENDED_ON_COLOR = "#eab308"
DEFAULT_COLOR = "#3b82f6"

_environment = Environment(
    loader=PackageLoader("projectify", "report/templates"),
    autoescape=select_autoescape(["html"]),
)


def build_graph_payload(graph: DependencyGraph, highlight_limit: int = HIGHLIGHT_LIMIT) -> dict[str, list[dict[str, Any]]]:
    """Convert the graph into vis-network node and edge records.

    Top risks are red and sized by blast radius, other files with dependents
    are yellow, the rest blue. Every import becomes one directed edge.

    Args:
        graph: Built dependency graph
        highlight_limit: Number of top blast radius files drawn as risks

    Returns:
        Dict with "nodes" and "edges" lists, both in path order
    """
    top_ids = {node.id for node in graph.get_top_blast_radius(highlight_limit)}

    nodes: list[dict[str, Any]] = []
    for file_path in sorted(graph.get_nodes()):
        node = graph.get_nodes()[file_path]
        if node.id in top_ids:
            color, size = TOP_RISK_COLOR, 30 + node.blast_radius / 2
        elif node.affected_files > 0:
            color, size = DEPENDED_ON_COLOR, 25
        else:
            color, size = DEFAULT_COLOR, 20

        nodes.append({
            "id": node.id,
            "label": os.path.basename(node.id),
            "title": node.id,
            "value": size,
            "color": color,
            "data": {
                "fullPath": node.id,
                "blastRadius": round(node.blast_radius, 2),
                "affectedFiles": node.affected_files,
                "inDegree": node.in_degree,
                "outDegree": node.out_degree,
            },
        })

    edges = [
        {"from": source, "to": target, "arrows": "to"}
        for source, targets in sorted(graph.get_edges().items())
        for target in sorted(targets)
    ]
    return {"nodes": nodes, "edges": edges}


def render_html_report(
    project_path: Path | str,
    analysis: ProjectAnalysis,
    graph: DependencyGraph,
    highlight_limit: int = HIGHLIGHT_LIMIT,
) -> str:
    """Render the interactive report page.

    Args:
        project_path: Root of the analyzed project
        analysis: Collected file facts
        graph: Built dependency graph
        highlight_limit: Number of top blast radius files listed and highlighted

    Returns:
        Standalone HTML document
    """
    payload = build_graph_payload(graph, highlight_limit)
    top_risks = [
        {"id": node.id, "name": os.path.basename(node.id), "blast_radius": node.blast_radius}
        for node in graph.get_top_blast_radius(highlight_limit)
    ]
    template = _environment.get_template("report.html")
    return template.render(
        project_path=str(project_path),
        file_count=analysis.file_count,
        edge_count=len(payload["edges"]),
        top_risks=top_risks,
        payload=payload,
    )


def write_html_report(
    project_path: Path | str,
    analysis: ProjectAnalysis,
    graph: DependencyGraph,
    output_path: Path | str,
) -> Path:
    """Render and save the interactive report.

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html_report(project_path, analysis, graph), encoding="utf-8")
    logger.info(f"HTML report saved to {output_path}")
    return output_path
