"""Markdown context file describing the project's dependency structure for AI assistants."""

import logging
from pathlib import Path

from ..graph import DependencyGraph

logger = logging.getLogger(__name__)

HIGH_IMPACT_THRESHOLD = 5.0
SHARED_UTILITY_THRESHOLD = 2.0
WARNING_PREVIEW_SIZE = 5


def describe_file(file_path: str, blast_radius: float) -> str:
    """Short description of a file's kind and importance.

    Args:
        file_path: Path of the file
        blast_radius: Its blast radius percentage

    Returns:
        e.g. "TypeScript Module (High Impact Core Utility)"
    """
    if file_path.endswith(".py"):
        description = "Python Script"
    elif file_path.endswith(".ts"):
        description = "TypeScript Module"
    else:
        description = "Module"

    if blast_radius > HIGH_IMPACT_THRESHOLD:
        description += " (High Impact Core Utility)"
    elif blast_radius > SHARED_UTILITY_THRESHOLD:
        description += " (Shared Utility)"
    return description


def render_ai_context(graph: DependencyGraph) -> str:
    """Render the dependency and impact overview as Markdown.

    Files are listed by blast radius, highest first, ties by path.

    Args:
        graph: Built dependency graph

    Returns:
        Markdown document
    """
    nodes = graph.get_top_blast_radius(len(graph))
    high_impact = sum(1 for node in nodes if node.blast_radius > HIGH_IMPACT_THRESHOLD)

    lines = [
        "# Project Codebase Context for AI Assistants",
        "",
        "> This file is auto-generated to provide context about the project structure, "
        "dependencies, and impact analysis.",
        "",
        "## System Overview",
        "",
        f"- **Total Files**: {len(nodes)}",
        f"- **High Impact Files**: {high_impact}",
        "",
        "## File Dependency & Impact Analysis",
        "",
    ]

    for node in nodes:
        imports = graph.get_dependencies(node.id)
        imported_by = graph.get_dependents(node.id)

        lines.append(f"### `{node.id}`")
        lines.append(f"- **Type**: {describe_file(node.id, node.blast_radius)}")
        lines.append(f"- **Blast Radius**: {node.blast_radius:.2f}% of codebase affected")

        if imports:
            lines.append(f"- **Imports**: `{'`, `'.join(imports)}`")

        if imported_by:
            preview = ", ".join(imported_by[:WARNING_PREVIEW_SIZE])
            more = "..." if len(imported_by) > WARNING_PREVIEW_SIZE else ""
            lines.append(f"- **Used By**: `{'`, `'.join(imported_by)}`")
            lines.append(f"  > **Impact Warning**: Modifying this file will affect imports in: {preview}{more}")
        else:
            lines.append("- **Usage**: Leaf node (Entry point or unused).")

        lines.extend(["", "---", ""])

    return "\n".join(lines)


def write_ai_context(graph: DependencyGraph, output_path: Path | str) -> Path:
    """Render and save the AI context Markdown.

    Args:
        graph: Built dependency graph
        output_path: Destination file

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_ai_context(graph), encoding="utf-8")
    logger.info(f"AI context saved to {output_path}")
    return output_path
