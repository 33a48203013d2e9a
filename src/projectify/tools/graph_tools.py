"""MCP tools for dependency graph queries."""

import os
from pathlib import Path
from typing import Any

from fastmcp import Context

from ..graph import (
    DependencyGraph,
    find_import_paths,
    get_file_dependencies,
    get_connected_components,
    get_file_dependents,
    get_file_impact,
    get_top_risks,
)


def resolve_file_id(project_path: Path, file_path: str) -> str:
    """Turn a user-supplied path (absolute or project-relative) into a node id."""
    if os.path.isabs(file_path):
        return os.path.normpath(file_path)
    return os.path.normpath(os.path.join(str(project_path), file_path))


def get_graph(ctx: Context) -> DependencyGraph | None:
    """Get the current graph from the server context (None while analyzing)."""
    return ctx.request_context.lifespan_context.get("graph")


def _not_ready() -> dict[str, Any]:
    return {"error": "Analysis has not completed yet. Check get_index_status."}


def register_graph_tools(mcp) -> None:
    """Register graph tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    def tool_get_top_blast_radius(
        ctx: Context,
        limit: int = 5,
    ) -> dict[str, Any]:
        """Get the files whose change would affect the most of the codebase.

        Args:
            limit: Number of files to return (default: 5)

        Returns:
            Files ranked by blast radius, highest first
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        if limit < 0:
            return {"error": f"limit must be >= 0, got {limit}"}

        risks = get_top_risks(graph, limit)
        return {
            "files": risks,
            "count": len(risks),
            "total_files": len(graph),
        }

    @mcp.tool()
    def tool_get_file_impact(
        ctx: Context,
        file_path: str,
    ) -> dict[str, Any]:
        """Get blast radius, importers and transitive dependents of a file.

        Args:
            file_path: Path of the file, absolute or relative to the project root

        Returns:
            Node metrics with direct and transitive dependents
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        config = ctx.request_context.lifespan_context["config"]
        return get_file_impact(graph, resolve_file_id(config.project_path, file_path))

    @mcp.tool()
    def tool_get_file_dependencies(
        ctx: Context,
        file_path: str,
    ) -> dict[str, Any]:
        """Get the project files a file imports directly.

        Args:
            file_path: Path of the file, absolute or relative to the project root

        Returns:
            List of imported files with their metrics
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        config = ctx.request_context.lifespan_context["config"]
        file_id = resolve_file_id(config.project_path, file_path)
        dependencies = get_file_dependencies(graph, file_id)
        return {
            "file_path": file_id,
            "dependencies": dependencies,
            "count": len(dependencies),
        }

    @mcp.tool()
    def tool_get_file_dependents(
        ctx: Context,
        file_path: str,
    ) -> dict[str, Any]:
        """Get the project files that import a file directly.

        Args:
            file_path: Path of the file, absolute or relative to the project root

        Returns:
            List of importing files with their metrics
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        config = ctx.request_context.lifespan_context["config"]
        file_id = resolve_file_id(config.project_path, file_path)
        dependents = get_file_dependents(graph, file_id)
        return {
            "file_path": file_id,
            "dependents": dependents,
            "count": len(dependents),
        }

    @mcp.tool()
    def tool_find_import_paths(
        ctx: Context,
        source: str,
        target: str,
        max_length: int = 10,
    ) -> dict[str, Any]:
        """Find the import chains through which one file depends on another.

        Args:
            source: File doing the importing (absolute or project-relative)
            target: File being depended on (absolute or project-relative)
            max_length: Maximum chain length (default: 10)

        Returns:
            List of import chains
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        config = ctx.request_context.lifespan_context["config"]
        paths = find_import_paths(
            graph,
            resolve_file_id(config.project_path, source),
            resolve_file_id(config.project_path, target),
            max_length,
        )
        return {
            "paths": paths,
            "count": len(paths),
        }

    @mcp.tool()
    def tool_get_connected_components(ctx: Context) -> dict[str, Any]:
        """Get groups of files linked by imports, largest group first.

        Returns:
            Components as sorted lists of file paths
        """
        graph = get_graph(ctx)
        if graph is None:
            return _not_ready()
        components = get_connected_components(graph)
        return {
            "components": components,
            "count": len(components),
        }
