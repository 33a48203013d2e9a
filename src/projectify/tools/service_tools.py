"""MCP tools for service management operations."""

import logging
from typing import Any

from fastmcp import Context

from ..context import refresh_analysis
from ..graph import DependencyGraph

logger = logging.getLogger(__name__)


def register_service_tools(mcp) -> None:
    """Register service tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    def get_index_status(ctx: Context) -> dict[str, Any]:
        """Get the current status of the project analysis.

        Returns:
            Graph statistics, analysis phase and watcher status
        """
        context = ctx.request_context.lifespan_context
        config = context["config"]
        graph: DependencyGraph | None = context.get("graph")
        indexing_error = context.get("indexing_error")

        if indexing_error:
            status = "error"
        elif context.get("indexing_complete", False):
            status = "ready"
        else:
            status = "indexing"

        result: dict[str, Any] = {
            "status": status,
            "project_name": config.effective_project_name,
            "project_path": str(config.project_path),
            "phase": context.get("indexing_phase", "starting"),
            "watcher_active": context.get("watcher_active", False),
        }
        if graph is not None:
            result["graph"] = graph.get_statistics()
        if indexing_error:
            result["error"] = indexing_error

        return result

    @mcp.tool()
    def reindex(ctx: Context) -> dict[str, Any]:
        """Re-analyze the whole project and rebuild the dependency graph.

        Use this when files changed outside of the file watcher's detection.

        Returns:
            Graph statistics after the rebuild, or the error that stopped it
        """
        context = ctx.request_context.lifespan_context
        config = context["config"]
        logger.info(f"Reindexing: {config.project_path}")

        refresh_analysis(context)

        if context.get("indexing_error"):
            return {
                "error": context["indexing_error"],
                "path": str(config.project_path),
            }

        graph: DependencyGraph = context["graph"]
        return {
            "path": str(config.project_path),
            "graph": graph.get_statistics(),
        }
