"""FastMCP server exposing blast radius and dependency queries for a project."""

import logging
import threading
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from .config import Settings, setup_logging
from .context import create_context, refresh_analysis
from .tools import register_all_tools
from .watcher import FileWatcher

logger = logging.getLogger(__name__)


def create_file_change_handler(context: dict[str, Any]):
    """Create a callback that re-analyzes the project after file changes.

    Args:
        context: Server context dict

    Returns:
        Callback function for FileWatcher
    """

    def handle_changes(changes: dict[str, str]) -> None:
        """Handle accumulated file changes.

        Args:
            changes: Dict mapping file paths to change types ("upsert" or "delete")
        """
        logger.info(f"Re-analyzing after {len(changes)} file changes")
        refresh_analysis(context)

    return handle_changes


@asynccontextmanager
async def lifespan(server: FastMCP):
    """Manage server lifecycle - initialize and cleanup resources."""
    try:
        config = Settings()
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

    setup_logging(config.log_level)
    logger.info(f"Starting Projectify for project: {config.effective_project_name}")
    logger.info(f"Project path: {config.project_path}")

    # Build context for tools (before analysis so MCP handshake completes quickly)
    context = create_context(config)

    analysis_thread = threading.Thread(
        target=refresh_analysis,
        args=(context,),
        daemon=True,
    )
    analysis_thread.start()

    logger.info("Starting file watcher...")
    watcher = FileWatcher(
        project_path=config.project_path,
        on_changes=create_file_change_handler(context),
        debounce_seconds=config.debounce_seconds,
    )
    watcher.start()

    context["watcher"] = watcher
    context["watcher_active"] = True

    logger.info("Projectify ready (analysis in background)")

    yield context

    logger.info("Shutting down Projectify...")
    watcher.stop()
    logger.info("Shutdown complete")


# Create the MCP server
mcp = FastMCP("Projectify", lifespan=lifespan)

# Register all tools
register_all_tools(mcp)


def main():
    """Entry point for the Projectify MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
