"""Shared server state and the full re-analysis that refreshes it."""

import logging
import threading
from typing import Any

from .analyzer import run_analysis
from .config import Settings
from .parser import TreeSitterParser

logger = logging.getLogger(__name__)


def create_context(config: Settings) -> dict[str, Any]:
    """Create the context dict shared by the server lifespan and its tools.

    Args:
        config: Loaded settings

    Returns:
        Context with no graph yet
    """
    return {
        "config": config,
        "parser": TreeSitterParser(),
        "analysis": None,
        "graph": None,
        "analysis_lock": threading.Lock(),
        "watcher": None,
        "watcher_active": False,
        "indexing_complete": False,
        "indexing_error": None,
        "indexing_phase": "starting",
    }


def refresh_analysis(context: dict[str, Any]) -> None:
    """Run a full analysis and swap the new graph into the context.

    The previous graph stays available to queries until the new one is
    complete. Failures are recorded in ``indexing_error``.

    Args:
        context: Context dict from ``create_context``
    """
    config: Settings = context["config"]
    parser: TreeSitterParser = context["parser"]

    with context["analysis_lock"]:
        try:
            context["indexing_phase"] = "analyzing"
            analysis, graph = run_analysis(config.project_path, config.ignore_patterns, parser)

            context["analysis"] = analysis
            context["graph"] = graph
            context["indexing_error"] = None
            context["indexing_phase"] = "complete"
            context["indexing_complete"] = True

            stats = graph.get_statistics()
            logger.info(f"Analysis complete: {stats['files']} files, {stats['edges']} edges")
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            context["indexing_error"] = str(e)
            context["indexing_phase"] = "error"
