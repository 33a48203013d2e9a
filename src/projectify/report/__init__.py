"""Report generation from a built dependency graph."""

from .ai_context import describe_file, render_ai_context, write_ai_context
from .html_report import build_graph_payload, render_html_report, write_html_report
from .json_report import AnalysisReport, build_report, write_json_report

__all__ = [
    # JSON
    "AnalysisReport",
    "build_report",
    "write_json_report",
    # HTML
    "build_graph_payload",
    "render_html_report",
    "write_html_report",
    # AI context
    "describe_file",
    "render_ai_context",
    "write_ai_context",
]
