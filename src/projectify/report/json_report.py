"""JSON analysis report."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from ..git_stats import GitAnalysis
from ..graph import DependencyGraph, GraphNode
from ..parser import ProjectAnalysis

logger = logging.getLogger(__name__)


class AnalysisReport(BaseModel):
    """Everything a single analysis run produced."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    project_path: str
    files: int = Field(..., description="Number of scanned files")
    statistics: dict[str, int] = Field(default_factory=dict)
    top_risks: list[GraphNode] = Field(default_factory=list)
    dependencies: dict[str, str] = Field(default_factory=dict)
    git: GitAnalysis | None = None
    full_analysis: ProjectAnalysis


def build_report(
    project_path: Path | str,
    analysis: ProjectAnalysis,
    graph: DependencyGraph,
    top_limit: int = 5,
    git: GitAnalysis | None = None,
) -> AnalysisReport:
    """Assemble the report model for an analysis run.

    Args:
        project_path: Root of the analyzed project
        analysis: Collected file facts
        graph: Built dependency graph
        top_limit: Number of highest blast radius files to include
        git: Optional commit statistics

    Returns:
        AnalysisReport
    """
    return AnalysisReport(
        project_path=str(project_path),
        files=analysis.file_count,
        statistics=graph.get_statistics(),
        top_risks=graph.get_top_blast_radius(top_limit),
        dependencies=dict(analysis.dependencies),
        git=git,
        full_analysis=analysis,
    )


def write_json_report(report: AnalysisReport, output_path: Path | str) -> Path:
    """Write a report as indented JSON.

    Args:
        report: Report to serialize
        output_path: Destination file

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"JSON report saved to {output_path}")
    return output_path
