"""Pydantic models for dependency graph records."""

from pydantic import BaseModel, ConfigDict, Field


class GraphNode(BaseModel):
    """Metrics for a single file in the dependency graph.

    ``in_degree`` counts the files this file imports and ``out_degree``
    counts the files importing it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Canonical file path")
    in_degree: int = Field(default=0, ge=0, description="Distinct known files this file imports")
    out_degree: int = Field(default=0, ge=0, description="Distinct known files importing this file")
    affected_files: int = Field(default=0, ge=0, description="Number of transitive dependents")
    blast_radius: float = Field(
        default=0.0,
        ge=0.0,
        lt=100.0,
        description="Transitive dependents as a percentage of all known files",
    )
