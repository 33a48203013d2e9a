"""Pydantic models for per-file facts collected from source files."""

from pydantic import BaseModel, Field


class FileFacts(BaseModel):
    """Facts extracted from a single file.

    Imports are kept exactly as written in the source; turning them into
    file paths is the dependency graph's job.
    """

    path: str = Field(..., description="Canonical path of the file")
    language: str = Field(default="text", description="Language tag (python, javascript, typescript, json, markdown, text)")
    imports: list[str] = Field(default_factory=list, description="Raw import strings in source order")
    exports: list[str] = Field(default_factory=list, description="Names exported by the file")
    functions: list[str] = Field(default_factory=list, description="Names of functions defined in the file")
    classes: list[str] = Field(default_factory=list, description="Names of classes defined in the file")
    size: int = Field(default=0, ge=0, description="File size in characters")


class ProjectAnalysis(BaseModel):
    """Facts for a whole project, as consumed by the graph builder."""

    file_count: int = Field(default=0, ge=0, description="Number of scanned paths")
    files: dict[str, FileFacts] = Field(default_factory=dict, description="Facts keyed by canonical path")
    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Third-party dependencies (name -> version spec) from package manifests",
    )
