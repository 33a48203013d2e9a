"""Configuration management for Projectify."""

import logging
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project settings
    project_path: Path = Field(
        default_factory=Path.cwd,
        description="Path to the project to analyze",
    )
    project_name: str | None = Field(
        default=None,
        description="Name of the project (defaults to directory name)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Analysis settings
    top_limit: int = Field(
        default=5,
        ge=0,
        description="Number of highest blast radius files to report",
    )
    # NoDecode keeps env values as raw strings for the comma splitting below
    ignore_patterns: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Extra glob patterns to skip while scanning (comma-separated)",
    )
    git_log_limit: int = Field(
        default=50,
        ge=1,
        description="Number of commits read for git statistics",
    )

    # Report settings
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory reports are written to",
    )
    report_filename: str = Field(
        default="analysis-report.json",
        description="File name of the JSON analysis report",
    )
    context_filename: str = Field(
        default="ai-context.md",
        description="File name of the AI context Markdown",
    )
    html_filename: str = Field(
        default="analysis-report.html",
        description="File name of the interactive HTML report",
    )

    # Watcher settings
    debounce_seconds: float = Field(
        default=5.0,
        description="Debounce delay for file watcher in seconds",
    )

    @field_validator("ignore_patterns", mode="before")
    @classmethod
    def parse_ignore_patterns(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("project_path", mode="before")
    @classmethod
    def validate_project_path(cls, v: str | Path) -> Path:
        """Convert string to Path and validate it exists."""
        path = Path(v) if isinstance(v, str) else v
        if not path.exists():
            raise ValueError(f"Project path does not exist: {path}")
        if not path.is_dir():
            raise ValueError(f"Project path is not a directory: {path}")
        return path.resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @property
    def effective_project_name(self) -> str:
        """Get the project name, defaulting to directory name."""
        return self.project_name or self.project_path.name

    @property
    def report_path(self) -> Path:
        """Get the JSON report path."""
        return self.output_dir / self.report_filename

    @property
    def html_path(self) -> Path:
        """Get the HTML report path."""
        return self.output_dir / self.html_filename

    @property
    def context_path(self) -> Path:
        """Get the AI context Markdown path."""
        return self.output_dir / self.context_filename


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
