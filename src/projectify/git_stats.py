"""Commit history statistics using GitPython."""

import logging
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_SIZE = 10


class AuthorStats(BaseModel):
    """Commit count for a single author."""

    name: str
    email: str
    commits: int = 0


class GitAnalysis(BaseModel):
    """Summary of a repository's recent history."""

    total_commits: int = Field(..., description="Number of commits read")
    last_commit_date: str = Field(..., description="ISO date of the newest commit")
    author_stats: list[AuthorStats] = Field(default_factory=list, description="Authors, most commits first")
    recent_activity: list[str] = Field(default_factory=list, description="One line per recent commit")


class GitService:
    """Reads commit statistics for a project directory."""

    def __init__(self, project_path: Path | str):
        """Initialize the service.

        Args:
            project_path: Directory inside a git working tree
        """
        self.project_path = Path(project_path)

    def _open_repo(self) -> Repo | None:
        try:
            return Repo(self.project_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return None

    def is_repo(self) -> bool:
        """Check if the project is inside a git repository."""
        return self._open_repo() is not None

    def get_analysis(self, limit: int = 50) -> GitAnalysis | None:
        """Summarize the most recent commits.

        Args:
            limit: Maximum number of commits to read

        Returns:
            GitAnalysis, or None if the project is not a git repository, has
            no commits, or git fails
        """
        repo = self._open_repo()
        if repo is None:
            logger.debug(f"Not a git repository: {self.project_path}")
            return None

        try:
            commits = list(repo.iter_commits(max_count=limit))
        except (GitCommandError, ValueError) as e:
            logger.error(f"Git analysis failed: {e}")
            return None

        if not commits:
            return None

        authors: dict[str, AuthorStats] = {}
        for commit in commits:
            key = commit.author.email or commit.author.name or "unknown"
            if key not in authors:
                authors[key] = AuthorStats(
                    name=commit.author.name or "unknown",
                    email=commit.author.email or "",
                )
            authors[key].commits += 1

        recent_activity = []
        for commit in commits[:RECENT_ACTIVITY_SIZE]:
            summary = str(commit.summary)
            recent_activity.append(
                f"[{commit.committed_datetime.date().isoformat()}] {summary} ({commit.author.name})"
            )

        return GitAnalysis(
            total_commits=len(commits),
            last_commit_date=commits[0].committed_datetime.isoformat(),
            author_stats=sorted(authors.values(), key=lambda a: a.commits, reverse=True),
            recent_activity=recent_activity,
        )
