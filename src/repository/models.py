"""Data models for repository resolution."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoResolution:
    """Source repository and issue tracker URLs for a module."""
    repo_url: str
    issues_url: str
    source: str = ""  # resolution step that produced the result
