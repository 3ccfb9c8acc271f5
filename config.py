#!/usr/bin/env python3
"""Configuration dataclasses for github-to-clubhouse."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_CLUBHOUSE_API_URL = "https://api.clubhouse.io/api/v3"


class IssueState(Enum):
    """Enumeration for the GitHub issue state filter."""
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


@dataclass
class GitHubConfig:
    """GitHub-specific configuration."""
    api_url: str
    token: str
    owner: str
    repo: str
    state: IssueState = IssueState.ALL

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class ClubhouseConfig:
    """Clubhouse-specific configuration."""
    api_url: str
    token: str
    project_id: int


@dataclass
class ImportConfig:
    """Import behavior configuration."""
    users_file: Optional[str]
    dry_run: bool
    verbose: bool = False
    max_in_flight: int = 1


@dataclass
class Config:
    """Main configuration for a GitHub-to-Clubhouse import."""
    github: GitHubConfig
    clubhouse: ClubhouseConfig
    behavior: ImportConfig
