#!/usr/bin/env python3
"""Exception types raised inside the import pipeline."""

from __future__ import annotations

from typing import Optional


class ImportToolError(Exception):
    """Base exception for github-to-clubhouse errors."""


class FetchError(ImportToolError):
    """Raised when issues or comments cannot be retrieved from GitHub."""


class ClubhouseError(ImportToolError):
    """Raised when a Clubhouse API call fails."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
