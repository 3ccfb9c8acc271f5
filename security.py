#!/usr/bin/env python3
"""Input validation and log redaction for github-to-clubhouse."""

import os
import re
from typing import List, Optional, Tuple


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    MAX_URL_LENGTH = 2048
    MAX_OWNER_LENGTH = 39
    MAX_REPO_NAME_LENGTH = 100
    MAX_PATH_LENGTH = 500

    # GitHub logins: alphanumerics and single hyphens, no leading hyphen
    SAFE_OWNER_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    @classmethod
    def validate_repo_slug(cls, slug: str) -> Tuple[str, str]:
        """Split and validate an ``owner/repo`` string."""
        if not slug or not isinstance(slug, str):
            raise ValueError("repository must be a non-empty owner/repo string")

        parts = slug.strip().strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"repository '{slug}' is not of the form owner/repo")
        owner, repo = parts

        if len(owner) > cls.MAX_OWNER_LENGTH or not cls.SAFE_OWNER_PATTERN.match(owner):
            raise ValueError(f"repository owner '{owner}' is not a valid GitHub login")

        if len(repo) > cls.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )
        if repo in (".", "..") or not cls.SAFE_REPO_NAME_PATTERN.match(repo):
            raise ValueError(f"repository name '{repo}' contains invalid characters")

        return owner, repo

    @classmethod
    def validate_project_id(cls, value: str) -> int:
        """Validate a Clubhouse project id."""
        try:
            project_id = int(str(value).strip())
        except ValueError:
            raise ValueError(f"project id '{value}' is not a number") from None
        if project_id <= 0:
            raise ValueError(f"project id '{value}' must be positive")
        return project_id

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        if not url.startswith(("http://", "https://")):
            raise ValueError("URL must use http or https scheme")

        if allowed_schemes:
            scheme = url.split("://")[0].lower()
            if scheme not in allowed_schemes:
                raise ValueError(
                    f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
                )

        return url.rstrip("/")

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate a path to an existing, readable file."""
        if not path or not isinstance(path, str):
            raise ValueError("file path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"file path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("file path contains null bytes")

        normalized = os.path.normpath(path)
        if not os.path.isfile(normalized):
            raise ValueError(f"file '{path}' does not exist")

        return normalized

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"https://[^:/@]+:[^@]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"clubhouse-token[=:]\s*[^\s,}]+", "Clubhouse-Token=[REDACTED]"),  # API header
            (r"token[=:]\s*\S+", "token=[REDACTED]"),  # Token assignments
            (r"ghp_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"gho_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub OAuth tokens
            (r"ghu_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub user tokens
            (r"ghs_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub server tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
