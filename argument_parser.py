#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from config import (DEFAULT_CLUBHOUSE_API_URL, DEFAULT_GITHUB_API_URL,
                    ClubhouseConfig, Config, GitHubConfig, ImportConfig,
                    IssueState)
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_MISSING_ARGUMENTS = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Import GitHub issues into a Clubhouse project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --github-url acme/widgets --clubhouse-project 17 --state open
  %(prog)s --github-url acme/widgets --clubhouse-project 17 --state all \\
           --users users.txt --dry-run

The users file maps GitHub logins to Clubhouse member emails, one
"<login> <email>" pair per line.

Every run creates new stories; importing the same repository twice
produces duplicates.
        """,
    )
    return parser


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    parser.add_argument(
        "--github-api",
        dest="github_api_url",
        default=DEFAULT_GITHUB_API_URL,
        help="Base URL of the GitHub API",
    )
    parser.add_argument(
        "--github-token",
        dest="github_token",
        help="GitHub API token (or set GITHUB_TOKEN env var)",
    )
    parser.add_argument(
        "--github-url",
        dest="github_url",
        help="GitHub repository to import from, as owner/repo",
    )
    parser.add_argument(
        "--state",
        dest="state",
        help="Which issues to import: open | closed | all",
    )


def _add_clubhouse_arguments(parser: argparse.ArgumentParser) -> None:
    """Add Clubhouse-related arguments to parser."""
    parser.add_argument(
        "--clubhouse-api",
        dest="clubhouse_api_url",
        default=DEFAULT_CLUBHOUSE_API_URL,
        help="Base URL of the Clubhouse API",
    )
    parser.add_argument(
        "--clubhouse-token",
        dest="clubhouse_token",
        help="Clubhouse API token (or set CLUBHOUSE_API_TOKEN env var)",
    )
    parser.add_argument(
        "--clubhouse-project",
        dest="clubhouse_project",
        help="Id of the Clubhouse project to create stories in",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior and configuration arguments to parser."""
    parser.add_argument(
        "--users",
        dest="users",
        help="File mapping GitHub logins to Clubhouse member emails",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Build story requests and list them without creating anything",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Show debug output",
    )


def _collect_usage_errors(args) -> List[tuple]:
    """Return (flag, problem) pairs for every invalid or missing argument."""
    errors: List[tuple] = []

    if not args.github_token:
        errors.append(("--github-token", "arg is required"))
    if not args.clubhouse_token:
        errors.append(("--clubhouse-token", "arg is required"))

    if not args.clubhouse_project:
        errors.append(("--clubhouse-project", "arg is required"))
    else:
        try:
            args.clubhouse_project = SecurityValidator.validate_project_id(
                args.clubhouse_project
            )
        except ValueError as e:
            errors.append(("--clubhouse-project", str(e)))

    if not args.github_url:
        errors.append(("--github-url", "arg is required"))
    else:
        try:
            args.github_owner, args.github_repo = SecurityValidator.validate_repo_slug(
                args.github_url
            )
        except ValueError as e:
            errors.append(("--github-url", str(e)))

    states = [state.value for state in IssueState]
    if (args.state or "").lower() not in states:
        errors.append(("--state", f"must be one of {' | '.join(states)}"))

    if args.users:
        try:
            args.users = SecurityValidator.validate_file_path(args.users)
        except ValueError as e:
            errors.append(("--users", str(e)))

    for dest, flag, schemes in (
        ("github_api_url", "--github-api", ["https", "http"]),
        ("clubhouse_api_url", "--clubhouse-api", ["https"]),
    ):
        try:
            setattr(args, dest, SecurityValidator.validate_url(getattr(args, dest), schemes))
        except ValueError as e:
            errors.append((flag, str(e)))

    return errors


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_github_arguments(parser)
    _add_clubhouse_arguments(parser)
    _add_behavior_arguments(parser)

    args = parser.parse_args(argv)
    args.github_token = args.github_token or os.getenv("GITHUB_TOKEN")
    args.clubhouse_token = args.clubhouse_token or os.getenv("CLUBHOUSE_API_TOKEN")

    errors = _collect_usage_errors(args)
    if errors:
        for flag, problem in errors:
            Logger.usage(flag, problem)
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED",
            f"{len(errors)} invalid or missing arguments",
        )
        sys.exit(EXIT_MISSING_ARGUMENTS)

    Logger.set_verbose(args.verbose)

    return Config(
        github=GitHubConfig(
            api_url=args.github_api_url,
            token=args.github_token,
            owner=args.github_owner,
            repo=args.github_repo,
            state=IssueState(args.state.lower()),
        ),
        clubhouse=ClubhouseConfig(
            api_url=args.clubhouse_api_url,
            token=args.clubhouse_token,
            project_id=args.clubhouse_project,
        ),
        behavior=ImportConfig(
            users_file=args.users,
            dry_run=args.dry_run,
            verbose=args.verbose,
        ),
    )
