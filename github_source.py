#!/usr/bin/env python3
"""GitHub API wrapper for retrieving issues and their comments."""

from __future__ import annotations

from typing import Dict, List, Optional

import github
import requests

from config import DEFAULT_GITHUB_API_URL, GitHubConfig, IssueState
from errors import FetchError
from logging_utils import Logger
from models import SourceComment, SourceIssue, SourceLabel
from utils import plural

PAGE_SIZE = 100


class GitHubSource:
    """Wrapper around the GitHub API to read every issue of a repository."""

    def __init__(self, config: GitHubConfig) -> None:
        self.config = config
        self.api: Optional[github.Github] = None

    def connect(self) -> None:
        Logger.info(f"init github API: {self.config.api_url}")
        auth = github.Auth.Token(self.config.token)
        if self.config.api_url != DEFAULT_GITHUB_API_URL:
            self.api = github.Github(
                base_url=self.config.api_url, auth=auth, per_page=PAGE_SIZE
            )
        else:
            self.api = github.Github(auth=auth, per_page=PAGE_SIZE)

    def fetch_all(self, owner: str, repo: str, state: IssueState) -> List[SourceIssue]:
        """Return all non-PR issues of ``owner/repo`` with comments attached.

        Raises FetchError when either listing fails; nothing is returned
        in that case.
        """
        if self.api is None:
            raise FetchError("github API not initialized")

        slug = f"{owner}/{repo}"
        try:
            repository = self.api.get_repo(slug)

            Logger.info(f"retrieving issues from github ({state.value})")
            issues = [
                _to_source_issue(issue)
                for issue in repository.get_issues(state=state.value)
                if issue.pull_request is None
            ]
            Logger.success(f"retrieved {plural(len(issues), 'issue')} from github")

            Logger.info("retrieving comments from github")
            comments = [
                _to_source_comment(comment)
                for comment in repository.get_issues_comments(
                    sort="created", direction="asc"
                )
            ]
            Logger.success(f"retrieved {plural(len(comments), 'comment')} from github")
        except github.BadCredentialsException as e:
            raise FetchError(f"authentication failed (github): {e}") from e
        except github.UnknownObjectException as e:
            raise FetchError(f"repository '{slug}' not found or not visible") from e
        except github.GithubException as e:
            raise FetchError(f"failed to fetch issues from '{slug}': {e}") from e
        except requests.RequestException as e:
            raise FetchError(f"failed to contact github api: {e}") from e

        attached = attach_comments(issues, comments)
        if attached != len(comments):
            Logger.debug(
                f"dropped {plural(len(comments) - attached, 'comment')} "
                "without a matching issue"
            )
        return issues


def attach_comments(issues: List[SourceIssue], comments: List[SourceComment]) -> int:
    """Append each comment to its parent issue, keyed by issue API url.

    Comments are appended in the order given. Comments whose parent was
    not fetched (filtered out by state, or a pull request) are dropped.
    Returns the number of comments attached.
    """
    by_url: Dict[str, SourceIssue] = {issue.url: issue for issue in issues}
    attached = 0
    for comment in comments:
        issue = by_url.get(comment.issue_url)
        if issue is not None:
            issue.comments.append(comment)
            attached += 1
    return attached


def _login(user) -> Optional[str]:
    # deleted accounts come back as None
    return getattr(user, "login", None) if user is not None else None


def _to_source_issue(issue) -> SourceIssue:
    return SourceIssue(
        id=issue.id,
        number=issue.number,
        title=issue.title,
        body=issue.body or "",
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        closed_at=issue.closed_at,
        author=_login(issue.user),
        assignee=_login(issue.assignee),
        url=issue.url,
        html_url=issue.html_url,
        labels=[
            SourceLabel(name=label.name, description=label.description)
            for label in issue.labels
        ],
    )


def _to_source_comment(comment) -> SourceComment:
    return SourceComment(
        id=comment.id,
        body=comment.body or "",
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        author=_login(comment.user),
        issue_url=comment.issue_url,
    )
