"""Tests for GitHubSource issue and comment retrieval."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import github
import pytest

from config import GitHubConfig, IssueState
from errors import FetchError
from github_source import GitHubSource, _to_source_comment, attach_comments

API = 'https://api.github.com/repos/acme/widgets/issues'


def _make_source() -> GitHubSource:
    config = GitHubConfig(
        api_url='https://api.github.com',
        token='gh-token',
        owner='acme',
        repo='widgets',
        state=IssueState.ALL,
    )
    return GitHubSource(config)


def _issue(number: int, *, pull_request=None, labels=(), assignee=None, closed_at=None):
    return SimpleNamespace(
        id=1000 + number,
        number=number,
        title=f'Issue {number}',
        body=None,
        created_at=None,
        updated_at=None,
        closed_at=closed_at,
        user=SimpleNamespace(login='carol'),
        assignee=SimpleNamespace(login=assignee) if assignee else None,
        url=f'{API}/{number}',
        html_url=f'https://github.com/acme/widgets/issues/{number}',
        labels=[SimpleNamespace(name=name, description=None) for name in labels],
        pull_request=pull_request,
    )


def _comment(comment_id: int, number: int, login='alice'):
    return SimpleNamespace(
        id=comment_id,
        body=f'comment {comment_id}',
        created_at=None,
        updated_at=None,
        user=SimpleNamespace(login=login) if login else None,
        issue_url=f'{API}/{number}',
    )


def _with_repo(source: GitHubSource, issues, comments) -> Mock:
    repository = Mock()
    repository.get_issues.return_value = issues
    repository.get_issues_comments.return_value = comments
    source.api = Mock()
    source.api.get_repo.return_value = repository
    return repository


def test_fetch_all_skips_pull_requests_and_attaches_comments() -> None:
    source = _make_source()
    repository = _with_repo(
        source,
        issues=[
            _issue(1, labels=['bug'], assignee='alice'),
            _issue(2, pull_request=SimpleNamespace(url='pr')),
            _issue(3),
        ],
        comments=[
            _comment(11, 1),
            _comment(12, 2),
            _comment(13, 3, login=None),
            _comment(14, 1, login='bob'),
            _comment(15, 99),
        ],
    )

    issues = source.fetch_all('acme', 'widgets', IssueState.CLOSED)

    source.api.get_repo.assert_called_once_with('acme/widgets')
    repository.get_issues.assert_called_once_with(state='closed')
    repository.get_issues_comments.assert_called_once_with(
        sort='created', direction='asc'
    )

    assert [issue.number for issue in issues] == [1, 3]
    first, third = issues
    assert [c.id for c in first.comments] == [11, 14]
    assert [c.author for c in first.comments] == ['alice', 'bob']
    assert [c.id for c in third.comments] == [13]
    assert third.comments[0].author is None

    assert first.body == ''
    assert first.author == 'carol'
    assert first.assignee == 'alice'
    assert first.labels[0].name == 'bug'
    assert third.assignee is None


def test_fetch_all_without_connect_raises() -> None:
    with pytest.raises(FetchError):
        _make_source().fetch_all('acme', 'widgets', IssueState.ALL)


def test_fetch_all_wraps_github_errors() -> None:
    source = _make_source()
    repository = _with_repo(source, issues=[], comments=[])
    repository.get_issues_comments.side_effect = github.GithubException(
        502, {'message': 'Bad gateway'}, None
    )

    with pytest.raises(FetchError):
        source.fetch_all('acme', 'widgets', IssueState.OPEN)


def test_fetch_all_reports_missing_repository() -> None:
    source = _make_source()
    source.api = Mock()
    source.api.get_repo.side_effect = github.UnknownObjectException(
        404, {'message': 'Not Found'}, None
    )

    with pytest.raises(FetchError, match='not found'):
        source.fetch_all('acme', 'widgets', IssueState.ALL)


def test_attach_comments_counts_only_matched() -> None:
    source = _make_source()
    _with_repo(source, issues=[_issue(5)], comments=[])
    issues = source.fetch_all('acme', 'widgets', IssueState.ALL)

    comments = [_to_source_comment(_comment(1, 5)), _to_source_comment(_comment(2, 6))]
    assert attach_comments(issues, comments) == 1
    assert [c.id for c in issues[0].comments] == [1]
