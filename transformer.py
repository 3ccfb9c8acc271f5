#!/usr/bin/env python3
"""Conversion of GitHub issues into Clubhouse story requests."""

from __future__ import annotations

from typing import Iterable

from models import (ImportContext, SourceComment, SourceIssue, SourceLabel,
                    StoryComment, StoryLabel, StoryRequest, StoryType)
from utils import replace_colons


def story_type_for(labels: Iterable[SourceLabel]) -> StoryType:
    """Classify an issue by its label names (case-sensitive substrings).

    "bug" wins over "chore"; anything else is a feature.
    """
    names = [label.name for label in labels]
    if any("bug" in name for name in names):
        return StoryType.BUG
    if any("chore" in name for name in names):
        return StoryType.CHORE
    return StoryType.FEATURE


def to_story_label(label: SourceLabel) -> StoryLabel:
    return StoryLabel(name=replace_colons(label.name), description=label.description)


def to_story_comment(comment: SourceComment, context: ImportContext) -> StoryComment:
    return StoryComment(
        text=comment.body,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        external_id=str(comment.id),
        author_id=context.identities.resolve(comment.author),
    )


def to_story_request(issue: SourceIssue, context: ImportContext) -> StoryRequest:
    identities = context.identities

    owner_ids = []
    if issue.assignee:
        owner_id = identities.resolve(issue.assignee)
        if owner_id:
            owner_ids.append(owner_id)

    request = StoryRequest(
        name=issue.title,
        description=issue.body,
        story_type=story_type_for(issue.labels),
        project_id=context.project_id,
        external_id=issue.html_url,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        labels=[to_story_label(label) for label in issue.labels],
        comments=[to_story_comment(comment, context) for comment in issue.comments],
        owner_ids=owner_ids,
        requested_by_id=identities.resolve(issue.author),
    )

    if issue.closed_at is not None:
        request.workflow_state_id = context.terminal_state_id
        request.completed_at_override = issue.closed_at

    return request
