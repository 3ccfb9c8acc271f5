#!/usr/bin/env python3
"""Data models exchanged between the GitHub source, transformer and loader.

Source models are plain snapshots of what GitHub returned, detached from
PyGithub objects so the transformer can be exercised without a network.
Story models mirror the Clubhouse "create story" request body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from identity import IdentityMapper


class StoryType(Enum):
    """Clubhouse story types."""
    BUG = "bug"
    CHORE = "chore"
    FEATURE = "feature"


@dataclass(frozen=True)
class SourceLabel:
    name: str
    description: Optional[str] = None


@dataclass
class SourceComment:
    """A GitHub issue comment.

    ``issue_url`` is the API url of the parent issue and is the key used
    to attach the comment to its issue.
    """
    id: int
    body: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    author: Optional[str]
    issue_url: str


@dataclass
class SourceIssue:
    """A GitHub issue with the comments that belong to it."""
    id: int
    number: int
    title: str
    body: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    closed_at: Optional[datetime]
    author: Optional[str]
    assignee: Optional[str]
    url: str
    html_url: str
    labels: List[SourceLabel] = field(default_factory=list)
    comments: List[SourceComment] = field(default_factory=list)


@dataclass(frozen=True)
class StoryLabel:
    name: str
    description: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        return payload


@dataclass
class StoryComment:
    text: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    external_id: str
    author_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "text": self.text,
            "external_id": self.external_id,
        }
        _put_timestamp(payload, "created_at", self.created_at)
        _put_timestamp(payload, "updated_at", self.updated_at)
        if self.author_id is not None:
            payload["author_id"] = self.author_id
        return payload


@dataclass
class StoryRequest:
    """Body of a Clubhouse "create story" call.

    Optional fields set to None are left out of the payload so Clubhouse
    applies its own defaults.
    """
    name: str
    description: str
    story_type: StoryType
    project_id: int
    external_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    labels: List[StoryLabel] = field(default_factory=list)
    comments: List[StoryComment] = field(default_factory=list)
    owner_ids: List[str] = field(default_factory=list)
    requested_by_id: Optional[str] = None
    workflow_state_id: Optional[int] = None
    completed_at_override: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "story_type": self.story_type.value,
            "project_id": self.project_id,
            "external_id": self.external_id,
            "labels": [label.to_payload() for label in self.labels],
            "comments": [comment.to_payload() for comment in self.comments],
            "owner_ids": list(self.owner_ids),
        }
        _put_timestamp(payload, "created_at", self.created_at)
        _put_timestamp(payload, "updated_at", self.updated_at)
        if self.requested_by_id is not None:
            payload["requested_by_id"] = self.requested_by_id
        if self.workflow_state_id is not None:
            payload["workflow_state_id"] = self.workflow_state_id
        _put_timestamp(payload, "completed_at_override", self.completed_at_override)
        return payload


@dataclass
class ImportContext:
    """Everything the transformer needs besides the issue itself."""
    project_id: int
    project_name: str
    terminal_state_id: int
    identities: "IdentityMapper"


def _put_timestamp(
    payload: Dict[str, Any], key: str, value: Optional[datetime]
) -> None:
    if value is not None:
        payload[key] = value.isoformat()
