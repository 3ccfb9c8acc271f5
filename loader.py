#!/usr/bin/env python3
"""Submission of story requests to Clubhouse."""

from __future__ import annotations

import json
from typing import List, Sequence

from clubhouse_target import ClubhouseTarget
from errors import ClubhouseError
from logging_utils import Logger
from models import StoryRequest
from utils import SubmissionGate


class StoryLoader:
    """Creates stories one request at a time, in order."""

    def __init__(self, target: ClubhouseTarget, gate: SubmissionGate) -> None:
        self.target = target
        self.gate = gate
        self.failed: List[StoryRequest] = []

    def import_all(self, requests: Sequence[StoryRequest]) -> int:
        """Create every story and return how many succeeded.

        A failed creation is logged with its payload and skipped; the
        remaining requests are still submitted.
        """
        imported = 0
        total = len(requests)
        for idx, request in enumerate(requests, start=1):
            if self._import_one(request, idx, total):
                imported += 1
        return imported

    def _import_one(self, request: StoryRequest, idx: int, total: int) -> bool:
        try:
            with self.gate.slot():
                story = self.target.create_story(request)
        except ClubhouseError as e:
            self.failed.append(request)
            Logger.error(f"[{idx}/{total}] failed to import {request.external_id}: {e}")
            Logger.error(json.dumps(request.to_payload(), indent=2, sort_keys=True))
            return False

        story_id = story.get("id") if isinstance(story, dict) else None
        Logger.info(f"[{idx}/{total}] imported {request.external_id} -> story {story_id}")
        return True
