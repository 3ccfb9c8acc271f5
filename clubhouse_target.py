#!/usr/bin/env python3
"""Clubhouse REST API wrapper for looking up members, projects and creating stories."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from config import ClubhouseConfig
from errors import ClubhouseError
from logging_utils import Logger
from models import StoryRequest

REQUEST_TIMEOUT_S = 30
DONE_STATE_TYPE = "done"


class ClubhouseTarget:
    """Wrapper around the Clubhouse API v3."""

    def __init__(
        self, config: ClubhouseConfig, session: Optional[requests.Session] = None
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(self._get_api_headers())

    def _get_api_headers(self) -> dict:
        """Get standard API headers for Clubhouse requests."""
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Clubhouse-Token": self.config.token,
        }

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.config.api_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method, url, timeout=REQUEST_TIMEOUT_S, **kwargs
            )
        except requests.RequestException as e:
            raise ClubhouseError(f"failed to contact clubhouse api: {e}") from e

        if response.status_code == 401:
            raise ClubhouseError(
                "unauthorized (401): clubhouse token invalid", status=401
            )
        if response.status_code == 404:
            raise ClubhouseError(f"not found (404): {method} {path}", status=404)
        if response.status_code >= 400:
            raise ClubhouseError(
                f"{method} {path} failed ({response.status_code}): {response.text}",
                status=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ClubhouseError(
                f"{method} {path} returned a non-JSON body ({response.status_code})",
                status=response.status_code,
            ) from e

    def list_members(self) -> List[Dict[str, Any]]:
        members = self._request("GET", "/members")
        Logger.debug(f"clubhouse members: {len(members)}")
        return members

    def get_project(self, project_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/projects/{project_id}")

    def list_workflows(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/workflows")

    def find_done_state(self, project_id: int) -> Dict[str, Any]:
        """Return the "done" state of the workflow the project uses."""
        for workflow in self.list_workflows():
            if project_id not in workflow.get("project_ids", []):
                continue
            for state in workflow.get("states", []):
                if state.get("type") == DONE_STATE_TYPE:
                    Logger.debug(
                        f"terminal state: {state.get('name')} ({state['id']})"
                    )
                    return state
            raise ClubhouseError(
                f"workflow {workflow.get('id')} has no '{DONE_STATE_TYPE}' state"
            )
        raise ClubhouseError(f"no workflow found for project {project_id}")

    def create_story(self, request: StoryRequest) -> Dict[str, Any]:
        return self._request("POST", "/stories", json=request.to_payload())
