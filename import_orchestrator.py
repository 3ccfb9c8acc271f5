#!/usr/bin/env python3
"""Main orchestrator for importing GitHub issues into a Clubhouse project."""

from __future__ import annotations

from typing import List, Optional

from clubhouse_target import ClubhouseTarget
from config import Config
from errors import ClubhouseError, FetchError
from github_source import GitHubSource
from identity import IdentityMapper, load_identity_map
from loader import StoryLoader
from logging_utils import Logger
from models import ImportContext, SourceIssue, StoryRequest
from transformer import to_story_request
from utils import SubmissionGate, plural

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_CLUBHOUSE_ERROR = 30
EXIT_AUTH_ERROR = 40


class ImportOrchestrator:
    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg
        self.gh = GitHubSource(cfg.github)
        self.ch = ClubhouseTarget(cfg.clubhouse)
        self.loader = StoryLoader(
            self.ch, SubmissionGate(cfg.behavior.max_in_flight)
        )

    def run(self) -> int:
        try:
            return self._run()
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def _run(self) -> int:
        try:
            context = self._prepare_context()
        except ClubhouseError as e:
            Logger.error(f"clubhouse setup failed: {e}")
            return EXIT_AUTH_ERROR if e.status == 401 else EXIT_CLUBHOUSE_ERROR
        except OSError as e:
            Logger.error(f"failed to read user mappings: {e}")
            return EXIT_EXECUTION_ERROR

        Logger.info(
            f"importing from github {self.cfg.github.slug} "
            f"to clubhouse project {context.project_name}"
        )

        issues = self._fetch_issues()
        if issues is None:
            Logger.warn("nothing imported: issues could not be retrieved")
            return EXIT_SUCCESS

        requests = [to_story_request(issue, context) for issue in issues]

        if self.cfg.behavior.dry_run:
            self._report_dry_run(requests)
            return EXIT_SUCCESS

        Logger.info(f"importing {plural(len(requests), 'issue')} into clubhouse")
        imported = self.loader.import_all(requests)
        self._report(imported, len(requests))
        return EXIT_SUCCESS

    def _prepare_context(self) -> ImportContext:
        """Load identity tables and resolve the destination project."""
        login_to_email = load_identity_map(self.cfg.behavior.users_file)

        members = self.ch.list_members()
        identities = IdentityMapper.from_members(login_to_email, members)

        project_id = self.cfg.clubhouse.project_id
        project = self.ch.get_project(project_id)
        done_state = self.ch.find_done_state(project["id"])

        return ImportContext(
            project_id=project["id"],
            project_name=project.get("name", str(project_id)),
            terminal_state_id=done_state["id"],
            identities=identities,
        )

    def _fetch_issues(self) -> Optional[List[SourceIssue]]:
        """Fetch issues; None signals that the fetch failed."""
        try:
            self.gh.connect()
            return self.gh.fetch_all(
                self.cfg.github.owner, self.cfg.github.repo, self.cfg.github.state
            )
        except FetchError as e:
            Logger.error(f"failed to fetch issues from {self.cfg.github.slug}: {e}")
            return None

    def _report_dry_run(self, requests: List[StoryRequest]) -> None:
        total = len(requests)
        for idx, request in enumerate(requests, start=1):
            Logger.info(
                f"[{idx}/{total}] would import: {request.external_id} "
                f"as {request.story_type.value} '{request.name}'"
            )
            Logger.debug(str(request.to_payload()))
        Logger.info("dry-run completed")

    def _report(self, imported: int, attempted: int) -> None:
        Logger.success(f"imported {plural(imported, 'issue')} into clubhouse")
        failed = attempted - imported
        if failed:
            Logger.warn(f"{plural(failed, 'issue')} failed to import")
