#!/usr/bin/env python3
"""Translation of GitHub logins into Clubhouse member ids."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

from logging_utils import Logger


def load_identity_map(path: Optional[str]) -> Dict[str, Optional[str]]:
    """Read a ``<login> <email>`` per line mapping file.

    Without a path the map is empty and every lookup misses. Blank lines
    are skipped; a line without an email maps the login to None; a later
    line for the same login replaces the earlier one.
    """
    if not path:
        return {}

    mapping: Dict[str, Optional[str]] = {}
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            parts = line.split()
            if not parts:
                continue
            mapping[parts[0]] = parts[1] if len(parts) > 1 else None

    Logger.info(f"loaded {len(mapping)} user mappings from {path}")
    return mapping


class IdentityMapper:
    """Resolves GitHub logins to Clubhouse member ids.

    Both tables are snapshots taken once at startup. Resolution never
    raises: an unknown login, a login without an email, or an email with
    no matching member all resolve to None.
    """

    def __init__(
        self,
        login_to_email: Mapping[str, Optional[str]],
        email_to_member_id: Mapping[str, str],
    ) -> None:
        self._login_to_email = dict(login_to_email)
        self._email_to_member_id = dict(email_to_member_id)

    @classmethod
    def from_members(
        cls, login_to_email: Mapping[str, Optional[str]], members: Iterable[dict]
    ) -> "IdentityMapper":
        """Index Clubhouse members by email; the last member wins on duplicates."""
        index: Dict[str, str] = {}
        for member in members:
            email = (member.get("profile") or {}).get("email_address")
            if email:
                index[email] = member["id"]
        Logger.debug(f"indexed {len(index)} clubhouse members by email")
        return cls(login_to_email, index)

    def resolve(self, login: Optional[str]) -> Optional[str]:
        if not login:
            return None
        email = self._login_to_email.get(login)
        if not email:
            return None
        return self._email_to_member_id.get(email)
