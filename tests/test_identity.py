"""Tests for GitHub login to Clubhouse member resolution."""

from __future__ import annotations

from pathlib import Path

from identity import IdentityMapper, load_identity_map


def _member(member_id: str, email) -> dict:
    return {'id': member_id, 'profile': {'email_address': email}}


def test_load_identity_map_without_path_is_empty() -> None:
    assert load_identity_map(None) == {}


def test_load_identity_map_parses_lines(tmp_path: Path) -> None:
    """Whitespace-separated pairs are trimmed; malformed lines map to None."""
    users = tmp_path / 'users.txt'
    users.write_text(
        'alice alice@co.com\n'
        '  bob\t bob@co.com  \n'
        '\n'
        'loner\n'
        'alice alice@new.co.com\n',
        encoding='utf-8',
    )

    mapping = load_identity_map(str(users))

    assert mapping == {
        'alice': 'alice@new.co.com',
        'bob': 'bob@co.com',
        'loner': None,
    }


def test_resolve_through_email_to_member() -> None:
    mapper = IdentityMapper.from_members(
        {'alice': 'alice@co.com'},
        [_member('m-1', 'alice@co.com'), _member('m-2', 'other@co.com')],
    )
    assert mapper.resolve('alice') == 'm-1'


def test_resolve_misses_return_none() -> None:
    """Unknown logins, missing emails and unknown emails never raise."""
    mapper = IdentityMapper.from_members(
        {'alice': 'alice@co.com', 'loner': None, 'eve': 'eve@elsewhere.org'},
        [_member('m-1', 'alice@co.com')],
    )

    assert mapper.resolve('nobody') is None
    assert mapper.resolve('loner') is None
    assert mapper.resolve('eve') is None
    assert mapper.resolve(None) is None
    assert mapper.resolve('') is None


def test_last_member_wins_on_shared_email() -> None:
    mapper = IdentityMapper.from_members(
        {'alice': 'alice@co.com'},
        [_member('m-1', 'alice@co.com'), _member('m-2', 'alice@co.com')],
    )
    assert mapper.resolve('alice') == 'm-2'


def test_members_without_email_are_skipped() -> None:
    mapper = IdentityMapper.from_members(
        {'bot': None},
        [{'id': 'm-3', 'profile': {}}, {'id': 'm-4'}],
    )
    assert mapper.resolve('bot') is None
