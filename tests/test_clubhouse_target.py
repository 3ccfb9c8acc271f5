"""Tests for ClubhouseTarget API calls."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from clubhouse_target import ClubhouseTarget
from config import ClubhouseConfig
from errors import ClubhouseError
from models import StoryRequest, StoryType


def _response(status: int, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.content = b'{}' if payload is not None else b''
    response.json.return_value = payload
    response.text = str(payload)
    return response


def _make_target(*responses) -> ClubhouseTarget:
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = list(responses)
    config = ClubhouseConfig(
        api_url='https://api.clubhouse.io/api/v3',
        token='ch-token',
        project_id=17,
    )
    return ClubhouseTarget(config, session=session)


def test_token_header_is_set() -> None:
    target = _make_target()
    assert target.session.headers['Clubhouse-Token'] == 'ch-token'
    assert target.session.headers['Content-Type'] == 'application/json'


def test_list_members_hits_members_endpoint() -> None:
    members = [{'id': 'm-1', 'profile': {'email_address': 'a@co.com'}}]
    target = _make_target(_response(200, members))

    assert target.list_members() == members
    method, url = target.session.request.call_args.args
    assert (method, url) == ('GET', 'https://api.clubhouse.io/api/v3/members')
    assert target.session.request.call_args.kwargs['timeout'] == 30


def test_find_done_state_uses_project_workflow() -> None:
    workflows = [
        {'id': 1, 'project_ids': [3], 'states': [{'id': 10, 'type': 'done'}]},
        {
            'id': 2,
            'project_ids': [5, 17],
            'states': [
                {'id': 20, 'type': 'unstarted'},
                {'id': 21, 'type': 'started'},
                {'id': 22, 'type': 'done', 'name': 'Completed'},
            ],
        },
    ]
    target = _make_target(_response(200, workflows))

    assert target.find_done_state(17)['id'] == 22


def test_find_done_state_without_workflow_raises() -> None:
    target = _make_target(_response(200, [{'id': 1, 'project_ids': [3], 'states': []}]))
    with pytest.raises(ClubhouseError, match='no workflow'):
        target.find_done_state(17)


def test_create_story_posts_payload() -> None:
    request = StoryRequest(
        name='Crash',
        description='boom',
        story_type=StoryType.BUG,
        project_id=17,
        external_id='https://github.com/acme/widgets/issues/1',
    )
    target = _make_target(_response(201, {'id': 900}))

    assert target.create_story(request) == {'id': 900}
    call = target.session.request.call_args
    assert call.args == ('POST', 'https://api.clubhouse.io/api/v3/stories')
    assert call.kwargs['json'] == request.to_payload()


@pytest.mark.parametrize('status', [400, 401, 404, 422, 500])
def test_error_status_raises(status: int) -> None:
    target = _make_target(_response(status, {'message': 'nope'}))
    with pytest.raises(ClubhouseError) as excinfo:
        target.get_project(17)
    assert excinfo.value.status == status


def test_transport_error_raises() -> None:
    target = _make_target(requests.ConnectionError('connection refused'))
    with pytest.raises(ClubhouseError, match='failed to contact'):
        target.list_workflows()


def test_non_json_body_raises_with_status() -> None:
    response = _response(201, {'id': 1})
    response.json.side_effect = ValueError('Expecting value')
    target = _make_target(response)

    with pytest.raises(ClubhouseError, match='non-JSON') as excinfo:
        target.list_members()
    assert excinfo.value.status == 201
