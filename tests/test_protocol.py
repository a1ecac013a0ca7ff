"""
Unit tests for inbound message decoding.
"""

import json

import pytest

from src.bingo.player_state import LineCompletion
from src.bingo.protocol import (IgnoredEvent, JoinEvent, RegisterEvent,
                                ResetEvent, UpdateEvent, decode_event)


def test_join():
    assert decode_event('{"type": "join", "roomId": "agile"}') == JoinEvent(room_id="agile")


def test_register():
    event = decode_event({'type': 'register', 'roomId': 'r1', 'playerId': 'p1', 'name': 'Ann'})
    assert event == RegisterEvent(room_id='r1', player_id='p1', name='Ann')


def test_register_without_room():
    event = decode_event({'type': 'register', 'playerId': 'p1', 'name': 'Ann'})
    assert isinstance(event, RegisterEvent)
    assert event.room_id is None


def test_register_without_name_uses_player_id():
    event = decode_event({'type': 'register', 'playerId': 'p1'})
    assert event.name == 'p1'


def test_numeric_ids_become_strings():
    event = decode_event({'type': 'reset', 'playerId': 42})
    assert event == ResetEvent(player_id='42')


def test_update():
    raw = json.dumps({
        'type': 'update', 'playerId': 'p1', 'score': 5, 'bingo': True,
        'rows': {'horizontal': [0], 'vertical': [], 'diagonal': [1]},
    })
    event = decode_event(raw)
    assert event == UpdateEvent(player_id='p1', score=5, bingo=True,
                                rows=LineCompletion(horizontal=[0], diagonal=[1]))


def test_update_without_rows():
    event = decode_event({'type': 'update', 'playerId': 'p1', 'score': 1, 'bingo': False})
    assert event.rows == LineCompletion()


def test_update_without_bingo_defaults_false():
    event = decode_event({'type': 'update', 'playerId': 'p1', 'score': 1})
    assert event.bingo is False


def test_bytes_input():
    assert decode_event(b'{"type": "reset", "playerId": "p1"}') == ResetEvent(player_id='p1')


@pytest.mark.parametrize('raw', [
    'not json',
    '[1, 2, 3]',
    '"join"',
    b'\xff\xfe',
    None,
    {'roomId': 'r1'},
    {'type': 'shout', 'roomId': 'r1'},
    {'type': 7},
    {'type': 'join'},
    {'type': 'join', 'roomId': ''},
    {'type': 'register', 'name': 'Ann'},
    {'type': 'register', 'playerId': 'p1', 'name': ['Ann']},
    {'type': 'update', 'playerId': 'p1', 'bingo': False},
    {'type': 'update', 'playerId': 'p1', 'score': -3},
    {'type': 'update', 'playerId': 'p1', 'score': 2.5},
    {'type': 'update', 'playerId': 'p1', 'score': True},
    {'type': 'update', 'playerId': 'p1', 'score': 1, 'rows': {'horizontal': 'x'}},
    {'type': 'update', 'playerId': 'p1', 'score': 1, 'bingo': 'false'},
    {'type': 'update', 'playerId': 'p1', 'score': 1, 'bingo': 1},
    {'type': 'update', 'playerId': 'p1', 'score': 1, 'bingo': None},
    {'type': 'reset'},
])
def test_malformed_messages_are_ignored(raw):
    event = decode_event(raw)
    assert isinstance(event, IgnoredEvent)
    assert event.reason


def test_unknown_type_reason_names_type():
    event = decode_event({'type': 'shout'})
    assert 'shout' in event.reason
