"""Decoding of inbound realtime messages.

Clients send JSON objects tagged with a ``type`` field. decode_event turns
each one into one of the event dataclasses below. Anything that cannot be
understood becomes an IgnoredEvent instead of raising, so the session layer
can log and drop it.

"""
import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from .player_state import LineCompletion


@dataclass
class JoinEvent(object):
    room_id: str


@dataclass
class RegisterEvent(object):
    """Register a player identity, optionally in a given room.

    Attributes
    ----------
    room_id : str, optional
        Target room. None means the server's default room.
    player_id : str
        Client-chosen player identifier
    name : str
        Display name

    """
    room_id: Optional[str]
    player_id: str
    name: str


@dataclass
class UpdateEvent(object):
    player_id: str
    score: int
    bingo: bool
    rows: LineCompletion


@dataclass
class ResetEvent(object):
    player_id: str


@dataclass
class IgnoredEvent(object):
    """A message that could not be decoded.

    Attributes
    ----------
    reason : str
        Human readable explanation, used for logging
    raw : Any
        The message as received

    """
    reason: str
    raw: Any = None


Event = Union[JoinEvent, RegisterEvent, UpdateEvent, ResetEvent, IgnoredEvent]


class _Malformed(Exception):
    pass


def _require_id(data: dict, key: str) -> str:
    value = data.get(key)
    # Numeric IDs are accepted and normalized to strings
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise _Malformed(f"'{key}' is required")
    value = str(value)
    if not value:
        raise _Malformed(f"'{key}' must not be empty")
    return value


def _decode_join(data: dict) -> JoinEvent:
    return JoinEvent(room_id=_require_id(data, 'roomId'))


def _decode_register(data: dict) -> RegisterEvent:
    player_id = _require_id(data, 'playerId')
    room_id = None
    if data.get('roomId') not in (None, ''):
        room_id = _require_id(data, 'roomId')
    name = data.get('name')
    if name is None or name == '':
        name = player_id
    elif not isinstance(name, str):
        raise _Malformed("'name' must be a string")
    return RegisterEvent(room_id=room_id, player_id=player_id, name=name)


def _decode_update(data: dict) -> UpdateEvent:
    player_id = _require_id(data, 'playerId')
    score = data.get('score')
    if isinstance(score, bool) or not isinstance(score, int):
        raise _Malformed("'score' must be an integer")
    if score < 0:
        raise _Malformed("'score' must be non-negative")
    bingo = data.get('bingo', False)
    if not isinstance(bingo, bool):
        raise _Malformed("'bingo' must be true or false")
    try:
        rows = LineCompletion.from_dict(data.get('rows'))
    except ValueError as e:
        raise _Malformed(str(e))
    return UpdateEvent(player_id=player_id, score=score, bingo=bingo, rows=rows)


def _decode_reset(data: dict) -> ResetEvent:
    return ResetEvent(player_id=_require_id(data, 'playerId'))


_DECODERS = {
    'join': _decode_join,
    'register': _decode_register,
    'update': _decode_update,
    'reset': _decode_reset,
}


def decode_event(raw: Any) -> Event:
    """Decode a raw inbound message.

    raw may be JSON text (str or bytes) or an already parsed dict. Never
    raises; undecodable input yields an IgnoredEvent.

    """
    data = raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            data = raw.decode('utf-8')
        except UnicodeDecodeError:
            return IgnoredEvent('message is not valid UTF-8', raw)
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError as e:
            return IgnoredEvent(f'invalid JSON: {e}', raw)

    if not isinstance(data, dict):
        return IgnoredEvent('message is not a JSON object', raw)

    kind = data.get('type')
    decoder = _DECODERS.get(kind) if isinstance(kind, str) else None
    if decoder is None:
        return IgnoredEvent(f'unknown message type {kind!r}', raw)

    try:
        return decoder(data)
    except _Malformed as e:
        return IgnoredEvent(f'malformed {kind} message: {e}', raw)
