"""
Per-connection protocol handling for the realtime leaderboard.

A ConnectionSession holds what one live connection has told the server: the
room it joined and the player it registered. The SessionManager owns the
room registry and broadcast channel and is the single entry point for
connection open, message and close events.
"""

import threading
from enum import Enum
from typing import Dict, Optional

from loguru import logger

from .broadcast import BroadcastChannel
from .leaderboard import DEFAULT_LEADERBOARD_SIZE, leaderboard_payload
from .player_state import Player
from .protocol import (Event, IgnoredEvent, JoinEvent, RegisterEvent,
                       ResetEvent, UpdateEvent, decode_event)
from .room_registry import RoomRegistry

DEFAULT_ROOM_ID = 'ai-lowcode'


class SessionState(Enum):
    UNBOUND = 'unbound'
    ROOM_BOUND = 'room_bound'
    REGISTERED = 'registered'


class ConnectionSession(object):
    """Protocol state attached to one live connection.

    The room and the player are set independently: a connection may join a
    room before registering, and may join another room after registering.
    ``player_room_id`` remembers where the registered player lives so it can
    be removed from the right room on close.

    """
    def __init__(self, connection_id: str):
        self.connection_id = connection_id
        self.room_id: Optional[str] = None
        self.player_id: Optional[str] = None
        self.player_room_id: Optional[str] = None

    @property
    def state(self) -> SessionState:
        if self.player_id is not None:
            return SessionState.REGISTERED
        if self.room_id is not None:
            return SessionState.ROOM_BOUND
        return SessionState.UNBOUND

    def __repr__(self) -> str:
        return (f"ConnectionSession({self.connection_id!r}, state={self.state.value}, "
                f"room={self.room_id!r}, player={self.player_id!r})")


class SessionManager(object):
    """Accepts connection events and applies them to the room registry.

    Parameters
    ----------
    registry : RoomRegistry
        Rooms and their players
    channel : BroadcastChannel
        Fan-out used for leaderboard updates
    default_room_id : str, optional
        Room used when a register message carries no roomId
    leaderboard_size : int, optional
        Maximum number of entries per leaderboard message

    """
    def __init__(self, registry: RoomRegistry, channel: BroadcastChannel,
                 default_room_id: str = DEFAULT_ROOM_ID,
                 leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE):
        self.registry = registry
        self.channel = channel
        self.default_room_id = default_room_id
        self.leaderboard_size = leaderboard_size
        self.sessions: Dict[str, ConnectionSession] = {}
        # Socket.IO may dispatch on several threads; handlers must not interleave
        self._lock = threading.RLock()

    def open(self, connection_id: str) -> ConnectionSession:
        with self._lock:
            session = ConnectionSession(connection_id)
            self.sessions[connection_id] = session
            logger.info(f"Connection {connection_id} opened ({len(self.sessions)} open)")
            return session

    def get_session(self, connection_id: str) -> Optional[ConnectionSession]:
        return self.sessions.get(connection_id)

    def handle_message(self, connection_id: str, raw) -> Event:
        """Decode and apply one inbound message. Returns the decoded event."""
        event = decode_event(raw)
        with self._lock:
            session = self.sessions.get(connection_id)
            if session is None:
                # Closed or never opened; a session created here would never be closed
                logger.warning(f"Dropping message from closed connection {connection_id}")
                return event
            self.dispatch(session, event)
        return event

    def dispatch(self, session: ConnectionSession, event: Event):
        with self._lock:
            if isinstance(event, JoinEvent):
                self._join(session, event)
            elif isinstance(event, RegisterEvent):
                self._register(session, event)
            elif isinstance(event, UpdateEvent):
                self._update(session, event)
            elif isinstance(event, ResetEvent):
                self._reset(session, event)
            elif isinstance(event, IgnoredEvent):
                logger.warning(f"Dropping message from {session.connection_id}: {event.reason}")
            else:
                raise TypeError(f"Unhandled event {event!r}")

    def close(self, connection_id: str):
        """Tear down a connection, removing its registered player if any."""
        with self._lock:
            session = self.sessions.pop(connection_id, None)
            self.channel.unbind(connection_id)
            if session is None or session.state is not SessionState.REGISTERED:
                logger.info(f"Connection {connection_id} closed")
                return

            room = self.registry.ensure_room(session.player_room_id)
            room.remove_player(session.player_id)
            logger.info(f"Player '{session.player_id}' left room '{room.id}'")
            self.broadcast_leaderboard(room.id)

    def broadcast_leaderboard(self, room_id: str) -> int:
        room = self.registry.ensure_room(room_id)
        return self.channel.broadcast(room_id, leaderboard_payload(room, self.leaderboard_size))

    def _bind_room(self, session: ConnectionSession, room_id: str):
        session.room_id = room_id
        self.channel.bind(session.connection_id, room_id)
        self.registry.ensure_room(room_id)

    def _join(self, session: ConnectionSession, event: JoinEvent):
        self._bind_room(session, event.room_id)
        logger.info(f"Connection {session.connection_id} joined room '{event.room_id}'")

    def _register(self, session: ConnectionSession, event: RegisterEvent):
        room_id = event.room_id or self.default_room_id

        previous_room_id, previous_player_id = session.player_room_id, session.player_id

        self._bind_room(session, room_id)
        session.player_id = event.player_id
        session.player_room_id = room_id

        # A connection owns one player; drop the identity it registered before
        if previous_player_id is not None and \
                (previous_room_id, previous_player_id) != (room_id, event.player_id):
            old_room = self.registry.ensure_room(previous_room_id)
            old_room.remove_player(previous_player_id)
            if old_room.id != room_id:
                self.broadcast_leaderboard(old_room.id)

        room = self.registry.ensure_room(room_id)
        room.add_player(Player(id=event.player_id, name=event.name))
        logger.info(f"Player '{event.name}' ({event.player_id}) registered in room '{room_id}'")
        self.broadcast_leaderboard(room_id)

    def _target_player(self, session: ConnectionSession, player_id: str) -> Optional[Player]:
        if session.room_id is None:
            return None
        room = self.registry.ensure_room(session.room_id)
        return room.get_player(player_id)

    def _update(self, session: ConnectionSession, event: UpdateEvent):
        player = self._target_player(session, event.player_id)
        if player is None:
            logger.debug(f"Ignoring update for unknown player '{event.player_id}'")
            return
        player.apply_update(event.score, event.bingo, event.rows)
        self.broadcast_leaderboard(session.room_id)

    def _reset(self, session: ConnectionSession, event: ResetEvent):
        player = self._target_player(session, event.player_id)
        if player is None:
            logger.debug(f"Ignoring reset for unknown player '{event.player_id}'")
            return
        player.reset()
        self.broadcast_leaderboard(session.room_id)
