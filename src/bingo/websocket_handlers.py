"""
Socket.IO event handlers for the realtime leaderboard.

Clients talk to the server with plain JSON messages (see protocol.py). Each
handler forwards to the SessionManager, which owns all room and player state.
"""

from flask import request
from loguru import logger

from .session import SessionManager


def init_socketio_handlers(socketio, sessions: SessionManager):
    """Initialize Socket.IO event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        sessions.open(request.sid)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        sessions.close(request.sid)

    @socketio.on('message')
    def handle_message(data):
        """JSON text frames sent with socket.send()."""
        sessions.handle_message(request.sid, data)

    @socketio.on('json')
    def handle_json(data):
        """Objects sent with socket.send(obj, json=True)."""
        sessions.handle_message(request.sid, data)

    @socketio.on_error_default
    def handle_error(e):
        logger.exception(f"Unhandled error for connection {request.sid}: {e}")
