"""
Room-scoped broadcast channel.

Each live connection is bound to at most one room. A broadcast goes to every
connection currently bound to the target room and to nobody else. Delivery is
best-effort: a failed send is logged and the remaining connections are still
served.
"""

import json
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

# send(connection_id, text)
Transport = Callable[[str, str], None]


class BroadcastChannel(object):
    """Tracks connection-to-room bindings and fans messages out per room."""

    def __init__(self, transport: Transport):
        self.transport = transport
        self._bindings: Dict[str, str] = {}  # connection_id -> room_id

    def bind(self, connection_id: str, room_id: str):
        """Associate a connection with a room, replacing any previous room."""
        self._bindings[connection_id] = room_id

    def unbind(self, connection_id: str):
        self._bindings.pop(connection_id, None)

    def room_of(self, connection_id: str) -> Optional[str]:
        return self._bindings.get(connection_id)

    def members(self, room_id: str) -> List[str]:
        """List the connections currently bound to room_id."""
        return [cid for cid, rid in self._bindings.items() if rid == room_id]

    def broadcast(self, room_id: str, payload: Dict[str, Any]) -> int:
        """Send payload as JSON text to every connection in room_id.

        Returns the number of connections the message was handed to.
        """
        text = json.dumps(payload)
        delivered = 0
        for connection_id in self.members(room_id):
            try:
                self.transport(connection_id, text)
            except Exception as e:
                logger.warning(f"Delivery to {connection_id} in room '{room_id}' failed: {e}")
                continue
            delivered += 1
        logger.debug(f"Broadcast {payload.get('type')} to room '{room_id}' ({delivered} connections)")
        return delivered
