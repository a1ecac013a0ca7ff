from typing import Dict, List, Optional

from .player_state import Player


class Room(object):
    """A logical channel grouping the players of one bingo round.

    Players are kept in registration order; registering an id that already
    exists replaces the old entry and moves it to the end.

    """
    def __init__(self, room_id: str):
        self.id = room_id
        self._players: Dict[str, Player] = {}

    def add_player(self, player: Player):
        """Insert a player, overwriting any entry with the same id."""
        self._players.pop(player.id, None)
        self._players[player.id] = player

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def has_player(self, player_id: str) -> bool:
        return player_id in self._players

    def remove_player(self, player_id: str) -> Optional[Player]:
        """Remove and return the given player, or None if it is not here."""
        return self._players.pop(player_id, None)

    def players(self) -> List[Player]:
        """Lists the room's players in registration order."""
        return list(self._players.values())

    def __len__(self) -> int:
        return len(self._players)

    def __repr__(self) -> str:
        return f"Room({self.id!r}, players={len(self._players)})"


class RoomRegistry(object):
    """Holds every room seen since the process started.

    The model here is:
    - Rooms are keyed by arbitrary string IDs chosen by the clients.
    - A room is created the first time any session event references it.
    - Rooms are never deleted. A room whose players have all left stays
      around empty, so the registry grows with the number of distinct
      room IDs ever used.

    """
    def __init__(self):
        """Initialize the RoomRegistry with no rooms."""
        self._rooms: Dict[str, Room] = {}

    def ensure_room(self, room_id: str) -> Room:
        """Returns the room for room_id, creating an empty one if absent.

        """
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id)
            self._rooms[room_id] = room
        return room

    def find_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def list_rooms(self) -> List[str]:
        """Lists the IDs of all known rooms.

        """
        return list(self._rooms.keys())

    def __len__(self) -> int:
        return len(self._rooms)
