"""
Unit tests for the RoomRegistry and Room classes.
"""

from src.bingo.player_state import Player
from src.bingo.room_registry import Room, RoomRegistry


class TestRoomRegistry:
    """Test cases for RoomRegistry class methods."""

    def setup_method(self):
        """Set up a fresh RoomRegistry instance for each test."""
        self.registry = RoomRegistry()

    def test_empty_initially(self):
        assert len(self.registry) == 0
        assert self.registry.list_rooms() == []

    def test_ensure_room_creates(self):
        room = self.registry.ensure_room("r1")
        assert isinstance(room, Room)
        assert room.id == "r1"
        assert len(room) == 0
        assert self.registry.list_rooms() == ["r1"]

    def test_ensure_room_idempotent(self):
        """Test that ensure_room returns the same room every time."""
        room1 = self.registry.ensure_room("r1")
        room1.add_player(Player(id="p1", name="Ann"))
        room2 = self.registry.ensure_room("r1")
        assert room1 is room2
        assert len(self.registry) == 1
        assert room2.has_player("p1")

    def test_find_room_does_not_create(self):
        assert self.registry.find_room("missing") is None
        assert len(self.registry) == 0

    def test_empty_rooms_are_kept(self):
        """Test that a room stays registered after its last player leaves."""
        room = self.registry.ensure_room("r1")
        room.add_player(Player(id="p1", name="Ann"))
        room.remove_player("p1")
        assert self.registry.find_room("r1") is room
        assert len(room) == 0


class TestRoom:
    """Test cases for Room class methods."""

    def setup_method(self):
        self.room = Room("r1")

    def test_add_and_get_player(self):
        player = Player(id="p1", name="Ann")
        self.room.add_player(player)
        assert self.room.get_player("p1") is player
        assert self.room.has_player("p1")
        assert len(self.room) == 1

    def test_get_missing_player(self):
        assert self.room.get_player("nobody") is None
        assert not self.room.has_player("nobody")

    def test_add_same_id_replaces(self):
        """Test that re-adding a player id replaces instead of duplicating."""
        self.room.add_player(Player(id="p1", name="Ann", score=5))
        self.room.add_player(Player(id="p1", name="Annie"))
        assert len(self.room) == 1
        assert self.room.get_player("p1").name == "Annie"
        assert self.room.get_player("p1").score == 0

    def test_players_in_registration_order(self):
        for pid in ("a", "b", "c"):
            self.room.add_player(Player(id=pid, name=pid))
        assert [p.id for p in self.room.players()] == ["a", "b", "c"]

    def test_replaced_player_moves_to_end(self):
        for pid in ("a", "b", "c"):
            self.room.add_player(Player(id=pid, name=pid))
        self.room.add_player(Player(id="a", name="a again"))
        assert [p.id for p in self.room.players()] == ["b", "c", "a"]

    def test_remove_player(self):
        player = Player(id="p1", name="Ann")
        self.room.add_player(player)
        assert self.room.remove_player("p1") is player
        assert len(self.room) == 0

    def test_remove_missing_player(self):
        """Test that removing an unknown player is harmless."""
        assert self.room.remove_player("nobody") is None
