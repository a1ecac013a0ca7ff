"""
Leaderboard projection for a room.

Players are ranked by score, highest first. Equal scores keep the room's
registration order, so the earliest registered player wins a tie.
"""

from typing import Any, Dict, List

from .player_state import Player
from .room_registry import Room

DEFAULT_LEADERBOARD_SIZE = 10


def project(room: Room, limit: int = DEFAULT_LEADERBOARD_SIZE) -> List[Player]:
    """Return at most ``limit`` players of ``room`` ordered by descending score."""
    # sorted() is stable and room.players() is in registration order
    ranked = sorted(room.players(), key=lambda player: player.score, reverse=True)
    return ranked[:limit]


def leaderboard_payload(room: Room, limit: int = DEFAULT_LEADERBOARD_SIZE) -> Dict[str, Any]:
    """Build the outbound ``leaderboard`` message for a room."""
    return {
        'type': 'leaderboard',
        'data': [player.to_dict() for player in project(room, limit)],
    }
