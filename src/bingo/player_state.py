"""Contains the per-player data structures tracked inside a room.

Room bookkeeping lives in room_registry.py and the ranking logic in
leaderboard.py.

"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


LINE_KINDS = ('horizontal', 'vertical', 'diagonal')


@dataclass
class LineCompletion(object):
    """Dataclass that records which board lines a player has completed.

    Attributes
    ----------
    horizontal : List
        Identifiers of the completed rows
    vertical : List
        Identifiers of the completed columns
    diagonal : List
        Identifiers of the completed diagonals

    """
    horizontal: List[Any] = field(default_factory=list)
    vertical: List[Any] = field(default_factory=list)
    diagonal: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'LineCompletion':
        """Build a LineCompletion from the ``rows`` object sent by a client.

        Parameters
        ----------
        data : dict, optional
            Mapping with optional ``horizontal``, ``vertical`` and
            ``diagonal`` lists. None yields an empty record.

        Raises
        ------
        ValueError
            If ``data`` is not a mapping or one of the kinds is not a list
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"rows must be an object, got {type(data).__name__}")

        lines = {}
        for kind in LINE_KINDS:
            value = data.get(kind)
            if value is None:
                value = []
            if not isinstance(value, list):
                raise ValueError(f"rows.{kind} must be a list")
            lines[kind] = list(value)
        return cls(**lines)

    def to_dict(self) -> Dict[str, List[Any]]:
        return {
            'horizontal': list(self.horizontal),
            'vertical': list(self.vertical),
            'diagonal': list(self.diagonal),
        }


@dataclass
class Player(object):
    """Dataclass that contains the state of one registered player.

    Attributes
    ----------
    id : str
        Player identifier chosen by the client, unique within a room
    name : str
        Display name
    score : int
        Current score, never negative
    bingo : bool
        Whether the player has called bingo
    rows : LineCompletion
        Lines completed on the player's board

    """
    id: str
    name: str
    score: int = 0
    bingo: bool = False
    rows: LineCompletion = field(default_factory=LineCompletion)

    def apply_update(self, score: int, bingo: bool, rows: LineCompletion):
        """Overwrite score, bingo flag and completed lines.

        Raises ValueError if score is negative.

        """
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")
        self.score = score
        self.bingo = bingo
        self.rows = rows

    def reset(self):
        """Put the player back to a fresh board."""
        self.score = 0
        self.bingo = False
        self.rows = LineCompletion()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'bingo': self.bingo,
            'rows': self.rows.to_dict(),
        }
