"""
Puzzle Moves
Replayable records of single board mutations
"""

from dataclasses import dataclass
from enum import Enum

from .point import Point


class MoveType(Enum):
    """Kinds of board mutation"""
    FLIP = "flip"
    FLAG = "flag"


@dataclass(frozen=True)
class Move:
    """One flip or flag applied at a position"""
    position: Point
    kind: MoveType

    @classmethod
    def flip(cls, position: Point) -> 'Move':
        return cls(position, MoveType.FLIP)

    @classmethod
    def flag(cls, position: Point) -> 'Move':
        return cls(position, MoveType.FLAG)
