"""
Minesweeper Puzzle - Board Model
Owns the tile grid, the flag/flip mutators and the completion state machine
"""

import json
from enum import Enum
from typing import Iterable, List, Optional

import numpy as np

from .moves import Move, MoveType
from .point import MAX_COORDINATE, Point, neighbour_indices


class Status(Enum):
    """Completion state of a board"""
    IN_PROGRESS = "in_progress"
    FAILED = "failed"
    COMPLETE = "complete"


# Values used by visible_array() for tiles that do not show a number
HIDDEN = -3
FLAGGED = -2
MINE = -1


class Tile:
    """A single tile on the board"""

    __slots__ = ('value', 'is_mine', 'is_flagged', 'is_flipped')

    def __init__(self, value: int = 0, is_mine: bool = False,
                 is_flagged: bool = False, is_flipped: bool = False):
        self.value = value
        self.is_mine = is_mine
        self.is_flagged = is_flagged
        self.is_flipped = is_flipped

    def copy(self) -> 'Tile':
        return Tile(self.value, self.is_mine, self.is_flagged, self.is_flipped)

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return (self.value, self.is_mine, self.is_flagged, self.is_flipped) == \
            (other.value, other.is_mine, other.is_flagged, other.is_flipped)

    def __repr__(self):
        return (f"Tile(value={self.value}, is_mine={self.is_mine}, "
                f"is_flagged={self.is_flagged}, is_flipped={self.is_flipped})")


class Board:
    """Manages the tiles of a puzzle and the rules for flagging and flipping them"""

    def __init__(self, width: int, height: int, mines: Iterable[Point] = ()):
        """
        Create a board with mines at the given positions

        Args:
            width: Number of columns
            height: Number of rows
            mines: Positions of the mines

        Raises:
            ValueError: If the dimensions are unsupported or a mine lies outside the board
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        if width > MAX_COORDINATE or height > MAX_COORDINATE:
            raise ValueError("Unsupported puzzle dimensions.")

        self.width = width
        self.height = height
        self.tiles: List[Tile] = [Tile() for _ in range(width * height)]
        self.status = Status.IN_PROGRESS
        self.tiles_flipped = 0

        total = 0
        for mine in set(mines):
            if not (0 <= mine.x < width and 0 <= mine.y < height):
                raise ValueError("Cannot place a mine outside the puzzle bounds.")
            self.tiles[mine.to_index(width)].is_mine = True
            total += 1

        self.total_mines = total
        self.mines_remaining = total
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self):
        """Calculate the number of adjacent mines for each tile"""
        for index, tile in enumerate(self.tiles):
            tile.value = sum(1 for n in self._neighbours(index) if self.tiles[n].is_mine)

    def _neighbours(self, index: int) -> List[int]:
        return neighbour_indices(index, self.width, self.height)

    def _index(self, position: Point) -> int:
        """Linear index of a position, failing fast when it is off the board"""
        if not (0 <= position.x < self.width and 0 <= position.y < self.height):
            raise IndexError(f"Position ({position.x}, {position.y}) is outside the board.")
        return position.to_index(self.width)

    def get_size(self) -> int:
        return self.width * self.height

    def get_tile(self, index: int) -> Tile:
        """Get tile at a linear index"""
        return self.tiles[index]

    def get_tile_at(self, position: Point) -> Tile:
        """Get tile at a position"""
        return self.tiles[self._index(position)]

    def is_finished(self) -> bool:
        return self.status != Status.IN_PROGRESS

    def clone(self) -> 'Board':
        """Independent copy of this board, sharing no mutable state"""
        copy = Board.__new__(Board)
        copy.width = self.width
        copy.height = self.height
        copy.tiles = [tile.copy() for tile in self.tiles]
        copy.status = self.status
        copy.tiles_flipped = self.tiles_flipped
        copy.total_mines = self.total_mines
        copy.mines_remaining = self.mines_remaining
        return copy

    def flag(self, position: Point):
        """Toggle the flag on an unflipped tile"""
        index = self._index(position)
        if self.status != Status.IN_PROGRESS:
            return

        tile = self.tiles[index]
        if tile.is_flipped:
            return

        if tile.is_flagged:
            tile.is_flagged = False
            self.mines_remaining += 1
        elif self.mines_remaining > 0:
            tile.is_flagged = True
            self.mines_remaining -= 1

        self._check_completed()

    def flip(self, position: Point) -> int:
        """
        Flip the tile at a position

        Flipping an unflipped tile flood-fills outwards through zero-value tiles.
        Flipping an already flipped tile whose flags are satisfied flips all of
        its remaining neighbours instead.

        Returns:
            Number of tiles newly flipped
        """
        index = self._index(position)
        tile = self.tiles[index]
        flipped = 0

        if tile.is_flipped:
            if self._is_satisfied(index):
                flipped = self._flood_fill(self._neighbours(index))
        elif not tile.is_flagged:
            flipped = self._flood_fill([index])

        self._check_completed()
        return flipped

    def _flood_fill(self, start: List[int]) -> int:
        """Flip tiles from the start indices, fanning out through zero-value tiles"""
        stack = list(reversed(start))
        flipped = 0

        while stack:
            if self.status != Status.IN_PROGRESS:
                break

            index = stack.pop()
            tile = self.tiles[index]
            if tile.is_flipped or tile.is_flagged:
                continue

            tile.is_flipped = True
            self.tiles_flipped += 1
            flipped += 1

            if tile.is_mine:
                self.status = Status.FAILED
                break

            if tile.value == 0:
                for neighbour in reversed(self._neighbours(index)):
                    candidate = self.tiles[neighbour]
                    if not candidate.is_flipped and not candidate.is_flagged:
                        stack.append(neighbour)

        return flipped

    def is_tile_satisfied(self, position: Point) -> bool:
        """Check if a tile has as many flagged neighbours as its value"""
        return self._is_satisfied(self._index(position))

    def _is_satisfied(self, index: int) -> bool:
        flags = sum(1 for n in self._neighbours(index) if self.tiles[n].is_flagged)
        return flags == self.tiles[index].value

    def _check_completed(self):
        """Mark the board complete once every safe tile is flipped"""
        if self.status != Status.IN_PROGRESS:
            return
        if self.tiles_flipped + self.total_mines == len(self.tiles):
            self.status = Status.COMPLETE

    def apply_move(self, move: Move):
        if move.kind == MoveType.FLIP:
            self.flip(move.position)
        else:
            self.flag(move.position)

    def apply_moves(self, moves: Iterable[Move]):
        """Replay a sequence of moves in order"""
        for move in moves:
            self.apply_move(move)

    def visible_array(self) -> np.ndarray:
        """
        Get what a player can see as a 2D array

        Returns:
            int8 array of shape (height, width) where -3 is hidden, -2 is a flag,
            -1 is a flipped mine and 0-8 is a flipped tile's value
        """
        grid = np.full((self.height, self.width), HIDDEN, dtype=np.int8)
        for index, tile in enumerate(self.tiles):
            row, col = divmod(index, self.width)
            if tile.is_flipped:
                grid[row, col] = MINE if tile.is_mine else tile.value
            elif tile.is_flagged:
                grid[row, col] = FLAGGED
        return grid

    def to_array(self) -> np.ndarray:
        """
        Get the board as a stacked array

        Returns:
            float32 array of shape (height, width, 3)
            Channels:
            0: Visible state (see visible_array)
            1: Is flipped (0 or 1)
            2: Is flagged (0 or 1)
        """
        visible = self.visible_array().astype(np.float32)
        flipped = np.array([t.is_flipped for t in self.tiles], dtype=np.float32)
        flagged = np.array([t.is_flagged for t in self.tiles], dtype=np.float32)
        shape = (self.height, self.width)
        return np.stack([visible, flipped.reshape(shape), flagged.reshape(shape)], axis=-1)

    def export_state(self, indent: Optional[int] = 2) -> str:
        """Export the current board state as a JSON string"""
        state = {
            'board_size': (self.width, self.height),
            'total_mines': self.total_mines,
            'mines_remaining': self.mines_remaining,
            'tiles_flipped': self.tiles_flipped,
            'status': self.status.value,
            'visible_board': self.visible_array().tolist(),
        }
        return json.dumps(state, indent=indent)
