"""
Puzzle Coordinates
Maps between 2D tile positions and linear tile indices, and computes neighbours
"""

from dataclasses import dataclass
from typing import List

# Largest coordinate value a board may use on either axis
MAX_COORDINATE = (1 << 16) - 1


@dataclass(frozen=True)
class Point:
    """A tile position on the board"""
    x: int
    y: int

    def to_index(self, width: int) -> int:
        """Linear tile index of this point on a board of the given width"""
        return self.y * width + self.x

    @classmethod
    def from_index(cls, index: int, width: int) -> 'Point':
        """
        Create a point from a linear tile index

        Args:
            index: Linear tile index
            width: Width of the board

        Returns:
            The point at that index

        Raises:
            ValueError: If the index implies a y coordinate beyond MAX_COORDINATE
        """
        if index // width > MAX_COORDINATE:
            raise ValueError("Unsupported puzzle dimensions.")
        return cls(index % width, index // width)

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


def neighbours(position: Point, width: int, height: int) -> List[Point]:
    """
    Get the up-to-8 tiles surrounding a position, clipped at the board edges

    The result is ordered by ascending linear index.
    """
    result = []
    for dy in [-1, 0, 1]:
        for dx in [-1, 0, 1]:
            if dx == 0 and dy == 0:
                continue
            nx, ny = position.x + dx, position.y + dy
            if 0 <= nx < width and 0 <= ny < height:
                result.append(Point(nx, ny))
    return result


def neighbour_indices(index: int, width: int, height: int) -> List[int]:
    """Same as neighbours() but working on linear indices"""
    x, y = index % width, index // width
    result = []
    for dy in [-1, 0, 1]:
        for dx in [-1, 0, 1]:
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                result.append(ny * width + nx)
    return result
