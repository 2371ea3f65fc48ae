"""
Puzzle Generator
Builds boards from explicit mine positions, a mine probability or a mine total
"""

import logging
import random
from numbers import Real
from typing import Iterable, Optional, Union

from .board import Board
from .point import Point

logger = logging.getLogger(__name__)

# Preset sizes (width, height, mines)
PRESETS = {
    'beginner': (9, 9, 10),
    'intermediate': (16, 16, 40),
    'expert': (30, 16, 99)
}


def _rng_or_default(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def _check_click(width: int, height: int, click: Point):
    if not (0 <= click.x < width and 0 <= click.y < height):
        raise ValueError(f"First click ({click.x}, {click.y}) is outside the puzzle bounds.")


def _open(board: Board, click: Optional[Point]) -> Board:
    """Flood-fill the first click so the board is handed over already started"""
    if click is not None:
        board.flip(click)
    return board


def generate_with_mines(width: int, height: int, mines: Iterable[Point]) -> Board:
    """Generate a board with mines at exactly the given positions"""
    board = Board(width, height, mines)
    logger.debug("Generated %dx%d board with %d mines", width, height, board.total_mines)
    return board


def generate_with_probability(width: int, height: int, probability: float, click: Point,
                              rng: Optional[random.Random] = None) -> Board:
    """
    Generate a board where every tile except the first click is a mine with the given probability

    Args:
        width: Number of columns
        height: Number of rows
        probability: Chance of each tile being a mine, between 0 and 1
        click: First clicked tile, never a mine and flipped before returning
        rng: Random source, a fresh unseeded one if omitted

    Returns:
        A board with the first click already flipped
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be between 0 and 1.")
    _check_click(width, height, click)
    rng = _rng_or_default(rng)

    mines = []
    for y in range(height):
        for x in range(width):
            position = Point(x, y)
            # Don't make the first clicked tile a mine
            if position != click and rng.random() < probability:
                mines.append(position)

    return _open(generate_with_mines(width, height, mines), click)


def generate_with_difficulty(width: int, height: int, difficulty: int, click: Point,
                             rng: Optional[random.Random] = None) -> Board:
    """Generate a board with a mine probability of (difficulty + 20) / 512"""
    if not 0 <= difficulty <= 255:
        raise ValueError("difficulty must be between 0 and 255.")
    probability = (difficulty + 20.0) / 512.0
    return generate_with_probability(width, height, probability, click, rng)


def generate_with_total(width: int, height: int, total: int, click: Point,
                        rng: Optional[random.Random] = None) -> Board:
    """Generate a board with exactly `total` mines, none of them on the first click"""
    _check_click(width, height, click)
    if total < 0 or total >= width * height:
        raise ValueError("Total mines must leave at least one safe tile.")
    rng = _rng_or_default(rng)

    eligible = [Point(x, y) for y in range(height) for x in range(width)
                if Point(x, y) != click]
    mines = rng.sample(eligible, total)

    return _open(generate_with_mines(width, height, mines), click)


def generate_preset(name: str, click: Point, rng: Optional[random.Random] = None) -> Board:
    """Generate a board for one of the named PRESETS"""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset: {name}")
    width, height, mines = PRESETS[name]
    return generate_with_total(width, height, mines, click, rng)


def generate(width: int, height: int, mines_or_probability: Union[float, Iterable[Point]],
             first_click: Optional[Point] = None,
             rng: Optional[random.Random] = None) -> Board:
    """
    Generate a board from either a mine probability or explicit mine positions

    A probability needs a first click, which is kept clear of mines. With explicit
    positions the first click, when given, must not be one of the mines.
    """
    if isinstance(mines_or_probability, Real):
        if first_click is None:
            raise ValueError("A first click is required when generating by probability.")
        return generate_with_probability(width, height, float(mines_or_probability),
                                         first_click, rng)

    mines = list(mines_or_probability)
    if first_click is not None:
        _check_click(width, height, first_click)
        if first_click in mines:
            raise ValueError(f"First click ({first_click.x}, {first_click.y}) is on a mine.")
    return _open(generate_with_mines(width, height, mines), first_click)
