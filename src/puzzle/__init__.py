"""
Puzzle package initialization
"""

from .point import Point, MAX_COORDINATE, neighbours, neighbour_indices
from .moves import Move, MoveType
from .board import Board, Status, Tile
from .generator import (
    PRESETS,
    generate,
    generate_preset,
    generate_with_difficulty,
    generate_with_mines,
    generate_with_probability,
    generate_with_total,
)

__all__ = [
    'Point', 'MAX_COORDINATE', 'neighbours', 'neighbour_indices',
    'Move', 'MoveType',
    'Board', 'Status', 'Tile',
    'PRESETS', 'generate', 'generate_preset', 'generate_with_difficulty',
    'generate_with_mines', 'generate_with_probability', 'generate_with_total',
]
