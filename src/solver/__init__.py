"""
Solver package for Minesweeper puzzles
Deduces a replayable move sequence that clears a board
"""

from .config import SolverConfig
from .groups import (
    MINE_RISK,
    SAFE_RISK,
    Group,
    GroupEvaluation,
    evaluate_group,
    find_groups,
    partition,
    whole_region,
)
from .solver import Solver, solve

__all__ = [
    'SolverConfig',
    'Solver',
    'solve',
    'Group',
    'GroupEvaluation',
    'evaluate_group',
    'find_groups',
    'partition',
    'whole_region',
    'SAFE_RISK',
    'MINE_RISK',
]
