"""
Minesweeper Solver
Works out a replayable sequence of moves that clears a board, using local
deductions first, then exhaustive group enumeration, then a random guess
"""

import logging
import random
from typing import List, Optional

from puzzle import Board, Move, Point, Status, neighbour_indices

from .config import SolverConfig
from .groups import MINE_RISK, SAFE_RISK, evaluate_group, find_groups

logger = logging.getLogger(__name__)


class Solver:
    """
    Deduction solver operating on a private clone of the board it is given

    Each pass applies its moves to the clone as it finds them, so the returned
    moves replay on the original board to the same final state.
    """

    def __init__(self, config: Optional[SolverConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the solver

        Args:
            config: Solver settings, defaults if omitted
            rng: Random source for the fallback move; seeded from config.seed if omitted
        """
        self.config = config if config is not None else SolverConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.stats = {'basic': 0, 'group': 0, 'gamble': 0, 'random': 0}
        self.staging: Optional[Board] = None

    def solve(self, board: Board) -> List[Move]:
        """
        Solve a board without touching it

        Returns:
            Ordered moves that, replayed on the board, drive it to a final status
        """
        self.stats = {'basic': 0, 'group': 0, 'gamble': 0, 'random': 0}
        staging = board.clone()
        self.staging = staging
        moves: List[Move] = []

        while not staging.is_finished():
            new_moves = self.basic_pass(staging)
            if not new_moves:
                new_moves = self.group_pass(staging)
                if not new_moves:
                    new_moves = [self.random_move(staging)]
            moves.extend(new_moves)

        logger.debug("Solved with %d moves, final status %s", len(moves), staging.status.value)
        return moves

    def basic_pass(self, board: Board) -> List[Move]:
        """
        Resolve tiles whose own value settles all their neighbours

        A flipped tile with as many flags as its value gets its other neighbours
        flipped in one chord. A flipped tile with as many unflipped neighbours as
        its value gets all of them flagged.
        """
        moves = []
        width, height = board.width, board.height

        for index in range(board.get_size()):
            tile = board.get_tile(index)
            if not tile.is_flipped or tile.value == 0:
                continue

            neighbours = neighbour_indices(index, width, height)
            flagged = 0
            unflipped = 0
            open_tiles = []
            for neighbour in neighbours:
                neighbour_tile = board.get_tile(neighbour)
                if neighbour_tile.is_flagged:
                    flagged += 1
                if not neighbour_tile.is_flipped:
                    unflipped += 1
                    if not neighbour_tile.is_flagged:
                        open_tiles.append(neighbour)

            if flagged == tile.value and open_tiles:
                position = Point.from_index(index, width)
                board.flip(position)
                moves.append(Move.flip(position))
            elif unflipped == tile.value:
                for neighbour in open_tiles:
                    position = Point.from_index(neighbour, width)
                    if _place_flag(board, position):
                        moves.append(Move.flag(position))

            if board.status != Status.IN_PROGRESS:
                break

        self.stats['basic'] += len(moves)
        logger.debug("Basic pass produced %d moves", len(moves))
        return moves

    def group_pass(self, board: Board) -> List[Move]:
        """
        Enumerate mine placements per frontier group and act on the results

        Tiles that are never a mine are flipped and tiles that are always a mine
        are flagged. Without any such tile, the least risky tile is flipped.
        """
        nominations = []
        for group in find_groups(board, self.config.group_size_limit):
            nominations.extend(evaluate_group(board, group).nominations())
        nominations.sort(key=lambda nomination: (nomination[1], nomination[0]))

        moves = []
        for index, risk in nominations:
            if board.status != Status.IN_PROGRESS:
                break
            position = Point.from_index(index, board.width)
            if risk == SAFE_RISK:
                if board.get_tile(index).is_flipped:
                    continue
                board.flip(position)
                moves.append(Move.flip(position))
            elif risk == MINE_RISK:
                if _place_flag(board, position):
                    moves.append(Move.flag(position))

        if moves:
            self.stats['group'] += len(moves)
        else:
            uncertain = [n for n in nominations if n[1] not in (SAFE_RISK, MINE_RISK)]
            if uncertain:
                index, risk = uncertain[0]
                position = Point.from_index(index, board.width)
                logger.debug("Gambling on %s with risk %d", position, risk)
                board.flip(position)
                moves.append(Move.flip(position))
                self.stats['gamble'] += 1

        logger.debug("Group pass produced %d moves", len(moves))
        return moves

    def random_move(self, board: Board) -> Move:
        """Flip a random unflipped tile when nothing better is known"""
        # Never empty while in progress, since flags can't outnumber the unflipped mines
        open_tiles = [i for i, t in enumerate(board.tiles) if not t.is_flipped and not t.is_flagged]
        self.stats['random'] += 1

        position = Point.from_index(self.rng.choice(open_tiles), board.width)
        logger.info("No deduction available, flipping random tile %s", position)
        board.flip(position)
        return Move.flip(position)


def _place_flag(board: Board, position: Point) -> bool:
    """Flag a tile, reporting False when the flag budget refused it"""
    board.flag(position)
    return board.get_tile_at(position).is_flagged


def solve(board: Board, config: Optional[SolverConfig] = None,
          rng: Optional[random.Random] = None) -> List[Move]:
    """Solve a board with a fresh Solver"""
    return Solver(config, rng).solve(board)
