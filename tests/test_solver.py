"""
Unit tests for the Solver
Tests each pass and the overall move sequence on known boards
"""

import random

import pytest
from puzzle.board import Board, Status
from puzzle.moves import Move, MoveType
from puzzle.point import Point
from solver import Solver, SolverConfig, solve

WORKED_MINES = [Point(3, 1), Point(4, 2), Point(1, 1), Point(2, 2), Point(4, 4)]


@pytest.fixture
def worked_board():
    """5x5 board opened at (0, 4) with (3, 1) flagged"""
    board = Board(5, 5, WORKED_MINES)
    board.flip(Point(0, 4))
    board.flag(Point(3, 1))
    return board


class TestWorkedBoard:
    """Test cases for solving a known 5x5 board"""

    def test_move_count(self, worked_board):
        """Test the solution takes exactly 14 moves and completes the board"""
        moves = solve(worked_board)

        assert len(moves) == 14
        worked_board.apply_moves(moves)
        assert worked_board.status == Status.COMPLETE

    def test_move_order(self, worked_board):
        """Test the local deductions come first and a chord finishes the board"""
        moves = solve(worked_board)

        assert moves[0] == Move.flag(Point(2, 2))
        assert moves[1] == Move.flip(Point(2, 3))
        assert moves[-2] == Move.flag(Point(1, 1))
        assert moves[-1] == Move.flip(Point(0, 2))

    def test_pass_statistics(self, worked_board):
        """Test moves are attributed to the passes that found them"""
        solver = Solver()
        solver.solve(worked_board)

        assert solver.stats == {'basic': 4, 'group': 10, 'gamble': 0, 'random': 0}

    def test_statistics_reset_between_boards(self, worked_board):
        """Test a reused solver only counts the moves of its latest board"""
        solver = Solver()
        solver.solve(worked_board)
        solver.solve(worked_board)

        assert solver.stats == {'basic': 4, 'group': 10, 'gamble': 0, 'random': 0}

    def test_original_untouched(self, worked_board):
        """Test solving doesn't modify the board passed in"""
        before = worked_board.clone()

        solve(worked_board)

        assert worked_board.tiles == before.tiles
        assert worked_board.status == Status.IN_PROGRESS
        assert worked_board.tiles_flipped == before.tiles_flipped


class TestBasicPass:
    """Test cases for local deductions"""

    def test_flags_forced_neighbours(self):
        """Test a tile with as many unflipped neighbours as its value flags them"""
        board = Board(4, 2, [Point(0, 0), Point(3, 1)])
        board.flip(Point(1, 0))
        board.flip(Point(0, 1))
        board.flip(Point(1, 1))

        moves = Solver().basic_pass(board)

        assert moves == [Move.flag(Point(0, 0)), Move.flip(Point(1, 1))]
        assert board.get_tile_at(Point(0, 0)).is_flagged
        assert board.get_tile_at(Point(2, 0)).is_flipped
        assert board.get_tile_at(Point(2, 1)).is_flipped
        assert board.status == Status.IN_PROGRESS

    def test_flagged_neighbours_count_as_unflipped(self):
        """Test flags count towards the unflipped total when deciding to flag"""
        board = Board(4, 2, [Point(0, 0), Point(2, 0)])
        for position in (Point(1, 0), Point(0, 1), Point(1, 1), Point(2, 1)):
            board.flip(position)
        board.flag(Point(0, 0))

        moves = Solver().basic_pass(board)

        assert moves == [Move.flag(Point(2, 0)), Move.flip(Point(2, 1))]
        assert board.get_tile_at(Point(2, 0)).is_flagged
        assert board.status == Status.COMPLETE

    def test_chords_satisfied_tile(self):
        """Test each satisfied tile is flipped as one chord move"""
        board = Board(3, 3, [Point(1, 0)])
        board.flip(Point(2, 2))
        board.flag(Point(1, 0))

        moves = Solver().basic_pass(board)

        assert moves == [Move.flip(Point(0, 1)), Move.flip(Point(1, 1))]
        assert board.status == Status.COMPLETE

    def test_nothing_to_deduce(self):
        """Test an ambiguous board produces no basic moves"""
        board = Board(3, 1, [Point(0, 0)])
        board.flip(Point(1, 0))

        assert Solver().basic_pass(board) == []

    def test_refused_flags_not_recorded(self):
        """Test flags the budget refuses don't appear as moves"""
        board = Board(3, 1, [Point(0, 0)])
        board.flip(Point(1, 0))
        board.flag(Point(2, 0))
        board.get_tile(1).value = 2

        assert Solver().basic_pass(board) == []


class TestGroupPass:
    """Test cases for group enumeration moves"""

    def test_gamble_on_least_risky(self):
        """Test an even split flips the lowest index tile"""
        board = Board(3, 1, [Point(0, 0)])
        board.flip(Point(1, 0))
        solver = Solver()

        moves = solver.group_pass(board)

        assert moves == [Move.flip(Point(0, 0))]
        assert board.status == Status.FAILED
        assert solver.stats['gamble'] == 1

    def test_safe_flips_before_flags(self):
        """Test certain moves are applied in ascending risk order"""
        board = Board(5, 5, WORKED_MINES)
        board.flip(Point(0, 4))
        board.flag(Point(3, 1))
        board.flag(Point(2, 2))
        board.flip(Point(3, 2))

        moves = Solver().group_pass(board)

        kinds = [move.kind for move in moves]
        assert kinds == [MoveType.FLIP] * 8 + [MoveType.FLAG] * 2
        assert moves[-2:] == [Move.flag(Point(4, 2)), Move.flag(Point(4, 4))]

    def test_untouched_board_needs_random(self):
        """Test a board with no flipped tiles gives the group pass nothing"""
        board = Board(6, 6, [Point(2, 2)])

        assert Solver().group_pass(board) == []


class TestRandomMove:
    """Test cases for the random fallback"""

    def test_random_move_flips_open_tile(self):
        """Test the fallback flips an unflipped, unflagged tile"""
        board = Board(4, 4, [Point(0, 0)])
        board.flag(Point(0, 0))
        solver = Solver(rng=random.Random(3))

        move = solver.random_move(board)

        assert move.kind == MoveType.FLIP
        assert move.position != Point(0, 0)
        assert board.get_tile_at(move.position).is_flipped
        assert solver.stats['random'] == 1

    def test_seeded_fallback_repeats(self):
        """Test the same seed picks the same tile"""
        first = Solver(SolverConfig(seed=12)).random_move(Board(6, 6, [Point(3, 3)]))
        second = Solver(SolverConfig(seed=12)).random_move(Board(6, 6, [Point(3, 3)]))

        assert first == second


class TestSpecialBoards:
    """Test cases for boards at the edges of the state machine"""

    def test_no_mines(self):
        """Test an empty board is cleared with a single flip"""
        board = Board(3, 3)

        moves = solve(board)

        assert moves == [Move.flip(Point(0, 0))]

    def test_finished_board(self):
        """Test a finished board needs no moves"""
        board = Board(1, 1)
        board.flip(Point(0, 0))

        assert solve(board) == []

    def test_unopened_board_terminates(self):
        """Test solving from scratch reaches a final status"""
        board = Board(6, 6, [Point(2, 2), Point(5, 0)])
        solver = Solver(rng=random.Random(1))

        moves = solver.solve(board)

        assert moves
        assert solver.staging.status != Status.IN_PROGRESS
        board.apply_moves(moves)
        assert board.status == solver.staging.status


class TestConfig:
    """Test cases for solver configuration"""

    def test_defaults(self):
        """Test default settings"""
        config = SolverConfig()

        assert config.group_size_limit == 18
        assert config.seed is None

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped when loading settings"""
        config = SolverConfig.from_dict({'group_size_limit': 10, 'seed': 4, 'colour': 'red'})

        assert config.group_size_limit == 10
        assert config.seed == 4

    def test_invalid_limit(self):
        """Test a group size limit below one is rejected"""
        with pytest.raises(ValueError):
            SolverConfig(group_size_limit=0)

    def test_small_limit_still_solves(self, worked_board):
        """Test the solver still finishes when groups are mostly skipped"""
        solver = Solver(SolverConfig(group_size_limit=2, seed=0))

        moves = solver.solve(worked_board)

        worked_board.apply_moves(moves)
        assert worked_board.status == solver.staging.status
        assert worked_board.status != Status.IN_PROGRESS
