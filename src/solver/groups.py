"""
Frontier Groups
Partitions the unresolved frontier into independent groups and enumerates
every mine placement in a group that satisfies the flipped tiles around it
"""

import logging
from typing import Dict, List, Tuple

from puzzle import Board, Point, neighbour_indices

logger = logging.getLogger(__name__)

# Risk scores outside the 1-255 range of uncertain tiles
SAFE_RISK = 0
MINE_RISK = 256


class Group:
    """Unflipped tiles that share constraints, and the flipped tiles constraining them"""

    def __init__(self, members, border):
        self.members: Tuple[int, ...] = tuple(sorted(members))
        self.border: Tuple[int, ...] = tuple(sorted(border))

    def __len__(self):
        return len(self.members)

    def __eq__(self, other):
        if not isinstance(other, Group):
            return NotImplemented
        return self.members == other.members and self.border == other.border

    def __repr__(self):
        return f"Group(members={self.members}, border={self.border})"


def _is_open(board: Board, index: int) -> bool:
    tile = board.get_tile(index)
    return not tile.is_flipped and not tile.is_flagged


def whole_region(board: Board) -> Group:
    """Every unflipped, unflagged tile as one group, bordered by all flipped tiles touching it"""
    members = []
    border = set()
    for index in range(board.get_size()):
        if not _is_open(board, index):
            continue
        members.append(index)
        for neighbour in neighbour_indices(index, board.width, board.height):
            if board.get_tile(neighbour).is_flipped:
                border.add(neighbour)
    return Group(members, border)


def partition(board: Board) -> List[Group]:
    """
    Split the frontier into groups that can be evaluated independently

    Starting from each unvisited unflipped tile, walks unflipped neighbours and
    crosses over flipped neighbours back into the unflipped tiles they touch.
    Only tiles next to a flipped tile become members. Regions with no flipped
    neighbour produce no group.
    """
    width, height = board.width, board.height
    visited = set()
    groups = []

    for start in range(board.get_size()):
        if start in visited or not _is_open(board, start):
            continue

        members = set()
        border = set()
        stack = [start]
        visited.add(start)

        while stack:
            index = stack.pop()
            for neighbour in neighbour_indices(index, width, height):
                tile = board.get_tile(neighbour)
                if tile.is_flipped:
                    members.add(index)
                    if neighbour in border:
                        continue
                    border.add(neighbour)
                    for reached in neighbour_indices(neighbour, width, height):
                        if reached not in visited and _is_open(board, reached):
                            visited.add(reached)
                            stack.append(reached)
                elif not tile.is_flagged and neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)

        if members:
            groups.append(Group(members, border))

    return groups


def find_groups(board: Board, size_limit: int) -> List[Group]:
    """Groups worth enumerating on the current board"""
    if board.get_size() - board.tiles_flipped < size_limit:
        group = whole_region(board)
        return [group] if group.members else []

    groups = []
    for group in partition(board):
        if len(group) >= size_limit:
            logger.debug("Skipping group of %d tiles", len(group))
            continue
        groups.append(group)
    return groups


class GroupEvaluation:
    """Mine tallies for every member of a group across its valid permutations"""

    def __init__(self, group: Group, tallies: Dict[int, int], valid_permutations: int):
        self.group = group
        self.tallies = tallies
        self.valid_permutations = valid_permutations

    def risk(self, index: int) -> int:
        """
        Risk score of a member tile

        0 when it is never a mine, 256 when it is always a mine, otherwise the
        mine frequency scaled to 1-255 and rounded up.
        """
        tally = self.tallies[index]
        valid = self.valid_permutations
        if tally == 0:
            return SAFE_RISK
        if tally == valid:
            return MINE_RISK
        return (tally * 255 + valid - 1) // valid

    @property
    def risks(self) -> Dict[int, int]:
        if self.valid_permutations == 0:
            return {}
        return {index: self.risk(index) for index in self.group.members}

    def nominations(self) -> List[Tuple[int, int]]:
        """
        (index, risk) pairs for every certain tile plus the least risky uncertain one
        """
        nominated = []
        least = None
        for index, risk in self.risks.items():
            if risk in (SAFE_RISK, MINE_RISK):
                nominated.append((index, risk))
            elif least is None or risk < least[1]:
                least = (index, risk)
        if least is not None:
            nominated.append(least)
        return nominated


def evaluate_group(board: Board, group: Group) -> GroupEvaluation:
    """
    Try every flag permutation over a group's members on a clone of the board

    A permutation is valid when it uses no more flags than mines remain and
    leaves every border tile satisfied.
    """
    staging = board.clone()
    members = group.members
    count = len(members)
    positions = [Point.from_index(index, board.width) for index in members]
    border = [Point.from_index(index, board.width) for index in group.border]
    max_mines = min(staging.mines_remaining, count)
    tallies = {index: 0 for index in members}
    valid_permutations = 0

    current = 0
    for mask in range(1 << count):
        if bin(mask).count('1') > max_mines:
            continue

        # Remove flags before placing new ones so the flag budget is never exceeded
        changed = current ^ mask
        for bit in range(count):
            if changed & (1 << bit) and current & (1 << bit):
                staging.flag(positions[bit])
        for bit in range(count):
            if changed & (1 << bit) and mask & (1 << bit):
                staging.flag(positions[bit])
        current = mask

        if not all(staging.is_tile_satisfied(position) for position in border):
            continue

        valid_permutations += 1
        for bit in range(count):
            if mask & (1 << bit):
                tallies[members[bit]] += 1

    logger.debug("Group of %d tiles has %d valid permutations", count, valid_permutations)
    return GroupEvaluation(group, tallies, valid_permutations)
