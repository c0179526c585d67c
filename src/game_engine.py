"""
slide and merge rules for 2048

a move walks the grid so that the tile nearest the destination edge is
handled first, sends each tile to the farthest cell it can reach and merges
it into an equal tile if that tile has not already absorbed one this move.
"""
from enum import Enum
from typing import List, NamedTuple, Set, Tuple

from game_grid import Grid
from game_logging import get_logger


logger = get_logger(__name__)

Position = Tuple[int, int]


class Direction(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def vector(self) -> Position:
        """unit step as (column, row)"""
        return _VECTORS[self]

    @classmethod
    def parse(cls, value) -> 'Direction':
        """accept a Direction or a direction name like 'left' or 'UP'"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown direction: {value!r}") from None


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class MoveResult(NamedTuple):
    changed: bool
    points: int


def build_traversals(size: int, direction: Direction) -> Tuple[List[int], List[int]]:
    """column and row orders that visit the cells nearest the target edge first"""
    xs = list(range(size))
    ys = list(range(size))
    if direction is Direction.RIGHT:
        xs.reverse()
    elif direction is Direction.DOWN:
        ys.reverse()
    return xs, ys


def find_target(grid: Grid, col: int, row: int, vector: Position, merged: Set[Position]) -> Position:
    """farthest cell the tile at (col, row) may glide to or merge into"""
    value = grid.get(col, row)
    dx, dy = vector
    x, y = col, row
    while grid.in_bounds(x + dx, y + dy):
        next_value = grid.get(x + dx, y + dy)
        if next_value == 0:
            x, y = x + dx, y + dy
        elif next_value == value and (x + dx, y + dy) not in merged:
            # cells behind are already settled, so an equal tile ends the walk
            return x + dx, y + dy
        else:
            break
    return x, y


def move(grid: Grid, direction) -> MoveResult:
    """
    slide every tile of grid towards direction, in place

    returns:
        changed: whether any tile moved or merged
        points: sum of the merged tile values created by this move
    """
    direction = Direction.parse(direction)
    vector = direction.vector
    xs, ys = build_traversals(grid.size, direction)

    # destinations of merges made during this move
    merged: Set[Position] = set()
    changed = False
    points = 0

    for y in ys:
        for x in xs:
            value = grid.get(x, y)
            if value == 0:
                continue

            target = find_target(grid, x, y, vector, merged)
            if target == (x, y):
                continue

            changed = True
            if grid.get(*target) != value:
                grid.set(*target, value)
            else:
                merged.add(target)
                grid.double(*target)
                points += value * 2
            grid.set(x, y, 0)

    logger.debug("move %s: changed=%s points=%d", direction.value, changed, points)
    return MoveResult(changed, points)


def step(grid: Grid, direction) -> bool:
    """apply a move and report whether it made progress"""
    return move(grid, direction).changed


def valid_moves(grid: Grid) -> List[Direction]:
    """directions that would change grid, checked on copies"""
    return [direction for direction in Direction if move(grid.copy(), direction).changed]


def can_move(grid: Grid) -> bool:
    """check if any move is still possible"""
    if grid.empty_cells() and grid.max_tile() > 0:
        return True
    return any(move(grid.copy(), direction).changed for direction in Direction)
