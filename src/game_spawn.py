"""
new tile spawning

randomness comes from a tile source so games can be replayed and tests can
feed fixed sequences.
"""
import random
from abc import ABC, abstractmethod
from itertools import cycle

from game_logging import get_logger


logger = get_logger(__name__)

FOUR_PROBABILITY = 0.1


class BoardFullError(Exception):
    """no empty cell is left to place a new tile in"""


class TileSource(ABC):
    """where a new tile goes and whether it is a 4"""

    @abstractmethod
    def choose_index(self, count):
        """index in [0, count) among the empty cells"""

    @abstractmethod
    def is_four(self):
        """biased coin: True for a 4, False for a 2"""


class RandomTileSource(TileSource):
    def __init__(self, seed=None, four_probability=FOUR_PROBABILITY):
        self.random = random.Random(seed)
        self.four_probability = four_probability

    def choose_index(self, count):
        return self.random.randrange(count)

    def is_four(self):
        # 90% chance for 2 and 10% chance for 4
        return self.random.random() < self.four_probability


class SequenceTileSource(TileSource):
    """
    replays fixed choices, mostly for tests

    args:
        indices: empty-cell indices, taken modulo the number of empty cells
        fours: coin results; once exhausted (or if empty) every tile is a 2
    """

    def __init__(self, indices, fours=()):
        self._indices = iter(indices)
        self._fours = iter(fours)

    def choose_index(self, count):
        try:
            return next(self._indices) % count
        except StopIteration:
            raise ValueError("tile source exhausted") from None

    def is_four(self):
        return bool(next(self._fours, False))


class SeedTableSource(TileSource):
    """
    deterministic spawns driven by a table of integer seeds

    each spawn uses one seed s: the tile goes to empty cell s % count and is a
    4 when s % 9 == 0. the table is reused from the start once exhausted.
    """

    def __init__(self, seeds):
        seeds = list(seeds)
        if not seeds:
            raise ValueError("seed table must not be empty")
        self._seeds = cycle(seeds)
        self._current = None

    def choose_index(self, count):
        self._current = next(self._seeds)
        return self._current % count

    def is_four(self):
        if self._current is None:
            raise RuntimeError("choose_index must be called before is_four")
        return self._current % 9 == 0


def spawn_tile(grid, source):
    """
    add a random tile (2 or 4) to an empty space

    returns (col, row, value) of the new tile, raises BoardFullError when the
    grid has no empty cell
    """
    empty_cells = grid.empty_cells()
    if not empty_cells:
        raise BoardFullError(f"no empty cell on the {grid.size}x{grid.size} grid")

    col, row = empty_cells[source.choose_index(len(empty_cells))]
    value = 4 if source.is_four() else 2
    grid.set(col, row, value)
    logger.debug("spawned %d at (%d,%d)", value, col, row)
    return col, row, value
