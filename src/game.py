"""
core game logic and mechanics
"""
import os
from dataclasses import dataclass
from typing import Optional

from game_engine import Direction, can_move, move
from game_grid import Grid
from game_logging import get_logger
from game_spawn import FOUR_PROBABILITY, RandomTileSource, spawn_tile


logger = get_logger(__name__)


@dataclass
class GameConfig:
    size: int = 4
    start_tiles: int = 2
    four_probability: float = FOUR_PROBABILITY
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'GameConfig':
        """read overrides from GAME2048_* environment variables"""
        config = cls()
        if "GAME2048_SIZE" in os.environ:
            config.size = int(os.environ["GAME2048_SIZE"])
        if "GAME2048_START_TILES" in os.environ:
            config.start_tiles = int(os.environ["GAME2048_START_TILES"])
        if "GAME2048_FOUR_PROBABILITY" in os.environ:
            config.four_probability = float(os.environ["GAME2048_FOUR_PROBABILITY"])
        if "GAME2048_SEED" in os.environ:
            config.seed = int(os.environ["GAME2048_SEED"])
        return config


class Game2048:
    def __init__(self, config=None, source=None):
        """
        initialize a 2048 game

        args:
            config: GameConfig, defaults to a 4x4 game with two starting tiles
            source: TileSource for new tiles, defaults to a RandomTileSource
                seeded from config.seed
        """
        self.config = config or GameConfig()
        self.source = source or RandomTileSource(self.config.seed, self.config.four_probability)
        self.grid = Grid(self.config.size)
        self.size = self.config.size
        self.score = 0
        self.best = 0
        self.game_over = False

        self._add_start_tiles()

    def _add_start_tiles(self):
        for _ in range(self.config.start_tiles):
            self.add_random_tile()

    # cell access

    def get_state(self, x, y):
        return self.grid.get(x, y)

    def set_state(self, x, y, value):
        self.grid.set(x, y, value)

    def double_state(self, x, y):
        self.grid.double(x, y)

    def get_states(self):
        return self.grid.get_states()

    def set_states(self, values):
        self.grid.set_states(values)

    @property
    def board(self):
        """rows of the grid as nested lists, board[row][col]"""
        return [self.grid.cells[row * self.size:(row + 1) * self.size] for row in range(self.size)]

    def get_score(self):
        return self.score

    def get_best(self):
        return self.best

    def set_best(self, best):
        self.best = best

    def get_size(self):
        return self.size

    # moves

    def add_random_tile(self):
        """add a random tile (2 or 4) to an empty space, BoardFullError if none is left"""
        return spawn_tile(self.grid, self.source)

    generate_new_cell = add_random_tile

    def step(self, direction):
        """
        slide tiles in direction and add merged values to the score

        does not spawn a new tile, returns whether the grid changed
        """
        moved, points = move(self.grid, direction)
        self.score += points
        self.best = max(self.best, self.score)
        return moved

    def make_move(self, direction):
        """
        make a move in the specified direction

        a move that changes the grid scores its merges and spawns a new tile,
        afterwards the game is checked for being over
        """
        if self.game_over:
            return False, 0

        direction = Direction.parse(direction)
        # work on a copy so a failing tile source leaves the game untouched
        grid = self.grid.copy()
        moved, points = move(grid, direction)

        if moved:
            spawn_tile(grid, self.source)
            self.grid = grid
            self.score += points
            self.best = max(self.best, self.score)

            # check if game is over
            if self.is_game_over():
                self.game_over = True
                logger.info("game over: score=%d max tile=%d", self.score, self.grid.max_tile())

        return moved, points

    def is_game_over(self):
        """check if game is over (no more moves possible)"""
        return not can_move(self.grid)

    def clear(self):
        """empty the grid, keep the best score and zero the current one"""
        self.grid.clear()
        self.best = max(self.best, self.score)
        self.score = 0
        self.game_over = False

    def reset(self):
        """reset the game"""
        self.clear()
        self._add_start_tiles()

    def print_board(self):
        """print the board to console"""
        print(f"Score: {self.score}  Best: {self.best}")
        print(self.grid.to_string(), end="")
        if self.game_over:
            print("GAME OVER!")
        print()

    def __str__(self):
        return self.grid.to_string()
