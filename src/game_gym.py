import gymnasium as gym
from gymnasium import spaces
import numpy as np

from game import Game2048, GameConfig
from game_engine import Direction, move, valid_moves
from game_spawn import FOUR_PROBABILITY, RandomTileSource


class Game2048Env(gym.Env):
    """
    gymnasium environment for 2048 game

    afterstate framework:
    - the afterstate is the board after the player's move, before the new tile
    - reward is the sum of tiles created by merges in that move
    """

    metadata = {"render_modes": ["human", "ansi"]}

    # actions -> 4 possible moves
    # 0 = up, 1 = down, 2 = left, 3 = right
    action_to_direction = {
        0: Direction.UP,
        1: Direction.DOWN,
        2: Direction.LEFT,
        3: Direction.RIGHT,
    }

    def __init__(self, size=4, render_mode=None, four_probability=FOUR_PROBABILITY):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render mode: {render_mode}")
        self.render_mode = render_mode

        self.config = GameConfig(size=size, four_probability=four_probability)
        self.game = Game2048(self.config)

        self.action_space = spaces.Discrete(4)

        # raw tile values, not log2
        self.observation_space = spaces.Box(
            low=0,
            high=2 ** 17,
            shape=(size, size),
            dtype=np.int32
        )

        self.last_afterstate = None

    def _get_observation(self):
        return self.game.grid.to_array()

    def _direction(self, action):
        if action not in self.action_to_direction:
            raise ValueError(f"invalid action: {action}")
        return self.action_to_direction[action]

    def get_afterstate(self, action):
        """
        board after the move but before the random tile

        returns:
            afterstate_board: board after the move, None if the move is invalid
            reward: points earned from merging
            valid: if the move changed the board
        """
        grid = self.game.grid.copy()
        moved, points = move(grid, self._direction(int(action)))
        if not moved:
            return None, 0, False
        return grid.to_array(), points, True

    def valid_actions(self):
        """actions that would change the board"""
        allowed = set(valid_moves(self.game.grid))
        return [action for action, direction in self.action_to_direction.items() if direction in allowed]

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        if seed is not None:
            self.game.source = RandomTileSource(seed, self.config.four_probability)
        self.game.reset()
        self.last_afterstate = None

        observation = self._get_observation()
        info = {"score": self.game.score}

        if self.render_mode == "human":
            self.render()
        return observation, info

    def step(self, action):
        """take one step in the environment"""
        direction = self._direction(int(action))

        afterstate_board, _, valid = self.get_afterstate(action)
        moved, points = self.game.make_move(direction)

        reward = float(points) if moved else 0.0
        observation = self._get_observation()
        terminated = self.game.game_over
        truncated = False

        if valid:
            self.last_afterstate = afterstate_board

        info = {
            "score": self.game.score,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate_board,
            "max_tile": self.game.grid.max_tile(),
            "valid_moves": self.valid_actions(),
        }

        if self.render_mode == "human":
            self.render()
        return observation, reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        text = f"Score: {self.game.score}\n{self.game.grid.to_string()}"
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None
