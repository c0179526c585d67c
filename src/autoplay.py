"""
play 2048 with random legal moves and report statistics
"""
import argparse
import random
import time
from collections import Counter

from game_gym import Game2048Env
from game_logging import get_logger, setup_logging


logger = get_logger(__name__)


def play_game(env, rng, max_steps=None, show_board=False):
    """
    play one game of random legal moves

    returns (score, max_tile, moves)
    """
    observation, info = env.reset(seed=rng.randrange(2 ** 31))
    moves = 0

    while max_steps is None or moves < max_steps:
        actions = env.valid_actions()
        if not actions:
            break

        action = rng.choice(actions)
        observation, reward, terminated, truncated, info = env.step(action)
        moves += 1
        logger.debug("move %d: %s reward=%.0f", moves, env.action_to_direction[action].value, reward)

        if terminated or truncated:
            break

    if show_board:
        print(env.game.grid.to_string())
    return env.game.score, env.game.grid.max_tile(), moves


def run(games=10, seed=0, size=4, max_steps=None, show_board=False):
    """play several games and log a summary, returns the list of scores"""
    env = Game2048Env(size=size)
    rng = random.Random(seed)

    scores = []
    tile_achievements = Counter()
    start_time = time.time()

    for game_index in range(1, games + 1):
        score, max_tile, moves = play_game(env, rng, max_steps=max_steps, show_board=show_board)
        scores.append(score)
        tile_achievements[max_tile] += 1
        logger.info("game %d/%d: score=%d max_tile=%d moves=%d", game_index, games, score, max_tile, moves)

    elapsed = time.time() - start_time
    if scores:
        logger.info(
            "played %d games in %.1fs: avg score=%.1f best=%d",
            games, elapsed, sum(scores) / len(scores), max(scores)
        )
        for tile in sorted(tile_achievements):
            logger.info("  max tile %d: %d games", tile, tile_achievements[tile])
    return scores


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play 2048 with random legal moves")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--size", type=int, default=4, help="Grid size")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop a game after this many moves")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: GAME2048_LOG_LEVEL or INFO)")
    parser.add_argument("--show-board", action="store_true", help="Print the final board of every game")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    return run(
        games=args.games,
        seed=args.seed,
        size=args.size,
        max_steps=args.max_steps,
        show_board=args.show_board,
    )


if __name__ == "__main__":
    main()
