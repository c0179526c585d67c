"""Tests for the slide and merge rules."""

import random

import pytest

from game_engine import (
    Direction,
    build_traversals,
    can_move,
    find_target,
    move,
    step,
    valid_moves,
)
from game_grid import Grid


def make_grid(values):
    size = int(len(values) ** 0.5)
    grid = Grid(size)
    grid.set_states(values)
    return grid


def random_grid(rng, size=4, fill=0.6):
    values = [rng.choice([2, 2, 4, 4, 8, 16]) if rng.random() < fill else 0 for _ in range(size * size)]
    return make_grid(values)


def lines_towards(grid, direction):
    """each line as (col, row) positions, starting at the edge tiles move to"""
    n = grid.size
    if direction is Direction.LEFT:
        return [[(x, y) for x in range(n)] for y in range(n)]
    if direction is Direction.RIGHT:
        return [[(x, y) for x in reversed(range(n))] for y in range(n)]
    if direction is Direction.UP:
        return [[(x, y) for y in range(n)] for x in range(n)]
    return [[(x, y) for y in reversed(range(n))] for x in range(n)]


def slide_line(line):
    """merge a line towards index 0, each tile merging at most once"""
    tiles = [v for v in line if v != 0]
    merged = []
    points = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged.append(tiles[i] * 2)
            points += tiles[i] * 2
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    return merged + [0] * (len(line) - len(merged)), points


class TestDirection:
    def test_vectors(self):
        assert Direction.UP.vector == (0, -1)
        assert Direction.DOWN.vector == (0, 1)
        assert Direction.LEFT.vector == (-1, 0)
        assert Direction.RIGHT.vector == (1, 0)

    @pytest.mark.parametrize("name,expected", [
        ("left", Direction.LEFT),
        ("UP", Direction.UP),
        ("Down", Direction.DOWN),
        (Direction.RIGHT, Direction.RIGHT),
    ])
    def test_parse(self, name, expected):
        assert Direction.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Direction.parse("sideways")


class TestTraversals:
    def test_natural_order(self):
        assert build_traversals(4, Direction.UP) == ([0, 1, 2, 3], [0, 1, 2, 3])
        assert build_traversals(4, Direction.LEFT) == ([0, 1, 2, 3], [0, 1, 2, 3])

    def test_reversed_axis(self):
        assert build_traversals(4, Direction.RIGHT) == ([3, 2, 1, 0], [0, 1, 2, 3])
        assert build_traversals(4, Direction.DOWN) == ([0, 1, 2, 3], [3, 2, 1, 0])


class TestFindTarget:
    def test_glides_to_edge(self):
        grid = make_grid([0, 0, 0, 2] + [0] * 12)
        assert find_target(grid, 3, 0, Direction.LEFT.vector, set()) == (0, 0)

    def test_stops_on_equal_tile(self):
        grid = make_grid([2, 0, 0, 2] + [0] * 12)
        assert find_target(grid, 3, 0, Direction.LEFT.vector, set()) == (0, 0)

    def test_skips_merged_tile(self):
        grid = make_grid([2, 0, 0, 2] + [0] * 12)
        assert find_target(grid, 3, 0, Direction.LEFT.vector, {(0, 0)}) == (1, 0)

    def test_blocked_by_different_tile(self):
        grid = make_grid([4, 2] + [0] * 14)
        assert find_target(grid, 1, 0, Direction.LEFT.vector, set()) == (1, 0)


class TestScenarios:
    def test_down_merges_columns(self):
        grid = make_grid([2, 0, 0, 0, 2, 4, 0, 0, 8, 0, 0, 2, 8, 16, 4, 0])
        assert step(grid, Direction.DOWN) is True
        assert grid.get_states() == [0, 0, 0, 0, 0, 0, 0, 0, 4, 4, 0, 0, 16, 16, 4, 2]

    def test_down_single_merge_in_column(self):
        grid = make_grid([0, 0, 0, 0, 0, 2, 0, 4, 0, 0, 0, 4, 0, 0, 2, 4])
        assert step(grid, Direction.DOWN) is True
        assert grid.get_states() == [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 4, 0, 2, 2, 8]

    def test_left_merges_nearest_pair_first(self):
        grid = make_grid([2, 2, 0, 2, 8, 0, 0, 0, 4, 0, 4, 0, 0, 0, 0, 0])
        assert step(grid, Direction.LEFT) is True
        assert grid.get_states() == [4, 2, 0, 0, 8, 0, 0, 0, 8, 0, 0, 0, 0, 0, 0, 0]

    @pytest.mark.parametrize("direction", list(Direction))
    def test_empty_grid_never_changes(self, direction):
        grid = Grid(4)
        assert step(grid, direction) is False
        assert grid.get_states() == [0] * 16

    @pytest.mark.parametrize("direction", list(Direction))
    def test_full_grid_without_pairs_is_blocked(self, direction):
        values = [2, 4, 2, 4,
                  4, 2, 4, 2,
                  2, 4, 2, 4,
                  4, 2, 4, 2]
        grid = make_grid(values)
        assert step(grid, direction) is False
        assert grid.get_states() == values


class TestMerging:
    def test_no_double_merge(self):
        grid = make_grid([2, 2, 4, 0] + [0] * 12)
        result = move(grid, Direction.LEFT)
        assert grid.get_states()[:4] == [4, 4, 0, 0]
        assert result.points == 4

    def test_four_equal_tiles_make_two_merges(self):
        grid = make_grid([2, 2, 2, 2] + [0] * 12)
        moved, points = move(grid, Direction.LEFT)
        assert moved
        assert points == 8
        assert grid.get_states()[:4] == [4, 4, 0, 0]

    def test_merge_toward_right_edge_first(self):
        grid = make_grid([2, 2, 2, 0] + [0] * 12)
        move(grid, Direction.RIGHT)
        assert grid.get_states()[:4] == [0, 0, 2, 4]

    def test_merged_tile_does_not_absorb_again(self):
        grid = make_grid([4, 4, 8, 0] + [0] * 12)
        moved, points = move(grid, Direction.LEFT)
        assert grid.get_states()[:4] == [8, 8, 0, 0]
        assert points == 8

    def test_merge_across_gap(self):
        grid = make_grid([0, 0, 0, 0,
                          4, 0, 0, 0,
                          0, 0, 0, 0,
                          4, 0, 0, 0])
        assert move(grid, Direction.UP) == (True, 8)
        assert grid.get(0, 0) == 8
        assert grid.total() == 8

    def test_accepts_direction_names(self):
        grid = make_grid([0, 2] + [0] * 14)
        assert step(grid, "left") is True
        assert grid.get(0, 0) == 2


class TestProperties:
    """Checks over seeded random boards."""

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_line_by_line_merge(self, seed):
        rng = random.Random(seed)
        for direction in Direction:
            grid = random_grid(rng)
            before = grid.copy()
            moved, points = move(grid, direction)

            expected_points = 0
            for line in lines_towards(grid, direction):
                expected, line_points = slide_line([before.get(x, y) for x, y in line])
                assert [grid.get(x, y) for x, y in line] == expected
                expected_points += line_points

            assert points == expected_points
            assert moved == (grid != before)

    @pytest.mark.parametrize("seed", range(25))
    def test_blocked_move_leaves_grid_unchanged(self, seed):
        rng = random.Random(seed)
        for direction in Direction:
            grid = random_grid(rng, fill=0.9)
            before = grid.get_states()
            if not step(grid, direction):
                assert grid.get_states() == before

    @pytest.mark.parametrize("seed", range(25))
    def test_tile_total_is_conserved(self, seed):
        rng = random.Random(seed)
        for direction in Direction:
            grid = random_grid(rng)
            total = grid.total()
            move(grid, direction)
            assert grid.total() == total

    @pytest.mark.parametrize("seed", range(25))
    def test_compaction_toward_edge(self, seed):
        rng = random.Random(seed)
        for direction in Direction:
            grid = random_grid(rng)
            move(grid, direction)
            for line in lines_towards(grid, direction):
                values = [grid.get(x, y) for x, y in line]
                non_zero = [v for v in values if v != 0]
                assert values == non_zero + [0] * (len(values) - len(non_zero))

    @pytest.mark.parametrize("seed", range(10))
    def test_no_tile_built_from_more_than_two(self, seed):
        rng = random.Random(seed)
        for direction in Direction:
            grid = random_grid(rng)
            before = grid.copy()
            move(grid, direction)
            for line in lines_towards(grid, direction):
                original = sorted(before.get(x, y) for x, y in line if before.get(x, y))
                for x, y in line:
                    value = grid.get(x, y)
                    # a new value must be exactly twice an original tile
                    if value and value not in original:
                        assert value // 2 in original


class TestQueries:
    def test_valid_moves_leave_grid_untouched(self):
        grid = make_grid([2] + [0] * 15)
        assert valid_moves(grid) == [Direction.DOWN, Direction.RIGHT]
        assert grid.get_states() == [2] + [0] * 15

    def test_can_move_with_empty_cell(self):
        grid = make_grid([2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 0])
        assert can_move(grid)

    def test_can_move_with_pair(self):
        grid = make_grid([2, 2, 8, 16, 4, 8, 16, 32, 8, 16, 32, 64, 16, 32, 64, 128])
        assert can_move(grid)

    def test_cannot_move(self):
        grid = make_grid([2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 2])
        assert not can_move(grid)
        assert valid_moves(grid) == []

    def test_empty_grid_has_no_move(self):
        grid = Grid(4)
        assert can_move(grid) is False
        assert valid_moves(grid) == []
        assert can_move(grid) == any(step(grid.copy(), d) for d in Direction)
