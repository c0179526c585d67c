"""
square grid of tile values for 2048
"""
import numpy as np


class OutOfBoundsError(IndexError):
    """raised when a (col, row) coordinate lies outside the grid"""


class Grid:
    """
    size x size grid of tile values

    cells are stored row-major: cell (col, row) lives at row * size + col.
    0 means empty, anything else is a tile. the grid never checks that tiles
    are powers of two, merging only compares values for equality.
    """

    def __init__(self, size=4):
        if size <= 0:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self.cells = [0] * (size * size)

    def in_bounds(self, col, row):
        """check whether (col, row) is a position on the grid"""
        return 0 <= col < self.size and 0 <= row < self.size

    def _index(self, col, row):
        if not self.in_bounds(col, row):
            raise OutOfBoundsError(f"({col},{row}) is out of bounds for a {self.size}x{self.size} grid")
        return row * self.size + col

    def get(self, col, row):
        """value stored at (col, row)"""
        return self.cells[self._index(col, row)]

    def set(self, col, row, value):
        """store value at (col, row)"""
        if value < 0:
            raise ValueError(f"tile values must be non-negative, got {value}")
        self.cells[self._index(col, row)] = value

    def double(self, col, row):
        """double the tile at (col, row)"""
        self.set(col, row, 2 * self.get(col, row))

    def clear(self):
        """reset every cell to empty"""
        self.cells = [0] * (self.size * self.size)

    def get_states(self):
        """flat row-major copy of all cells"""
        return list(self.cells)

    def set_states(self, values):
        """replace all cells from a flat row-major sequence"""
        values = list(values)
        if len(values) != self.size * self.size:
            raise ValueError(
                f"expected {self.size * self.size} values for a {self.size}x{self.size} grid, got {len(values)}"
            )
        if any(v < 0 for v in values):
            raise ValueError("tile values must be non-negative")
        self.cells = values

    def empty_cells(self):
        """all empty positions as (col, row), row-major"""
        return [(i % self.size, i // self.size) for i, v in enumerate(self.cells) if v == 0]

    def max_tile(self):
        return max(self.cells)

    def total(self):
        return sum(self.cells)

    def copy(self):
        other = Grid(self.size)
        other.cells = list(self.cells)
        return other

    def to_array(self):
        """grid as a (size, size) int32 array indexed [row][col]"""
        return np.array(self.cells, dtype=np.int32).reshape(self.size, self.size)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __repr__(self):
        return f"Grid(size={self.size}, cells={self.cells})"

    def to_string(self):
        """
        fixed-width text rendering, each cell an 11x5 block:

        +-----------+-----------+
        |           |           |
        |           |           |
        |   32768   |     2     |
        |           |           |
        |           |           |
        +-----------+-----------+
        """
        width = 1 + self.size * 12
        height = 1 + self.size * 6

        lines = []
        for y in range(height):
            line = []
            for x in range(width):
                if y % 6 == 0:
                    line.append('+' if x % 12 == 0 else '-')
                else:
                    line.append('|' if x % 12 == 0 else ' ')
            lines.append(line)

        # write values centered on the middle line of each cell
        for row in range(self.size):
            for col in range(self.size):
                value = self.get(col, row)
                if value > 0:
                    digits = str(value)
                    start = col * 12 + 6 - len(digits) // 2
                    line = lines[3 + row * 6]
                    for offset, char in enumerate(digits):
                        line[start + offset] = char

        return ''.join(''.join(line) + '\n' for line in lines)

    def __str__(self):
        return self.to_string()
