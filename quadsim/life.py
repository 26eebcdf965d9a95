"""Conway's Game of Life on a bounded grid."""

from __future__ import annotations

import random
from enum import Enum
from typing import Iterable


class CellState(Enum):
    """State of a single cell."""

    ALIVE = "alive"
    DEAD = "dead"


def next_state(state: CellState, neighbors: int) -> CellState:
    """State of a cell in the next generation given its live neighbour count."""
    if state is CellState.ALIVE:
        # Underpopulation and overpopulation kill; two or three neighbours survive.
        return CellState.ALIVE if neighbors in (2, 3) else CellState.DEAD
    # Reproduction: a dead cell with exactly three neighbours comes alive.
    return CellState.ALIVE if neighbors == 3 else CellState.DEAD


class Life:
    """A width x height grid of cells stored row-major; cells outside the grid are dead."""

    def __init__(
        self, width: int, height: int, cells: Iterable[CellState] | None = None
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        if cells is None:
            self.cells = [CellState.DEAD] * (width * height)
        else:
            self.cells = list(cells)
            if len(self.cells) != width * height:
                raise ValueError(
                    f"expected {width * height} cells, got {len(self.cells)}"
                )

    def randomize(self, rng: random.Random) -> None:
        """Bring roughly one cell in five to life; other cells are left as they are."""
        self.cells = [
            CellState.ALIVE if rng.randrange(0, 5) == 0 else cell for cell in self.cells
        ]

    def neighbors(self, x: int, y: int) -> int:
        """Number of live cells among the up to eight cells around (x, y)."""
        count = 0
        for ny in range(max(y - 1, 0), min(y + 2, self.height)):
            for nx in range(max(x - 1, 0), min(x + 2, self.width)):
                if (nx, ny) == (x, y):
                    continue
                if self.cells[ny * self.width + nx] is CellState.ALIVE:
                    count += 1
        return count

    def step(self) -> None:
        """Advance the whole grid by one generation."""
        self.cells = [
            next_state(self.cells[y * self.width + x], self.neighbors(x, y))
            for y in range(self.height)
            for x in range(self.width)
        ]