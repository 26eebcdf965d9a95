import random

import pytest

from quadsim.life import CellState, Life, next_state

A = CellState.ALIVE
D = CellState.DEAD


def grid(rows):
    return [A if ch == "#" else D for row in rows for ch in row]


@pytest.mark.parametrize(
    "state, neighbors, expected",
    [
        (A, 0, D),
        (A, 1, D),
        (A, 2, A),
        (A, 3, A),
        (A, 4, D),
        (A, 8, D),
        (D, 3, A),
        (D, 2, D),
        (D, 4, D),
        (D, 0, D),
    ],
)
def test_next_state_rules(state, neighbors, expected):
    assert next_state(state, neighbors) is expected


def test_blinker_oscillates():
    horizontal = grid([".....", ".....", ".###.", ".....", "....."])
    vertical = grid([".....", "..#..", "..#..", "..#..", "....."])
    life = Life(5, 5, horizontal)
    life.step()
    assert life.cells == vertical
    life.step()
    assert life.cells == horizontal


def test_block_is_still_life():
    block = grid(["....", ".##.", ".##.", "...."])
    life = Life(4, 4, block)
    life.step()
    assert life.cells == block


def test_neighbors_at_corner_do_not_wrap():
    life = Life(3, 3, [A] * 9)
    assert life.neighbors(0, 0) == 3
    assert life.neighbors(1, 1) == 8
    assert life.neighbors(2, 1) == 5


def test_lonely_cell_dies():
    life = Life(3, 3, grid(["...", ".#.", "..."]))
    life.step()
    assert all(cell is D for cell in life.cells)


def test_wrong_cell_count_raises():
    with pytest.raises(ValueError):
        Life(3, 3, [D] * 8)


def test_randomize_with_always_zero_rng_makes_everything_alive():
    class ZeroRng:
        def randrange(self, start, stop):
            return 0

    life = Life(4, 3)
    life.randomize(ZeroRng())
    assert life.cells == [A] * 12


def test_randomize_is_deterministic_for_seed():
    first = Life(10, 10)
    second = Life(10, 10)
    first.randomize(random.Random(7))
    second.randomize(random.Random(7))
    assert first.cells == second.cells
    alive = sum(cell is A for cell in first.cells)
    assert 0 < alive < 100