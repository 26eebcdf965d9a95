"""Grid snake game logic."""

from __future__ import annotations

import random
from collections import deque

Point = tuple[int, int]

UP: Point = (0, -1)
DOWN: Point = (0, 1)
RIGHT: Point = (1, 0)
LEFT: Point = (-1, 0)

SQUARES = 16
INITIAL_SPEED = 0.3


class SnakeGame:
    """State of a snake game on a square board.

    `speed` is the number of seconds between moves; callers call `tick`
    once that much time has passed.
    """

    def __init__(self, squares: int = SQUARES, rng: random.Random | None = None) -> None:
        if squares <= 0:
            raise ValueError("board must have at least one square")
        self.squares = squares
        self._rng = rng if rng is not None else random.Random()
        self.restart()

    def _random_point(self) -> Point:
        return (self._rng.randrange(0, self.squares), self._rng.randrange(0, self.squares))

    def restart(self) -> None:
        """Start a new game with a one-square snake in the top-left corner heading right."""
        self.head: Point = (0, 0)
        self.direction: Point = RIGHT
        self.body: deque[Point] = deque()
        self.fruit: Point = self._random_point()
        self.score = 0
        self.speed = INITIAL_SPEED
        self.game_over = False

    def steer(self, direction: Point) -> None:
        """Turn the snake, unless that would reverse it onto itself."""
        if direction not in (UP, DOWN, LEFT, RIGHT):
            raise ValueError(f"not a direction: {direction!r}")
        opposite = (-self.direction[0], -self.direction[1])
        if direction != opposite:
            self.direction = direction

    def tick(self) -> None:
        """Move the snake one square, eating fruit and detecting collisions."""
        if self.game_over:
            return
        self.body.appendleft(self.head)
        self.head = (self.head[0] + self.direction[0], self.head[1] + self.direction[1])
        if self.head == self.fruit:
            self.fruit = self._random_point()
            self.score += 100
            self.speed *= 0.9
        else:
            self.body.pop()

        x, y = self.head
        if not (0 <= x < self.squares and 0 <= y < self.squares):
            self.game_over = True
        if self.head in self.body:
            self.game_over = True