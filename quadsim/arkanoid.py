"""Arkanoid (breakout) game logic in a 20 x 20 world."""

from __future__ import annotations

BLOCKS_W = 10
BLOCKS_H = 10
SCR_W = 20.0
SCR_H = 20.0
PLATFORM_SPEED = 3.0


class Arkanoid:
    """Ball, paddle and blocks; the ball sticks to the paddle until launched."""

    def __init__(self) -> None:
        self.blocks = [[True] * BLOCKS_W for _ in range(BLOCKS_H)]
        self.ball_x = 12.0
        self.ball_y = 7.0
        self.dx = 3.5
        self.dy = -3.5
        self.platform_x = 10.0
        self.stick = True
        self.platform_width = 5.0
        self.platform_height = 0.2

    def update(self, delta: float, left: bool, right: bool, launch: bool) -> None:
        """Advance by `delta` seconds with the given keys held."""
        half = self.platform_width / 2.0
        if right and self.platform_x < SCR_W - half:
            self.platform_x += PLATFORM_SPEED * delta
        if left and self.platform_x > half:
            self.platform_x -= PLATFORM_SPEED * delta

        if not self.stick:
            self.ball_x += self.dx * delta
            self.ball_y += self.dy * delta
        else:
            self.ball_x = self.platform_x
            self.ball_y = SCR_H - 0.5
            self.stick = not launch

        if self.ball_x <= 0.0 or self.ball_x > SCR_W:
            self.dx = -self.dx
        on_platform = (
            self.ball_y > SCR_H - self.platform_height - 0.15 / 2.0
            and self.platform_x - half <= self.ball_x <= self.platform_x + half
        )
        if self.ball_y <= 0.0 or on_platform:
            self.dy = -self.dy
        if self.ball_y >= SCR_H:
            self.ball_y = 10.0
            self.dy = -abs(self.dy)
            self.stick = True

        block_w = SCR_W / BLOCKS_W
        block_h = 7.0 / BLOCKS_H
        for j, row in enumerate(self.blocks):
            for i, alive in enumerate(row):
                if not alive:
                    continue
                block_x = i * block_w + 0.05
                block_y = j * block_h + 0.05
                if (
                    block_x <= self.ball_x < block_x + block_w
                    and block_y <= self.ball_y < block_y + block_h
                ):
                    self.dy = -self.dy
                    row[i] = False

    def remaining_blocks(self) -> int:
        """Number of blocks not yet destroyed."""
        return sum(sum(row) for row in self.blocks)