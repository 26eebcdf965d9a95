import pytest

from quadsim.arkanoid import BLOCKS_H, BLOCKS_W, SCR_H, Arkanoid


def test_starts_with_all_blocks():
    game = Arkanoid()
    assert game.remaining_blocks() == BLOCKS_W * BLOCKS_H
    assert game.stick is True


def test_stuck_ball_follows_platform():
    game = Arkanoid()
    game.update(0.1, left=False, right=False, launch=False)
    assert game.ball_x == game.platform_x
    assert game.ball_y == SCR_H - 0.5
    assert game.stick is True


def test_launch_releases_ball_and_it_moves():
    game = Arkanoid()
    game.update(0.1, left=False, right=False, launch=True)
    assert game.stick is False
    x, y = game.ball_x, game.ball_y
    game.update(0.1, left=False, right=False, launch=False)
    assert game.ball_x == pytest.approx(x + game.dx * 0.1)
    assert game.ball_y < y


def test_platform_moves_and_respects_edges():
    game = Arkanoid()
    game.update(0.5, left=False, right=True, launch=False)
    assert game.platform_x > 10.0
    game.platform_x = 17.5
    game.update(0.5, left=False, right=True, launch=False)
    assert game.platform_x == 17.5
    game.platform_x = 2.5
    game.update(0.5, left=True, right=False, launch=False)
    assert game.platform_x == 2.5


def test_ball_destroys_block_and_bounces():
    game = Arkanoid()
    game.stick = False
    game.ball_x, game.ball_y = 0.5, 0.3
    game.update(0.0, left=False, right=False, launch=False)
    assert game.remaining_blocks() == BLOCKS_W * BLOCKS_H - 1
    assert game.blocks[0][0] is False
    assert game.dy > 0


def test_wall_bounce_flips_horizontal_direction():
    game = Arkanoid()
    game.stick = False
    game.ball_x, game.ball_y = -0.1, 12.0
    game.update(0.0, left=False, right=False, launch=False)
    assert game.dx < 0 or game.dx == -3.5
    assert game.dx == -3.5


def test_falling_ball_resets_to_stuck():
    game = Arkanoid()
    game.stick = False
    game.dy = 3.5
    game.ball_x, game.ball_y = 1.0, SCR_H + 0.5
    game.update(0.0, left=False, right=False, launch=False)
    assert game.ball_y == 10.0
    assert game.dy < 0
    assert game.stick is True
    assert game.remaining_blocks() == BLOCKS_W * BLOCKS_H