"""Asteroids game logic: a drifting ship, bullets and splitting rocks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from quadsim.geometry import Vec2

SHIP_HEIGHT = 25.0
SHIP_BASE = 22.0
MAX_SHIP_SPEED = 5.0
SHOT_COOLDOWN = 0.5
BULLET_LIFETIME = 1.5
BULLET_SPEED = 7.0
STEER_DEGREES = 5.0
ASTEROID_COUNT = 10


@dataclass
class Ship:
    """The player's ship; `rot` is in degrees, 0 pointing up the screen."""

    pos: Vec2
    rot: float = 0.0
    vel: Vec2 = Vec2(0.0, 0.0)


@dataclass
class Bullet:
    """A shot fired at time `shot_at`."""

    pos: Vec2
    vel: Vec2
    shot_at: float
    collided: bool = False


@dataclass
class Asteroid:
    """A rock drawn as a regular polygon with `sides` sides."""

    pos: Vec2
    vel: Vec2
    rot: float
    rot_speed: float
    size: float
    sides: int
    collided: bool = False


def wrap_around(pos: Vec2, width: float, height: float) -> Vec2:
    """Move a point that left the screen to the opposite edge."""
    x, y = pos.x, pos.y
    if x > width:
        x = 0.0
    if x < 0.0:
        x = width
    if y > height:
        y = 0.0
    if y < 0.0:
        y = height
    return Vec2(x, y)


class AsteroidsGame:
    """Game state on a `width` x `height` screen.

    A new game has no asteroids, so its first update ends it as a win;
    call `reset` to start a round with a fresh field of asteroids.
    """

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        rng: random.Random | None = None,
        start_time: float = 0.0,
    ) -> None:
        self.width = width
        self.height = height
        self._rng = rng if rng is not None else random.Random()
        self.ship = Ship(self._center())
        self.bullets: list[Bullet] = []
        self.asteroids: list[Asteroid] = []
        self.last_shot = start_time
        self.game_over = False

    def _center(self) -> Vec2:
        return Vec2(self.width / 2.0, self.height / 2.0)

    @property
    def won(self) -> bool:
        """True once the round is over with every asteroid destroyed."""
        return self.game_over and not self.asteroids

    def reset(self) -> None:
        """Start a new round: ship in the centre, ten asteroids on a ring around it."""
        rng = self._rng
        center = self._center()
        self.ship = Ship(center)
        self.bullets = []
        self.asteroids = []
        self.game_over = False
        smaller = min(self.width, self.height)
        for _ in range(ASTEROID_COUNT):
            direction = Vec2(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0)).normalize()
            self.asteroids.append(
                Asteroid(
                    pos=center + direction * smaller / 2.0,
                    vel=Vec2(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0)),
                    rot=0.0,
                    rot_speed=rng.uniform(-2.0, 2.0),
                    size=smaller / 10.0,
                    sides=rng.randrange(3, 8),
                )
            )

    def _fragment(self, asteroid: Asteroid, direction: Vec2) -> Asteroid:
        rng = self._rng
        return Asteroid(
            pos=asteroid.pos,
            vel=direction.normalize() * rng.uniform(1.0, 3.0),
            rot=rng.uniform(0.0, 360.0),
            rot_speed=rng.uniform(-2.0, 2.0),
            size=asteroid.size * 0.8,
            sides=asteroid.sides - 1,
        )

    def update(self, now: float, up: bool, left: bool, right: bool, shoot: bool) -> None:
        """Advance one frame at time `now` with the given controls held."""
        if self.game_over:
            return
        ship = self.ship
        rotation = math.radians(ship.rot)
        heading = Vec2(math.sin(rotation), -math.cos(rotation))

        acc = -ship.vel / 100.0
        if up:
            acc = heading / 3.0

        if shoot and now - self.last_shot > SHOT_COOLDOWN:
            self.bullets.append(
                Bullet(
                    pos=ship.pos + heading * SHIP_HEIGHT / 2.0,
                    vel=heading * BULLET_SPEED,
                    shot_at=now,
                )
            )
            self.last_shot = now

        if right:
            ship.rot += STEER_DEGREES
        elif left:
            ship.rot -= STEER_DEGREES

        ship.vel = ship.vel + acc
        if ship.vel.length() > MAX_SHIP_SPEED:
            ship.vel = ship.vel.normalize() * MAX_SHIP_SPEED
        ship.pos = wrap_around(ship.pos + ship.vel, self.width, self.height)

        for bullet in self.bullets:
            bullet.pos = bullet.pos + bullet.vel
        for asteroid in self.asteroids:
            asteroid.pos = wrap_around(asteroid.pos + asteroid.vel, self.width, self.height)
            asteroid.rot += asteroid.rot_speed

        self.bullets = [b for b in self.bullets if b.shot_at + BULLET_LIFETIME > now]

        fragments: list[Asteroid] = []
        for asteroid in self.asteroids:
            if (asteroid.pos - ship.pos).length() < asteroid.size + SHIP_HEIGHT / 3.0:
                self.game_over = True
                break
            for bullet in self.bullets:
                if (asteroid.pos - bullet.pos).length() < asteroid.size:
                    asteroid.collided = True
                    bullet.collided = True
                    if asteroid.sides > 3:
                        fragments.append(
                            self._fragment(asteroid, Vec2(bullet.vel.y, -bullet.vel.x))
                        )
                        fragments.append(
                            self._fragment(asteroid, Vec2(-bullet.vel.y, bullet.vel.x))
                        )
                    break

        self.bullets = [
            b for b in self.bullets if b.shot_at + BULLET_LIFETIME > now and not b.collided
        ]
        self.asteroids = [a for a in self.asteroids if not a.collided] + fragments

        if not self.asteroids:
            self.game_over = True

    def ship_triangle(self) -> tuple[Vec2, Vec2, Vec2]:
        """Corners of the ship outline: nose, then the two rear corners."""
        pos = self.ship.pos
        rotation = math.radians(self.ship.rot)
        sin, cos = math.sin(rotation), math.cos(rotation)
        half_h = SHIP_HEIGHT / 2.0
        half_b = SHIP_BASE / 2.0
        nose = Vec2(pos.x + sin * half_h, pos.y - cos * half_h)
        left = Vec2(
            pos.x - cos * half_b - sin * half_h,
            pos.y - sin * half_b + cos * half_h,
        )
        right = Vec2(
            pos.x + cos * half_b - sin * half_h,
            pos.y + sin * half_b + cos * half_h,
        )
        return nose, left, right