"""Particle emitters: spawning, simulating and retiring particles over time."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace

from quadsim.geometry import Vec2
from quadsim.particle_config import BatchedCurve, BlendMode, EmitterConfig


@dataclass
class Particle:
    """State of one live particle.

    `x`, `y`, `rotation` and `size` are what gets rendered; `uv` is the
    (u, v, width, height) of the sprite sheet cell; `life` is the fraction of
    the lifetime already lived; `index` is the spawn counter at birth.
    """

    x: float
    y: float
    rotation: float
    size: float
    velocity: Vec2
    angular_velocity: float
    lifetime: float
    initial_size: float
    color: tuple[float, float, float, float]
    index: float = 0.0
    life: float = 0.0
    lived: float = 0.0
    frame: int = 0
    uv: tuple[float, float, float, float] = (1.0, 1.0, 0.0, 0.0)


def _lerp(a: tuple[float, ...], b: tuple[float, ...], t: float) -> tuple[float, ...]:
    return tuple(x * (1.0 - t) + y * t for x, y in zip(a, b))


def _random_initial_vector(rng: random.Random, direction: Vec2, spread: float, velocity: float) -> Vec2:
    angle = rng.uniform(-spread / 2.0, spread / 2.0)
    cos, sin = math.cos(angle), math.sin(angle)
    rotated = Vec2(direction.x * cos - direction.y * sin, direction.x * sin + direction.y * cos)
    return rotated * velocity


def _randomized(rng: random.Random, value: float, randomness: float) -> float:
    return value - value * rng.uniform(0.0, randomness)


class Emitter:
    """Emits particles according to an EmitterConfig and advances them in time."""

    MAX_PARTICLES = 10000

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self.position = Vec2(0.0, 0.0)
        self._particles: list[Particle] = []
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_spawned = 0
        self._batched_size_curve: BatchedCurve | None = None
        self.rebuild_size_curve()
        self._blend_mode: BlendMode = config.blend_mode
        self._mesh = config.shape.mesh()
        self._mesh_dirty = False

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def particles_spawned(self) -> int:
        return self._particles_spawned

    @property
    def mesh(self) -> tuple[list[float], list[int]]:
        """Vertices and indices of the particle geometry currently in use."""
        return self._mesh

    @property
    def blend_state(self) -> tuple[str, str, str]:
        """Blend state applied at the last draw."""
        return self._blend_mode.blend_state()

    def reset(self) -> None:
        """Drop all particles and restart the emission cycle."""
        self._particles.clear()
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_spawned = 0

    def rebuild_size_curve(self) -> None:
        """Resample the size curve after the config's curve was changed."""
        curve = self.config.size_curve
        self._batched_size_curve = curve.batch() if curve is not None else None

    def update_particle_mesh(self) -> None:
        """Rebuild the particle geometry from the config at the next update."""
        self._mesh_dirty = True

    def _emit_particle(self, offset: Vec2) -> None:
        config = self.config
        rng = self._rng
        offset = offset + config.emission_shape.random_point(rng)
        size = _randomized(rng, config.size, config.size_randomness)
        rotation = _randomized(rng, config.initial_rotation, config.initial_rotation_randomness)
        origin = offset if config.local_coords else self.position + offset

        particle = Particle(
            x=origin.x,
            y=origin.y,
            rotation=rotation,
            size=size,
            index=float(self._particles_spawned),
            color=config.colors_curve.start.to_tuple(),
            velocity=_random_initial_vector(
                rng,
                config.initial_direction,
                config.initial_direction_spread,
                _randomized(rng, config.initial_velocity, config.initial_velocity_randomness),
            ),
            angular_velocity=_randomized(
                rng, config.initial_angular_velocity, config.initial_angular_velocity_randomness
            ),
            lifetime=_randomized(rng, config.lifetime, config.lifetime_randomness),
            initial_size=size,
        )
        self._particles_spawned += 1
        self._particles.append(particle)

    def emit(self, pos: Vec2, n: int) -> None:
        """Immediately emit n particles at `pos`, ignoring `emitting` and `amount`."""
        for _ in range(n):
            self._emit_particle(pos)
            self._particles_spawned += 1

    def _spawn_amount(self) -> int:
        config = self.config
        if config.amount == 0:
            return 0
        gap = (config.lifetime / config.amount) * (1.0 - config.explosiveness)
        if gap < 0.001:
            return config.amount
        return int((self._time_passed - self._last_emit_time) / gap)

    def update(self, dt: float) -> None:
        """Advance the emitter by dt seconds: spawn, move and retire particles."""
        config = self.config
        if self._mesh_dirty:
            self._mesh = config.shape.mesh()
            self._mesh_dirty = False

        if config.emitting:
            self._time_passed += dt
            for _ in range(self._spawn_amount()):
                self._last_emit_time = self._time_passed
                if self._particles_spawned < config.amount:
                    self._emit_particle(Vec2(0.0, 0.0))
                if len(self._particles) >= config.amount:
                    break

        if config.one_shot and self._time_passed > config.lifetime:
            self._time_passed = 0.0
            self._last_emit_time = 0.0
            config.emitting = False

        curve = config.colors_curve
        start, mid, end = curve.start.to_tuple(), curve.mid.to_tuple(), curve.end.to_tuple()
        for particle in self._particles:
            particle.velocity = particle.velocity + particle.velocity * (config.linear_accel * dt)
            particle.angular_velocity += particle.angular_velocity * config.angular_accel * dt
            particle.angular_velocity *= 1.0 - config.angular_damping

            # A particle with zero lifetime is treated as being at its start.
            t = particle.lived / particle.lifetime if particle.lifetime else 0.0
            if t < 0.5:
                particle.color = _lerp(start, mid, t * 2.0)
            else:
                particle.color = _lerp(mid, end, (t - 0.5) * 2.0)

            particle.x += particle.velocity.x * dt
            particle.y += particle.velocity.y * dt
            particle.rotation += particle.angular_velocity * dt
            scale = self._batched_size_curve.get(t) if self._batched_size_curve else 1.0
            particle.size = particle.initial_size * scale

            if particle.lifetime:
                particle.life = t

            particle.lived += dt
            particle.velocity = particle.velocity + config.gravity * dt

            atlas = config.atlas
            if atlas is not None:
                if particle.lifetime:
                    span = atlas.end_index - atlas.start_index
                    frame = int(particle.lived / particle.lifetime * span)
                    particle.frame = max(frame, 0) + atlas.start_index
                column, row = particle.frame % atlas.n, particle.frame // atlas.n
                particle.uv = (column / atlas.n, row / atlas.m, 1.0 / atlas.n, 1.0 / atlas.m)
            else:
                particle.uv = (0.0, 0.0, 1.0, 1.0)

        survivors: list[Particle] = []
        for particle in self._particles:
            expired = particle.lived >= particle.lifetime or particle.lived > config.lifetime
            if not expired:
                survivors.append(particle)
            elif particle.lived != particle.lifetime:
                self._particles_spawned -= 1
        self._particles = survivors

    def draw(self, pos: Vec2, dt: float) -> tuple[Particle, ...]:
        """Move the emitter to `pos`, advance it by dt and return the particles to render."""
        self.position = pos
        self.update(dt)
        if self.config.blend_mode is not self._blend_mode:
            self._blend_mode = self.config.blend_mode
        return self.particles


class EmittersCache:
    """Pool of emitters sharing one configuration, reused as effects finish."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self._cache = [
            Emitter(replace(config, emitting=False), self._rng)
            for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self.emitter = Emitter(replace(config), self._rng)
        self._active: list[tuple[Emitter, Vec2]] = []

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def spawn(self, pos: Vec2) -> None:
        """Start a fresh effect at `pos`, reusing a cached emitter when one is free."""
        emitter = self._cache.pop() if self._cache else Emitter(replace(self.config), self._rng)
        emitter.update_particle_mesh()
        emitter.config.emitting = True
        emitter.reset()
        self._active.append((emitter, pos))

    def draw(self, dt: float) -> list[tuple[Vec2, tuple[Particle, ...]]]:
        """Advance every active effect; finished ones go back to the cache.

        Returns the position and particles of each effect drawn this frame.
        """
        drawn: list[tuple[Vec2, tuple[Particle, ...]]] = []
        still_active: list[tuple[Emitter, Vec2]] = []
        for emitter, pos in self._active:
            emitter.position = pos
            emitter.update(dt)
            drawn.append((pos, emitter.particles))
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self._cache.append(emitter)
        self._active = still_active
        return drawn