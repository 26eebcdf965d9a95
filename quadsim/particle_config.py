"""Configuration types for particle emitters: curves, shapes, colours and atlases."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from quadsim.geometry import Vec2, polar_to_cartesian


class Interpolation(Enum):
    """How the key points of a curve are joined."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass(frozen=True)
class BatchedCurve:
    """A curve sampled at even steps, ready for fast lookups."""

    points: tuple[float, ...]

    def get(self, t: float) -> float:
        """Value of the curve at `t` in 0..1, interpolated between samples."""
        if not self.points:
            raise ValueError("cannot sample an empty curve")
        last = len(self.points) - 1
        t_scaled = t * len(self.points)
        previous_ix = min(max(int(t_scaled), 0), last)
        next_ix = min(previous_ix + 1, last)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass
class Curve:
    """A piecewise curve given by (x, y) key points with x running over 0..1."""

    points: list[tuple[float, float]] = field(default_factory=list)
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def batch(self) -> BatchedCurve:
        """Sample the curve every 1/resolution along x."""
        if self.interpolation is not Interpolation.LINEAR:
            raise ValueError("only linear interpolation can be batched")
        step = 1.0 / self.resolution
        x = 0.0
        samples: list[float] = []
        for (start_x, start_y), (end_x, end_y) in zip(self.points, self.points[1:]):
            span = end_x - start_x
            while x <= end_x:
                t = (x - start_x) / span if span else 1.0
                samples.append(start_y + (end_y - start_y) * t)
                x += step
        return BatchedCurve(tuple(samples))


@dataclass(frozen=True)
class Color:
    """RGBA colour with components in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        """Build a colour from 0..255 byte components."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


WHITE = Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class ColorCurve:
    """Colour of a particle at the start, middle and end of its life."""

    start: Color = WHITE
    mid: Color = WHITE
    end: Color = WHITE


class EmissionShape:
    """Region in which new particles appear, relative to the emitter."""

    def random_point(self, rng: random.Random) -> Vec2:
        raise TypeError(f"{type(self).__name__} is not a concrete emission shape")


@dataclass(frozen=True)
class PointEmission(EmissionShape):
    """All particles start at the emitter position."""

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class RectEmission(EmissionShape):
    """Particles start anywhere in a rectangle centred on the emitter."""

    width: float
    height: float

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(
            rng.uniform(-self.width / 2.0, self.width / 2.0),
            rng.uniform(-self.height / 2.0, self.height / 2.0),
        )


@dataclass(frozen=True)
class SphereEmission(EmissionShape):
    """Particles start uniformly inside a disc centred on the emitter."""

    radius: float

    def random_point(self, rng: random.Random) -> Vec2:
        rho = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
        phi = rng.uniform(0.0, math.pi * 2.0)
        return polar_to_cartesian(rho, phi)


class ParticleShape:
    """Geometry of a single particle.

    `mesh()` returns interleaved vertices (position xyz, uv, colour rgba; nine
    floats per vertex) and triangle indices.
    """

    def mesh(self) -> tuple[list[float], list[int]]:
        raise TypeError(f"{type(self).__name__} is not a concrete particle shape")


@dataclass(frozen=True)
class RectangleShape(ParticleShape):
    """A quad, stretched horizontally by the aspect ratio."""

    aspect_ratio: float = 1.0

    def mesh(self) -> tuple[list[float], list[int]]:
        a = self.aspect_ratio
        vertices = [
            -1.0 * a, -1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0,
            1.0 * a, -1.0, 0.0, 1.0, 0.0, 1.0, 1.0, 1.0, 1.0,
            1.0 * a, 1.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0,
            -1.0 * a, 1.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0,
        ]
        return vertices, [0, 1, 2, 0, 2, 3]


@dataclass(frozen=True)
class CircleShape(ParticleShape):
    """A triangle fan around the centre with the given number of segments."""

    subdivisions: int

    def mesh(self) -> tuple[list[float], list[int]]:
        vertices = [0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0]
        indices: list[int] = []
        for i in range(self.subdivisions + 1):
            angle = i / self.subdivisions * math.pi * 2.0
            rx, ry = math.cos(angle), math.sin(angle)
            vertices.extend([rx, ry, 0.0, rx, ry, 1.0, 1.0, 1.0, 1.0])
            if i != self.subdivisions:
                indices.extend([0, i + 1, i + 2])
        return vertices, indices


@dataclass(frozen=True)
class CustomMeshShape(ParticleShape):
    """User supplied vertices and indices."""

    vertices: tuple[float, ...]
    indices: tuple[int, ...]

    def mesh(self) -> tuple[list[float], list[int]]:
        return list(self.vertices), list(self.indices)


@dataclass(frozen=True)
class ParticleMaterial:
    """Custom vertex and fragment shader sources for particles."""

    vertex: str
    fragment: str


class BlendMode(Enum):
    """How overlapping particles combine."""

    ALPHA = "alpha"
    ADDITIVE = "additive"

    def blend_state(self) -> tuple[str, str, str]:
        """(equation, source factor, destination factor) for this mode."""
        if self is BlendMode.ALPHA:
            return ("add", "source_alpha", "one_minus_source_alpha")
        return ("add", "source_alpha", "one")


@dataclass(frozen=True)
class AtlasConfig:
    """Sprite sheet of n columns and m rows; frames start_index..end_index animate."""

    n: int
    m: int
    start_index: int
    end_index: int

    @classmethod
    def from_range(
        cls, n: int, m: int, start: int | None, end: int | None, end_inclusive: bool
    ) -> AtlasConfig:
        """Build from a frame range; an open start is 0, an open end is n*m."""
        start_index = 0 if start is None else start
        if end is None:
            end_index = n * m
        elif end_inclusive:
            if end == 0:
                raise ValueError("inclusive end of an atlas range must be positive")
            end_index = end - 1
        else:
            end_index = end
        return cls(n, m, start_index, end_index)


@dataclass
class EmitterConfig:
    """All tunable parameters of a particle emitter."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=PointEmission)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    shape: ParticleShape = field(default_factory=RectangleShape)
    emitting: bool = True
    initial_direction: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    initial_rotation: float = 0.0
    initial_rotation_randomness: float = 0.0
    initial_angular_velocity: float = 0.0
    initial_angular_velocity_randomness: float = 0.0
    angular_accel: float = 0.0
    angular_damping: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Curve | None = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    texture: Any = None
    atlas: AtlasConfig | None = None
    material: ParticleMaterial | None = None
    post_processing: bool = False