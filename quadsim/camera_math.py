"""Angle helpers for a 2D camera and a first-person 3D camera controller."""

from __future__ import annotations

import math

from quadsim.geometry import Vec3

MOVE_SPEED = 0.1
LOOK_SPEED = 0.1
PITCH_LIMIT = 1.5


def short_angle_dist(a0: float, a1: float) -> float:
    """Signed shortest rotation in degrees taking a0 to a1."""
    full = 360.0
    da = math.fmod(a1 - a0, full)
    return math.fmod(2.0 * da, full) - da


def angle_lerp(a0: float, a1: float, t: float) -> float:
    """Interpolate between two angles in degrees along the shorter way."""
    return a0 + short_angle_dist(a0, a1) * t


def wrap_rotation(angle: float) -> float:
    """Bring an angle that went one step past 0..360 degrees back into range."""
    if angle >= 360.0:
        return angle - 360.0
    if angle < 0.0:
        return angle + 360.0
    return angle


class FirstPersonCamera:
    """Mouse-look camera: yaw and pitch in radians, moving on its own axes."""

    WORLD_UP = Vec3(0.0, 1.0, 0.0)

    def __init__(
        self,
        position: Vec3 = Vec3(0.0, 1.0, 0.0),
        yaw: float = 1.18,
        pitch: float = 0.0,
    ) -> None:
        self.position = position
        self.yaw = yaw
        self.pitch = pitch
        self._update_axes()

    def _update_axes(self) -> None:
        self.front = Vec3(
            math.cos(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            math.sin(self.yaw) * math.cos(self.pitch),
        ).normalize()
        self.right = self.front.cross(self.WORLD_UP).normalize()
        self.up = self.right.cross(self.front).normalize()

    @property
    def target(self) -> Vec3:
        """Point the camera looks at."""
        return self.position + self.front

    def look(self, dx: float, dy: float, delta: float) -> None:
        """Turn by a mouse movement of (dx, dy) pixels over `delta` seconds."""
        self.yaw += dx * delta * LOOK_SPEED
        self.pitch += dy * delta * -LOOK_SPEED
        self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))
        self._update_axes()

    def move(self, forward: bool, backward: bool, left: bool, right: bool) -> None:
        """Step along the view and side axes for each direction held."""
        if forward:
            self.position = self.position + self.front * MOVE_SPEED
        if backward:
            self.position = self.position - self.front * MOVE_SPEED
        if left:
            self.position = self.position - self.right * MOVE_SPEED
        if right:
            self.position = self.position + self.right * MOVE_SPEED