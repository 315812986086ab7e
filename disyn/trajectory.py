"""Oscillator that traces a point bouncing inside a regular polygon."""

from __future__ import annotations

import math
from dataclasses import dataclass

from disyn.utils import TWO_PI, AlgorithmOutput

_NUDGE = 1e-4
_CHANGE_TOLERANCE = 1e-6
_MIN_SIDES = 3
_MAX_SIDES = 12
_RNG_SEED = 0x12345678


@dataclass(frozen=True)
class Vec2:
    """Immutable two-dimensional vector."""

    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction, or the zero vector if too short."""
        magnitude = self.length()
        if magnitude < 1e-6:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / magnitude, self.y / magnitude)

    def reflect(self, normal: Vec2) -> Vec2:
        """Mirror this vector about the plane with the given unit normal."""
        return self - normal.scaled(2.0 * self.dot(normal))

    def rotated(self, angle: float) -> Vec2:
        c = math.cos(angle)
        s = math.sin(angle)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)


@dataclass(frozen=True)
class _Edge:
    start: Vec2
    end: Vec2
    normal: Vec2


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class TrajectoryAlgorithm:
    """A point moving at a pitch-dependent speed and reflecting off polygon walls.

    ``param1`` picks the number of sides (3 to 12), ``param2`` the launch angle
    (0 to 360 degrees) and ``param3`` the random jitter added on each bounce
    (0 to 10 degrees). The point's x and y coordinates form the stereo output.
    """

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._sides = 6
        self._start_angle = 0.0
        self._bounce_jitter = 0.0
        self._frequency = 440.0
        self._speed = self._compute_speed(self._frequency)
        self._position = Vec2(0.0, 0.0)
        self._velocity = Vec2(self._speed, 0.0)
        self._rng_state = _RNG_SEED
        self._edges: list[_Edge] = []
        self._rebuild_polygon()
        self.reset()

    @property
    def sides(self) -> int:
        return self._sides

    @property
    def position(self) -> Vec2:
        return self._position

    @property
    def velocity(self) -> Vec2:
        return self._velocity

    def reset(self) -> None:
        self._reset_position()
        self._update_velocity()

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        self._update_params(pitch, param1, param2, param3)
        if not self._edges:
            return AlgorithmOutput(0.0, 0.0)

        current = self._position
        velocity = self._velocity
        for _ in range(2):
            following = current + velocity
            if self._is_inside(following):
                current = following
                break
            hit = self._find_penetration(following)
            if hit is None:
                current = following
                break
            distance, normal = hit
            velocity = self._apply_bounce_jitter(velocity.reflect(normal))
            current = following - normal.scaled(distance + _NUDGE)

        self._position = current
        self._velocity = velocity
        return AlgorithmOutput(current.x, current.y)

    def _compute_speed(self, frequency: float) -> float:
        return (frequency * 4.0) / self.sample_rate

    def _update_params(self, pitch: float, param1: float, param2: float, param3: float) -> None:
        next_sides = min(max(3 + _round_half_away(param1 * 9.0), _MIN_SIDES), _MAX_SIDES)
        next_angle = math.radians(param2 * 360.0)
        next_jitter = math.radians(param3 * 10.0)

        sides_changed = next_sides != self._sides
        launch_changed = abs(next_angle - self._start_angle) > _CHANGE_TOLERANCE
        jitter_changed = abs(next_jitter - self._bounce_jitter) > _CHANGE_TOLERANCE
        pitch_changed = abs(pitch - self._frequency) > _CHANGE_TOLERANCE

        if sides_changed:
            self._sides = next_sides
            self._rebuild_polygon()
        if launch_changed:
            self._start_angle = next_angle
        if jitter_changed:
            self._bounce_jitter = next_jitter
        if pitch_changed:
            self._frequency = pitch
            self._speed = self._compute_speed(pitch)

        if sides_changed or launch_changed:
            self._reset_position()
            self._update_velocity()
        elif pitch_changed:
            self._update_velocity()

    def _rebuild_polygon(self) -> None:
        rotation = math.pi / self._sides
        vertices = [
            Vec2(math.cos(theta), math.sin(theta))
            for theta in (TWO_PI * i / self._sides + rotation for i in range(self._sides))
        ]
        self._edges = []
        for start, end in zip(vertices, vertices[1:] + vertices[:1]):
            along = end - start
            normal = Vec2(along.y, -along.x).normalized()
            self._edges.append(_Edge(start, end, normal))

    def _reset_position(self) -> None:
        direction = Vec2(math.cos(self._start_angle), math.sin(self._start_angle))
        point = self._find_ray_intersection(direction)
        self._position = point.scaled(0.995) if point is not None else Vec2(0.0, 0.0)

    def _update_velocity(self) -> None:
        direction = Vec2(math.cos(self._start_angle), math.sin(self._start_angle))
        self._velocity = direction.scaled(self._speed)

    def _find_ray_intersection(self, direction: Vec2) -> Vec2 | None:
        """Closest point where a ray from the origin meets the polygon boundary."""
        closest: tuple[float, Vec2] | None = None
        for edge in self._edges:
            hit = self._intersect_ray_segment(direction, edge.start, edge.end)
            if hit is not None and (closest is None or hit[0] < closest[0]):
                closest = hit
        return closest[1] if closest is not None else None

    @staticmethod
    def _intersect_ray_segment(
        direction: Vec2, start: Vec2, end: Vec2
    ) -> tuple[float, Vec2] | None:
        segment = end - start
        denom = direction.cross(segment)
        if abs(denom) < 1e-6:
            return None
        t = start.cross(segment) / denom
        u = start.cross(direction) / denom
        if t >= 0.0 and 0.0 <= u <= 1.0:
            return t, direction.scaled(t)
        return None

    def _find_penetration(self, point: Vec2) -> tuple[float, Vec2] | None:
        """The edge the point lies furthest beyond, as (distance, normal)."""
        worst: tuple[float, Vec2] | None = None
        for edge in self._edges:
            distance = (point - edge.start).dot(edge.normal)
            if distance > 0.0 and (worst is None or distance > worst[0]):
                worst = (distance, edge.normal)
        return worst

    def _is_inside(self, point: Vec2) -> bool:
        return all(
            (edge.end - edge.start).cross(point - edge.start) >= -1e-6 for edge in self._edges
        )

    def _apply_bounce_jitter(self, vector: Vec2) -> Vec2:
        if self._bounce_jitter <= 0.0:
            return vector
        angle = (self._random_unit() * 2.0 - 1.0) * self._bounce_jitter
        return vector.rotated(angle)

    def _random_unit(self) -> float:
        self._rng_state = (self._rng_state * 1664525 + 1013904223) & 0xFFFFFFFF
        return ((self._rng_state >> 8) & 0xFFFFFF) / 16777216.0