import math

import pytest

from disyn.trajectory import TrajectoryAlgorithm, Vec2

SR = 44100.0


def _run(algorithm, count, pitch=440.0, p1=1.0 / 3.0, p2=0.0, p3=0.0):
    return [algorithm.process(pitch, p1, p2, p3) for _ in range(count)]


def test_vec2_reflect_off_vertical_wall():
    reflected = Vec2(1.0, 2.0).reflect(Vec2(1.0, 0.0))
    assert reflected == Vec2(-1.0, 2.0)


def test_vec2_normalized_zero_stays_zero():
    assert Vec2(0.0, 0.0).normalized() == Vec2(0.0, 0.0)
    assert Vec2(3.0, 4.0).normalized().length() == pytest.approx(1.0)


def test_vec2_cross_and_dot():
    a = Vec2(1.0, 0.0)
    b = Vec2(0.0, 1.0)
    assert a.cross(b) == 1.0
    assert a.dot(b) == 0.0


def test_default_polygon_is_hexagon():
    algorithm = TrajectoryAlgorithm(SR)
    assert algorithm.sides == 6


def test_start_position_lies_just_inside_boundary():
    algorithm = TrajectoryAlgorithm(SR)
    # Hexagon with vertices at 30 degrees: the ray at 0 degrees meets the edge at cos(30).
    assert algorithm.position.x == pytest.approx(math.cos(math.pi / 6) * 0.995, rel=1e-6)
    assert algorithm.position.y == pytest.approx(0.0, abs=1e-9)


def test_sides_follow_param1():
    algorithm = TrajectoryAlgorithm(SR)
    algorithm.process(440.0, 0.0, 0.0, 0.0)
    assert algorithm.sides == 3
    algorithm.process(440.0, 1.0, 0.0, 0.0)
    assert algorithm.sides == 12


def test_step_size_bounded_by_speed():
    algorithm = TrajectoryAlgorithm(SR)
    speed = 440.0 * 4.0 / SR
    outputs = _run(algorithm, 1000, p2=0.1)
    for before, after in zip(outputs, outputs[1:]):
        step = math.hypot(after.primary - before.primary, after.secondary - before.secondary)
        assert step <= 2.0 * speed + 1e-3


def test_reflection_preserves_speed_without_jitter():
    algorithm = TrajectoryAlgorithm(SR)
    speed = 440.0 * 4.0 / SR
    _run(algorithm, 500, p2=0.2)
    assert algorithm.velocity.length() == pytest.approx(speed, rel=1e-9)


def test_reset_reproduces_path_without_jitter():
    algorithm = TrajectoryAlgorithm(SR)
    first = _run(algorithm, 300, p2=0.4)
    algorithm.reset()
    second = _run(algorithm, 300, p2=0.4)
    assert first == second


def test_two_instances_agree_with_jitter():
    a = TrajectoryAlgorithm(SR)
    b = TrajectoryAlgorithm(SR)
    assert _run(a, 500, p2=0.6, p3=1.0) == _run(b, 500, p2=0.6, p3=1.0)


def test_pitch_change_rescales_velocity():
    algorithm = TrajectoryAlgorithm(SR)
    algorithm.process(880.0, 1.0 / 3.0, 0.0, 0.0)
    assert algorithm.velocity.length() == pytest.approx(880.0 * 4.0 / SR, rel=1e-9)