# src/tests/ball_tests.py
"""
Kinematics checks for Ball (gravity, ground/gap contact, ceiling, jump gating).

Usage (from repo root):
  python -m src.tests.ball_tests
  pytest src/tests/ball_tests.py
"""

from __future__ import annotations
import math
import sys

from src.game.ball import Ball
from src.game.level import Gap
from src.game.config import GRAVITY, JUMP_FORCE, BALL_RADIUS, CEILING_BOUNCE

PLATFORM_Y = 390.0


def test_jump_only_when_grounded():
    b = Ball.on_platform(200, PLATFORM_Y)
    assert b.grounded
    assert b.try_jump()
    assert b.vy == -JUMP_FORCE and not b.grounded

    b.vy = -3.0
    assert not b.try_jump(), "airborne jump must be ignored"
    assert b.vy == -3.0, "ignored jump changed velocity"


def test_rests_on_platform():
    b = Ball.on_platform(200, PLATFORM_Y)
    for _ in range(10):
        landed = b.update_physics(PLATFORM_Y, [])
        assert not landed
    assert b.y == PLATFORM_Y - BALL_RADIUS
    assert b.vy == 0.0 and b.grounded


def test_landing_reported_once():
    b = Ball(x=200, y=300, vy=0.0, grounded=False)
    landings = 0
    for _ in range(120):
        landings += int(b.update_physics(PLATFORM_Y, []))
    assert landings == 1
    assert b.grounded and b.bottom == PLATFORM_Y


def test_full_jump_arc_lands_back():
    b = Ball.on_platform(200, PLATFORM_Y)
    b.try_jump()
    ticks = 0
    while not b.grounded and ticks < 200:
        b.update_physics(PLATFORM_Y, [])
        ticks += 1
    assert b.grounded
    # up and down under constant gravity: ~2 * JUMP_FORCE / GRAVITY ticks
    assert abs(ticks - 2 * JUMP_FORCE / GRAVITY) <= 2


def test_no_ground_over_gap():
    b = Ball.on_platform(200, PLATFORM_Y)
    gap = Gap(x=180, w=60, depth=60)
    b.update_physics(PLATFORM_Y, [gap])
    assert not b.grounded
    assert math.isclose(b.vy, GRAVITY)
    assert b.bottom > PLATFORM_Y


def test_gap_edge_is_half_open():
    gap = Gap(x=180, w=60, depth=60)
    assert gap.spans(180) and gap.spans(239.9)
    assert not gap.spans(240) and not gap.spans(179.9)


def test_ceiling_bounce():
    b = Ball(x=200, y=16, vy=-10.0, grounded=False)
    b.update_physics(PLATFORM_Y, [])
    assert b.y == BALL_RADIUS
    assert math.isclose(b.vy, (-10.0 + GRAVITY) * CEILING_BOUNCE)
    assert b.vy > 0


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_")]
    try:
        for t in tests:
            t()
            print(f"✓ {t.__name__}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 All ball tests passed")


if __name__ == "__main__":
    main()
