# src/game/level.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .config import (
    BASE_SPEED, BASE_SPACING, MIN_SPACING_FLOOR, MAX_SPACING_FACTOR, MIN_SPAWN_STEP,
    GAP_MIN_W, GAP_MAX_W, SEED_CURSOR_MIN, SEED_CURSOR_MAX, SEED_FRONTIER_WIDTHS,
    OFFSCREEN_MARGIN, GAP_BONUS, BALL_RADIUS,
    COIN_CHANCE, COIN_RADIUS, COIN_LIFT_MIN, COIN_LIFT_MAX,
    COIN_BOB_AMPLITUDE, COIN_BOB_SPEED_MIN, COIN_BOB_SPEED_MAX,
)
from .events import EventKind, GameEvent

log = logging.getLogger("potholejumper.level")


@dataclass
class Gap:
    """A pothole: open air between x and x + w on the platform line."""
    x: float
    w: float
    depth: float           # cosmetic, viewport height - platform line
    spacing: float = 0.0   # spacing sampled when this gap was placed
    scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.w

    def spans(self, x: float) -> bool:
        return self.x <= x < self.x + self.w


@dataclass
class Coin:
    x: float
    y: float
    radius: float = COIN_RADIUS
    bob_phase: float = 0.0
    bob_speed: float = COIN_BOB_SPEED_MIN
    collected: bool = False

    @property
    def draw_y(self) -> float:
        """Vertical position including the bob offset (used for hits and drawing)."""
        return self.y + math.sin(self.bob_phase) * COIN_BOB_AMPLITUDE


def min_spacing(speed: float) -> float:
    """Screen-space spacing shrinks with speed so a fixed jump arc still fits."""
    return max(BASE_SPACING / (speed / BASE_SPEED), MIN_SPACING_FLOOR)


def max_spacing(speed: float) -> float:
    return min_spacing(speed) * MAX_SPACING_FACTOR


class LevelGen:
    """
    Endless row of potholes scrolling left, with the odd coin floating above one.
    All randomness goes through self.rng so a seed reproduces a layout.
    """
    def __init__(self, seed: int | None, width: float, platform_y: float, depth: float):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.width = float(width)
        self.platform_y = float(platform_y)
        self.depth = float(depth)
        self.gaps: List[Gap] = []
        self.coins: List[Coin] = []
        self.cursor = 0.0  # leading edge of the most recently placed gap
        self.seed_initial(BASE_SPEED)

    def set_viewport(self, width: float, platform_y: float, depth: float):
        dy = platform_y - self.platform_y
        self.width = float(width)
        self.platform_y = float(platform_y)
        self.depth = float(depth)
        for c in self.coins:
            c.y += dy

    def seed_initial(self, speed: float):
        """Pre-spawn far enough ahead that generation never visibly catches up."""
        self.gaps = []
        self.coins = []
        self.cursor = self.width + self.rng.uniform(SEED_CURSOR_MIN, SEED_CURSOR_MAX)
        while self.cursor < self.width * SEED_FRONTIER_WIDTHS:
            self._add_gap(speed)
        log.debug("seeded %d gaps, %d coins (frontier=%.1f)",
                  len(self.gaps), len(self.coins), self.cursor)

    def _add_gap(self, speed: float) -> Gap:
        w = self.rng.uniform(GAP_MIN_W, GAP_MAX_W)
        prev_x = self.gaps[-1].x if self.gaps else self.cursor
        spacing = self.rng.uniform(min_spacing(speed), max_spacing(speed))
        x = max(prev_x + spacing, self.cursor + MIN_SPAWN_STEP)

        gap = Gap(x=x, w=w, depth=self.depth, spacing=spacing)
        self.gaps.append(gap)
        self.cursor = x
        if self.rng.random() < COIN_CHANCE:
            self.coins.append(self._make_coin(gap))
        return gap

    def _make_coin(self, gap: Gap) -> Coin:
        lift = self.rng.uniform(COIN_LIFT_MIN, COIN_LIFT_MAX)
        return Coin(
            x=gap.x + gap.w / 2,
            y=self.platform_y - BALL_RADIUS * 2 - lift,
            bob_phase=self.rng.uniform(0.0, 2 * math.pi),
            bob_speed=self.rng.uniform(COIN_BOB_SPEED_MIN, COIN_BOB_SPEED_MAX),
        )

    def update(self, speed: float, ball_x: float) -> Tuple[int, List[GameEvent]]:
        """
        Scroll gaps and coins by one tick. Awards GAP_BONUS once per gap whose
        trailing edge has passed the ball. Returns (points, events).
        """
        points = 0
        events: List[GameEvent] = []
        self.cursor -= speed

        for g in self.gaps:
            g.x -= speed
            if not g.scored and g.right < ball_x:
                g.scored = True
                points += GAP_BONUS
                events.append(GameEvent(EventKind.GAP_CLEARED, g.x + g.w / 2,
                                        self.platform_y - 20, GAP_BONUS))
        self.gaps = [g for g in self.gaps if g.right >= -OFFSCREEN_MARGIN]

        for c in self.coins:
            c.x -= speed
            c.bob_phase += c.bob_speed
        self.coins = [c for c in self.coins
                      if not c.collected and c.x + c.radius >= -OFFSCREEN_MARGIN]

        return points, events

    def maybe_spawn(self, speed: float) -> Optional[Gap]:
        """
        Keep the spawn frontier ahead of the right edge of the viewport.
        A new gap is placed only once the newest one has scrolled onto the
        screen, at least min_spacing past it, so it always appears off-screen.
        """
        if self.gaps:
            if self.gaps[-1].x >= self.width:
                return None
        else:
            self.cursor = max(self.cursor, self.width)
        gap = self._add_gap(speed)
        log.debug("spawned gap x=%.1f w=%.1f spacing=%.1f", gap.x, gap.w, gap.spacing)
        return gap
