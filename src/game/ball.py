# src/game/ball.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable
from .config import GRAVITY, JUMP_FORCE, CEILING_BOUNCE, BALL_RADIUS


@dataclass
class Ball:
    """
    The runner. x never changes (the world scrolls left), y is the centre,
    +vy points down.
    """
    x: float
    y: float
    vy: float = 0.0
    radius: float = BALL_RADIUS
    grounded: bool = True

    @classmethod
    def on_platform(cls, x: float, platform_y: float) -> "Ball":
        return cls(x=float(x), y=float(platform_y - BALL_RADIUS))

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    @property
    def top(self) -> float:
        return self.y - self.radius

    def try_jump(self) -> bool:
        """Jump only if grounded. Returns True if performed."""
        if not self.grounded:
            return False
        self.vy = -JUMP_FORCE
        self.grounded = False
        return True

    def update_physics(self, platform_y: float, gaps: Iterable) -> bool:
        """
        Integrate one tick under gravity and resolve ground/ceiling contact.
        Ground contact is skipped while the centre is over a gap.
        Returns True only on the tick the ball goes from airborne to grounded.
        """
        was_grounded = self.grounded

        self.vy += GRAVITY
        self.y += self.vy
        self.grounded = False

        landed = False
        if self.bottom >= platform_y:
            over_gap = any(g.spans(self.x) for g in gaps)
            if not over_gap:
                self.y = platform_y - self.radius
                self.vy = 0.0
                self.grounded = True
                landed = not was_grounded

        # ceiling: damped bounce, gaps don't matter up here
        if self.top < 0:
            self.y = self.radius
            self.vy *= CEILING_BOUNCE

        return landed
