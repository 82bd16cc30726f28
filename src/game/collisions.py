# src/game/collisions.py
from __future__ import annotations
import math
from typing import Iterable, List
from .config import FATAL_TOLERANCE


def falling_into_gap(ball, gaps: Iterable, platform_y: float,
                     tolerance: float = FATAL_TOLERANCE):
    """
    First gap the ball is dropping through this tick, else None.
    Only the band [platform_y, platform_y + tolerance) of the ball's bottom edge
    counts, so a fall that was already resolved isn't caught twice.
    """
    for g in gaps:
        if g.spans(ball.x) and platform_y <= ball.bottom < platform_y + tolerance:
            return g
    return None


def ball_touches_coin(ball, coin) -> bool:
    d = math.hypot(ball.x - coin.x, ball.y - coin.draw_y)
    return d < ball.radius + coin.radius


def collect_coins(ball, coins: Iterable) -> List:
    """Mark every uncollected coin the ball overlaps as collected and return them."""
    hit = []
    for c in coins:
        if not c.collected and ball_touches_coin(ball, c):
            c.collected = True
            hit.append(c)
    return hit
