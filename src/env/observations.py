# src/env/observations.py
from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from src.game.config import BASE_SPEED, JUMP_FORCE, GAP_MAX_W
from src.game.level import Gap, Coin

OBS_SIZE = 10
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)

VY_SCALE = 2.0 * JUMP_FORCE   # ceiling bounce and long falls stay within this
SPEED_SCALE = BASE_SPEED      # speed_norm hits 1.0 once speed doubles


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def gaps_ahead(ball, gaps: List[Gap], count: int = 2) -> List[Gap]:
    """Gaps whose trailing edge is still right of the ball's back edge, nearest first."""
    ahead = [g for g in gaps if g.right > ball.x - ball.radius]
    ahead.sort(key=lambda g: g.x)
    return ahead[:count]


def next_coin(ball, coins: List[Coin]) -> Optional[Coin]:
    ahead = [c for c in coins if not c.collected and c.x + c.radius >= ball.x - ball.radius]
    return min(ahead, key=lambda c: c.x, default=None)


def build_observation(sim) -> np.ndarray:
    """
    Returns a fixed (10,) float32 vector:
      [ y_norm, vy_norm, grounded, speed_norm,
        gap1_dx, gap1_w, gap2_dx, gap2_w,
        coin_dx, coin_dy ]
    - y_norm: ball centre / height, in [0,1]
    - vy_norm in [-1,1]
    - gapN_dx: (gap.x - ball.x) / width in [0,1] (0 once the ball is over it);
      sentinel dx=1.0, w=0.0 when there is no such gap
    - coin_dy: (ball.y - coin.y) / height in [-1,1]; positive = coin above ball
    """
    ball = sim.ball
    w, h = float(sim.width), float(sim.height)

    feats: List[float] = [
        _clamp(ball.y / h, 0.0, 1.0),
        _clamp(ball.vy / VY_SCALE, -1.0, 1.0),
        1.0 if ball.grounded else 0.0,
        _clamp((sim.speed - BASE_SPEED) / SPEED_SCALE, 0.0, 1.0),
    ]

    ahead = gaps_ahead(ball, sim.gaps)
    for i in range(2):
        if i < len(ahead):
            g = ahead[i]
            feats.extend([_clamp((g.x - ball.x) / w, 0.0, 1.0), _clamp(g.w / GAP_MAX_W, 0.0, 1.0)])
        else:
            feats.extend([1.0, 0.0])

    coin = next_coin(ball, sim.coins)
    if coin is None:
        feats.extend([1.0, 0.0])
    else:
        feats.extend([_clamp((coin.x - ball.x) / w, 0.0, 1.0),
                      _clamp((ball.y - coin.draw_y) / h, -1.0, 1.0)])

    return np.asarray(feats, dtype=np.float32)


def obs_bounds() -> Tuple[np.ndarray, np.ndarray]:
    return OBS_LOW.copy(), OBS_HIGH.copy()
