# src/game/events.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    JUMP = "jump"
    LAND = "land"
    GAP_CLEARED = "gap_cleared"
    COIN = "coin"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """Something cosmetic layers may react to. Emitted by the sim, never read back."""
    kind: EventKind
    x: float
    y: float
    points: int = 0   # bonus awarded (gap/coin) or final score (game over)
