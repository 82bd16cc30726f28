# src/game/sim.py
from __future__ import annotations
import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional, Tuple
from .config import (
    WIDTH, HEIGHT, PLATFORM_OFFSET, BALL_X_FRACTION, BASE_SPEED, SPEED_INCREMENT,
    PASSIVE_SCORE_RATE, COIN_BONUS, DEFAULT_NICKNAME,
)
from .ball import Ball
from .level import LevelGen
from .collisions import falling_into_gap, collect_coins
from .events import EventKind, GameEvent

log = logging.getLogger("potholejumper.sim")


class Phase(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class ActionKind(str, Enum):
    START_RUN = "start_run"
    TOGGLE_PAUSE = "toggle_pause"
    JUMP = "jump"
    REPLAY = "replay"
    RESIZE = "resize"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    nickname: str = ""
    width: int = 0
    height: int = 0

    @classmethod
    def start_run(cls, nickname: str = "") -> "Action":
        return cls(ActionKind.START_RUN, nickname=nickname)

    @classmethod
    def toggle_pause(cls) -> "Action":
        return cls(ActionKind.TOGGLE_PAUSE)

    @classmethod
    def jump(cls) -> "Action":
        return cls(ActionKind.JUMP)

    @classmethod
    def replay(cls) -> "Action":
        return cls(ActionKind.REPLAY)

    @classmethod
    def resize(cls, width: int, height: int) -> "Action":
        return cls(ActionKind.RESIZE, width=width, height=height)


def clean_nickname(name: Optional[str]) -> str:
    name = (name or "").strip()
    return name if name else DEFAULT_NICKNAME


class PotholeSim:
    """
    Owns one run's state (ball, level, score, speed, phase) and advances it
    one tick at a time. Rendering reads it after step(); input goes through
    post()/dispatch().
    """
    def __init__(self, seed: int | None = None, width: int = WIDTH, height: int = HEIGHT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.width = width
        self.height = height
        self.level = LevelGen(seed, width, self.platform_y, height - self.platform_y)
        self._queue: Deque[Action] = deque()
        self._handlers: Dict[Tuple[Phase, ActionKind], Callable[[Action], List[GameEvent]]] = {
            (Phase.START, ActionKind.START_RUN): self._on_start_run,
            (Phase.PLAYING, ActionKind.TOGGLE_PAUSE): self._on_toggle_pause,
            (Phase.PAUSED, ActionKind.TOGGLE_PAUSE): self._on_toggle_pause,
            (Phase.PLAYING, ActionKind.JUMP): self._on_jump,
            (Phase.GAME_OVER, ActionKind.REPLAY): self._on_replay,
        }
        self._reset_run(reseed=False)

    # -------------------- Run state --------------------

    @property
    def platform_y(self) -> float:
        return float(self.height - PLATFORM_OFFSET)

    @property
    def gaps(self):
        return self.level.gaps

    @property
    def coins(self):
        return self.level.coins

    @property
    def display_score(self) -> int:
        if self.phase in (Phase.PLAYING, Phase.PAUSED):
            return math.floor(self.score)
        return self.final_score

    def _reset_run(self, reseed: bool = True):
        self.phase = Phase.START
        self.nickname = DEFAULT_NICKNAME
        self.score = 0.0
        self.final_score = 0
        self.speed = BASE_SPEED
        self.ticks = 0
        self.ball = Ball.on_platform(self.width * BALL_X_FRACTION, self.platform_y)
        if reseed:
            self.level.seed_initial(self.speed)

    def reset(self, seed: int | None = None):
        """Back to the start screen. A seed restarts generation from that seed."""
        if seed is not None:
            self.seed = seed
            self.level = LevelGen(seed, self.width, self.platform_y, self.height - self.platform_y)
        self._queue.clear()
        self._reset_run(reseed=seed is None)

    # -------------------- Input --------------------

    def post(self, action: Action):
        """Queue an action; drained at the start of the next step()."""
        self._queue.append(action)

    def dispatch(self, action: Action) -> List[GameEvent]:
        """Apply an action now. Actions illegal in the current phase do nothing."""
        if not isinstance(action.kind, ActionKind):
            raise ValueError(f"unknown action kind: {action.kind!r}")
        if action.kind is ActionKind.RESIZE:
            return self._on_resize(action)
        handler = self._handlers.get((self.phase, action.kind))
        if handler is None:
            log.debug("ignored %s while %s", action.kind.value, self.phase.value)
            return []
        return handler(action)

    def _on_start_run(self, action: Action) -> List[GameEvent]:
        self.nickname = clean_nickname(action.nickname)
        self.phase = Phase.PLAYING
        log.info("run started: nickname=%s seed=%s", self.nickname, self.seed)
        return []

    def _on_toggle_pause(self, action: Action) -> List[GameEvent]:
        self.phase = Phase.PAUSED if self.phase is Phase.PLAYING else Phase.PLAYING
        return []

    def _on_jump(self, action: Action) -> List[GameEvent]:
        if self.ball.try_jump():
            return [GameEvent(EventKind.JUMP, self.ball.x, self.ball.bottom)]
        return []

    def _on_replay(self, action: Action) -> List[GameEvent]:
        log.info("replay after final score %d", self.final_score)
        self._reset_run()
        return []

    def _on_resize(self, action: Action) -> List[GameEvent]:
        if action.width <= 0 or action.height <= 0:
            log.debug("ignored resize to %dx%d", action.width, action.height)
            return []
        old_platform_y = self.platform_y
        self.width, self.height = action.width, action.height
        dy = self.platform_y - old_platform_y
        self.level.set_viewport(self.width, self.platform_y, self.height - self.platform_y)
        self.ball.x = self.width * BALL_X_FRACTION
        self.ball.y += dy
        if self.phase is Phase.START:
            self.level.seed_initial(self.speed)
        log.debug("resized to %dx%d", self.width, self.height)
        return []

    # -------------------- Tick --------------------

    def step(self) -> List[GameEvent]:
        """Drain queued input, then advance one tick if playing."""
        events: List[GameEvent] = []
        while self._queue:
            events.extend(self.dispatch(self._queue.popleft()))
        if self.phase is Phase.PLAYING:
            events.extend(self._tick())
        return events

    def _tick(self) -> List[GameEvent]:
        self.ticks += 1
        points, events = self.level.update(self.speed, self.ball.x)
        self.score += points

        if self.ball.update_physics(self.platform_y, self.level.gaps):
            events.append(GameEvent(EventKind.LAND, self.ball.x, self.platform_y))

        self.score += self.speed * PASSIVE_SCORE_RATE
        self.speed += SPEED_INCREMENT

        events.extend(self._resolve_collisions())
        if self.phase is Phase.PLAYING:
            self.level.maybe_spawn(self.speed)
        return events

    def _resolve_collisions(self) -> List[GameEvent]:
        gap = falling_into_gap(self.ball, self.level.gaps, self.platform_y)
        if gap is not None:
            return self._game_over()

        events: List[GameEvent] = []
        for coin in collect_coins(self.ball, self.level.coins):
            self.score += COIN_BONUS
            events.append(GameEvent(EventKind.COIN, coin.x, coin.draw_y, COIN_BONUS))
        if events:
            self.level.coins = [c for c in self.level.coins if not c.collected]
        return events

    def _game_over(self) -> List[GameEvent]:
        self.ball.y = self.platform_y + self.ball.radius
        self.ball.vy = 0.0
        self.phase = Phase.GAME_OVER
        self.final_score = math.floor(self.score)
        log.info("game over: %s scored %d", self.nickname, self.final_score)
        return [GameEvent(EventKind.GAME_OVER, self.ball.x, self.ball.y, self.final_score)]
