# src/env/pj_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS
from src.game.sim import PotholeSim, Phase, Action
from src.game.effects import Effects
from src.game.events import EventKind
from src.game.render import Fonts, draw_scene
from src.env.observations import build_observation, obs_bounds

BONUS_REWARD_SCALE = 0.1
BONUS_EVENTS = (EventKind.GAP_CLEARED, EventKind.COIN)


class PotholeEnv(gym.Env):
    """
    Pothole Jumper Gymnasium environment (vector observations).
    - Simulation at 60 ticks/s (internal).
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Observation: shape (10,), float32.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = int(width)
        self.height = int(height)

        self.sim_fps = FPS
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        low, high = obs_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[PotholeSim] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.fonts = None
        self.effects = Effects()

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Level seed comes from the env RNG so reset(seed=...) fixes the whole episode.
        level_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.sim = PotholeSim(seed=level_seed, width=self.width, height=self.height)
        self.sim.dispatch(Action.start_run("agent"))
        self.effects.clear()

        self.timestep = 0
        self.current_seed = self.sim.seed

        obs = build_observation(self.sim)
        return obs, self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "call reset() before step()"

        if int(action) == 1:
            self.sim.post(Action.jump())

        score_before = self.sim.score
        bonus = 0
        for _ in range(self.frame_skip):
            events = self.sim.step()
            bonus += sum(ev.points for ev in events if ev.kind in BONUS_EVENTS)
            if self.render_mode is not None:
                self.effects.consume(events)
                self.effects.update(moving=self.sim.phase is Phase.PLAYING)
            if self.sim.phase is Phase.GAME_OVER:
                break

        terminated = self.sim.phase is Phase.GAME_OVER
        if terminated:
            reward = -1.0
        else:
            reward = 1.0 + BONUS_REWARD_SCALE * bonus

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = build_observation(self.sim)
        info = self._info()
        info["score_gained"] = self.sim.score - score_before

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _info(self) -> Dict[str, Any]:
        assert self.sim is not None
        return {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": self.sim.display_score,
            "speed": self.sim.speed,
            "grounded": self.sim.ball.grounded,
            "ticks": self.sim.ticks,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("Pothole Jumper (Gym Env)")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((self.width, self.height))
            self.fonts = Fonts()

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_scene(self.screen, self.sim, self.fonts, self.effects)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.fonts = None
