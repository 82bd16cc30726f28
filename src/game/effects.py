# src/game/effects.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple
import pygame
from .config import (
    GRAVITY, SHAKE_MAGNITUDE, SHAKE_DURATION,
    JUMP_PARTICLES, LAND_PARTICLES, COIN_PARTICLES,
    COLOR_DUST, COLOR_GROUND, COLOR_COIN, COLOR_FG,
)
from .events import EventKind, GameEvent


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[int, int, int]
    alpha: float = 255.0


@dataclass
class Popup:
    text: str
    x: float
    y: float
    color: Tuple[int, int, int]
    alpha: float = 255.0
    vy: float = -1.5


class Effects:
    """
    Particles, score popups and screen shake driven by sim events.
    Uses its own RNG so drawing never perturbs the level layout.
    """
    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self.particles: List[Particle] = []
        self.popups: List[Popup] = []
        self.shake_ticks = 0
        self.shake_magnitude = 0.0

    def clear(self):
        self.particles = []
        self.popups = []
        self.shake_ticks = 0
        self.shake_magnitude = 0.0

    def consume(self, events: Iterable[GameEvent]):
        for ev in events:
            if ev.kind is EventKind.JUMP:
                self._burst(ev.x, ev.y, JUMP_PARTICLES, COLOR_DUST)
            elif ev.kind is EventKind.LAND:
                self._burst(ev.x, ev.y, LAND_PARTICLES, COLOR_GROUND)
            elif ev.kind is EventKind.COIN:
                self.popups.append(Popup(f"+{ev.points}", ev.x, ev.y, COLOR_COIN))
                self._burst(ev.x, ev.y, COIN_PARTICLES, COLOR_COIN)
            elif ev.kind is EventKind.GAP_CLEARED:
                self.popups.append(Popup(f"+{ev.points}", ev.x, ev.y, COLOR_FG))
            elif ev.kind is EventKind.GAME_OVER:
                self.shake_magnitude = SHAKE_MAGNITUDE
                self.shake_ticks = SHAKE_DURATION

    def _burst(self, x: float, y: float, count: int, color):
        for _ in range(count):
            self.particles.append(Particle(
                x=x, y=y,
                vx=self.rng.uniform(-2.5, 2.5),
                vy=self.rng.uniform(-3.5, 0.5),
                size=self.rng.uniform(3, 6),
                color=color,
            ))

    def update(self, moving: bool = True):
        """Fade everything; only move it while the game is running."""
        for p in self.particles:
            if moving:
                p.x += p.vx
                p.y += p.vy
                p.vy += GRAVITY * 0.15
            p.alpha -= 6
        self.particles = [p for p in self.particles if p.alpha > 0]

        for pp in self.popups:
            if moving:
                pp.y += pp.vy
            pp.alpha -= 5
        self.popups = [pp for pp in self.popups if pp.alpha > 0]

        self.shake_ticks = max(0, self.shake_ticks - 1)
        if self.shake_ticks == 0:
            self.shake_magnitude = 0.0

    def shake_offset(self) -> Tuple[int, int]:
        if self.shake_ticks <= 0:
            return 0, 0
        m = self.shake_magnitude
        return int(self.rng.uniform(-m, m)), int(self.rng.uniform(-m, m))

    def draw(self, surf: pygame.Surface, font: pygame.font.Font, offset=(0, 0)):
        ox, oy = offset
        for p in self.particles:
            r = max(1, int(p.size / 2))
            dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*p.color, int(p.alpha)), (r, r), r)
            surf.blit(dot, (int(p.x) - r + ox, int(p.y) - r + oy))
        for pp in self.popups:
            txt = font.render(pp.text, True, pp.color)
            txt.set_alpha(int(pp.alpha))
            surf.blit(txt, (int(pp.x) - txt.get_width() // 2 + ox,
                            int(pp.y) - txt.get_height() + oy))
