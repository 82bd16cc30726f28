# src/game/render.py
from __future__ import annotations
from typing import Optional, Tuple
import pygame
from .config import (
    COLOR_SKY, COLOR_GROUND, COLOR_GRASS, COLOR_GAP, COLOR_BALL, COLOR_COIN,
    COLOR_COIN_SHINE, COLOR_FG, COLOR_OVERLAY, COLOR_PAUSE_OVERLAY,
    COLOR_GAME_OVER, COLOR_BUTTON,
)
from .sim import PotholeSim, Phase
from .effects import Effects

REPLAY_W, REPLAY_H = 120, 50
PAUSE_W, PAUSE_H = 45, 30


def replay_button_rect(width: int, height: int) -> pygame.Rect:
    return pygame.Rect(width // 2 - REPLAY_W // 2, height // 2 + 50, REPLAY_W, REPLAY_H)


def pause_button_rect(width: int) -> pygame.Rect:
    return pygame.Rect(width - 55, 10, PAUSE_W, PAUSE_H)


class Fonts:
    def __init__(self):
        if not pygame.font.get_init():
            pygame.font.init()
        self.hud = pygame.font.SysFont("verdana", 28)
        self.small = pygame.font.SysFont("verdana", 16)
        self.body = pygame.font.SysFont("verdana", 20)
        self.title = pygame.font.SysFont("verdana", 44, bold=True)


def _overlay(surf: pygame.Surface, rgba):
    layer = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    layer.fill(rgba)
    surf.blit(layer, (0, 0))


def _centered(surf, font, text, cy, color=COLOR_FG):
    img = font.render(text, True, color)
    surf.blit(img, (surf.get_width() // 2 - img.get_width() // 2, cy - img.get_height() // 2))


def draw_world(surf: pygame.Surface, sim: PotholeSim, offset: Tuple[int, int] = (0, 0)):
    ox, oy = offset
    w, h, py = sim.width, sim.height, int(sim.platform_y)
    surf.fill(COLOR_SKY)
    pygame.draw.rect(surf, COLOR_GROUND, (ox, py + oy, w, h - py))
    pygame.draw.rect(surf, COLOR_GRASS, (ox, py + oy, w, 5))

    for g in sim.gaps:
        pygame.draw.rect(surf, COLOR_GAP, (int(g.x) + ox, py + oy, int(g.w), int(g.depth)),
                         border_radius=3)

    for c in sim.coins:
        cx, cy, r = int(c.x) + ox, int(c.draw_y) + oy, int(c.radius)
        pygame.draw.circle(surf, COLOR_COIN, (cx, cy), r)
        pygame.draw.circle(surf, COLOR_COIN_SHINE, (cx - r // 5, cy - r // 5), max(1, int(r * 0.3)))

    b = sim.ball
    pygame.draw.circle(surf, COLOR_BALL, (int(b.x) + ox, int(b.y) + oy), int(b.radius))


def draw_hud(surf: pygame.Surface, sim: PotholeSim, fonts: Fonts):
    surf.blit(fonts.hud.render(f"Score: {sim.display_score}", True, COLOR_FG), (20, 20))
    if sim.phase in (Phase.PLAYING, Phase.PAUSED):
        btn = pause_button_rect(sim.width)
        paused = sim.phase is Phase.PAUSED
        pygame.draw.rect(surf, (255, 165, 0) if paused else (180, 180, 200), btn, border_radius=5)
        pygame.draw.rect(surf, (50, 50, 50), btn, width=1, border_radius=5)
        if paused:
            pygame.draw.polygon(surf, (50, 50, 50), [
                (btn.x + btn.w * 0.35, btn.y + btn.h * 0.25),
                (btn.x + btn.w * 0.35, btn.y + btn.h * 0.75),
                (btn.x + btn.w * 0.75, btn.y + btn.h * 0.5),
            ])
        else:
            for fx in (0.3, 0.55):
                pygame.draw.rect(surf, (50, 50, 50), (btn.x + btn.w * fx, btn.y + btn.h * 0.25,
                                                      btn.w * 0.15, btn.h * 0.5))


def draw_screens(surf: pygame.Surface, sim: PotholeSim, fonts: Fonts,
                 typed_name: str = "", mouse_pos: Optional[Tuple[int, int]] = None):
    cy = sim.height // 2
    if sim.phase is Phase.START:
        _overlay(surf, COLOR_OVERLAY)
        _centered(surf, fonts.title, "Pothole Jumper", cy - 100)
        _centered(surf, fonts.body, "Type a nickname & press ENTER", cy - 40)
        box = pygame.Rect(sim.width // 2 - 100, cy - 2, 200, 30)
        pygame.draw.rect(surf, COLOR_FG, box, border_radius=4)
        _centered(surf, fonts.small, typed_name or "Enter your nickname", box.centery,
                  (20, 20, 20) if typed_name else (130, 130, 130))
        _centered(surf, fonts.small, "SPACE to Jump | P to Pause", cy + 70)
        _centered(surf, fonts.small, "Avoid potholes! Collect coins!", cy + 100)

    elif sim.phase is Phase.PAUSED:
        _overlay(surf, COLOR_PAUSE_OVERLAY)
        _centered(surf, fonts.title, "PAUSED", cy)
        _centered(surf, fonts.body, "Click Pause Button or Press 'P' to Resume", cy + 50)

    elif sim.phase is Phase.GAME_OVER:
        _overlay(surf, COLOR_GAME_OVER)
        _centered(surf, fonts.title, "GAME OVER", cy - 100)
        _centered(surf, fonts.hud, f"Final Score: {sim.final_score}", cy - 30)
        _centered(surf, fonts.body, f"Thank you for playing, {sim.nickname}!", cy + 10)
        btn = replay_button_rect(sim.width, sim.height)
        hover = mouse_pos is not None and btn.collidepoint(mouse_pos)
        pygame.draw.rect(surf, (60, 220, 60) if hover else COLOR_BUTTON, btn, border_radius=10)
        pygame.draw.rect(surf, COLOR_FG, btn, width=2, border_radius=10)
        _centered(surf, fonts.body, "Replay (R)", btn.centery)


def draw_scene(surf: pygame.Surface, sim: PotholeSim, fonts: Fonts,
               effects: Optional[Effects] = None, typed_name: str = "",
               mouse_pos: Optional[Tuple[int, int]] = None):
    """Read-only: paints the current sim snapshot."""
    offset = (0, 0)
    if effects is not None and sim.phase is Phase.GAME_OVER:
        offset = effects.shake_offset()
    draw_world(surf, sim, offset)
    if effects is not None:
        effects.draw(surf, fonts.small, offset)
    draw_hud(surf, sim, fonts)
    draw_screens(surf, sim, fonts, typed_name, mouse_pos)
