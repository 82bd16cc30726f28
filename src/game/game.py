# src/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_p, K_r, K_RETURN, K_KP_ENTER, K_BACKSPACE
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .sim import PotholeSim, Phase, Action
from .effects import Effects
from .render import Fonts, draw_scene, pause_button_rect, replay_button_rect
from .logger import setup_logging

MAX_NICKNAME = 16


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH, help="Window width (capped at %d)" % WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    return p.parse_args()


def run():
    args = parse_args()
    setup_logging(args.log_level)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    width = min(args.width, WIDTH)
    height = args.height

    pygame.init()
    pygame.display.set_caption("Pothole Jumper")
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    fonts = Fonts()

    sim = PotholeSim(seed=launch_seed, width=width, height=height)
    effects = Effects()
    typed_name = ""

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()

            if event.type == pygame.VIDEORESIZE:
                width = min(event.w, WIDTH)
                screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
                sim.post(Action.resize(width, height))

            if event.type == pygame.TEXTINPUT and sim.phase is Phase.START:
                typed_name = (typed_name + event.text)[:MAX_NICKNAME]

            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if sim.phase is Phase.START:
                    if event.key in (K_RETURN, K_KP_ENTER):
                        sim.post(Action.start_run(typed_name))
                        typed_name = ""
                    elif event.key == K_BACKSPACE:
                        typed_name = typed_name[:-1]
                    continue
                if event.key in (K_SPACE, K_UP):
                    sim.post(Action.jump())
                if event.key == K_p:
                    sim.post(Action.toggle_pause())
                if event.key == K_r:
                    sim.post(Action.replay())

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if pause_button_rect(width).collidepoint(event.pos):
                    sim.post(Action.toggle_pause())
                elif replay_button_rect(width, height).collidepoint(event.pos):
                    sim.post(Action.replay())

        was_over = sim.phase is Phase.GAME_OVER
        events = sim.step()
        if was_over and sim.phase is Phase.START:
            effects.clear()
        effects.consume(events)
        effects.update(moving=sim.phase is Phase.PLAYING)

        # --- Render ---
        draw_scene(screen, sim, fonts, effects, typed_name, pygame.mouse.get_pos())
        pygame.display.flip()


if __name__ == "__main__":
    run()
