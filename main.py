
import argparse
import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import Engine
from tetris_input import KeyInput
from tetris_overlay import Overlay
from tetris_layout import compute_dims
from tetris_render import Renderer
from tetris_audio import ToneAudio, RATE
from tetris_haptics import Rumble

log = logging.getLogger("tetris")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Falling-block puzzle game (pygame)")
    p.add_argument("--seed", type=int, default=CONFIG["RNG_SEED"], help="fixed randomizer seed")
    p.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"], help="board cell size in pixels")
    p.add_argument("--fps", type=int, default=CONFIG["FPS"])
    p.add_argument("--volume", type=float, default=CONFIG["VOLUME"], help="0.0 - 1.0")
    p.add_argument("--muted", action="store_true", default=CONFIG["START_MUTED"])
    p.add_argument("--log-level", default=CONFIG["LOG_LEVEL"],
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def apply_args(args):
    CONFIG["RNG_SEED"] = args.seed
    CONFIG["CELL_SIZE"] = args.cell_size
    CONFIG["FPS"] = args.fps
    CONFIG["VOLUME"] = max(0.0, min(1.0, args.volume))
    CONFIG["START_MUTED"] = args.muted
    CONFIG["LOG_LEVEL"] = args.log_level


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def build_engine():
    """Create the window and every collaborator; pygame.error here is fatal."""
    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    muted = bool(CONFIG["START_MUTED"])
    keys = KeyInput()
    overlay = Overlay(muted=muted)
    renderer = Renderer(screen, dims, font, big_font, overlay)
    listeners = [ToneAudio(muted=muted), Rumble(), overlay]
    engine = Engine(input=keys, renderer=renderer, listeners=listeners, seed=CONFIG["RNG_SEED"])
    return engine, keys, renderer


def run(engine, keys, renderer):
    clock = pygame.time.Clock()
    while True:
        dt = clock.tick(CONFIG["FPS"])
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return
            if e.type == pygame.MOUSEBUTTONDOWN and renderer.board_rect.collidepoint(e.pos):
                # clicking the overlay starts or resumes
                engine.start() or engine.resume()
            keys.handle(e)
        engine.tick(dt)


def main(argv=None):
    args = parse_args(argv)
    apply_args(args)
    logging.basicConfig(level=getattr(logging, CONFIG["LOG_LEVEL"]),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    pygame.mixer.pre_init(RATE, -16, 1)
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP, pygame.MOUSEBUTTONDOWN])
    try:
        engine, keys, renderer = build_engine()
    except pygame.error as exc:
        log.error("failed to initialize game: %s", exc)
        pygame.quit()
        return 1
    log.info("ready (seed=%s)", CONFIG["RNG_SEED"])
    try:
        run(engine, keys, renderer)
    finally:
        pygame.quit()
    return 0


if __name__ == '__main__':
    sys.exit(main())
