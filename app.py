"""
App shell: display and main loop. The host measures the window, resolves keys to directions,
drives the cascade clock from elapsed frame time and draws the latest frame. World, UI and
config are wired here; no simulation rules live in this file.
"""

import logging

import pygame

from ui.grid_view import draw_frame
from world import Simulation
import config

TITLE = "Icon Grid"
WIDTH, HEIGHT = 960, 640
BACKGROUND = (0, 0, 0)
FONT_SIZE = 16

KEY_DIRECTIONS = {
    pygame.K_UP: "up", pygame.K_w: "up",
    pygame.K_DOWN: "down", pygame.K_s: "down",
    pygame.K_LEFT: "left", pygame.K_a: "left",
    pygame.K_RIGHT: "right", pygame.K_d: "right",
    pygame.K_PAGEUP: "raise", pygame.K_q: "raise",
    pygame.K_PAGEDOWN: "lower", pygame.K_e: "lower",
}

logger = logging.getLogger(__name__)


def build_simulation(cfg: dict) -> Simulation:
    seed = cfg.get("seed", -1)
    if cfg.get("lock_seed") and seed == -1 and "actual_seed_used" in cfg:
        seed = cfg["actual_seed_used"]
    return Simulation.from_config(cfg, seed=seed)


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", FONT_SIZE, bold=True)

    cfg = config.load_config()
    sim = build_simulation(cfg)
    sim.resize(*screen.get_size())
    sim.start()
    logger.info("%s world %s, seed %d", sim.mode, sim.grid.shape, sim.seed_used)

    frame = sim.store.latest

    def on_frame(f) -> None:
        nonlocal frame
        frame = f

    sim.subscribe(on_frame)

    running = True
    while running:
        dt_ms = clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                sim.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                if event.key == pygame.K_SPACE and sim.animator is not None:
                    if sim.running:
                        sim.stop()
                    else:
                        sim.start()
                elif event.key == pygame.K_F5:
                    config.save_config(cfg, sim.seed_used, cfg.get("name", sim.mode))
                elif event.key in KEY_DIRECTIONS and sim.mode == "explore":
                    direction = KEY_DIRECTIONS[event.key]
                    if direction in sim.navigator.directions:
                        sim.move(direction)

        sim.advance(dt_ms)

        screen.fill(BACKGROUND)
        if frame is not None:
            w, h = screen.get_size()
            grid_w, grid_h = frame.size[0] * sim.cell_px, frame.size[1] * sim.cell_px
            grid_rect = pygame.Rect((w - grid_w) // 2, (h - grid_h) // 2, grid_w, grid_h)
            draw_frame(screen, grid_rect, frame, sim.cell_px, font, show_player=sim.mode == "explore")
        pygame.display.flip()

    sim.close()
    pygame.quit()


if __name__ == "__main__":
    run()
