"""
App shell: display and main loop. Simulation is tick-driven from elapsed time and
tick_rate (independent of frame rate). Ticks run against an in-memory store and only
the changed cells are repainted; the JSON snapshot is written on quit and at the end
of a headless run, and removed on reset.

Startup resumes the saved snapshot when its size matches the configured world;
otherwise (or with --reset) it starts from a new random grid.
"""

import argparse
import logging
import random

import pygame

import config
from gasgrid import Grid, GasRegistry, create_grid, default_registry, resolve_seed
from gasview import GridView
from service import GridService
from store import JsonGridStore, MemoryGridStore

logger = logging.getLogger(__name__)

TITLE = "Gas Grid"
BACKGROUND = (0, 0, 0)
HUD_COLOR = (200, 200, 200)
HUD_HEIGHT = 24
FONT_SIZE = 16


def build_service(cfg: dict, registry: GasRegistry) -> tuple[GridService, JsonGridStore, int]:
    """
    In-memory service seeded from the configured snapshot file.
    Returns (service, snapshot store, seed used for new grids).
    """
    width = cfg["world"]["width"]
    height = cfg["world"]["height"]
    seed_used = resolve_seed(cfg.get("seed", -1))
    rng = random.Random(seed_used)

    def new_grid() -> Grid:
        return create_grid(width, height, registry, rng)

    snapshot = JsonGridStore(cfg["snapshot_path"], registry, new_grid)

    def resume() -> Grid:
        grid = snapshot.load()
        if grid.shape != (height, width):
            logger.info("Snapshot is %dx%d, world is %dx%d; starting over", grid.width, grid.height, width, height)
            snapshot.clear()
            grid = snapshot.load()
        return grid

    return GridService(MemoryGridStore(resume), registry), snapshot, seed_used


def reset(service: GridService, snapshot: JsonGridStore) -> Grid:
    """Drop live state and the saved snapshot; returns the new first-run grid."""
    service.reset()
    snapshot.clear()
    return service.fetch()


def run_headless(cfg: dict, ticks: int, fresh: bool = False) -> None:
    """Advance ticks times without a display; log change counts, then save the snapshot."""
    registry = default_registry()
    service, snapshot, seed_used = build_service(cfg, registry)
    if fresh:
        reset(service, snapshot)
    logger.info("Headless run: %d tick(s), seed %d", ticks, seed_used)
    for i in range(ticks):
        result = service.advance()
        if result.is_full:
            logger.info("Tick %d: settled", i + 1)
            break
    snapshot.save(service.fetch())


def run(cfg: dict, fresh: bool = False) -> None:
    registry = default_registry()
    service, snapshot, seed_used = build_service(cfg, registry)
    logger.info("Starting %dx%d grid, seed %d", cfg["world"]["width"], cfg["world"]["height"], seed_used)

    grid = reset(service, snapshot) if fresh else service.fetch()
    view = GridView(registry)
    view.show(grid)

    cell_px = max(1, int(cfg.get("cell_px", 3)))
    grid_w, grid_h = grid.width * cell_px, grid.height * cell_px

    pygame.init()
    screen = pygame.display.set_mode((grid_w, grid_h + HUD_HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, FONT_SIZE)
    grid_rect = pygame.Rect(0, 0, grid_w, grid_h)

    tick_rate = config.clamp_tick_rate(cfg.get("tick_rate", 10))
    tick_accum = 0.0
    total_ticks = 0
    paused = False
    running = True

    while running:
        dt_s = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_r:
                    view.show(reset(service, snapshot))
                    total_ticks = 0
                    tick_accum = 0.0

        if not paused:
            tick_accum += dt_s * tick_rate
            # Cap ticks per frame so a slow step never freezes the window
            max_ticks_per_frame = max(4, tick_rate // 10)
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)
            for _ in range(num_ticks):
                view.apply(service.advance().response)
            total_ticks += num_ticks

        screen.fill(BACKGROUND)
        view.draw(screen, grid_rect)
        status = f"tick {total_ticks}  seed {seed_used}  {'paused' if paused else f'{tick_rate}/s'}"
        screen.blit(font.render(status, True, HUD_COLOR), (4, grid_h + 4))
        pygame.display.flip()

    snapshot.save(service.fetch())
    pygame.quit()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Gas grid: vertical density ordering, one tick at a time.")
    parser.add_argument("--config", default=None, help="settings JSON (default configs/settings.json)")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--ticks", type=int, default=100, help="ticks to run in headless mode")
    parser.add_argument("--reset", action="store_true", help="discard the saved snapshot and start a new grid")
    parser.add_argument("--seed", type=int, default=None, help="seed for new grids (-1 = random)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args(argv)

    cfg = config.load_config(args.config)
    if args.seed is not None:
        cfg["seed"] = args.seed
    level = (args.log_level or cfg.get("log_level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        run_headless(cfg, args.ticks, fresh=args.reset)
    else:
        run(cfg, fresh=args.reset)


if __name__ == "__main__":
    main()
