# main.py
import argparse
import logging

import pygame # type: ignore
from .config import CFG, Direction, HUD_HEIGHT
from .game import GameSession
from .grid import Grid
from .render import PygameDisplay, PygameRenderer
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    pygame.K_w: Direction.UP,    pygame.K_k: Direction.UP,    pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN,  pygame.K_j: Direction.DOWN,  pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,  pygame.K_h: Direction.LEFT,  pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT, pygame.K_l: Direction.RIGHT, pygame.K_RIGHT: Direction.RIGHT,
}
START_KEY = pygame.K_n


def handle_input(session: GameSession) -> bool:
    """Feed key presses to the session. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key in KEY_BINDINGS:
                session.push_direction(KEY_BINDINGS[event.key])
            elif event.key == START_KEY and not session.playing:
                session.start()
    return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Snake with timed food on a wrap-around grid")
    parser.add_argument("--seed", type=int, default=CFG.seed, help="RNG seed (default: random)")
    parser.add_argument("--width", type=int, default=CFG.width_px, help="field width in pixels")
    parser.add_argument("--height", type=int, default=CFG.height_px, help="field height in pixels")
    parser.add_argument("--block-size", type=int, default=CFG.block_size, help="cell size in pixels")
    parser.add_argument("--fps", type=int, default=CFG.fps)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    CFG.seed = args.seed
    CFG.width_px, CFG.height_px = args.width, args.height
    CFG.block_size = args.block_size
    CFG.fps = args.fps

    grid = Grid.from_pixels(CFG.width_px, CFG.height_px, CFG.block_size)
    field_w, field_h = grid.width * CFG.block_size, grid.height * CFG.block_size

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((field_w, field_h + HUD_HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    field = screen.subsurface(pygame.Rect(0, 0, field_w, field_h))
    scheduler = Scheduler(now_ms=pygame.time.get_ticks())
    session = GameSession(
        grid,
        scheduler=scheduler,
        renderer=PygameRenderer(field, border_size=CFG.border_size),
        display=PygameDisplay(screen, font, top=field_h),
        config=CFG,
    )
    session.renderer.clear_all()
    logger.info(f"Grid {grid.width}x{grid.height}, press N to start")

    running = True
    while running:
        # 1) input
        running = handle_input(session)
        if not running:
            break

        # 2) update: fire every timer that came due since the last frame
        scheduler.advance_to(pygame.time.get_ticks())

        # 3) render (cells were drawn incrementally by the timers)
        pygame.display.flip()
        clock.tick(CFG.fps)

    if session.playing:
        session.game_over()
    pygame.quit()

if __name__ == "__main__":
    main()
