# main.py
import argparse
import logging

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, Config, GRID_DIMENSION, TICK_MS
from .controls import GestureRecognizer, handle_event
from .events import (
    Consumed,
    SessionLost,
    SessionPaused,
    SessionResumed,
    SessionStarted,
    SessionWon,
)
from .grid import BoundaryPolicy
from .render import SnapshotRenderer
from .scheduler import PollingScheduler
from .session import GameSession

logger = logging.getLogger("ponki")


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ponki", description="Ponki snake")
    p.add_argument("--grid", type=int, default=GRID_DIMENSION, help="cells per side")
    p.add_argument("--tick-ms", type=int, default=TICK_MS, help="ms per simulation step")
    p.add_argument("--boundary", choices=[b.value for b in BoundaryPolicy],
                   default=BoundaryPolicy.BOUNDED.value, help="edge behaviour")
    p.add_argument("--win-length", type=int, default=None,
                   help="entity length that wins (default: fill the board)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    return Config(
        grid_dimension=args.grid,
        tick_ms=args.tick_ms,
        boundary=BoundaryPolicy(args.boundary),
        win_length=args.win_length,
        seed=args.seed,
    )


def log_session_event(event) -> None:
    # Stand-in for an audio adapter: same discrete events, written to the log
    if isinstance(event, Consumed):
        logger.info("consume at %s (score %d)", event.cell, event.score)
    else:
        logger.info("%s", type(event).__name__)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = build_config(args)
    except ValueError as exc:
        raise SystemExit(f"ponki: {exc}")

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Ponki Snake")
    clock = pygame.time.Clock()

    scheduler = PollingScheduler(clock=pygame.time.get_ticks)
    session = GameSession(scheduler, cfg)
    gestures = GestureRecognizer(session, cfg)
    renderer = SnapshotRenderer(screen, font, cfg.grid_dimension)
    session.events.subscribe(renderer)
    session.events.subscribe(
        log_session_event,
        Consumed, SessionStarted, SessionPaused, SessionResumed, SessionLost, SessionWon,
    )

    running = True
    while running:
        # 1) input
        now = pygame.time.get_ticks()
        for event in pygame.event.get():
            if not handle_event(event, session, gestures, now):
                running = False
                break

        # 2) update (ticks fire from the scheduler, one at a time)
        scheduler.poll()

        # 3) render
        renderer.draw()
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement paced by the scheduler

    pygame.quit()

if __name__ == "__main__":
    main()
