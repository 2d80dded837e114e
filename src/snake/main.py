# main.py
import argparse
import logging
from typing import Optional, Sequence

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import CFG, Config, Difficulty
from .render import draw, window_size
from .scores import ScoreStore
from .session import Command, Phase, SessionController

log = logging.getLogger(__name__)

KEYMAP = {
    pygame.K_UP: Command.UP,
    pygame.K_DOWN: Command.DOWN,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_w: Command.UP,
    pygame.K_s: Command.DOWN,
    pygame.K_a: Command.LEFT,
    pygame.K_d: Command.RIGHT,
    pygame.K_p: Command.PAUSE,
    pygame.K_ESCAPE: Command.PAUSE,
    pygame.K_RETURN: Command.CONFIRM,
    pygame.K_SPACE: Command.CONFIRM,
    pygame.K_r: Command.RESTART,
    pygame.K_m: Command.MENU,
}


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snake arcade game")
    parser.add_argument(
        "--difficulty",
        type=Difficulty.parse,
        default=CFG.difficulty,
        help="initially selected difficulty: easy, normal, hard, extreme",
    )
    parser.add_argument("--scores", type=str, default=CFG.score_file, help="high-score JSON file")
    parser.add_argument("--name", type=str, default=None, help="player label stored with high scores")
    parser.add_argument("--seed", type=int, default=CFG.seed, help="random seed for food placement")
    parser.add_argument("--grid", type=positive_int, default=CFG.grid_w, help="board size in cells (square)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    name = args.name.strip()[:8] if args.name else None
    return Config(
        grid_w=args.grid,
        grid_h=args.grid,
        seed=args.seed,
        score_file=args.scores,
        difficulty=args.difficulty,
        player_name=name or None,
    )


def handle_input(ctl: SessionController, now_ms: int) -> bool:
    """Feed key presses to the controller. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type != pygame.KEYDOWN:
            continue
        if ctl.phase is Phase.MENU and event.key in (pygame.K_ESCAPE, pygame.K_q):
            return False
        command = KEYMAP.get(event.key)
        if command is not None:
            ctl.handle(command, now_ms)
    return True


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = config_from_args(args)

    store = ScoreStore(cfg.score_file, cfg.max_scores_per_difficulty)
    store.load()
    ctl = SessionController(cfg=cfg, store=store, rng=np.random.default_rng(cfg.seed))

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode(window_size(cfg))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()
    log.info("Starting; scores in %s", cfg.score_file)

    running = True
    while running:
        # 1) input
        running = handle_input(ctl, pygame.time.get_ticks())
        if not running:
            break

        # 2) update
        ctl.update(pygame.time.get_ticks())
        for ev in ctl.drain_events():
            log.debug("event %s at %s", ev.kind.name, ev.position)

        # 3) render
        draw(screen, font, ctl)
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement gated by the game clock

    pygame.quit()


if __name__ == "__main__":
    main()
