# render.py
from typing import Tuple

import pygame  # type: ignore

from .config import (
    CELL_SIZE, HUD_H,
    BG, GRID, GREEN, HEAD, RED, TEXT, HILITE, YELLOW,
    Config, Difficulty,
)
from .game import Outcome
from .session import Phase, SessionController, GameSession

Color = Tuple[int, int, int]


def window_size(cfg: Config) -> Tuple[int, int]:
    return cfg.grid_w * CELL_SIZE, cfg.grid_h * CELL_SIZE + HUD_H


def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Color) -> None:
    rect = pygame.Rect(gx * CELL_SIZE, HUD_H + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)


def _center_text(screen: pygame.Surface, font: pygame.font.Font, text: str, y: int, color: Color = TEXT) -> None:
    surf = font.render(text, True, color)
    screen.blit(surf, surf.get_rect(center=(screen.get_width() // 2, y)))


def _overlay(screen: pygame.Surface, alpha: int = 140) -> None:
    # Dim with translucent overlay
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    screen.blit(overlay, (0, 0))


def draw_game(screen: pygame.Surface, font: pygame.font.Font, game: GameSession, best: int) -> None:
    screen.fill(BG)
    # checkerboard
    for gx in range(game.snake.width):
        for gy in range(game.snake.height):
            if (gx + gy) % 2 == 0:
                draw_cell(screen, gx, gy, GRID)
    # food
    if game.food is not None:
        draw_cell(screen, game.food[0], game.food[1], RED)
    # snake
    for i, (x, y) in enumerate(game.body):
        draw_cell(screen, x, y, HEAD if i == 0 else GREEN)
    # hud
    hud = (
        f"Score: {game.score}  Best: {max(best, game.score)}  "
        f"{game.difficulty.name.title()}  Speed: {game.clock.steps_per_second:.1f}/s"
    )
    screen.blit(font.render(hud, True, TEXT), (8, 6))


def draw_menu(screen: pygame.Surface, font: pygame.font.Font, ctl: SessionController) -> None:
    screen.fill(BG)
    h = screen.get_height()
    _center_text(screen, font, "SNAKE", h // 8, YELLOW)
    _center_text(screen, font, "Up/Down: difficulty   Enter: play", h // 8 + 28)

    y = h // 4
    for diff in Difficulty:
        label = f"{diff.name.title():8}  speed {1000 / diff.interval_ms:4.1f}/s  score x{diff.multiplier:.1f}"
        _center_text(screen, font, label, y, HILITE if diff is ctl.selected else TEXT)
        y += 26

    y += 20
    _center_text(screen, font, f"--- {ctl.selected.name.title()} high scores ---", y, YELLOW)
    y += 26
    top = ctl.store.top(ctl.selected)
    if not top:
        _center_text(screen, font, "no scores yet", y)
    for rank, rec in enumerate(top, start=1):
        who = rec.player or "-"
        line = f"{rank:2}. {who:8} {rec.score:6}  {rec.timestamp:%Y-%m-%d %H:%M}"
        _center_text(screen, font, line, y)
        y += 22


def draw_paused(screen: pygame.Surface, font: pygame.font.Font) -> None:
    _overlay(screen)
    h = screen.get_height()
    _center_text(screen, font, "PAUSED", h // 2 - 16, (240, 240, 250))
    _center_text(screen, font, "P/Esc: resume   R: restart   M: menu", h // 2 + 16)


def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, game: GameSession) -> None:
    _overlay(screen)
    h = screen.get_height()
    title = "YOU WIN" if game.outcome is Outcome.WIN else "GAME OVER"
    _center_text(screen, font, title, h // 2 - 30, (240, 240, 250))
    _center_text(screen, font, f"Score: {game.score}", h // 2)
    if game.new_best:
        _center_text(screen, font, "New high score!", h // 2 + 26, YELLOW)
    _center_text(screen, font, "Press Enter or R for menu", h // 2 + 52)


def draw(screen: pygame.Surface, font: pygame.font.Font, ctl: SessionController) -> None:
    if ctl.phase is Phase.MENU or ctl.session is None:
        draw_menu(screen, font, ctl)
        return
    draw_game(screen, font, ctl.session, ctl.best(ctl.session.difficulty))
    if ctl.phase is Phase.PAUSED:
        draw_paused(screen, font)
    elif ctl.phase is Phase.GAME_OVER:
        draw_game_over(screen, font, ctl.session)
