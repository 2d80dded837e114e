# game.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

import numpy as np  # type: ignore

from .config import Direction, FOOD_BONUS

Pos = Tuple[int, int]


class Outcome(Enum):
    """Result of one step. Eating is worth `points` (FOOD_BONUS per food)."""
    MOVED = "moved"
    ATE = "ate"
    COLLISION = "collision"
    WIN = "win"

    @property
    def terminal(self) -> bool:
        return self in (Outcome.COLLISION, Outcome.WIN)

    @property
    def points(self) -> int:
        # WIN is reached by eating the last free cell
        return FOOD_BONUS if self in (Outcome.ATE, Outcome.WIN) else 0


# ---------- Helpers ----------
def in_bounds(pos: Pos, width: int, height: int) -> bool:
    x, y = pos
    return 0 <= x < width and 0 <= y < height


def spawn_food(body, width: int, height: int, rng: np.random.Generator) -> Optional[Pos]:
    """
    Pick a free cell uniformly at random. Returns None when the snake covers
    the whole board.
    """
    occupied = np.zeros((height, width), dtype=bool)
    if body:
        xs, ys = zip(*body)
        occupied[list(ys), list(xs)] = True
    free = np.flatnonzero(~occupied)
    if free.size == 0:
        return None
    idx = int(rng.choice(free))
    return (idx % width, idx // width)


# ---------- State ----------
@dataclass(frozen=True)
class SnakeState:
    body: Tuple[Pos, ...]          # head at index 0
    heading: Direction
    food: Optional[Pos]
    width: int
    height: int

    @property
    def head(self) -> Pos:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)


def new_snake_state(
    width: int,
    height: int,
    rng: np.random.Generator,
    length: int = 3,
    heading: Direction = Direction.RIGHT,
) -> SnakeState:
    """Horizontal snake with its head at the board center, facing right."""
    if width < 1 or height < 1:
        raise ValueError(f"Board must be at least 1x1, got {width}x{height}")
    cx, cy = width // 2, height // 2
    length = max(1, min(length, cx + 1))
    body = tuple((cx - i, cy) for i in range(length))
    return SnakeState(
        body=body,
        heading=heading,
        food=spawn_food(body, width, height, rng),
        width=width,
        height=height,
    )


# ---------- Update ----------
def accept_direction(heading: Direction, pending: Optional[Direction]) -> Direction:
    """Return the heading for the next step; 180° turns are ignored."""
    if pending is None or pending.is_opposite(heading):
        return heading
    return pending


def advance(
    state: SnakeState,
    pending: Optional[Direction],
    rng: np.random.Generator,
) -> Tuple[SnakeState, Outcome]:
    """
    Apply one movement step and return (new_state, outcome).

    On COLLISION the returned state is the input state unchanged. On ATE the
    food is respawned from `rng`; if no free cell is left the outcome is WIN
    and the new state has no food.
    """
    heading = accept_direction(state.heading, pending)
    hx, hy = state.head
    new_head = (hx + heading.dx, hy + heading.dy)

    # Wall collision
    if not in_bounds(new_head, state.width, state.height):
        return state, Outcome.COLLISION

    eating = new_head == state.food

    # Self collision; the tail cell is free unless we grow this tick
    blocking = state.body if eating else state.body[:-1]
    if new_head in blocking:
        return state, Outcome.COLLISION

    # Move / grow
    if eating:
        body = (new_head,) + state.body
        food = spawn_food(body, state.width, state.height, rng)
        outcome = Outcome.ATE if food is not None else Outcome.WIN
    else:
        body = (new_head,) + state.body[:-1]
        food = state.food
        outcome = Outcome.MOVED

    return replace(state, body=body, heading=heading, food=food), outcome
