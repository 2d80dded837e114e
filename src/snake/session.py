# session.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional

import numpy as np  # type: ignore

from .clock import GameClock
from .config import Config, Difficulty, Direction
from .game import Outcome, Pos, SnakeState, advance, new_snake_state
from .scores import ScoreStore

log = logging.getLogger(__name__)


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    CONFIRM = "confirm"
    RESTART = "restart"
    MENU = "menu"


_STEER = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


class EventKind(Enum):
    STARTED = "started"
    ATE = "ate"
    COLLISION = "collision"
    WIN = "win"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"
    MENU = "menu"


@dataclass(frozen=True)
class Event:
    """Notification for the presentation layer (sound, particles)."""
    kind: EventKind
    position: Optional[Pos] = None


# ---------- Live game ----------
@dataclass
class GameSession:
    snake: SnakeState
    difficulty: Difficulty
    clock: GameClock
    pending: Direction
    ticks: int = 0
    foods_eaten: int = 0
    food_points: int = 0
    outcome: Optional[Outcome] = None
    new_best: bool = False

    @property
    def score(self) -> int:
        return int(self.ticks * self.difficulty.multiplier) + self.food_points

    @property
    def body(self):
        return self.snake.body

    @property
    def food(self) -> Optional[Pos]:
        return self.snake.food

    @property
    def heading(self) -> Direction:
        return self.snake.heading


def new_game_session(cfg: Config, difficulty: Difficulty, rng: np.random.Generator, now_ms: int) -> GameSession:
    snake = new_snake_state(cfg.grid_w, cfg.grid_h, rng, length=cfg.start_length)
    clock = GameClock.for_difficulty(
        difficulty, min_interval_ms=cfg.min_move_ms, speedup_factor=cfg.speedup_factor
    )
    clock.reset(now_ms)
    return GameSession(snake=snake, difficulty=difficulty, clock=clock, pending=snake.heading)


# ---------- Controller ----------
@dataclass
class SessionController:
    """
    Top-level game flow: MENU -> PLAYING <-> PAUSED -> GAME_OVER -> MENU.

    Owns the live GameSession and the ScoreStore. Input arrives as Commands
    via `handle()`, time via `update(now_ms)`; the presentation layer reads
    `phase`/`session` and pulls cues from `drain_events()`.
    """
    cfg: Config
    store: ScoreStore
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    phase: Phase = Phase.MENU
    selected: Difficulty = Difficulty.NORMAL
    session: Optional[GameSession] = None
    events: List[Event] = field(default_factory=list)

    def __post_init__(self):
        self.selected = self.cfg.difficulty

    # ----- helpers -----
    def _emit(self, kind: EventKind, position: Optional[Pos] = None) -> None:
        self.events.append(Event(kind, position))

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.phase:
            log.debug("Phase %s -> %s", self.phase.name, phase.name)
        self.phase = phase

    def drain_events(self) -> List[Event]:
        out, self.events = self.events, []
        return out

    def best(self, difficulty: Optional[Difficulty] = None) -> int:
        return self.store.best(difficulty or self.selected)

    # ----- transitions -----
    def start(self, now_ms: int, difficulty: Optional[Difficulty] = None) -> GameSession:
        if difficulty is not None:
            self.selected = difficulty
        self.session = new_game_session(self.cfg, self.selected, self.rng, now_ms)
        self._set_phase(Phase.PLAYING)
        log.info("New game on %s", self.selected.name)
        self._emit(EventKind.STARTED)
        return self.session

    def pause(self) -> None:
        if self.phase is Phase.PLAYING:
            self._set_phase(Phase.PAUSED)
            self._emit(EventKind.PAUSED)

    def resume(self, now_ms: int) -> None:
        if self.phase is Phase.PAUSED and self.session is not None:
            self.session.clock.reset(now_ms)
            self._set_phase(Phase.PLAYING)
            self._emit(EventKind.RESUMED)

    def to_menu(self) -> None:
        self.session = None
        self._set_phase(Phase.MENU)
        self._emit(EventKind.MENU)

    def _finish(self, outcome: Outcome) -> None:
        s = self.session
        s.outcome = outcome
        score = s.score
        previous_best = self.store.best(s.difficulty)
        self.store.record(score, s.difficulty, player=self.cfg.player_name)
        self.store.persist()
        s.new_best = score > previous_best
        log.info(
            "Game over (%s) on %s: score %d after %d ticks, %d food",
            outcome.value, s.difficulty.name, score, s.ticks, s.foods_eaten,
        )
        self._emit(EventKind.WIN if outcome is Outcome.WIN else EventKind.COLLISION, s.snake.head)
        self._set_phase(Phase.GAME_OVER)
        self._emit(EventKind.GAME_OVER)

    # ----- input -----
    def handle(self, command: Command, now_ms: int) -> None:
        if self.phase is Phase.MENU:
            order = list(Difficulty)
            i = order.index(self.selected)
            if command is Command.UP:
                self.selected = order[(i - 1) % len(order)]
            elif command is Command.DOWN:
                self.selected = order[(i + 1) % len(order)]
            elif command is Command.CONFIRM:
                self.start(now_ms)

        elif self.phase is Phase.PLAYING:
            if command in _STEER:
                s = self.session
                d = _STEER[command]
                if not d.is_opposite(s.heading):
                    s.pending = d
            elif command is Command.PAUSE:
                self.pause()
            elif command is Command.RESTART:
                self.start(now_ms)

        elif self.phase is Phase.PAUSED:
            if command in (Command.PAUSE, Command.CONFIRM):
                self.resume(now_ms)
            elif command is Command.RESTART:
                self.start(now_ms)
            elif command is Command.MENU:
                log.info("Game abandoned from pause menu")
                self.to_menu()

        elif self.phase is Phase.GAME_OVER:
            if command in (Command.CONFIRM, Command.RESTART, Command.MENU):
                self.to_menu()

    # ----- simulation -----
    def update(self, now_ms: int) -> Optional[Outcome]:
        """Advance at most one step if the clock says so. Returns the step outcome."""
        if self.phase is not Phase.PLAYING or self.session is None:
            return None
        s = self.session
        if not s.clock.due(now_ms):
            return None

        s.snake, outcome = advance(s.snake, s.pending, self.rng)
        s.pending = s.snake.heading

        if outcome.terminal:
            if outcome is Outcome.WIN:
                s.ticks += 1
                s.foods_eaten += 1
                s.food_points += outcome.points
            self._finish(outcome)
        else:
            s.ticks += 1
            if outcome is Outcome.ATE:
                s.foods_eaten += 1
                s.food_points += outcome.points
                s.clock.speed_up()
                self._emit(EventKind.ATE, s.snake.head)
        return outcome
