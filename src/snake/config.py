from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Optional

# ----- Window & grid -----
CELL_SIZE = 20
GRID_W, GRID_H = 30, 30
HUD_H = 28

# ----- Colors -----
BG    = (26, 26, 38)
GRID  = (38, 38, 51)
GREEN = (0, 204, 0)
HEAD  = (60, 255, 60)
RED   = (255, 0, 0)
TEXT  = (220, 220, 230)
HILITE = (80, 220, 80)
YELLOW = (240, 220, 60)

# ----- Scoring -----
FOOD_BONUS = 10
MAX_SCORES_PER_DIFFICULTY = 5


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def is_opposite(self, other: "Direction") -> bool:
        return self.dx == -other.dx and self.dy == -other.dy


# ----- Difficulty -----
class Difficulty(Enum):
    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"
    EXTREME = "EXTREME"

    @classmethod
    def parse(cls, text: str) -> "Difficulty":
        """Case-insensitive lookup; also accepts the old Medium/Expert names."""
        key = text.strip().upper()
        key = _LEGACY_NAMES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {text!r}") from None

    @property
    def interval_ms(self) -> int:
        return DIFFICULTY_TABLE[self].interval_ms

    @property
    def multiplier(self) -> float:
        return DIFFICULTY_TABLE[self].multiplier


_LEGACY_NAMES = {"MEDIUM": "NORMAL", "EXPERT": "EXTREME"}


class DifficultyInfo(NamedTuple):
    interval_ms: int
    multiplier: float


DIFFICULTY_TABLE: Dict[Difficulty, DifficultyInfo] = {
    Difficulty.EASY:    DifficultyInfo(interval_ms=200, multiplier=1.0),
    Difficulty.NORMAL:  DifficultyInfo(interval_ms=150, multiplier=1.5),
    Difficulty.HARD:    DifficultyInfo(interval_ms=100, multiplier=2.0),
    Difficulty.EXTREME: DifficultyInfo(interval_ms=70,  multiplier=3.0),
}

_missing = set(Difficulty) - set(DIFFICULTY_TABLE)
if _missing:
    raise KeyError(f"DIFFICULTY_TABLE is missing {sorted(d.name for d in _missing)}")


# ----- Tunables -----
@dataclass
class Config:
    grid_w: int = GRID_W
    grid_h: int = GRID_H
    seed: Optional[int] = None
    score_file: str = "high_scores.json"
    max_scores_per_difficulty: int = MAX_SCORES_PER_DIFFICULTY
    difficulty: Difficulty = Difficulty.NORMAL
    player_name: Optional[str] = None
    speedup_factor: float = 0.95   # applied to the tick interval per food
    min_move_ms: int = 50
    start_length: int = 3

    def __post_init__(self):
        if self.grid_w < 1 or self.grid_h < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.grid_w}x{self.grid_h}")
        if not 0 < self.speedup_factor <= 1:
            raise ValueError(f"speedup_factor must be in (0, 1], got {self.speedup_factor}")


CFG = Config()
