# clock.py
from .config import Difficulty


def tick_interval_ms(difficulty: Difficulty) -> int:
    """Milliseconds between snake steps at the start of a game."""
    return difficulty.interval_ms


class GameClock:
    """
    Gates simulation steps on wall-clock milliseconds.

    At most one step is reported per `due()` call; time lost to stalls or
    pauses is dropped rather than replayed.
    """

    def __init__(self, interval_ms: int, min_interval_ms: int = 50, speedup_factor: float = 1.0):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.base_interval_ms = interval_ms
        self.interval_ms: float = float(interval_ms)
        self.min_interval_ms = min(min_interval_ms, interval_ms)
        self.speedup_factor = speedup_factor
        self.last_tick = 0

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty, min_interval_ms: int = 50,
                       speedup_factor: float = 1.0) -> "GameClock":
        return cls(tick_interval_ms(difficulty), min_interval_ms, speedup_factor)

    def reset(self, now_ms: int) -> None:
        self.last_tick = now_ms

    def due(self, now_ms: int) -> bool:
        if now_ms - self.last_tick < self.interval_ms:
            return False
        self.last_tick = now_ms
        return True

    def speed_up(self) -> None:
        self.interval_ms = max(float(self.min_interval_ms), self.interval_ms * self.speedup_factor)

    @property
    def steps_per_second(self) -> float:
        return 1000.0 / self.interval_ms
