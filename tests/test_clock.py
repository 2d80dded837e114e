import pytest

from snake.clock import GameClock, tick_interval_ms
from snake.config import DIFFICULTY_TABLE, Difficulty


def test_harder_difficulties_tick_faster_and_score_more():
    order = list(Difficulty)
    intervals = [tick_interval_ms(d) for d in order]
    multipliers = [d.multiplier for d in order]
    assert intervals == sorted(intervals, reverse=True)
    assert len(set(intervals)) == len(intervals)
    assert multipliers == sorted(multipliers)


def test_table_covers_every_difficulty():
    assert set(DIFFICULTY_TABLE) == set(Difficulty)


def test_due_fires_once_per_interval():
    clock = GameClock(100)
    clock.reset(0)
    assert not clock.due(50)
    assert clock.due(100)
    assert not clock.due(150)
    assert clock.due(200)


def test_stalls_do_not_catch_up():
    clock = GameClock(100)
    clock.reset(0)
    assert clock.due(1000)
    # the nine missed ticks are dropped
    assert not clock.due(1001)
    assert not clock.due(1099)
    assert clock.due(1100)


def test_speed_up_has_a_floor():
    clock = GameClock(100, min_interval_ms=80, speedup_factor=0.5)
    clock.speed_up()
    assert clock.interval_ms == 80
    clock.speed_up()
    assert clock.interval_ms == 80


def test_speedup_factor_one_keeps_interval_fixed():
    clock = GameClock.for_difficulty(Difficulty.HARD)
    for _ in range(10):
        clock.speed_up()
    assert clock.interval_ms == 100
    assert clock.steps_per_second == pytest.approx(10.0)


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        GameClock(0)
