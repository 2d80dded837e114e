import numpy as np
import pytest

from snake.config import FOOD_BONUS, Direction
from snake.game import Outcome, SnakeState, advance, new_snake_state, spawn_food


def make_state(body, heading, food, width=10, height=10):
    return SnakeState(body=tuple(body), heading=heading, food=food, width=width, height=height)


@pytest.mark.parametrize("seed", range(20))
def test_eating_grows_by_one_and_respawns_food_off_the_snake(seed):
    state = make_state([(5, 5)], Direction.RIGHT, food=(6, 5))
    new, outcome = advance(state, Direction.RIGHT, np.random.default_rng(seed))

    assert outcome is Outcome.ATE
    assert new.head == (6, 5)
    assert new.body == ((6, 5), (5, 5))
    assert new.food is not None
    assert new.food not in {(6, 5), (5, 5)}
    assert 0 <= new.food[0] < 10 and 0 <= new.food[1] < 10


def test_reverse_direction_is_ignored():
    state = make_state([(3, 3), (2, 3), (1, 3)], Direction.RIGHT, food=(8, 8))
    new, outcome = advance(state, Direction.LEFT, np.random.default_rng(0))

    assert outcome is Outcome.MOVED
    assert new.heading is Direction.RIGHT
    assert new.body == ((4, 3), (3, 3), (2, 3))


def test_leaving_the_board_is_a_collision():
    state = make_state([(0, 3)], Direction.LEFT, food=(5, 5))
    new, outcome = advance(state, None, np.random.default_rng(0))

    assert outcome is Outcome.COLLISION
    assert new is state


@pytest.mark.parametrize(
    "head, heading",
    [((9, 0), Direction.RIGHT), ((0, 0), Direction.UP), ((4, 9), Direction.DOWN)],
)
def test_every_wall_collides(head, heading):
    state = make_state([head], heading, food=(5, 5))
    _, outcome = advance(state, heading, np.random.default_rng(0))
    assert outcome is Outcome.COLLISION


def test_turn_is_applied():
    state = make_state([(3, 3), (2, 3)], Direction.RIGHT, food=(8, 8))
    new, outcome = advance(state, Direction.UP, np.random.default_rng(0))
    assert outcome is Outcome.MOVED
    assert new.heading is Direction.UP
    assert new.body == ((3, 2), (3, 3))


def test_moving_into_the_vacating_tail_is_allowed():
    # head (1,1) came from (2,1); tail (1,2) leaves this tick
    state = make_state([(1, 1), (2, 1), (2, 2), (1, 2)], Direction.LEFT, food=(5, 5))
    new, outcome = advance(state, Direction.DOWN, np.random.default_rng(0))

    assert outcome is Outcome.MOVED
    assert new.body == ((1, 2), (1, 1), (2, 1), (2, 2))


def test_moving_into_the_body_is_a_collision():
    state = make_state([(1, 1), (2, 1), (2, 2), (1, 2), (0, 2)], Direction.LEFT, food=(5, 5))
    _, outcome = advance(state, Direction.DOWN, np.random.default_rng(0))
    assert outcome is Outcome.COLLISION


def test_filling_the_board_is_a_win():
    state = make_state([(0, 0)], Direction.RIGHT, food=(1, 0), width=2, height=1)
    new, outcome = advance(state, None, np.random.default_rng(0))

    assert outcome is Outcome.WIN
    assert outcome.terminal
    assert new.food is None
    assert set(new.body) == {(0, 0), (1, 0)}


def test_spawn_food_full_board_returns_none():
    body = [(x, y) for x in range(3) for y in range(3)]
    assert spawn_food(body, 3, 3, np.random.default_rng(0)) is None


def test_spawn_food_picks_the_only_free_cell():
    body = [(x, y) for x in range(3) for y in range(3) if (x, y) != (2, 1)]
    for seed in range(5):
        assert spawn_food(body, 3, 3, np.random.default_rng(seed)) == (2, 1)


def test_new_snake_state_starts_centered():
    state = new_snake_state(30, 30, np.random.default_rng(1))
    assert state.body == ((15, 15), (14, 15), (13, 15))
    assert state.heading is Direction.RIGHT
    assert state.food not in state.body


def test_new_snake_state_clamps_length_on_tiny_boards():
    state = new_snake_state(2, 2, np.random.default_rng(1), length=5)
    assert state.body == ((1, 1), (0, 1))
    with pytest.raises(ValueError):
        new_snake_state(0, 5, np.random.default_rng(1))


def test_random_play_keeps_invariants():
    rng = np.random.default_rng(1234)
    directions = list(Direction)
    state = new_snake_state(8, 8, rng)
    collisions = 0
    for _ in range(3000):
        before = len(state)
        pending = directions[int(rng.integers(len(directions)))]
        new, outcome = advance(state, pending, rng)

        if outcome is Outcome.COLLISION:
            collisions += 1
            state = new_snake_state(8, 8, rng)
            continue

        assert len(set(new.body)) == len(new.body)
        assert all(0 <= x < 8 and 0 <= y < 8 for x, y in new.body)
        if outcome is Outcome.ATE:
            assert len(new) == before + 1
            assert new.food not in new.body
        elif outcome is Outcome.MOVED:
            assert len(new) == before
        else:
            state = new_snake_state(8, 8, rng)
            continue
        assert not new.heading.is_opposite(state.heading)
        state = new

    assert collisions > 0


def test_only_eating_outcomes_carry_food_points():
    assert Outcome.ATE.points == FOOD_BONUS
    assert Outcome.WIN.points == FOOD_BONUS
    assert Outcome.MOVED.points == 0
    assert Outcome.COLLISION.points == 0
