"""Tests for ponki.game (one simulation step at a time)."""

from __future__ import annotations

import numpy as np
import pytest

from ponki.config import DOWN, LEFT, RIGHT, UP, Config
from ponki.game import (
    GameState,
    TickOutcome,
    initial_entity,
    is_opposite,
    is_reversal,
    new_game_state,
    spawn_target,
    step_game,
)
from ponki.grid import BoundaryPolicy


def _state(entity, direction=RIGHT, target=(0, 0)) -> GameState:
    return GameState(entity=list(entity), direction=direction, pending=direction,
                     target=target, score=0)


class TestNewGame:
    def test_initial_body_on_default_board(self) -> None:
        assert initial_entity(30) == [(10, 10), (9, 10), (8, 10)]

    def test_initial_body_fits_small_board(self) -> None:
        assert initial_entity(4) == [(2, 2), (1, 2), (0, 2)]

    def test_fresh_state(self) -> None:
        state = new_game_state(Config(), np.random.default_rng(0))
        assert state.score == 0
        assert state.direction == RIGHT
        assert state.pending == RIGHT
        assert state.target not in state.entity


class TestSpawnTarget:
    def test_never_on_entity(self) -> None:
        rng = np.random.default_rng(1)
        # Leave exactly one free cell on a 4x4 board
        entity = [(x, y) for y in range(4) for x in range(4) if (x, y) != (2, 3)]
        for _ in range(20):
            assert spawn_target(entity, 4, rng) == (2, 3)

    def test_many_spawns_avoid_entity(self) -> None:
        rng = np.random.default_rng(7)
        entity = initial_entity(30)
        for _ in range(500):
            target = spawn_target(entity, 30, rng)
            assert target not in entity
            assert 0 <= target[0] < 30 and 0 <= target[1] < 30

    def test_full_board_raises(self) -> None:
        entity = [(x, y) for y in range(4) for x in range(4)]
        with pytest.raises(ValueError):
            spawn_target(entity, 4, np.random.default_rng(0))


class TestDirections:
    def test_is_opposite(self) -> None:
        assert is_opposite(LEFT, RIGHT)
        assert is_opposite(UP, DOWN)
        assert not is_opposite(UP, LEFT)
        assert not is_opposite(UP, UP)

    def test_single_cell_may_reverse(self) -> None:
        assert not is_reversal(LEFT, RIGHT, 1)
        assert is_reversal(LEFT, RIGHT, 3)


class TestStep:
    def test_reaches_target_after_five_ticks(self) -> None:
        cfg = Config()
        rng = np.random.default_rng(0)
        state = _state([(10, 10), (9, 10), (8, 10)], target=(15, 10))
        outcomes = [step_game(state, cfg, rng) for _ in range(5)]
        assert outcomes == [TickOutcome.MOVED] * 4 + [TickOutcome.CONSUMED]
        assert state.head == (15, 10)
        assert state.score == 1
        assert len(state.entity) == 4
        assert state.target not in state.entity

    def test_length_constant_without_consumption(self) -> None:
        cfg = Config()
        rng = np.random.default_rng(0)
        state = _state([(10, 10), (9, 10), (8, 10)], target=(0, 0))
        for _ in range(10):
            assert step_game(state, cfg, rng) is TickOutcome.MOVED
            assert len(state.entity) == 3
        assert state.entity == [(20, 10), (19, 10), (18, 10)]

    def test_pending_intent_committed_at_tick_start(self) -> None:
        state = _state([(10, 10), (9, 10), (8, 10)])
        state.pending = UP
        step_game(state, Config(), np.random.default_rng(0))
        assert state.direction == UP
        assert state.head == (10, 9)

    def test_wall_hit_under_bounded_policy(self) -> None:
        cfg = Config(grid_dimension=10, boundary=BoundaryPolicy.BOUNDED)
        state = _state([(9, 5), (8, 5), (7, 5)])
        assert step_game(state, cfg, np.random.default_rng(0)) is TickOutcome.HIT_WALL
        assert state.entity == [(9, 5), (8, 5), (7, 5)]

    def test_wraps_under_toroidal_policy(self) -> None:
        cfg = Config(grid_dimension=10, boundary=BoundaryPolicy.TOROIDAL)
        state = _state([(9, 5), (8, 5), (7, 5)])
        assert step_game(state, cfg, np.random.default_rng(0)) is TickOutcome.MOVED
        assert state.entity == [(0, 5), (9, 5), (8, 5)]

    def test_self_collision(self) -> None:
        # Head at (5, 5) heading up, body curls around to its right
        body = [(5, 5), (5, 6), (6, 6), (6, 5), (6, 4)]
        state = _state(body, direction=UP)
        state.pending = RIGHT
        outcome = step_game(state, Config(), np.random.default_rng(0))
        assert outcome is TickOutcome.HIT_SELF
        assert state.entity == body
        assert state.score == 0

    def test_moving_into_vacating_tail_is_collision(self) -> None:
        # 2x2 loop: the tail at (6, 5) would be vacated this tick
        body = [(5, 5), (5, 6), (6, 6), (6, 5)]
        state = _state(body, direction=UP)
        state.pending = RIGHT
        assert step_game(state, Config(), np.random.default_rng(0)) is TickOutcome.HIT_SELF

    def test_win_when_length_reached(self) -> None:
        cfg = Config(grid_dimension=10, win_length=4)
        state = _state([(3, 3), (2, 3), (1, 3)], target=(4, 3))
        assert step_game(state, cfg, np.random.default_rng(0)) is TickOutcome.WON
        assert len(state.entity) == 4
        assert state.score == 1
        assert state.target == (4, 3)

    def test_filling_the_board_wins_without_spawning(self) -> None:
        cfg = Config(grid_dimension=4, boundary=BoundaryPolicy.TOROIDAL)
        # Snake path covering 15 of 16 cells; the free cell holds the target
        path = [(0, 0), (1, 0), (2, 0), (3, 0),
                (3, 1), (2, 1), (1, 1), (0, 1),
                (0, 2), (1, 2), (2, 2), (3, 2),
                (3, 3), (2, 3), (1, 3)]
        entity = list(reversed(path))  # head at (1, 3)
        state = _state(entity, direction=LEFT, target=(0, 3))
        assert step_game(state, cfg, np.random.default_rng(0)) is TickOutcome.WON
        assert len(state.entity) == 16

    def test_ticks_counted(self) -> None:
        state = _state([(10, 10), (9, 10), (8, 10)])
        for _ in range(3):
            step_game(state, Config(), np.random.default_rng(0))
        assert state.ticks == 3
