# game.py
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple
import logging

import numpy as np  # type: ignore

from .config import Config, RIGHT, INITIAL_LENGTH
from .grid import Cell, wrap_or_clamp

logger = logging.getLogger(__name__)


# ---------- Helpers ----------
def spawn_target(entity: List[Cell], dimension: int, rng: np.random.Generator) -> Cell:
    """Uniformly random free cell, resampled until it misses the entity."""
    occupied = set(entity)
    if len(occupied) >= dimension * dimension:
        raise ValueError("no free cell left to place a target")
    while True:
        tx, ty = (int(v) for v in rng.integers(0, dimension, size=2))
        if (tx, ty) not in occupied:
            return (tx, ty)

def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]

def is_reversal(requested: Tuple[int, int], committed: Tuple[int, int], length: int) -> bool:
    """A 180° turn would put the head straight into the neck."""
    return length > 1 and is_opposite(requested, committed)


# ---------- State ----------
@dataclass
class GameState:
    entity: List[Cell]          # head at index 0
    direction: Tuple[int, int]  # last committed direction
    pending: Tuple[int, int]    # latest accepted intent, committed at tick start
    target: Cell
    score: int
    ticks: int = 0

    @property
    def head(self) -> Cell:
        return self.entity[0]


class TickOutcome(Enum):
    MOVED = "moved"
    CONSUMED = "consumed"
    HIT_SELF = "hit_self"
    HIT_WALL = "hit_wall"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        return self in (TickOutcome.HIT_SELF, TickOutcome.HIT_WALL, TickOutcome.WON)


def initial_entity(dimension: int) -> List[Cell]:
    # (10, 10) on the default 30x30 board
    s = max(INITIAL_LENGTH - 1, dimension // 3)
    return [(s - i, s) for i in range(INITIAL_LENGTH)]

def new_game_state(cfg: Config, rng: np.random.Generator) -> GameState:
    entity = initial_entity(cfg.grid_dimension)
    return GameState(
        entity=entity,
        direction=RIGHT,
        pending=RIGHT,
        target=spawn_target(entity, cfg.grid_dimension, rng),
        score=0,
    )


# ---------- Update ----------
def step_game(state: GameState, cfg: Config, rng: np.random.Generator) -> TickOutcome:
    """
    Advance the game by exactly one tick.
    HIT_SELF and HIT_WALL leave the entity, target and score untouched.
    """
    # Commit direction once per tick
    state.direction = state.pending
    state.ticks += 1

    new_head = wrap_or_clamp(state.head, state.direction, cfg.grid_dimension, cfg.boundary)

    # Wall collision (bounded policy only)
    if new_head is None:
        return TickOutcome.HIT_WALL

    # Self collision against the whole pre-move body, tail included:
    # stepping into the cell the tail is about to vacate still counts.
    if new_head in state.entity:
        return TickOutcome.HIT_SELF

    state.entity.insert(0, new_head)

    # Move / grow
    if new_head == state.target:
        state.score += 1
        if len(state.entity) >= cfg.target_length:
            return TickOutcome.WON
        state.target = spawn_target(state.entity, cfg.grid_dimension, rng)
        logger.debug("Target consumed at %s, score %d, next target %s",
                     new_head, state.score, state.target)
        return TickOutcome.CONSUMED

    state.entity.pop()
    return TickOutcome.MOVED
