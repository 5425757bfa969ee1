# __init__.py
"""Ponki snake: a single-entity grid game with a fixed-tick core."""

from .config import CFG, Config, DOWN, LEFT, RIGHT, UP
from .events import EventStream, SessionState, Snapshot
from .grid import BoundaryPolicy, wrap_or_clamp
from .scheduler import ManualScheduler, PollingScheduler
from .session import GameSession

__all__ = [
    "CFG",
    "Config",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "EventStream",
    "SessionState",
    "Snapshot",
    "BoundaryPolicy",
    "wrap_or_clamp",
    "ManualScheduler",
    "PollingScheduler",
    "GameSession",
]
