# events.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, Type, Union
import logging

from .grid import Cell

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    LOST = "lost"
    WON = "won"

    @property
    def is_over(self) -> bool:
        return self in (SessionState.LOST, SessionState.WON)


@dataclass(frozen=True)
class Snapshot:
    """Immutable per-tick view handed to presentation adapters."""
    entity_cells: Tuple[Cell, ...]
    target_cell: Cell
    score: int
    session_state: SessionState
    direction: Tuple[int, int]
    ticks: int


# ---------- Event kinds ----------
@dataclass(frozen=True)
class Consumed:
    cell: Cell
    score: int

@dataclass(frozen=True)
class SessionStarted:
    pass

@dataclass(frozen=True)
class SessionPaused:
    pass

@dataclass(frozen=True)
class SessionResumed:
    pass

@dataclass(frozen=True)
class SessionLost:
    reason: str  # "hit_self" | "hit_wall"
    score: int

@dataclass(frozen=True)
class SessionWon:
    score: int

@dataclass(frozen=True)
class SnapshotPublished:
    snapshot: Snapshot


Event = Union[
    Consumed,
    SessionStarted,
    SessionPaused,
    SessionResumed,
    SessionLost,
    SessionWon,
    SnapshotPublished,
]
Listener = Callable[[Event], None]


class EventStream:
    """Synchronous fan-out of session events to subscribed listeners.
    A listener that raises is logged and skipped; it never reaches the simulation.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[Listener, Optional[Tuple[Type, ...]]]] = []

    def subscribe(self, listener: Listener, *kinds: Type) -> Callable[[], None]:
        """
        Register `listener` for the given event classes (all events if none).
        Returns a callable that removes the subscription.
        """
        entry = (listener, kinds or None)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def emit(self, event: Event) -> None:
        # Iterate over a copy: listeners may unsubscribe while handling
        for listener, kinds in list(self._listeners):
            if kinds is not None and not isinstance(event, kinds):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, type(event).__name__)

    def __len__(self) -> int:
        return len(self._listeners)
