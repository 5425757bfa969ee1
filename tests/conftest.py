from __future__ import annotations

from typing import Dict, List, Type

import pytest

from ponki.config import Config
from ponki.events import Event
from ponki.scheduler import ManualScheduler
from ponki.session import GameSession


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: List[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of(self, kind: Type) -> List[Event]:
        return [e for e in self.events if isinstance(e, kind)]

    def counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for e in self.events:
            out[type(e).__name__] = out.get(type(e).__name__, 0) + 1
        return out


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def cfg() -> Config:
    return Config(seed=0)


@pytest.fixture()
def session(scheduler: ManualScheduler, cfg: Config) -> GameSession:
    return GameSession(scheduler, cfg)


@pytest.fixture()
def recorder(session: GameSession) -> EventRecorder:
    rec = EventRecorder()
    session.events.subscribe(rec)
    return rec
