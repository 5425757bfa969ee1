# session.py

from __future__ import annotations

from typing import Optional, Tuple
import logging

import numpy as np  # type: ignore

from .config import CFG, Config
from .events import (
    Consumed,
    EventStream,
    SessionLost,
    SessionPaused,
    SessionResumed,
    SessionStarted,
    SessionState,
    SessionWon,
    Snapshot,
    SnapshotPublished,
)
from .game import GameState, TickOutcome, is_reversal, new_game_state, step_game
from .scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)


class GameSession:
    """
    Lifecycle of one game: idle -> running <-> paused -> lost | won.

    Owns the mutable game state, the RNG, the tick job and the event stream.
    Commands that make no sense in the current state are ignored.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        cfg: Config = CFG,
        events: Optional[EventStream] = None,
    ) -> None:
        self.cfg = cfg
        self.scheduler = scheduler
        self.events = events if events is not None else EventStream()
        self.rng = np.random.default_rng(cfg.seed)
        self.session_state = SessionState.IDLE
        self.state: Optional[GameState] = None
        self._job: Optional[Cancellable] = None
        self._in_tick = False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin a fresh game from Idle, Lost or Won."""
        if self._mid_tick("start"):
            return False
        if self.session_state in (SessionState.RUNNING, SessionState.PAUSED):
            logger.debug("start() ignored while %s", self.session_state.value)
            return False

        self._cancel_ticks()
        self.state = new_game_state(self.cfg, self.rng)
        self.session_state = SessionState.RUNNING
        self._schedule_ticks()
        logger.info("Session started, target at %s", self.state.target)
        self.events.emit(SessionStarted())
        self._publish()
        return True

    def pause(self) -> bool:
        if self._mid_tick("pause"):
            return False
        if self.session_state is not SessionState.RUNNING:
            logger.debug("pause() ignored while %s", self.session_state.value)
            return False
        self._cancel_ticks()
        self.session_state = SessionState.PAUSED
        logger.info("Session paused at tick %d", self.state.ticks)
        self.events.emit(SessionPaused())
        self._publish()
        return True

    def resume(self) -> bool:
        if self._mid_tick("resume"):
            return False
        if self.session_state is not SessionState.PAUSED:
            logger.debug("resume() ignored while %s", self.session_state.value)
            return False
        self.session_state = SessionState.RUNNING
        # A fresh full period, not whatever was left before pausing
        self._schedule_ticks()
        logger.info("Session resumed at tick %d", self.state.ticks)
        self.events.emit(SessionResumed())
        self._publish()
        return True

    def toggle_pause(self) -> bool:
        if self.session_state is SessionState.PAUSED:
            return self.resume()
        return self.pause()

    def directional_input(self, requested: Tuple[int, int]) -> bool:
        """
        Record `requested` as the pending intent (last writer wins).
        A reversal of the *committed* direction is dropped, however many
        intents arrive before the next tick.
        """
        if self.session_state not in (SessionState.RUNNING, SessionState.PAUSED):
            return False
        if is_reversal(requested, self.state.direction, len(self.state.entity)):
            logger.debug("Rejected reversal %s against %s", requested, self.state.direction)
            return False
        self.state.pending = requested
        return True

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self) -> Optional[TickOutcome]:
        """Advance one step. Only a running, non-ticking session moves."""
        if self.session_state is not SessionState.RUNNING or self._in_tick:
            return None

        # Held until the snapshot is out: listeners cannot start a nested tick
        # or change the session while this one is still being published
        self._in_tick = True
        try:
            outcome = step_game(self.state, self.cfg, self.rng)
            if outcome in (TickOutcome.HIT_SELF, TickOutcome.HIT_WALL):
                self._end(SessionState.LOST)
            elif outcome is TickOutcome.WON:
                self._end(SessionState.WON)

            if outcome is TickOutcome.CONSUMED or outcome is TickOutcome.WON:
                self.events.emit(Consumed(cell=self.state.head, score=self.state.score))
            if outcome in (TickOutcome.HIT_SELF, TickOutcome.HIT_WALL):
                self.events.emit(SessionLost(reason=outcome.value, score=self.state.score))
            elif outcome is TickOutcome.WON:
                self.events.emit(SessionWon(score=self.state.score))
            self._publish()
        finally:
            self._in_tick = False
        return outcome

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self) -> Optional[Snapshot]:
        """Current frozen view, or None before the first start()."""
        if self.state is None:
            return None
        return Snapshot(
            entity_cells=tuple(self.state.entity),
            target_cell=self.state.target,
            score=self.state.score,
            session_state=self.session_state,
            direction=self.state.direction,
            ticks=self.state.ticks,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _mid_tick(self, command: str) -> bool:
        if self._in_tick:
            logger.debug("%s() ignored during a tick", command)
        return self._in_tick

    def _end(self, final: SessionState) -> None:
        self._cancel_ticks()
        self.session_state = final
        logger.info("Session %s at tick %d with score %d",
                    final.value, self.state.ticks, self.state.score)

    def _publish(self) -> None:
        self.events.emit(SnapshotPublished(self.snapshot()))

    def _schedule_ticks(self) -> None:
        self._job = self.scheduler.schedule_repeating(self.cfg.tick_ms, self.tick)

    def _cancel_ticks(self) -> None:
        if self._job is not None:
            self._job.cancel()
            self._job = None
