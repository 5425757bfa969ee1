# controls.py
from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import math

import pygame  # type: ignore

from .config import Config, CFG, UP, DOWN, LEFT, RIGHT
from .events import Event, SessionStarted, SessionState
from .session import GameSession

logger = logging.getLogger(__name__)

# ----- Key groups -----
# pygame reports the same key code for 'w' and 'W'
KEY_DIRECTIONS = {
    pygame.K_UP: UP,    pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT, pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}
PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)
START_KEYS = (pygame.K_RETURN, pygame.K_SPACE, pygame.K_r)


def direction_for_key(key: int) -> Optional[Tuple[int, int]]:
    return KEY_DIRECTIONS.get(key)

def swipe_direction(dx: float, dy: float, threshold: float) -> Optional[Tuple[int, int]]:
    """
    Dominant axis of a drag, or None when it is too short to be a swipe.
    Equal magnitudes count as vertical.
    """
    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


@dataclass
class Tap:
    x: float
    y: float
    t_ms: int


class GestureRecognizer:
    """
    Turns pointer down/up pairs into swipes, taps and double-taps.

    A swipe becomes a directional input. A tap is remembered; a second tap
    close enough in time and space toggles pause and is forgotten, so a third
    rapid tap starts a new pair instead of toggling again.
    """

    def __init__(self, session: GameSession, cfg: Config = CFG) -> None:
        self.session = session
        self.cfg = cfg
        self._down: Optional[Tap] = None
        self._last_tap: Optional[Tap] = None
        session.events.subscribe(self.reset, SessionStarted)

    def reset(self, event: Optional[Event] = None) -> None:
        """Forget pointer and tap history; a new game starts clean."""
        self._down = None
        self._last_tap = None

    # Pointer lifecycle ------------------------------------------------------
    def pointer_down(self, x: float, y: float, t_ms: int) -> None:
        if self.session.session_state not in (SessionState.RUNNING, SessionState.PAUSED):
            return
        self._down = Tap(x, y, t_ms)

    def pointer_up(self, x: float, y: float, t_ms: int) -> None:
        if self._down is None:
            return
        start, self._down = self._down, None
        self.swipe_gesture(x - start.x, y - start.y, start.x, start.y, t_ms)

    def pointer_cancel(self) -> None:
        self._down = None

    # Gestures -------------------------------------------------------------
    def swipe_gesture(self, dx: float, dy: float,
                      x: float = 0.0, y: float = 0.0, t_ms: int = 0) -> None:
        """Classify a finished drag; (x, y, t_ms) locate it if it was a tap."""
        direction = swipe_direction(dx, dy, self.cfg.swipe_threshold)
        if direction is None:
            self.tap(x, y, t_ms)
            return
        self.session.directional_input(direction)

    def tap(self, x: float, y: float, t_ms: int) -> bool:
        """Record a tap. Returns True when it completed a double-tap."""
        prev = self._last_tap
        if prev is not None and self._is_second_tap(prev, x, y, t_ms):
            self._last_tap = None
            self.double_tap()
            return True
        self._last_tap = Tap(x, y, t_ms)
        return False

    def double_tap(self) -> None:
        logger.debug("Double-tap: toggling pause")
        self.session.toggle_pause()

    def _is_second_tap(self, prev: Tap, x: float, y: float, t_ms: int) -> bool:
        elapsed = t_ms - prev.t_ms
        distance = math.hypot(x - prev.x, y - prev.y)
        return 0 <= elapsed <= self.cfg.double_tap_ms and distance <= self.cfg.double_tap_distance


# ---------- pygame event dispatch ----------
def handle_event(event: pygame.event.Event, session: GameSession,
                 gestures: GestureRecognizer, now_ms: int) -> bool:
    """Route one pygame event into the session. Return False to quit."""
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.KEYDOWN:
        if event.key in PAUSE_KEYS:
            session.toggle_pause()
        elif event.key in START_KEYS:
            if session.session_state in (SessionState.IDLE, SessionState.LOST, SessionState.WON):
                session.start()
        else:
            cand = direction_for_key(event.key)
            if cand is not None:
                session.directional_input(cand)

    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if session.session_state is SessionState.IDLE or session.session_state.is_over:
            session.start()
        else:
            gestures.pointer_down(event.pos[0], event.pos[1], now_ms)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        gestures.pointer_up(event.pos[0], event.pos[1], now_ms)
    elif event.type == pygame.WINDOWFOCUSLOST:
        gestures.pointer_cancel()
    return True
