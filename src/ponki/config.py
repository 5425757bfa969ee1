# config.py
from dataclasses import dataclass
from typing import Optional

from .grid import BoundaryPolicy

# ----- Window -----
WIDTH, HEIGHT = 600, 600
HUD_HEIGHT = 32

# ----- Colors -----
BG     = (236, 240, 241)
CARTON = (52, 152, 219)
PONKI  = (44, 62, 80)
MOUSE  = (149, 165, 166)
EARS   = (231, 76, 60)
TEXT   = (44, 62, 80)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# ----- Defaults -----
GRID_DIMENSION = 30
TICK_MS = 100
SWIPE_THRESHOLD = 30
DOUBLE_TAP_MS = 300
DOUBLE_TAP_DISTANCE = 40
INITIAL_LENGTH = 3


# ----- Tunables -----
@dataclass(frozen=True)
class Config:
    grid_dimension: int = GRID_DIMENSION
    tick_ms: int = TICK_MS
    swipe_threshold: float = SWIPE_THRESHOLD
    double_tap_ms: int = DOUBLE_TAP_MS
    double_tap_distance: float = DOUBLE_TAP_DISTANCE
    boundary: BoundaryPolicy = BoundaryPolicy.BOUNDED
    win_length: Optional[int] = None  # None -> the entity fills the board
    seed: Optional[int] = None

    def __post_init__(self):
        # Accept "wrap"/"bounded" straight from the command line
        if not isinstance(self.boundary, BoundaryPolicy):
            object.__setattr__(self, "boundary", BoundaryPolicy(self.boundary))

        if self.grid_dimension < 4:
            raise ValueError(f"grid_dimension must be at least 4, got {self.grid_dimension}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.swipe_threshold <= 0:
            raise ValueError(f"swipe_threshold must be positive, got {self.swipe_threshold}")
        if self.double_tap_ms <= 0 or self.double_tap_distance <= 0:
            raise ValueError("double-tap window and distance must be positive")

        cells = self.grid_dimension * self.grid_dimension
        if self.win_length is not None and not (INITIAL_LENGTH < self.win_length <= cells):
            raise ValueError(
                f"win_length must be in ({INITIAL_LENGTH}, {cells}], got {self.win_length}"
            )

    @property
    def target_length(self) -> int:
        """Entity length that ends the session as a win."""
        if self.win_length is None:
            return self.grid_dimension * self.grid_dimension
        return self.win_length


CFG = Config()
