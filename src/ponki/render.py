# render.py
from typing import Optional, Tuple
import pygame  # type: ignore

from .config import WIDTH, HEIGHT, HUD_HEIGHT, BG, CARTON, PONKI, MOUSE, EARS, TEXT
from .events import Event, SessionState, Snapshot, SnapshotPublished


class SnapshotRenderer:
    """
    Presentation adapter: keeps the latest published snapshot and draws it.
    Never touches the session; it only listens.
    """

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, dimension: int):
        self.screen = screen
        self.font = font
        self.dimension = dimension
        self.cell_size = min(WIDTH, HEIGHT - HUD_HEIGHT) / dimension
        self.latest: Optional[Snapshot] = None

    def __call__(self, event: Event) -> None:
        if isinstance(event, SnapshotPublished):
            self.latest = event.snapshot

    def draw(self) -> None:
        self.screen.fill(BG)
        if self.latest is None:
            draw_overlay(self.screen, self.font, "PONKI SNAKE", "Press Enter or click to start")
            return

        snap = self.latest
        draw_snapshot(self.screen, self.font, snap, self.cell_size)
        if snap.session_state is SessionState.PAUSED:
            draw_overlay(self.screen, self.font, "PAUSED", "Press P or double-tap to resume")
        elif snap.session_state is SessionState.LOST:
            draw_overlay(self.screen, self.font, "GAME OVER", "Press R to restart", snap.score)
        elif snap.session_state is SessionState.WON:
            draw_overlay(self.screen, self.font, "YOU WIN", "Press R to play again", snap.score)


# ---------- Helpers ----------
def draw_cell(screen: pygame.Surface, gx: int, gy: int, size: float,
              color: Tuple[int, int, int], inset: float = 0.0) -> None:
    rect = pygame.Rect(
        round(gx * size + inset),
        round(HUD_HEIGHT + gy * size + inset),
        max(1, round(size - 2 * inset)),
        max(1, round(size - 2 * inset)),
    )
    pygame.draw.rect(screen, color, rect)

def draw_snapshot(screen: pygame.Surface, font: pygame.font.Font,
                  snap: Snapshot, size: float) -> None:
    # target (mouse)
    tx, ty = snap.target_cell
    draw_cell(screen, tx, ty, size, MOUSE, inset=size * 0.15)
    draw_cell(screen, tx, ty, size, EARS, inset=size * 0.4)
    # body, then head on top
    for x, y in snap.entity_cells[1:]:
        draw_cell(screen, x, y, size, MOUSE, inset=size * 0.1)
    if snap.entity_cells:
        hx, hy = snap.entity_cells[0]
        draw_cell(screen, hx, hy, size, CARTON)
        draw_cell(screen, hx, hy, size, PONKI, inset=size * 0.25)
    # score
    txt = font.render(f"Score: {snap.score}", True, TEXT)
    screen.blit(txt, (8, 6))

def draw_overlay(screen: pygame.Surface, font: pygame.font.Font,
                 title_text: str, hint: str, score: Optional[int] = None) -> None:
    # Dim with translucent overlay
    overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    title = font.render(title_text, True, (240, 240, 250))
    sub   = font.render(hint, True, (220, 220, 230))
    screen.blit(title, title.get_rect(center=(WIDTH // 2, HEIGHT // 2 - 16)))
    screen.blit(sub, sub.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 16)))

    if score is not None:
        sco = font.render(f"Score: {score}", True, (220, 220, 230))
        screen.blit(sco, sco.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 44)))
