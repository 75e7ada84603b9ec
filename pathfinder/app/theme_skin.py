# pathfinder/app/theme_skin.py
"""
Dark neon skin for the grid viewer (visuals only; no logic)
- Backdrop: vertical dark gradient, cached per window size
- Tiles: background color per GridState, thin dark borders
- Foreground dots: teal for the path, a neon color per cell while checking
- Right panel: frosted glass underlay (viewer draws text on top)
"""

from __future__ import annotations
import random
from typing import Dict, Optional, Tuple
import pygame

from pathfinder.core.types import GridState

Color = Tuple[int, int, int]

# ---- palette ----
BLACK         = (0, 0, 0)
WHITE         = (245, 245, 245)
GREEN         = (52, 199, 89)
RED           = (255, 59, 48)
TEAL          = (90, 200, 250)
TILE_BORDER   = (28, 30, 36)
TEXT_LIGHT    = (230, 235, 240)
ACCENT_GOLD   = (255, 210, 0)

CHECKING_NEON = (
    (0, 255, 200),
    (0, 150, 255),
    (255, 0, 120),
    (255, 210, 0),
    (170, 90, 255),
)

BACKGROUND: Dict[GridState, Color] = {
    GridState.EMPTY:    BLACK,
    GridState.PATH:     BLACK,
    GridState.CHECKING: BLACK,
    GridState.START:    GREEN,
    GridState.END:      RED,
    GridState.BARRIER:  WHITE,
}

# panel colors
PANEL_FILL    = (18, 20, 28, 190)
PANEL_SHADOW  = (0, 0, 0, 140)

# caches
_gradient_by_size: dict[Tuple[int, int], pygame.Surface] = {}


# ---------- colors ----------
def background_color(state: GridState) -> Color:
    return BACKGROUND[state]

def foreground_color(state: GridState, row: int, col: int) -> Optional[Color]:
    if state == GridState.PATH:
        return TEAL
    if state == GridState.CHECKING:
        # stable per cell so the dot does not flicker between frames
        return random.Random(row * 7919 + col).choice(CHECKING_NEON)
    return None


# ---------- helpers ----------
def _rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)

def glass_panel(screen: pygame.Surface, rect: pygame.Rect,
                fill_rgba=PANEL_FILL, shadow_rgba=PANEL_SHADOW):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    _rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), shadow_rgba, radius=20)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    _rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), fill_rgba, radius=20)
    # subtle top sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 12)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255,255,255,18), hi.get_rect(), border_radius=18)
    card.blit(hi, (0,0))
    screen.blit(card, rect.topleft)

def draw_backdrop(screen: pygame.Surface):
    """Gradient backdrop, cached by window size."""
    w, h = screen.get_size()
    key = (w, h)
    if key not in _gradient_by_size:
        surf = pygame.Surface((w, h))
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(surf, c, (0, y), (w, y))
        _gradient_by_size.clear()
        _gradient_by_size[key] = surf
    screen.blit(_gradient_by_size[key], (0, 0))

def draw_grid(model, screen: pygame.Surface, origin: Tuple[int, int], cell_size: int):
    """Tiles by GridState with a centered dot for path/checking cells."""
    cs = cell_size
    ox, oy = origin
    dot_r = max(2, cs // 5)

    for row in range(model.rows):
        for col in range(model.columns):
            state = model.state_at((row, col))
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            pygame.draw.rect(screen, background_color(state), rect)

            fg = foreground_color(state, row, col)
            if fg is not None:
                pygame.draw.circle(screen, fg, rect.center, dot_r)

            pygame.draw.rect(screen, TILE_BORDER, rect, 1)
