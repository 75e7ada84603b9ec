# pathfinder/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinder Viewer: draw barriers, drag start/end, watch Dijkstra

- Mouse:
    click/drag on empty tiles   -> paint barriers
    click/drag on barriers      -> erase
    drag the green/red tile     -> move start/end
- Keyboard:
    [A]          -> toggle step-by-step animation
    [C]          -> clear barriers
    [Q]/[ESC]    -> quit

Settings: see pathfinder.app.settings (PATHFINDER_* env vars or --flags).
"""

import logging
import sys
import time
from typing import Callable, Optional, Tuple

import pygame

from pathfinder.app import theme_skin as THEME
from pathfinder.app.grid_model import GridViewModel, calculate_grid_size
from pathfinder.app.settings import Settings, resolve_settings
from pathfinder.core.dijkstra import DijkstraPathFinder
from pathfinder.core.dispatch import CallerQueue
from pathfinder.core.types import Cell

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 280            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font
FPS = 60

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)


# ---------- Panel button ----------
class PanelButton:
    """
    Button in the right panel that mirrors a keyboard shortcut.

    `is_on` reads live model state (e.g. animation on/off), so the highlight
    never drifts from what the grid is actually doing.
    """

    BG_IDLE   = (36, 40, 48, 220)
    BG_HOVER  = (46, 50, 60, 230)
    BG_ON     = (58, 86, 160, 235)
    BORDER_ON = (120, 170, 255, 255)

    def __init__(self, label: str, key_hint: str, rect: pygame.Rect,
                 on_click: Callable[[], None], is_on: Optional[Callable[[], bool]] = None):
        self.label = label
        self.key_hint = key_hint
        self.rect = rect
        self.on_click = on_click
        self.is_on = is_on
        self.hover = False

    def _lit(self) -> bool:
        return self.is_on is not None and self.is_on()

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        lit = self._lit()
        bg = self.BG_ON if lit else (self.BG_HOVER if self.hover else self.BG_IDLE)

        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)
        if lit:
            pygame.draw.rect(screen, self.BORDER_ON, self.rect, width=2, border_radius=10)

        # label on the left, shortcut on the right
        text = font.render(self.label, True, THEME.TEXT_LIGHT)
        screen.blit(text, text.get_rect(midleft=(self.rect.x + 12, self.rect.centery)))
        hint = font.render(f"[{self.key_hint}]", True, THEME.ACCENT_GOLD)
        screen.blit(hint, hint.get_rect(midright=(self.rect.right - 12, self.rect.centery)))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """True when the event was a click on this button."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()
        self.settings = settings

        win_w, win_h = settings.window
        rows, columns = calculate_grid_size(max(1, win_w - PANEL_W), win_h, settings.tiles)

        self.completions = CallerQueue()
        self.path_finder = DijkstraPathFinder(dispatcher=self.completions)
        self.model = GridViewModel(self.path_finder, rows, columns, animated=settings.animate)
        logger.info("grid %dx%d, start %s, end %s", rows, columns, self.model.start, self.model.end)

        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Pathfinder: Dijkstra")

        self._buttons: list[PanelButton] = []
        self._dragging = False
        self._last_touched: Optional[Cell] = None
        self._last_frame_t = 0.0

        self.clock = pygame.time.Clock()
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.model.columns
        cs_by_h = avail_h // self.model.rows
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.model.columns * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.model.rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        col = (x - ox) // self.cell_size
        row = (y - oy) // self.cell_size
        if 0 <= row < self.model.rows and 0 <= col < self.model.columns:
            return (row, col)
        return None

    # ---------- loop ----------
    def run(self):
        try:
            while True:
                self._handle_events()
                self.completions.drain()
                self._tick_animation()
                self._draw()
                self.clock.tick(FPS)
        finally:
            self.path_finder.shutdown(wait=False)

    def _tick_animation(self):
        if not self.model.is_animating:
            return
        now = time.time()
        if now - self._last_frame_t >= self.settings.step_interval:
            self._last_frame_t = now
            self.model.fire_timer()

    def _quit(self):
        self.path_finder.shutdown(wait=False)
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_a:
                    self._toggle_animated()
                elif e.key == pygame.K_c:
                    self.model.clear_grid()
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self._cell_at(e.pos)
                if cell is not None:
                    self._dragging = True
                    self._last_touched = cell
                    self.model.touch_began(cell)
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if self._dragging:
                    cell = self._cell_at(e.pos)
                    if cell is not None and cell != self._last_touched:
                        self._last_touched = cell
                        self.model.touch_moved(cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                if self._dragging:
                    self.model.touch_ended(self._cell_at(e.pos))
                self._dragging = False
                self._last_touched = None

    def _toggle_animated(self):
        self.model.set_animated(not self.model.is_animated)

    # ---------- drawing ----------
    def _draw(self):
        THEME.draw_backdrop(self.screen)
        THEME.draw_grid(self.model, self.screen, self._grid_origin, self.cell_size)
        THEME.glass_panel(self.screen, self._right_band)
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 38
        gap = 10

        self._buttons = [
            PanelButton("Animate", "A", pygame.Rect(x, y, w, h),
                        self._toggle_animated, is_on=lambda: self.model.is_animated),
            PanelButton("Clear Barriers", "C", pygame.Rect(x, y + h + gap, w, h),
                        self.model.clear_grid),
        ]

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 210
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=THEME.TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Dijkstra", big=True, color=THEME.ACCENT_GOLD)
        out = self.model.current_output
        if out is None:
            line("Searching...")
        else:
            line(f"Checked: {len(out.steps)}")
            if out.path is None:
                line("Path: none")
            else:
                line(f"Path Len: {len(out.path)}")
                line(f"Total Cost: {out.distance:.2f}")
        line("-" * 22)
        line(f"Grid: {self.model.rows} x {self.model.columns}")
        line(f"Animation: {'on' if self.model.is_animated else 'off'}")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    try:
        settings = resolve_settings()
    except ValueError as ex:
        logging.basicConfig(level=logging.ERROR)
        logger.error("invalid settings: %s", ex)
        sys.exit(2)
    logging.basicConfig(level=getattr(logging, settings.log_level))
    Viewer(settings).run()

if __name__ == "__main__":
    main()
