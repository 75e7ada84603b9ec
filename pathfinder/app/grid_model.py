# pathfinder/app/grid_model.py
#!/usr/bin/env python3
"""
GridViewModel: the editable grid behind the viewer.

Owns the long-lived grid, turns pointer gestures into grid edits, asks the path
finder for a new route after every edit, and plays back the visited cells one
frame at a time when animation is on. Knows nothing about pygame.
"""

import logging
from typing import List, Optional, Tuple

from pathfinder.core.dijkstra import PathFinder
from pathfinder.core.types import Cell, GridState, PathFinderOutput

logger = logging.getLogger(__name__)

_PAINTABLE = (GridState.EMPTY, GridState.PATH, GridState.CHECKING)


def calculate_grid_size(width: int, height: int, tiles_along_min_axis: int) -> Tuple[int, int]:
    """(rows, columns) so cells stay square in a width x height window."""
    portrait = width < height
    short, long_ = (width, height) if portrait else (height, width)
    along_long = max(1, round(tiles_along_min_axis * long_ / max(1, short)))
    if portrait:
        return along_long, tiles_along_min_axis
    return tiles_along_min_axis, along_long


def initial_endpoints(rows: int, columns: int) -> Tuple[Cell, Cell]:
    if rows >= columns:
        start = (min(rows - 1, 2), columns // 2)
        end = (max(rows - 3, 0), columns // 2)
    else:
        start = (rows // 2, min(columns - 1, 2))
        end = (rows // 2, max(columns - 3, 0))
    return start, end


class GridViewModel:
    def __init__(self, path_finder: PathFinder, rows: int, columns: int,
                 animated: bool = False) -> None:
        if rows <= 0 or columns <= 0:
            raise ValueError(f"grid must have at least one cell, got {rows}x{columns}")
        self.path_finder = path_finder
        self.rows = rows
        self.columns = columns

        self.start, self.end = initial_endpoints(rows, columns)
        self.grid: List[List[int]] = [[GridState.EMPTY] * columns for _ in range(rows)]
        self.grid[self.start[0]][self.start[1]] = GridState.START
        self.grid[self.end[0]][self.end[1]] = GridState.END

        self.current_output: Optional[PathFinderOutput] = None
        self.is_animated = animated
        self.is_animating = False
        self.animation_step = 0

        self._touch_state: Optional[GridState] = None
        self._displaced_state: Optional[GridState] = None

        self.update_min_path()

    # -------------------- cell access --------------------

    def state_at(self, cell: Cell) -> GridState:
        row, col = cell
        return GridState(self.grid[row][col])

    def _set(self, cell: Cell, state: GridState) -> None:
        row, col = cell
        self.grid[row][col] = state

    def _in_bounds(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.columns

    # -------------------- gestures --------------------

    def touch_began(self, cell: Cell) -> None:
        if not self._in_bounds(cell):
            return
        state = self.state_at(cell)
        self._touch_state = state

        if state in _PAINTABLE:
            self._set(cell, GridState.BARRIER)
        elif state == GridState.BARRIER:
            self._set(cell, GridState.EMPTY)
        else:
            return  # start/end picked up for dragging
        self.update_min_path()

    def touch_moved(self, cell: Cell) -> None:
        if not self._in_bounds(cell):
            return
        state = self.state_at(cell)
        if state in (GridState.START, GridState.END):
            return

        if self._touch_state == GridState.START:
            self._set(self.start, self._restored_state())
            self._displaced_state = state
            self._set(cell, GridState.START)
            self.start = cell
        elif self._touch_state == GridState.END:
            self._set(self.end, self._restored_state())
            self._displaced_state = state
            self._set(cell, GridState.END)
            self.end = cell
        elif state in _PAINTABLE:
            self._set(cell, GridState.BARRIER)
        elif state == GridState.BARRIER:
            self._set(cell, GridState.EMPTY)
        else:
            return
        self.update_min_path()

    def _restored_state(self) -> GridState:
        # what the dragged endpoint was covering before it arrived
        if self._displaced_state is None:
            return GridState.EMPTY
        return self._displaced_state

    def touch_ended(self, cell: Optional[Cell] = None) -> None:
        self._touch_state = None
        self._displaced_state = None

    # -------------------- commands --------------------

    def clear_grid(self) -> None:
        """Remove every barrier and every path/checking mark."""
        for row in self.grid:
            for col, value in enumerate(row):
                if value in (GridState.BARRIER, GridState.PATH, GridState.CHECKING):
                    row[col] = GridState.EMPTY
        self.update_min_path()

    def set_animated(self, animated: bool) -> None:
        self.is_animated = animated
        self.update_min_path()

    def update_min_path(self) -> None:
        snapshot = [list(row) for row in self.grid]
        self.path_finder.find_min_path(self.start, self.end, snapshot, self._on_output)

    def _on_output(self, output: PathFinderOutput) -> None:
        self.is_animating = False
        self._clean_up_animation()
        self._clear_current_path()

        self.current_output = output
        if output.path is None:
            logger.info("no path from %s to %s (%d cells checked)",
                        self.start, self.end, len(output.steps))

        if self.is_animated and output.steps:
            self.is_animating = True
        else:
            self._display_current_path()

    # -------------------- playback --------------------

    def fire_timer(self) -> None:
        """Advance the animation by one visited cell."""
        if not self.is_animating or self.current_output is None:
            return
        steps = self.current_output.steps
        if not steps:
            self._finish_animated_run()
            return

        position = steps[self.animation_step]
        if self.state_at(position) == GridState.EMPTY:
            self._set(position, GridState.CHECKING)

        if self.animation_step + 1 >= len(steps):
            self._finish_animated_run()
        else:
            self.animation_step += 1

    def _finish_animated_run(self) -> None:
        self.is_animating = False
        self._clean_up_animation()
        self._display_current_path()

    def _clean_up_animation(self) -> None:
        if self.current_output is not None:
            for position in self.current_output.steps[:self.animation_step + 1]:
                if self.state_at(position) == GridState.CHECKING:
                    self._set(position, GridState.EMPTY)
        self.animation_step = 0

    def _clear_current_path(self) -> None:
        if self.current_output is None or self.current_output.path is None:
            return
        for position in self.current_output.path:
            if self.state_at(position) == GridState.PATH:
                self._set(position, GridState.EMPTY)

    def _display_current_path(self) -> None:
        if self.current_output is None or self.current_output.path is None:
            return
        for position in self.current_output.path:
            if self.state_at(position) == GridState.EMPTY:
                self._set(position, GridState.PATH)
