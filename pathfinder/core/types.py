# pathfinder/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple

Cell = Tuple[int, int]  # (row, col)
GridCells = Sequence[Sequence[int]]  # [row][col] of GridState values


class InvalidGridError(ValueError):
    """Raised when a grid or a coordinate breaks the search preconditions."""


class GridState(IntEnum):
    EMPTY = 0
    START = 1
    END = 2
    BARRIER = 3
    PATH = 4
    CHECKING = 5


@dataclass(frozen=True, order=True)
class Neighbor:
    """Open-set entry: best known distance from the start for one cell id."""
    distance: float
    id: int = field(compare=False)


class PathFinderOutput(NamedTuple):
    path: Optional[List[Cell]]    # start..finish inclusive, None if unreachable
    steps: List[Cell]             # cells in the order they were visited
    distance: Optional[float] = None


def cell_id(cell: Cell, columns: int) -> int:
    row, col = cell
    return row * columns + col


def cell_from_id(ident: int, columns: int) -> Cell:
    row, col = divmod(ident, columns)
    return (row, col)


def in_bounds(cell: Cell, rows: int, columns: int) -> bool:
    row, col = cell
    return 0 <= row < rows and 0 <= col < columns


def snapshot_grid(grid: GridCells) -> Tuple[Tuple[int, ...], ...]:
    """Validate a grid and return an immutable copy of it."""
    if grid is None or len(grid) == 0:
        raise InvalidGridError("grid has no rows")
    columns = len(grid[0])
    if columns == 0:
        raise InvalidGridError("grid has no columns")
    for r, row in enumerate(grid):
        if len(row) != columns:
            raise InvalidGridError(
                f"grid is jagged: row {r} has {len(row)} cells, expected {columns}")
    return tuple(tuple(int(v) for v in row) for row in grid)


def check_cell(name: str, cell: Cell, rows: int, columns: int) -> Cell:
    try:
        row, col = cell
    except (TypeError, ValueError):
        raise InvalidGridError(f"{name} must be a (row, col) pair, got {cell!r}") from None
    if not isinstance(row, int) or not isinstance(col, int):
        raise InvalidGridError(f"{name} must hold integers, got {cell!r}")
    if not in_bounds((row, col), rows, columns):
        raise InvalidGridError(f"{name} {cell!r} is outside a {rows}x{columns} grid")
    return (row, col)
