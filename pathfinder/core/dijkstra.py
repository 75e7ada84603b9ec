# pathfinder/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra over an 8-connected grid, run in the background.

- search_min_path(): the search itself, synchronous, stops early when
  is_current() turns False.
- DijkstraPathFinder: one active request per instance. Every request gets a new
  generation number; older generations are cancelled the moment a newer one is
  issued and their completions never fire.

Step costs are Euclidean: 1 for orthogonal moves, sqrt(2) for diagonal ones.
A diagonal move is refused when both cells beside it are barriers.
"""

import logging
import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Set, Tuple

from pathfinder.core.dispatch import Dispatcher, ImmediateDispatcher
from pathfinder.core.types import (
    Cell, GridCells, GridState, Neighbor, PathFinderOutput,
    cell_from_id, cell_id, check_cell, snapshot_grid,
)
from pathfinder.core.unique_heap import UniqueMinHeap

logger = logging.getLogger(__name__)

Completion = Callable[[PathFinderOutput], None]

BARRIER = int(GridState.BARRIER)


class PathFinder(Protocol):
    def find_min_path(self, start: Cell, finish: Cell, grid: GridCells,
                      completion: Completion) -> "Future[Optional[PathFinderOutput]]": ...


# -------------------- search --------------------

def _neighbors8(cell: Cell, grid: GridCells) -> Iterator[Tuple[Cell, float]]:
    """Passable neighbors of cell with their step distance."""
    row, col = cell
    rows, columns = len(grid), len(grid[0])

    for r in range(max(row - 1, 0), min(row + 1, rows - 1) + 1):
        for c in range(max(col - 1, 0), min(col + 1, columns - 1) + 1):
            if (r, c) == cell or grid[r][c] == BARRIER:
                continue
            dr, dc = r - row, c - col
            # no squeezing between two diagonal walls
            if dr and dc and grid[r][col] == BARRIER and grid[row][c] == BARRIER:
                continue
            yield (r, c), math.hypot(dr, dc)


def _reconstruct_path(parents: Dict[int, int], start_id: int, finish_id: int,
                      columns: int, limit: int) -> Optional[List[Cell]]:
    path: List[Cell] = []
    cur: Optional[int] = finish_id
    while cur is not None:
        if len(path) >= limit:
            logger.warning("parent chain from %s exceeds %d cells; treating as unreachable",
                           cell_from_id(finish_id, columns), limit)
            return None
        path.append(cell_from_id(cur, columns))
        cur = parents.get(cur)

    if path[-1] != cell_from_id(start_id, columns):
        return None
    path.reverse()
    return path


def search_min_path(start: Cell, finish: Cell, grid: GridCells,
                    is_current: Optional[Callable[[], bool]] = None) -> Optional[PathFinderOutput]:
    """
    Least-cost path from start to finish, plus every cell visited on the way.

    Returns None only when is_current() reported False before the search ended.
    An unreachable finish is a normal result with path=None.
    """
    grid = snapshot_grid(grid)
    rows, columns = len(grid), len(grid[0])
    start = check_cell("start", start, rows, columns)
    finish = check_cell("finish", finish, rows, columns)

    visited: Set[int] = set()
    parents: Dict[int, int] = {}
    heap: UniqueMinHeap[Neighbor] = UniqueMinHeap()
    steps: List[Cell] = []

    start_id = cell_id(start, columns)
    finish_id = cell_id(finish, columns)
    heap.insert_or_replace(Neighbor(distance=0.0, id=start_id))
    finish_distance: Optional[float] = None

    while True:
        if is_current is not None and not is_current():
            logger.debug("search %s -> %s cancelled after %d steps", start, finish, len(steps))
            return None

        vertex = heap.extract_min()
        if vertex is None:
            break

        position = cell_from_id(vertex.id, columns)
        steps.append(position)
        visited.add(vertex.id)

        if vertex.id == finish_id:
            finish_distance = vertex.distance
            break

        for neighbor, step in _neighbors8(position, grid):
            nid = cell_id(neighbor, columns)
            if nid in visited:
                continue

            total = vertex.distance + step
            known = heap.lookup(nid)
            if known is not None and known.distance <= total:
                continue

            heap.insert_or_replace(Neighbor(distance=total, id=nid))
            parents[nid] = vertex.id

    path = _reconstruct_path(parents, start_id, finish_id, columns, limit=rows * columns)
    if path is None:
        finish_distance = None

    logger.debug("search %s -> %s: %d steps, %s", start, finish, len(steps),
                 "no path" if path is None else f"path of {len(path)} cells")
    return PathFinderOutput(path=path, steps=steps, distance=finish_distance)


# -------------------- asynchronous front end --------------------

class DijkstraPathFinder:
    """
    Runs searches on a worker pool; a new request supersedes the previous one.

    Completions are posted to `dispatcher` (ImmediateDispatcher by default,
    which runs them on the worker thread). The Future returned by
    find_min_path resolves to the output, or to None when the search was
    superseded before it finished.
    """

    name = "Dijkstra"

    def __init__(self, dispatcher: Optional[Dispatcher] = None,
                 executor: Optional[ThreadPoolExecutor] = None,
                 max_workers: int = 2) -> None:
        self._dispatcher = dispatcher or ImmediateDispatcher()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="pathfinder")
        self._lock = threading.RLock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def find_min_path(self, start: Cell, finish: Cell, grid: GridCells,
                      completion: Completion) -> "Future[Optional[PathFinderOutput]]":
        snapshot = snapshot_grid(grid)
        rows, columns = len(snapshot), len(snapshot[0])
        start = check_cell("start", start, rows, columns)
        finish = check_cell("finish", finish, rows, columns)

        # cancelling the old request and installing the new one is one step
        with self._lock:
            self._generation += 1
            generation = self._generation

        logger.debug("request %d: %s -> %s on %dx%d grid", generation, start, finish, rows, columns)
        return self._executor.submit(self._run, generation, start, finish, snapshot, completion)

    def cancel(self) -> None:
        """Cancel the active search, if any, without starting another."""
        with self._lock:
            self._generation += 1

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _run(self, generation: int, start: Cell, finish: Cell, grid: GridCells,
             completion: Completion) -> Optional[PathFinderOutput]:
        try:
            output = search_min_path(start, finish, grid,
                                     is_current=partial(self.is_current, generation))
        except Exception:
            logger.exception("request %d failed", generation)
            raise

        if output is None:
            logger.debug("request %d superseded", generation)
            return None

        self._dispatcher.post(partial(self._deliver, generation, output, completion))
        return output

    def _deliver(self, generation: int, output: PathFinderOutput, completion: Completion) -> None:
        # the check and the callback hold the lock together, so no newer request
        # can be installed between them; RLock lets the callback issue one itself
        with self._lock:
            if generation != self._generation:
                logger.debug("request %d finished but was superseded; dropping result", generation)
                return
            completion(output)
