"""Offline tests for the synchronous grid search.

Run:
  pytest tests/test_dijkstra_search.py
"""

import heapq
import math
import random
from collections import deque

import pytest

from pathfinder.core.dijkstra import search_min_path
from pathfinder.core.types import GridState, InvalidGridError

E = int(GridState.EMPTY)
B = int(GridState.BARRIER)


def _grid(rows, cols, barriers=()):
    g = [[E] * cols for _ in range(rows)]
    for r, c in barriers:
        g[r][c] = B
    return g


def _moves(grid, cell):
    """Reference move generator: 8 directions, no corner cutting between two walls."""
    rows, cols = len(grid), len(grid[0])
    r, c = cell
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if not dr and not dc:
                continue
            nr, nc = r + dr, c + dc
            if not (0 <= nr < rows and 0 <= nc < cols) or grid[nr][nc] == B:
                continue
            if dr and dc and grid[nr][c] == B and grid[r][nc] == B:
                continue
            yield (nr, nc), math.hypot(dr, dc)


def _reference_cost(grid, start, finish):
    best = {start: 0.0}
    pq = [(0.0, start)]
    while pq:
        d, u = heapq.heappop(pq)
        if d > best[u]:
            continue
        if u == finish:
            return d
        for v, w in _moves(grid, u):
            if d + w < best.get(v, math.inf):
                best[v] = d + w
                heapq.heappush(pq, (d + w, v))
    return None


def _reachable(grid, start):
    seen = {start}
    todo = deque([start])
    while todo:
        u = todo.popleft()
        for v, _ in _moves(grid, u):
            if v not in seen:
                seen.add(v)
                todo.append(v)
    return seen


def _path_cost(path):
    return sum(math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:]))


def _assert_valid_path(grid, path, start, finish):
    assert path[0] == start
    assert path[-1] == finish
    for a, b in zip(path, path[1:]):
        assert b in dict(_moves(grid, a)), f"illegal step {a} -> {b}"


# -------------------- scenarios --------------------

def test_open_3x3_takes_the_diagonal():
    out = search_min_path((0, 0), (2, 2), _grid(3, 3))
    assert out.path == [(0, 0), (1, 1), (2, 2)]
    assert out.distance == pytest.approx(2 * math.sqrt(2))
    assert out.steps[0] == (0, 0)
    assert out.steps[-1] == (2, 2)


def test_walled_corners_block_the_diagonal():
    grid = _grid(3, 3, barriers=[(1, 0), (0, 1), (1, 2), (2, 1)])
    out = search_min_path((0, 0), (2, 2), grid)
    assert out.path is None
    assert out.distance is None
    assert out.steps == [(0, 0)]


def test_center_barrier_makes_finish_unreachable():
    grid = _grid(3, 3, barriers=[(1, 0), (0, 1), (1, 1), (1, 2), (2, 1)])
    out = search_min_path((0, 0), (2, 2), grid)
    assert out.path is None
    assert out.steps == [(0, 0)]


def test_single_side_wall_allows_diagonal():
    grid = _grid(2, 2, barriers=[(0, 1)])
    out = search_min_path((0, 0), (1, 1), grid)
    assert out.path == [(0, 0), (1, 1)]


def test_start_equals_finish():
    out = search_min_path((1, 1), (1, 1), _grid(3, 3))
    assert out.path == [(1, 1)]
    assert out.steps == [(1, 1)]
    assert out.distance == 0.0


def test_straight_corridor_uses_unit_steps():
    out = search_min_path((0, 0), (0, 4), _grid(1, 5))
    assert out.path == [(0, c) for c in range(5)]
    assert out.distance == pytest.approx(4.0)


def test_wall_with_gap_routes_through_gap():
    # column 2 is a wall except at row 4
    grid = _grid(5, 5, barriers=[(r, 2) for r in range(4)])
    out = search_min_path((0, 0), (0, 4), grid)
    _assert_valid_path(grid, out.path, (0, 0), (0, 4))
    assert (4, 2) in out.path
    assert out.distance == pytest.approx(_reference_cost(grid, (0, 0), (0, 4)))


def test_unreachable_steps_are_exactly_the_reachable_region():
    grid = _grid(6, 6, barriers=[(r, 3) for r in range(6)])
    out = search_min_path((2, 0), (2, 5), grid)
    assert out.path is None
    assert len(out.steps) == len(set(out.steps))
    assert set(out.steps) == _reachable(grid, (2, 0))


def test_steps_never_contain_barriers():
    grid = _grid(4, 4, barriers=[(1, 1), (2, 2)])
    out = search_min_path((0, 0), (3, 3), grid)
    assert all(grid[r][c] != B for r, c in out.steps)


def test_grid_is_not_modified():
    grid = _grid(4, 4, barriers=[(1, 1)])
    before = [row[:] for row in grid]
    search_min_path((0, 0), (3, 3), grid)
    assert grid == before


def test_non_barrier_states_are_passable():
    grid = [
        [GridState.START, GridState.PATH, GridState.CHECKING],
        [GridState.BARRIER, GridState.BARRIER, GridState.END],
    ]
    out = search_min_path((0, 0), (1, 2), grid)
    assert out.path == [(0, 0), (0, 1), (1, 2)]


def test_repeated_search_is_deterministic():
    rng = random.Random(7)
    barriers = [(r, c) for r in range(12) for c in range(12) if rng.random() < 0.25]
    grid = _grid(12, 12, barriers=barriers)
    for cell in ((0, 0), (11, 11)):
        grid[cell[0]][cell[1]] = E
    first = search_min_path((0, 0), (11, 11), grid)
    second = search_min_path((0, 0), (11, 11), grid)
    assert first == second


@pytest.mark.parametrize("seed", range(15))
def test_random_grids_match_reference(seed):
    rng = random.Random(seed)
    rows, cols = rng.randint(3, 14), rng.randint(3, 14)
    barriers = [(r, c) for r in range(rows) for c in range(cols) if rng.random() < 0.3]
    grid = _grid(rows, cols, barriers=barriers)
    start = (rng.randrange(rows), rng.randrange(cols))
    finish = (rng.randrange(rows), rng.randrange(cols))
    grid[start[0]][start[1]] = E
    grid[finish[0]][finish[1]] = E

    out = search_min_path(start, finish, grid)
    expected = _reference_cost(grid, start, finish)

    if expected is None:
        assert out.path is None
        assert set(out.steps) == _reachable(grid, start)
    else:
        _assert_valid_path(grid, out.path, start, finish)
        assert _path_cost(out.path) == pytest.approx(expected)
        assert out.distance == pytest.approx(expected)
        assert out.steps[-1] == finish


def test_cancellation_stops_before_next_extraction():
    calls = []

    def is_current():
        calls.append(1)
        return len(calls) <= 3

    out = search_min_path((0, 0), (9, 9), _grid(10, 10), is_current=is_current)
    assert out is None
    assert len(calls) == 4


def test_cancelled_before_start_does_nothing():
    assert search_min_path((0, 0), (1, 1), _grid(2, 2), is_current=lambda: False) is None


@pytest.mark.parametrize("start,finish,grid", [
    ((0, 0), (3, 0), _grid(3, 3)),
    ((-1, 0), (0, 0), _grid(3, 3)),
    ((0, 0), (0, 0), [[E, E], [E]]),
    ((0, 0), (0, 0), []),
])
def test_contract_violations_raise(start, finish, grid):
    with pytest.raises(InvalidGridError):
        search_min_path(start, finish, grid)
