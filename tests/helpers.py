"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections import deque
from itertools import product
from typing import Deque, Dict, List, Set, Tuple

from wordmaze.core.constants import DIRECTION_ORDER, Direction
from wordmaze.core.models import Position
from wordmaze.engine.grid import Grid, GridConfig


def binary_words(min_length: int = 2, max_length: int = 8) -> List[str]:
    """Every word over {a, b}; any letter constraint on them is satisfiable."""
    return [
        "".join(letters)
        for length in range(min_length, max_length + 1)
        for letters in product("ab", repeat=length)
    ]


def open_grid(rows: int, cols: int) -> Grid:
    """A grid whose wall initialisation places no walls."""
    return Grid.from_config(GridConfig(rows=rows, cols=cols, min_wall_area=0.0, max_wall_area=0.0))


def bfs_distances(grid: Grid, start: Position, free_space: Set[Position]) -> Dict[Position, int]:
    distances = {start: 0}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbour in grid.valid_neighbours(node):
            if neighbour in free_space and neighbour not in distances:
                distances[neighbour] = distances[node] + 1
                queue.append(neighbour)
    return distances


def bfs_turns(grid: Grid, start: Position, free_space: Set[Position]) -> Dict[Position, int]:
    """Fewest direction changes from ``start``, by 0-1 BFS over (cell, heading)."""
    best: Dict[Tuple[Position, Direction], int] = {}
    queue: Deque[Tuple[Position, Direction, int]] = deque()
    for direction in DIRECTION_ORDER:
        neighbour = start.step(direction)
        if neighbour in free_space:
            best[(neighbour, direction)] = 0
            queue.append((neighbour, direction, 0))
    while queue:
        node, heading, cost = queue.popleft()
        if best[(node, heading)] < cost:
            continue
        for direction in DIRECTION_ORDER:
            neighbour = node.step(direction)
            if neighbour not in free_space:
                continue
            step_cost = cost if direction == heading else cost + 1
            known = best.get((neighbour, direction))
            if known is not None and known <= step_cost:
                continue
            best[(neighbour, direction)] = step_cost
            if step_cost == cost:
                queue.appendleft((neighbour, direction, step_cost))
            else:
                queue.append((neighbour, direction, step_cost))

    turns = {start: 0}
    for (node, _), cost in best.items():
        if node != start and (node not in turns or cost < turns[node]):
            turns[node] = cost
    return turns
