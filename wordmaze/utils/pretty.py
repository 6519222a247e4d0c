"""Pretty-print helpers for grids and levels."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..core.constants import EntityType
from ..core.models import Position

if TYPE_CHECKING:
    from ..core.models import Entity, Level
    from ..engine.grid import Grid


def cell_symbol(entity: Entity) -> str:
    if entity.type == EntityType.WALL:
        return "#"
    if entity.type == EntityType.LETTER:
        return entity.letter or "?"
    return " "


def format_grid(grid: Grid) -> str:
    lines = []
    for row in range(grid.rows):
        lines.append("".join(cell_symbol(grid.entity_at(Position(row, col))) for col in range(grid.cols)))
    lines.append("#" * grid.cols)
    return "\n".join(lines)


def format_level(level: Level) -> str:
    grid = level.grid
    bar = "=" * grid.cols
    lines = [bar]
    for row in range(grid.rows):
        line = []
        for col in range(grid.cols):
            position = Position(row, col)
            if position == level.start:
                line.append("S")
            elif position == level.goal:
                line.append("G")
            else:
                line.append(cell_symbol(grid.entity_at(position)))
        lines.append("".join(line))
    lines.append(bar)
    lines.append(f"Solution: {level.words}")
    return "\n".join(lines)


def pretty_print_level(level: Level, *, stream=None) -> None:
    """Print the level grid with its start, goal and solution words."""

    stream = stream or sys.stdout
    print(format_level(level), file=stream)
