"""Shared constants and enumerations for the level generator."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Four-connected step directions on the grid."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]


class EntityType(str, Enum):
    """All supported cell contents."""

    WALL = "wall"
    LETTER = "letter"
    NOTHING = "nothing"


class SolverStrategy(str, Enum):
    """How segments are filled with words."""

    RANDOM = "random"
    CPSAT = "cpsat"


DIRECTION_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

# Neighbour iteration order; relaxation tie-breaks depend on it.
DIRECTION_ORDER: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)

DEFAULT_MIN_WALL_AREA = 0.15
DEFAULT_MAX_WALL_AREA = 0.5
DEFAULT_SOLVER_RETRIES = 20
DEFAULT_START_DATE = date(2025, 5, 3)
