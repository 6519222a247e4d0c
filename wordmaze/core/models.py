"""Data models supporting the level generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .constants import DIRECTION_ORDER, Direction, EntityType

if TYPE_CHECKING:
    from ..engine.grid import Grid


@dataclass(frozen=True, order=True)
class Position:
    """Immutable grid coordinate, ordered row-major."""

    row: int
    col: int

    def __add__(self, other: Position) -> Position:
        return Position(self.row + other.row, self.col + other.col)

    def __neg__(self) -> Position:
        return Position(-self.row, -self.col)

    def __sub__(self, other: Position) -> Position:
        return self + (-other)

    def to_key(self) -> str:
        return f"{self.row}_{self.col}"

    @classmethod
    def from_key(cls, key: str) -> Position:
        row, col = key.split("_")
        return cls(int(row), int(col))

    def is_within_bounds(self, rows: int, cols: int) -> bool:
        return 0 <= self.row < rows and 0 <= self.col < cols

    def step(self, direction: Direction) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)

    def manhattan_distance(self, other: Position) -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def direction_to(self, other: Position) -> Optional[Direction]:
        """Return the direction of ``other`` if it is one step away."""

        for direction in DIRECTION_ORDER:
            if self.step(direction) == other:
                return direction
        return None

    def neighbours(self) -> List[Position]:
        return [self.step(direction) for direction in DIRECTION_ORDER]


Segment = Tuple[Position, Position]


def segment_length(segment: Segment) -> int:
    start, end = segment
    return start.manhattan_distance(end) + 1


def segment_cells(segment: Segment) -> List[Position]:
    """Cells covered by a straight segment, from its first endpoint."""

    start, end = segment
    length = segment_length(segment)
    if length == 1:
        return [start]
    dr = (end.row - start.row) // (length - 1)
    dc = (end.col - start.col) // (length - 1)
    return [Position(start.row + dr * i, start.col + dc * i) for i in range(length)]


@dataclass(frozen=True)
class Entity:
    """Contents of a single grid cell."""

    type: EntityType = EntityType.NOTHING
    letter: Optional[str] = None

    @classmethod
    def wall(cls) -> Entity:
        return cls(EntityType.WALL)

    @classmethod
    def nothing(cls) -> Entity:
        return cls(EntityType.NOTHING)

    @classmethod
    def of_letter(cls, letter: str) -> Entity:
        return cls(EntityType.LETTER, letter)

    def can_collide(self) -> bool:
        return self.type == EntityType.WALL

    def to_jsonable(self) -> Dict[str, str]:
        if self.type == EntityType.LETTER:
            return {"type": self.type.value, "value": self.letter or ""}
        return {"type": self.type.value}

    @classmethod
    def from_jsonable(cls, payload: Dict[str, str]) -> Entity:
        kind = EntityType(payload["type"])
        if kind == EntityType.LETTER:
            return cls.of_letter(payload["value"])
        return cls(kind)


@dataclass
class SolutionWord:
    """A segment bound to the word filling it."""

    start: Position
    end: Position
    word: str

    @property
    def first_letter(self) -> str:
        return self.word[0]

    @property
    def last_letter(self) -> str:
        return self.word[-1]


@dataclass
class Level:
    """A finished puzzle: endpoints, words in segment order and the walled grid.

    Words past the last segment are padding decoys placed on no segment.
    """

    start: Position
    goal: Position
    grid: Grid
    words: List[str] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)

    def to_jsonable(self) -> dict:
        return {
            "start": {"row": self.start.row, "col": self.start.col},
            "goal": {"row": self.goal.row, "col": self.goal.col},
            "words": list(self.words),
            "segments": [
                [{"row": first.row, "col": first.col}, {"row": second.row, "col": second.col}]
                for first, second in self.segments
            ],
            "grid": self.grid.to_jsonable(),
        }
