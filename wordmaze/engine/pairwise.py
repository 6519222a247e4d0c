"""Sparse maps keyed by an ordered pair of grid positions."""

from __future__ import annotations

from typing import Dict, Generic, Optional, Tuple, TypeVar

from ..core.constants import Direction
from ..core.models import Position

T = TypeVar("T")


class PairwiseMap(Generic[T]):
    """Mapping of ``(origin, destination)`` to a value.

    Stored as one destination table per origin so relaxation passes can
    copy a whole row between neighbours. Only pairs connected through free
    space are present.
    """

    def __init__(self) -> None:
        self._rows: Dict[Position, Dict[Position, T]] = {}

    def get(self, origin: Position, destination: Position) -> Optional[T]:
        row = self._rows.get(origin)
        if row is None:
            return None
        return row.get(destination)

    def row(self, origin: Position) -> Optional[Dict[Position, T]]:
        return self._rows.get(origin)

    def set_row(self, origin: Position, row: Dict[Position, T]) -> None:
        self._rows[origin] = row

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows.values())


DistanceMap = PairwiseMap[int]
TurnsMap = PairwiseMap[Tuple[int, Optional[Direction]]]
