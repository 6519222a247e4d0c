"""Grid representation, connectivity analysis and navigation maps."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..core.constants import (DEFAULT_MAX_WALL_AREA, DEFAULT_MIN_WALL_AREA, DIRECTION_ORDER,
                              Direction, EntityType)
from ..core.exceptions import GridError
from ..core.models import Entity, Position
from ..utils.logger import get_logger
from .pairwise import DistanceMap, PairwiseMap, TurnsMap


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the wall layout."""

    rows: int
    cols: int
    min_wall_area: float = DEFAULT_MIN_WALL_AREA
    max_wall_area: float = DEFAULT_MAX_WALL_AREA
    rng_seed: Optional[int] = None


class Grid:
    """Cell contents over fixed dimensions plus wall and navigation helpers."""

    def __init__(self, rows: int, cols: int, config: Optional[GridConfig] = None) -> None:
        if rows <= 0 or cols <= 0:
            raise GridError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.config = config or GridConfig(rows=rows, cols=cols)
        self.rng = random.Random(self.config.rng_seed)
        self.entities: Dict[Position, Entity] = {}

    @classmethod
    def from_config(cls, config: GridConfig) -> Grid:
        return cls(config.rows, config.cols, config=config)

    def copy(self) -> Grid:
        clone = Grid(self.rows, self.cols, config=self.config)
        clone.entities = dict(self.entities)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and self.entities == other.entities
        )

    # ------------------------------------------------------------------
    # Cell manipulation
    # ------------------------------------------------------------------
    def all_positions(self) -> List[Position]:
        return [Position(row, col) for row in range(self.rows) for col in range(self.cols)]

    def contains(self, position: Position) -> bool:
        return position.is_within_bounds(self.rows, self.cols)

    def entity_at(self, position: Position) -> Entity:
        return self.entities.get(position, Entity.nothing())

    def is_wall(self, position: Position) -> bool:
        entity = self.entities.get(position)
        return entity is not None and entity.can_collide()

    def set_entity(self, position: Position, entity: Entity) -> None:
        if not self.contains(position):
            raise GridError(f"Position {position} outside {self.rows}x{self.cols} grid")
        self.entities[position] = entity

    def set_positions(self, positions: Iterable[Position], entity: Entity) -> None:
        for position in positions:
            self.set_entity(position, entity)

    def wall_count(self) -> int:
        return sum(1 for entity in self.entities.values() if entity.type == EntityType.WALL)

    # ------------------------------------------------------------------
    # Walls and connectivity
    # ------------------------------------------------------------------
    def randomise_walls(
        self,
        min_area: float,
        max_area: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Turn a random fraction of all cells into walls."""

        rng = rng or self.rng
        area = rng.uniform(min_area, max_area)
        # Half-up rounding; the product is never negative.
        wall_count = int(math.floor(area * self.rows * self.cols + 0.5))

        positions = self.all_positions()
        rng.shuffle(positions)
        self.set_positions(positions[:wall_count], Entity.wall())
        LOGGER.debug("Placed %s walls (area %.2f) on %sx%s grid", wall_count, area, self.rows, self.cols)

    def explore_section(self, start: Position) -> Set[Position]:
        """Flood fill the non-wall component containing ``start``."""

        visited: Set[Position] = set()
        if not self.contains(start) or self.is_wall(start):
            return visited

        grey: Set[Position] = {start}
        queue: List[Position] = [start]
        while queue:
            node = queue.pop()
            visited.add(node)
            for neighbour in self.valid_neighbours(node):
                if neighbour in grey or neighbour in visited:
                    continue
                if self.is_wall(neighbour):
                    continue
                queue.append(neighbour)
                grey.add(neighbour)
        return visited

    def find_connected_sections(self) -> List[Set[Position]]:
        sections: List[Set[Position]] = []
        seen: Set[Position] = set()
        for position in self.all_positions():
            if position in seen:
                continue
            section = self.explore_section(position)
            if not section:
                continue
            sections.append(section)
            seen |= section
        return sections

    def initialise_walls(self, rng: Optional[random.Random] = None) -> Set[Position]:
        """Randomise walls and seal every pocket outside the largest section.

        Returns the surviving section, the free space all navigation maps are
        defined over. An entirely walled grid yields an empty set.
        """

        self.randomise_walls(self.config.min_wall_area, self.config.max_wall_area, rng=rng)
        sections = self.find_connected_sections()
        if not sections:
            LOGGER.info("Grid %sx%s has no free space after wall placement", self.rows, self.cols)
            return set()

        sections.sort(key=len, reverse=True)
        for section in sections[1:]:
            self.set_positions(section, Entity.wall())
        LOGGER.debug(
            "Sealed %s unreachable sections, free space has %s cells",
            len(sections) - 1,
            len(sections[0]),
        )
        return set(sections[0])

    def free_space(self) -> Set[Position]:
        space: Set[Position] = set()
        for section in self.find_connected_sections():
            space |= section
        return space

    def valid_neighbours(self, position: Position) -> List[Position]:
        return [p for p in position.neighbours() if self.contains(p)]

    # ------------------------------------------------------------------
    # Navigation maps
    # ------------------------------------------------------------------
    def generate_distance_map(self) -> DistanceMap:
        """All-pairs hop distances over free space, by repeated relaxation."""

        free_space = self.free_space()
        ordered = sorted(free_space)
        result: DistanceMap = PairwiseMap()
        for position in ordered:
            result.set_row(position, {position: 0})

        passes = 0
        changed = True
        while changed:
            changed = False
            passes += 1
            for position in ordered:
                distances = result.row(position)
                for neighbour in self.valid_neighbours(position):
                    if neighbour not in free_space:
                        continue
                    for destination, distance in list(result.row(neighbour).items()):
                        current = distances.get(destination)
                        if current is None or distance + 1 < current:
                            distances[destination] = distance + 1
                            changed = True
        LOGGER.debug("Distance map converged after %s passes (%s pairs)", passes, len(result))
        return result

    def generate_turns_map(self) -> TurnsMap:
        """All-pairs minimum turn counts with the first step to take.

        Relaxation runs over exits: a cell paired with the direction of its
        first step. Stepping into neighbour ``n`` and leaving ``n`` through one
        of its own exits costs one turn when the two directions differ.
        Reaching the destination cell costs nothing. Each row then keeps the
        cheapest exit per destination, the earliest in ``DIRECTION_ORDER`` on
        ties.
        """

        free_space = self.free_space()
        ordered = sorted(free_space)
        exits: Dict[Position, Dict[Direction, Dict[Position, int]]] = {}
        for position in ordered:
            exits[position] = {
                position.direction_to(neighbour): {neighbour: 0}
                for neighbour in self.valid_neighbours(position)
                if neighbour in free_space
            }

        passes = 0
        changed = True
        while changed:
            changed = False
            passes += 1
            for position in ordered:
                for step, turns in exits[position].items():
                    for onward, onward_turns in exits[position.step(step)].items():
                        penalty = 0 if onward == step else 1
                        for destination, count in list(onward_turns.items()):
                            if destination == position:
                                continue
                            current = turns.get(destination)
                            if current is None or count + penalty < current:
                                turns[destination] = count + penalty
                                changed = True

        result: TurnsMap = PairwiseMap()
        for position in ordered:
            row: Dict[Position, Tuple[int, Optional[Direction]]] = {position: (0, None)}
            for step in DIRECTION_ORDER:
                for destination, count in exits[position].get(step, {}).items():
                    best = row.get(destination)
                    if best is None or count < best[0]:
                        row[destination] = (count, step)
            result.set_row(position, row)
        LOGGER.debug("Turns map converged after %s passes (%s pairs)", passes, len(result))
        return result

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "entities": {
                position.to_key(): entity.to_jsonable()
                for position, entity in sorted(self.entities.items())
            },
        }

    @classmethod
    def from_jsonable(cls, payload: dict) -> Grid:
        grid = cls(int(payload["rows"]), int(payload["cols"]))
        for key, entity in payload.get("entities", {}).items():
            grid.set_entity(Position.from_key(key), Entity.from_jsonable(entity))
        return grid

