"""Level generation orchestration.

Each attempt runs on a fresh grid:
  1. Layout: carve walls, keep the largest connected section, build the
     distance and turns maps over it.
  2. Path: pick a start and a far, twisty goal, split the minimum-turn path
     between them into straight segments.
  3. Fill: put one dictionary word on every segment.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

from ..core.constants import (DEFAULT_MAX_WALL_AREA, DEFAULT_MIN_WALL_AREA,
                              DEFAULT_SOLVER_RETRIES, DEFAULT_START_DATE, SolverStrategy)
from ..core.exceptions import GenerationError
from ..core.models import Level, Position, Segment
from ..data.dictionary import WordList
from ..utils.logger import get_logger
from .grid import Grid, GridConfig
from .pairwise import DistanceMap, TurnsMap
from .solver import Solution
from .validator import LevelValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    rows: int = 8
    cols: int = 8
    words_path: Path | str = Path("assets/easy_words.json")
    seed: Optional[int] = None
    level_count: int = 365
    solver_retries: int = DEFAULT_SOLVER_RETRIES
    min_avg_word_length: int = 4
    solver: SolverStrategy = SolverStrategy.RANDOM
    cpsat_timeout_seconds: float = 10.0
    min_wall_area: float = DEFAULT_MIN_WALL_AREA
    max_wall_area: float = DEFAULT_MAX_WALL_AREA
    pad_letters: bool = True
    start_date: date = DEFAULT_START_DATE
    output_dir: Path | str = Path("assets/output")
    max_attempts: Optional[int] = None

    def to_grid_config(self, seed_override: Optional[int] = None) -> GridConfig:
        return GridConfig(
            rows=self.rows,
            cols=self.cols,
            min_wall_area=self.min_wall_area,
            max_wall_area=self.max_wall_area,
            rng_seed=seed_override if seed_override is not None else self.seed,
        )


class LevelGenerator:
    """Owns one walled grid and its navigation maps; produces levels on it."""

    def __init__(
        self,
        grid: Grid,
        free_space: Set[Position],
        distance_map: DistanceMap,
        turns_map: TurnsMap,
        rng: Optional[random.Random] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> None:
        self.grid = grid
        self.free_space = free_space
        self.distance_map = distance_map
        self.turns_map = turns_map
        self.rng = rng or random.Random()
        self.config = config or GeneratorConfig(rows=grid.rows, cols=grid.cols)

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        rng: Optional[random.Random] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> LevelGenerator:
        rng = rng or random.Random(grid.config.rng_seed)
        free_space = grid.initialise_walls(rng=rng)
        turns_map = grid.generate_turns_map()
        distance_map = grid.generate_distance_map()
        LOGGER.debug(
            "Grid %sx%s ready: %s free cells, %s walls",
            grid.rows,
            grid.cols,
            len(free_space),
            grid.wall_count(),
        )
        return cls(grid, free_space, distance_map, turns_map, rng=rng, config=config)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def attempt_generate_level(
        self,
        word_list: WordList,
        solver_retries: int = DEFAULT_SOLVER_RETRIES,
    ) -> Optional[Level]:
        endpoints = self.choose_start_and_goal()
        if endpoints is None:
            LOGGER.debug("No viable start/goal pair in %s free cells", len(self.free_space))
            return None
        start, goal = endpoints

        junctions = self.find_path_junctions(start, goal)
        segments = self.extract_segments(junctions)

        solution = Solution(segments)
        if self.config.solver == SolverStrategy.CPSAT:
            solved = solution.attempt_solve_exact(
                word_list, rng=self.rng, timeout=self.config.cpsat_timeout_seconds
            )
        else:
            solved = solution.attempt_solve(word_list, solver_retries, rng=self.rng)
        if not solved:
            LOGGER.debug("Could not fill %s segments from %s to %s", len(segments), start, goal)
            return None

        level = Level(
            start=start,
            goal=goal,
            grid=self.grid.copy(),
            words=solution.all_words(),
            segments=segments,
        )
        validation = LevelValidator(word_list).validate(level)
        if not validation.ok:
            LOGGER.warning("Discarding invalid level: %s", validation.messages)
            return None
        return level

    # ------------------------------------------------------------------
    # Path decomposition
    # ------------------------------------------------------------------
    def choose_start_and_goal(self) -> Optional[Tuple[Position, Position]]:
        """Pick a random start and a goal from the farthest, twistiest third."""

        if len(self.free_space) < 2:
            return None
        start = self.rng.choice(sorted(self.free_space))
        start_deltas = self.distance_map.row(start)
        start_turns = self.turns_map.row(start)
        if start_deltas is None or start_turns is None:
            return None

        ranked: List[Tuple[int, Position]] = []
        for position in self.free_space:
            if position == start:
                continue
            distance = start_deltas.get(position)
            turns = start_turns.get(position)
            if distance is None or turns is None:
                continue
            ranked.append((distance + turns[0], position))
        ranked.sort()

        count = len(ranked)
        candidates = [position for _, position in ranked[count * 2 // 3:]]
        if not candidates:
            return None
        return start, self.rng.choice(candidates)

    def find_path_junctions(self, start: Position, goal: Position) -> List[Position]:
        """Walk the turns map from ``start`` to ``goal``, keeping the turning cells.

        The walk keeps its heading while the remaining turn count holds and
        takes the cell's recorded direction where the count drops.
        """

        entry = self.turns_map.get(start, goal)
        if entry is None:
            raise GenerationError(f"No path from {start} to {goal}")
        turns_left, heading = entry
        position = start
        path = [start]
        while position != goal:
            turns, direction = self.turns_map.get(position, goal)
            if turns != turns_left:
                turns_left = turns
                heading = direction
                path.append(position)
            position = position.step(heading)
        path.append(goal)
        return path

    @staticmethod
    def extract_segments(junctions: List[Position]) -> List[Segment]:
        """Pair consecutive junctions, each pair ordered top-left first."""

        segments: List[Segment] = []
        for previous, junction in zip(junctions, junctions[1:]):
            first, second = sorted((previous, junction))
            segments.append((first, second))
        return segments


# ----------------------------------------------------------------------
# Batch generation
# ----------------------------------------------------------------------
LevelPredicate = Callable[[Level], bool]


def has_minimum_avg_letter_count(level: Level, minimum: int) -> bool:
    """True if the solution's integer-average word length reaches ``minimum``."""

    if not level.words:
        return False
    letter_count = sum(len(word) for word in level.words)
    return letter_count // len(level.words) >= minimum


@dataclass
class BatchResult:
    levels: List[Level] = field(default_factory=list)
    attempts: int = 0


def generate_levels(
    word_list: WordList,
    config: GeneratorConfig,
    predicate: Optional[LevelPredicate] = None,
    rng: Optional[random.Random] = None,
) -> BatchResult:
    """Generate ``config.level_count`` levels, discarding failed grids whole."""

    rng = rng or random.Random(config.seed)
    minimum = config.min_avg_word_length
    accept = predicate or (lambda level: has_minimum_avg_letter_count(level, minimum))

    result = BatchResult()
    while len(result.levels) < config.level_count:
        if config.max_attempts is not None and result.attempts >= config.max_attempts:
            raise GenerationError(
                f"Generated {len(result.levels)}/{config.level_count} levels "
                f"in {result.attempts} attempts"
            )
        result.attempts += 1
        grid_seed = rng.randint(0, 1_000_000)
        grid = Grid.from_config(config.to_grid_config(seed_override=grid_seed))
        generator = LevelGenerator.from_grid(grid, rng=random.Random(grid_seed), config=config)
        level = generator.attempt_generate_level(word_list, config.solver_retries)
        if level is None or not accept(level):
            continue
        LOGGER.info("Added level: %s", len(result.levels))
        result.levels.append(level)
    return result
