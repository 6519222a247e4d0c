"""Procedural level generator for a grid-based word-connection game.

This package exposes the public API surface via:

- ``wordmaze.engine.grid.Grid``: wall carving, connectivity and navigation maps.
- ``wordmaze.engine.generator.LevelGenerator``: picks endpoints, splits the path
  into segments and fills them with words.
- ``wordmaze.data.dictionary.WordList``: indexes words for constrained lookup.
"""

from .core.models import Level, Position
from .data.dictionary import WordConstraint, WordList
from .engine.generator import GeneratorConfig, LevelGenerator, generate_levels
from .engine.grid import Grid, GridConfig

__all__ = [
    "Grid",
    "GridConfig",
    "GeneratorConfig",
    "Level",
    "LevelGenerator",
    "Position",
    "WordConstraint",
    "WordList",
    "generate_levels",
]

__version__ = "0.1.0"
