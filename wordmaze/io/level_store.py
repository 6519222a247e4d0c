"""Persistent level document store.

Each level is written as one JSON document named after the calendar day it
is published on, counting forward from a start date.
"""

from __future__ import annotations

import json
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, List

from ..core.constants import DEFAULT_START_DATE
from ..core.models import Level, Position
from ..engine.grid import Grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("assets/output")


def level_name(start_date: date, index: int) -> str:
    """Return the name of the ``index``-th level in YYYY-MM-DD format."""

    try:
        day = start_date + timedelta(days=index)
    except OverflowError:
        return str(index)
    return day.strftime("%Y-%m-%d")


class LevelStore:
    """Save levels as JSON documents under ``store_dir``."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def save(self, level: Level, name: str) -> Path:
        path = self.store_dir / f"{name}.json"
        path.write_text(json.dumps(level.to_jsonable(), ensure_ascii=False), encoding="utf-8")
        LOGGER.info("Level saved: %s", path)
        return path

    def save_all(self, levels: Iterable[Level], start_date: date = DEFAULT_START_DATE) -> List[Path]:
        return [self.save(level, level_name(start_date, index)) for index, level in enumerate(levels)]

    @staticmethod
    def load(path: Path | str) -> Level:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return Level(
            start=_position(payload["start"]),
            goal=_position(payload["goal"]),
            grid=Grid.from_jsonable(payload["grid"]),
            words=list(payload["words"]),
            segments=[(_position(first), _position(second)) for first, second in payload["segments"]],
        )


def _position(payload: dict) -> Position:
    return Position(int(payload["row"]), int(payload["col"]))
