"""Deterministic rule validation for generated levels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import ValidationError
from ..core.models import Level, segment_cells, segment_length
from ..data.dictionary import WordList
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LevelValidator:
    """Runs deterministic validation over a solved level."""

    def __init__(self, word_list: Optional[WordList] = None) -> None:
        self.word_list = word_list

    def validate(self, level: Level) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_endpoints(level)
            self._check_word_count(level)
            self._check_segments(level)
            self._check_shared_letters(level)
            self._check_dictionary(level)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.debug("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_endpoints(self, level: Level) -> None:
        for label, position in (("start", level.start), ("goal", level.goal)):
            if not level.grid.contains(position):
                raise ValidationError(f"Level {label} {position} is outside the grid")
            if level.grid.is_wall(position):
                raise ValidationError(f"Level {label} {position} is a wall")
        if level.start == level.goal:
            raise ValidationError("Level start and goal coincide")

    def _check_word_count(self, level: Level) -> None:
        # Trailing words beyond the segments are padding decoys.
        if not level.segments:
            raise ValidationError("Level has no segments")
        if len(level.words) < len(level.segments):
            raise ValidationError(
                f"{len(level.words)} words for {len(level.segments)} segments"
            )

    def _check_segments(self, level: Level) -> None:
        for (start, end), word in zip(level.segments, level.words):
            if end < start:
                raise ValidationError(f"Segment {(start, end)} is not canonical")
            if start.row != end.row and start.col != end.col:
                raise ValidationError(f"Segment {(start, end)} is not straight")
            if len(word) != segment_length((start, end)):
                raise ValidationError(
                    f"Word '{word}' does not span segment {(start, end)}"
                )
            for cell in segment_cells((start, end)):
                if level.grid.is_wall(cell):
                    raise ValidationError(f"Segment {(start, end)} crosses wall at {cell}")

    def _check_shared_letters(self, level: Level) -> None:
        """Consecutive words must agree on the letter at their junction."""
        placed = [
            dict(zip(segment_cells(segment), word))
            for segment, word in zip(level.segments, level.words)
        ]
        for previous, current in zip(placed, placed[1:]):
            shared = [cell for cell in current if cell in previous]
            if not shared:
                raise ValidationError("Consecutive segments share no junction")
            for cell in shared:
                if previous[cell] != current[cell]:
                    raise ValidationError(
                        f"Letter conflict at {cell}: '{previous[cell]}' vs '{current[cell]}'"
                    )

    def _check_dictionary(self, level: Level) -> None:
        if self.word_list is None:
            return
        for word in level.words[: len(level.segments)]:
            if not self.word_list.contains(word):
                raise ValidationError(f"Invalid word '{word}'")
