"""Decoy letters that widen a level's letter pool."""

from __future__ import annotations

import random
from typing import Mapping, Optional

from ..core.models import Level
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def increase_letters(
    level: Level,
    frequencies: Mapping[str, int],
    rng: Optional[random.Random] = None,
) -> str:
    """Append a word of letters sampled by dictionary frequency to ``level``.

    The decoy has half as many letters as the solution's non-junction
    letters (two per word are shared). Returns the appended word, or an empty
    string when nothing was added.
    """

    rng = rng or random.Random()
    letter_count = sum(max(len(word) - 2, 0) for word in level.words)
    target = letter_count // 2
    choices = sorted(letter for letter, weight in frequencies.items() if weight > 0)
    if target <= 0 or not choices:
        return ""

    weights = [frequencies[letter] for letter in choices]
    padded_word = "".join(rng.choices(choices, weights=weights, k=target))
    level.words.append(padded_word)
    LOGGER.debug("Padded level with %s extra letters", len(padded_word))
    return padded_word
