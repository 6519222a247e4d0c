"""Word list loading, indexing and constrained lookup."""

from __future__ import annotations

import json
from collections import Counter, defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..core.exceptions import WordListFileError, WordListParseError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class WordConstraint:
    """A predicate on candidate words: exact length, or a letter at an index."""

    index: int
    letter: Optional[str] = None

    @classmethod
    def length(cls, size: int) -> WordConstraint:
        return cls(index=size)

    @classmethod
    def char_at(cls, index: int, letter: str) -> WordConstraint:
        return cls(index=index, letter=letter)

    @property
    def is_length(self) -> bool:
        return self.letter is None

    def satisfies(self, word: str) -> bool:
        if self.is_length:
            return len(word) == self.index
        return len(word) > self.index and word[self.index] == self.letter


def normalize_word(text: str) -> str:
    return text.strip().lower()


class WordList:
    """Dictionary words grouped by length, with a positional letter index."""

    def __init__(self) -> None:
        self._words_by_length: Dict[int, Set[str]] = defaultdict(set)
        # Positional index: length -> (position, letter) -> set of words
        self._position_index: Dict[int, Dict[Tuple[int, str], Set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_words(cls, words: Iterable[str]) -> WordList:
        word_list = cls()
        for raw in words:
            word = normalize_word(raw)
            if not word:
                continue
            word_list._add(word)
        return word_list

    @classmethod
    def from_path(cls, path: Path | str) -> WordList:
        """Load a JSON array of words, or a plain file with one word per line."""

        source = Path(path)
        try:
            raw = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise WordListFileError(f"Could not read word list {source}: {exc}") from exc

        if source.suffix.lower() == ".json":
            words = _parse_json_words(raw, source)
        else:
            words = _parse_plain_words(raw)
        word_list = cls.from_words(words)
        LOGGER.info("Loaded %s words from %s", word_list.size(), source)
        return word_list

    def _add(self, word: str) -> None:
        length = len(word)
        bucket = self._words_by_length[length]
        if word in bucket:
            return
        bucket.add(word)
        length_index = self._position_index[length]
        for pos, char in enumerate(word):
            length_index[(pos, char)].add(word)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def size(self) -> int:
        return sum(len(bucket) for bucket in self._words_by_length.values())

    def __len__(self) -> int:
        return self.size()

    def lengths(self) -> List[int]:
        return sorted(length for length, bucket in self._words_by_length.items() if bucket)

    def contains(self, word: str) -> bool:
        word = normalize_word(word)
        return word in self._words_by_length.get(len(word), set())

    def iter_length(self, length: int) -> Iterable[str]:
        return self._words_by_length.get(length, set())

    def find_constrained_words(self, constraints: Sequence[WordConstraint]) -> Set[str]:
        """Return every word satisfying all ``constraints``.

        With a length constraint only that bucket is searched, using the
        positional index. Without one, every bucket long enough to hold the
        largest referenced index is scanned.
        """

        lengths = {c.index for c in constraints if c.is_length}
        letters = [c for c in constraints if not c.is_length]
        if len(lengths) > 1:
            return set()

        if lengths:
            (length,) = lengths
            return self._index_lookup(length, letters)

        max_index = max((c.index for c in letters), default=-1)
        matches: Set[str] = set()
        for length, bucket in self._words_by_length.items():
            if length <= max_index:
                continue
            matches |= {word for word in bucket if all(c.satisfies(word) for c in letters)}
        return matches

    def _index_lookup(self, length: int, letters: Sequence[WordConstraint]) -> Set[str]:
        """Use positional index to find matching words via set intersection."""
        length_index = self._position_index.get(length)
        if not length_index:
            return set()

        constraints: List[Set[str]] = []
        for constraint in letters:
            match_set = length_index.get((constraint.index, constraint.letter))
            if match_set is None:
                return set()
            constraints.append(match_set)

        if not constraints:
            return set(self._words_by_length.get(length, set()))

        # Intersect smallest sets first for speed
        constraints.sort(key=len)
        result = set(constraints[0])
        for s in constraints[1:]:
            result &= s
            if not result:
                return set()
        return result

    def frequencies(self) -> Counter:
        """Letter occurrence counts across the whole dictionary."""

        counts: Counter = Counter()
        for bucket in self._words_by_length.values():
            for word in bucket:
                counts.update(word)
        return counts


def _parse_json_words(raw: str, source: Path) -> List[str]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise WordListParseError(f"Invalid JSON in {source}: {exc}") from exc
    if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
        raise WordListParseError(f"{source} must contain a JSON array of strings")
    return payload


def _parse_plain_words(raw: str) -> List[str]:
    """One word per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries
