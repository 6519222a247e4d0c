"""Segment filling: randomized incremental solver plus a CP-SAT exact fill."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from ortools.sat.python import cp_model

from ..core.exceptions import SegmentError
from ..core.models import Position, Segment, SolutionWord, segment_cells, segment_length
from ..data.dictionary import WordConstraint, WordList
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class Solution:
    """Words assigned to an ordered list of segments, filled front to back."""

    def __init__(self, segments: Sequence[Segment]) -> None:
        self.segments: List[Segment] = list(segments)
        self.words: List[SolutionWord] = []

    def all_words(self) -> List[str]:
        return [w.word for w in self.words]

    def last_word(self) -> Optional[SolutionWord]:
        return self.words[-1] if self.words else None

    def is_complete(self) -> bool:
        return len(self.words) == len(self.segments)

    def next_segment(self) -> Optional[Segment]:
        if self.is_complete():
            return None
        return self.segments[len(self.words)]

    def add_word(self, word: str) -> None:
        segment = self.next_segment()
        if segment is None:
            return
        start, end = segment
        self.words.append(SolutionWord(start=start, end=end, word=word))

    def reset(self) -> None:
        self.words.clear()

    def next_constraints(self) -> List[WordConstraint]:
        """Constraints on the word for the next unfilled segment.

        The word must span the segment, and it must agree with the previous
        word on the letter at their shared junction cell.
        """

        segment = self.next_segment()
        if segment is None:
            return []
        next_start, next_stop = segment
        next_length = segment_length(segment)
        constraints = [WordConstraint.length(next_length)]
        previous = self.last_word()
        if previous is None:
            return constraints

        if next_start == previous.end:
            constraints.append(WordConstraint.char_at(0, previous.last_letter))
        elif next_start == previous.start:
            constraints.append(WordConstraint.char_at(0, previous.first_letter))
        elif next_stop == previous.start:
            constraints.append(WordConstraint.char_at(next_length - 1, previous.first_letter))
        elif next_stop == previous.end:
            constraints.append(WordConstraint.char_at(next_length - 1, previous.last_letter))
        else:
            raise SegmentError(
                f"Segment {segment} shares no junction with {(previous.start, previous.end)}"
            )
        return constraints

    def attempt_solve(
        self,
        word_list: WordList,
        max_attempts: int,
        rng: Optional[random.Random] = None,
    ) -> bool:
        """Fill every segment with random candidates.

        A dead end costs one attempt and discards every committed word, so
        each attempt starts over from the first segment.
        """

        rng = rng or random.Random()
        attempts = 0
        while attempts < max_attempts:
            while not self.is_complete():
                candidates = word_list.find_constrained_words(self.next_constraints())
                if not candidates:
                    break
                self.add_word(rng.choice(sorted(candidates)))
            if self.is_complete():
                return True
            attempts += 1
            LOGGER.debug(
                "Solve attempt %s/%s stuck at segment %s/%s",
                attempts,
                max_attempts,
                len(self.words) + 1,
                len(self.segments),
            )
            self.reset()
        return False

    def attempt_solve_exact(
        self,
        word_list: WordList,
        rng: Optional[random.Random] = None,
        timeout: float = 10.0,
        num_workers: int = 4,
    ) -> bool:
        """Fill all segments at once via CP-SAT.

        Every path cell gets one letter variable, shared by each segment
        crossing it, and each segment is restricted to the dictionary words
        of its length.
        """

        rng = rng or random.Random()
        self.reset()
        if not self.segments:
            return True

        segment_words: List[List[str]] = []
        for segment in self.segments:
            words = sorted(word_list.find_constrained_words([WordConstraint.length(segment_length(segment))]))
            if not words:
                LOGGER.debug("No candidates of length %s for segment %s", segment_length(segment), segment)
                return False
            rng.shuffle(words)
            segment_words.append(words)

        alphabet = sorted({char for words in segment_words for word in words for char in word})
        letter_ids = {char: index for index, char in enumerate(alphabet)}

        model = cp_model.CpModel()
        cell_vars: Dict[Position, cp_model.IntVar] = {}
        for segment, words in zip(self.segments, segment_words):
            cells = segment_cells(segment)
            for cell in cells:
                if cell not in cell_vars:
                    cell_vars[cell] = model.new_int_var(
                        0, len(alphabet) - 1, f"L_{cell.row}_{cell.col}"
                    )
            model.add_allowed_assignments(
                [cell_vars[cell] for cell in cells],
                [[letter_ids[char] for char in word] for word in words],
            )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = timeout
        solver.parameters.num_workers = num_workers
        solver.parameters.random_seed = rng.randrange(2**31 - 1)

        LOGGER.debug(
            "CP-SAT: %d segments, %d cell vars, solving (timeout=%0.1fs)...",
            len(self.segments),
            len(cell_vars),
            timeout,
        )
        status = solver.solve(model)
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            LOGGER.debug("CP-SAT: no solution found (status=%s)", solver.status_name(status))
            return False

        for segment in self.segments:
            word = "".join(alphabet[solver.value(cell_vars[cell])] for cell in segment_cells(segment))
            self.add_word(word)
        return True
