"""Custom exception hierarchy for level generation."""


class WordMazeError(Exception):
    """Base exception for generator failures."""


class GridError(WordMazeError):
    """Raised when a grid is built or mutated outside its bounds."""


class SegmentError(WordMazeError):
    """Raised when consecutive segments do not meet at a junction."""


class WordListLoadError(WordMazeError):
    """Raised when a word list cannot be loaded."""


class WordListFileError(WordListLoadError):
    """Raised when the word list file is missing or unreadable."""


class WordListParseError(WordListLoadError):
    """Raised when the word list file content cannot be parsed."""


class ValidationError(WordMazeError):
    """Raised when the level integrity checks fail."""


class GenerationError(WordMazeError):
    """Raised when a batch of levels cannot be produced."""
