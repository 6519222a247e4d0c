import json
import tempfile
import unittest
from pathlib import Path

from wordmaze.core.exceptions import WordListFileError, WordListLoadError, WordListParseError
from wordmaze.data.dictionary import WordConstraint, WordList


class WordListTests(unittest.TestCase):
    def setUp(self) -> None:
        self.words = WordList.from_words(["Cat", "cot", "dog", "DOGS", "goat", "  ", "at"])

    def test_words_are_lowercased_and_grouped(self) -> None:
        self.assertEqual(self.words.size(), 6)
        self.assertEqual(self.words.lengths(), [2, 3, 4])
        self.assertEqual(set(self.words.iter_length(3)), {"cat", "cot", "dog"})
        self.assertTrue(self.words.contains("CAT"))
        self.assertFalse(self.words.contains("cats"))

    def test_length_constraint_is_exact(self) -> None:
        found = self.words.find_constrained_words([WordConstraint.length(3)])
        self.assertEqual(found, {"cat", "cot", "dog"})

    def test_letter_constraints_intersect(self) -> None:
        found = self.words.find_constrained_words(
            [WordConstraint.length(3), WordConstraint.char_at(0, "c"), WordConstraint.char_at(2, "t")]
        )
        self.assertEqual(found, {"cat", "cot"})
        found = self.words.find_constrained_words(
            [WordConstraint.length(4), WordConstraint.char_at(3, "t")]
        )
        self.assertEqual(found, {"goat"})

    def test_unmatched_constraints_return_empty(self) -> None:
        self.assertEqual(self.words.find_constrained_words([WordConstraint.length(9)]), set())
        self.assertEqual(
            self.words.find_constrained_words([WordConstraint.length(3), WordConstraint.char_at(1, "z")]),
            set(),
        )
        self.assertEqual(
            self.words.find_constrained_words([WordConstraint.length(3), WordConstraint.length(4)]),
            set(),
        )

    def test_letter_constraint_without_length_scans_long_enough_buckets(self) -> None:
        found = self.words.find_constrained_words([WordConstraint.char_at(3, "s")])
        self.assertEqual(found, {"dogs"})
        found = self.words.find_constrained_words([WordConstraint.char_at(1, "t")])
        self.assertEqual(found, {"at"})

    def test_constraint_satisfies(self) -> None:
        self.assertTrue(WordConstraint.length(3).satisfies("cat"))
        self.assertFalse(WordConstraint.char_at(5, "a").satisfies("cat"))
        self.assertTrue(WordConstraint.char_at(2, "t").satisfies("cat"))

    def test_frequencies_count_every_letter(self) -> None:
        words = WordList.from_words(["aab", "ba"])
        self.assertEqual(dict(words.frequencies()), {"a": 3, "b": 2})


class WordListLoadingTests(unittest.TestCase):
    def test_loads_json_array(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.json"
            path.write_text(json.dumps(["Apple", "pear"]), encoding="utf-8")
            words = WordList.from_path(path)
            self.assertEqual(words.size(), 2)
            self.assertTrue(words.contains("apple"))

    def test_loads_plain_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.txt"
            path.write_text("# fruit\napple\n\npear\n", encoding="utf-8")
            words = WordList.from_path(path)
            self.assertEqual(sorted(words.iter_length(4)), ["pear"])
            self.assertEqual(words.size(), 2)

    def test_missing_file_is_file_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(WordListFileError):
                WordList.from_path(Path(tmpdir) / "absent.json")

    def test_invalid_json_is_parse_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.json"
            path.write_text("[\"apple\",", encoding="utf-8")
            with self.assertRaises(WordListParseError):
                WordList.from_path(path)
            path.write_text(json.dumps({"apple": 1}), encoding="utf-8")
            with self.assertRaises(WordListLoadError):
                WordList.from_path(path)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
