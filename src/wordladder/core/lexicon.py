"""Dictionary of valid words used by the ladder search."""

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, List, Union

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY = Path(__file__).resolve().parent.parent / "data" / "dictionary.txt"


def normalize_word(word: str) -> str:
    """Lowercase and strip a word for comparison and lookup."""
    return word.strip().lower()


class Lexicon:
    """Immutable set of lowercase words with a membership predicate.

    Entries are normalized on construction. Empty and non-alphabetic
    entries are dropped so that every stored word is a plain a-z string.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        """Initialize a lexicon.

        Args:
            words: Iterable of words, in any case
        """
        normalized = set()
        for word in words:
            w = normalize_word(word)
            if w and w.isascii() and w.isalpha():
                normalized.add(w)

        self._words: FrozenSet[str] = frozenset(normalized)
        self._by_length = {}
        for w in self._words:
            self._by_length.setdefault(len(w), []).append(w)
        for bucket in self._by_length.values():
            bucket.sort()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Lexicon":
        """Load a lexicon from a newline-delimited word list.

        Args:
            path: Path to a text file with one word per line

        Returns:
            New Lexicon instance

        Raises:
            FileNotFoundError: If the file does not exist
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            lexicon = cls(f)

        logger.info("Loaded %s words from %s", len(lexicon), path)
        return lexicon

    @classmethod
    def default(cls) -> "Lexicon":
        """Load the dictionary shipped with the package."""
        return cls.from_file(DEFAULT_DICTIONARY)

    @property
    def words(self) -> FrozenSet[str]:
        """All words in the lexicon."""
        return self._words

    @property
    def lengths(self) -> List[int]:
        """Distinct word lengths present, ascending."""
        return sorted(self._by_length)

    def contains(self, word: str) -> bool:
        """Check whether a word is in the lexicon (case-insensitive)."""
        return normalize_word(word) in self._words

    def words_of_length(self, length: int) -> List[str]:
        """Get all words of a given length in sorted order."""
        return list(self._by_length.get(length, []))

    def encode(self, words: Iterable[str]) -> np.ndarray:
        """Encode equal-length words as an array of letter codes.

        Args:
            words: Words to encode; all must share one length

        Returns:
            (N, L) uint8 array where 'a' is 0 and 'z' is 25

        Raises:
            ValueError: If the words have different lengths
        """
        words = [normalize_word(w) for w in words]
        if not words:
            return np.zeros((0, 0), dtype=np.uint8)

        length = len(words[0])
        if any(len(w) != length for w in words):
            raise ValueError("All words must have the same length to be encoded")

        raw = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
        return (raw.reshape(len(words), length) - ord("a")).astype(np.uint8)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __eq__(self, other: object) -> bool:
        """Check if two lexicons hold the same words."""
        if not isinstance(other, Lexicon):
            return False
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        return f"Lexicon({len(self._words)} words)"
