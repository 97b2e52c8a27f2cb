"""Breadth-first word ladder search."""

import logging
import string
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional

from .lexicon import Lexicon, normalize_word

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase


class InvalidInputError(ValueError):
    """Raised in strict mode when endpoints can never be connected."""


@dataclass
class SearchConfig:
    """Configuration for a ladder search."""
    max_steps: Optional[int] = None
    time_limit: Optional[float] = None
    strict: bool = False
    alphabet: str = ALPHABET


@dataclass
class SearchResult:
    """Outcome of a single ladder search."""
    ladder: List[str] = field(default_factory=list)
    reason: str = ""  # 'found', 'trivial', 'exhausted', 'invalid', 'max_steps', 'time_limit'
    expanded: int = 0
    visited: int = 0
    duration_seconds: float = 0.0

    @property
    def found(self) -> bool:
        """Whether a ladder was produced."""
        return bool(self.ladder)

    @property
    def length(self) -> int:
        """Number of words in the ladder (0 if none)."""
        return len(self.ladder)


def neighbors(lexicon: Lexicon, word: str, alphabet: str = ALPHABET) -> List[str]:
    """List dictionary words one substitution away from a word.

    Args:
        lexicon: Dictionary to check candidates against
        word: Word to vary
        alphabet: Letters to substitute, in enumeration order

    Returns:
        Neighbor words in position-then-letter order
    """
    word = normalize_word(word)
    found = []
    for p, original in enumerate(word):
        for ch in alphabet:
            if ch == original:
                continue
            candidate = word[:p] + ch + word[p + 1:]
            if candidate in lexicon:
                found.append(candidate)
    return found


def is_valid_ladder(lexicon: Lexicon, ladder: List[str]) -> bool:
    """Check that a sequence is a well-formed ladder over a lexicon.

    Every word must be in the lexicon, no word may repeat, and each
    consecutive pair must have equal length and differ in exactly one
    position. The empty sequence is not a ladder.
    """
    if not ladder:
        return False
    if len(set(ladder)) != len(ladder):
        return False
    if not all(word in lexicon for word in ladder):
        return False

    for a, b in zip(ladder, ladder[1:]):
        if len(a) != len(b):
            return False
        if sum(1 for x, y in zip(a, b) if x != y) != 1:
            return False
    return True


class LadderSearch:
    """Shortest word ladder search engine.

    Explores the implicit graph whose nodes are dictionary words and whose
    edges join same-length words differing in one position. The frontier is
    strict FIFO, so the first ladder completed is a shortest one.

    Each call to run() owns its frontier and visited map; the lexicon is
    only read, so one engine may serve concurrent callers.
    """

    def __init__(self, lexicon: Lexicon, config: Optional[SearchConfig] = None) -> None:
        """Initialize the engine.

        Args:
            lexicon: Dictionary of valid words
            config: Optional search configuration
        """
        self.lexicon = lexicon
        self.config = config or SearchConfig()

    def run(self, start: str, end: str) -> SearchResult:
        """Search for a shortest ladder from start to end.

        Args:
            start: Source word
            end: Destination word

        Returns:
            SearchResult; its ladder is empty when no ladder was found

        Raises:
            InvalidInputError: In strict mode, if lengths differ or a word
                is empty or non-alphabetic
        """
        start = normalize_word(start)
        end = normalize_word(end)
        started_at = time.time()

        if start == end and start:
            return SearchResult(ladder=[start], reason="trivial", visited=1)

        problem = self._check_endpoints(start, end)
        if problem:
            if self.config.strict:
                raise InvalidInputError(problem)
            logger.debug("No search for %r -> %r: %s", start, end, problem)
            return SearchResult(reason="invalid")

        if start not in self.lexicon or end not in self.lexicon:
            return SearchResult(reason="invalid")

        result = self._search(start, end, started_at)
        result.duration_seconds = time.time() - started_at
        logger.debug(
            "Search %r -> %r finished (%s): %d expanded, %d visited",
            start, end, result.reason, result.expanded, result.visited,
        )
        return result

    def _check_endpoints(self, start: str, end: str) -> Optional[str]:
        """Describe why two endpoints can never be joined, or return None."""
        if not start or not end:
            return "start and end words must be non-empty"
        if not (start.isascii() and start.isalpha() and end.isascii() and end.isalpha()):
            return f"words must be alphabetic: {start!r}, {end!r}"
        if len(start) != len(end):
            return f"words differ in length: {start!r} ({len(start)}) vs {end!r} ({len(end)})"
        return None

    def _search(self, start: str, end: str, started_at: float) -> SearchResult:
        """Run the breadth-first search between two validated endpoints."""
        max_steps = self.config.max_steps
        time_limit = self.config.time_limit
        alphabet = self.config.alphabet

        frontier: Deque[str] = deque([start])
        # Keys double as the visited set
        predecessors: Dict[str, Optional[str]] = {start: None}
        expanded = 0

        while frontier:
            tail = frontier.popleft()
            if tail == end:
                return SearchResult(
                    ladder=self._reconstruct(predecessors, end),
                    reason="found",
                    expanded=expanded,
                    visited=len(predecessors),
                )

            # Budgets only limit expansions; a queued target is still accepted
            if max_steps is not None and expanded >= max_steps:
                logger.info("Search %r -> %r stopped after %d steps", start, end, expanded)
                return SearchResult(reason="max_steps", expanded=expanded, visited=len(predecessors))
            if time_limit is not None and time.time() - started_at >= time_limit:
                logger.info("Search %r -> %r stopped after %.3fs", start, end, time_limit)
                return SearchResult(reason="time_limit", expanded=expanded, visited=len(predecessors))

            expanded += 1
            for p, original in enumerate(tail):
                for ch in alphabet:
                    # Substituting a letter with itself yields tail again
                    if ch == original:
                        continue
                    candidate = tail[:p] + ch + tail[p + 1:]
                    if candidate in predecessors:
                        continue
                    if candidate not in self.lexicon:
                        continue
                    predecessors[candidate] = tail
                    frontier.append(candidate)

        return SearchResult(reason="exhausted", expanded=expanded, visited=len(predecessors))

    @staticmethod
    def _reconstruct(predecessors: Dict[str, Optional[str]], end: str) -> List[str]:
        """Walk predecessor links back from end to build the ladder."""
        ladder = []
        word: Optional[str] = end
        while word is not None:
            ladder.append(word)
            word = predecessors[word]
        ladder.reverse()
        return ladder


def find_ladder(
    lexicon: Lexicon, start: str, end: str, config: Optional[SearchConfig] = None
) -> List[str]:
    """Find a shortest word ladder between two words.

    Args:
        lexicon: Dictionary of valid words
        start: Source word
        end: Destination word
        config: Optional search configuration (budgets, strict mode)

    Returns:
        List of words from start to end, or an empty list if no ladder exists
    """
    return LadderSearch(lexicon, config).run(start, end).ladder
