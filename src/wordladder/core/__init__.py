"""Core word ladder logic."""

from .lexicon import Lexicon
from .ladder import LadderSearch, SearchConfig, SearchResult, InvalidInputError, find_ladder
from .word_graph import WordGraph

__all__ = ["Lexicon", "LadderSearch", "SearchConfig", "SearchResult", "InvalidInputError", "find_ladder", "WordGraph"]
