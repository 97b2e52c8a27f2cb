"""Word ladder package: shortest single-letter transformations between words."""

__version__ = "0.1.0"

from .core.lexicon import Lexicon
from .core.ladder import LadderSearch, SearchConfig, SearchResult, InvalidInputError, find_ladder

__all__ = ["Lexicon", "LadderSearch", "SearchConfig", "SearchResult", "InvalidInputError", "find_ladder"]
