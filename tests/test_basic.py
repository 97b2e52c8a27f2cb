"""Basic tests for word ladder package."""

from wordladder import Lexicon, find_ladder
from wordladder.core.ladder import is_valid_ladder


def test_lexicon_creation():
    """Test basic lexicon creation and membership."""
    lexicon = Lexicon(["Cat", "dog "])
    assert len(lexicon) == 2
    assert lexicon.contains("cat")
    assert lexicon.contains("DOG")
    assert not lexicon.contains("cow")


def test_simple_ladder():
    """Test a short ladder is found."""
    lexicon = Lexicon(["cat", "cot", "cog", "dog"])
    assert find_ladder(lexicon, "cat", "dog") == ["cat", "cot", "cog", "dog"]


def test_no_ladder():
    """Test unreachable words give an empty ladder."""
    lexicon = Lexicon(["cat", "dog"])
    assert find_ladder(lexicon, "cat", "dog") == []


def test_default_dictionary():
    """Test the bundled dictionary loads and solves a classic ladder."""
    lexicon = Lexicon.default()
    assert len(lexicon) > 1000

    ladder = find_ladder(lexicon, "cold", "warm")
    assert len(ladder) == 5
    assert ladder[0] == "cold"
    assert ladder[-1] == "warm"
    assert is_valid_ladder(lexicon, ladder)
