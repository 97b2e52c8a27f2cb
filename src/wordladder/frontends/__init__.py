"""Frontend interfaces for word ladders."""

from .cli import CLIWordLadder

__all__ = ["CLIWordLadder"]
