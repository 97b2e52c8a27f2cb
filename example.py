#!/usr/bin/env python3
"""
Example usage of the wordladder package.
"""

from wordladder import Lexicon, LadderSearch, find_ladder
from wordladder.core.word_graph import WordGraph


def main():
    """Demonstrate programmatic usage of the wordladder package."""
    lexicon = Lexicon.default()
    print(f"Loaded {len(lexicon)} words")
    print()

    for start, end in [("cold", "warm"), ("head", "tail"), ("cat", "dog")]:
        ladder = find_ladder(lexicon, start, end)
        print(f"{start} -> {end}: {' -> '.join(ladder) if ladder else 'no ladder'}")

    # Search statistics
    result = LadderSearch(lexicon).run("head", "tail")
    print()
    print("Search statistics for head -> tail:")
    print(f"  reason: {result.reason}")
    print(f"  expanded: {result.expanded}")
    print(f"  visited: {result.visited}")
    print(f"  duration: {result.duration_seconds:.4f}s")

    # Distances from one word to every other four-letter word
    graph = WordGraph(lexicon, 4)
    distances = graph.distances_from(["cold"])[0]
    reachable = int((distances >= 0).sum())
    print()
    print(f"{reachable} of {graph.size} four-letter words are reachable from 'cold'")
    print(f"Farthest is {int(distances.max())} steps away")
    print(f"Largest components: {graph.component_sizes()[:5]}")


if __name__ == "__main__":
    main()
