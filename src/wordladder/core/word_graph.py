"""Word graph over one word length using tensor operations.

Words of a single length become nodes of an explicit adjacency matrix, and
breadth-first distances are computed layer by layer for a whole batch of
source words at once. This gives an independent check on ladder lengths
found by LadderSearch and answers bulk distance queries quickly.
"""

from typing import Dict, Iterable, List, Optional

import torch

from .lexicon import Lexicon, normalize_word


class WordGraph:
    """Adjacency matrix of same-length words differing in one position."""

    def __init__(
        self,
        lexicon: Lexicon,
        length: int,
        device: str = "cpu",
        chunk_size: int = 1024,
    ) -> None:
        """Build the graph for all lexicon words of a given length.

        Args:
            lexicon: Source dictionary
            length: Word length of the nodes
            device: Device to place tensors on ('cpu' or 'cuda')
            chunk_size: Rows compared per block when building adjacency
        """
        self.length = length
        self.device = torch.device(device)
        self._words = lexicon.words_of_length(length)
        self._index: Dict[str, int] = {w: i for i, w in enumerate(self._words)}

        codes = torch.from_numpy(lexicon.encode(self._words).astype("int64")).to(self.device)
        self._adjacency = self._build_adjacency(codes, chunk_size)

    @property
    def words(self) -> List[str]:
        """Node words in index order."""
        return list(self._words)

    @property
    def size(self) -> int:
        """Number of nodes."""
        return len(self._words)

    @property
    def adjacency(self) -> torch.Tensor:
        """(N, N) boolean adjacency matrix."""
        return self._adjacency

    def _build_adjacency(self, codes: torch.Tensor, chunk_size: int) -> torch.Tensor:
        """Compare every pair of encoded words in row blocks."""
        n = codes.shape[0]
        adjacency = torch.zeros(n, n, dtype=torch.bool, device=self.device)
        if n == 0:
            return adjacency

        for s in range(0, n, chunk_size):
            block = codes[s:s + chunk_size]
            # (chunk, 1, L) vs (1, N, L) -> mismatch count per pair
            mismatches = (block.unsqueeze(1) != codes.unsqueeze(0)).sum(dim=2)
            adjacency[s:s + chunk_size] = mismatches == 1
        return adjacency

    def index_of(self, word: str) -> int:
        """Get the node index of a word.

        Raises:
            KeyError: If the word is not a node of this graph
        """
        return self._index[normalize_word(word)]

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._index

    def neighbors(self, word: str) -> List[str]:
        """Get the sorted neighbors of a word."""
        row = self._adjacency[self.index_of(word)]
        return [self._words[i] for i in torch.nonzero(row).flatten().tolist()]

    def distances_from(self, sources: Iterable[str]) -> torch.Tensor:
        """Compute BFS distances from several sources in parallel.

        Args:
            sources: Source words, all nodes of this graph

        Returns:
            (B, N) int64 tensor of edge counts, -1 where unreachable

        Raises:
            KeyError: If a source word is not in the graph
        """
        indices = [self.index_of(w) for w in sources]
        batch = len(indices)
        n = self.size

        distances = torch.full((batch, n), -1, dtype=torch.int64, device=self.device)
        frontier = torch.zeros(batch, n, dtype=torch.bool, device=self.device)
        if batch == 0 or n == 0:
            return distances

        rows = torch.arange(batch, device=self.device)
        frontier[rows, torch.tensor(indices, device=self.device)] = True
        distances[frontier] = 0
        visited = frontier.clone()

        adjacency = self._adjacency.to(torch.float32)
        step = 0
        while frontier.any():
            step += 1
            reached = (frontier.to(torch.float32) @ adjacency) > 0
            frontier = reached & ~visited
            distances[frontier] = step
            visited |= frontier

        return distances

    def distance(self, start: str, end: str) -> Optional[int]:
        """Get the number of edges on a shortest path between two words.

        Returns:
            Edge count, or None if either word is missing or no path exists
        """
        if start not in self or end not in self:
            return None

        d = int(self.distances_from([start])[0, self.index_of(end)])
        return d if d >= 0 else None

    def component_sizes(self) -> List[int]:
        """Sizes of connected components, largest first."""
        unassigned = torch.ones(self.size, dtype=torch.bool, device=self.device)
        sizes = []
        while unassigned.any():
            seed = int(torch.nonzero(unassigned)[0])
            reached = self.distances_from([self._words[seed]])[0] >= 0
            sizes.append(int(reached.sum()))
            unassigned &= ~reached
        return sorted(sizes, reverse=True)
