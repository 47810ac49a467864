"""Distance histogram data structure with its inverted bin -> node-pair index."""

from dataclasses import dataclass

import numpy as np

NodePair = tuple[int, int]


@dataclass(frozen=True)
class DistanceHistogram:
    """Immutable histogram of node-pair distances.

    ``bins``, ``counts`` and ``pairs`` are co-indexed and all have length
    nr_bins + 1. Bin k covers the half-open interval
    (bins[k], bins[k] + bin_width]; the trailing entry only closes the range
    and never holds pairs produced by the builder. ``pairs[k]`` lists the
    (source, target) tuples that fell into bin k, in row-major scan order.
    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__.
    """

    bins: np.ndarray  # float64 lower boundaries, length nr_bins + 1
    counts: np.ndarray  # int64 pair count per bin, length nr_bins + 1
    pairs: tuple[tuple[NodePair, ...], ...]  # inverted index, length nr_bins + 1
    bin_width: float

    @property
    def nr_bins(self) -> int:
        return len(self.bins) - 1

    @property
    def min_distance(self) -> float:
        return float(self.bins[0])

    @property
    def max_bin(self) -> float:
        """Upper end of the histogram range (the last boundary)."""
        return float(self.bins[-1])

    @property
    def total_pairs(self) -> int:
        return int(self.counts.sum())

    @property
    def populated_bins(self) -> list[int]:
        return [int(k) for k in np.flatnonzero(self.counts)]

    def flat_indices(self, k: int) -> list[int]:
        """Bin k's pairs flattened as [s0, t0, s1, t1, ...] (2 * counts[k] ints)."""
        return [node for pair in self.pairs[k] for node in pair]

    def max_node_index(self) -> int:
        """Largest node index referenced by any pair, or -1 for an empty index."""
        return max((max(s, t) for bucket in self.pairs for s, t in bucket), default=-1)
