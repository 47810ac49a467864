"""Network data structures for sampled weighted directed graphs."""

from dataclasses import dataclass

import numpy as np
import scipy.sparse

from edrnet.distance.types import NodePair


@dataclass(frozen=True)
class WeightedEdgeList:
    """Immutable weighted directed edge list produced by the sampler.

    Parallel arrays, one entry per distinct directed pair, sorted row-major
    by (source, target). A weight counts how often the pair was sampled.
    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__.
    """

    sources: np.ndarray  # int64, length nr_edges
    targets: np.ndarray  # int64, length nr_edges
    weights: np.ndarray  # int64, every entry >= 1
    nr_nodes: int

    @classmethod
    def from_weights(cls, weights: dict[NodePair, int], nr_nodes: int) -> "WeightedEdgeList":
        """Finalize a pair -> weight accumulator into a sorted edge list."""
        ordered = sorted(weights.items())
        sources = np.array([s for (s, _), _ in ordered], dtype=np.int64)
        targets = np.array([t for (_, t), _ in ordered], dtype=np.int64)
        values = np.array([w for _, w in ordered], dtype=np.int64)
        return cls(sources=sources, targets=targets, weights=values, nr_nodes=nr_nodes)

    def __len__(self) -> int:
        return int(self.sources.shape[0])

    @property
    def total_weight(self) -> int:
        """Number of accepted draws, repeated pairs included."""
        return int(self.weights.sum())

    def pairs(self) -> list[NodePair]:
        return list(zip(self.sources.tolist(), self.targets.tolist()))

    def as_dict(self) -> dict[NodePair, int]:
        return dict(zip(self.pairs(), self.weights.tolist()))

    def to_csr(self) -> scipy.sparse.csr_matrix:
        """Weighted directed adjacency matrix of shape (nr_nodes, nr_nodes)."""
        return scipy.sparse.csr_matrix(
            (self.weights, (self.sources, self.targets)),
            shape=(self.nr_nodes, self.nr_nodes),
        )
