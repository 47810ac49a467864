"""Consistency checks between a sampled network and its distance histogram."""

import logging

import numpy as np

from edrnet.distance.types import DistanceHistogram, NodePair
from edrnet.network.types import WeightedEdgeList

log = logging.getLogger(__name__)


def _pair_bins(histogram: DistanceHistogram) -> dict[NodePair, int]:
    """Map every undirected pair in the inverted index to its bin."""
    lookup: dict[NodePair, int] = {}
    for k, bucket in enumerate(histogram.pairs):
        for s, t in bucket:
            lookup.setdefault((s, t), k)
            lookup.setdefault((t, s), k)
    return lookup


def validate_network(
    edges: WeightedEdgeList, histogram: DistanceHistogram, nr_edges: int
) -> list[str]:
    """Validate a sampled network against its histogram.

    Checks (cheapest first):
    1. Exactly nr_edges distinct directed pairs
    2. All weights >= 1
    3. No self-loops
    4. Row-major ordering without duplicates
    5. Every pair (in either orientation) is in the histogram's inverted index

    Returns:
        List of error strings (empty = valid network).
    """
    errors: list[str] = []

    if len(edges) != nr_edges:
        errors.append(f"Expected {nr_edges} distinct edges, found {len(edges)}")

    if len(edges) and edges.weights.min() < 1:
        errors.append(f"Non-positive weight found: min weight = {edges.weights.min()}")

    n_loops = int((edges.sources == edges.targets).sum())
    if n_loops:
        errors.append(f"Self-loops detected: {n_loops}")

    keys = edges.sources * edges.nr_nodes + edges.targets
    if len(keys) > 1 and not (np.diff(keys) > 0).all():
        errors.append("Edges are not in strictly increasing row-major order")

    lookup = _pair_bins(histogram)
    unknown = [pair for pair in edges.pairs() if pair not in lookup]
    if unknown:
        errors.append(
            f"{len(unknown)} edges not present in the distance histogram, "
            f"e.g. {unknown[0]}"
        )

    return errors


def edge_distance_profile(edges: WeightedEdgeList, histogram: DistanceHistogram) -> np.ndarray:
    """Count distinct generated edges per histogram bin.

    Returns:
        int64 array of length nr_bins + 1, co-indexed with histogram.counts.
        Edges missing from the inverted index are not counted.
    """
    lookup = _pair_bins(histogram)
    profile = np.zeros(histogram.nr_bins + 1, dtype=np.int64)
    for pair in edges.pairs():
        k = lookup.get(pair)
        if k is not None:
            profile[k] += 1
    log.debug("Edge distance profile: %s", profile.tolist())
    return profile
