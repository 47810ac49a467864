"""Histogram-driven edge placement for CDR/EDR random networks.

Implements the spatial random network algorithm of Ercsey-Ravasz et al.
(2013): repeatedly draw a distance, pick a node pair from the histogram bin
containing it, orient the pair at random, and add the directed edge to a
weighted accumulator until the requested number of distinct edges exists.
"""

import logging

import numpy as np

from edrnet.distance.types import DistanceHistogram, NodePair
from edrnet.errors import InvalidArgumentError, SamplingExhaustedError
from edrnet.network.locator import NOT_FOUND, locate_bin
from edrnet.network.strategy import DistanceDrawStrategy
from edrnet.network.types import WeightedEdgeList

log = logging.getLogger(__name__)


def reachable_bins(histogram: DistanceHistogram, strategy: DistanceDrawStrategy) -> list[int]:
    """Populated bins that a strategy's draws can land in.

    Both rules draw non-negative distances, so a bin is reachable when its
    upper edge is above zero and its lower edge is below the rule's upper
    bound.
    """
    width = histogram.bin_width
    return [
        k
        for k in histogram.populated_bins
        if histogram.bins[k] + width > 0.0 and histogram.bins[k] < strategy.upper_bound
    ]


def realizable_edge_count(histogram: DistanceHistogram, bins: list[int]) -> int:
    """Number of distinct directed pairs obtainable from the given bins."""
    directed: set[NodePair] = set()
    for k in bins:
        for s, t in histogram.pairs[k]:
            directed.add((s, t))
            directed.add((t, s))
    return len(directed)


def check_preconditions(
    histogram: DistanceHistogram,
    nr_nodes: int,
    nr_edges: int,
    strategy: DistanceDrawStrategy,
) -> None:
    """Reject inputs for which the sampling loop would fail or never end.

    Raises:
        InvalidArgumentError: Non-positive counts, a node index outside
            [0, nr_nodes), no reachable populated bin, or more requested
            edges than the reachable bins can provide.
    """
    if nr_nodes <= 0:
        raise InvalidArgumentError(
            f"Incorrect value for number of nodes: {nr_nodes}. "
            f"Value must be greater than zero."
        )
    if nr_edges <= 0:
        raise InvalidArgumentError(
            f"Incorrect value for number of edges: {nr_edges}. "
            f"Value must be greater than zero."
        )

    max_node = histogram.max_node_index()
    if max_node >= nr_nodes:
        raise InvalidArgumentError(
            f"Histogram references node {max_node}, outside [0, {nr_nodes})"
        )

    bins = reachable_bins(histogram, strategy)
    if not bins:
        raise InvalidArgumentError(
            f"Histogram has no populated bin reachable by the {strategy.name} "
            f"distance rule; sampling would never terminate"
        )

    available = realizable_edge_count(histogram, bins)
    if nr_edges > available:
        raise InvalidArgumentError(
            f"Requested {nr_edges} edges but the histogram only provides "
            f"{available} distinct directed pairs"
        )


def generate_network(
    histogram: DistanceHistogram,
    nr_nodes: int,
    nr_edges: int,
    strategy: DistanceDrawStrategy,
    rng: np.random.Generator,
    max_draws: int | None = None,
) -> WeightedEdgeList:
    """Sample a weighted directed network following the distance histogram.

    Each iteration consumes random numbers in a fixed order (distance draw,
    pair draw, direction draw), so a seeded generator reproduces the same
    network exactly:
    1. Draw a distance d from the strategy.
    2. Locate the bin with bins[k] < d <= bins[k] + bin_width; retry from
       step 1 if there is none or it is empty.
    3. Pick one of the bin's pairs uniformly.
    4. Flip the pair's direction with probability 1/2.
    5. Count the directed pair as a new edge if its weight is zero, then
       increment its weight.
    6. Stop once nr_edges distinct directed pairs exist.

    Args:
        histogram: Distance histogram with its inverted index.
        nr_nodes: Number of nodes in the network.
        nr_edges: Number of distinct directed edges to place.
        strategy: Distance drawing rule (CDR or EDR).
        rng: numpy random Generator; the only source of randomness.
        max_draws: Optional cap on distance draws. None (default) keeps
            drawing until the target is reached.

    Returns:
        WeightedEdgeList with exactly nr_edges entries.

    Raises:
        InvalidArgumentError: See check_preconditions.
        SamplingExhaustedError: If max_draws is set and runs out.
    """
    check_preconditions(histogram, nr_nodes, nr_edges, strategy)

    bins = histogram.bins
    counts = histogram.counts
    bin_width = histogram.bin_width

    weights: dict[NodePair, int] = {}
    count_edges = 0
    n_draws = 0
    n_rejected = 0

    while count_edges < nr_edges:
        if max_draws is not None and n_draws >= max_draws:
            raise SamplingExhaustedError(
                f"Placed {count_edges} of {nr_edges} edges within {max_draws} draws"
            )
        n_draws += 1

        dist = strategy.draw(rng)
        bin_idx = locate_bin(bins, bin_width, dist)
        if bin_idx == NOT_FOUND or counts[bin_idx] == 0:
            n_rejected += 1
            continue

        edge_idx = int(rng.integers(0, counts[bin_idx]))
        source, target = histogram.pairs[bin_idx][edge_idx]
        if int(rng.integers(0, 2)) == 1:
            source, target = target, source

        key = (source, target)
        if key not in weights:
            count_edges += 1
            weights[key] = 0
        weights[key] += 1

    edges = WeightedEdgeList.from_weights(weights, nr_nodes)
    log.info(
        "%s network generated: %d edges, total weight %d (%d draws, %d rejected)",
        strategy.name,
        len(edges),
        edges.total_weight,
        n_draws,
        n_rejected,
    )
    return edges
