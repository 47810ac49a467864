"""Distance histogram construction with an inverted bin -> node-pair index.

Turns a dense distance matrix into uniform-width bins, a count per bin, and
for every bin the list of node pairs whose distance falls into it. The
network sampler uses the index to jump from a drawn distance straight to a
concrete node pair at roughly that distance.
"""

import logging

import numpy as np

from edrnet.distance.types import DistanceHistogram, NodePair
from edrnet.errors import InvalidArgumentError, ResourceExhaustedError

log = logging.getLogger(__name__)


def scan_pairs(
    matrix: np.ndarray, is_symmetric: bool | int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Enumerate the node pairs considered for a symmetry mode.

    Symmetric matrices contribute the upper triangle (row < col), asymmetric
    ones every off-diagonal entry (row != col). Pairs come out in row-major
    order.

    Args:
        matrix: Square distance matrix.
        is_symmetric: 1/True for symmetric, 0/False for asymmetric.

    Returns:
        (rows, cols, distances) arrays of equal length.

    Raises:
        InvalidArgumentError: On a non-square matrix or a flag other than 0/1.
    """
    if is_symmetric not in (0, 1):
        raise InvalidArgumentError(
            f"Incorrect value for is_symmetric: {is_symmetric!r}. Only 1 and 0 "
            f"are allowed (symmetric / not symmetric distance matrix)"
        )
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidArgumentError(
            f"Distance matrix must be square, got shape {matrix.shape}"
        )

    n = matrix.shape[0]
    if is_symmetric:
        mask = np.triu(np.ones((n, n), dtype=bool), k=1)
    else:
        mask = ~np.eye(n, dtype=bool)

    # np.nonzero walks the mask in C (row-major) order
    rows, cols = np.nonzero(mask)
    return rows, cols, matrix[rows, cols]


def bin_indices(
    distances: np.ndarray, min_distance: float, bin_width: float, nr_bins: int
) -> np.ndarray:
    """Map distances onto bins of the form (bins[k], bins[k] + bin_width].

    A distance exactly on an inner boundary goes to the lower of the two
    bins. A distance on the top boundary lands in the last real bin
    (nr_bins - 1) and one equal to the lower boundary lands in bin 0, so no
    pair is ever placed in the closing entry at index nr_bins.
    """
    idx = np.ceil((distances - min_distance) / bin_width).astype(np.int64) - 1
    return np.clip(idx, 0, nr_bins - 1)


def build_distance_histogram(
    matrix: np.ndarray, is_symmetric: bool | int, nr_bins: int
) -> DistanceHistogram:
    """Build the distance histogram and its inverted index.

    Pipeline:
    1. Scan the selected pair set for min/max distance. Both accumulators
       start at 0.0, so the range always includes zero (min <= 0 <= max).
    2. bin_width = (max - min) / nr_bins; bins[k] = min + k * bin_width.
    3. Assign every pair with a nonzero distance to a bin; zero means "not
       measured" and the pair is dropped.
    4. Tally counts and collect the pairs per bin in scan order.

    Args:
        matrix: Square distance matrix of shape (nr_nodes, nr_nodes).
        is_symmetric: 1/True scans row < col, 0/False scans row != col.
        nr_bins: Number of histogram bins (>= 1).

    Returns:
        DistanceHistogram with nr_bins + 1 co-indexed entries.

    Raises:
        InvalidArgumentError: On a bad symmetry flag, shape or bin count.
        ResourceExhaustedError: If the histogram arrays cannot be allocated.
    """
    if nr_bins < 1:
        raise InvalidArgumentError(f"nr_bins ({nr_bins}) must be >= 1")

    try:
        rows, cols, distances = scan_pairs(np.asarray(matrix, dtype=np.float64), is_symmetric)

        min_distance = min(0.0, float(distances.min())) if distances.size else 0.0
        max_distance = max(0.0, float(distances.max())) if distances.size else 0.0
        bin_width = (max_distance - min_distance) / nr_bins
        bins = min_distance + np.arange(nr_bins + 1, dtype=np.float64) * bin_width
        counts = np.zeros(nr_bins + 1, dtype=np.int64)
    except MemoryError as exc:
        raise ResourceExhaustedError(
            f"Failed to allocate memory for a {nr_bins}-bin distance histogram"
        ) from exc

    measured = distances != 0.0
    if bin_width == 0.0 or not measured.any():
        log.warning(
            "Distance matrix has no nonzero distances; histogram is empty "
            "(nr_bins=%d)",
            nr_bins,
        )
        empty: tuple[tuple[NodePair, ...], ...] = tuple(() for _ in range(nr_bins + 1))
        return DistanceHistogram(
            bins=bins, counts=counts, pairs=empty, bin_width=bin_width
        )

    rows, cols, distances = rows[measured], cols[measured], distances[measured]
    idx = bin_indices(distances, min_distance, bin_width, nr_bins)
    counts[:] = np.bincount(idx, minlength=nr_bins + 1)

    pairs = tuple(
        tuple(zip(rows[idx == k].tolist(), cols[idx == k].tolist()))
        for k in range(nr_bins + 1)
    )

    for k in range(nr_bins + 1):
        log.debug("Bin %d (%.6f, %.6f]: %d pairs", k, bins[k], bins[k] + bin_width, counts[k])
    log.info(
        "Distance histogram built: %d pairs in %d bins (min=%.6f, max=%.6f, width=%.6f)",
        int(counts.sum()),
        nr_bins,
        min_distance,
        max_distance,
        bin_width,
    )

    return DistanceHistogram(bins=bins, counts=counts, pairs=pairs, bin_width=bin_width)
