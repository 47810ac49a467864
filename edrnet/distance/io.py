"""Text formats for distance matrices and persisted distance histograms.

Distance matrix: one "row col distance" record per line; unlisted pairs are 0.

Histogram triad (co-indexed, nr_bins + 1 lines each):
- distance_bins.txt: one lower boundary per line
- distance_hist.txt: one pair count per line
- distance_indices.txt: per bin, the flattened "s0 t0 s1 t1 ..." node pairs
"""

import logging
from pathlib import Path

import numpy as np

from edrnet.distance.types import DistanceHistogram
from edrnet.errors import InvalidArgumentError, IOFailureError, ResourceExhaustedError

log = logging.getLogger(__name__)

BINS_FILENAME = "distance_bins.txt"
COUNTS_FILENAME = "distance_hist.txt"
INDICES_FILENAME = "distance_indices.txt"


def _read_lines(path: Path, what: str) -> list[str]:
    try:
        with open(path) as f:
            return f.read().splitlines()
    except OSError as exc:
        raise IOFailureError(f"Could not open file with {what} '{path}': {exc}") from exc


def _check_node(index: int, nr_nodes: int, path: Path, lineno: int) -> None:
    if not 0 <= index < nr_nodes:
        raise InvalidArgumentError(
            f"Incorrect node index encountered: {index} ({path}:{lineno}). "
            f"Value must be in the [0, {nr_nodes}) interval."
        )


def read_distance_matrix(matrix_path: str | Path, nr_nodes: int) -> np.ndarray:
    """Read a sparse "row col distance" file into a dense matrix.

    Blank lines and lines starting with '#' are skipped. A later record for
    the same (row, col) overwrites an earlier one.

    Args:
        matrix_path: Path to the distance records.
        nr_nodes: Matrix dimension; every index must lie in [0, nr_nodes).

    Returns:
        float64 array of shape (nr_nodes, nr_nodes).

    Raises:
        InvalidArgumentError: Non-positive nr_nodes, malformed record or
            out-of-range index.
        IOFailureError: The file cannot be read.
        ResourceExhaustedError: The matrix cannot be allocated.
    """
    path = Path(matrix_path)
    if nr_nodes <= 0:
        raise InvalidArgumentError(
            f"Incorrect value for number of nodes: {nr_nodes}. "
            f"Value must be greater than zero."
        )
    try:
        distances = np.zeros((nr_nodes, nr_nodes), dtype=np.float64)
    except MemoryError as exc:
        raise ResourceExhaustedError(
            f"Failed to allocate memory for a {nr_nodes}x{nr_nodes} distance matrix"
        ) from exc

    n_records = 0
    for lineno, line in enumerate(_read_lines(path, "distance matrix"), start=1):
        fields = line.split()
        if not fields or fields[0].startswith("#"):
            continue
        if len(fields) != 3:
            raise InvalidArgumentError(
                f"Malformed distance record at {path}:{lineno}: {line!r} "
                f"(expected 'row col distance')"
            )
        try:
            row, col, distance = int(fields[0]), int(fields[1]), float(fields[2])
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Malformed distance record at {path}:{lineno}: {line!r}"
            ) from exc
        _check_node(row, nr_nodes, path, lineno)
        _check_node(col, nr_nodes, path, lineno)
        distances[row, col] = distance
        n_records += 1

    log.info("Distance matrix read from %s (%d records, %d nodes)", path, n_records, nr_nodes)
    return distances


def write_distance_matrix(distances: np.ndarray, matrix_path: str | Path) -> Path:
    """Write the nonzero entries of a dense matrix as "row col distance" lines."""
    path = Path(matrix_path)
    rows, cols = np.nonzero(distances)
    try:
        with open(path, "w") as f:
            for i, j, d in zip(rows.tolist(), cols.tolist(), distances[rows, cols].tolist()):
                f.write(f"{i} {j} {d!r}\n")
    except OSError as exc:
        raise IOFailureError(f"Could not write distance matrix '{path}': {exc}") from exc
    return path


def save_histogram(histogram: DistanceHistogram, output_dir: str | Path) -> tuple[Path, Path, Path]:
    """Export the histogram triad into output_dir.

    Returns:
        (bins_path, counts_path, indices_path).
    """
    out = Path(output_dir)
    bins_path = out / BINS_FILENAME
    counts_path = out / COUNTS_FILENAME
    indices_path = out / INDICES_FILENAME
    try:
        out.mkdir(parents=True, exist_ok=True)
        with open(bins_path, "w") as f:
            f.writelines(f"{b:f}\n" for b in histogram.bins.tolist())
        with open(counts_path, "w") as f:
            f.writelines(f"{c:d}\n" for c in histogram.counts.tolist())
        with open(indices_path, "w") as f:
            for k in range(histogram.nr_bins + 1):
                f.write(" ".join(str(i) for i in histogram.flat_indices(k)) + "\n")
    except OSError as exc:
        raise IOFailureError(f"Could not write distance histogram to '{out}': {exc}") from exc

    log.info(
        "Histogram of distance matrix exported to %s (%s, %s, %s)",
        out,
        BINS_FILENAME,
        COUNTS_FILENAME,
        INDICES_FILENAME,
    )
    return bins_path, counts_path, indices_path


def load_histogram(
    bins_path: str | Path, counts_path: str | Path, indices_path: str | Path
) -> DistanceHistogram:
    """Read a histogram triad written by save_histogram.

    The number of bins is taken from the bins file; the counts file and the
    indices file must agree with it line for line, and each indices line
    must hold exactly 2 * counts[k] integers. The bin width is recovered as
    bins[1] - bins[0].

    Raises:
        IOFailureError: A file cannot be read.
        InvalidArgumentError: The three files are inconsistent or malformed.
    """
    bins_lines = [ln for ln in _read_lines(Path(bins_path), "bins of distance histogram") if ln.strip()]
    counts_lines = [ln for ln in _read_lines(Path(counts_path), "values of distance histogram") if ln.strip()]
    indices_lines = _read_lines(Path(indices_path), "indices of distance histogram")

    if len(bins_lines) < 2:
        raise InvalidArgumentError(
            f"Bins file '{bins_path}' must hold at least 2 boundaries, got {len(bins_lines)}"
        )
    if len(counts_lines) != len(bins_lines):
        raise InvalidArgumentError(
            f"Counts file '{counts_path}' has {len(counts_lines)} entries, "
            f"expected {len(bins_lines)} to match '{bins_path}'"
        )
    if len(indices_lines) < len(bins_lines):
        raise InvalidArgumentError(
            f"Indices file '{indices_path}' has {len(indices_lines)} lines, "
            f"expected {len(bins_lines)}"
        )

    try:
        bins = np.array([float(ln) for ln in bins_lines], dtype=np.float64)
        counts = np.array([int(ln) for ln in counts_lines], dtype=np.int64)
    except ValueError as exc:
        raise InvalidArgumentError(f"Malformed distance histogram values: {exc}") from exc
    if (counts < 0).any():
        raise InvalidArgumentError(f"Negative bin count in '{counts_path}'")

    pairs = []
    for k, line in enumerate(indices_lines[: len(bins)]):
        try:
            flat = [int(tok) for tok in line.split()]
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Malformed node index in '{indices_path}' line {k + 1}"
            ) from exc
        if len(flat) != 2 * counts[k]:
            raise InvalidArgumentError(
                f"Bin {k} of '{indices_path}' lists {len(flat)} indices, "
                f"expected 2 * {counts[k]}"
            )
        pairs.append(tuple(zip(flat[0::2], flat[1::2])))

    histogram = DistanceHistogram(
        bins=bins,
        counts=counts,
        pairs=tuple(pairs),
        bin_width=float(bins[1] - bins[0]),
    )
    log.info(
        "Distance histogram loaded: %d bins, %d pairs", histogram.nr_bins, histogram.total_pairs
    )
    return histogram
