"""Edge-list text format: one "source target weight" line per directed pair."""

import logging
from pathlib import Path

from edrnet.errors import InvalidArgumentError, IOFailureError
from edrnet.network.types import WeightedEdgeList

log = logging.getLogger(__name__)


def write_edge_list(edges: WeightedEdgeList, output_path: str | Path) -> Path:
    """Export the network in row-major (source, target) order."""
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            for s, t, w in zip(edges.sources.tolist(), edges.targets.tolist(), edges.weights.tolist()):
                f.write(f"{s} {t} {w}\n")
    except OSError as exc:
        raise IOFailureError(f"Could not open output file '{path}': {exc}") from exc
    log.info("Edge list written to %s (%d edges)", path, len(edges))
    return path


def read_edge_list(input_path: str | Path, nr_nodes: int) -> WeightedEdgeList:
    """Read an edge list written by write_edge_list.

    Raises:
        IOFailureError: The file cannot be read.
        InvalidArgumentError: Malformed line, node outside [0, nr_nodes),
            non-positive weight or duplicated pair.
    """
    path = Path(input_path)
    try:
        with open(path) as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise IOFailureError(f"Could not open edge list '{path}': {exc}") from exc

    weights: dict[tuple[int, int], int] = {}
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            s, t, w = (int(tok) for tok in line.split())
        except ValueError as exc:
            raise InvalidArgumentError(f"Malformed edge at {path}:{lineno}: {line!r}") from exc
        if not (0 <= s < nr_nodes and 0 <= t < nr_nodes):
            raise InvalidArgumentError(
                f"Edge ({s}, {t}) at {path}:{lineno} outside [0, {nr_nodes})"
            )
        if w <= 0:
            raise InvalidArgumentError(f"Non-positive weight {w} at {path}:{lineno}")
        if (s, t) in weights:
            raise InvalidArgumentError(f"Duplicate edge ({s}, {t}) at {path}:{lineno}")
        weights[(s, t)] = w

    return WeightedEdgeList.from_weights(weights, nr_nodes)
