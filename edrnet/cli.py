"""Command-line entry points for histogram building and network generation.

Usage:
    edrnet-histogram MATRIX NR_NODES NR_BINS SYMMETRIC OUTPUT_DIR
    edrnet-network NR_NODES NR_EDGES BINS HIST INDICES DECAY OUTPUT [SEED]

Both commands exit with status 1 on any fatal error.
"""

import argparse
import logging
import sys

from edrnet.distance.histogram import build_distance_histogram
from edrnet.distance.io import load_histogram, read_distance_matrix, save_histogram
from edrnet.errors import EDRNetError, InvalidArgumentError
from edrnet.network.io import write_edge_list
from edrnet.network.sampler import generate_network
from edrnet.network.strategy import select_strategy
from edrnet.reproducibility.seed import make_rng, resolve_seed

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _symmetry_flag(value: str) -> int:
    if value not in ("0", "1"):
        raise InvalidArgumentError(
            f"Incorrect value for symmetry flag: '{value}'. Only two values allowed: "
            f"1 and 0 (for symmetric/not symmetric distance matrix)"
        )
    return int(value)


def build_histogram_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edrnet-histogram",
        description="Build the distance histogram used by the CDR/EDR network models",
    )
    parser.add_argument("matrix", help="Distance matrix as 'row col distance' lines")
    parser.add_argument("nr_nodes", type=int, help="Number of nodes (matrix dimension)")
    parser.add_argument("nr_bins", type=int, help="Number of histogram bins")
    parser.add_argument("symmetric", help="1 = symmetric matrix, 0 = not")
    parser.add_argument("output_dir", help="Directory receiving the three histogram files")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG-level logging")
    return parser


def build_network_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edrnet-network",
        description="Generate a CDR (decay 0) or EDR (decay > 0) random network",
    )
    parser.add_argument("nr_nodes", type=int, help="Number of nodes")
    parser.add_argument("nr_edges", type=int, help="Number of distinct directed edges")
    parser.add_argument("bins", help="Path to distance histogram bins")
    parser.add_argument("hist", help="Path to distance histogram values (counts)")
    parser.add_argument("indices", help="Path to distance histogram node pair indices")
    parser.add_argument("decay", type=float, help="Lambda decay parameter (0 selects CDR)")
    parser.add_argument("output", help="Path of the output edge list")
    parser.add_argument("seed", type=int, nargs="?", default=None, help="RNG seed (default: clock)")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG-level logging")
    return parser


def histogram_main(argv: list[str] | None = None) -> int:
    args = build_histogram_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.nr_bins < 1:
            raise InvalidArgumentError(
                f"Incorrect value for number of bins: {args.nr_bins}. Value must be at least 1."
            )
        is_symmetric = _symmetry_flag(args.symmetric)
        distances = read_distance_matrix(args.matrix, args.nr_nodes)
        histogram = build_distance_histogram(distances, is_symmetric, args.nr_bins)
        save_histogram(histogram, args.output_dir)
    except EDRNetError as exc:
        log.error("%s", exc)
        return 1

    print(
        f"> SUCCESS: Histogram of distance matrix exported to: '{args.output_dir}' "
        f"(distance_bins.txt, distance_hist.txt, distance_indices.txt files)"
    )
    return 0


def network_main(argv: list[str] | None = None) -> int:
    args = build_network_parser().parse_args(argv)
    _configure_logging(args.verbose)

    seed = resolve_seed(args.seed)
    try:
        if args.nr_nodes <= 0:
            raise InvalidArgumentError(
                f"Incorrect value for number of nodes: {args.nr_nodes}. "
                f"Value must be greater than zero."
            )
        if args.nr_edges <= 0:
            raise InvalidArgumentError(
                f"Incorrect value for number of edges: {args.nr_edges}. "
                f"Value must be greater than zero."
            )
        histogram = load_histogram(args.bins, args.hist, args.indices)
        strategy = select_strategy(args.decay, histogram.max_bin)
        edges = generate_network(
            histogram, args.nr_nodes, args.nr_edges, strategy, make_rng(seed)
        )
        write_edge_list(edges, args.output)
    except EDRNetError as exc:
        log.error("%s", exc)
        return 1

    print(
        f"> SUCCESS: {strategy.name} model network with lambda={args.decay:f} "
        f"successfully exported to: '{args.output}' (RNG seed: {seed})"
    )
    return 0


def histogram_entry() -> None:
    sys.exit(histogram_main())


def network_entry() -> None:
    sys.exit(network_main())


if __name__ == "__main__":
    network_entry()
