#!/usr/bin/env python3
"""Entry point for running CDR/EDR network generation from a config file.

Chains the pipeline stages into a single executable command:
distance histogram (built or loaded from cache) -> network sampling ->
validation -> edge list and result.json.

Usage:
    python run_experiment.py --config config.json
    python run_experiment.py --config config.json --dry-run
    python run_experiment.py --config config.json --verbose
"""

import argparse
import logging
import shutil
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from edrnet.config import config_from_json, full_config_hash, histogram_config_hash
from edrnet.config.experiment import ExperimentConfig
from edrnet.errors import EDRNetError
from edrnet.reproducibility import resolve_seed

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(
    config: ExperimentConfig,
    config_path: Path | None = None,
    results_dir: str | Path = "results",
    cache_dir: str | Path = ".cache/histograms",
) -> Path:
    """Execute the full generation pipeline.

    Args:
        config: Parsed run configuration.
        config_path: Original config file, copied into the output directory.
        results_dir: Base directory for results output.
        cache_dir: Histogram cache directory.

    Returns:
        Path to the output directory.
    """
    from edrnet.distance import generate_or_load_histogram
    from edrnet.network import (
        generate_network,
        select_strategy,
        validate_network,
        write_edge_list,
    )
    from edrnet.reproducibility import get_code_version, make_rng
    from edrnet.results import build_result, generate_run_id, write_result

    pipeline_start = time.monotonic()

    seed = resolve_seed(config.seed)
    run_id = generate_run_id(config, seed)
    output_dir = Path(results_dir) / run_id
    output_dir.mkdir(parents=True, exist_ok=True)

    log.info("Seed: %d", seed)
    log.info("Code version: %s", get_code_version())
    log.info("Output directory: %s", output_dir)

    # ── Stage 1: Distance Histogram ────────────────────────────────
    with stage_timer("Distance Histogram"):
        histogram = generate_or_load_histogram(config, Path(cache_dir))
        log.info(
            "Histogram: %d bins, %d pairs, width=%.6f",
            histogram.nr_bins, histogram.total_pairs, histogram.bin_width,
        )

    # ── Stage 2: Network Generation ────────────────────────────────
    with stage_timer(f"{config.model_name} Network Generation"):
        strategy = select_strategy(config.network.decay, histogram.max_bin)
        edges = generate_network(
            histogram,
            config.network.nr_nodes,
            config.network.nr_edges,
            strategy,
            make_rng(seed),
        )

    # ── Stage 3: Validation ────────────────────────────────────────
    with stage_timer("Validation"):
        errors = validate_network(edges, histogram, config.network.nr_edges)
        for error in errors:
            log.warning("Validation: %s", error)
        if not errors:
            log.info("Network passed all checks")

    # ── Stage 4: Outputs ───────────────────────────────────────────
    with stage_timer("Write Outputs"):
        edges_path = write_edge_list(edges, output_dir / "edges.txt")
        result = build_result(run_id, config, seed, histogram, edges)
        result["metadata"]["validation_errors"] = errors
        result_path = write_result(result, output_dir)
        if config_path is not None:
            shutil.copy2(str(config_path), str(output_dir / "config.json"))

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Pipeline complete in {total_elapsed:.1f}s")
    print(f"  Run:     {run_id}")
    print(f"  Edges:   {edges_path} ({len(edges)} edges, total weight {edges.total_weight})")
    print(f"  Result:  {result_path}")
    print(f"  Checks:  {'PASSED' if not errors else f'{len(errors)} FAILED'}")
    print(f"{'=' * 60}")

    return output_dir


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a CDR/EDR spatial random network"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to run config JSON file",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default="results",
        help="Base directory for run outputs",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show pipeline plan without running",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = config_from_json(config_path.read_text())
    except EDRNetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Config hash:    {full_config_hash(config)}")
    print(f"Histogram hash: {histogram_config_hash(config)}")
    print()
    print(f"Histogram: matrix={config.histogram.matrix_path}, "
          f"nr_nodes={config.histogram.nr_nodes}, nr_bins={config.histogram.nr_bins}, "
          f"symmetric={config.histogram.symmetric}")
    print(f"Network:   model={config.model_name}, nr_edges={config.network.nr_edges}, "
          f"decay={config.network.decay}")
    print(f"Seed:      {config.seed if config.seed is not None else 'clock'}")

    if args.dry_run:
        print("\nPipeline plan:")
        print("  1. Distance histogram: load from cache or build from matrix")
        print(f"  2. {config.model_name} network generation: "
              f"{config.network.nr_edges} distinct directed edges")
        print("  3. Validation against the histogram's pair index")
        print(f"\nOutput: {args.results_dir}/<run_id>/")
        print("  - edges.txt")
        print("  - result.json")
        print("  - config.json (copy)")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config, config_path, args.results_dir)
    except EDRNetError:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
