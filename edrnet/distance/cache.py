"""Histogram caching by config hash and distance-matrix digest.

Caches built histograms to disk so repeated network runs over the same
distance matrix skip the O(n^2) scan. The cache entry holds the usual
histogram triad plus a metadata.json describing where it came from.
"""

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from edrnet.config.experiment import ExperimentConfig
from edrnet.config.hashing import histogram_config_hash
from edrnet.distance.histogram import build_distance_histogram
from edrnet.distance.io import (
    BINS_FILENAME,
    COUNTS_FILENAME,
    INDICES_FILENAME,
    load_histogram,
    read_distance_matrix,
    save_histogram,
)
from edrnet.distance.types import DistanceHistogram
from edrnet.errors import IOFailureError

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/histograms")


def matrix_digest(matrix_path: str | Path) -> str:
    """First 16 hex characters of the SHA-256 of the matrix file contents."""
    try:
        data = Path(matrix_path).read_bytes()
    except OSError as exc:
        raise IOFailureError(
            f"Could not open file with distance matrix '{matrix_path}': {exc}"
        ) from exc
    return hashlib.sha256(data).hexdigest()[:16]


def histogram_cache_key(config: ExperimentConfig) -> str:
    """Compute the cache key for a histogram configuration.

    Key = histogram config hash + digest of the matrix file, so editing the
    matrix in place invalidates the entry. Seed and network parameters
    don't affect the key.

    Returns:
        Cache key string like "a1b2c3d4e5f6a7b8_m0123456789abcdef".
    """
    return f"{histogram_config_hash(config)}_m{matrix_digest(config.histogram.matrix_path)}"


def _cache_path(config: ExperimentConfig, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    return Path(cache_dir) / histogram_cache_key(config)


def save_cached_histogram(
    histogram: DistanceHistogram,
    config: ExperimentConfig,
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Save a histogram and its provenance to the cache.

    Returns:
        Path to the cache directory for this histogram.
    """
    cache_path = _cache_path(config, cache_dir)
    save_histogram(histogram, cache_path)

    metadata = {
        "matrix_path": config.histogram.matrix_path,
        "nr_nodes": config.histogram.nr_nodes,
        "nr_bins": histogram.nr_bins,
        "symmetric": config.histogram.symmetric,
        "bin_width": histogram.bin_width,
        "total_pairs": histogram.total_pairs,
        "config_hash": histogram_config_hash(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        with open(cache_path / "metadata.json", "w") as f:
            json.dump(metadata, f, indent=2)
    except OSError as exc:
        raise IOFailureError(f"Could not write cache metadata in '{cache_path}': {exc}") from exc

    log.info("Histogram cached at %s", cache_path)
    return cache_path


def load_cached_histogram(
    config: ExperimentConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> DistanceHistogram | None:
    """Load a cached histogram if it exists.

    The bin width is taken from metadata.json rather than recomputed from
    the rounded boundaries in the bins file. Unreadable metadata counts as a
    miss, so the entry is rebuilt and overwritten.

    Returns:
        DistanceHistogram on a cache hit, None on a miss.
    """
    cache_path = _cache_path(config, cache_dir)

    required_files = [BINS_FILENAME, COUNTS_FILENAME, INDICES_FILENAME, "metadata.json"]
    for fname in required_files:
        if not (cache_path / fname).exists():
            return None

    try:
        with open(cache_path / "metadata.json") as f:
            bin_width = float(json.load(f)["bin_width"])
    except (OSError, ValueError, KeyError, TypeError) as exc:
        log.warning("Ignoring unreadable cache metadata in %s: %s", cache_path, exc)
        return None

    histogram = load_histogram(
        cache_path / BINS_FILENAME,
        cache_path / COUNTS_FILENAME,
        cache_path / INDICES_FILENAME,
    )

    log.info("Histogram loaded from cache: %s", cache_path)
    return DistanceHistogram(
        bins=histogram.bins,
        counts=histogram.counts,
        pairs=histogram.pairs,
        bin_width=bin_width,
    )


def generate_or_load_histogram(
    config: ExperimentConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> DistanceHistogram:
    """Build a histogram or load it from cache if available.

    On cache miss: reads the distance matrix, builds, saves to cache.
    On cache hit: loads from disk without touching the matrix scan.
    """
    key = histogram_cache_key(config)

    cached = load_cached_histogram(config, cache_dir)
    if cached is not None:
        log.info("Cache hit for %s", key)
        return cached

    log.info("Cache miss for %s, building...", key)
    matrix = read_distance_matrix(config.histogram.matrix_path, config.histogram.nr_nodes)
    histogram = build_distance_histogram(
        matrix, config.histogram.symmetric, config.histogram.nr_bins
    )
    save_cached_histogram(histogram, config, cache_dir)
    return histogram
