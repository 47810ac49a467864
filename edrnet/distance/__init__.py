"""Distance matrix input and histogram construction with an inverted pair index."""

from edrnet.distance.cache import (
    generate_or_load_histogram,
    histogram_cache_key,
    load_cached_histogram,
    save_cached_histogram,
)
from edrnet.distance.histogram import bin_indices, build_distance_histogram, scan_pairs
from edrnet.distance.io import (
    load_histogram,
    read_distance_matrix,
    save_histogram,
    write_distance_matrix,
)
from edrnet.distance.types import DistanceHistogram, NodePair

__all__ = [
    "DistanceHistogram",
    "NodePair",
    "bin_indices",
    "build_distance_histogram",
    "generate_or_load_histogram",
    "histogram_cache_key",
    "load_cached_histogram",
    "load_histogram",
    "read_distance_matrix",
    "save_cached_histogram",
    "save_histogram",
    "scan_pairs",
    "write_distance_matrix",
]
