"""Network generation: bin lookup, distance rules, sampling, and edge-list I/O."""

from edrnet.network.io import read_edge_list, write_edge_list
from edrnet.network.locator import NOT_FOUND, locate_bin
from edrnet.network.sampler import (
    check_preconditions,
    generate_network,
    reachable_bins,
    realizable_edge_count,
)
from edrnet.network.strategy import (
    ConstantDistanceRule,
    DistanceDrawStrategy,
    ExponentialDistanceRule,
    select_strategy,
)
from edrnet.network.types import WeightedEdgeList
from edrnet.network.validation import edge_distance_profile, validate_network

__all__ = [
    "NOT_FOUND",
    "ConstantDistanceRule",
    "DistanceDrawStrategy",
    "ExponentialDistanceRule",
    "WeightedEdgeList",
    "check_preconditions",
    "edge_distance_profile",
    "generate_network",
    "locate_bin",
    "reachable_bins",
    "read_edge_list",
    "realizable_edge_count",
    "select_strategy",
    "validate_network",
    "write_edge_list",
]
