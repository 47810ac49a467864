"""Run configuration system with frozen, hashable, serializable dataclasses."""

from edrnet.config.defaults import ANCHOR_CONFIG, ANCHOR_EDR_CONFIG
from edrnet.config.experiment import ExperimentConfig, HistogramConfig, NetworkConfig
from edrnet.config.hashing import config_hash, full_config_hash, histogram_config_hash
from edrnet.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "ANCHOR_CONFIG",
    "ANCHOR_EDR_CONFIG",
    "ExperimentConfig",
    "HistogramConfig",
    "NetworkConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "full_config_hash",
    "histogram_config_hash",
]
