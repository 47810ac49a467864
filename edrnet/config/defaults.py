"""Anchor configuration: single source of truth for default run parameters."""

from edrnet.config.experiment import ExperimentConfig, NetworkConfig

# 29-area interareal network: 536 directed edges, 20 distance bins, seed 42.
ANCHOR_CONFIG = ExperimentConfig()

# Same network size with the exponential distance rule (lambda = 0.19 / mm).
ANCHOR_EDR_CONFIG = ExperimentConfig(network=NetworkConfig(decay=0.19))
