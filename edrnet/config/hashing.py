"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from edrnet.config.experiment import ExperimentConfig


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional top-level field names to leave out.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    for name in exclude_fields or ():
        d.pop(name, None)
    serialized = json.dumps(
        d,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def histogram_config_hash(config: ExperimentConfig) -> str:
    """Hash for histogram caching over config.histogram only.

    The histogram does not depend on the seed or on any network parameter,
    so runs that differ only in those share one cached histogram.
    """
    return config_hash(config.histogram)


def full_config_hash(config: ExperimentConfig) -> str:
    """Hash for full run identity, seed included."""
    return config_hash(config)
