"""Reproducibility infrastructure: explicit seeding and code provenance."""

from edrnet.reproducibility.seed import make_rng, resolve_seed, verify_seed_determinism
from edrnet.reproducibility.version import get_code_version

__all__ = [
    "get_code_version",
    "make_rng",
    "resolve_seed",
    "verify_seed_determinism",
]
