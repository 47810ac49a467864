"""Result schema validation, writing, and run ID generation."""

from edrnet.results.run_id import generate_run_id
from edrnet.results.schema import build_result, load_result, validate_result, write_result

__all__ = [
    "build_result",
    "generate_run_id",
    "load_result",
    "validate_result",
    "write_result",
]
