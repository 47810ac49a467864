"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields
and types before writing result.json files.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from edrnet.config.experiment import ExperimentConfig
from edrnet.config.hashing import full_config_hash, histogram_config_hash
from edrnet.distance.types import DistanceHistogram
from edrnet.errors import IOFailureError
from edrnet.network.types import WeightedEdgeList
from edrnet.network.validation import edge_distance_profile
from edrnet.reproducibility.version import get_code_version

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "metadata",
    "metrics",
}

REQUIRED_METRICS_FIELDS = {"nr_edges", "total_weight", "edge_profile"}


def build_result(
    run_id: str,
    config: ExperimentConfig,
    seed: int,
    histogram: DistanceHistogram,
    edges: WeightedEdgeList,
) -> dict[str, Any]:
    """Assemble the result dict for one generation run."""
    profile = edge_distance_profile(edges, histogram)
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "metadata": {
            "model": config.model_name,
            "seed": seed,
            "code_version": get_code_version(),
            "config_hash": full_config_hash(config),
            "histogram_hash": histogram_config_hash(config),
        },
        "metrics": {
            "nr_edges": len(edges),
            "total_weight": edges.total_weight,
            "max_weight": int(edges.weights.max()) if len(edges) else 0,
            "bins": histogram.bins.tolist(),
            "histogram_counts": histogram.counts.tolist(),
            "edge_profile": profile.tolist(),
        },
    }


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metadata = result.get("metadata")
    if metadata is not None and (not isinstance(metadata, dict) or "seed" not in metadata):
        errors.append("metadata.seed is required")

    metrics = result.get("metrics")
    if metrics is not None:
        if not isinstance(metrics, dict):
            errors.append("metrics must be a dict")
        else:
            missing_metrics = REQUIRED_METRICS_FIELDS - set(metrics.keys())
            if missing_metrics:
                errors.append(f"Missing metrics fields: {sorted(missing_metrics)}")
            elif sum(metrics["edge_profile"]) > metrics["nr_edges"]:
                errors.append("metrics.edge_profile sums to more than metrics.nr_edges")

    return errors


def _to_builtin(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_result(result: dict[str, Any], output_dir: str | Path) -> Path:
    """Validate and write result.json into output_dir.

    Raises:
        ValueError: If the result fails validation.
        IOFailureError: If the file cannot be written.
    """
    errors = validate_result(result)
    if errors:
        raise ValueError(f"Invalid result: {'; '.join(errors)}")

    path = Path(output_dir) / "result.json"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(result, f, indent=2, default=_to_builtin)
    except OSError as exc:
        raise IOFailureError(f"Could not write result '{path}': {exc}") from exc
    return path


def load_result(path: str | Path) -> dict[str, Any]:
    """Load a result.json file (or the result.json inside a run directory)."""
    path = Path(path)
    if path.is_dir():
        path = path / "result.json"
    with open(path) as f:
        return json.load(f)
