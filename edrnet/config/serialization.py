"""JSON serialization and deserialization for experiment configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict
from dacite.exceptions import DaciteError

from edrnet.config.experiment import ExperimentConfig
from edrnet.errors import InvalidArgumentError

_DACITE_CONFIG = DaciteConfig(cast=[tuple, float], check_types=True, strict=True)


def config_to_json(config: ExperimentConfig) -> str:
    """Serialize an ExperimentConfig to a JSON string (sorted keys, 2-space indent)."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> ExperimentConfig:
    """Deserialize a JSON string to an ExperimentConfig.

    Uses dacite with strict=True to reject unknown keys and cast=[tuple, float]
    to turn JSON arrays back into tuples and integer literals into floats.
    Malformed JSON and schema mismatches are reported as InvalidArgumentError.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise InvalidArgumentError(f"Config is not valid JSON: {exc}") from exc
    return config_from_dict(data)


def config_to_dict(config: ExperimentConfig) -> dict[str, Any]:
    """Convert an ExperimentConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> ExperimentConfig:
    """Reconstruct an ExperimentConfig from a plain dictionary."""
    try:
        return from_dict(data_class=ExperimentConfig, data=d, config=_DACITE_CONFIG)
    except DaciteError as exc:
        raise InvalidArgumentError(f"Config does not match schema: {exc}") from exc
