"""Distance drawing rules for the CDR and EDR network models.

CDR (constant distance rule): distances uniform over [0, max_distance).
EDR (exponential distance rule): distances exponential, p(d) ~ exp(-rate * d).
"""

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from edrnet.errors import InvalidArgumentError


class DistanceDrawStrategy(Protocol):
    """Draws one candidate distance per call from the supplied generator."""

    name: str

    @property
    def upper_bound(self) -> float: ...

    def draw(self, rng: np.random.Generator) -> float: ...


@dataclass(frozen=True, slots=True)
class ConstantDistanceRule:
    """Uniform draw over [0, max_distance)."""

    max_distance: float
    name: str = "CDR"

    @property
    def upper_bound(self) -> float:
        return self.max_distance

    def draw(self, rng: np.random.Generator) -> float:
        return float(rng.random()) * self.max_distance


@dataclass(frozen=True, slots=True)
class ExponentialDistanceRule:
    """Exponential draw with decay rate `rate` (mean 1 / rate)."""

    rate: float
    name: str = "EDR"

    @property
    def upper_bound(self) -> float:
        return math.inf

    def __post_init__(self) -> None:
        if not self.rate > 0:
            raise InvalidArgumentError(
                f"Exponential decay rate must be > 0, got {self.rate}"
            )

    def draw(self, rng: np.random.Generator) -> float:
        return float(rng.exponential(1.0 / self.rate))


def select_strategy(decay: float, max_distance: float) -> DistanceDrawStrategy:
    """Pick the drawing rule for a decay parameter.

    Args:
        decay: 0 selects the constant rule, > 0 the exponential rule.
        max_distance: Upper end of the constant rule's range, normally the
            histogram's last boundary.

    Raises:
        InvalidArgumentError: If decay is negative.
    """
    if decay < 0:
        raise InvalidArgumentError(
            f"Incorrect value for lambda decay parameter: {decay}. "
            f"Value must be greater or equal than zero."
        )
    if decay == 0.0:
        return ConstantDistanceRule(max_distance=max_distance)
    return ExponentialDistanceRule(rate=decay)
