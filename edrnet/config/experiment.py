"""Experiment configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

from edrnet.errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class HistogramConfig:
    """Distance histogram parameters."""

    matrix_path: str = "distances.txt"  # sparse "row col distance" text file
    nr_nodes: int = 29  # matrix dimension
    nr_bins: int = 20
    symmetric: bool = True  # scan row < col only


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Edge sampling parameters."""

    nr_nodes: int = 29
    nr_edges: int = 536  # distinct directed edges to place
    decay: float = 0.0  # 0 -> CDR, > 0 -> EDR with this rate


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration composing histogram and network sub-configs.

    A seed of None means "derive one from the clock at run time"; the
    resolved seed is recorded with the results. Cross-parameter validation
    runs in __post_init__ to reject invalid configurations early.
    """

    histogram: HistogramConfig = field(default_factory=HistogramConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    seed: int | None = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.histogram.nr_nodes <= 0:
            raise InvalidArgumentError(
                f"histogram.nr_nodes ({self.histogram.nr_nodes}) must be > 0"
            )
        if self.histogram.nr_bins < 1:
            raise InvalidArgumentError(
                f"histogram.nr_bins ({self.histogram.nr_bins}) must be >= 1"
            )
        if self.network.nr_nodes <= 0:
            raise InvalidArgumentError(
                f"network.nr_nodes ({self.network.nr_nodes}) must be > 0"
            )
        if self.network.nr_edges <= 0:
            raise InvalidArgumentError(
                f"network.nr_edges ({self.network.nr_edges}) must be > 0"
            )
        if self.network.decay < 0:
            raise InvalidArgumentError(
                f"network.decay ({self.network.decay}) must be >= 0"
            )
        if self.network.nr_nodes != self.histogram.nr_nodes:
            raise InvalidArgumentError(
                f"network.nr_nodes ({self.network.nr_nodes}) must equal "
                f"histogram.nr_nodes ({self.histogram.nr_nodes})"
            )
        max_edges = self.network.nr_nodes * (self.network.nr_nodes - 1)
        if self.network.nr_edges > max_edges:
            raise InvalidArgumentError(
                f"network.nr_edges ({self.network.nr_edges}) exceeds the "
                f"{max_edges} directed pairs of {self.network.nr_nodes} nodes"
            )

    @property
    def model_name(self) -> str:
        """'CDR' for a zero decay, 'EDR' otherwise."""
        return "CDR" if self.network.decay == 0.0 else "EDR"
