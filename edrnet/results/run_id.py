"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from edrnet.config.experiment import ExperimentConfig


def generate_run_id(config: ExperimentConfig, seed: int) -> str:
    """Generate a scannable run ID from config parameters.

    Format: {model}_n{nr_nodes}_e{nr_edges}_b{nr_bins}_lam{decay}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: EDR_n29_e536_b20_lam0.19_s42_20260224_143012

    The seed is passed explicitly because the config may leave it unset.
    """
    ts = datetime.now(timezone.utc)
    return (
        f"{config.model_name}"
        f"_n{config.network.nr_nodes}"
        f"_e{config.network.nr_edges}"
        f"_b{config.histogram.nr_bins}"
        f"_lam{config.network.decay:g}"
        f"_s{seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
