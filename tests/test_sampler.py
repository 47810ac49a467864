"""Tests for histogram-driven network sampling (CDR and EDR)."""

from collections import deque

import numpy as np
import pytest

from edrnet.distance.histogram import build_distance_histogram
from edrnet.distance.types import DistanceHistogram
from edrnet.errors import InvalidArgumentError, SamplingExhaustedError
from edrnet.network.sampler import (
    check_preconditions,
    generate_network,
    reachable_bins,
    realizable_edge_count,
)
from edrnet.network.strategy import (
    ConstantDistanceRule,
    ExponentialDistanceRule,
    select_strategy,
)
from edrnet.network.types import WeightedEdgeList
from edrnet.network.validation import validate_network


def _scenario_histogram() -> DistanceHistogram:
    m = np.zeros((4, 4))
    m[0, 1], m[0, 2], m[0, 3] = 1.0, 2.0, 3.0
    m[1, 2], m[1, 3], m[2, 3] = 1.0, 2.0, 1.0
    return build_distance_histogram(m, True, 3)


def _line_histogram(n: int = 30) -> tuple[DistanceHistogram, np.ndarray]:
    """Nodes on a line at positions 0..n-1; distance |i - j|, unit-width bins."""
    pos = np.arange(n, dtype=np.float64)
    m = np.abs(pos[:, None] - pos[None, :])
    return build_distance_histogram(m, True, n - 1), m


class ScriptedRng:
    """Stand-in generator returning scripted values and logging each call."""

    def __init__(self, uniforms: list[float], integers: list[int]) -> None:
        self._uniforms = deque(uniforms)
        self._integers = deque(integers)
        self.calls: list[tuple] = []

    def random(self) -> float:
        self.calls.append(("random",))
        return self._uniforms.popleft()

    def integers(self, low: int, high: int) -> int:
        self.calls.append(("integers", int(low), int(high)))
        return self._integers.popleft()

    def exponential(self, scale: float) -> float:
        self.calls.append(("exponential", scale))
        return self._uniforms.popleft()


class TestScenarioNetwork:
    """The 4-node histogram with nr_edges=3, CDR, seed 42."""

    def test_exactly_three_edges(self) -> None:
        hist = _scenario_histogram()
        strategy = select_strategy(0.0, hist.max_bin)
        edges = generate_network(hist, 4, 3, strategy, np.random.default_rng(42))
        assert isinstance(edges, WeightedEdgeList)
        assert len(edges) == 3
        assert (edges.weights >= 1).all()

    def test_edges_come_from_index(self) -> None:
        hist = _scenario_histogram()
        strategy = select_strategy(0.0, hist.max_bin)
        edges = generate_network(hist, 4, 3, strategy, np.random.default_rng(42))
        undirected = {pair for bucket in hist.pairs for pair in bucket}
        for s, t in edges.pairs():
            assert (s, t) in undirected or (t, s) in undirected
        assert validate_network(edges, hist, 3) == []

    def test_every_directed_pair(self) -> None:
        hist = _scenario_histogram()
        strategy = select_strategy(0.0, hist.max_bin)
        edges = generate_network(hist, 4, 12, strategy, np.random.default_rng(42))
        assert len(edges) == 12
        assert set(edges.pairs()) == {(i, j) for i in range(4) for j in range(4) if i != j}


class TestSamplingLoop:
    """Draw order, retries and weight accumulation with a scripted generator."""

    def test_draw_order_and_direction_flip(self) -> None:
        hist = _scenario_histogram()
        rng = ScriptedRng(uniforms=[0.1], integers=[1, 1])
        edges = generate_network(hist, 4, 1, ConstantDistanceRule(hist.max_bin), rng)
        # 0.1 * 3 = 0.3 -> bin 0 -> pair (1, 2) -> flipped
        assert edges.as_dict() == {(2, 1): 1}
        assert rng.calls == [("random",), ("integers", 0, 3), ("integers", 0, 2)]

    def test_unlocatable_draw_is_retried(self) -> None:
        hist = _scenario_histogram()
        rng = ScriptedRng(uniforms=[0.0, 0.5], integers=[0, 0])
        edges = generate_network(hist, 4, 1, ConstantDistanceRule(hist.max_bin), rng)
        # 0.0 is not inside any bin; 1.5 -> bin 1 -> (0, 2)
        assert edges.as_dict() == {(0, 2): 1}
        assert rng.calls[0] == ("random",)
        assert rng.calls[1] == ("random",)

    def test_empty_bin_is_retried(self) -> None:
        m = np.zeros((3, 3))
        m[0, 1], m[0, 2] = 1.0, 3.0
        hist = build_distance_histogram(m, True, 3)
        assert hist.counts.tolist() == [1, 0, 1, 0]
        rng = ScriptedRng(uniforms=[0.5, 0.9], integers=[0, 0])
        edges = generate_network(hist, 3, 1, ConstantDistanceRule(hist.max_bin), rng)
        # 1.5 lands in empty bin 1, then 2.7 -> bin 2 -> (0, 2)
        assert edges.as_dict() == {(0, 2): 1}

    def test_repeated_pair_increases_weight(self) -> None:
        hist = _scenario_histogram()
        rng = ScriptedRng(uniforms=[0.1, 0.1, 0.1], integers=[0, 0, 0, 0, 0, 1])
        edges = generate_network(hist, 4, 2, ConstantDistanceRule(hist.max_bin), rng)
        assert edges.pairs() == [(0, 1), (1, 0)]
        assert edges.weights.tolist() == [2, 1]
        assert edges.total_weight == 3

    def test_exponential_rule_draws_first(self) -> None:
        hist = _scenario_histogram()
        rng = ScriptedRng(uniforms=[2.5], integers=[0, 0])
        edges = generate_network(hist, 4, 1, ExponentialDistanceRule(rate=2.0), rng)
        assert edges.as_dict() == {(0, 3): 1}
        assert rng.calls[0] == ("exponential", 0.5)


class TestDeterminism:
    """Seeded runs are reproducible."""

    @pytest.mark.parametrize("decay", [0.0, 0.3])
    def test_same_seed_same_network(self, decay: float) -> None:
        hist, _ = _line_histogram()
        strategy = select_strategy(decay, hist.max_bin)
        e1 = generate_network(hist, 30, 80, strategy, np.random.default_rng(42))
        e2 = generate_network(hist, 30, 80, strategy, np.random.default_rng(42))
        assert np.array_equal(e1.sources, e2.sources)
        assert np.array_equal(e1.targets, e2.targets)
        assert np.array_equal(e1.weights, e2.weights)

    def test_different_seed_different_network(self) -> None:
        hist, _ = _line_histogram()
        strategy = select_strategy(0.0, hist.max_bin)
        e1 = generate_network(hist, 30, 80, strategy, np.random.default_rng(1))
        e2 = generate_network(hist, 30, 80, strategy, np.random.default_rng(2))
        assert e1.as_dict() != e2.as_dict()


class TestDistanceRules:
    """EDR concentrates edges at short distances compared with CDR."""

    def test_edr_prefers_short_edges(self) -> None:
        hist, m = _line_histogram()
        cdr = generate_network(
            hist, 30, 60, select_strategy(0.0, hist.max_bin), np.random.default_rng(5)
        )
        edr = generate_network(
            hist, 30, 60, select_strategy(0.5, hist.max_bin), np.random.default_rng(5)
        )
        cdr_mean = m[cdr.sources, cdr.targets].mean()
        edr_mean = m[edr.sources, edr.targets].mean()
        assert edr_mean < cdr_mean / 2

    def test_edges_within_drawn_bin(self) -> None:
        hist, m = _line_histogram()
        edges = generate_network(
            hist, 30, 100, select_strategy(0.2, hist.max_bin), np.random.default_rng(9)
        )
        assert validate_network(edges, hist, 100) == []
        assert (m[edges.sources, edges.targets] > 0).all()


class TestPreconditions:
    """Inputs the loop could not finish on are rejected up front."""

    @pytest.mark.parametrize("nr_nodes, nr_edges", [(0, 3), (-1, 3), (4, 0), (4, -2)])
    def test_non_positive_counts(self, nr_nodes: int, nr_edges: int) -> None:
        hist = _scenario_histogram()
        with pytest.raises(InvalidArgumentError, match="greater than zero"):
            generate_network(
                hist, nr_nodes, nr_edges, ConstantDistanceRule(3.0), np.random.default_rng(0)
            )

    def test_all_empty_histogram_is_precondition_violation(self) -> None:
        hist = build_distance_histogram(np.zeros((4, 4)), True, 3)
        with pytest.raises(InvalidArgumentError, match="never terminate"):
            generate_network(
                hist, 4, 1, ConstantDistanceRule(hist.max_bin), np.random.default_rng(0)
            )

    def test_too_many_edges(self) -> None:
        hist = _scenario_histogram()
        with pytest.raises(InvalidArgumentError, match="only provides 12"):
            generate_network(
                hist, 4, 13, ConstantDistanceRule(hist.max_bin), np.random.default_rng(0)
            )

    def test_node_outside_range(self) -> None:
        hist = _scenario_histogram()
        with pytest.raises(InvalidArgumentError, match="references node 3"):
            check_preconditions(hist, 3, 1, ConstantDistanceRule(hist.max_bin))

    def test_constant_rule_cannot_reach_negative_bins(self) -> None:
        m = np.zeros((3, 3))
        m[0, 1], m[0, 2] = -4.0, -2.0
        hist = build_distance_histogram(m, True, 4)
        assert hist.total_pairs == 2
        assert reachable_bins(hist, ConstantDistanceRule(hist.max_bin)) == []
        with pytest.raises(InvalidArgumentError, match="never terminate"):
            check_preconditions(hist, 3, 1, ConstantDistanceRule(hist.max_bin))

    def test_realizable_edge_count(self) -> None:
        hist = _scenario_histogram()
        assert realizable_edge_count(hist, [0]) == 6
        assert realizable_edge_count(hist, [0, 1, 2]) == 12

    def test_draw_budget(self) -> None:
        hist = _scenario_histogram()
        with pytest.raises(SamplingExhaustedError, match="within 1 draws"):
            generate_network(
                hist,
                4,
                3,
                ConstantDistanceRule(hist.max_bin),
                np.random.default_rng(0),
                max_draws=1,
            )
