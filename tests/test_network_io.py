"""Tests for the weighted edge list type, its text format, and validation."""

from pathlib import Path

import numpy as np
import pytest

from edrnet.distance.histogram import build_distance_histogram
from edrnet.errors import InvalidArgumentError, IOFailureError
from edrnet.network.io import read_edge_list, write_edge_list
from edrnet.network.types import WeightedEdgeList
from edrnet.network.validation import edge_distance_profile, validate_network


def _scenario_histogram():
    m = np.zeros((4, 4))
    m[0, 1], m[0, 2], m[0, 3] = 1.0, 2.0, 3.0
    m[1, 2], m[1, 3], m[2, 3] = 1.0, 2.0, 1.0
    return build_distance_histogram(m, True, 3)


def _edges() -> WeightedEdgeList:
    return WeightedEdgeList.from_weights({(2, 1): 1, (0, 3): 4, (1, 0): 2}, nr_nodes=4)


class TestWeightedEdgeList:
    """Finalization and conversions."""

    def test_row_major_order(self) -> None:
        edges = _edges()
        assert edges.pairs() == [(0, 3), (1, 0), (2, 1)]
        assert edges.weights.tolist() == [4, 2, 1]

    def test_len_and_total_weight(self) -> None:
        edges = _edges()
        assert len(edges) == 3
        assert edges.total_weight == 7

    def test_to_csr(self) -> None:
        adj = _edges().to_csr()
        assert adj.shape == (4, 4)
        assert adj.nnz == 3
        assert adj[0, 3] == 4
        assert adj[3, 0] == 0

    def test_as_dict(self) -> None:
        assert _edges().as_dict() == {(0, 3): 4, (1, 0): 2, (2, 1): 1}

    def test_empty(self) -> None:
        edges = WeightedEdgeList.from_weights({}, nr_nodes=2)
        assert len(edges) == 0
        assert edges.total_weight == 0


class TestEdgeListFile:
    """source target weight lines."""

    def test_write_format(self, tmp_path: Path) -> None:
        path = write_edge_list(_edges(), tmp_path / "net" / "edges.txt")
        assert path.read_text() == "0 3 4\n1 0 2\n2 1 1\n"

    def test_read_back(self, tmp_path: Path) -> None:
        path = write_edge_list(_edges(), tmp_path / "edges.txt")
        loaded = read_edge_list(path, 4)
        assert loaded.as_dict() == _edges().as_dict()

    def test_read_rejects_out_of_range(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.txt"
        path.write_text("0 5 1\n")
        with pytest.raises(InvalidArgumentError, match="outside"):
            read_edge_list(path, 4)

    def test_read_rejects_duplicates(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.txt"
        path.write_text("0 1 1\n0 1 2\n")
        with pytest.raises(InvalidArgumentError, match="Duplicate"):
            read_edge_list(path, 4)

    def test_read_rejects_zero_weight(self, tmp_path: Path) -> None:
        path = tmp_path / "edges.txt"
        path.write_text("0 1 0\n")
        with pytest.raises(InvalidArgumentError, match="weight"):
            read_edge_list(path, 4)

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(IOFailureError):
            read_edge_list(tmp_path / "missing.txt", 4)


class TestValidateNetwork:
    """Consistency checks against the histogram."""

    def test_valid_network(self) -> None:
        assert validate_network(_edges(), _scenario_histogram(), 3) == []

    def test_wrong_edge_count(self) -> None:
        errors = validate_network(_edges(), _scenario_histogram(), 5)
        assert any("Expected 5 distinct edges" in e for e in errors)

    def test_self_loop(self) -> None:
        edges = WeightedEdgeList.from_weights({(1, 1): 1}, nr_nodes=4)
        errors = validate_network(edges, _scenario_histogram(), 1)
        assert any("Self-loops" in e for e in errors)

    def test_pair_missing_from_index(self) -> None:
        m = np.zeros((4, 4))
        m[0, 1] = 1.0
        hist = build_distance_histogram(m, True, 2)
        errors = validate_network(_edges(), hist, 3)
        assert any("not present in the distance histogram" in e for e in errors)


class TestEdgeDistanceProfile:
    """Per-bin edge counts."""

    def test_profile(self) -> None:
        profile = edge_distance_profile(_edges(), _scenario_histogram())
        # (0,3) -> bin 2; (1,0) and (2,1) -> bin 0
        assert profile.tolist() == [2, 0, 1, 0]
