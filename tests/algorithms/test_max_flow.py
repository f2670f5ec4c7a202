import logging
import random
from fractions import Fraction

import networkx as nx
import pytest

from idxgraph.algorithms.max_flow import DinicFlow, PushRelabelFlow
from idxgraph.algorithms.types import FlowSummary

INF = 1_000_000
ENGINES = [DinicFlow, PushRelabelFlow]


def _all_pairs(engine):
    n = engine.n
    return [[engine.calc_max_flow(i, j) for j in range(n)] for i in range(n)]


def _random_matrix(n, seed, density=0.4):
    rng = random.Random(seed)
    return [
        [
            rng.randint(1, 20) if i != j and rng.random() < density else 0
            for j in range(n)
        ]
        for i in range(n)
    ]


def _check_flow(engine, source, sink, value):
    """Flow obeys capacities, is conserved, and leaves the source as ``value``."""
    n = engine.n
    flow = engine.flow
    for i in range(n):
        for j in range(n):
            assert 0 <= flow[i][j] <= engine.cap[i][j]
    for v in range(n):
        net_out = sum(flow[v]) - sum(flow[u][v] for u in range(n))
        if v == source:
            assert net_out == value
        elif v == sink:
            assert net_out == -value
        else:
            assert net_out == 0


@pytest.mark.parametrize("engine_cls", ENGINES)
class TestAllPairs:
    def test_single_vertex(self, engine_cls):
        assert _all_pairs(engine_cls([[0]], INF)) == [[0]]

    def test_two_vertices(self, engine_cls):
        assert _all_pairs(engine_cls([[0, 5], [7, 0]], INF)) == [[0, 5], [7, 0]]

    def test_three_vertices(self, engine_cls):
        engine = engine_cls([[0, 3, 5], [0, 0, 2], [0, 0, 0]], INF)
        assert _all_pairs(engine) == [[0, 3, 7], [0, 0, 2], [0, 0, 0]]

    def test_float_capacities(self, engine_cls):
        engine = engine_cls([[0.0, 5.0, 2.0], [7.0, 0.0, 4.0], [1.0, 3.0, 0.0]], 1e6)
        result = _all_pairs(engine)
        expected = [[0, 7, 6], [8, 0, 6], [4, 4, 0]]
        for row, expected_row in zip(result, expected):
            assert row == pytest.approx(expected_row)


@pytest.mark.parametrize("engine_cls", ENGINES)
class TestFlowState:
    def test_flow_matrix(self, engine_cls):
        engine = engine_cls([[0, 3, 5], [0, 0, 2], [0, 0, 0]], INF)
        assert engine.calc_max_flow(0, 2) == 7
        assert engine.flow == [[0, 2, 5], [0, 0, 2], [0, 0, 0]]

    def test_capacities_untouched(self, engine_cls):
        capacities = [[0, 3, 5], [0, 0, 2], [0, 0, 0]]
        engine = engine_cls(capacities, INF)
        engine.calc_max_flow(0, 2)
        assert engine.cap == capacities
        assert capacities == [[0, 3, 5], [0, 0, 2], [0, 0, 0]]

    def test_repeated_calls_are_independent(self, engine_cls):
        capacities = _random_matrix(8, seed=3)
        engine = engine_cls(capacities, INF)
        first = engine.calc_max_flow(0, 7)
        engine.calc_max_flow(7, 0)
        engine.calc_max_flow(3, 5)
        assert engine.calc_max_flow(0, 7) == first
        assert engine_cls(capacities, INF).calc_max_flow(0, 7) == first

    def test_source_equals_sink(self, engine_cls):
        engine = engine_cls([[0, 4], [4, 0]], INF)
        assert engine.calc_max_flow(1, 1) == 0
        assert engine.flow == [[0, 0], [0, 0]]

    def test_antiparallel_edges(self, engine_cls):
        engine = engine_cls([[0, 4, 0], [3, 0, 2], [0, 0, 0]], INF)
        assert engine.calc_max_flow(0, 2) == 2
        _check_flow(engine, 0, 2, 2)

    def test_fraction_capacities(self, engine_cls):
        third = Fraction(1, 3)
        capacities = [
            [0, third, Fraction(1, 2)],
            [0, 0, third],
            [0, 0, 0],
        ]
        engine = engine_cls(capacities, Fraction(INF))
        value = engine.calc_max_flow(0, 2)
        assert value == Fraction(5, 6)
        assert isinstance(value, Fraction)
        _check_flow(engine, 0, 2, value)

    def test_non_square_matrix(self, engine_cls):
        with pytest.raises(ValueError, match="square"):
            engine_cls([[0, 1], [0]], INF)

    @pytest.mark.parametrize("seed", range(6))
    def test_matches_networkx(self, engine_cls, seed):
        capacities = _random_matrix(10, seed)
        G = nx.DiGraph()
        G.add_nodes_from(range(10))
        for i, row in enumerate(capacities):
            for j, c in enumerate(row):
                if c:
                    G.add_edge(i, j, capacity=c)

        engine = engine_cls(capacities, INF)
        for source, sink in [(0, 9), (9, 0), (2, 7), (5, 1)]:
            value = engine.calc_max_flow(source, sink)
            assert value == nx.maximum_flow_value(G, source, sink)
            _check_flow(engine, source, sink, value)


@pytest.mark.parametrize("engine_cls", ENGINES)
class TestSummary:
    def test_min_cut(self, engine_cls):
        engine = engine_cls([[0, 3, 5], [0, 0, 2], [0, 0, 0]], INF)
        engine.calc_max_flow(0, 2)
        summary = engine.summary()

        assert isinstance(summary, FlowSummary)
        assert (summary.source, summary.sink) == (0, 2)
        assert summary.total_flow == 7
        assert summary.edge_flow == [[0, 2, 5], [0, 0, 2], [0, 0, 0]]
        assert summary.reachable == [0, 1]
        assert summary.min_cut == [(0, 2), (1, 2)]

    @pytest.mark.parametrize("seed", range(4))
    def test_cut_capacity_equals_flow(self, engine_cls, seed):
        capacities = _random_matrix(10, seed)
        engine = engine_cls(capacities, INF)
        value = engine.calc_max_flow(0, 9)
        summary = engine.summary()

        assert 0 in summary.reachable
        assert 9 not in summary.reachable
        assert sum(capacities[u][v] for u, v in summary.min_cut) == value

    def test_summary_is_a_snapshot(self, engine_cls):
        engine = engine_cls([[0, 3, 5], [0, 0, 2], [0, 0, 0]], INF)
        engine.calc_max_flow(0, 2)
        summary = engine.summary()
        engine.calc_max_flow(0, 1)
        assert summary.total_flow == 7
        assert summary.edge_flow[0][2] == 5

    def test_summary_before_computation(self, engine_cls):
        with pytest.raises(RuntimeError):
            engine_cls([[0, 1], [0, 0]], INF).summary()


def test_debug_log_reports_result(caplog):
    engine = DinicFlow([[0, 3, 5], [0, 0, 2], [0, 0, 0]], INF)
    with caplog.at_level(logging.DEBUG, logger="idxgraph"):
        engine.calc_max_flow(0, 2)
    assert "DinicFlow: max flow 0 -> 2 is 7" in caplog.text
