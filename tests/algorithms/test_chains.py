import random

import networkx as nx
import pytest

from idxgraph.algorithms.chains import (
    biconnected_components,
    chain_decomposition,
    cut_edges,
    cut_vertices,
    cut_vertices_and_edges,
)


def _random_undirected(n, m, seed):
    """Random simple undirected graph as (adjacency list, nx.Graph)."""
    rng = random.Random(seed)
    G = nx.Graph()
    G.add_nodes_from(range(n))
    while G.number_of_edges() < m:
        u, v = rng.randrange(n), rng.randrange(n)
        if u != v:
            G.add_edge(u, v)
    adjl = [[] for _ in range(n)]
    for u, v in G.edges():
        adjl[u].append(v)
        adjl[v].append(u)
    return adjl, G


class TestChainDecomposition:
    def test_known_decomposition(self, cyc_undir, target):
        assert chain_decomposition(cyc_undir, target) == [
            [[0, 7, 5, 0], [0, 8, 7], [5, 9, 7], [9, 3, 6, 9], [4, 2, 1, 4]],
            [],
            [[13, 15, 14, 13], [15, 17, 16, 15]],
        ]

    def test_empty_graph(self):
        assert chain_decomposition([]) == []

    def test_isolated_vertices_get_empty_trees(self):
        assert chain_decomposition([[], []]) == [[], []]

    def test_parallel_edge_forms_cycle(self):
        """The second copy of a tree edge is a back edge."""
        adjl = [[1, 1], [0, 0, 2], [1]]
        assert chain_decomposition(adjl) == [[[0, 1, 0]]]

    def test_chains_cover_each_edge_once(self, cyc_undir, target):
        """Chain edges and bridges together cover every edge exactly once."""
        edges = []
        for chains in chain_decomposition(cyc_undir, target):
            for chain in chains:
                edges.extend(
                    (min(u, v), max(u, v)) for u, v in zip(chain, chain[1:])
                )
        edges.extend(cut_edges(cyc_undir, target))
        expected = sorted(
            (u, target(e))
            for u, es in enumerate(cyc_undir)
            for e in es
            if u < target(e)
        )
        assert sorted(edges) == expected


class TestCuts:
    def test_cut_vertices(self, cyc_undir, target):
        assert cut_vertices(cyc_undir, target) == [4, 9, 11, 15]

    def test_cut_edges(self, cyc_undir, target):
        assert cut_edges(cyc_undir, target) == [(4, 9), (10, 11), (11, 12)]

    def test_precomputed_decomposition(self, cyc_undir, target):
        decomposition = chain_decomposition(cyc_undir, target)
        assert cut_vertices(cyc_undir, target, decomposition) == [4, 9, 11, 15]
        assert cut_edges(cyc_undir, target, decomposition) == [
            (4, 9),
            (10, 11),
            (11, 12),
        ]

    def test_single_low_point_pass_agrees(self, cyc_undir, target):
        assert cut_vertices_and_edges(cyc_undir, target) == (
            [4, 9, 11, 15],
            [(4, 9), (10, 11), (11, 12)],
        )

    def test_parallel_edges_are_not_bridges(self):
        adjl = [[1, 1], [0, 0, 2], [1]]
        assert cut_edges(adjl) == [(1, 2)]
        assert cut_vertices(adjl) == [1]
        assert cut_vertices_and_edges(adjl) == ([1], [(1, 2)])

    def test_single_edge(self):
        """A lone bridge has no cut vertex: both endpoints have degree one."""
        adjl = [[1], [0]]
        assert cut_edges(adjl) == [(0, 1)]
        assert cut_vertices(adjl) == []
        assert cut_vertices_and_edges(adjl) == ([], [(0, 1)])

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_networkx(self, seed):
        adjl, G = _random_undirected(25, 35, seed)
        expected_cuts = sorted(nx.articulation_points(G))
        expected_bridges = sorted((min(u, v), max(u, v)) for u, v in nx.bridges(G))

        assert cut_vertices(adjl) == expected_cuts
        assert cut_edges(adjl) == expected_bridges
        assert cut_vertices_and_edges(adjl) == (expected_cuts, expected_bridges)


class TestBiconnectedComponents:
    def test_known_components(self, cyc_undir, target):
        components = biconnected_components(cyc_undir, target)
        assert components == [
            [0, 7, 5, 8, 9],
            [9, 3, 6],
            [4, 2, 1],
            [13, 15, 14],
            [15, 17, 16],
        ]

    def test_include_bridges(self, cyc_undir, target):
        components = biconnected_components(cyc_undir, target, include_bridges=True)
        assert components[-3:] == [[4, 9], [10, 11], [11, 12]]
        assert len(components) == 8

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_networkx(self, seed):
        adjl, G = _random_undirected(25, 35, seed)
        components = biconnected_components(adjl, include_bridges=True)
        assert sorted(map(sorted, components)) == sorted(
            map(sorted, nx.biconnected_components(G))
        )
