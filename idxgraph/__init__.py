"""idxgraph: graph algorithms over index-based adjacency lists.

Graphs are plain Python lists: ``adjl[u]`` holds the edges leaving vertex
``u`` and an accessor callable maps an edge to its target index, so edges
can be bare indices, ``(target, weight)`` pairs or any other payload.

Primary API:
    topological_sort(), tarjan_scc() - ordering and strong connectivity
    chain_decomposition(), cut_vertices(), cut_edges() - biconnectivity
    transitive_closure(), transitive_reduction() - reachability
    dijkstra(), floyd_warshall() - shortest paths
    DinicFlow, PushRelabelFlow - maximum flow over capacity matrices
    bipartite_matching() - maximum bipartite matching
    LowestCommonAncestor, HeavyLightDecomposition - tree queries
    from_networkx() - convert a NetworkX graph to an adjacency list

Example:
    from idxgraph import DinicFlow, tarjan_scc

    tarjan_scc([[1], [0, 2], []])
    # [[1, 0], [2]]

    engine = DinicFlow([[0, 3, 5], [0, 0, 2], [0, 0, 0]], 10**6)
    engine.calc_max_flow(0, 2)
    # 7
"""

from __future__ import annotations

from idxgraph import logging
from idxgraph._version import __version__
from idxgraph.algorithms import (
    NO_VERTEX,
    DinicFlow,
    FlowSummary,
    HeavyLightDecomposition,
    LowestCommonAncestor,
    MaxFlow,
    PushRelabelFlow,
    biconnected_components,
    bipartite_matching,
    chain_decomposition,
    condensation,
    cut_edges,
    cut_vertices,
    cut_vertices_and_edges,
    dijkstra,
    floyd_warshall,
    in_degrees,
    iterative_dfs,
    tarjan_scc,
    topological_sort,
    transitive_closure,
    transitive_reduction,
)
from idxgraph.nx import NodeMap, capacity_matrix, from_networkx, to_networkx

__all__ = [
    # Version
    "__version__",
    "NO_VERTEX",
    # Traversal & ordering
    "iterative_dfs",
    "in_degrees",
    "topological_sort",
    "tarjan_scc",
    "condensation",
    # Biconnectivity
    "chain_decomposition",
    "cut_vertices",
    "cut_edges",
    "biconnected_components",
    "cut_vertices_and_edges",
    # Closure
    "transitive_closure",
    "transitive_reduction",
    # Shortest paths
    "floyd_warshall",
    "dijkstra",
    # Max flow
    "MaxFlow",
    "DinicFlow",
    "PushRelabelFlow",
    "FlowSummary",
    # Matching
    "bipartite_matching",
    # Trees
    "LowestCommonAncestor",
    "HeavyLightDecomposition",
    # Library integrations (NetworkX)
    "NodeMap",
    "from_networkx",
    "capacity_matrix",
    "to_networkx",
    # Utilities
    "logging",
]
