"""Graph algorithms over index-based adjacency lists."""

from __future__ import annotations

from idxgraph.algorithms.base import NO_VERTEX, DfsEdge, Numeric
from idxgraph.algorithms.chains import (
    biconnected_components,
    chain_decomposition,
    cut_edges,
    cut_vertices,
    cut_vertices_and_edges,
)
from idxgraph.algorithms.closure import transitive_closure, transitive_reduction
from idxgraph.algorithms.matching import bipartite_matching
from idxgraph.algorithms.max_flow import DinicFlow, MaxFlow, PushRelabelFlow
from idxgraph.algorithms.spf import (
    dijkstra,
    dijkstra_path,
    floyd_warshall,
    floyd_warshall_path,
)
from idxgraph.algorithms.traversal import (
    condensation,
    in_degrees,
    iterative_dfs,
    tarjan_scc,
    topological_sort,
)
from idxgraph.algorithms.tree import HeavyLightDecomposition, LowestCommonAncestor
from idxgraph.algorithms.types import FlowSummary

__all__ = [
    "NO_VERTEX",
    "DfsEdge",
    "Numeric",
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
    "floyd_warshall_path",
    "dijkstra",
    "dijkstra_path",
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
]
