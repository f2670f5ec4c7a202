"""NetworkX graph conversion utilities.

Converts NetworkX graphs into the index-based inputs used by
``idxgraph.algorithms`` and back.

Example:
    >>> import networkx as nx
    >>> from idxgraph.nx import from_networkx
    >>> from idxgraph.algorithms.spf import dijkstra
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", weight=3)
    >>> G.add_edge("B", "C", weight=4)
    >>> adjl, node_map = from_networkx(G)
    >>> dijkstra(adjl, node_map.to_index["A"], float("inf"))
    [(0, 0), (0, 3), (1, 7)]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

from idxgraph.algorithms.base import (
    AdjList,
    IndexFn,
    WeightFn,
    resolve_index_fn,
)

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and integer indices.

    Attributes:
        to_index: Maps original node names to integer indices
        to_name: Maps integer indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        """Return the number of nodes in the mapping."""
        return len(self.to_index)


def _check_graph(G: NxGraph) -> NodeMap:
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )
    # sorted by str for a deterministic order over mixed name types
    return NodeMap.from_names(sorted(G.nodes(), key=str))


def from_networkx(
    G: NxGraph,
    *,
    weight_attr: str = "weight",
    default_weight: Any = 1,
) -> Tuple[List[List[Tuple[int, Any]]], NodeMap]:
    """Convert a NetworkX graph to a weighted adjacency list.

    Edges become ``(target, weight)`` pairs, the layout expected by the
    shortest-path functions. Undirected graphs list every edge at both
    endpoints (a self loop once), which is what the chain decomposition
    expects. Parallel edges of multigraphs are kept.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        weight_attr: Edge attribute holding the weight (default: "weight")
        default_weight: Weight used when the attribute is missing (default: 1)

    Returns:
        Tuple of (adjl, node_map).

    Raises:
        TypeError: If G is not a NetworkX graph
    """
    node_map = _check_graph(G)
    adjl: List[List[Tuple[int, Any]]] = [[] for _ in range(len(node_map))]
    for u, v, data in G.edges(data=True):
        src_idx = node_map.to_index[u]
        dst_idx = node_map.to_index[v]
        weight = data.get(weight_attr, default_weight)
        adjl[src_idx].append((dst_idx, weight))
        if not G.is_directed() and src_idx != dst_idx:
            adjl[dst_idx].append((src_idx, weight))
    return adjl, node_map


def capacity_matrix(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: Any = 0,
) -> Tuple[List[List[Any]], NodeMap]:
    """Convert a NetworkX graph to a dense capacity matrix for the flow engines.

    Parallel edges add up. Undirected edges get the capacity in both
    directions. Self loops are ignored.

    Args:
        G: NetworkX graph
        capacity_attr: Edge attribute holding the capacity (default: "capacity")
        default_capacity: Capacity used when the attribute is missing (default: 0)

    Returns:
        Tuple of (matrix, node_map).

    Raises:
        TypeError: If G is not a NetworkX graph
    """
    node_map = _check_graph(G)
    n = len(node_map)
    matrix = [[default_capacity * 0] * n for _ in range(n)]
    for u, v, data in G.edges(data=True):
        i = node_map.to_index[u]
        j = node_map.to_index[v]
        if i == j:
            continue
        capacity = data.get(capacity_attr, default_capacity)
        matrix[i][j] += capacity
        if not G.is_directed():
            matrix[j][i] += capacity
    return matrix, node_map


def to_networkx(
    adjl: AdjList,
    node_map: Optional[NodeMap] = None,
    *,
    index_f: Optional[IndexFn] = None,
    weight_f: Optional[WeightFn] = None,
    weight_attr: str = "weight",
) -> "nx.MultiDiGraph":
    """Convert an adjacency list back to a NetworkX MultiDiGraph.

    Args:
        adjl: Adjacency list.
        node_map: Optional NodeMap to restore original node names.
            If None, nodes are labeled 0, 1, 2, ...
        index_f: Edge to target index accessor; edges are indices when omitted.
        weight_f: Edge to weight accessor; no weight attribute when omitted.
        weight_attr: Edge attribute receiving the weight (default: "weight")

    Returns:
        nx.MultiDiGraph with one edge per adjacency entry.
    """
    import networkx as nx

    index_f = resolve_index_fn(index_f)

    def name(idx: int) -> Hashable:
        if node_map is None:
            return idx
        return node_map.to_name.get(idx, idx)

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(idx) for idx in range(len(adjl)))
    for u, edges in enumerate(adjl):
        for edge in edges:
            attrs = {} if weight_f is None else {weight_attr: weight_f(edge)}
            G.add_edge(name(u), name(index_f(edge)), **attrs)
    return G
