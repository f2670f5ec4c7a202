"""Chain decomposition and biconnectivity of undirected graphs.

Undirected graphs are adjacency lists in which every edge is listed at both
of its endpoints. Graphs may be disconnected; every connected component gets
its own DFS tree.

The chain decomposition (Schmidt, 2013) orients the DFS tree edges towards
the root and the remaining (back) edges away from it. Vertices are processed
in discovery order; each back edge ``v -> w`` leaving ``v`` starts a chain
``v, w, parent(w), ...`` that stops at the first vertex already visited by an
earlier chain. From the chains:

- a tree edge covered by no chain is a bridge (cut edge);
- a vertex is a cut vertex iff it is an endpoint of a bridge with degree > 1,
  or the first vertex of a cycle chain other than the first chain of its tree;
- cycle chains open new biconnected components; path chains extend one.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from idxgraph.algorithms.base import (
    NO_VERTEX,
    AdjList,
    DfsEdge,
    IndexFn,
    Vertex,
    resolve_index_fn,
)
from idxgraph.algorithms.traversal import iterative_dfs

#: A chain: start vertex, then the vertices reached over one back edge and
#: a sequence of tree edges.
Chain = List[Vertex]

#: Chains grouped by DFS tree, trees in root order.
ChainDecomposition = List[List[Chain]]

#: Undirected edge as ``(min(u, v), max(u, v))``.
UndirectedEdge = Tuple[Vertex, Vertex]


def _dfs_forest(
    adjl: AdjList, index_f: IndexFn
) -> Tuple[List[List[Vertex]], List[Vertex], List[int]]:
    """Return the trees (vertices in discovery order), parents and discovery times."""
    n = len(adjl)
    parent = [NO_VERTEX] * n
    disc = [-1] * n
    trees: List[List[Vertex]] = []
    counter = 0
    for p, c, kind in iterative_dfs(adjl, index_f):
        if kind is not DfsEdge.FORWARD:
            continue
        disc[c] = counter
        counter += 1
        if p == c:
            trees.append([c])
        else:
            parent[c] = p
            trees[-1].append(c)
    return trees, parent, disc


def _degree(adjl: AdjList, index_f: IndexFn, v: Vertex) -> int:
    return sum(1 for edge in adjl[v] if index_f(edge) != v)


def chain_decomposition(
    adjl: AdjList, index_f: Optional[IndexFn] = None
) -> ChainDecomposition:
    """Decompose an undirected graph into chains.

    Args:
        adjl: Adjacency list of an undirected graph.
        index_f: Edge to target index accessor.

    Returns:
        One list of chains per DFS tree, trees in the order of their roots.
        A tree whose edges are all bridges has an empty list.
    """
    index_f = resolve_index_fn(index_f)
    trees, parent, disc = _dfs_forest(adjl, index_f)
    visited = [False] * len(adjl)

    decomposition: ChainDecomposition = []
    for tree in trees:
        chains: List[Chain] = []
        for v in tree:
            visited[v] = True
            tree_edge_taken = set()
            for edge in adjl[v]:
                w = index_f(edge)
                if disc[w] <= disc[v]:
                    continue
                if parent[w] == v and w not in tree_edge_taken:
                    # first copy of v-w is the tree edge, later copies are back edges
                    tree_edge_taken.add(w)
                    continue
                chain = [v, w]
                while not visited[w]:
                    visited[w] = True
                    w = parent[w]
                    chain.append(w)
                chains.append(chain)
        decomposition.append(chains)
    return decomposition


def _bridges(
    adjl: AdjList,
    index_f: IndexFn,
    decomposition: ChainDecomposition,
) -> List[UndirectedEdge]:
    _, parent, _ = _dfs_forest(adjl, index_f)
    covered = [False] * len(adjl)
    for chains in decomposition:
        for chain in chains:
            for v in chain[1:-1]:
                covered[v] = True
    return sorted(
        (min(v, p), max(v, p))
        for v, p in enumerate(parent)
        if p != NO_VERTEX and not covered[v]
    )


def cut_edges(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    decomposition: Optional[ChainDecomposition] = None,
) -> List[UndirectedEdge]:
    """List the bridges of an undirected graph.

    Args:
        adjl: Adjacency list of an undirected graph.
        index_f: Edge to target index accessor.
        decomposition: Result of ``chain_decomposition`` if already computed.

    Returns:
        Sorted list of ``(u, v)`` pairs with ``u < v``.
    """
    index_f = resolve_index_fn(index_f)
    if decomposition is None:
        decomposition = chain_decomposition(adjl, index_f)
    return _bridges(adjl, index_f, decomposition)


def cut_vertices(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    decomposition: Optional[ChainDecomposition] = None,
) -> List[Vertex]:
    """List the articulation points of an undirected graph.

    Args:
        adjl: Adjacency list of an undirected graph.
        index_f: Edge to target index accessor.
        decomposition: Result of ``chain_decomposition`` if already computed.

    Returns:
        Sorted list of vertices.
    """
    index_f = resolve_index_fn(index_f)
    if decomposition is None:
        decomposition = chain_decomposition(adjl, index_f)

    result = set()
    for chains in decomposition:
        for chain in chains[1:]:
            if chain[0] == chain[-1]:
                result.add(chain[0])
    for u, v in _bridges(adjl, index_f, decomposition):
        for x in (u, v):
            if _degree(adjl, index_f, x) > 1:
                result.add(x)
    return sorted(result)


def biconnected_components(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    decomposition: Optional[ChainDecomposition] = None,
    include_bridges: bool = False,
) -> List[List[Vertex]]:
    """Group the vertices of an undirected graph into biconnected components.

    Every cycle chain opens a component holding its vertices. A path chain
    belongs to the component of the tree edge entering its last vertex and
    adds its interior vertices to it. Bridges form no component of their own
    unless ``include_bridges`` is set, in which case each bridge is appended
    as a two-vertex component.

    Args:
        adjl: Adjacency list of an undirected graph.
        index_f: Edge to target index accessor.
        decomposition: Result of ``chain_decomposition`` if already computed.
        include_bridges: Also report bridges as ``[u, v]`` components.

    Returns:
        List of components in chain order, each a list of vertices.
    """
    index_f = resolve_index_fn(index_f)
    if decomposition is None:
        decomposition = chain_decomposition(adjl, index_f)

    # tree edge (parent[v], v) keyed by v -> component index
    component_of_edge: Dict[Vertex, int] = {}
    components: List[List[Vertex]] = []
    for chains in decomposition:
        for chain in chains:
            if chain[0] == chain[-1]:
                idx = len(components)
                components.append(chain[:-1])
            else:
                idx = component_of_edge[chain[-1]]
                components[idx].extend(chain[1:-1])
            for v in chain[1:-1]:
                component_of_edge[v] = idx

    if include_bridges:
        components.extend([u, v] for u, v in _bridges(adjl, index_f, decomposition))
    return components


def cut_vertices_and_edges(
    adjl: AdjList, index_f: Optional[IndexFn] = None
) -> Tuple[List[Vertex], List[UndirectedEdge]]:
    """Find articulation points and bridges in one low-point DFS pass.

    ``disc[v]`` is the discovery time of ``v`` and ``low[v]`` the smallest
    discovery time reachable from the subtree of ``v`` over one back edge.
    A non-root ``v`` is a cut vertex if some child ``c`` has
    ``low[c] >= disc[v]``; a root is one iff it has more than one child.
    The tree edge ``(v, c)`` is a bridge iff ``low[c] == disc[c]``.

    Args:
        adjl: Adjacency list of an undirected graph.
        index_f: Edge to target index accessor.

    Returns:
        A tuple ``(cut_vertices, cut_edges)``, both sorted, in the same form
        as ``cut_vertices`` and ``cut_edges``.
    """
    index_f = resolve_index_fn(index_f)
    n = len(adjl)
    disc = [-1] * n
    low = [0] * n
    parent = [NO_VERTEX] * n
    children = [0] * n
    parent_edge_seen = [False] * n
    cuts = set()
    bridges: List[UndirectedEdge] = []
    counter = 0

    for p, c, kind in iterative_dfs(adjl, index_f):
        if kind is DfsEdge.FORWARD:
            disc[c] = low[c] = counter
            counter += 1
            if p != c:
                parent[c] = p
                children[p] += 1
        elif kind is DfsEdge.NONTREE:
            if c == parent[p] and not parent_edge_seen[p]:
                parent_edge_seen[p] = True
                continue
            if disc[c] < low[p]:
                low[p] = disc[c]
        elif p != c:
            if low[c] < low[p]:
                low[p] = low[c]
            if parent[p] != NO_VERTEX and low[c] >= disc[p]:
                cuts.add(p)
            if low[c] == disc[c]:
                bridges.append((min(p, c), max(p, c)))
        elif children[c] > 1:
            cuts.add(c)

    return sorted(cuts), sorted(bridges)
