"""Transitive closure and reduction of directed graphs."""

from __future__ import annotations

from typing import List, Optional

from idxgraph.algorithms.base import AdjList, IndexFn, Vertex, resolve_index_fn


def _reachable(
    adjl: AdjList, index_f: IndexFn, source: Vertex, include_cycles: bool
) -> List[Vertex]:
    """List the vertices reachable from ``source`` in discovery order.

    A vertex is marked when first discovered; the most recently discovered
    vertex is expanded next.
    """
    seen = [False] * len(adjl)
    seen[source] = True
    returned = False
    found: List[Vertex] = []
    stack = [source]
    while stack:
        u = stack.pop()
        for edge in adjl[u]:
            v = index_f(edge)
            if not seen[v]:
                seen[v] = True
                found.append(v)
                stack.append(v)
            elif v == source and include_cycles and not returned:
                returned = True
                found.append(v)
    return found


def transitive_closure(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    include_cycles: bool = False,
) -> List[List[Vertex]]:
    """Compute the reachable set of every vertex.

    Each set lists vertices in the order a stack-based search discovers
    them: a vertex is marked when first seen and the latest one is expanded
    first. A vertex is not part of its own set unless ``include_cycles`` is
    set and some cycle leads back to it.

    Args:
        adjl: Adjacency list of a directed graph.
        index_f: Edge to target index accessor.
        include_cycles: List a vertex in its own set when it lies on a cycle.

    Returns:
        Adjacency list of plain vertex indices.
    """
    index_f = resolve_index_fn(index_f)
    return [
        _reachable(adjl, index_f, source, include_cycles)
        for source in range(len(adjl))
    ]


def transitive_reduction(
    adjl: AdjList, index_f: Optional[IndexFn] = None
) -> List[List[Vertex]]:
    """Remove every edge implied by a longer path.

    An edge ``u -> v`` is dropped when ``v`` can also be reached from another
    successor of ``u``. Parallel edges and self loops are dropped as well.
    The result is well-defined for DAGs; collapse cycles with
    ``condensation`` first.

    Args:
        adjl: Adjacency list of a directed acyclic graph.
        index_f: Edge to target index accessor.

    Returns:
        Adjacency list of plain vertex indices, each list sorted.
    """
    index_f = resolve_index_fn(index_f)
    reachable = [set(targets) for targets in transitive_closure(adjl, index_f)]

    reduction: List[List[Vertex]] = []
    for u, edges in enumerate(adjl):
        successors = {index_f(edge) for edge in edges}
        successors.discard(u)
        implied = {
            v
            for v in successors
            for w in successors
            if w != v and v in reachable[w]
        }
        reduction.append(sorted(successors - implied))
    return reduction
