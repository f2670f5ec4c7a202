"""Depth-first traversal, topological ordering and strongly connected components.

Every search here runs on an explicit stack of ``(vertex, edge iterator)``
frames, so the depth of a search is bounded by memory rather than by the
interpreter recursion limit.
"""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Iterator, List, Optional, Tuple

from idxgraph.algorithms.base import (
    AdjList,
    DfsEdge,
    IndexFn,
    Vertex,
    resolve_index_fn,
)


def iterative_dfs(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    roots: Optional[Iterable[Vertex]] = None,
    visited: Optional[List[bool]] = None,
) -> Iterator[Tuple[Vertex, Vertex, DfsEdge]]:
    """Generate ``(parent, child, kind)`` events of a depth-first search.

    Every tree of the DFS forest starts with ``(root, root, FORWARD)`` and ends
    with ``(root, root, REVERSE)``. In between, ``FORWARD`` announces a newly
    discovered ``child``, ``NONTREE`` an edge to an already discovered vertex
    and ``REVERSE`` that ``child`` has no unexplored edges left.

    Args:
        adjl: Adjacency list.
        index_f: Edge to target index accessor; edges are indices when omitted.
        roots: Vertices to start from, in order. Defaults to ``0..n-1``.
        visited: Discovery flags shared with the caller. Vertices already
            flagged are not searched; newly discovered ones are flagged.

    Yields:
        Tuples ``(parent, child, DfsEdge)``.
    """
    index_f = resolve_index_fn(index_f)
    if visited is None:
        visited = [False] * len(adjl)
    if roots is None:
        roots = range(len(adjl))

    for root in roots:
        if visited[root]:
            continue
        visited[root] = True
        yield root, root, DfsEdge.FORWARD
        stack = [(root, iter(adjl[root]))]
        while stack:
            parent, edges = stack[-1]
            for edge in edges:
                child = index_f(edge)
                if visited[child]:
                    yield parent, child, DfsEdge.NONTREE
                else:
                    visited[child] = True
                    yield parent, child, DfsEdge.FORWARD
                    stack.append((child, iter(adjl[child])))
                    break
            else:
                stack.pop()
                yield (stack[-1][0] if stack else parent), parent, DfsEdge.REVERSE


def in_degrees(adjl: AdjList, index_f: Optional[IndexFn] = None) -> List[int]:
    """Count incoming edges per vertex; parallel edges count separately."""
    index_f = resolve_index_fn(index_f)
    degrees = [0] * len(adjl)
    for edges in adjl:
        for edge in edges:
            degrees[index_f(edge)] += 1
    return degrees


def topological_sort(
    adjl: AdjList, index_f: Optional[IndexFn] = None
) -> List[Vertex]:
    """Order the vertices of a DAG so that every edge points forward.

    The order is the reversed DFS postorder of a search that starts from the
    vertices without incoming edges, taken in index order. On a graph with
    cycles every vertex is still listed once, but the order is meaningless.

    Args:
        adjl: Adjacency list of a directed acyclic graph.
        index_f: Edge to target index accessor.

    Returns:
        List of all vertices.
    """
    degrees = in_degrees(adjl, index_f)
    sources = [v for v, degree in enumerate(degrees) if degree == 0]
    roots = chain(sources, range(len(adjl)))

    order = [
        child
        for _, child, kind in iterative_dfs(adjl, index_f, roots)
        if kind is DfsEdge.REVERSE
    ]
    order.reverse()
    return order


def tarjan_scc(
    adjl: AdjList, index_f: Optional[IndexFn] = None
) -> List[List[Vertex]]:
    """Find the strongly connected components with Tarjan's algorithm.

    Components are returned in topological order of the condensation: a
    component only has edges towards components listed after it. This is the
    reverse of the order in which Tarjan's search completes them. Within a
    component, vertices appear in the order they are popped off the
    auxiliary stack.

    Runs in O(V + E).

    Args:
        adjl: Adjacency list of a directed graph.
        index_f: Edge to target index accessor.

    Returns:
        List of components, each a list of vertices.
    """
    n = len(adjl)
    index = [0] * n
    low = [0] * n
    on_stack = [False] * n
    stack: List[Vertex] = []
    components: List[List[Vertex]] = []
    counter = 0

    for parent, child, kind in iterative_dfs(adjl, index_f):
        if kind is DfsEdge.FORWARD:
            counter += 1
            index[child] = low[child] = counter
            stack.append(child)
            on_stack[child] = True
        elif kind is DfsEdge.NONTREE:
            if on_stack[child] and index[child] < low[parent]:
                low[parent] = index[child]
        else:
            if low[child] == index[child]:
                component = []
                while True:
                    v = stack.pop()
                    on_stack[v] = False
                    component.append(v)
                    if v == child:
                        break
                components.append(component)
            if parent != child and low[child] < low[parent]:
                low[parent] = low[child]

    components.reverse()
    return components


def condensation(
    adjl: AdjList,
    index_f: Optional[IndexFn] = None,
    components: Optional[List[List[Vertex]]] = None,
) -> Tuple[List[int], List[List[int]]]:
    """Collapse every strongly connected component into a single vertex.

    Args:
        adjl: Adjacency list of a directed graph.
        index_f: Edge to target index accessor.
        components: Result of ``tarjan_scc`` if already computed.

    Returns:
        A tuple ``(component_of, dag)``: the component index of every vertex
        and the adjacency list of the component graph, without self loops or
        parallel edges. Component indices follow ``tarjan_scc`` order, so
        every edge of ``dag`` goes from a lower to a higher index.
    """
    index_f = resolve_index_fn(index_f)
    if components is None:
        components = tarjan_scc(adjl, index_f)

    component_of = [0] * len(adjl)
    for c, members in enumerate(components):
        for v in members:
            component_of[v] = c

    dag: List[List[int]] = [[] for _ in components]
    seen: List[set] = [set() for _ in components]
    for u, edges in enumerate(adjl):
        cu = component_of[u]
        for edge in edges:
            cv = component_of[index_f(edge)]
            if cv != cu and cv not in seen[cu]:
                seen[cu].add(cv)
                dag[cu].append(cv)
    return component_of, dag
