"""Shortest-path algorithms over weighted adjacency lists.

Edges default to ``(target, weight)`` pairs; pass ``index_f`` / ``weight_f``
to read other layouts. Results pair a vertex with a distance:

- ``dijkstra`` returns one ``(predecessor, distance)`` per vertex;
- ``floyd_warshall`` returns, for every row ``i``, one ``(next_hop, distance)``
  per destination, ``next_hop`` being the vertex after ``i`` on a shortest
  path.

The start vertex maps to itself at distance ``zero``. Unreachable vertices map
to ``(NO_VERTEX, inf)`` where ``inf`` is the caller's sentinel.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Any, List, Tuple

from idxgraph.algorithms.base import (
    NO_VERTEX,
    AdjList,
    IndexFn,
    Vertex,
    WeightFn,
    edge_target,
    edge_weight,
)

#: ``(vertex, distance)``: predecessor for Dijkstra, next hop for Floyd-Warshall.
Hop = Tuple[Vertex, Any]


def floyd_warshall(
    adjl: AdjList,
    inf: Any,
    *,
    index_f: IndexFn = edge_target,
    weight_f: WeightFn = edge_weight,
    zero: Any = 0,
) -> List[List[Hop]]:
    """All-pairs shortest paths.

    Negative edge weights are fine; negative cycles are not detected and
    leave the result unspecified. Among parallel edges the lightest wins.
    Runs in O(V^3).

    Args:
        adjl: Weighted adjacency list.
        inf: Distance reported for unreachable pairs.
        index_f: Edge to target index accessor.
        weight_f: Edge to weight accessor.
        zero: Distance of a vertex to itself.

    Returns:
        Matrix of ``(next_hop, distance)`` pairs.
    """
    n = len(adjl)
    dist = [[inf] * n for _ in range(n)]
    nxt = [[NO_VERTEX] * n for _ in range(n)]
    for i, edges in enumerate(adjl):
        dist[i][i] = zero
        nxt[i][i] = i
        for edge in edges:
            j = index_f(edge)
            w = weight_f(edge)
            if nxt[i][j] == NO_VERTEX or w < dist[i][j]:
                dist[i][j] = w
                nxt[i][j] = j

    for k in range(n):
        dist_k = dist[k]
        nxt_k = nxt[k]
        for i in range(n):
            nik = nxt[i][k]
            if nik == NO_VERTEX:
                continue
            dik = dist[i][k]
            dist_i = dist[i]
            nxt_i = nxt[i]
            for j in range(n):
                # skip unreachable legs so the sentinel never enters arithmetic
                if nxt_k[j] == NO_VERTEX:
                    continue
                candidate = dik + dist_k[j]
                if nxt_i[j] == NO_VERTEX or candidate < dist_i[j]:
                    dist_i[j] = candidate
                    nxt_i[j] = nik

    return [list(zip(nxt[i], dist[i])) for i in range(n)]


def dijkstra(
    adjl: AdjList,
    source: Vertex,
    inf: Any,
    *,
    index_f: IndexFn = edge_target,
    weight_f: WeightFn = edge_weight,
    zero: Any = 0,
) -> List[Hop]:
    """Single-source shortest paths for nonnegative weights.

    Distances only change on strict improvement, and vertices at equal
    distance leave the heap in the order they were pushed, so the result is
    fixed by the edge order. Runs in O(E log V).

    Args:
        adjl: Weighted adjacency list.
        source: Start vertex.
        inf: Distance reported for unreachable vertices.
        index_f: Edge to target index accessor.
        weight_f: Edge to weight accessor.
        zero: Distance of the source.

    Returns:
        List of ``(predecessor, distance)`` pairs.
    """
    n = len(adjl)
    pred = [NO_VERTEX] * n
    dist = [inf] * n
    done = [False] * n
    pred[source] = source
    dist[source] = zero

    sequence = count()
    min_pq: List[Tuple[Any, int, Vertex]] = [(zero, next(sequence), source)]
    while min_pq:
        current, _, u = heappop(min_pq)
        if done[u]:
            continue
        done[u] = True
        for edge in adjl[u]:
            v = index_f(edge)
            if done[v]:
                continue
            candidate = current + weight_f(edge)
            if pred[v] == NO_VERTEX or candidate < dist[v]:
                pred[v] = u
                dist[v] = candidate
                heappush(min_pq, (candidate, next(sequence), v))

    return list(zip(pred, dist))


def dijkstra_path(result: List[Hop], target: Vertex) -> List[Vertex]:
    """Rebuild the path from the ``dijkstra`` source to ``target``.

    Returns:
        Vertices from source to target, or an empty list if unreachable.
    """
    if result[target][0] == NO_VERTEX:
        return []
    path = [target]
    v = target
    while result[v][0] != v:
        v = result[v][0]
        path.append(v)
    path.reverse()
    return path


def floyd_warshall_path(
    result: List[List[Hop]], source: Vertex, target: Vertex
) -> List[Vertex]:
    """Rebuild the path from ``source`` to ``target`` out of ``floyd_warshall`` output.

    Returns:
        Vertices from source to target, or an empty list if unreachable.
    """
    if result[source][target][0] == NO_VERTEX:
        return []
    path = [source]
    v = source
    while v != target:
        v = result[v][target][0]
        path.append(v)
    return path
