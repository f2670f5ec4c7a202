"""Kuhn's augmenting-path maximum matching for bipartite graphs."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from idxgraph.algorithms.base import NO_VERTEX, Vertex

#: Candidate or matched pair ``(left, right)``.
Pair = Tuple[Vertex, Vertex]


def _augment(
    root: Vertex,
    adj: List[List[Vertex]],
    match_left: List[Vertex],
    match_right: List[Vertex],
) -> bool:
    """Search an augmenting path from the free left vertex ``root`` and flip it.

    Stack frames are ``[left, next_edge]``; the right vertex a frame is
    currently exploring is ``adj[left][next_edge - 1]``.
    """
    seen = [False] * len(match_right)
    stack = [[root, 0]]
    while stack:
        frame = stack[-1]
        u, i = frame
        if i == len(adj[u]):
            stack.pop()
            continue
        frame[1] = i + 1
        v = adj[u][i]
        if seen[v]:
            continue
        seen[v] = True
        w = match_right[v]
        if w != NO_VERTEX:
            stack.append([w, 0])
            continue
        for left, next_edge in stack:
            right = adj[left][next_edge - 1]
            match_left[left] = right
            match_right[right] = left
        return True
    return False


def bipartite_matching(n: int, edges: Iterable[Pair]) -> List[Pair]:
    """Maximum bipartite matching with Kuhn's augmenting paths.

    Left vertices are tried in the order they first appear in ``edges`` and
    each one tries its right neighbours in edge order, so the matching found
    is the first-fit one for the given order. A vertex index may occur on both
    sides; the two roles are tracked separately.

    Args:
        n: Number of vertices; every index in ``edges`` lies in ``[0, n)``.
        edges: Candidate ``(left, right)`` pairs.

    Returns:
        Matched ``(left, right)`` pairs sorted by left vertex.
    """
    adj: List[List[Vertex]] = [[] for _ in range(n)]
    lefts: List[Vertex] = []
    for u, v in edges:
        if not adj[u]:
            lefts.append(u)
        adj[u].append(v)

    match_left = [NO_VERTEX] * n
    match_right = [NO_VERTEX] * n
    for u in lefts:
        _augment(u, adj, match_left, match_right)

    return [(u, v) for u, v in enumerate(match_left) if v != NO_VERTEX]
