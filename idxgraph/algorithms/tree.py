"""Static query structures over rooted trees.

Both structures are built once from a tree adjacency list and answer
read-only queries afterwards. The adjacency list may hold undirected
neighbour lists or child lists only; the tree is rooted by a breadth-first
search from ``root`` that never steps back to a vertex it has seen. Vertices
the search does not reach have depth ``-1`` and any query on them returns
``NO_VERTEX``.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Tuple

from idxgraph.algorithms.base import (
    NO_VERTEX,
    AdjList,
    IndexFn,
    Vertex,
    resolve_index_fn,
)
from idxgraph.logging import get_logger

_logger = get_logger(__name__)


def _root_tree(
    adjl: AdjList, root: Vertex, index_f: IndexFn
) -> Tuple[List[Vertex], List[Vertex], List[int]]:
    """Return BFS order, parents and depths of the tree hanging from ``root``."""
    n = len(adjl)
    parent = [NO_VERTEX] * n
    depth = [-1] * n
    order: List[Vertex] = []
    if n == 0:
        return order, parent, depth

    depth[root] = 0
    queue = deque([root])
    while queue:
        u = queue.popleft()
        order.append(u)
        for edge in adjl[u]:
            v = index_f(edge)
            if depth[v] < 0:
                depth[v] = depth[u] + 1
                parent[v] = u
                queue.append(v)
    return order, parent, depth


class LowestCommonAncestor:
    """Lowest common ancestors by binary lifting.

    ``up[k][v]`` is the ``2**k``-th ancestor of ``v`` (``NO_VERTEX`` above the
    root). Construction is O(n log n), every query O(log n).

    Example:
        >>> lca = LowestCommonAncestor([[1, 2], [0], [0, 3], [2]])
        >>> lca.ancestor(1, 3)
        0
    """

    def __init__(
        self, adjl: AdjList, root: Vertex = 0, index_f: Optional[IndexFn] = None
    ) -> None:
        index_f = resolve_index_fn(index_f)
        _, parent, self.depth = _root_tree(adjl, root, index_f)
        self.root = root

        levels = max(1, len(adjl).bit_length())
        self.up: List[List[Vertex]] = [parent]
        for _ in range(1, levels):
            prev = self.up[-1]
            self.up.append([NO_VERTEX if p == NO_VERTEX else prev[p] for p in prev])
        _logger.debug("LCA table built: %d vertices, %d levels", len(adjl), levels)

    def parent(self, v: Vertex, k: int = 1) -> Vertex:
        """Return the ``k``-th ancestor of ``v`` (``v`` itself for ``k == 0``).

        Raises:
            ValueError: If ``k`` is negative.
        """
        if k < 0:
            raise ValueError(f"Ancestor step must be nonnegative, got {k}")
        if self.depth[v] < k:
            return NO_VERTEX
        level = 0
        while k:
            if k & 1:
                v = self.up[level][v]
            k >>= 1
            level += 1
        return v

    def ancestor(self, u: Vertex, v: Vertex) -> Vertex:
        """Return the lowest common ancestor of ``u`` and ``v``."""
        if self.depth[u] < 0 or self.depth[v] < 0:
            return NO_VERTEX
        if self.depth[u] < self.depth[v]:
            u, v = v, u
        u = self.parent(u, self.depth[u] - self.depth[v])
        if u == v:
            return u
        for level in range(len(self.up) - 1, -1, -1):
            up = self.up[level]
            if up[u] != up[v]:
                u, v = up[u], up[v]
        return self.up[0][u]

    def distance(self, u: Vertex, v: Vertex) -> int:
        """Number of edges on the tree path between ``u`` and ``v``, -1 if none."""
        a = self.ancestor(u, v)
        if a == NO_VERTEX:
            return -1
        return self.depth[u] + self.depth[v] - 2 * self.depth[a]


class HeavyLightDecomposition:
    """Heavy-light decomposition of a rooted tree.

    Every vertex keeps its child with the largest subtree (the first one on
    ties) as heavy child; heavy edges form chains, so any root path crosses
    O(log n) chains. Vertices are numbered so that each chain occupies a
    contiguous block of positions (heavy child right after its parent) and
    each subtree a contiguous range, which lets path and subtree queries run
    over position intervals of an external array structure.

    Attributes:
        parent_of: Parent of every vertex (``NO_VERTEX`` for the root).
        depth: Depth of every vertex.
        size: Subtree size of every vertex.
        heavy: Heavy child of every vertex (``NO_VERTEX`` for leaves).
        head: Topmost vertex of the chain containing every vertex.
        pos: Position of every vertex.
        order: Vertex at every position.
    """

    def __init__(
        self, adjl: AdjList, root: Vertex = 0, index_f: Optional[IndexFn] = None
    ) -> None:
        index_f = resolve_index_fn(index_f)
        n = len(adjl)
        bfs_order, self.parent_of, self.depth = _root_tree(adjl, root, index_f)
        self.root = root

        children: List[List[Vertex]] = [[] for _ in range(n)]
        for v in bfs_order[1:]:
            children[self.parent_of[v]].append(v)

        self.size = [0] * n
        self.heavy = [NO_VERTEX] * n
        for v in reversed(bfs_order):
            self.size[v] = 1
            for c in children[v]:
                self.size[v] += self.size[c]
                if self.heavy[v] == NO_VERTEX or self.size[c] > self.size[self.heavy[v]]:
                    self.heavy[v] = c

        self.head = [NO_VERTEX] * n
        self.pos = [-1] * n
        self.order: List[Vertex] = []
        if bfs_order:
            self.head[root] = root
            stack = [root]
            while stack:
                v = stack.pop()
                self.pos[v] = len(self.order)
                self.order.append(v)
                for c in reversed(children[v]):
                    if c != self.heavy[v]:
                        self.head[c] = c
                        stack.append(c)
                if self.heavy[v] != NO_VERTEX:
                    self.head[self.heavy[v]] = self.head[v]
                    stack.append(self.heavy[v])

        _logger.debug(
            "Heavy-light decomposition built: %d vertices, %d chains",
            n,
            sum(1 for v in bfs_order if self.head[v] == v),
        )

    def parent(self, v: Vertex, k: int = 1) -> Vertex:
        """Return the ``k``-th ancestor of ``v``, climbing one chain at a time.

        Raises:
            ValueError: If ``k`` is negative.
        """
        if k < 0:
            raise ValueError(f"Ancestor step must be nonnegative, got {k}")
        if self.depth[v] < k:
            return NO_VERTEX
        while True:
            h = self.head[v]
            climb = self.depth[v] - self.depth[h]
            if k <= climb:
                return self.order[self.pos[v] - k]
            k -= climb + 1
            v = self.parent_of[h]

    def ancestor(self, u: Vertex, v: Vertex) -> Vertex:
        """Return the lowest common ancestor of ``u`` and ``v``."""
        if self.depth[u] < 0 or self.depth[v] < 0:
            return NO_VERTEX
        while self.head[u] != self.head[v]:
            if self.depth[self.head[u]] < self.depth[self.head[v]]:
                u, v = v, u
            u = self.parent_of[self.head[u]]
        return u if self.depth[u] < self.depth[v] else v

    def path_segments(self, u: Vertex, v: Vertex) -> List[Tuple[int, int]]:
        """Cover the ``u``-``v`` path with inclusive position intervals.

        Returns:
            ``(lo, hi)`` intervals with ``lo <= hi``, at most O(log n) of them;
            empty if the vertices are not in the rooted tree.
        """
        if self.depth[u] < 0 or self.depth[v] < 0:
            return []
        segments = []
        while self.head[u] != self.head[v]:
            if self.depth[self.head[u]] < self.depth[self.head[v]]:
                u, v = v, u
            h = self.head[u]
            segments.append((self.pos[h], self.pos[u]))
            u = self.parent_of[h]
        lo, hi = sorted((self.pos[u], self.pos[v]))
        segments.append((lo, hi))
        return segments

    def subtree_range(self, v: Vertex) -> Tuple[int, int]:
        """Half-open position range ``[lo, hi)`` covering the subtree of ``v``."""
        return self.pos[v], self.pos[v] + self.size[v]
