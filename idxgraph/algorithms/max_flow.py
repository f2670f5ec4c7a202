"""Maximum-flow engines over dense capacity matrices.

Both engines share one contract (``MaxFlow``): they are built once from an
n x n capacity matrix and an ``inf`` sentinel and then answer any number of
``calc_max_flow(source, sink)`` calls. Every call starts from the untouched
capacities, so its result does not depend on earlier calls. After a call,
``flow[i][j]`` holds the flow carried on ``i -> j`` by that computation.

Capacities may be ``int``, ``float``, ``fractions.Fraction`` or any type with
the ``Numeric`` operators. A residual capacity counts as available only when
it exceeds ``eps``, which is ``FLOW_CONFIG.float_epsilon`` for floats and
exactly zero otherwise.

Example:
    >>> engine = DinicFlow([[0, 3, 5], [0, 0, 2], [0, 0, 0]], 10**6)
    >>> engine.calc_max_flow(0, 2)
    7
    >>> engine.flow
    [[0, 2, 5], [0, 0, 2], [0, 0, 0]]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Generic, List, Optional, Sequence

from idxgraph.algorithms.base import NO_VERTEX, T, Vertex
from idxgraph.algorithms.types import FlowSummary
from idxgraph.config import FLOW_CONFIG
from idxgraph.logging import get_logger

_logger = get_logger(__name__)


class MaxFlow(ABC, Generic[T]):
    """Common state of the max-flow engines.

    Attributes:
        cap: Private copy of the capacity matrix; never modified.
        flow: Flow matrix of the last ``calc_max_flow`` call.
        inf: Sentinel bounding the amount pushed in a single step.
        zero: Additive identity of the capacity type.
        eps: Residual capacities at or below this value count as exhausted.
    """

    def __init__(
        self,
        capacities: Sequence[Sequence[T]],
        inf: T,
        *,
        zero: Optional[T] = None,
        eps: Optional[T] = None,
    ) -> None:
        n = len(capacities)
        for row in capacities:
            if len(row) != n:
                raise ValueError(
                    f"Capacity matrix must be square: expected rows of length {n}, "
                    f"got {len(row)}"
                )

        self.cap: List[List[T]] = [list(row) for row in capacities]
        self.inf = inf
        self.zero: T = type(inf)(0) if zero is None else zero
        self.eps = FLOW_CONFIG.epsilon_for(inf, self.zero) if eps is None else eps
        self.flow: List[List[T]] = [[self.zero] * n for _ in range(n)]

        # neighbours in either direction; antiparallel residuals need both
        self._adj: List[List[Vertex]] = [
            [
                v
                for v in range(n)
                if v != u
                and (self._positive(self.cap[u][v]) or self._positive(self.cap[v][u]))
            ]
            for u in range(n)
        ]
        self._net: List[List[T]] = [[self.zero] * n for _ in range(n)]
        self._source: Vertex = NO_VERTEX
        self._sink: Vertex = NO_VERTEX
        self._total: T = self.zero

    @property
    def n(self) -> int:
        """Number of vertices."""
        return len(self.cap)

    def _positive(self, value: T) -> bool:
        return self.eps < value

    def _residual(self, u: Vertex, v: Vertex) -> T:
        return self.cap[u][v] - self._net[u][v]

    def _push(self, u: Vertex, v: Vertex, amount: T) -> None:
        # net flow stays skew-symmetric
        self._net[u][v] += amount
        self._net[v][u] -= amount

    def _reset(self) -> None:
        n = self.n
        self._net = [[self.zero] * n for _ in range(n)]

    def calc_max_flow(self, source: Vertex, sink: Vertex) -> T:
        """Compute the maximum flow from ``source`` to ``sink``.

        The residual state is rebuilt from ``cap`` first, so repeated calls on
        one engine are independent. ``flow`` is replaced by the flow of this
        computation.

        Args:
            source: Source vertex.
            sink: Sink vertex.

        Returns:
            The flow value; ``zero`` when ``source == sink``.
        """
        self._reset()
        self._source, self._sink = source, sink
        total = self.zero if source == sink else self._solve(source, sink)
        self._total = total

        self.flow = [
            [value if self._positive(value) else self.zero for value in row]
            for row in self._net
        ]
        _logger.debug(
            "%s: max flow %d -> %d is %s", type(self).__name__, source, sink, total
        )
        return total

    @abstractmethod
    def _solve(self, source: Vertex, sink: Vertex) -> T:
        """Place a maximum flow on the freshly reset residual state."""

    def summary(self) -> FlowSummary:
        """Describe the last computation, including a minimum cut.

        Raises:
            RuntimeError: If ``calc_max_flow`` has not been called yet.
        """
        if self._source == NO_VERTEX:
            raise RuntimeError("calc_max_flow must be called before summary")

        n = self.n
        seen = [False] * n
        seen[self._source] = True
        queue = deque([self._source])
        while queue:
            u = queue.popleft()
            for v in self._adj[u]:
                if not seen[v] and self._positive(self._residual(u, v)):
                    seen[v] = True
                    queue.append(v)

        reachable = [v for v in range(n) if seen[v]]
        min_cut = [
            (u, v)
            for u in reachable
            for v in range(n)
            if not seen[v] and self._positive(self.cap[u][v])
        ]
        return FlowSummary(
            source=self._source,
            sink=self._sink,
            total_flow=self._total,
            edge_flow=[list(row) for row in self.flow],
            reachable=reachable,
            min_cut=min_cut,
        )


class DinicFlow(MaxFlow[T]):
    """Dinic's algorithm: BFS level graphs and blocking flows.

    Each phase labels vertices with their BFS distance from the source over
    residual edges, then repeatedly augments along level-increasing paths
    found by an explicit-stack DFS. A per-vertex current-arc pointer skips
    edges already found useless in the phase. O(V^2 E) in general.
    """

    def _solve(self, source: Vertex, sink: Vertex) -> T:
        total = self.zero
        phases = 0
        while self._build_levels(source, sink):
            phases += 1
            self._arc = [0] * self.n
            while True:
                pushed = self._augment(source, sink)
                if pushed is None:
                    break
                total += pushed
        _logger.debug("Dinic finished after %d phases", phases)
        return total

    def _build_levels(self, source: Vertex, sink: Vertex) -> bool:
        level = [-1] * self.n
        level[source] = 0
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for v in self._adj[u]:
                if level[v] < 0 and self._positive(self._residual(u, v)):
                    level[v] = level[u] + 1
                    queue.append(v)
        self._level = level
        return level[sink] >= 0

    def _augment(self, source: Vertex, sink: Vertex) -> Optional[T]:
        """Push flow along one level-increasing path; ``None`` if none is left."""
        level = self._level
        arc = self._arc
        path = [source]
        while path:
            u = path[-1]
            if u == sink:
                bottleneck = self.inf
                for a, b in zip(path, path[1:]):
                    residual = self._residual(a, b)
                    if residual < bottleneck:
                        bottleneck = residual
                for a, b in zip(path, path[1:]):
                    self._push(a, b, bottleneck)
                return bottleneck

            edges = self._adj[u]
            while arc[u] < len(edges):
                v = edges[arc[u]]
                if level[v] == level[u] + 1 and self._positive(self._residual(u, v)):
                    path.append(v)
                    break
                arc[u] += 1
            else:
                # dead end
                path.pop()
                if path:
                    arc[path[-1]] += 1
        return None


class PushRelabelFlow(MaxFlow[T]):
    """Goldberg-Tarjan push-relabel with FIFO vertex selection.

    The source starts with ``inf`` units of excess at height ``n``. Active
    vertices are discharged in FIFO order: excess is pushed over admissible
    edges (``height[u] == height[v] + 1``), and a vertex without one is
    relabelled to one above its lowest residual neighbour. When a height
    below ``n`` becomes empty, every vertex above it (and below ``n``) is
    lifted to ``n + 1`` at once (gap heuristic). O(V^3).
    """

    def _solve(self, source: Vertex, sink: Vertex) -> T:
        n = self.n
        self._height = [0] * n
        self._height[source] = n
        self._count = [0] * (2 * n + 1)
        self._count[0] = n - 1
        self._count[n] = 1
        self._excess = [self.zero] * n
        self._excess[source] = self.inf
        self._arc = [0] * n
        self._queued = [False] * n
        self._active: deque = deque()
        self._terminals = (source, sink)

        for v in self._adj[source]:
            self._push_excess(source, v)

        relabels = 0
        while self._active:
            u = self._active.popleft()
            self._queued[u] = False
            relabels += self._discharge(u)
        _logger.debug("Push-relabel finished after %d relabels", relabels)
        return self._excess[sink]

    def _push_excess(self, u: Vertex, v: Vertex) -> bool:
        residual = self._residual(u, v)
        if not self._positive(residual):
            return False
        excess = self._excess[u]
        amount = excess if excess < residual else residual
        self._push(u, v, amount)
        self._excess[u] -= amount
        self._excess[v] += amount
        if (
            v not in self._terminals
            and not self._queued[v]
            and self._positive(self._excess[v])
        ):
            self._queued[v] = True
            self._active.append(v)
        return True

    def _discharge(self, u: Vertex) -> int:
        """Push out all excess of ``u``; returns the number of relabels."""
        edges = self._adj[u]
        height = self._height
        relabels = 0
        while self._positive(self._excess[u]):
            if self._arc[u] == len(edges):
                if not self._relabel(u):
                    break
                relabels += 1
                continue
            v = edges[self._arc[u]]
            if height[u] != height[v] + 1 or not self._push_excess(u, v):
                self._arc[u] += 1
        return relabels

    def _relabel(self, u: Vertex) -> bool:
        height = self._height
        lowest = None
        for v in self._adj[u]:
            if self._positive(self._residual(u, v)) and (
                lowest is None or height[v] < lowest
            ):
                lowest = height[v]
        if lowest is None:
            return False

        old = height[u]
        self._count[old] -= 1
        height[u] = lowest + 1
        self._count[height[u]] += 1
        self._arc[u] = 0
        if self._count[old] == 0 and old < self.n:
            self._gap(old)
        return True

    def _gap(self, empty: int) -> None:
        n = self.n
        height = self._height
        for w in range(n):
            if empty < height[w] < n:
                self._count[height[w]] -= 1
                height[w] = n + 1
                self._count[n + 1] += 1
                self._arc[w] = 0
