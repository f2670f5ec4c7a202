"""Types and data structures for algorithm results.

Defines immutable summary containers for algorithm outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from idxgraph.algorithms.base import Vertex

#: Directed edge of a capacity matrix: ``(row, column)``.
MatrixEdge = Tuple[Vertex, Vertex]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        source: Source vertex of the computation.
        sink: Sink vertex of the computation.
        total_flow: Maximum flow value achieved.
        edge_flow: Flow matrix; ``edge_flow[i][j]`` is the flow on ``i -> j``.
        reachable: Vertices reachable from the source in the residual graph,
            sorted. They form the source side of a minimum cut.
        min_cut: Edges from ``reachable`` to the other vertices that carry
            capacity, sorted. All of them are saturated.
    """

    source: Vertex
    sink: Vertex
    total_flow: Any
    edge_flow: List[List[Any]]
    reachable: List[Vertex]
    min_cut: List[MatrixEdge]
