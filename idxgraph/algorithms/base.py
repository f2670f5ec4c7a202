"""Vertex, accessor and numeric types shared by the algorithm modules."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Optional, Protocol, Sequence, TypeVar

#: Index of a vertex in ``[0, n)``.
Vertex = int

#: Marker for "no vertex": missing predecessor, unmatched vertex, or a vertex
#: outside the rooted tree.
NO_VERTEX: Vertex = -1

#: Opaque edge payload stored in an adjacency list.
E = TypeVar("E")

#: Maps an edge payload to the index of its target vertex.
IndexFn = Callable[[Any], Vertex]

#: Maps an edge payload to its numeric weight.
WeightFn = Callable[[Any], Any]

#: Vertex-indexed adjacency list.
AdjList = Sequence[Sequence[Any]]


class Numeric(Protocol):
    """Minimal arithmetic needed by the weighted and flow algorithms.

    ``int``, ``float`` and ``fractions.Fraction`` satisfy it, as does any
    field-element type providing the same operators.
    """

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...

    def __truediv__(self, other: Any) -> Any: ...

    def __lt__(self, other: Any) -> bool: ...

    def __le__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=Numeric)


class DfsEdge(IntEnum):
    """Kind of event produced by ``iterative_dfs``."""

    #: Edge leading to the vertex it discovers (``parent == child`` for a root).
    FORWARD = 1
    #: Returning from a finished vertex to its parent.
    REVERSE = -1
    #: Edge to a vertex that was already discovered.
    NONTREE = 0


def identity(edge: Any) -> Vertex:
    """Index accessor for adjacency lists holding plain vertex indices."""
    return edge


def edge_target(edge: Sequence[Any]) -> Vertex:
    """Index accessor for ``(target, weight, ...)`` edges."""
    return edge[0]


def edge_weight(edge: Sequence[Any]) -> Any:
    """Weight accessor for ``(target, weight, ...)`` edges."""
    return edge[1]


def resolve_index_fn(index_f: Optional[IndexFn]) -> IndexFn:
    return identity if index_f is None else index_f
