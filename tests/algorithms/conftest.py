"""Sample graphs shared by the algorithm tests.

Edges are ``(target, weight)`` pairs; ``target`` is the fixture returning the
matching index accessor.
"""

import pytest


@pytest.fixture
def target():
    return lambda edge: edge[0]


@pytest.fixture
def dag_neg():
    # No cycles, negative weights, several weakly connected components.
    #
    #   3 ──► 2 ──► 0 ──► 4      5 ──► 6 ◄── 7     8 ──► 10    9
    #   │           ▲     ▲      │
    #   └──► 1 ─────┘─────┘ ◄────┘
    return [
        [(4, 10)],
        [(4, 7), (0, 3)],
        [(0, 5)],
        [(2, -4), (0, 6), (1, 8), (4, 5)],
        [],
        [(1, -2), (6, 6)],
        [],
        [(6, 7)],
        [(10, -5)],
        [],
        [],
    ]


@pytest.fixture
def cyc_neg():
    # Cycles 0-2-3-1-0 and 4-5-6-4, negative weights, no negative cycle.
    # Vertex 7 has three parallel edges to 5.
    return [
        [(2, -2)],
        [(0, 4), (2, 3)],
        [(3, 2)],
        [(1, -1), (4, -8)],
        [(5, 2)],
        [(6, 3)],
        [(4, 7)],
        [(5, 10), (5, 6), (5, 11)],
    ]


@pytest.fixture
def cyc_pos():
    # Same shape as cyc_neg with positive weights and an extra edge 1 -> 4.
    return [
        [(2, 2)],
        [(0, 4), (2, 3), (4, 20)],
        [(3, 2)],
        [(1, 1), (4, 8)],
        [(5, 2)],
        [(6, 3)],
        [(4, 7)],
        [(5, 10), (5, 6), (5, 11)],
    ]


@pytest.fixture
def cyc_undir():
    # Undirected, three components:
    #   0..9   : blocks {0,5,7,8,9}, {9,3,6}, {4,1,2}; bridge 4-9
    #   10..12 : path 10-11-12 (two bridges)
    #   13..17 : triangles 13-14-15 and 15-16-17 sharing 15
    return [
        [(5, 21), (7, 28), (8, 23)],
        [(2, 31), (4, 33)],
        [(1, 27), (4, 35)],
        [(6, 28), (9, 26)],
        [(1, 34), (2, 28), (9, 34)],
        [(0, 31), (7, 26), (9, 29)],
        [(3, 25), (9, 28)],
        [(0, 32), (5, 33), (8, 31), (9, 30)],
        [(0, 29), (7, 35)],
        [(4, 26), (5, 28), (6, 30), (7, 32), (3, 24)],
        [(11, 45)],
        [(10, 38), (12, 45)],
        [(11, 42)],
        [(14, 55), (15, 57)],
        [(13, 57), (15, 54)],
        [(13, 53), (14, 52), (16, 54), (17, 50)],
        [(15, 58), (17, 55)],
        [(15, 58), (16, 56)],
    ]


@pytest.fixture
def small_tree():
    #     0
    #    / \
    #   1   2
    #       |
    #       3
    return [[1, 2], [0], [0, 3], [2]]
