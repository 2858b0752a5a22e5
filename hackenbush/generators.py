"""
Builders for starting positions.

Only topology is produced here; node coordinates are a rendering concern.
"""

import numpy as np

from hackenbush.position import Color, Position


def stalk(colors, ground=0):
    """
    A single path growing out of ground.

    colors[0] is the edge touching ground, colors[-1] the top edge.
    """
    edges = []
    prev = ground
    for i, color in enumerate(colors, start=1):
        node = ground + i
        edges.append((prev, node, Color(color)))
        prev = node
    return Position.from_edges(edges, ground=ground)


def random_triangles(size, rng=None):
    """
    Random triangulated blob hanging off ground.

    Node 0 is ground and is joined to node 1. Every further node picks a
    random "free" edge (a, b), connects to both endpoints and thereby forms a
    triangle; the split edge leaves the free pool and the two new edges join
    it. Edge colours alternate from a random starting colour.

    Parameters:
        size: total number of nodes including ground (>= 2)
        rng: numpy.random.Generator, or an int seed, or None

    Returns:
        Position with 2*size - 3 edges.
    """
    if size < 2:
        raise ValueError(f"size must be at least 2, got {size}")
    rng = np.random.default_rng(rng)

    current = Color.BLUE if rng.integers(0, 2) else Color.RED
    edges = [(0, 1, current)]
    current = current.invert()
    free = [0]  # indices into `edges`

    for node in range(2, size):
        pick = int(rng.integers(0, len(free)))
        a, b, _ = edges[free.pop(pick)]

        edges.append((node, a, current))
        current = current.invert()
        edges.append((node, b, current))
        current = current.invert()

        free.append(len(edges) - 2)
        free.append(len(edges) - 1)

    return Position.from_edges(edges, ground=0)
