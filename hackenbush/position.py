"""
Blue-Red Hackenbush positions.

A position is an undirected multigraph with one distinguished ground node.
Each edge is coloured BLUE (player A, Left) or RED (player B, Right); a
player moves by deleting one edge of their colour, after which everything no
longer connected to ground falls away.

Positions are immutable: apply_move always returns a new Position, so a
single parent can be shared across sibling branches of a search.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from hackenbush.errors import InvalidMove, InvalidPosition


class Color(Enum):
    BLUE = 'blue'   # player A / Left, positive values
    RED = 'red'     # player B / Right, negative values

    def invert(self):
        return Color.RED if self is Color.BLUE else Color.BLUE


@dataclass(frozen=True)
class Edge:
    handle: int
    u: int
    v: int
    color: Color


def _reachable(ground, edges):
    """Set of nodes reachable from ground through `edges`."""
    adjacency = {}
    for e in edges:
        adjacency.setdefault(e.u, []).append(e.v)
        adjacency.setdefault(e.v, []).append(e.u)

    seen = {ground}
    queue = deque([ground])
    while queue:
        node = queue.popleft()
        for nbr in adjacency.get(node, ()):
            if nbr not in seen:
                seen.add(nbr)
                queue.append(nbr)
    return seen


@dataclass(frozen=True)
class Position:
    """Immutable Hackenbush position. Edges are kept sorted by handle."""
    nodes: FrozenSet[int]
    edges: Tuple[Edge, ...]
    ground: int = 0

    @classmethod
    def from_edges(cls, edge_list, ground=0):
        """
        Build and validate a position from (u, v, color) triples.

        Handles are assigned 0..n-1 in list order and stay stable for every
        position derived from this one.
        """
        edges = tuple(
            Edge(handle, int(u), int(v), Color(color))
            for handle, (u, v, color) in enumerate(edge_list)
        )
        nodes = {ground}
        for e in edges:
            nodes.add(e.u)
            nodes.add(e.v)
        position = cls(frozenset(nodes), edges, ground)
        position.validate()
        return position

    @classmethod
    def empty(cls, ground=0):
        return cls(frozenset([ground]), (), ground)

    def validate(self):
        """Raise InvalidPosition unless every node hangs off ground."""
        if self.ground not in self.nodes:
            raise InvalidPosition(f"ground node {self.ground} is not in the position")
        handles = set()
        for e in self.edges:
            if e.u not in self.nodes or e.v not in self.nodes:
                raise InvalidPosition(
                    f"edge {e.handle} joins {e.u}-{e.v}, which are not both nodes"
                )
            if e.handle in handles:
                raise InvalidPosition(f"duplicate edge handle {e.handle}")
            handles.add(e.handle)
        unreachable = self.nodes - _reachable(self.ground, self.edges)
        if unreachable:
            raise InvalidPosition(
                f"nodes {sorted(unreachable)} are not connected to ground"
            )

    def edge(self, handle):
        for e in self.edges:
            if e.handle == handle:
                return e
        raise InvalidMove(f"edge {handle} is not in the position")

    def key(self):
        """Canonical encoding; identifies a position among those derived from one root."""
        return tuple(e.handle for e in self.edges)

    def __len__(self):
        return len(self.edges)


def legal_moves(position, player: Optional[Color] = None):
    """
    Edge handles that can be removed, in ascending handle order.

    With `player` given, only that player's edges are returned; otherwise
    every edge (each is legal for the player matching its colour).
    """
    return [e.handle for e in position.edges if player is None or e.color is player]


def edge_color(position, handle):
    return position.edge(handle).color


def is_terminal(position):
    return not position.edges


def remove_edge(position, handle):
    """apply_move without the checks, for callers already holding a valid position."""
    remaining = [e for e in position.edges if e.handle != handle]
    alive = _reachable(position.ground, remaining)
    edges = tuple(e for e in remaining if e.u in alive and e.v in alive)
    return Position(frozenset(position.nodes & alive), edges, position.ground)


def apply_move(position, handle):
    """
    Remove an edge, then drop everything disconnected from ground.

    Returns a new Position; the input is left untouched.

    Raises:
        InvalidPosition: the input violates ground reachability.
        InvalidMove: no edge with this handle is present.
    """
    position.validate()
    if not any(e.handle == handle for e in position.edges):
        raise InvalidMove(f"edge {handle} is not in the position")
    return remove_edge(position, handle)
