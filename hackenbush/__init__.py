"""
Blue-Red Hackenbush game model.

Positions, legal moves and the ground-pruning move rule, plus builders for
starting positions.
"""

from hackenbush.errors import InvalidMove, InvalidPosition
from hackenbush.position import (
    Color,
    Edge,
    Position,
    apply_move,
    edge_color,
    is_terminal,
    legal_moves,
    remove_edge,
)
from hackenbush.generators import random_triangles, stalk

__all__ = [
    'Color', 'Edge', 'Position', 'InvalidMove', 'InvalidPosition',
    'apply_move', 'edge_color', 'is_terminal', 'legal_moves', 'remove_edge',
    'random_triangles', 'stalk',
]
