"""
Exact game-tree search for Blue-Red Hackenbush.

Positions are folded into canonical surreal values by full minimax over
every legal move, with an optional per-call transposition table and
optional thread-parallel evaluation of the root's subtrees.
"""

from game_search.minimax import EvaluatedPosition, evaluate, search_position

__all__ = ['EvaluatedPosition', 'evaluate', 'search_position']
