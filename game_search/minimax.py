"""
Exact minimax evaluation of Hackenbush positions into surreal values.

Every legal move is tried for both players. BLUE (Left) keeps its best
option L = max child value, RED (Right) keeps R = min child value, and the
position's value is the canonical number {L | R} interned in the arena.

No rollouts or heuristics: recursion depth is bounded by the edge count,
which strictly shrinks with every move.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Optional

from hackenbush.position import Color, is_terminal, remove_edge
from surreals.value import Surreal


@dataclass
class EvaluatedPosition:
    """Value of a position plus the requested player's best move (or None)."""
    value: Surreal
    best_move: Optional[int]


@dataclass
class _SearchContext:
    arena: object
    use_cache: bool = True
    verbose: bool = False
    table: Dict[tuple, tuple] = field(default_factory=dict)
    nodes_evaluated: int = 0
    cache_hits: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)

    def count_node(self):
        with self.lock:
            self.nodes_evaluated += 1
            n = self.nodes_evaluated
        if self.verbose and n % 10000 == 0:
            print(f"  Search: nodes={n}, cache_hits={self.cache_hits}, "
                  f"arena_day={self.arena.day}, arena_size={len(self.arena)}")


def _fold_options(options, arena):
    """
    Pick each player's extremal option.

    Parameters:
        options: list of (handle, color, child_value) in move order

    Returns:
        (left_value, left_move, right_value, right_move); first optimal move
        wins ties.
    """
    left_value = left_move = right_value = right_move = None
    for handle, color, child in options:
        if color is Color.BLUE:
            if left_value is None or arena.less_than(left_value, child):
                left_value, left_move = child, handle
        else:
            if right_value is None or arena.less_than(child, right_value):
                right_value, right_move = child, handle
    return left_value, left_move, right_value, right_move


def _evaluate(position, perspective, ctx, executor=None):
    """
    Recursive core. Returns (value_index, best_blue_move, best_red_move).

    Children are evaluated from the inverted perspective; the child's value
    does not depend on it, only which best move gets reported.
    """
    ctx.count_node()
    if is_terminal(position):
        return ctx.arena.intern(None, None), None, None

    key = position.key()
    if ctx.use_cache:
        hit = ctx.table.get(key)
        if hit is not None:
            with ctx.lock:
                ctx.cache_hits += 1
            return hit

    moves = [(e.handle, e.color) for e in position.edges]
    child_perspective = perspective.invert()

    def _child_value(handle):
        child = remove_edge(position, handle)
        return _evaluate(child, child_perspective, ctx)[0]

    if executor is not None:
        child_values = list(executor.map(_child_value, [h for h, _ in moves]))
    else:
        child_values = [_child_value(h) for h, _ in moves]

    options = [(h, c, v) for (h, c), v in zip(moves, child_values)]
    left_value, left_move, right_value, right_move = _fold_options(options, ctx.arena)
    value = ctx.arena.intern(left_value, right_value)

    result = (value, left_move, right_move)
    if ctx.use_cache:
        ctx.table[key] = result
    return result


def search_position(position, perspective, arena, workers=None, use_cache=True,
                    verbose=False):
    """
    Evaluate a position and report search statistics.

    Parameters:
        position: hackenbush Position satisfying ground reachability
        perspective: Color whose best move is requested
        arena: surreals Arena that values are interned into
        workers: if > 1, evaluate root subtrees on that many threads
        use_cache: memoise sub-positions by Position.key() within this call
        verbose: print progress

    Returns:
        (EvaluatedPosition, stats)

    Raises:
        InvalidPosition: some node is not connected to ground.
    """
    position.validate()
    perspective = Color(perspective)

    ctx = _SearchContext(arena=arena, use_cache=use_cache, verbose=verbose)
    t0 = time.time()

    if workers is not None and workers > 1 and not is_terminal(position):
        with ThreadPoolExecutor(max_workers=workers) as executor:
            value, blue_move, red_move = _evaluate(position, perspective, ctx, executor)
    else:
        value, blue_move, red_move = _evaluate(position, perspective, ctx)

    best_move = blue_move if perspective is Color.BLUE else red_move
    evaluated = EvaluatedPosition(value=Surreal(arena, value), best_move=best_move)

    stats = {
        'nodes_evaluated': ctx.nodes_evaluated,
        'cache_hits': ctx.cache_hits,
        'arena_size': len(arena),
        'arena_day': arena.day,
        'time': time.time() - t0,
    }
    if verbose:
        print(f"  Search done: value~{evaluated.value.approximate_real():g}, "
              f"best_move={best_move}, nodes={stats['nodes_evaluated']}, "
              f"time={stats['time']:.2f}s")
    return evaluated, stats


def evaluate(position, perspective, arena, workers=None, use_cache=True):
    """Value of `position` and `perspective`'s best move (None if it has none)."""
    evaluated, _ = search_position(position, perspective, arena,
                                   workers=workers, use_cache=use_cache)
    return evaluated
