"""
Tests for exact minimax evaluation of Hackenbush positions.

Known values follow the standard Blue-Red Hackenbush results: a blue edge
is +1, a red edge -1, a stalk's value halves with each colour change, and
values of disjoint components add.
"""

import os
import sys
import pytest
import numpy as np

# Ensure project root is on path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from game_search.minimax import EvaluatedPosition, evaluate, search_position
from hackenbush.errors import InvalidPosition
from hackenbush.generators import random_triangles, stalk
from hackenbush.position import Color, Edge, Position, apply_move, legal_moves
from surreals.arena import Arena
from surreals.value import Surreal

B, R = Color.BLUE, Color.RED


@pytest.fixture
def arena():
    return Arena()


class TestBasicValues:

    def test_terminal_is_zero(self, arena):
        result = evaluate(Position.empty(), B, arena)
        assert isinstance(result, EvaluatedPosition)
        assert result.value == Surreal.zero(arena)
        assert result.best_move is None

    def test_single_blue_edge(self, arena):
        pos = stalk([B])
        as_blue = evaluate(pos, B, arena)
        assert as_blue.value > Surreal.zero(arena)
        assert as_blue.value.approximate_real() == 1.0
        assert as_blue.best_move == 0

        as_red = evaluate(pos, R, arena)
        assert as_red.value == as_blue.value
        assert as_red.best_move is None

    def test_single_red_edge(self, arena):
        result = evaluate(stalk([R]), R, arena)
        assert result.value < Surreal.zero(arena)
        assert result.value.approximate_real() == -1.0
        assert result.best_move == 0
        assert evaluate(stalk([R]), B, arena).best_move is None

    def test_opposing_edges_cancel(self, arena):
        pos = Position.from_edges([(0, 1, B), (0, 2, R)])
        result = evaluate(pos, B, arena)
        assert result.value == Surreal.zero(arena)
        assert result.best_move == 0

    def test_two_blue_edges(self, arena):
        pos = Position.from_edges([(0, 1, B), (0, 2, B)])
        assert evaluate(pos, B, arena).value.approximate_real() == 2.0

    def test_blue_self_loop_counts_as_edge(self, arena):
        pos = Position.from_edges([(0, 0, B)])
        assert evaluate(pos, B, arena).value.approximate_real() == 1.0

    def test_string_perspective(self, arena):
        assert evaluate(stalk([B]), 'blue', arena).best_move == 0


class TestStalks:

    def test_blue_red_stalk_is_half(self, arena):
        result = evaluate(stalk([B, R]), B, arena)
        assert result.value.approximate_real() == 0.5

    def test_alternating_three_stalk(self, arena):
        pos = stalk([B, R, B])

        as_blue = evaluate(pos, B, arena)
        assert as_blue.value.approximate_real() == 0.75
        assert as_blue.value.birthday() == 3
        # cutting the top edge leaves 1/2; cutting the base leaves 0
        assert as_blue.best_move == 2

        as_red = evaluate(pos, R, arena)
        assert as_red.best_move == 1
        assert as_red.value == as_blue.value

    def test_best_move_leaves_best_continuation(self, arena):
        pos = stalk([B, R, B])
        best = evaluate(pos, B, arena).best_move
        chosen = evaluate(apply_move(pos, best), R, arena).value
        for handle in legal_moves(pos, B):
            other = evaluate(apply_move(pos, handle), R, arena).value
            assert other <= chosen

    def test_red_first_stalk(self, arena):
        # -1 + 1/2 + 1/4
        result = evaluate(stalk([R, B, B]), R, arena)
        assert result.value.approximate_real() == -0.25
        assert result.best_move == 0

    def test_value_equals_constructed_number(self, arena):
        zero = Surreal.zero(arena)
        one = Surreal.from_options(arena, left=zero)
        half = Surreal.from_options(arena, left=zero, right=one)
        three_quarters = Surreal.from_options(arena, left=half, right=one)
        assert evaluate(stalk([B, R, B]), B, arena).value == three_quarters


class TestSums:

    def test_disjoint_components_add(self, arena):
        # 3/4 + (-1) = -1/4
        pos = Position.from_edges([(0, 1, B), (1, 2, R), (2, 3, B), (0, 4, R)])
        result = evaluate(pos, B, arena)
        assert result.value.approximate_real() == -0.25
        assert result.value == evaluate(stalk([R, B, B]), B, arena).value

    def test_mirror_image_is_zero(self, arena):
        pos = Position.from_edges([
            (0, 1, B), (1, 2, R), (2, 3, B),
            (0, 4, R), (4, 5, B), (5, 6, R),
        ])
        assert evaluate(pos, B, arena).value == Surreal.zero(arena)


class TestSearchOptions:

    @pytest.mark.parametrize("seed", range(4))
    def test_cache_does_not_change_result(self, seed):
        pos = random_triangles(5, np.random.default_rng(seed))
        arena = Arena()
        cached = evaluate(pos, B, arena, use_cache=True)
        uncached = evaluate(pos, B, arena, use_cache=False)
        assert cached.value == uncached.value
        assert cached.best_move == uncached.best_move

    @pytest.mark.parametrize("seed", range(4))
    def test_threaded_root_matches_serial(self, seed):
        pos = random_triangles(5, np.random.default_rng(seed))
        serial = evaluate(pos, R, Arena())
        parallel_arena = Arena()
        parallel = evaluate(pos, R, parallel_arena, workers=4)
        assert parallel.best_move == serial.best_move
        assert parallel.value.approximate_real() == serial.value.approximate_real()

    def test_arena_shared_across_searches(self, arena):
        first = evaluate(stalk([B, R]), B, arena).value
        second = evaluate(Position.from_edges([(0, 1, B), (1, 2, R), (0, 3, B), (3, 4, R), (0, 5, R)]), B, arena).value
        # 1/2 + 1/2 - 1 = 0
        assert second == Surreal.zero(arena)
        assert first.index == evaluate(stalk([B, R]), R, arena).value.index

    def test_stats(self, arena):
        _, stats = search_position(stalk([B, R, B]), B, arena)
        for key in ('nodes_evaluated', 'cache_hits', 'arena_size', 'arena_day', 'time'):
            assert key in stats
        assert stats['nodes_evaluated'] > 0
        assert stats['arena_size'] == len(arena)

    def test_verbose_prints_summary(self, arena, capsys):
        search_position(stalk([B]), B, arena, verbose=True)
        assert "Search done" in capsys.readouterr().out

    def test_invalid_position_rejected(self, arena):
        pos = Position(frozenset({0, 1, 2}), (Edge(0, 0, 1, B),), 0)
        with pytest.raises(InvalidPosition):
            evaluate(pos, B, arena)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
