"""
Pytest tests for the dead stone classifier.
"""

import pytest
import numpy as np

from pseudo_board import EMPTY, BLACK, WHITE


def swap_colors(diagram):
    return diagram.replace('X', '_').replace('O', 'X').replace('_', 'O')


class TestClassifyRegions:

    @pytest.mark.unit
    def test_one_point_eye(self, build, as_xy, eye_diagram):
        board = build(eye_diagram)
        regions = board.classify_regions()

        assert len(regions) == 1
        assert regions[0].owner is BLACK
        assert as_xy(board, regions[0].vertices) == {(1, 1)}
        assert regions[0].dead == []
        assert board.floating_stones() == []

    @pytest.mark.unit
    def test_dead_stone_in_corner(self, build, as_xy, dead_corner_diagram):
        board = build(dead_corner_diagram)
        regions = board.classify_regions()

        assert [r.owner for r in regions] == [BLACK, BLACK]
        corner, outside = regions
        assert as_xy(board, corner.vertices) == {(0, 0), (1, 0), (0, 1), (1, 1)}
        assert as_xy(board, corner.dead) == {(0, 0)}
        assert len(outside.vertices) == 16
        assert outside.dead == []
        assert [board.to_xy(v) for v in board.floating_stones()] == [(0, 0)]

    @pytest.mark.unit
    def test_colors_are_symmetric(self, build, as_xy, dead_corner_diagram):
        board = build(swap_colors(dead_corner_diagram))
        regions = board.classify_regions()

        assert [r.owner for r in regions] == [WHITE, WHITE]
        dead = board.floating_stones()
        assert as_xy(board, dead) == {(0, 0)}
        assert board.get(dead[0]) is BLACK

    @pytest.mark.unit
    def test_shared_region_is_neutral(self, build, as_xy):
        board = build("X . . . O")
        regions = board.classify_regions()

        assert len(regions) == 1
        assert regions[0].owner is EMPTY
        assert as_xy(board, regions[0].vertices) == {(1, 0), (2, 0), (3, 0)}
        assert board.floating_stones() == []

    @pytest.mark.unit
    def test_one_stone_each_on_open_board(self, build):
        board = build("""
            . . . . .
            . . . . .
            . . O . .
            . . . . .
            . . . . X
        """)
        regions = board.classify_regions()
        assert len(regions) == 1
        assert regions[0].owner is EMPTY
        assert len(regions[0].vertices) == 23
        assert board.floating_stones() == []

    @pytest.mark.unit
    def test_single_flaw_is_tolerated(self, build, as_xy):
        board = build("X . X . O")
        regions = board.classify_regions()

        assert [r.owner for r in regions] == [BLACK, BLACK]
        assert as_xy(board, regions[0].vertices) == {(1, 0)}
        assert as_xy(board, regions[1].vertices) == {(3, 0), (4, 0)}
        assert as_xy(board, board.floating_stones()) == {(4, 0)}

    @pytest.mark.unit
    def test_board_without_empty_points(self, build):
        board = build("""
            X O
            O X
        """)
        assert board.classify_regions() == []
        assert board.floating_stones() == []

    @pytest.mark.unit
    def test_empty_board(self, board_class):
        board = board_class(9, 9)
        regions = board.classify_regions()
        # Nothing separates the colors, so neither side gets the region
        assert len(regions) == 1
        assert regions[0].owner is EMPTY
        assert len(regions[0].vertices) == 81

    @pytest.mark.unit
    def test_regions_do_not_overlap(self, build, dead_corner_diagram):
        board = build(dead_corner_diagram)
        seen = set()
        for region in board.classify_regions():
            assert not seen & set(region.vertices)
            seen.update(region.vertices)

    @pytest.mark.unit
    def test_does_not_mutate(self, build, dead_corner_diagram):
        board = build(dead_corner_diagram)
        before = board.data.copy()
        first = board.floating_stones()
        second = board.floating_stones()
        assert first == second
        assert np.array_equal(board.data, before)


@pytest.mark.integration
def test_capture_then_estimate(build, as_xy):
    board = build("""
        . X O . .
        X O . . .
        . X . . .
        . . . . .
        O . . . .
    """)
    captured = board.make_pseudo_move(BLACK, board.from_xy(2, 1))
    assert as_xy(board, captured) == {(1, 1)}
    dead = board.floating_stones()
    assert board.from_xy(1, 1) not in dead
    assert all(board.get(v).is_stone for v in dead)
