"""Tests for cut_evaluator.py — axis candidates, scoring and offset search."""
from collections import Counter

import pytest

from pizza_slicing.contracts import CutDirection, Grid, Ingredient, Rectangle
from pizza_slicing.cut_evaluator import (
    choose_better_cut,
    cut_quality,
    evaluate_cut,
    split,
    validity_score,
)


def _cells(rects):
    covered = Counter()
    for rect in rects:
        for r in range(rect.row, rect.row + rect.height):
            for c in range(rect.col, rect.col + rect.width):
                covered[(r, c)] += 1
    return covered


class TestEvaluateCut:
    """Single-axis cut evaluation."""

    def test_up_splits_columns(self, striped_grid):
        cand = evaluate_cut(striped_grid.whole(), CutDirection.UP)
        left, right = cand.pieces
        assert cand.cut_position == 2
        assert (left.row, left.col, left.width, left.height) == (0, 0, 1, 2)
        assert (right.row, right.col, right.width, right.height) == (0, 1, 2, 2)
        assert cand.counts == ((1, 1), (2, 2))

    def test_right_splits_rows(self, striped_grid):
        cand = evaluate_cut(striped_grid.whole(), CutDirection.RIGHT)
        top, bottom = cand.pieces
        assert (top.row, top.height, top.width) == (0, 1, 3)
        assert (bottom.row, bottom.height, bottom.width) == (1, 1, 3)
        # top row is "TTT", bottom row is "MMM"
        assert cand.counts == ((0, 3), (3, 0))

    def test_pieces_partition_parent(self, checker_grid):
        parents = [
            checker_grid.whole(),
            Rectangle(0, 0, 4, 3, checker_grid),
            Rectangle(2, 3, 7, 5, checker_grid),
            Rectangle(5, 1, 2, 3, checker_grid),
            Rectangle(0, 9, 1, 8, checker_grid),
        ]
        for parent in parents:
            for direction in CutDirection:
                for offset in range(4):
                    cand = evaluate_cut(parent, direction, offset)
                    if cand is None:
                        assert parent.extent(direction) < 2
                        continue
                    assert all(p.area > 0 for p in cand.pieces)
                    assert _cells(cand.pieces) == _cells([parent])

    def test_pieces_inherit_constraints(self, example_grid):
        cand = evaluate_cut(example_grid.whole(), CutDirection.UP)
        for piece in cand.pieces:
            assert piece.grid is example_grid
            assert piece.min_ingredients == 1
            assert piece.max_cells == 6

    def test_round_half_away_from_zero(self):
        # Centroid x = 2.5 -> cut position 3 (banker's rounding would give 2)
        grid = Grid.from_rows(["MTMTM"], min_ingredients=1, max_cells=2)
        cand = evaluate_cut(grid.whole(), CutDirection.UP)
        assert cand.cut_position == 3
        assert cand.pieces[0].width == 2

    def test_offset_shifts_cut(self, example_grid):
        base = evaluate_cut(example_grid.whole(), CutDirection.UP, 0)
        shifted = evaluate_cut(example_grid.whole(), CutDirection.UP, 1)
        assert shifted.cut_position == base.cut_position + 1
        assert shifted.pieces[0].width == base.pieces[0].width + 1

    def test_large_offset_clamped_inside_rectangle(self, example_grid):
        cand = evaluate_cut(example_grid.whole(), CutDirection.UP, 10)
        assert cand.pieces[0].width == 4
        assert cand.pieces[1].width == 1

    def test_single_ingredient_region_gives_valid_cut(self, mushroom_only_grid):
        cand = evaluate_cut(mushroom_only_grid.whole(), CutDirection.UP)
        assert isinstance(cand.cut_position, int)
        assert cand.cut_position >= 1
        assert [p.width for p in cand.pieces] == [1, 3]

    def test_unknown_only_region_uses_midpoint(self):
        grid = Grid.from_rows(["XX", "XX"], min_ingredients=0, max_cells=1)
        cand = evaluate_cut(grid.whole(), CutDirection.RIGHT)
        assert [p.height for p in cand.pieces] == [1, 1]

    def test_narrow_axis_not_cuttable(self):
        grid = Grid.from_rows(["MTMT"], min_ingredients=1, max_cells=2)
        assert evaluate_cut(grid.whole(), CutDirection.RIGHT) is None
        assert evaluate_cut(grid.whole(), CutDirection.UP) is not None

    def test_minority_ingredient(self, example_grid):
        cand = evaluate_cut(example_grid.whole(), CutDirection.UP)
        assert cand.minority is Ingredient.MUSHROOM

        grid = Grid.from_rows(["MMM", "MTM"], min_ingredients=1, max_cells=3)
        cand = evaluate_cut(grid.whole(), CutDirection.UP)
        assert cand.minority is Ingredient.TOMATO


class TestScoring:
    """Validity score and balance quality."""

    def test_validity_scores(self, striped_grid):
        up = evaluate_cut(striped_grid.whole(), CutDirection.UP)
        right = evaluate_cut(striped_grid.whole(), CutDirection.RIGHT)
        assert validity_score(up) == 2
        assert validity_score(right) == 0

    def test_quality_compares_both_pieces(self, example_grid):
        cand = evaluate_cut(example_grid.whole(), CutDirection.UP)
        # left cols 0-1: 1 M, 5 T; right cols 2-4: 2 M, 7 T
        assert cand.counts == ((1, 5), (2, 7))
        assert cut_quality(cand) == 1 + 4
        assert cand.quality == cut_quality(cand)

    def test_to_dict(self, striped_grid):
        payload = evaluate_cut(striped_grid.whole(), CutDirection.UP).to_dict()
        assert payload["direction"] == "up"
        assert payload["pieces"] == [[0, 0, 1, 0], [0, 1, 1, 2]]
        assert payload["validity_score"] == 2


class TestChooseBetterCut:
    """Axis selection, tie-breaks and offset search."""

    def test_higher_validity_wins(self, striped_grid):
        best = choose_better_cut(striped_grid.whole())
        assert best.direction is CutDirection.UP
        assert best.validity_score == 2
        assert best.offset == 0

    def test_quality_tiebreak_prefers_imbalanced_rows(self):
        grid = Grid.from_rows(["MMMM", "TTTT"], min_ingredients=0, max_cells=4)
        best = choose_better_cut(grid.whole())
        # UP quality 8, RIGHT quality 32
        assert best.direction is CutDirection.RIGHT

    def test_quality_tiebreak_prefers_imbalanced_columns(self):
        grid = Grid.from_rows(["MT", "MT", "MT", "MT"], min_ingredients=0, max_cells=4)
        best = choose_better_cut(grid.whole())
        assert best.direction is CutDirection.UP

    def test_exact_tie_goes_right(self):
        grid = Grid.from_rows(["MT", "TM"], min_ingredients=1, max_cells=2)
        best = choose_better_cut(grid.whole())
        assert best.direction is CutDirection.RIGHT
        assert best.validity_score == 2

    def test_offset_search_finds_two_valid_pieces(self):
        grid = Grid.from_rows(["MMMTMT"], min_ingredients=1, max_cells=3)
        best = choose_better_cut(grid.whole())
        assert best.offset == 2
        assert best.validity_score == 2
        assert [p.width for p in best.pieces] == [4, 2]

    def test_offset_search_bounded(self):
        grid = Grid.from_rows(["MMMTMT"], min_ingredients=1, max_cells=3)
        best = choose_better_cut(grid.whole(), max_offset=1)
        # Neither offset 0 nor 1 reaches 2; the earliest best is kept.
        assert best.offset == 0
        assert best.validity_score == 1

    def test_no_valid_cut_returns_best_found(self):
        grid = Grid.from_rows(["MMMMMT"], min_ingredients=1, max_cells=3)
        best = choose_better_cut(grid.whole())
        assert best is not None
        assert best.validity_score == 1
        assert best.offset == 0

    def test_single_cell_not_cuttable(self):
        grid = Grid.from_rows(["M"], min_ingredients=1, max_cells=0)
        assert choose_better_cut(grid.whole()) is None

    @pytest.mark.parametrize("offset", [0, 3])
    def test_start_offset_respected(self, checker_grid, offset):
        best = choose_better_cut(checker_grid.whole(), offset=offset)
        assert best.offset >= offset
