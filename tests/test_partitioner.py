"""Tests for partitioner.py — queue-driven recursive cutting."""
from collections import Counter

import pytest

from pizza_slicing.contracts import Grid, PartitionConfig, PartitionError
from pizza_slicing.geometry import ingredient_counts
from pizza_slicing.partitioner import partition


def _cells(rects):
    covered = Counter()
    for rect in rects:
        for r in range(rect.row, rect.row + rect.height):
            for c in range(rect.col, rect.col + rect.width):
                covered[(r, c)] += 1
    return covered


def _assert_exact_partition(grid, slices):
    covered = _cells(slices)
    assert len(covered) == grid.area
    assert all(n == 1 for n in covered.values())


class TestScenarios:
    """End-to-end partitions of small grids."""

    def test_whole_grid_fits(self, split_rows_grid):
        result = partition(split_rows_grid)
        assert len(result.slices) == 1
        only = result.slices[0]
        assert (only.row, only.col, only.width, only.height) == (0, 0, 2, 2)
        assert ingredient_counts(only) == (2, 2)
        assert result.steps == 0
        assert result.stop_reason == "whole_grid_fits"

    def test_forced_cuts(self, striped_grid):
        result = partition(striped_grid)
        assert len(result.slices) >= 2
        assert all(s.area <= 2 for s in result.slices)
        _assert_exact_partition(striped_grid, result.slices)

    def test_striped_grid_column_slices(self, striped_grid):
        result = partition(striped_grid)
        assert [(s.col, s.width, s.height) for s in result.slices] == [
            (0, 1, 2), (1, 1, 2), (2, 1, 2),
        ]
        assert all(ingredient_counts(s) == (1, 1) for s in result.slices)

    def test_single_cell_grid(self):
        grid = Grid.from_rows(["T"], min_ingredients=1, max_cells=1)
        result = partition(grid)
        assert len(result.slices) == 1
        assert result.slices[0].area == 1

    def test_single_cell_grid_that_cannot_fit(self):
        grid = Grid.from_rows(["T"], min_ingredients=1, max_cells=0)
        result = partition(grid)
        assert len(result.slices) == 1
        assert result.uncuttable_count == 1

    def test_empty_grid(self):
        grid = Grid.from_rows([], min_ingredients=1, max_cells=4)
        result = partition(grid)
        assert result.slices == []
        assert result.stop_reason == "empty_grid"


class TestInvariants:
    """Properties that hold for every partition."""

    @pytest.mark.parametrize("max_cells", [1, 2, 3, 6, 12])
    def test_partition_is_exact_and_fits(self, checker_grid, max_cells):
        grid = Grid(
            cells=checker_grid.cells,
            min_ingredients=checker_grid.min_ingredients,
            max_cells=max_cells,
        )
        result = partition(grid)
        _assert_exact_partition(grid, result.slices)
        assert all(s.area <= max_cells for s in result.slices)
        assert result.steps <= grid.area
        assert result.stop_reason == "queue_drained"

    def test_keeps_slices_below_minimum(self, mushroom_only_grid):
        result = partition(mushroom_only_grid)
        _assert_exact_partition(mushroom_only_grid, result.slices)
        # No slice can contain a tomato, yet all are kept
        assert all(ingredient_counts(s)[1] == 0 for s in result.slices)

    def test_trace_records_each_cut(self, example_grid):
        grid = Grid(cells=example_grid.cells, min_ingredients=1, max_cells=3)
        result = partition(grid)
        assert len(result.trace) == result.steps
        first = result.trace[0]
        assert first["step"] == 1
        assert first["rect"] == [0, 0, 2, 4]
        assert first["direction"] in ("up", "right")

    def test_trace_disabled(self, striped_grid):
        result = partition(striped_grid, PartitionConfig(record_trace=False))
        assert result.trace == []
        assert result.steps > 0

    def test_deterministic(self, checker_grid):
        first = partition(checker_grid).slices
        second = partition(checker_grid).slices
        assert first == second


class TestGuards:
    """Step budget and config validation."""

    def test_step_budget_exceeded(self, checker_grid):
        with pytest.raises(PartitionError):
            partition(checker_grid, PartitionConfig(max_steps=1))

    def test_invalid_config(self, checker_grid):
        with pytest.raises(ValueError):
            partition(checker_grid, PartitionConfig(max_steps=0))
        with pytest.raises(ValueError):
            partition(checker_grid, PartitionConfig(max_cut_offset=-1))

    def test_zero_offset_budget_still_terminates(self, checker_grid):
        result = partition(checker_grid, PartitionConfig(max_cut_offset=0))
        _assert_exact_partition(checker_grid, result.slices)
