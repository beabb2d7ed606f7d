"""
Slice validation and scoring.

Checks each slice against the grid's constraints (max cells, minimum of
each ingredient) and checks the slice set as a whole for overlaps, gaps and
out-of-bounds boxes using Shapely. Invalid slices are reported, not removed.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from shapely.geometry import Polygon, box
from shapely.ops import unary_union

from pizza_slicing.contracts import Grid, Rectangle
from pizza_slicing.geometry import ingredient_counts

logger = logging.getLogger(__name__)

_AREA_TOL = 1e-9


@dataclass
class SliceViolation:
    """A single rule violation."""

    rule_name: str
    severity: str  # "error" or "warning"
    message: str
    slice_index: Optional[int] = None
    value: float = 0.0
    limit: float = 0.0


@dataclass
class PartitionReport:
    """Aggregate view of a slice set."""

    slice_count: int
    valid_count: int
    covered_cells: int
    score: int
    violations: List[SliceViolation] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == "warning")

    def to_dict(self) -> dict:
        return {
            "slice_count": self.slice_count,
            "valid_count": self.valid_count,
            "covered_cells": self.covered_cells,
            "score": self.score,
            "violations_error": self.error_count,
            "violations_warning": self.warning_count,
        }


def rectangle_to_box(rect: Rectangle) -> Polygon:
    """Shapely box in (x=col, y=row) cell-edge coordinates."""
    return box(rect.col, rect.row, rect.col + rect.width, rect.row + rect.height)


def is_valid_slice(rect: Rectangle) -> bool:
    """True when ``rect`` fits max_cells and holds enough of both ingredients."""
    if not rect.fits:
        return False
    mushrooms, tomatoes = ingredient_counts(rect)
    return mushrooms >= rect.min_ingredients and tomatoes >= rect.min_ingredients


def score_slices(slices: Sequence[Rectangle]) -> int:
    """Total area of valid slices."""
    return sum(rect.area for rect in slices if is_valid_slice(rect))


def check_slice(rect: Rectangle, index: Optional[int] = None) -> List[SliceViolation]:
    """Run the per-slice rules on ``rect``."""
    violations: List[SliceViolation] = []
    label = f"Slice {index}" if index is not None else "Slice"

    if not rect.fits:
        violations.append(
            SliceViolation(
                rule_name="max_cells",
                severity="error",
                message=f"{label} has {rect.area} cells > max {rect.max_cells}",
                slice_index=index,
                value=rect.area,
                limit=rect.max_cells,
            )
        )

    mushrooms, tomatoes = ingredient_counts(rect)
    for rule, count in (("min_mushroom", mushrooms), ("min_tomato", tomatoes)):
        if count < rect.min_ingredients:
            violations.append(
                SliceViolation(
                    rule_name=rule,
                    severity="warning",
                    message=(
                        f"{label} has {count} {rule[4:]} < minimum "
                        f"{rect.min_ingredients}"
                    ),
                    slice_index=index,
                    value=count,
                    limit=rect.min_ingredients,
                )
            )
    return violations


def check_partition(grid: Grid, slices: Sequence[Rectangle]) -> List[SliceViolation]:
    """Run per-slice rules plus overlap, coverage and bounds checks.

    Returns:
        List of violations (empty = a complete, valid partition).
    """
    violations: List[SliceViolation] = []
    for i, rect in enumerate(slices):
        violations.extend(check_slice(rect, i))

    violations.extend(_check_bounds(grid, slices))
    violations.extend(_check_overlap_and_coverage(grid, slices))
    return violations


def summarize(grid: Grid, slices: Sequence[Rectangle]) -> PartitionReport:
    """Build a PartitionReport for ``slices`` over ``grid``."""
    violations = check_partition(grid, slices)
    valid = [rect for rect in slices if is_valid_slice(rect)]
    report = PartitionReport(
        slice_count=len(slices),
        valid_count=len(valid),
        covered_cells=sum(rect.area for rect in slices),
        score=sum(rect.area for rect in valid),
        violations=violations,
    )
    logger.debug(
        "Report: slices=%d valid=%d errors=%d warnings=%d",
        report.slice_count, report.valid_count,
        report.error_count, report.warning_count,
    )
    return report


# ─── Whole-set checks ────────────────────────────────────────────────────────


def _check_bounds(grid: Grid, slices: Sequence[Rectangle]) -> List[SliceViolation]:
    grid_box = box(0, 0, grid.width, grid.height)
    violations = []
    for i, rect in enumerate(slices):
        if rect.area == 0 or not grid_box.covers(rectangle_to_box(rect)):
            violations.append(
                SliceViolation(
                    rule_name="out_of_bounds",
                    severity="error",
                    message=f"Slice {i} {rect.bounds} is empty or outside the grid",
                    slice_index=i,
                )
            )
    return violations


def _check_overlap_and_coverage(
    grid: Grid,
    slices: Sequence[Rectangle],
) -> List[SliceViolation]:
    violations = []
    boxes = [rectangle_to_box(rect) for rect in slices if rect.area > 0]
    union = unary_union(boxes) if boxes else Polygon()

    overlap = sum(b.area for b in boxes) - union.area
    if overlap > _AREA_TOL:
        violations.append(
            SliceViolation(
                rule_name="overlap",
                severity="error",
                message=f"Slices overlap on {overlap:.0f} cells",
                value=overlap,
                limit=0.0,
            )
        )

    grid_box = box(0, 0, grid.width, grid.height)
    gap = grid_box.difference(union).area if grid.area else 0.0
    if gap > _AREA_TOL:
        violations.append(
            SliceViolation(
                rule_name="coverage_gap",
                severity="warning",
                message=f"{gap:.0f} of {grid.area} cells are not covered",
                value=gap,
                limit=0.0,
            )
        )
    return violations
