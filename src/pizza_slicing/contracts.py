"""Core types for the pizza slicing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

Counts = Tuple[int, int]  # (mushrooms, tomatoes)


class Ingredient(Enum):
    """The two cell contents a grid may hold."""
    MUSHROOM = "M"
    TOMATO = "T"


class CutDirection(Enum):
    """Cut axis.

    UP splits a rectangle into a left and a right part (columns, x axis).
    RIGHT splits it into a top and a bottom part (rows, y axis).
    """
    UP = "up"
    RIGHT = "right"


class Method(Enum):
    """Available slicing strategies."""
    CUT = "cut"
    POINT_EXPAND = "point_expand"


class PizzaLoadError(ValueError):
    """Input grid could not be read or is malformed."""
    pass


class PartitionError(RuntimeError):
    """Partitioner exceeded its step budget."""
    pass


@dataclass(frozen=True, eq=False)
class Grid:
    """Immutable ingredient map plus slicing constraints.

    ``cells`` has shape (height, width) and holds one-character strings.
    """
    cells: np.ndarray
    min_ingredients: int
    max_cells: int

    def __post_init__(self):
        cells = np.asarray(self.cells, dtype="<U1")
        if cells.ndim != 2:
            raise ValueError(f"Grid cells must be 2D, got shape {cells.shape}")
        cells = cells.copy()
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        min_ingredients: int,
        max_cells: int,
    ) -> "Grid":
        """Build a grid from equal-length row strings, e.g. ``["MM", "TT"]``."""
        if not rows:
            return cls(np.empty((0, 0), dtype="<U1"), min_ingredients, max_cells)
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ValueError(f"Rows have inconsistent widths: {sorted(widths)}")
        cells = np.array([list(r) for r in rows], dtype="<U1")
        return cls(cells, min_ingredients, max_cells)

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def area(self) -> int:
        return self.width * self.height

    def whole(self) -> "Rectangle":
        """Rectangle covering the entire grid."""
        return Rectangle(row=0, col=0, width=self.width, height=self.height, grid=self)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned window into a Grid.

    Constraints are read through the grid back-reference, never copied.
    """
    row: int
    col: int
    width: int
    height: int
    grid: Grid = field(compare=False, repr=False)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def min_ingredients(self) -> int:
        return self.grid.min_ingredients

    @property
    def max_cells(self) -> int:
        return self.grid.max_cells

    @property
    def fits(self) -> bool:
        """True when the rectangle satisfies the max-cells constraint."""
        return self.area <= self.grid.max_cells

    @property
    def cells(self) -> np.ndarray:
        """View (not a copy) of the grid cells under this rectangle."""
        return self.grid.cells[self.row:self.row + self.height,
                               self.col:self.col + self.width]

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Inclusive (r1, c1, r2, c2) corners."""
        return (
            self.row,
            self.col,
            self.row + self.height - 1,
            self.col + self.width - 1,
        )

    def extent(self, direction: CutDirection) -> int:
        """Length of the axis a cut in ``direction`` divides."""
        return self.width if direction is CutDirection.UP else self.height


@dataclass(frozen=True)
class Centroid:
    """Weighted position in global cell-center coordinates (x=col, y=row)."""
    x: float
    y: float


@dataclass
class PartitionConfig:
    """Configuration for the recursive partitioner."""
    max_steps: Optional[int] = None       # None = 2 * grid area
    max_cut_offset: Optional[int] = None  # None = rectangle extent
    record_trace: bool = True

    def validate(self) -> None:
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")
        if self.max_cut_offset is not None and self.max_cut_offset < 0:
            raise ValueError(
                f"max_cut_offset must be >= 0, got {self.max_cut_offset}"
            )
