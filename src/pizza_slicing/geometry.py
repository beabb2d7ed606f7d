"""
Region geometry: ingredient counts and centroids over grid rectangles.

All positions are in global grid coordinates using the cell-center
convention, so cell (row, col) sits at (col + 0.5, row + 0.5).
"""
import logging

import numpy as np

from pizza_slicing.contracts import Centroid, Counts, Ingredient, Rectangle

logger = logging.getLogger(__name__)


def count_ingredient(rect: Rectangle, kind: Ingredient) -> int:
    """Number of cells in ``rect`` holding ``kind``."""
    return int(np.count_nonzero(rect.cells == kind.value))


def ingredient_counts(rect: Rectangle) -> Counts:
    """(mushrooms, tomatoes) inside ``rect``."""
    return (
        count_ingredient(rect, Ingredient.MUSHROOM),
        count_ingredient(rect, Ingredient.TOMATO),
    )


def midpoint(rect: Rectangle) -> Centroid:
    """Geometric midpoint of ``rect``."""
    return Centroid(
        x=rect.col + rect.width / 2.0,
        y=rect.row + rect.height / 2.0,
    )


def weighted_centroid(rect: Rectangle, kind: Ingredient) -> Centroid:
    """Mean cell-center position of the ``kind`` cells in ``rect``.

    Falls back to the rectangle midpoint when no cell matches, so the
    result is always finite.
    """
    rows, cols = np.nonzero(rect.cells == kind.value)
    if rows.size == 0:
        logger.debug(
            "No %s in rect (%d,%d %dx%d); using midpoint",
            kind.name, rect.row, rect.col, rect.width, rect.height,
        )
        return midpoint(rect)
    return Centroid(
        x=rect.col + float(cols.mean()) + 0.5,
        y=rect.row + float(rows.mean()) + 0.5,
    )
