"""
Cut evaluation for the greedy partitioner.

A cut position is derived from the count-weighted centroid of both
ingredients. Candidates along the two axes are ranked by how many pieces
satisfy the ingredient minimums, then by how unevenly the ingredients are
spread between the two pieces. When neither axis yields two valid pieces
the cut position is pushed forward one cell at a time.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from pizza_slicing.contracts import (
    Centroid, Counts, CutDirection, Ingredient, Rectangle,
)
from pizza_slicing.geometry import ingredient_counts, midpoint, weighted_centroid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CutCandidate:
    """One evaluated cut of a rectangle."""
    direction: CutDirection
    offset: int
    cut_position: int
    pieces: Tuple[Rectangle, Rectangle]
    counts: Tuple[Counts, Counts]  # per piece (mushrooms, tomatoes)
    minority: Ingredient

    @property
    def validity_score(self) -> int:
        return validity_score(self)

    @property
    def quality(self) -> int:
        return cut_quality(self)

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "offset": self.offset,
            "cut_position": self.cut_position,
            "pieces": [list(p.bounds) for p in self.pieces],
            "counts": [list(c) for c in self.counts],
            "minority": self.minority.name.lower(),
            "validity_score": self.validity_score,
            "quality": self.quality,
        }


def _round_half_away(value: float) -> int:
    """Round to nearest, ties away from zero (Python's round() is banker's)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _is_valid_piece(counts: Counts, min_ingredients: int) -> bool:
    mushrooms, tomatoes = counts
    return mushrooms >= min_ingredients and tomatoes >= min_ingredients


def validity_score(candidate: CutCandidate) -> int:
    """How many of the two pieces meet the minimum for both ingredients."""
    min_ingredients = candidate.pieces[0].min_ingredients
    return sum(
        1 for counts in candidate.counts
        if _is_valid_piece(counts, min_ingredients)
    )


def cut_quality(candidate: CutCandidate) -> int:
    """Squared ingredient-count differences between the two pieces."""
    (m1, t1), (m2, t2) = candidate.counts
    return (m1 - m2) ** 2 + (t1 - t2) ** 2


def combined_centroid(rect: Rectangle) -> Tuple[Centroid, Ingredient]:
    """Count-weighted centroid of both ingredients, plus the minority kind."""
    mc, tc = ingredient_counts(rect)
    minority = Ingredient.TOMATO if mc > tc else Ingredient.MUSHROOM

    total = mc + tc
    if total == 0:
        return midpoint(rect), minority

    mcent = weighted_centroid(rect, Ingredient.MUSHROOM)
    tcent = weighted_centroid(rect, Ingredient.TOMATO)
    wc = Centroid(
        x=(mcent.x * mc + tcent.x * tc) / total,
        y=(mcent.y * mc + tcent.y * tc) / total,
    )
    return wc, minority


def split(
    rect: Rectangle,
    direction: CutDirection,
    index: int,
) -> Tuple[Rectangle, Rectangle]:
    """Split ``rect`` so the first piece spans local indices [0, index)."""
    extent = rect.extent(direction)
    if not 0 < index < extent:
        raise ValueError(
            f"Split index {index} out of range for extent {extent}"
        )
    if direction is CutDirection.UP:
        return (
            Rectangle(rect.row, rect.col, index, rect.height, rect.grid),
            Rectangle(rect.row, rect.col + index, rect.width - index,
                      rect.height, rect.grid),
        )
    return (
        Rectangle(rect.row, rect.col, rect.width, index, rect.grid),
        Rectangle(rect.row + index, rect.col, rect.width,
                  rect.height - index, rect.grid),
    )


def evaluate_cut(
    rect: Rectangle,
    direction: CutDirection,
    offset: int = 0,
) -> Optional[CutCandidate]:
    """Cut ``rect`` along ``direction`` at its centroid shifted by ``offset``.

    Args:
        rect: Rectangle to cut.
        direction: UP divides columns, RIGHT divides rows.
        offset: Cells to push the cut position forward.

    Returns:
        The candidate, or None if the rectangle is a single cell wide
        along that axis.
    """
    extent = rect.extent(direction)
    if extent < 2:
        return None

    wc, minority = combined_centroid(rect)
    if direction is CutDirection.UP:
        local = wc.x - rect.col
    else:
        local = wc.y - rect.row

    cut_position = max(1, _round_half_away(local) + offset)
    # Piece 1 takes cut_position - 1 cells; both pieces stay non-empty.
    index = min(max(cut_position - 1, 1), extent - 1)

    pieces = split(rect, direction, index)
    return CutCandidate(
        direction=direction,
        offset=offset,
        cut_position=cut_position,
        pieces=pieces,
        counts=(ingredient_counts(pieces[0]), ingredient_counts(pieces[1])),
        minority=minority,
    )


def _pick(
    up: Optional[CutCandidate],
    right: Optional[CutCandidate],
) -> Tuple[Optional[CutCandidate], bool]:
    """Choose between axis candidates. Returns (winner, decided_by_score)."""
    if up is None or right is None:
        return (up if right is None else right), False

    if up.validity_score > right.validity_score:
        return up, True
    if up.validity_score < right.validity_score:
        return right, True

    if up.quality > right.quality:
        return up, False
    return right, False


def choose_better_cut(
    rect: Rectangle,
    offset: int = 0,
    max_offset: Optional[int] = None,
) -> Optional[CutCandidate]:
    """Pick the better of the UP and RIGHT cuts of ``rect``.

    The offset search stops at the first axis decision made on validity
    score, at a candidate with two valid pieces, or at ``max_offset``. A
    later offset only replaces the current best when it scores strictly
    higher.

    Returns:
        The chosen candidate, or None if ``rect`` cannot be cut at all.
    """
    if max_offset is None:
        max_offset = max(rect.width, rect.height) - 1
    max_offset = max(max_offset, offset)

    best: Optional[CutCandidate] = None
    for k in range(offset, max_offset + 1):
        up = evaluate_cut(rect, CutDirection.UP, k)
        right = evaluate_cut(rect, CutDirection.RIGHT, k)
        winner, decided = _pick(up, right)
        if winner is None:
            return None

        if best is None or winner.validity_score > best.validity_score:
            best = winner
        if decided or winner.validity_score >= 2:
            break

    logger.debug(
        "Cut (%d,%d %dx%d): %s at %d offset=%d score=%d quality=%d",
        rect.row, rect.col, rect.width, rect.height,
        best.direction.value, best.cut_position, best.offset,
        best.validity_score, best.quality,
    )
    return best
