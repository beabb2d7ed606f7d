"""
Recursive greedy partitioner.

Keeps a FIFO of rectangles still larger than the max-cells constraint and
cuts the front one until the queue drains. Pieces that fit are accepted as
finished slices whether or not they meet the ingredient minimums; there is
no backtracking.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from pizza_slicing.contracts import Grid, PartitionConfig, PartitionError, Rectangle
from pizza_slicing.cut_evaluator import choose_better_cut

logger = logging.getLogger(__name__)


@dataclass
class PartitionResult:
    """Result of partitioning a grid."""
    slices: List[Rectangle]
    steps: int = 0
    stop_reason: str = ""
    trace: List[dict] = field(default_factory=list)
    uncuttable_count: int = 0


def partition(grid: Grid, config: Optional[PartitionConfig] = None) -> PartitionResult:
    """Partition ``grid`` into slices no larger than ``grid.max_cells``.

    Raises:
        PartitionError: if more than ``config.max_steps`` cuts are needed.
    """
    if config is None:
        config = PartitionConfig()
    config.validate()

    if grid.area == 0:
        logger.info("Empty grid; nothing to slice")
        return PartitionResult(slices=[], stop_reason="empty_grid")

    whole = grid.whole()
    if whole.fits:
        logger.info(
            "Whole grid (%d cells) fits max_cells=%d; single slice",
            grid.area, grid.max_cells,
        )
        return PartitionResult(slices=[whole], stop_reason="whole_grid_fits")

    # At most area - 1 cuts plus one step per uncuttable single cell.
    max_steps = config.max_steps if config.max_steps is not None else 2 * grid.area
    finished: List[Rectangle] = []
    pending: Deque[Rectangle] = deque([whole])
    trace: List[dict] = []
    steps = 0
    uncuttable = 0

    while pending:
        if steps >= max_steps:
            raise PartitionError(
                f"Partition did not converge within {max_steps} steps "
                f"({len(pending)} rectangles pending, {len(finished)} finished)"
            )
        rect = pending.popleft()
        steps += 1

        candidate = choose_better_cut(rect, max_offset=config.max_cut_offset)
        if candidate is None:
            logger.warning(
                "Rect (%d,%d %dx%d) cannot be cut; accepting oversize slice",
                rect.row, rect.col, rect.width, rect.height,
            )
            finished.append(rect)
            uncuttable += 1
            continue

        for piece in candidate.pieces:
            if piece.fits:
                finished.append(piece)
            else:
                pending.append(piece)

        if config.record_trace:
            entry = {"step": steps, "rect": list(rect.bounds)}
            entry.update(candidate.to_dict())
            trace.append(entry)

    logger.info(
        "Partition complete: slices=%d steps=%d uncuttable=%d",
        len(finished), steps, uncuttable,
    )
    return PartitionResult(
        slices=finished,
        steps=steps,
        stop_reason="queue_drained",
        trace=trace,
        uncuttable_count=uncuttable,
    )
