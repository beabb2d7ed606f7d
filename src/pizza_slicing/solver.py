"""
Solver facade: strategy selection over a loaded grid.

Only the cut method is functional. The point-expand slot exists so callers
can select it, but it raises rather than returning an empty answer.
"""
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from pizza_slicing.contracts import Grid, Method, PartitionConfig, Rectangle
from pizza_slicing.partitioner import PartitionResult, partition
from pizza_slicing.validation import PartitionReport, summarize

logger = logging.getLogger(__name__)


class SlicingMethod(ABC):
    """A strategy that turns a grid into slices."""

    method: Method

    @abstractmethod
    def solve(self, grid: Grid) -> List[Rectangle]:
        """Return the slices for ``grid``."""
        ...


class CutMethod(SlicingMethod):
    """Recursive greedy cutting."""

    method = Method.CUT

    def __init__(self, config: Optional[PartitionConfig] = None):
        self.config = config or PartitionConfig()
        self.last_result: Optional[PartitionResult] = None

    def solve(self, grid: Grid) -> List[Rectangle]:
        self.last_result = partition(grid, self.config)
        return list(self.last_result.slices)


class PointExpandMethod(SlicingMethod):
    """Growth-based slicing from seed cells. Not implemented."""

    method = Method.POINT_EXPAND

    def solve(self, grid: Grid) -> List[Rectangle]:
        raise NotImplementedError(
            f"Slicing method '{self.method.value}' is not implemented"
        )


@dataclass
class SolveResult:
    """Slices plus partition details and a validation report."""
    method: Method
    slices: List[Rectangle]
    report: PartitionReport
    elapsed_s: float
    partition: Optional[PartitionResult] = None


def get_method(
    method: Union[Method, str],
    config: Optional[PartitionConfig] = None,
) -> SlicingMethod:
    """Instantiate the strategy for ``method`` (enum or its value)."""
    method = Method(method)
    if method is Method.CUT:
        return CutMethod(config)
    if method is Method.POINT_EXPAND:
        return PointExpandMethod()
    raise ValueError(f"Unknown slicing method '{method}'")


def solve(
    grid: Grid,
    method: Union[Method, str] = Method.CUT,
    config: Optional[PartitionConfig] = None,
) -> List[Rectangle]:
    """Slice ``grid`` with the selected strategy."""
    return get_method(method, config).solve(grid)


def run_solver(
    grid: Grid,
    method: Union[Method, str] = Method.CUT,
    config: Optional[PartitionConfig] = None,
) -> SolveResult:
    """Slice ``grid`` and validate the outcome."""
    strategy = get_method(method, config)
    logger.info(
        "Solving %dx%d grid (L=%d, H=%d) with method=%s",
        grid.height, grid.width, grid.min_ingredients, grid.max_cells,
        strategy.method.value,
    )
    started = time.perf_counter()
    slices = strategy.solve(grid)
    elapsed = time.perf_counter() - started

    report = summarize(grid, slices)
    logger.info(
        "Solved in %.3fs: slices=%d valid=%d score=%d/%d",
        elapsed, report.slice_count, report.valid_count, report.score, grid.area,
    )
    return SolveResult(
        method=strategy.method,
        slices=slices,
        report=report,
        elapsed_s=elapsed,
        partition=getattr(strategy, "last_result", None),
    )
