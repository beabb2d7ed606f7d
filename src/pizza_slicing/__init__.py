"""Public API for greedy pizza slicing."""

from pizza_slicing.contracts import (
    Centroid,
    CutDirection,
    Grid,
    Ingredient,
    Method,
    PartitionConfig,
    PartitionError,
    PizzaLoadError,
    Rectangle,
)
from pizza_slicing.loader import load_grid, parse_grid
from pizza_slicing.partitioner import PartitionResult, partition
from pizza_slicing.solver import SolveResult, run_solver, solve

__all__ = [
    "Centroid",
    "CutDirection",
    "Grid",
    "Ingredient",
    "Method",
    "PartitionConfig",
    "PartitionError",
    "PartitionResult",
    "PizzaLoadError",
    "Rectangle",
    "SolveResult",
    "load_grid",
    "parse_grid",
    "partition",
    "run_solver",
    "solve",
]
