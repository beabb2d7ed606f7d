#!/usr/bin/env python3
"""
Render a pizza grid and its greedy slices.

Mushroom cells are drawn dark, tomato cells light. Valid slices are
outlined in green, slices that break a constraint in red.

Usage:
    python scripts/visualize_slices.py --input small.in --output slices.png
"""
import sys
import argparse
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.patches import Rectangle as RectPatch

from pizza_slicing import Ingredient, PartitionConfig, load_grid, solve
from pizza_slicing.validation import is_valid_slice

VALID_COLOR = "tab:green"
INVALID_COLOR = "tab:red"


def plot_slices(ax, grid, slices):
    """Draw ingredient map plus slice outlines onto ``ax``."""
    codes = np.full(grid.cells.shape, 2, dtype=int)
    codes[grid.cells == Ingredient.MUSHROOM.value] = 0
    codes[grid.cells == Ingredient.TOMATO.value] = 1
    cmap = ListedColormap(["#8d6e63", "#ef9a9a", "#eeeeee"])
    ax.imshow(codes, cmap=cmap, vmin=0, vmax=2, interpolation="nearest")

    for rect in slices:
        color = VALID_COLOR if is_valid_slice(rect) else INVALID_COLOR
        ax.add_patch(RectPatch(
            (rect.col - 0.5, rect.row - 0.5), rect.width, rect.height,
            fill=False, edgecolor=color, linewidth=1.5,
        ))

    ax.set_xlim(-0.5, grid.width - 0.5)
    ax.set_ylim(grid.height - 0.5, -0.5)
    ax.set_xlabel("column")
    ax.set_ylabel("row")


def main():
    parser = argparse.ArgumentParser(description="Visualize greedy pizza slices.")
    parser.add_argument("--input", required=True, help="Path to input grid file")
    parser.add_argument("--output", default="slices.png", help="PNG path to write")
    parser.add_argument("--max-cut-offset", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    grid = load_grid(args.input)
    slices = solve(grid, config=PartitionConfig(max_cut_offset=args.max_cut_offset))
    valid = sum(1 for s in slices if is_valid_slice(s))

    size = max(4.0, min(16.0, grid.width / 4.0))
    fig, ax = plt.subplots(figsize=(size, size * grid.height / max(grid.width, 1)))
    ax.set_title(f"{Path(args.input).name}: {len(slices)} slices, {valid} valid")
    plot_slices(ax, grid, slices)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved figure to {output}")


if __name__ == "__main__":
    main()
