"""
Input grid loader.

Format: a header line ``R C L H`` (rows, columns, minimum of each
ingredient per slice, maximum cells per slice) followed by the row-major
grid body, one ``M``/``T`` character per cell. Body lines are concatenated.
"""
import logging
from pathlib import Path
from typing import Union

import numpy as np

from pizza_slicing.contracts import Grid, Ingredient, PizzaLoadError

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "medium.in"

_KNOWN_CELLS = {i.value for i in Ingredient}


def parse_grid(text: str, source: str = "<string>") -> Grid:
    """Parse grid text into a Grid.

    Raises:
        PizzaLoadError: on a malformed header or a body of the wrong size.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise PizzaLoadError(f"{source}: missing header line")

    header = lines[0].split()
    if len(header) != 4:
        raise PizzaLoadError(
            f"{source}: header must have 4 integers (R C L H), got {lines[0]!r}"
        )
    try:
        rows, cols, min_ingredients, max_cells = (int(v) for v in header)
    except ValueError as exc:
        raise PizzaLoadError(f"{source}: non-integer header {lines[0]!r}") from exc
    if min(rows, cols, min_ingredients, max_cells) < 0:
        raise PizzaLoadError(f"{source}: negative value in header {lines[0]!r}")

    body = "".join(line.strip() for line in lines[1:])
    if len(body) != rows * cols:
        raise PizzaLoadError(
            f"{source}: expected {rows * cols} cells ({rows}x{cols}), got {len(body)}"
        )

    unknown = set(body) - _KNOWN_CELLS
    if unknown:
        logger.warning(
            "%s: unknown cell characters %s; they count as neither ingredient",
            source, sorted(unknown),
        )

    cells = np.array(list(body), dtype="<U1").reshape(rows, cols)
    grid = Grid(cells=cells, min_ingredients=min_ingredients, max_cells=max_cells)
    logger.info(
        "Loaded %s: %dx%d grid, L=%d, H=%d",
        source, rows, cols, min_ingredients, max_cells,
    )
    return grid


def load_grid(path: Union[str, Path] = DEFAULT_INPUT) -> Grid:
    """Read and parse the grid file at ``path``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as exc:
        raise PizzaLoadError(f"Could not open file: {path}") from exc
    return parse_grid(text, source=str(path))
