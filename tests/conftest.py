"""
Shared test fixtures for pizza slicing tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pizza_slicing.contracts import Grid


@pytest.fixture
def split_rows_grid():
    """2x2, row 0 mushrooms and row 1 tomatoes; whole grid fits (H=4)."""
    return Grid.from_rows(["MM", "TT"], min_ingredients=1, max_cells=4)


@pytest.fixture
def striped_grid():
    """2x3, tomatoes over mushrooms; H=2 forces cuts."""
    return Grid.from_rows(["TTT", "MMM"], min_ingredients=1, max_cells=2)


@pytest.fixture
def mushroom_only_grid():
    """3x4 of mushrooms only."""
    return Grid.from_rows(["MMMM", "MMMM", "MMMM"], min_ingredients=1, max_cells=4)


@pytest.fixture
def example_grid():
    """The 3x5 example pizza (L=1, H=6)."""
    return Grid.from_rows(["TTTTT", "TMMMT", "TTTTT"], min_ingredients=1, max_cells=6)


@pytest.fixture
def checker_grid():
    """8x10 checkerboard-ish grid with a mushroom-heavy corner."""
    rows = []
    for r in range(8):
        row = ""
        for c in range(10):
            if r < 3 and c < 4:
                row += "M"
            else:
                row += "M" if (r + c) % 2 == 0 else "T"
        rows.append(row)
    return Grid.from_rows(rows, min_ingredients=1, max_cells=6)


@pytest.fixture
def grid_file(tmp_path):
    """Write a small grid file and return its path."""
    path = tmp_path / "example.in"
    path.write_text("3 5 1 6\nTTTTT\nTMMMT\nTTTTT\n", encoding="ascii")
    return path
