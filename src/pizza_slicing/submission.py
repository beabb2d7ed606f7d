"""Answer-file formatting: slice count, then ``r1 c1 r2 c2`` per slice."""
import logging
from pathlib import Path
from typing import List, Sequence, Union

from pizza_slicing.contracts import Rectangle
from pizza_slicing.validation import is_valid_slice

logger = logging.getLogger(__name__)


def submission_lines(slices: Sequence[Rectangle], valid_only: bool = False) -> List[str]:
    chosen = [s for s in slices if is_valid_slice(s)] if valid_only else list(slices)
    lines = [str(len(chosen))]
    lines.extend(" ".join(str(v) for v in rect.bounds) for rect in chosen)
    return lines


def format_submission(slices: Sequence[Rectangle], valid_only: bool = False) -> str:
    """Render ``slices`` in the answer format.

    Args:
        slices: Slices in output order.
        valid_only: Drop slices that break max_cells or an ingredient minimum.
    """
    return "\n".join(submission_lines(slices, valid_only)) + "\n"


def write_submission(
    path: Union[str, Path],
    slices: Sequence[Rectangle],
    valid_only: bool = False,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = format_submission(slices, valid_only)
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s slices to %s", text.split("\n", 1)[0], path)
    return path
