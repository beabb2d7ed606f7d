"""Run-folder layout for slicing runs."""

from __future__ import annotations

import json
import os
import re
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable


@dataclass
class RunPaths:
    run_id: str
    run_dir: Path
    input_dir: Path
    submission_path: Path
    trace_path: Path
    metrics_path: Path
    summary_path: Path
    manifest_path: Path


def slugify(value: str) -> str:
    value = re.sub(r"[^a-z0-9]+", "-", value.strip().lower())
    return value.strip("-") or "run"


def create_run_id(name: str) -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{stamp}_{slugify(name)}"


def prepare_run_dir(runs_root: str | Path, name: str) -> RunPaths:
    """Create ``<runs_root>/<stamp>_<slug>/input`` and return its paths.

    Re-running within the same second gets a numeric suffix.
    """
    runs_path = Path(runs_root)
    runs_path.mkdir(parents=True, exist_ok=True)

    base_id = create_run_id(name)
    run_id = base_id
    suffix = 1
    while (runs_path / run_id).exists():
        suffix += 1
        run_id = f"{base_id}_{suffix}"

    run_dir = runs_path / run_id
    input_dir = run_dir / "input"
    input_dir.mkdir(parents=True)

    return RunPaths(
        run_id=run_id,
        run_dir=run_dir,
        input_dir=input_dir,
        submission_path=run_dir / "submission.out",
        trace_path=run_dir / "cut_trace.jsonl",
        metrics_path=run_dir / "metrics.json",
        summary_path=run_dir / "summary.md",
        manifest_path=run_dir / "manifest.json",
    )


def copy_input(input_path: str | Path, input_dir: Path) -> Path:
    src = Path(input_path)
    dst = input_dir / src.name
    if src.resolve() != dst.resolve():
        shutil.copy2(src, dst)
    return dst


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def write_jsonl(path: Path, records: Iterable[Dict[str, Any]]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, sort_keys=True) + "\n")
            count += 1
    return count


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def update_latest_pointer(runs_root: str | Path, run_dir: Path) -> None:
    """Point ``<runs_root>/latest`` at ``run_dir``."""
    runs_path = Path(runs_root)
    latest = runs_path / "latest"

    if latest.is_symlink() or latest.is_file():
        latest.unlink()
    elif latest.exists():
        shutil.rmtree(latest)

    try:
        latest.symlink_to(os.path.relpath(run_dir, runs_path))
    except OSError:
        # No symlink support: leave a marker file instead.
        latest.mkdir(parents=True, exist_ok=True)
        (latest / "latest_run.txt").write_text(run_dir.name, encoding="utf-8")
