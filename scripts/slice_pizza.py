#!/usr/bin/env python3
"""
Slice a pizza grid with the greedy cutting method and write a run folder.

Usage:
    python scripts/slice_pizza.py --input medium.in
    python scripts/slice_pizza.py --input big.in --runs-dir runs --valid-only -v
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pizza_slicing import (
    Method,
    PartitionConfig,
    PartitionError,
    PizzaLoadError,
    load_grid,
    run_solver,
)
from pizza_slicing.loader import DEFAULT_INPUT
from pizza_slicing.run_protocol import (
    copy_input,
    prepare_run_dir,
    update_latest_pointer,
    write_json,
    write_jsonl,
    write_text,
)
from pizza_slicing.submission import write_submission

logger = logging.getLogger("slice_pizza")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Partition a pizza grid into slices with recursive greedy cuts."
    )
    parser.add_argument(
        "--input", default=DEFAULT_INPUT,
        help=f"Path to input grid file (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--method", default=Method.CUT.value,
        choices=[m.value for m in Method],
        help="Slicing method (default: cut)",
    )
    parser.add_argument("--name", default=None, help="Run name (default: input stem)")
    parser.add_argument("--runs-dir", default="runs", help="Runs output root")
    parser.add_argument(
        "--max-steps", type=int, default=None,
        help="Abort after this many cuts (default: twice the grid area)",
    )
    parser.add_argument(
        "--max-cut-offset", type=int, default=None,
        help="Largest cut offset tried when no axis gives two valid pieces",
    )
    parser.add_argument(
        "--valid-only", action="store_true",
        help="Leave slices that break a constraint out of the answer file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logs"
    )
    return parser


def _build_summary(*, run_id: str, grid, result, valid_only: bool) -> str:
    report = result.report
    return "\n".join(
        [
            f"# Run {run_id}",
            "",
            f"- Grid: {grid.height}x{grid.width} (L={grid.min_ingredients}, H={grid.max_cells})",
            f"- Method: {result.method.value}",
            f"- Duration: {result.elapsed_s:.3f}s",
            f"- Slices: {report.slice_count} ({report.valid_count} valid)",
            f"- Score: {report.score}/{grid.area} cells",
            f"- Violations: {report.error_count} error, {report.warning_count} warning",
            f"- Answer file: {'valid slices only' if valid_only else 'all slices'}",
            "",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        grid = load_grid(args.input)
    except PizzaLoadError as exc:
        logger.error("%s", exc)
        return 1

    config = PartitionConfig(
        max_steps=args.max_steps,
        max_cut_offset=args.max_cut_offset,
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    try:
        result = run_solver(grid, args.method, config)
    except NotImplementedError as exc:
        logger.error("%s", exc)
        return 2
    except PartitionError as exc:
        logger.error("%s", exc)
        return 1

    name = args.name or Path(args.input).stem
    run_paths = prepare_run_dir(args.runs_dir, name)
    copied_input = copy_input(args.input, run_paths.input_dir)

    write_submission(run_paths.submission_path, result.slices, args.valid_only)
    trace = result.partition.trace if result.partition is not None else []
    write_jsonl(run_paths.trace_path, trace)

    metrics = {
        "run_id": run_paths.run_id,
        "method": result.method.value,
        "elapsed_s": round(result.elapsed_s, 3),
        "grid": {
            "rows": grid.height,
            "cols": grid.width,
            "min_ingredients": grid.min_ingredients,
            "max_cells": grid.max_cells,
        },
        "steps": result.partition.steps if result.partition is not None else 0,
        "stop_reason": result.partition.stop_reason if result.partition is not None else "",
        "counts": result.report.to_dict(),
    }
    write_json(run_paths.metrics_path, metrics)
    write_text(
        run_paths.summary_path,
        _build_summary(
            run_id=run_paths.run_id, grid=grid, result=result,
            valid_only=args.valid_only,
        ),
    )
    write_json(
        run_paths.manifest_path,
        {
            "run_id": run_paths.run_id,
            "name": name,
            "created_utc": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "input": str(copied_input),
            "config": {
                "method": result.method.value,
                "max_steps": config.max_steps,
                "max_cut_offset": config.max_cut_offset,
                "valid_only": args.valid_only,
            },
            "artifacts": {
                "submission": str(run_paths.submission_path),
                "cut_trace": str(run_paths.trace_path),
                "metrics": str(run_paths.metrics_path),
                "summary": str(run_paths.summary_path),
            },
        },
    )
    update_latest_pointer(args.runs_dir, run_paths.run_dir)

    report = result.report
    print(f"Run ID: {run_paths.run_id}")
    print(f"Run dir: {run_paths.run_dir}")
    print(f"Slices: {report.slice_count} ({report.valid_count} valid)")
    print(f"Score: {report.score}/{grid.area}")
    print(f"Violations: {report.error_count} errors, {report.warning_count} warnings")
    print(f"Submission: {run_paths.submission_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
