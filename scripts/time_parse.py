#!/usr/bin/env python3
"""Quick perf benchmark for Script parsing."""

from __future__ import annotations

import argparse
import cProfile
import io
import logging
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from amblescript.load import read_script_text
from amblescript.parser import ParseMode, parse


def _collect_script_files(root: Path, pattern: str) -> list[Path]:
    return sorted(path for path in root.rglob(pattern) if path.is_file())


def _run_once(
    texts: list[str],
    *,
    label: str,
    mode: ParseMode,
    show_progress: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    total_definitions = 0
    total_diagnostics = 0
    iterator = tqdm(texts, desc=label, unit="file") if show_progress else texts
    for text in iterator:
        result = parse(text, mode=mode)
        total_definitions += len(result.root.child_nodes())
        total_diagnostics += len(result.diagnostics)
    duration = time.perf_counter() - start
    return duration, total_definitions, total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark Script parsing throughput")
    parser.add_argument("root", type=Path, help="Directory containing script files")
    parser.add_argument("--pattern", default="*.amble", help="Glob for script files (default: *.amble)")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument("--permissive", action="store_true", help="Parse in permissive mode")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print")
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Invalid root directory: {root}")
    files = _collect_script_files(root, args.pattern)
    if not files:
        raise SystemExit(f"No {args.pattern} files found under {root}")

    texts = [read_script_text(path) for path in files]
    mode = ParseMode.PERMISSIVE if args.permissive else ParseMode.STRICT
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(texts, label=f"warmup {warmup_idx + 1}", mode=mode, show_progress=show_progress)

        timings: list[float] = []
        definitions = 0
        diagnostics = 0
        for run_idx in range(max(args.runs, 1)):
            duration, definitions, diagnostics = _run_once(
                texts,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                mode=mode,
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, definitions, diagnostics

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, definitions, diagnostics = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, definitions, diagnostics = _benchmark()

    mean = statistics.mean(timings)
    total_chars = sum(len(text) for text in texts)
    print(f"Dataset: {root}")
    print(f"Files: {len(files)}")
    print(f"Top-level nodes: {definitions}")
    print(f"Diagnostics: {diagnostics}")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Chars/s (mean): {total_chars / mean:.0f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
