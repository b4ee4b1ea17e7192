#!/usr/bin/env python3
"""Time the opening search on a small prefix of the answer list.

Usage:
    python3 bench.py                 # first 100 answers, 5 repetitions
    python3 bench.py --size 200 --repeat 3 --workers 4
"""

from __future__ import annotations

import argparse
import time

from constraints import ConstraintState
from lexicon import ANSWERS_PATH, load_words
from solver import best_guess
from word import WordTable


def time_first_guess(words: WordTable, repeat: int = 5, max_workers: int | None = 1) -> list[float]:
    """Wall-clock seconds of ``best_guess`` from an empty state, per repetition."""
    times = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        best_guess(ConstraintState(), words, words, max_workers=max_workers)
        times.append(time.perf_counter() - t0)
    return times


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the opening search")
    parser.add_argument("--answers", type=str, default=None, help="Path to answer word list")
    parser.add_argument("--size", type=int, default=100, help="Number of words (default: 100)")
    parser.add_argument("--repeat", type=int, default=5, help="Repetitions (default: 5)")
    parser.add_argument("--workers", type=int, default=1, help="Parallel workers (default: 1)")
    args = parser.parse_args()

    words = WordTable(load_words(args.answers or ANSWERS_PATH)[:args.size])

    times = time_first_guess(words, repeat=args.repeat, max_workers=args.workers)
    print(f"guess_{len(words)}: min {min(times) * 1000:.1f} ms, "
          f"mean {sum(times) / len(times) * 1000:.1f} ms over {len(times)} runs")


if __name__ == "__main__":
    main()
