#!/usr/bin/env python3
"""Play every answer and report aggregate statistics.

Features:
  - Runs games in parallel (chunks of answers per process).
  - Prints ``answer: guesses`` per game and a one-line summary.
  - Outputs CSV, JSON and a guess-count histogram.
"""

from __future__ import annotations

import argparse
import csv
import json
import os
import random
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from game import play
from lexicon import load_lexicon
from opening import resolve_first_guess
from word import Word, WordTable, as_words

RESULTS_DIR = Path(__file__).resolve().parent / "results"

# A game is won in at most this many guesses.
WIN_THRESHOLD = 6


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class GameResult:
    answer: str
    num_guesses: int

    @property
    def won(self) -> bool:
        return self.num_guesses <= WIN_THRESHOLD


@dataclass
class BenchmarkResults:
    games: list[GameResult] = field(default_factory=list)

    def summary(self) -> dict:
        n = len(self.games)
        if not n:
            return {"words": 0, "max": 0, "min": 0, "avg": 0.0, "win_rate": 0.0,
                    "guess_distribution": {}}
        guesses = [g.num_guesses for g in self.games]
        dist: dict[str, int] = {}
        for k in sorted(guesses):
            dist[str(k)] = dist.get(str(k), 0) + 1
        return {
            "words": n,
            "max": max(guesses),
            "min": min(guesses),
            "avg": round(sum(guesses) / n, 4),
            "win_rate": round(sum(1 for g in self.games if g.won) / n, 4),
            "guess_distribution": dist,
        }

    def print_summary(self) -> None:
        s = self.summary()
        print(f"Words={s['words']} Max={s['max']} Min={s['min']} "
              f"Avg={s['avg']:.2f} Win={s['win_rate'] * 100:.2f}%")

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["answer", "num_guesses", "won"])
            for g in self.games:
                writer.writerow([g.answer, g.num_guesses, int(g.won)])

    def to_json(self, path: str | Path, config: dict | None = None) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "timestamp": datetime.now().isoformat(),
            "config": config or {},
            "summary": self.summary(),
            "games": [asdict(g) for g in self.games],
        }
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def plot_histogram(self, path: str | Path | None = None) -> None:
        try:
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not installed; skipping plot", file=sys.stderr)
            return

        if not self.games:
            return
        guesses = [g.num_guesses for g in self.games]
        bins = list(range(1, max(guesses) + 2))

        fig, ax = plt.subplots(figsize=(6, 4))
        ax.hist(guesses, bins=bins, edgecolor="black", align="left")
        ax.axvline(WIN_THRESHOLD + 0.5, color="red", linestyle="--", linewidth=1)
        ax.set_title(f"Minimax guess distribution ({len(guesses)} answers)")
        ax.set_xlabel("Guesses")
        ax.set_ylabel("Count")
        fig.tight_layout()

        dest = Path(path) if path else RESULTS_DIR / "benchmark_histogram.png"
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        print(f"Histogram saved to {dest}")


# ------------------------------------------------------------------
# Worker function (runs in a child process)
# ------------------------------------------------------------------

def _play_chunk(args) -> list[GameResult]:
    """Worker: play each answer in the chunk with an in-process search."""
    chunk, answers, guesses, first_guess = args
    return [
        GameResult(answer=a.text,
                   num_guesses=play(a, answers, guesses, first_guess, max_workers=1))
        for a in chunk
    ]


# ------------------------------------------------------------------
# Benchmark runner
# ------------------------------------------------------------------

def run_benchmark(
    answers: WordTable | Sequence[Word],
    guesses: WordTable | Sequence[Word],
    first_guess: Word | None,
    secrets: Sequence[Word] | None = None,
    max_workers: int | None = None,
    chunk_size: int = 8,
    verbose: bool = True,
) -> BenchmarkResults:
    """Play every word of *secrets* (default: all answers).

    Results are returned in *secrets* order regardless of completion order.
    """
    answers = WordTable.coerce(answers)
    guesses = WordTable.coerce(guesses)
    secrets = list(answers.words) if secrets is None else as_words(secrets)
    if max_workers is None:
        max_workers = os.cpu_count() or 1

    chunks = [secrets[i:i + chunk_size] for i in range(0, len(secrets), chunk_size)]
    per_chunk: list[list[GameResult]] = [[] for _ in chunks]

    if max_workers <= 1:
        for k, chunk in enumerate(chunks):
            per_chunk[k] = _play_chunk((chunk, answers, guesses, first_guess))
            if verbose:
                for g in per_chunk[k]:
                    print(f"{g.answer}: {g.num_guesses}", flush=True)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futs = {executor.submit(_play_chunk, (chunk, answers, guesses, first_guess)): k
                    for k, chunk in enumerate(chunks)}
            for fut in as_completed(futs):
                k = futs[fut]
                per_chunk[k] = fut.result()
                if verbose:
                    for g in per_chunk[k]:
                        print(f"{g.answer}: {g.num_guesses}", flush=True)

    results = BenchmarkResults()
    for games in per_chunk:
        results.games.extend(games)
    return results


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run the minimax solver against every answer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python benchmark.py                                  # all answers, all cores
  python benchmark.py --num-games 100 --seed 7         # subsample 100 answers
  python benchmark.py --answers my_answers.txt --guesses my_guesses.txt
  python benchmark.py --csv out.csv --json out.json --plot out.png
""",
    )
    parser.add_argument("--answers", type=str, default=None, help="Path to answer word list")
    parser.add_argument("--guesses", type=str, default=None, help="Path to guess word list")
    parser.add_argument("--num-games", type=int, default=None,
                        help="Limit number of answers to play")
    parser.add_argument("--seed", type=int, default=42, help="Seed for --num-games sampling")
    parser.add_argument("--first-guess", type=str, default=None,
                        help="Forced opening (default: cached or 'aesir')")
    parser.add_argument("--no-first-guess", action="store_true",
                        help="Compute the opening in every game (very slow)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel workers (default: all cores)")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-answer lines")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    args = parser.parse_args()

    try:
        override = Word(args.first_guess) if args.first_guess is not None else None
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    lex = load_lexicon(args.answers, args.guesses)
    print(f"Answers: {len(lex.answers)} words | Guesses: {len(lex.guesses)} words")

    opening = None
    if not args.no_first_guess:
        opening = resolve_first_guess(lex.answers, lex.guesses, override=override)
        if opening is None:
            print("  [warn] opening is not in the guess list; computing it per game",
                  file=sys.stderr)
        else:
            print(f"Opening: {opening}")

    secrets = list(lex.answers)
    if args.num_games is not None and args.num_games < len(secrets):
        secrets = sorted(random.Random(args.seed).sample(secrets, args.num_games))

    t0 = time.time()
    results = run_benchmark(
        answers=lex.answers,
        guesses=lex.guesses,
        first_guess=opening,
        secrets=secrets,
        max_workers=args.workers,
        verbose=not args.quiet,
    )
    elapsed = time.time() - t0

    results.print_summary()
    print(f"Elapsed: {elapsed:.1f}s")

    csv_path = args.csv or str(RESULTS_DIR / "benchmark.csv")
    results.to_csv(csv_path)
    print(f"CSV saved to {csv_path}")

    if args.json:
        config = {
            "answers": len(lex.answers),
            "guesses": len(lex.guesses),
            "opening": opening.text if opening else None,
            "num_games": args.num_games,
            "seed": args.seed,
        }
        results.to_json(args.json, config)
        print(f"JSON saved to {args.json}")

    results.plot_histogram(args.plot)


if __name__ == "__main__":
    main()
