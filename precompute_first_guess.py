#!/usr/bin/env python3
"""Precompute the minimax opening for a pair of word lists.

The first guess is searched from an empty state over every answer and every
guess, which takes a long time on full lists.  It never depends on the
answer, so the result is cached in ``data/first_guess.json`` (keyed by a
fingerprint of both lists) and used by play.py and benchmark.py.

Usage:
    python3 precompute_first_guess.py                      # default lists
    python3 precompute_first_guess.py --workers 16
    python3 precompute_first_guess.py --answers a.txt --guesses g.txt
    python3 precompute_first_guess.py --limit 100          # quick run on a prefix
"""

from __future__ import annotations

import argparse
import os
import sys
import time

from constraints import ConstraintState
from lexicon import load_lexicon
from opening import CACHE_PATH, fingerprint, save_first_guess
from solver import best_guess
from word import Word, WordTable


def find_best_first_guess(
    answers: WordTable,
    guesses: WordTable,
    max_workers: int | None = None,
    verbose: bool = True,
) -> Word:
    """Best guess from an empty state, with a progress line."""
    t0 = time.time()

    def progress(done: int, total: int) -> None:
        if not verbose:
            return
        elapsed = time.time() - t0
        eta = elapsed / done * (total - done) if done else 0
        print(f"\r  [{done}/{total}] {elapsed:.0f}s elapsed  ETA {eta:.0f}s   ",
              end="", flush=True)

    word = best_guess(ConstraintState(), answers, guesses,
                      max_workers=max_workers, progress=progress)
    if verbose:
        print(f"\n  -> {word} [{time.time() - t0:.0f}s]")
    return word


def main() -> None:
    parser = argparse.ArgumentParser(description="Precompute the minimax opening")
    parser.add_argument("--answers", type=str, default=None, help="Path to answer word list")
    parser.add_argument("--guesses", type=str, default=None, help="Path to guess word list")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel workers (default: all CPU cores)")
    parser.add_argument("--limit", type=int, default=None,
                        help="Only use the first N words of each list")
    parser.add_argument("--cache", type=str, default=str(CACHE_PATH),
                        help=f"Cache file (default: {CACHE_PATH})")
    args = parser.parse_args()

    lex = load_lexicon(args.answers, args.guesses)
    answers, guesses = lex.answers, lex.guesses
    if args.limit is not None:
        answers = WordTable(answers.words[:args.limit])
        guesses = WordTable(guesses.words[:args.limit])

    workers = args.workers or os.cpu_count() or 1
    print(f"Answers: {len(answers)} words | Guesses: {len(guesses)} words")
    print(f"Fingerprint: {fingerprint(answers, guesses)}")
    print(f"Workers: {workers}")

    try:
        word = find_best_first_guess(answers, guesses, max_workers=workers)
    except KeyboardInterrupt:
        print("\n\n  Interrupted! Nothing saved.")
        sys.exit(1)

    save_first_guess(answers, guesses, word, args.cache)
    print(f"Saved to {args.cache}")


if __name__ == "__main__":
    main()
