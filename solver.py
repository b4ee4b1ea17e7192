"""Minimax guess selection.

For a guess g and a possible answer a, the simulated state is
``state.copy().incorporate(a, g)``; the guess's score is the largest number
of possible answers left by any a.  The chosen guess minimizes that score,
ties going to the guess that comes first in the guess list.

The simulated state depends on a only through which positions of g match
and which letters of g occur in a, so possible answers are grouped by that
10-bit key and each group is simulated once.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Callable, Sequence

import numpy as np

from constraints import ConstraintState
from feasibility import count_possible, filter_possible
from gate import revealing_mask
from word import WORD_LENGTH, Word, WordTable

log = logging.getLogger(__name__)

# Below this many (guess, possible answer) pairs the search stays in-process.
PARALLEL_MIN_WORK = 500_000
# Smallest number of guesses handed to one worker.
CHUNK_MIN = 50

_BIT_WEIGHTS = (1 << np.arange(WORD_LENGTH)).astype(np.int64)


def _feedback_keys(guess: Word, possible: WordTable) -> np.ndarray:
    codes = np.array(guess.codes, dtype=np.uint8)
    match = (possible.codes == codes).astype(np.int64)
    present = (possible.letter_masks[:, None] >> codes.astype(np.uint32)[None, :]) & 1
    return (match * _BIT_WEIGHTS).sum(axis=1) | (
        (present.astype(np.int64) * _BIT_WEIGHTS).sum(axis=1) << WORD_LENGTH
    )


def score_guess(
    state: ConstraintState,
    guess: Word,
    possible: WordTable,
    cutoff: int | None = None,
) -> int:
    """Worst-case number of *possible* answers left after guessing *guess*.

    With *cutoff*, evaluation stops as soon as the worst case reaches it; the
    returned value is then only known to be ``>= cutoff``.
    """
    possible = WordTable.coerce(possible)
    if len(possible) == 0:
        return 0
    keys = _feedback_keys(guess, possible)
    _, reps, counts = np.unique(keys, return_index=True, return_counts=True)
    # Biggest groups first so the cutoff tends to trigger early.
    order = np.argsort(-counts, kind="stable")

    worst = 0
    for idx in reps[order]:
        sim = state.copy()
        sim.incorporate(possible.words[idx], guess)
        n = count_possible(sim, possible)
        if n > worst:
            worst = n
            if cutoff is not None and worst >= cutoff:
                break
    return worst


def score_guesses(
    state: ConstraintState,
    possible: WordTable | Sequence[Word],
    guesses: WordTable | Sequence[Word],
) -> list[int]:
    """Exact scores for every guess, in order (no gate, no cutoff)."""
    possible = WordTable.coerce(possible)
    return [score_guess(state, g, possible) for g in WordTable.coerce(guesses)]


def _score_chunk(args):
    """Worker: first guess in *chunk* scoring strictly below *bound*."""
    state, possible, chunk, bound = args
    best_i = None
    for i, guess in enumerate(chunk):
        s = score_guess(state, guess, possible, cutoff=bound)
        if bound is None or s < bound:
            best_i, bound = i, s
    return best_i, bound


def _chunked(words: Sequence[Word], max_workers: int) -> list[tuple[Word, ...]]:
    size = max(CHUNK_MIN, len(words) // (max_workers * 4))
    return [tuple(words[i:i + size]) for i in range(0, len(words), size)]


def best_guess(
    state: ConstraintState,
    answers: WordTable | Sequence[Word],
    guesses: WordTable | Sequence[Word],
    max_workers: int | None = None,
    progress: Callable[[int, int], None] | None = None,
) -> Word:
    """Pick the guess minimizing the worst-case number of remaining answers.

    Parameters
    ----------
    state : ConstraintState
        Knowledge so far; not modified.
    answers, guesses : WordTable or sequence of Word
        Answer universe and guess universe.  Ties go to the earliest guess
        in *guesses* order.
    max_workers : int or None
        Worker processes (None = all cores).  Small searches run in-process.
    progress : callable(done, total) or None
        Called after each chunk of guesses is scored.

    Raises
    ------
    ValueError
        If no answer is consistent with *state*, or no guess could reveal
        anything new.
    """
    answers = WordTable.coerce(answers)
    guesses = WordTable.coerce(guesses)

    possible = filter_possible(state, answers)
    if len(possible) == 0:
        raise ValueError(
            f"no answer in the answer set is consistent with {state!r}; "
            "the true answer must be a member of the answer set"
        )
    if len(possible) == 1:
        # Guessing it reveals nothing new, but it is the answer.
        return possible[0]

    candidates = guesses.subset(revealing_mask(state, guesses)).words
    if not candidates:
        raise ValueError(f"no guess can reveal anything new about {state!r}")

    if max_workers is None:
        max_workers = os.cpu_count() or 1
    work = len(candidates) * len(possible)
    parallel = max_workers > 1 and work >= PARALLEL_MIN_WORK
    chunks = _chunked(candidates, max_workers if parallel else 1)

    log.debug("best_guess: %d possible, %d revealing guesses, %d chunk(s), %s",
              len(possible), len(candidates), len(chunks),
              f"{max_workers} workers" if parallel else "in-process")

    results: list[tuple[int | None, int | None]] = [(None, None)] * len(chunks)
    if parallel:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futs = {executor.submit(_score_chunk, (state, possible, chunk, None)): k
                    for k, chunk in enumerate(chunks)}
            for done, fut in enumerate(as_completed(futs), 1):
                results[futs[fut]] = fut.result()
                if progress is not None:
                    progress(done, len(chunks))
    else:
        bound = None
        for k, chunk in enumerate(chunks):
            results[k] = _score_chunk((state, possible, chunk, bound))
            if results[k][0] is not None:
                bound = results[k][1]
            if progress is not None:
                progress(k + 1, len(chunks))

    # Sequential scan in chunk order: the earliest minimal guess wins no
    # matter which worker finished first.
    best_word, best_score = None, None
    for chunk, (i, score) in zip(chunks, results):
        if i is None:
            continue
        if best_score is None or score < best_score:
            best_word, best_score = chunk[i], score

    log.debug("best_guess: %s (worst case %d of %d)", best_word, best_score, len(possible))
    return best_word
