"""Pruning of guesses that cannot refine the constraint state."""

from __future__ import annotations

import numpy as np

import feasibility
from constraints import ConstraintState
from word import WORD_LENGTH, Word, WordTable

_POSITIONS = np.arange(WORD_LENGTH)


def is_revealing(state: ConstraintState, word: Word) -> bool:
    """True if guessing *word* could still change *state*.

    A letter teaches nothing once it is known absent, or known present with
    its position in this slot already confirmed or excluded.
    """
    for i, c in enumerate(word.codes):
        info = state.letters[c]
        if info.known_absent:
            continue
        if not info.known_present:
            return True
        if not info.is_resolved_at(i):
            return True
    return False


def revealing_mask(state: ConstraintState, table: WordTable) -> np.ndarray:
    ok = state.open_table()[_POSITIONS, table.codes].any(axis=1)
    if feasibility.CROSS_CHECK:
        feasibility.check_against_reference(state, table, ok, is_revealing, "revealing_mask")
    return ok
