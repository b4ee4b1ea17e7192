"""Which words are still consistent with a constraint state.

``is_possible`` is the scalar reference.  ``possible_mask`` evaluates a whole
:class:`~word.WordTable` with numpy and is what the solver calls; with
``CROSS_CHECK`` on, every batch result is recomputed with the scalar
reference and a divergence raises ``AssertionError``.
"""

from __future__ import annotations

import os

import numpy as np

from constraints import ConstraintState
from word import WORD_LENGTH, Word, WordTable

CROSS_CHECK = os.environ.get("MINIMAX_WORDLE_CROSS_CHECK", "") == "1"

_POSITIONS = np.arange(WORD_LENGTH)


def is_possible(state: ConstraintState, word: Word) -> bool:
    # Confirmed letters first: cheapest and most discriminating.
    for i, known in enumerate(state.positions):
        if known is not None and word.text[i] != known:
            return False

    for i, c in enumerate(word.codes):
        info = state.letters[c]
        if info.known_absent or info.excluded >> i & 1:
            return False

    for c, info in enumerate(state.letters):
        if info.known_present and not word.letter_mask >> c & 1:
            return False
    return True


def _possible_mask_fast(state: ConstraintState, table: WordTable) -> np.ndarray:
    ok = (table.packed & np.uint64(state.position_mask)) == np.uint64(state.position_packed)

    forbidden = state.forbidden_table()
    ok &= ~forbidden[_POSITIONS, table.codes].any(axis=1)

    need = state.present_mask
    if need:
        need_u32 = np.uint32(need)
        ok &= (table.letter_masks & need_u32) == need_u32
    return ok


def possible_mask(state: ConstraintState, table: WordTable) -> np.ndarray:
    """Bool array, True where ``is_possible(state, table[i])``."""
    ok = _possible_mask_fast(state, table)
    if CROSS_CHECK:
        check_against_reference(state, table, ok, is_possible, "possible_mask")
    return ok


def filter_possible(state: ConstraintState, table: WordTable) -> WordTable:
    return table.subset(possible_mask(state, table))


def count_possible(state: ConstraintState, table: WordTable) -> int:
    return int(np.count_nonzero(possible_mask(state, table)))


def check_against_reference(state, table, batch, predicate, name: str) -> None:
    """Fail loudly if a batch result differs from the scalar *predicate*."""
    for i, w in enumerate(table.words):
        expected = predicate(state, w)
        if bool(batch[i]) != expected:
            raise AssertionError(
                f"{name} diverged from scalar reference for {w.text!r}: "
                f"batch={bool(batch[i])} scalar={expected} state={state!r}"
            )
