"""Accumulated knowledge about the hidden answer.

Feedback is derived by comparing a guess with the true answer:

* same letter at the same position -> position confirmed for that letter
* otherwise                        -> position excluded for that letter
* letter occurs anywhere in answer -> letter known present, else known absent

Positions are stored as 5-bit ints (bit i = position i).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from word import ALPHABET_SIZE, WORD_LENGTH, Word, as_word

ALL_POSITIONS = (1 << WORD_LENGTH) - 1

_POSITION_BITS = np.arange(WORD_LENGTH, dtype=np.uint8)


def _positions(bits: int) -> list[int]:
    return [i for i in range(WORD_LENGTH) if bits >> i & 1]


@dataclass
class LetterInfo:
    """What is known about one letter of the alphabet."""

    excluded: int = 0
    confirmed: int = 0
    known_absent: bool = False
    known_present: bool = False

    def set_present(self) -> None:
        if self.known_absent:
            raise RuntimeError("letter is already known absent; cannot mark it present")
        self.known_present = True

    def set_absent(self) -> None:
        if self.known_present:
            raise RuntimeError("letter is already known present; cannot mark it absent")
        self.known_absent = True

    def deduce(self) -> bool:
        """Confirm the last open position of a present letter.

        Returns True if a position was newly confirmed.
        """
        if not self.known_present:
            return False
        if bin(self.excluded).count("1") != WORD_LENGTH - 1:
            return False
        remaining = ALL_POSITIONS & ~self.excluded
        if self.confirmed & remaining:
            return False
        self.confirmed |= remaining
        return True

    def is_resolved_at(self, i: int) -> bool:
        return bool((self.confirmed | self.excluded) >> i & 1)

    def copy(self) -> LetterInfo:
        return LetterInfo(self.excluded, self.confirmed, self.known_absent, self.known_present)


class ConstraintState:
    """Everything learned so far in one game.

    ``positions`` mirrors every letter's confirmed positions; ``position_mask``
    and ``position_packed`` hold the same data in the packed-word byte layout
    (byte i = letter at position i) for the batch filter.
    """

    __slots__ = ("positions", "position_mask", "position_packed", "letters", "turns")

    def __init__(self) -> None:
        self.positions: list[str | None] = [None] * WORD_LENGTH
        self.position_mask = 0
        self.position_packed = 0
        self.letters: list[LetterInfo] = [LetterInfo() for _ in range(ALPHABET_SIZE)]
        self.turns = 0

    def copy(self) -> ConstraintState:
        out = ConstraintState.__new__(ConstraintState)
        out.positions = list(self.positions)
        out.position_mask = self.position_mask
        out.position_packed = self.position_packed
        out.letters = [info.copy() for info in self.letters]
        out.turns = self.turns
        return out

    __copy__ = copy

    def __getstate__(self):
        return (self.positions, self.position_mask, self.position_packed,
                self.letters, self.turns)

    def __setstate__(self, state) -> None:
        (self.positions, self.position_mask, self.position_packed,
         self.letters, self.turns) = state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintState):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def info(self, letter: str) -> LetterInfo:
        return self.letters[ord(letter) - ord("a")]

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def incorporate(self, answer: Word | str, guess: Word | str) -> ConstraintState:
        """Record the feedback of *guess* against the true *answer*.

        Raises ``ValueError`` for malformed words and ``RuntimeError`` when the
        feedback contradicts earlier feedback (present vs. absent, or a
        position claimed by two letters or both confirmed and excluded); in
        both cases the state is left untouched.
        """
        answer = as_word(answer)
        guess = as_word(guess)

        in_answer = [bool(answer.letter_mask >> c & 1) for c in guess.codes]
        self._check_consistent(answer, guess, in_answer)

        self.turns += 1
        for i, c in enumerate(guess.codes):
            info = self.letters[c]
            if c == answer.codes[i]:
                info.set_present()
                info.confirmed |= 1 << i
                self._confirm(i, guess.text[i])
            else:
                info.excluded |= 1 << i
            if in_answer[i]:
                info.set_present()
            else:
                info.set_absent()

        for c in set(guess.codes):
            info = self.letters[c]
            if info.deduce():
                for i in _positions(info.confirmed):
                    self._confirm(i, chr(ord("a") + c))
        return self

    def _check_consistent(self, answer: Word, guess: Word, in_answer: list[bool]) -> None:
        """Raise ``RuntimeError`` if this feedback contradicts the state.

        Replays the updates (including deduction) on scratch copies of the
        affected bitsets so nothing is written before the check passes.
        """
        slots = list(self.positions)
        bits: dict[int, tuple[int, int]] = {}
        for i, c in enumerate(guess.codes):
            info = self.letters[c]
            letter = guess.text[i]
            if in_answer[i] and info.known_absent:
                raise RuntimeError(
                    f"letter {letter!r} is known absent but occurs in "
                    f"answer {answer.text!r}"
                )
            if not in_answer[i] and info.known_present:
                raise RuntimeError(
                    f"letter {letter!r} is known present but does not "
                    f"occur in answer {answer.text!r}"
                )
            confirmed, excluded = bits.get(c, (info.confirmed, info.excluded))
            if c == answer.codes[i]:
                if slots[i] not in (None, letter):
                    raise RuntimeError(
                        f"position {i} is already confirmed as {slots[i]!r}, "
                        f"but answer {answer.text!r} has {letter!r} there"
                    )
                confirmed |= 1 << i
                slots[i] = letter
            else:
                excluded |= 1 << i
            if confirmed & excluded:
                raise RuntimeError(
                    f"letter {letter!r} would be both confirmed and excluded at "
                    f"position {i} by answer {answer.text!r}"
                )
            bits[c] = (confirmed, excluded)

        for c, (confirmed, excluded) in bits.items():
            scratch = LetterInfo(excluded, confirmed, known_present=bool(
                answer.letter_mask >> c & 1))
            if not scratch.deduce():
                continue
            letter = chr(ord("a") + c)
            for i in _positions(scratch.confirmed & ~confirmed):
                if slots[i] not in (None, letter):
                    raise RuntimeError(
                        f"letter {letter!r} can only sit at position {i}, which is "
                        f"already confirmed as {slots[i]!r}"
                    )
                slots[i] = letter

    def _confirm(self, i: int, letter: str) -> None:
        self.positions[i] = letter
        self.position_mask |= 0xFF << (8 * i)
        self.position_packed |= ord(letter) << (8 * i)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def absent_mask(self) -> int:
        return sum(1 << c for c, info in enumerate(self.letters) if info.known_absent)

    @property
    def present_mask(self) -> int:
        return sum(1 << c for c, info in enumerate(self.letters) if info.known_present)

    def forbidden_table(self) -> np.ndarray:
        """(5, 26) bool: True where letter c may not sit at position i."""
        excluded = np.array([info.excluded for info in self.letters], dtype=np.uint8)
        absent = np.array([info.known_absent for info in self.letters], dtype=bool)
        at_pos = (excluded[None, :] >> _POSITION_BITS[:, None]) & 1
        return at_pos.astype(bool) | absent[None, :]

    def open_table(self) -> np.ndarray:
        """(5, 26) bool: True where guessing letter c at position i can still teach something."""
        resolved = np.array([info.excluded | info.confirmed for info in self.letters],
                            dtype=np.uint8)
        absent = np.array([info.known_absent for info in self.letters], dtype=bool)
        present = np.array([info.known_present for info in self.letters], dtype=bool)
        unresolved = ((resolved[None, :] >> _POSITION_BITS[:, None]) & 1) == 0
        return ~absent[None, :] & (~present[None, :] | unresolved)

    @property
    def pattern(self) -> str:
        """Confirmed letters with ``.`` for unknown positions, e.g. ``".ra.e"``."""
        return "".join(c or "." for c in self.positions)

    def summary(self) -> dict[str, dict]:
        """Structured knowledge for every letter anything is known about."""
        out: dict[str, dict] = {}
        for c, info in enumerate(self.letters):
            if not (info.known_absent or info.known_present or info.excluded or info.confirmed):
                continue
            out[chr(ord("a") + c)] = {
                "confirmed": _positions(info.confirmed),
                "excluded": _positions(info.excluded),
                "present": info.known_present,
                "absent": info.known_absent,
            }
        return out

    def __repr__(self) -> str:
        present = "".join(chr(ord("a") + c) for c, i in enumerate(self.letters) if i.known_present)
        absent = "".join(chr(ord("a") + c) for c, i in enumerate(self.letters) if i.known_absent)
        return (f"ConstraintState(turns={self.turns}, pattern={self.pattern!r}, "
                f"present={present!r}, absent={absent!r})")
