"""One game: the solver against a known answer, turn by turn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from constraints import ConstraintState
from feasibility import count_possible
from opening import FIRST_GUESS
from solver import best_guess
from word import WORD_LENGTH, Word, WordTable, as_word


# Feedback encoding:
# 2 = exact   (correct letter, correct position)
# 1 = present (letter occurs elsewhere in the answer)
# 0 = absent  (letter does not occur in the answer)
EXACT, PRESENT, ABSENT = 2, 1, 0


def feedback(answer: Word | str, guess: Word | str) -> tuple[int, ...]:
    """Per-letter feedback for *guess* against *answer*.

    Presence is per letter, not per occurrence: every copy of a letter that
    occurs in the answer is reported present.  This is the model
    :meth:`ConstraintState.incorporate` learns from.
    """
    answer = as_word(answer)
    guess = as_word(guess)
    pat = []
    for i in range(WORD_LENGTH):
        if guess.text[i] == answer.text[i]:
            pat.append(EXACT)
        elif guess.text[i] in answer.text:
            pat.append(PRESENT)
        else:
            pat.append(ABSENT)
    return tuple(pat)


@dataclass(frozen=True)
class Turn:
    guess: Word
    feedback: tuple[int, ...]
    remaining: int   # possible answers after this turn


class Game:
    """A single game against a known *answer*.

    Parameters
    ----------
    answer : Word or str
        The hidden word; must be in *answers*.
    answers, guesses : WordTable or sequence of Word
        Answer universe and guess universe.
    first_guess : Word, str or None
        Forced opening, used only if it is in *guesses*.  None lets the
        solver compute it (slow on full lists).
    max_workers : int
        Passed to :func:`solver.best_guess`.
    """

    def __init__(
        self,
        answer: Word | str,
        answers: WordTable | Sequence[Word],
        guesses: WordTable | Sequence[Word],
        first_guess: Word | str | None = FIRST_GUESS,
        max_workers: int | None = 1,
    ) -> None:
        self._answer = as_word(answer)
        self._answers = WordTable.coerce(answers)
        self._guesses = WordTable.coerce(guesses)
        if self._answer not in self._answers:
            raise ValueError(f"{self._answer.text!r} is not a possible answer")
        opening = as_word(first_guess) if first_guess is not None else None
        self._first_guess = opening if opening is not None and opening in self._guesses else None
        self._max_workers = max_workers
        self._state = ConstraintState()
        self._history: list[Turn] = []
        self._solved = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def next_guess(self) -> Word:
        if not self._history and self._first_guess is not None:
            return self._first_guess
        return best_guess(self._state, self._answers, self._guesses,
                          max_workers=self._max_workers)

    def step(self) -> Turn:
        """Choose a guess, learn from it, and return the turn.

        Raises
        ------
        RuntimeError
            If the game is already solved.
        """
        if self._solved:
            raise RuntimeError("Game is already over")
        word = self.next_guess()
        self._state.incorporate(self._answer, word)
        turn = Turn(
            guess=word,
            feedback=feedback(self._answer, word),
            remaining=count_possible(self._state, self._answers),
        )
        self._history.append(turn)
        if word == self._answer:
            self._solved = True
        return turn

    def play(self) -> int:
        """Play until solved; return the number of guesses."""
        while not self._solved:
            self.step()
        return len(self._history)

    def is_solved(self) -> bool:
        return self._solved

    @property
    def history(self) -> list[Turn]:
        return list(self._history)

    @property
    def state(self) -> ConstraintState:
        return self._state

    @property
    def answer(self) -> Word:
        return self._answer

    @property
    def num_guesses(self) -> int:
        return self._state.turns


def play(
    answer: Word | str,
    answers: WordTable | Sequence[Word],
    guesses: WordTable | Sequence[Word],
    first_guess: Word | str | None = FIRST_GUESS,
    max_workers: int | None = 1,
) -> int:
    """Number of guesses the solver needs for *answer*."""
    return Game(answer, answers, guesses, first_guess, max_workers).play()
