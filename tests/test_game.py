from __future__ import annotations

import pytest

from game import ABSENT, EXACT, PRESENT, Game, feedback, play
from word import Word


def test_feedback_marks():
    assert feedback("crane", "trace") == (ABSENT, EXACT, EXACT, PRESENT, EXACT)
    assert feedback("crane", "crane") == (EXACT,) * 5


def test_feedback_is_per_letter_presence():
    # Both 'e's of "eerie" are reported present although "trace" has one.
    assert feedback("trace", "eerie") == (PRESENT, PRESENT, PRESENT, ABSENT, EXACT)


def test_every_answer_is_solved(table):
    for answer in table:
        game = Game(answer, table, table, first_guess=None)
        n = game.play()
        assert game.is_solved()
        assert game.history[-1].guess == answer
        assert game.history[-1].remaining == 1
        assert n == game.num_guesses == len(game.history)


def test_remaining_never_grows(table):
    game = Game("grace", table, table, first_guess=None)
    game.play()
    counts = [t.remaining for t in game.history]
    assert counts == sorted(counts, reverse=True)


def test_forced_opening_is_used(table):
    game = Game("zonal", table, table, first_guess="slate")
    assert game.step().guess == Word("slate")


def test_opening_outside_guess_list_is_ignored(table):
    forced = Game("zonal", table, table, first_guess="aesir")
    free = Game("zonal", table, table, first_guess=None)
    assert forced.next_guess() == free.next_guess()


def test_answer_must_be_an_answer(table):
    with pytest.raises(ValueError):
        Game("fuzzy", table, table)


def test_step_after_solved_raises(table):
    game = Game("crane", table, table, first_guess="crane")
    turn = game.step()
    assert turn.feedback == (EXACT,) * 5
    assert game.is_solved()
    with pytest.raises(RuntimeError):
        game.step()


def test_play_function(table):
    assert play("crane", table, table, first_guess="crane") == 1
    assert play("chase", table, table, first_guess=None) == Game(
        "chase", table, table, first_guess=None).play()
