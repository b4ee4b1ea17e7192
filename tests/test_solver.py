from __future__ import annotations

import random

import pytest

import solver
from conftest import random_state
from constraints import ConstraintState
from feasibility import filter_possible, is_possible
from gate import is_revealing
from solver import best_guess, score_guess, score_guesses
from word import Word, WordTable


def _brute_force_score(state, guess, possible):
    worst = 0
    for a in possible:
        sim = state.copy().incorporate(a, guess)
        worst = max(worst, sum(1 for w in possible if is_possible(sim, w)))
    return worst


# ------------------------------------------------------------------
# Scoring
# ------------------------------------------------------------------

def test_toy_lists_scores(toy):
    # "zonal" cannot tell "abide" from "chase".
    assert score_guesses(ConstraintState(), toy, toy) == [1, 1, 2]


def test_toy_tie_goes_to_first_in_order(toy):
    assert best_guess(ConstraintState(), toy, toy) == Word("abide")
    reversed_guesses = WordTable(list(reversed(toy.words)))
    assert best_guess(ConstraintState(), toy, reversed_guesses) == Word("chase")
    swapped = WordTable(["chase", "abide", "zonal"])
    assert best_guess(ConstraintState(), toy, swapped) == Word("chase")


def test_grouped_score_matches_brute_force(words, table):
    rng = random.Random(13)
    for _ in range(25):
        state = random_state(rng, words, max_turns=2)
        possible = filter_possible(state, table)
        for guess in rng.sample(words, 4):
            assert score_guess(state, guess, possible) == _brute_force_score(
                state, guess, possible)


def test_cutoff_only_promises_lower_bound(table):
    state = ConstraintState()
    guess = Word("crane")
    exact = score_guess(state, guess, table)
    assert score_guess(state, guess, table, cutoff=exact + 1) == exact
    assert score_guess(state, guess, table, cutoff=1) >= 1


def test_empty_possible_scores_zero():
    assert score_guess(ConstraintState(), Word("crane"), WordTable([])) == 0


# ------------------------------------------------------------------
# best_guess
# ------------------------------------------------------------------

def test_best_is_first_minimal_revealing_guess(words, table):
    rng = random.Random(17)
    for _ in range(10):
        state = random_state(rng, words, max_turns=2)
        possible = filter_possible(state, table)
        if len(possible) < 2:
            continue
        candidates = [g for g in table if is_revealing(state, g)]
        scores = score_guesses(state, possible, candidates)
        expected = candidates[scores.index(min(scores))]
        assert best_guess(state, table, table) == expected


def test_single_candidate_is_returned_without_search(monkeypatch, table):
    state = ConstraintState().incorporate("crane", "trace")

    def fail(*args, **kwargs):
        raise AssertionError("search should not run")

    monkeypatch.setattr(solver, "revealing_mask", fail)
    assert best_guess(state, table, table) == Word("crane")


def test_no_possible_answer_raises(table):
    # An answer outside the answer list leaves nothing consistent.
    state = ConstraintState().incorporate("fuzzy", "fuzzy")
    with pytest.raises(ValueError):
        best_guess(state, table, table)


def test_no_revealing_guess_raises():
    answers = WordTable(["brace", "crane"])
    state = ConstraintState().incorporate("crane", "dusty")
    with pytest.raises(ValueError):
        best_guess(state, answers, WordTable(["dusty"]))


def test_state_is_not_modified(table):
    state = ConstraintState().incorporate("slate", "crane")
    before = state.copy()
    best_guess(state, table, table)
    assert state == before


def test_deterministic(words, table):
    state = ConstraintState().incorporate("grace", "slate")
    first = best_guess(state, table, table)
    assert all(best_guess(state, table, table) == first for _ in range(3))
    assert best_guess(state, words, words) == first


def test_small_chunks_give_same_answer(monkeypatch, words, table):
    rng = random.Random(19)
    states = [random_state(rng, words, max_turns=1) for _ in range(4)]
    expected = [best_guess(s, table, table, max_workers=1) for s in states]
    monkeypatch.setattr(solver, "CHUNK_MIN", 3)
    assert [best_guess(s, table, table, max_workers=1) for s in states] == expected


def test_parallel_matches_serial(monkeypatch, words, table):
    rng = random.Random(23)
    states = [ConstraintState()] + [random_state(rng, words, max_turns=1) for _ in range(2)]
    expected = [best_guess(s, table, table, max_workers=1) for s in states]
    monkeypatch.setattr(solver, "PARALLEL_MIN_WORK", 0)
    monkeypatch.setattr(solver, "CHUNK_MIN", 4)
    got = [best_guess(s, table, table, max_workers=2) for s in states]
    assert got == expected


def test_progress_callback(monkeypatch, table):
    monkeypatch.setattr(solver, "CHUNK_MIN", 10)
    calls = []
    best_guess(ConstraintState(), table, table, max_workers=1,
               progress=lambda done, total: calls.append((done, total)))
    assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]
