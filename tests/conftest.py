from __future__ import annotations

import random

import pytest

import feasibility
from constraints import ConstraintState
from word import Word, WordTable

WORDS = [
    "abide", "about", "adore", "after", "alert", "apple", "arise", "audio",
    "badge", "beach", "brave", "chase", "cider", "crane", "crate", "dance",
    "eager", "fable", "flame", "glare", "grace", "heart", "irate", "joker",
    "knife", "lemon", "mango", "noble", "ocean", "pride", "quiet", "raise",
    "react", "slate", "stare", "tears", "trace", "unite", "vivid", "zonal",
]


@pytest.fixture(autouse=True)
def _cross_check(monkeypatch):
    """Every batch evaluation is checked against the scalar reference."""
    monkeypatch.setattr(feasibility, "CROSS_CHECK", True)


@pytest.fixture
def words() -> list[Word]:
    return [Word(w) for w in WORDS]


@pytest.fixture
def table(words) -> WordTable:
    return WordTable(words)


@pytest.fixture
def toy() -> WordTable:
    return WordTable(["abide", "chase", "zonal"])


def random_state(rng: random.Random, pool: list[Word], max_turns: int = 3) -> ConstraintState:
    """State after a few random guesses against a random answer from *pool*."""
    answer = rng.choice(pool)
    state = ConstraintState()
    for _ in range(rng.randint(0, max_turns)):
        state.incorporate(answer, rng.choice(pool))
    return state
