"""Word-list loading utilities.

Two plain-text lists, one word per line:
  - answer words: every word that can be the hidden answer
  - guess words:  every word that may be typed as a guess

Lines that are not exactly five letters ``a``-``z`` (after stripping and
lowercasing) are skipped.  Both lists come back sorted, which fixes the
order the solver uses to break ties.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from word import WORD_LENGTH, Word, WordTable


_DIR = Path(__file__).resolve().parent
DATA_DIR = _DIR / "data"
ANSWERS_PATH = DATA_DIR / "answer_words.txt"
GUESSES_PATH = DATA_DIR / "guess_words.txt"

_PATTERN = re.compile(rf"[a-z]{{{WORD_LENGTH}}}")


# ------------------------------------------------------------------
# Lexicon dataclass
# ------------------------------------------------------------------

@dataclass
class Lexicon:
    """The answer universe and the guess universe."""
    answers: WordTable
    guesses: WordTable


# ------------------------------------------------------------------
# Loading
# ------------------------------------------------------------------

def load_words(path: str | Path) -> list[Word]:
    """Load a plain-text word list (one word per line), sorted and deduplicated."""
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    seen: set[str] = set()
    words: list[str] = []
    for raw in src.read_text(encoding="utf-8").splitlines():
        w = raw.strip().lower()
        if not w or w in seen:
            continue
        if _PATTERN.fullmatch(w):
            seen.add(w)
            words.append(w)
    words.sort()
    return [Word(w) for w in words]


def load_lexicon(
    answers_path: str | Path | None = None,
    guesses_path: str | Path | None = None,
    merge: bool = True,
) -> Lexicon:
    """Load the answer and guess lists.

    Parameters
    ----------
    answers_path, guesses_path : str or None
        Paths to the lists.  None falls back to ``data/answer_words.txt`` and
        ``data/guess_words.txt``.
    merge : bool
        If True, every answer word is also added to the guess list so the
        guess universe is a superset of the answer universe.

    Returns
    -------
    Lexicon
    """
    a_src = Path(answers_path) if answers_path is not None else ANSWERS_PATH
    g_src = Path(guesses_path) if guesses_path is not None else GUESSES_PATH
    for src in (a_src, g_src):
        if not src.exists():
            raise FileNotFoundError(
                f"Word list not found: {src}\n"
                f"Expected one {WORD_LENGTH}-letter word per line; pass "
                f"--answers/--guesses or place the lists under {DATA_DIR}"
            )

    answers = load_words(a_src)
    guesses = load_words(g_src)
    if not answers:
        raise ValueError(f"No {WORD_LENGTH}-letter words found in {a_src}")

    if merge:
        guesses = sorted(set(guesses) | set(answers))
    if not guesses:
        raise ValueError(f"No {WORD_LENGTH}-letter words found in {g_src}")

    return Lexicon(answers=WordTable(answers), guesses=WordTable(guesses))
