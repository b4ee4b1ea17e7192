"""The first move.

The best guess from an empty state never depends on the answer, so it is
computed once (``precompute_first_guess.py``) and reused.  ``FIRST_GUESS`` is
the result for the standard answer/guess lists; results for other lists are
cached in ``data/first_guess.json`` keyed by a fingerprint of both lists.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Sequence

from lexicon import DATA_DIR
from word import Word, as_word

FIRST_GUESS = Word("aesir")

CACHE_PATH = DATA_DIR / "first_guess.json"


def fingerprint(answers: Sequence[Word], guesses: Sequence[Word]) -> str:
    """Stable digest of both lists (order matters: it drives tie-breaks)."""
    h = hashlib.sha256()
    for label, words in (("answers", answers), ("guesses", guesses)):
        h.update(label.encode())
        for w in words:
            h.update(w.text.encode())
        h.update(b"\n")
    return h.hexdigest()[:16]


def load_cache(path: str | Path = CACHE_PATH) -> dict[str, str]:
    """Load fingerprint -> word mapping, or an empty dict."""
    path = Path(path)
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def save_first_guess(
    answers: Sequence[Word],
    guesses: Sequence[Word],
    word: Word,
    path: str | Path = CACHE_PATH,
) -> None:
    """Atomically add *word* to the cache (write tmp then rename)."""
    path = Path(path)
    cache = load_cache(path)
    cache[fingerprint(answers, guesses)] = word.text
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(cache, f, indent=2, sort_keys=True)
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_cached_first_guess(
    answers: Sequence[Word],
    guesses: Sequence[Word],
    path: str | Path = CACHE_PATH,
) -> Word | None:
    text = load_cache(path).get(fingerprint(answers, guesses))
    return Word(text) if text else None


def resolve_first_guess(
    answers: Sequence[Word],
    guesses: Sequence[Word],
    override: Word | str | None = None,
    use_cache: bool = True,
    path: str | Path = CACHE_PATH,
) -> Word | None:
    """The forced opening for these lists, or None to let the solver choose.

    Precedence: *override*, then the cache, then ``FIRST_GUESS``.  The result
    is only used when it is a legal guess.
    """
    if override is not None:
        word = as_word(override)
    else:
        word = load_cached_first_guess(answers, guesses, path) if use_cache else None
        if word is None:
            word = FIRST_GUESS
    return word if word in set(guesses) else None
