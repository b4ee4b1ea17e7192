"""Five-letter words and their columnar (numpy) form.

A :class:`Word` is an immutable value ordered lexicographically.  Besides the
letters it exposes three derived encodings used by the fast paths:

* ``codes``       -- letter indices 0..25, one per position
* ``packed``      -- one byte per letter in a 64-bit int (byte i = letter i)
* ``letter_mask`` -- 26-bit set of the letters that occur in the word

A :class:`WordTable` stacks those encodings for an ordered word list so that
a whole list can be tested against a constraint state in a few array ops.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

import numpy as np

WORD_LENGTH = 5
ALPHABET_SIZE = 26

_WORD_RE = re.compile(r"[a-z]{5}")


@dataclass(frozen=True, order=True)
class Word:
    """A 5-letter lowercase ASCII word."""

    text: str
    codes: tuple[int, ...] = field(init=False, repr=False, compare=False)
    packed: int = field(init=False, repr=False, compare=False)
    letter_mask: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not _WORD_RE.fullmatch(self.text):
            raise ValueError(
                f"word must be exactly {WORD_LENGTH} lowercase letters a-z, "
                f"got {self.text!r}"
            )
        codes = tuple(ord(c) - ord("a") for c in self.text)
        packed = 0
        mask = 0
        for i, c in enumerate(self.text):
            packed |= ord(c) << (8 * i)
            mask |= 1 << codes[i]
        object.__setattr__(self, "codes", codes)
        object.__setattr__(self, "packed", packed)
        object.__setattr__(self, "letter_mask", mask)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return WORD_LENGTH

    def __getitem__(self, i: int) -> str:
        return self.text[i]

    def __iter__(self) -> Iterator[str]:
        return iter(self.text)

    def __contains__(self, letter: str) -> bool:
        return letter in self.text

    @classmethod
    def from_packed(cls, packed: int) -> Word:
        return cls("".join(chr((packed >> (8 * i)) & 0xFF) for i in range(WORD_LENGTH)))

    def __reduce__(self):
        return (Word, (self.text,))


def as_word(value: Word | str) -> Word:
    """Return *value* as a Word, parsing strings (raises ValueError)."""
    if isinstance(value, Word):
        return value
    return Word(value)


def as_words(values: Iterable[Word | str]) -> list[Word]:
    return [as_word(v) for v in values]


class WordTable:
    """An ordered, immutable word list with numpy columns.

    Parameters
    ----------
    words : iterable of Word or str
        Words in the order that callers rely on (tie-breaks follow it).
    """

    __slots__ = ("words", "codes", "packed", "letter_masks", "_index")

    def __init__(self, words: Iterable[Word | str] = ()) -> None:
        ws = tuple(as_words(words))
        self.words: tuple[Word, ...] = ws
        self.codes = np.array([w.codes for w in ws], dtype=np.uint8).reshape(-1, WORD_LENGTH)
        self.packed = np.array([w.packed for w in ws], dtype=np.uint64)
        self.letter_masks = np.array([w.letter_mask for w in ws], dtype=np.uint32)
        self._index: dict[Word, int] | None = None

    @classmethod
    def coerce(cls, words: WordTable | Sequence[Word | str]) -> WordTable:
        if isinstance(words, WordTable):
            return words
        return cls(words)

    def subset(self, mask: np.ndarray) -> WordTable:
        """Rows where *mask* is true, order preserved."""
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (len(self.words),):
            raise ValueError(
                f"mask shape {mask.shape} does not match table of {len(self.words)} words"
            )
        out = WordTable.__new__(WordTable)
        out.words = tuple(w for w, keep in zip(self.words, mask) if keep)
        out.codes = self.codes[mask]
        out.packed = self.packed[mask]
        out.letter_masks = self.letter_masks[mask]
        out._index = None
        return out

    def index_of(self, word: Word | str) -> int:
        if self._index is None:
            self._index = {w: i for i, w in enumerate(self.words)}
        return self._index[as_word(word)]

    def __contains__(self, word: object) -> bool:
        if isinstance(word, str):
            try:
                word = Word(word)
            except ValueError:
                return False
        if not isinstance(word, Word):
            return False
        if self._index is None:
            self._index = {w: i for i, w in enumerate(self.words)}
        return word in self._index

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, i: int) -> Word:
        return self.words[i]

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words)

    def __repr__(self) -> str:
        head = ", ".join(w.text for w in self.words[:3])
        more = ", ..." if len(self.words) > 3 else ""
        return f"WordTable([{head}{more}], n={len(self.words)})"

    def __getstate__(self):
        return self.words

    def __setstate__(self, words) -> None:
        WordTable.__init__(self, words)
