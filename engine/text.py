"""Shared text preprocessing for the corpus index and the scorers.

The index and every similarity function must tokenize identically;
a query stemmed differently from the corpus would never match it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from engine.stemmer import stem

# Runs of anything that is not a Unicode letter or digit.
_TOKEN_SPLIT = re.compile(r"[\W_]+")

# Sentence boundaries: . ! ? , quotes : ; newline (a run counts once).
_SENTENCE_SPLIT = re.compile(r"[.!?,\"'“”‘’:;\n]+")


def tokenize(text: str) -> list[str]:
    """Split text into display tokens (original case preserved)."""
    if not text or not isinstance(text, str):
        return []
    return [t for t in _TOKEN_SPLIT.split(text) if t]


def segment_sentences(text: str) -> list[str]:
    """Split text into trimmed, non-empty sentences in corpus order."""
    if not text or not isinstance(text, str):
        return []
    pieces = (s.strip() for s in _SENTENCE_SPLIT.split(text))
    return [s for s in pieces if s]


def filter_fillers(tokens: Iterable[str], filler_words: set[str]) -> list[str]:
    """Drop filler words (case-insensitive) from a token list."""
    if not filler_words:
        return list(tokens)
    return [t for t in tokens if t.lower() not in filler_words]


def tokenize_stemmed(
    text: str,
    filler_words: set[str] | None = None,
    filter_filler_words: bool = False,
) -> list[str]:
    """Tokenize → (optionally) drop fillers → lowercase → stem."""
    tokens = tokenize(text)
    if filter_filler_words and filler_words:
        tokens = filter_fillers(tokens, filler_words)
    return [stem(t.lower()) for t in tokens]
