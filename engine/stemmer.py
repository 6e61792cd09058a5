"""Rule-based suffix-stripping stemmer.

Approximates a word's root by removing one derivational or inflectional
suffix, then falls back to simple plural rules.  Output is a pure function
of the input string; nothing here depends on the corpus.

Examples:
- "running"  → "run"
- "horses"   → "hors"
- "flies"    → "fly"
- "national" → "na"  ("ational" would leave a one-letter stem, so "tional" applies)
"""

from __future__ import annotations

VOWELS = frozenset("aeiou")
CONSONANTS = frozenset("bcdfghjklmnpqrstvwxyz")

MIN_STEM_LENGTH = 2

# Tried in order; the first suffix leaving a long-enough stem wins.
SUFFIXES = (
    "ational", "ization", "tional", "ousness", "iveness", "fulness",
    "ousli", "alism", "aliti", "ation", "ator", "ement",
    "ment", "able", "ible", "ance", "ence", "ness",
    "tion", "sion", "ing", "ed", "er", "est", "ly", "ful", "less",
)

_E_DROP_SUFFIXES = frozenset({"ed", "ing", "er", "est"})
_UNDOUBLE_SUFFIXES = frozenset({"ed", "ing"})

_IRREGULAR = {
    "was": "was",
    "is": "is",
    "are": "are",
    "has": "hav",
    "had": "hav",
    "have": "hav",
}


def is_vowel(char: str) -> bool:
    return char in VOWELS


def is_consonant(char: str) -> bool:
    return char in CONSONANTS


def _ends_in_cvc_double(stem: str) -> bool:
    """True for a vowel followed by a doubled consonant, e.g. "runn", "stopp"."""
    if len(stem) <= 2:
        return False
    last, second_last, third_last = stem[-1], stem[-2], stem[-3]
    return is_consonant(last) and last == second_last and is_vowel(third_last)


def _strip_suffix(word: str) -> str | None:
    for suffix in SUFFIXES:
        if not word.endswith(suffix):
            continue
        stem = word[: -len(suffix)]
        if len(stem) < MIN_STEM_LENGTH:
            continue

        if suffix in _E_DROP_SUFFIXES and len(stem) > 1 and stem.endswith("e"):
            return stem[:-1]
        if suffix in _UNDOUBLE_SUFFIXES and _ends_in_cvc_double(stem):
            return stem[:-1]
        return stem
    return None


def _strip_plural(word: str) -> str:
    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"
    if word.endswith("es") and len(word) > 4:
        return word[:-2]
    if word.endswith("s") and len(word) > 3 and word[-2] != "s":
        return word[:-1]
    return word


def stem(word: str | None) -> str | None:
    """Stem a single word.

    Case is folded internally.  Words shorter than three characters are
    returned lowercased; empty or None input is returned as-is.

    Examples:
        >>> stem("Running")
        'run'
        >>> stem("flies")
        'fly'
        >>> stem("has")
        'hav'
    """
    if not word:
        return word

    lower = word.lower()
    if len(lower) < 3:
        return lower

    if lower in _IRREGULAR:
        return _IRREGULAR[lower]

    stripped = _strip_suffix(lower)
    if stripped is not None:
        return stripped

    return _strip_plural(lower)
