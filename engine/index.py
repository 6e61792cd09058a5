"""Corpus index: sentences, stemmed documents, IDF cache, co-occurrence.

Built once from the corpus text.  After construction only the IDF cache
changes: query tokens unseen in the corpus are computed on first lookup
and appended, never overwritten.
"""

from __future__ import annotations

import json
import logging
import math
import threading
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import permutations
from pathlib import Path

from engine.stemmer import stem
from engine.text import filter_fillers, segment_sentences, tokenize, tokenize_stemmed

logger = logging.getLogger(__name__)


@dataclass
class TokenStats:
    token: str
    stemmed: str
    tf: float
    idf: float
    is_filler: bool = False


@dataclass
class CommonCoOccurrence:
    word: str
    tokens: list[str]
    total_count: int

    @property
    def token_count(self) -> int:
        return len(self.tokens)


@dataclass
class CorpusStats:
    sentences: int
    tokens: int
    filtered_tokens: int
    unique_stemmed: int
    filler_words: int
    co_occurrence_pairs: int
    avg_words_per_sentence: float
    top_words: list[tuple[str, int]] = field(default_factory=list)


# ── Filler words ────────────────────────────────────────────────────

def load_filler_words(path: str) -> set[str]:
    """Load a JSON list of filler words, lowercased.

    Any failure (missing file, bad JSON, not a list) is logged as a
    warning and yields an empty set.
    """
    try:
        words = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load filler words from {path}: {e}. Using empty filler list.")
        return set()

    if not isinstance(words, list):
        logger.warning(f"Filler words file {path} is not a JSON list. Using empty filler list.")
        return set()

    return {w.lower() for w in words if isinstance(w, str)}


# ── TF / IDF ────────────────────────────────────────────────────────

def compute_tf(token: str, word_list: Sequence[str]) -> float:
    """TF(t, d) = count(t in d) / len(d); 0 for an empty list."""
    if not word_list:
        return 0.0
    return word_list.count(token) / len(word_list)


def _smoothed_idf(n_docs: int, df: int) -> float:
    return math.log((n_docs + 1) / (df + 1)) + 1


def compute_idf(token: str, documents: Sequence[Iterable[str]]) -> float:
    """IDF(t) = ln((N + 1) / (df + 1)) + 1 over document membership."""
    if not documents:
        return 0.0
    df = sum(1 for doc in documents if token in doc)
    return _smoothed_idf(len(documents), df)


# ── Index ───────────────────────────────────────────────────────────

class CorpusIndex:
    def __init__(self, text: str, filler_words: Iterable[str] | None = None):
        self.tokens = tokenize(text)
        self.sentences = segment_sentences(text)
        self.filler_words: set[str] = {w.lower() for w in filler_words or ()}
        self.filtered_tokens = filter_fillers(self.tokens, self.filler_words)

        self.corpus_docs: list[list[str]] = [self.tokenize_stemmed(s) for s in self.sentences]
        self.stemmed_tokens: list[str] = self.tokenize_stemmed(text)

        self._postings = self._build_postings(self.corpus_docs)
        self._idf_lock = threading.Lock()
        self.idf_cache: dict[str, float] = {
            token: self._idf(token) for token in dict.fromkeys(self.stemmed_tokens)
        }
        self.co_occurrence_matrix = self._build_co_occurrence(self.corpus_docs)

        logger.debug(
            f"Built corpus index: {len(self.sentences)} sentences, "
            f"{len(self.idf_cache)} unique stems, "
            f"{self.co_occurrence_pair_count()} co-occurrence pairs"
        )

    # ── Construction helpers ────────────────────────────────────────

    @staticmethod
    def _build_postings(docs: list[list[str]]) -> dict[str, set[int]]:
        """Map each stem to the set of sentence indices containing it."""
        postings: dict[str, set[int]] = defaultdict(set)
        for i, doc in enumerate(docs):
            for term in doc:
                postings[term].add(i)
        return dict(postings)

    @staticmethod
    def _build_co_occurrence(docs: list[list[str]]) -> dict[str, dict[str, int]]:
        """Count, for every ordered pair of distinct stems, the sentences holding both."""
        matrix: dict[str, Counter[str]] = defaultdict(Counter)
        for doc in docs:
            unique = list(dict.fromkeys(doc))
            for a, b in permutations(unique, 2):
                matrix[a][b] += 1
        return {term: dict(row) for term, row in matrix.items()}

    # ── Tokenizing with this corpus' fillers ───────────────────────

    def is_filler(self, word: str) -> bool:
        return word.lower() in self.filler_words

    def tokenize_stemmed(self, text: str, filter_filler_words: bool = False) -> list[str]:
        return tokenize_stemmed(text, self.filler_words, filter_filler_words)

    # ── TF / IDF ────────────────────────────────────────────────────

    def _idf(self, token: str) -> float:
        if not self.corpus_docs:
            return 0.0
        return _smoothed_idf(len(self.corpus_docs), self.document_frequency(token))

    def document_frequency(self, token: str) -> int:
        return len(self._postings.get(token, ()))

    def get_idf(self, token: str) -> float:
        """Cached IDF of a stemmed token, computed and stored on a miss."""
        idf = self.idf_cache.get(token)
        if idf is not None:
            return idf
        with self._idf_lock:
            if token not in self.idf_cache:
                self.idf_cache[token] = self._idf(token)
            return self.idf_cache[token]

    def get_tf(self, token: str) -> float:
        """Frequency of the token's stem across the whole corpus."""
        return compute_tf(stem(token.lower()), self.stemmed_tokens)

    def get_token_stats(self, token: str) -> TokenStats:
        normalized = token.lower()
        stemmed = stem(normalized)
        return TokenStats(
            token=normalized,
            stemmed=stemmed,
            tf=self.get_tf(normalized),
            idf=self.get_idf(stemmed),
            is_filler=self.is_filler(normalized),
        )

    # ── Co-occurrence ───────────────────────────────────────────────

    def sentence_ids(self, stemmed: str) -> set[int]:
        return self._postings.get(stemmed, set())

    def co_occurrence_count(self, stem1: str, stem2: str) -> int:
        return self.co_occurrence_matrix.get(stem1, {}).get(stem2, 0)

    def co_occurrence_pair_count(self) -> int:
        return sum(len(row) for row in self.co_occurrence_matrix.values())

    def get_top_co_occurrences(self, word: str, n: int = 3) -> list[tuple[str, int]]:
        """Stems most often sharing a sentence with the word's stem."""
        row = self.co_occurrence_matrix.get(stem(word.lower()), {})
        return sorted(row.items(), key=lambda x: x[1], reverse=True)[:n]

    def common_co_occurrences(
        self,
        tokens: Iterable[str],
        per_token: int = 3,
    ) -> list[CommonCoOccurrence]:
        """Words among the top co-occurrences of more than one query token.

        Filler tokens are skipped.  Sorted by how many query tokens share
        the word, then by summed co-occurrence count.
        """
        shared: dict[str, CommonCoOccurrence] = {}

        for token in tokens:
            normalized = token.lower()
            if self.is_filler(normalized):
                continue
            for word, count in self.get_top_co_occurrences(normalized, per_token):
                entry = shared.setdefault(word, CommonCoOccurrence(word, [], 0))
                if normalized not in entry.tokens:
                    entry.tokens.append(normalized)
                entry.total_count += count

        common = [c for c in shared.values() if c.token_count > 1]
        return sorted(common, key=lambda c: (c.token_count, c.total_count), reverse=True)

    # ── Statistics ──────────────────────────────────────────────────

    def stats(self, top: int = 5) -> CorpusStats:
        n_sentences = len(self.sentences)
        return CorpusStats(
            sentences=n_sentences,
            tokens=len(self.tokens),
            filtered_tokens=len(self.filtered_tokens),
            unique_stemmed=len(set(self.stemmed_tokens)),
            filler_words=len(self.filler_words),
            co_occurrence_pairs=self.co_occurrence_pair_count(),
            avg_words_per_sentence=len(self.tokens) / n_sentences if n_sentences else 0.0,
            top_words=Counter(self.stemmed_tokens).most_common(top),
        )
