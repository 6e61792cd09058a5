"""Sentence similarity: TF-IDF cosine, character LCS, word co-occurrence.

Each scorer returns a value in [0, 1].  `combined_similarity` blends
them with the weights of a ScoringConfig.
"""

from __future__ import annotations

import math
from itertools import product

import numpy as np

from engine.config import CoOccurrenceMethod, ScoringConfig
from engine.index import CorpusIndex, compute_tf
from engine.stemmer import stem

PMI_EPSILON = 0.0001


# ── TF-IDF cosine ───────────────────────────────────────────────────

def tfidf_similarity(
    index: CorpusIndex,
    sentence1: str,
    sentence2: str,
    filter_fillers: bool = False,
) -> float:
    """Cosine similarity of the TF-IDF vectors of two texts.

    IDF comes from the index; tokens unseen in the corpus are computed
    on demand against the fixed corpus documents.
    """
    words1 = index.tokenize_stemmed(sentence1, filter_fillers)
    words2 = index.tokenize_stemmed(sentence2, filter_fillers)
    if not words1 or not words2:
        return 0.0

    vocab = list(dict.fromkeys(words1 + words2))
    idf = np.array([index.get_idf(t) for t in vocab], dtype=np.float64)
    vec1 = np.array([compute_tf(t, words1) for t in vocab], dtype=np.float64) * idf
    vec2 = np.array([compute_tf(t, words2) for t in vocab], dtype=np.float64) * idf

    mag1 = np.linalg.norm(vec1)
    mag2 = np.linalg.norm(vec2)
    if mag1 == 0 or mag2 == 0:
        return 0.0
    return float(np.dot(vec1, vec2) / (mag1 * mag2))


# ── Character similarity ────────────────────────────────────────────

def longest_common_subsequence(str1: str, str2: str) -> int:
    """Length of the LCS, classic O(m·n) dynamic programming."""
    prev = [0] * (len(str2) + 1)
    for c1 in str1:
        curr = [0]
        for j, c2 in enumerate(str2, start=1):
            if c1 == c2:
                curr.append(prev[j - 1] + 1)
            else:
                curr.append(max(prev[j], curr[j - 1]))
        prev = curr
    return prev[-1]


def character_similarity(str1: str, str2: str) -> float:
    """LCS length over the longer string's length (case-insensitive)."""
    if not str1 or not str2:
        return 0.0
    if str1 == str2:
        return 1.0

    s1 = str1.lower()
    s2 = str2.lower()
    max_length = max(len(s1), len(s2))
    if max_length == 0:
        return 1.0
    return longest_common_subsequence(s1, s2) / max_length


# ── Co-occurrence ───────────────────────────────────────────────────

def _jaccard(index: CorpusIndex, stem1: str, stem2: str) -> float:
    s1 = index.sentence_ids(stem1)
    s2 = index.sentence_ids(stem2)
    union = len(s1 | s2)
    if union == 0:
        return 0.0
    return len(s1 & s2) / union


def _pmi(index: CorpusIndex, stem1: str, stem2: str, co_count: int) -> float:
    total = len(index.corpus_docs)
    p_x = len(index.sentence_ids(stem1)) / total
    p_y = len(index.sentence_ids(stem2)) / total
    p_xy = co_count / total
    return math.log2((p_xy + PMI_EPSILON) / (p_x * p_y + PMI_EPSILON))


def _stem_pair_score(
    index: CorpusIndex,
    stem1: str,
    stem2: str,
    method: CoOccurrenceMethod,
) -> float:
    if stem1 == stem2:
        return 1.0

    co_count = index.co_occurrence_count(stem1, stem2)
    if co_count == 0:
        return 0.0

    if method is CoOccurrenceMethod.PMI:
        return _pmi(index, stem1, stem2, co_count)
    return _jaccard(index, stem1, stem2)


def co_occurrence_score(
    index: CorpusIndex,
    word1: str,
    word2: str,
    method: CoOccurrenceMethod = CoOccurrenceMethod.JACCARD,
) -> float:
    """Association of two words by shared sentences (Jaccard or PMI).

    Identical stems score 1; stems that never share a sentence score 0.
    PMI values are unbounded here; they are normalized only when averaged
    over sentences.
    """
    return _stem_pair_score(index, stem(word1.lower()), stem(word2.lower()), method)


def co_occurrence_similarity(
    index: CorpusIndex,
    sentence1: str,
    sentence2: str,
    filter_fillers: bool = False,
    method: CoOccurrenceMethod = CoOccurrenceMethod.JACCARD,
) -> float:
    """Average pairwise co-occurrence score of two texts' unique stems."""
    words1 = set(index.tokenize_stemmed(sentence1, filter_fillers))
    words2 = set(index.tokenize_stemmed(sentence2, filter_fillers))
    if not words1 or not words2:
        return 0.0

    total = sum(_stem_pair_score(index, a, b, method) for a, b in product(words1, words2))
    avg = total / (len(words1) * len(words2))

    if method is CoOccurrenceMethod.PMI:
        return min(1.0, max(0.0, (avg + 5) / 10))
    return avg


# ── Combined ────────────────────────────────────────────────────────

def combined_similarity(
    index: CorpusIndex,
    sentence1: str,
    sentence2: str,
    config: ScoringConfig | None = None,
) -> float:
    """Weighted mean of the enabled scorers."""
    config = config or ScoringConfig()

    tfidf = tfidf_similarity(index, sentence1, sentence2, config.filter_fillers)
    char = character_similarity(sentence1, sentence2)

    weighted_sum = tfidf * config.tfidf_weight + char * config.char_weight
    total_weight = config.tfidf_weight + config.char_weight

    if config.co_occ_weight > 0:
        co_occ = co_occurrence_similarity(
            index, sentence1, sentence2, config.filter_fillers, config.co_occ_method
        )
        weighted_sum += co_occ * config.co_occ_weight
        total_weight += config.co_occ_weight

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight
