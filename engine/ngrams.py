"""N-gram matcher: corpus tokens that surround the query's own n-grams."""

from __future__ import annotations

from collections import Counter

from engine.index import CorpusIndex


def ngrams(tokens: list[str], n: int) -> list[tuple[str, ...]]:
    """All contiguous windows of length n (empty if n exceeds the list)."""
    if n <= 0:
        return []
    return [tuple(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


def find_most_common_tokens_from_query_ngrams(
    query: str,
    index: CorpusIndex,
    n: int = 2,
    filter_fillers: bool = False,
    top_n: int = 10,
) -> list[tuple[str, int]]:
    """Count tokens of corpus n-grams that equal some query n-gram.

    Every token of each matching corpus window is counted once per hit.
    Tokens of the query itself are excluded.  Returns [(stem, count)]
    descending, at most top_n entries.
    """
    query_tokens = index.tokenize_stemmed(query, filter_fillers)
    if n <= 0 or len(query_tokens) < n:
        return []

    query_grams = ngrams(query_tokens, n)
    corpus_grams = ngrams(index.stemmed_tokens, n)

    counts: Counter[str] = Counter()
    for q_gram in query_grams:
        for c_gram in corpus_grams:
            if c_gram == q_gram:
                counts.update(c_gram)

    for token in set(query_tokens):
        counts.pop(token, None)

    return sorted(counts.items(), key=lambda x: x[1], reverse=True)[:top_n]
