"""Ranker: scores every corpus sentence against a query."""

from __future__ import annotations

from engine.config import ScoringConfig
from engine.index import CorpusIndex
from engine.similarity import combined_similarity


def rank_sentences(
    query: str,
    index: CorpusIndex,
    top_n: int = 0,
    config: ScoringConfig | None = None,
) -> list[tuple[str, float]]:
    """Returns [(sentence, score)] descending, only scores > 0.

    top_n = 0 returns every positively scored sentence.  Ties keep
    corpus order.
    """
    if not query or not isinstance(query, str):
        return []
    config = config or ScoringConfig()

    ranked: list[tuple[str, float]] = []
    for sentence in index.sentences:
        score = combined_similarity(index, query, sentence, config)
        if score > 0:
            ranked.append((sentence, score))

    ranked.sort(key=lambda x: x[1], reverse=True)
    return ranked[:top_n] if top_n > 0 else ranked
