"""
Statistical sentence ranking over a fixed text corpus.

Components:
- stemmer: rule-based suffix stripping
- text: tokenization, sentence segmentation, filler filtering
- index: per-sentence stemmed documents, IDF cache, co-occurrence matrix
- similarity: TF-IDF cosine, character LCS, Jaccard/PMI co-occurrence
- ranker: combined-score ranking of corpus sentences
- ngrams: corpus tokens around the query's n-grams
"""

from engine.config import CoOccurrenceMethod, ConfigError, ScoringConfig, load_scoring_config
from engine.index import CorpusIndex, load_filler_words
from engine.ngrams import find_most_common_tokens_from_query_ngrams
from engine.ranker import rank_sentences
from engine.stemmer import stem
from engine.text import segment_sentences, tokenize, tokenize_stemmed

__all__ = [
    "CoOccurrenceMethod",
    "ConfigError",
    "ScoringConfig",
    "load_scoring_config",
    "CorpusIndex",
    "load_filler_words",
    "find_most_common_tokens_from_query_ngrams",
    "rank_sentences",
    "stem",
    "segment_sentences",
    "tokenize",
    "tokenize_stemmed",
]
