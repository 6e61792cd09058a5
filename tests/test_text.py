"""
Unit tests for tokenization, sentence segmentation and filler filtering.
"""

from engine.text import filter_fillers, segment_sentences, tokenize, tokenize_stemmed


class TestTokenize:
    """Test splitting on non letter/digit runs"""

    def test_basic_tokenization(self):
        assert tokenize("Hello, world! 42 times") == ["Hello", "world", "42", "times"]

    def test_preserves_case(self):
        assert tokenize("PostgreSQL Cloud") == ["PostgreSQL", "Cloud"]

    def test_unicode_letters(self):
        assert tokenize("naïve café — Zürich") == ["naïve", "café", "Zürich"]

    def test_underscore_and_symbols_split(self):
        assert tokenize("snake_case user@example.com") == ["snake", "case", "user", "example", "com"]

    def test_empty_and_non_string(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize("...!!!") == []
        assert tokenize(None) == []
        assert tokenize(123) == []


class TestSegmentSentences:
    """Test sentence boundary detection"""

    def test_basic_sentences(self, corpus_text):
        assert segment_sentences(corpus_text) == [
            "The cat sat",
            "The dog ran fast",
            "Cats and dogs are friends",
        ]

    def test_delimiter_runs_collapse(self):
        text = 'Hi!!! Ok?? \n\n Yes; no: maybe, "quoted"'
        assert segment_sentences(text) == ["Hi", "Ok", "Yes", "no", "maybe", "quoted"]

    def test_apostrophe_is_a_boundary(self):
        assert segment_sentences("It's here") == ["It", "s here"]

    def test_empty_and_non_string(self):
        assert segment_sentences("") == []
        assert segment_sentences(" . ! ? ") == []
        assert segment_sentences(None) == []


class TestFillers:
    """Test filler filtering and stemmed tokenization"""

    def test_filter_is_case_insensitive(self):
        assert filter_fillers(["The", "Cat", "AND", "dog"], {"the", "and"}) == ["Cat", "dog"]

    def test_empty_filler_set_keeps_everything(self):
        assert filter_fillers(["The", "cat"], set()) == ["The", "cat"]

    def test_tokenize_stemmed(self):
        assert tokenize_stemmed("The Cats were running") == ["the", "cat", "were", "run"]

    def test_tokenize_stemmed_with_fillers(self):
        tokens = tokenize_stemmed("The Cats were running", {"the"}, filter_filler_words=True)
        assert tokens == ["cat", "were", "run"]

    def test_fillers_ignored_unless_requested(self):
        assert tokenize_stemmed("The cat", {"the"}) == ["the", "cat"]
