"""Shared fixtures for unit tests"""

import sys
from pathlib import Path

import pytest

# Add project root to path for engine / narrowmind imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from engine.index import CorpusIndex

CORPUS = "The cat sat. The dog ran fast. Cats and dogs are friends."


@pytest.fixture
def corpus_text():
    return CORPUS


@pytest.fixture
def index():
    """Index over the three-sentence pets corpus, no filler words."""
    return CorpusIndex(CORPUS)


@pytest.fixture
def filler_index():
    return CorpusIndex(CORPUS, filler_words=["The", "and", "ARE"])
