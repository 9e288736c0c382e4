import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pytest

from cluster_lens.core.clustering import KMeansClusterer
from cluster_lens.core.corpus import TextCleaner, WordFrequencyTable
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.core.word_space import WordSpace


STOPWORDS = ["de", "het", "een", "en", "is", "was", "the", "a", "and"]


@pytest.fixture
def two_pairs_matrix():
    """Four words forming two well separated pairs."""
    return EmbeddingMatrix(
        words=("a", "b", "c", "d"),
        vectors=np.array([
            [0.0, 0.0],
            [0.1, 0.0],
            [10.0, 10.0],
            [10.1, 10.0],
        ]),
    )


@pytest.fixture
def blob_matrix():
    """Thirty words in three tight, well separated blobs in 5 dimensions."""
    rng = np.random.default_rng(7)
    centers = np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0],
        [8.0, 0.0, 8.0, 0.0, 8.0],
        [0.0, 8.0, 0.0, 8.0, -8.0],
    ])
    vectors = np.vstack([c + rng.normal(scale=0.3, size=(10, 5)) for c in centers])
    words = tuple(f"w{i:02d}" for i in range(len(vectors)))
    return EmbeddingMatrix(words=words, vectors=vectors)


@pytest.fixture
def blob_freq(blob_matrix):
    # Descending frequency in matrix order, with one tie
    counts = {word: 100 - i for i, word in enumerate(blob_matrix.words)}
    counts["w05"] = counts["w04"]
    return WordFrequencyTable(counts)


@pytest.fixture
def clusterer():
    return KMeansClusterer(seed=42, n_init=10)


@pytest.fixture
def blob_space(blob_matrix, blob_freq, clusterer):
    return WordSpace.from_parts(blob_matrix, blob_freq, clusterer=clusterer)


@pytest.fixture
def cleaner():
    return TextCleaner(stopwords=STOPWORDS)
