"""
Word2Vec embedding backend.
Trains a small gensim Word2Vec model on the cleaned corpus.
"""

import logging
import zlib
from collections import Counter
from typing import Optional, Sequence

from gensim.models import Word2Vec

from .base import BaseEmbedder, register_embedder
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.errors import DegenerateInput
import config

logger = logging.getLogger(__name__)


def _stable_hash(text: str) -> int:
    # Python's str hash is salted per process; gensim seeds word vectors from it
    return zlib.crc32(text.encode("utf-8"))


@register_embedder("word2vec")
class Word2VecEmbedder(BaseEmbedder):
    """
    gensim Word2Vec backend.

    Features:
    - CBOW or skip-gram training
    - Low-dimensional vectors (15 by default) sized for small corpora
    - Reproducible with a single worker and a fixed seed
    """

    def __init__(
        self,
        vector_size: int = config.W2V_VECTOR_SIZE,
        window: int = config.W2V_WINDOW,
        epochs: int = config.W2V_EPOCHS,
        min_count: int = config.W2V_MIN_COUNT,
        sg: int = config.W2V_SG,
        workers: int = config.W2V_WORKERS,
        seed: int = config.W2V_SEED,
    ):
        """
        Initialize the Word2Vec embedder.

        Args:
            vector_size: Embedding dimension D (default: 15)
            window: Context window size
            epochs: Training passes over the corpus
            min_count: Words rarer than this are left out of the vocabulary
            sg: 0 for CBOW, 1 for skip-gram
            workers: Training threads
            seed: Random seed
        """
        self.vector_size = vector_size
        self.window = window
        self.epochs = epochs
        self.min_count = min_count
        self.sg = sg
        self.workers = workers
        self.seed = seed

        self._model: Optional[Word2Vec] = None

    @property
    def name(self) -> str:
        variant = "skipgram" if self.sg else "cbow"
        return f"word2vec_{variant}_d{self.vector_size}"

    @property
    def dimension(self) -> int:
        return self.vector_size

    def train(self, documents: Sequence[Sequence[str]]) -> EmbeddingMatrix:
        """
        Train Word2Vec and return the learned vocabulary vectors.

        Vocabulary order follows the model's index (most frequent first).
        """
        sentences = [list(doc) for doc in documents if len(doc) > 0]
        if not sentences:
            raise DegenerateInput("Cannot train embeddings on an empty corpus")

        counts = Counter(token for doc in sentences for token in doc)
        if not any(n >= self.min_count for n in counts.values()):
            raise DegenerateInput(
                f"No word occurs at least min_count={self.min_count} times"
            )

        logger.info(
            f"Training {self.name} on {len(sentences)} documents "
            f"(window={self.window}, epochs={self.epochs}, min_count={self.min_count})"
        )
        self._model = Word2Vec(
            sentences=sentences,
            vector_size=self.vector_size,
            window=self.window,
            min_count=self.min_count,
            sg=self.sg,
            epochs=self.epochs,
            workers=self.workers,
            seed=self.seed,
            hashfxn=_stable_hash,
        )

        wv = self._model.wv
        logger.info(f"Learned {len(wv.index_to_key)} word vectors")
        return EmbeddingMatrix(words=tuple(wv.index_to_key), vectors=wv.vectors)

    def get_model(self) -> Optional[Word2Vec]:
        """
        Get the trained Word2Vec model.

        Returns:
            Trained model or None if not trained
        """
        return self._model

    @property
    def is_trained(self) -> bool:
        """Check if the model has been trained."""
        return self._model is not None
