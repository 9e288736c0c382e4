"""
WordSpace: Central orchestrator for Cluster-Lens.
Loads the corpus, cleans it, trains the embedding model, and holds the
resulting immutable matrix and frequency table.
"""

import logging
from typing import Callable, Optional

import pandas as pd

from cluster_lens.core.clustering import ElbowCurve, KMeansClusterer
from cluster_lens.core.corpus import CleanCorpus, TextCleaner, WordFrequencyTable, prepare_corpus
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.core.projector import PCAProjector
from cluster_lens.embedders.base import BaseEmbedder
from cluster_lens.embedders.word2vec_embedder import Word2VecEmbedder
from cluster_lens.loaders.base import BaseCorpusLoader
from cluster_lens.loaders.reviews import ReviewsCsvLoader
import config

logger = logging.getLogger(__name__)


class WordSpace:
    """
    Process-wide word embedding space.

    Responsibilities:
    - Load documents via a corpus loader
    - Clean them into token documents and a frequency table
    - Train the embedding model
    - Memoize the per-matrix derived values (projection, elbow curve)

    The matrix and frequency table never change after initialize(), so one
    instance can be shared by every session.
    """

    def __init__(
        self,
        corpus_loader: Optional[BaseCorpusLoader] = None,
        cleaner: Optional[TextCleaner] = None,
        embedder: Optional[BaseEmbedder] = None,
        clusterer: Optional[KMeansClusterer] = None,
    ):
        """
        Initialize the WordSpace.

        Args:
            corpus_loader: Corpus loader (defaults to ReviewsCsvLoader)
            cleaner: Text cleaner (defaults to TextCleaner with NLTK stopwords)
            embedder: Embedding backend (defaults to Word2VecEmbedder)
            clusterer: K-means settings (defaults to config seed/restarts)
        """
        self.corpus_loader = corpus_loader or ReviewsCsvLoader()
        self._cleaner = cleaner
        self.embedder = embedder or Word2VecEmbedder()
        self.clusterer = clusterer or KMeansClusterer()

        # Will be populated after initialization
        self.documents_df: Optional[pd.DataFrame] = None
        self.corpus: Optional[CleanCorpus] = None
        self.matrix: Optional[EmbeddingMatrix] = None

        self._projection: Optional[pd.DataFrame] = None
        self._elbow_curve: Optional[ElbowCurve] = None
        self._initialized = False

    @classmethod
    def from_parts(
        cls,
        matrix: EmbeddingMatrix,
        word_freq: WordFrequencyTable,
        clusterer: Optional[KMeansClusterer] = None,
    ) -> "WordSpace":
        """Build an initialized space from an existing matrix and frequency table."""
        space = cls(clusterer=clusterer)
        space.corpus = CleanCorpus(documents=(), word_freq=word_freq)
        space.matrix = matrix
        space._initialized = True
        return space

    @property
    def name(self) -> str:
        return f"{self.corpus_loader.name}_{self.embedder.name}"

    @property
    def is_initialized(self) -> bool:
        """Check if the space has been initialized."""
        return self._initialized

    @property
    def cleaner(self) -> TextCleaner:
        if self._cleaner is None:
            self._cleaner = TextCleaner()
        return self._cleaner

    @property
    def word_freq(self) -> WordFrequencyTable:
        if self.corpus is None:
            raise RuntimeError("WordSpace not initialized. Call initialize() first.")
        return self.corpus.word_freq

    def initialize(self, progress_callback: Optional[Callable[[str], None]] = None) -> None:
        """
        Load, clean, and embed the corpus.

        Args:
            progress_callback: Optional callable(message: str) for progress updates

        Raises:
            FileNotFoundError: If the corpus is missing
            DegenerateInput: If the cleaned corpus yields no vocabulary
        """
        if self._initialized:
            return

        def log(msg: str):
            if progress_callback:
                progress_callback(msg)
            logger.info(msg)

        log(f"Loading {self.corpus_loader.name}...")
        self.documents_df = self.corpus_loader.load()
        log(f"Loaded {len(self.documents_df)} documents")

        log("Cleaning text...")
        self.corpus = prepare_corpus(self.documents_df["text"].tolist(), self.cleaner)
        log(f"Kept {self.corpus.n_documents} documents, {len(self.corpus.word_freq)} distinct words")

        log(f"Training {self.embedder.name}...")
        self.matrix = self.embedder.train(self.corpus.documents)
        log(f"Embedding matrix: {self.matrix.n_words} words x {self.matrix.dimension} dims")

        self._initialized = True
        log("Ready!")

    def _require_matrix(self) -> EmbeddingMatrix:
        if self.matrix is None:
            raise RuntimeError("WordSpace not initialized. Call initialize() first.")
        return self.matrix

    def ensure_projection(self) -> pd.DataFrame:
        """
        Get the 3D PCA projection, computing it on first use.

        Raises:
            DegenerateInput: If the matrix cannot be projected
        """
        if self._projection is None:
            self._projection = PCAProjector(n_components=3).fit(self._require_matrix())
        return self._projection

    def ensure_elbow_curve(self, k_max: int = config.ELBOW_K_MAX) -> ElbowCurve:
        """Get the elbow curve, computing it on first use."""
        if self._elbow_curve is None or len(self._elbow_curve) != min(
            k_max, self._require_matrix().n_distinct_points
        ):
            self._elbow_curve = self.clusterer.elbow_curve(self._require_matrix(), k_max)
        return self._elbow_curve

    @property
    def n_words(self) -> int:
        """Number of words in the embedding vocabulary."""
        return self.matrix.n_words if self.matrix is not None else 0

    @property
    def n_documents(self) -> int:
        return self.corpus.n_documents if self.corpus is not None else 0
