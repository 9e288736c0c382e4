"""
EmbeddingMatrix: the immutable word-vector table shared by every view.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping

import numpy as np

from cluster_lens.errors import DegenerateInput


@dataclass(frozen=True, eq=False)
class EmbeddingMatrix:
    """
    Ordered vocabulary with one fixed-dimension vector per word.

    Rows of ``vectors`` line up with ``words``. The array is flagged
    read-only on construction so clustering and projection can share it
    by reference.
    """
    words: tuple[str, ...]
    vectors: np.ndarray

    def __post_init__(self):
        words = tuple(self.words)
        vectors = np.array(self.vectors, dtype=np.float64, copy=True)

        if vectors.ndim != 2:
            raise DegenerateInput(
                f"Embedding vectors must be a 2D array, got shape {vectors.shape}"
            )
        if len(words) != vectors.shape[0]:
            raise DegenerateInput(
                f"Got {len(words)} words but {vectors.shape[0]} vectors"
            )
        if len(set(words)) != len(words):
            raise DegenerateInput("Embedding vocabulary contains duplicate words")

        vectors.setflags(write=False)
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "vectors", vectors)

    @classmethod
    def from_mapping(cls, word_vectors: Mapping[str, np.ndarray]) -> "EmbeddingMatrix":
        """Build a matrix from a word -> vector mapping, keeping its order."""
        words = list(word_vectors.keys())
        if not words:
            raise DegenerateInput("Cannot build an embedding matrix from no words")
        return cls(words=tuple(words), vectors=np.vstack([word_vectors[w] for w in words]))

    @property
    def n_words(self) -> int:
        return len(self.words)

    @property
    def dimension(self) -> int:
        return self.vectors.shape[1]

    @property
    def n_distinct_points(self) -> int:
        """Number of distinct vectors (duplicates collapse under k-means)."""
        if self.n_words == 0:
            return 0
        return len(np.unique(self.vectors, axis=0))

    def vector(self, word: str) -> np.ndarray:
        try:
            return self.vectors[self.words.index(word)]
        except ValueError:
            raise KeyError(word) from None

    def __len__(self) -> int:
        return self.n_words

    def __iter__(self) -> Iterator[tuple[str, np.ndarray]]:
        return iter(zip(self.words, self.vectors))

    def __contains__(self, word: object) -> bool:
        return word in self.words
