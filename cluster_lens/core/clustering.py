"""
K-means clustering of the embedding matrix.
Computes cluster assignments at a chosen K and the elbow curve over a K range.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans

from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.errors import InvalidParameter
import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ClusterAssignment:
    """
    Word -> cluster id for one K.

    Ids are contiguous in [1, k]. They carry no meaning across different K
    or seeds.
    """
    k: int
    labels: dict[str, int]

    @property
    def cluster_ids(self) -> list[int]:
        return list(range(1, self.k + 1))

    def members(self, cluster_id: int) -> list[str]:
        """Words in a cluster, in matrix order."""
        return [w for w, c in self.labels.items() if c == cluster_id]

    def sizes(self) -> dict[int, int]:
        sizes = {cid: 0 for cid in self.cluster_ids}
        for c in self.labels.values():
            sizes[c] += 1
        return sizes

    def to_series(self) -> pd.Series:
        return pd.Series(self.labels, name="cluster", dtype=int)

    def get(self, word: str, default: Optional[int] = None) -> Optional[int]:
        return self.labels.get(word, default)

    def __getitem__(self, word: str) -> int:
        return self.labels[word]

    def __contains__(self, word: object) -> bool:
        return word in self.labels

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class ElbowCurve:
    """(k, total within-cluster sum of squares) for k = 1..k_max."""
    points: tuple[tuple[int, float], ...]

    @property
    def ks(self) -> list[int]:
        return [k for k, _ in self.points]

    @property
    def inertias(self) -> list[float]:
        return [inertia for _, inertia in self.points]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.points, columns=["k", "inertia"])

    def __iter__(self) -> Iterator[tuple[int, float]]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)


class KMeansClusterer:
    """
    Seeded, multi-restart k-means over an EmbeddingMatrix.

    Every fit uses the same seed and number of restarts and keeps the
    restart with the lowest inertia, so repeated calls on the same matrix
    give identical results.
    """

    def __init__(
        self,
        seed: int = config.KMEANS_SEED,
        n_init: int = config.KMEANS_N_INIT,
        max_iter: int = config.KMEANS_MAX_ITER,
    ):
        """
        Args:
            seed: Random seed for centroid initialization
            n_init: Restarts per fit (at least KMEANS_MIN_N_INIT)
            max_iter: Lloyd iteration cap per restart
        """
        if n_init < config.KMEANS_MIN_N_INIT:
            raise InvalidParameter(
                f"n_init must be at least {config.KMEANS_MIN_N_INIT}, got {n_init}"
            )
        self.seed = seed
        self.n_init = n_init
        self.max_iter = max_iter

    def _fit(self, vectors: np.ndarray, k: int) -> KMeans:
        model = KMeans(
            n_clusters=k,
            init="k-means++",
            n_init=self.n_init,
            max_iter=self.max_iter,
            algorithm="lloyd",
            random_state=self.seed,
        )
        return model.fit(vectors)

    def cluster(self, matrix: EmbeddingMatrix, k: int) -> ClusterAssignment:
        """
        Partition the vocabulary into k clusters.

        Raises:
            InvalidParameter: If k < 1, k exceeds the vocabulary size, or
                there are fewer than k distinct vectors
        """
        if k < 1 or k > matrix.n_words:
            raise InvalidParameter(
                f"Cluster count must be between 1 and {matrix.n_words}, got {k}"
            )
        n_distinct = matrix.n_distinct_points
        if k > n_distinct:
            raise InvalidParameter(
                f"Only {n_distinct} distinct vectors; cannot form {k} non-empty clusters"
            )

        model = self._fit(matrix.vectors, k)
        labels = {
            word: int(label) + 1
            for word, label in zip(matrix.words, model.labels_)
        }
        logger.debug(f"Clustered {matrix.n_words} words into {k} clusters (inertia={model.inertia_:.4f})")
        return ClusterAssignment(k=k, labels=labels)

    def elbow_curve(self, matrix: EmbeddingMatrix, k_max: int = config.ELBOW_K_MAX) -> ElbowCurve:
        """
        Best-restart inertia for k = 1..k_max.

        k_max is capped at the number of distinct vectors.
        """
        if k_max < 1:
            raise InvalidParameter(f"k_max must be at least 1, got {k_max}")

        k_limit = min(k_max, matrix.n_distinct_points)
        if k_limit < k_max:
            logger.info(f"Elbow curve capped at k={k_limit} ({k_limit} distinct vectors)")

        points = []
        for k in range(1, k_limit + 1):
            model = self._fit(matrix.vectors, k)
            points.append((k, float(model.inertia_)))
        return ElbowCurve(points=tuple(points))


def cluster(
    matrix: EmbeddingMatrix,
    k: int,
    seed: int = config.KMEANS_SEED,
    n_init: int = config.KMEANS_N_INIT,
) -> ClusterAssignment:
    """Cluster the matrix into k groups with the default restart policy."""
    return KMeansClusterer(seed=seed, n_init=n_init).cluster(matrix, k)


def compute_elbow_curve(
    matrix: EmbeddingMatrix,
    k_max: int = config.ELBOW_K_MAX,
    seed: int = config.KMEANS_SEED,
    n_init: int = config.KMEANS_N_INIT,
) -> ElbowCurve:
    """Compute the elbow curve for k = 1..k_max."""
    return KMeansClusterer(seed=seed, n_init=n_init).elbow_curve(matrix, k_max)
