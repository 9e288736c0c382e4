"""
PCA projection for dimensionality reduction.
Standardizes the embedding matrix and projects it onto its top principal components.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.errors import DegenerateInput
import config

logger = logging.getLogger(__name__)

COMPONENT_COLUMNS = ["PC1", "PC2", "PC3"]


class PCAProjector:
    """
    PCA-based dimensionality reduction for embedding visualization.

    The sign of each principal axis is not fixed: two implementations (or
    two LAPACK builds) may return mirrored axes. Coordinates are stable up
    to a per-axis sign flip.
    """

    def __init__(self, n_components: int = config.PCA_N_COMPONENTS):
        """
        Initialize PCA projector.

        Args:
            n_components: Output dimensions (default: 3)
        """
        self.n_components = n_components

        self._scaler: Optional[StandardScaler] = None
        self._model: Optional[PCA] = None

    def fit(self, matrix: EmbeddingMatrix) -> pd.DataFrame:
        """
        Fit PCA on the matrix and return projected coordinates.

        Args:
            matrix: Embedding matrix to project

        Returns:
            DataFrame with columns word, PC1..PCn, one row per word

        Raises:
            DegenerateInput: If there are too few rows or too few
                dimensions with non-zero variance
        """
        vectors = matrix.vectors
        if matrix.n_words < self.n_components:
            raise DegenerateInput(
                f"Need at least {self.n_components} words to project, got {matrix.n_words}"
            )

        # var() of a constant column like [0.7, 0.7, 0.7] is ~1e-32, not 0
        n_varying = int(np.count_nonzero(np.ptp(vectors, axis=0) > 0))
        if n_varying < self.n_components:
            raise DegenerateInput(
                f"Need at least {self.n_components} dimensions with non-zero variance, "
                f"got {n_varying}"
            )

        self._scaler = StandardScaler()
        scaled = self._scaler.fit_transform(vectors)

        # Full SVD keeps the result independent of any random state
        self._model = PCA(n_components=self.n_components, svd_solver="full")
        coords = self._model.fit_transform(scaled)

        logger.debug(
            "PCA explained variance: "
            + ", ".join(f"{r:.3f}" for r in self._model.explained_variance_ratio_)
        )

        columns = [f"PC{i + 1}" for i in range(self.n_components)]
        df = pd.DataFrame(coords, columns=columns)
        df.insert(0, "word", list(matrix.words))
        return df

    def transform(self, vectors: np.ndarray) -> np.ndarray:
        """
        Project new vectors onto the fitted components.

        Raises:
            RuntimeError: If the projector hasn't been fitted
        """
        if self._model is None or self._scaler is None:
            raise RuntimeError("PCA model not fitted. Call fit() first.")
        return self._model.transform(self._scaler.transform(np.atleast_2d(vectors)))

    @property
    def explained_variance_ratio(self) -> np.ndarray:
        if self._model is None:
            raise RuntimeError("PCA model not fitted. Call fit() first.")
        return self._model.explained_variance_ratio_

    @property
    def is_fitted(self) -> bool:
        """Check if the model has been fitted."""
        return self._model is not None


def project(matrix: EmbeddingMatrix) -> pd.DataFrame:
    """Project the matrix onto its top 3 principal components."""
    return PCAProjector(n_components=3).fit(matrix)
