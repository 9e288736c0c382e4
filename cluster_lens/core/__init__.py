"""
Core components for Cluster-Lens.
"""

from .matrix import EmbeddingMatrix
from .corpus import CleanCorpus, TextCleaner, WordFrequencyTable, prepare_corpus
from .clustering import ClusterAssignment, ElbowCurve, KMeansClusterer, cluster, compute_elbow_curve
from .projector import PCAProjector, project

__all__ = [
    "EmbeddingMatrix",
    "CleanCorpus",
    "TextCleaner",
    "WordFrequencyTable",
    "prepare_corpus",
    "ClusterAssignment",
    "ElbowCurve",
    "KMeansClusterer",
    "cluster",
    "compute_elbow_curve",
    "PCAProjector",
    "project",
]
