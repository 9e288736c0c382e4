"""
Embedding backends for Cluster-Lens.
"""

from .base import BaseEmbedder, get_embedder, list_embedders, register_embedder
from .word2vec_embedder import Word2VecEmbedder

__all__ = [
    "BaseEmbedder",
    "get_embedder",
    "list_embedders",
    "register_embedder",
    "Word2VecEmbedder",
]
