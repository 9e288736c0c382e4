"""
Embedding backends: train word vectors on a cleaned corpus.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from cluster_lens.core.matrix import EmbeddingMatrix


class BaseEmbedder(ABC):
    """
    A word embedding model trained from scratch on the corpus.

    ``train`` returns one vector per retained vocabulary word. Which words
    are retained (frequency cut-offs and so on) is up to the backend.
    """

    @abstractmethod
    def train(self, documents: Sequence[Sequence[str]]) -> EmbeddingMatrix:
        """
        Args:
            documents: Cleaned documents, each a sequence of tokens

        Raises:
            DegenerateInput: If no vocabulary survives training
        """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length D of every word vector."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier shown in the sidebar, e.g. ``word2vec_cbow_d15``."""


_EMBEDDER_REGISTRY: dict[str, type[BaseEmbedder]] = {}


def register_embedder(name: str):
    """
    Class decorator adding an embedder to the registry under ``name``.

        @register_embedder("word2vec")
        class Word2VecEmbedder(BaseEmbedder): ...
    """
    def decorator(cls: type[BaseEmbedder]):
        if name in _EMBEDDER_REGISTRY:
            raise ValueError(f"Embedder '{name}' is already registered")
        _EMBEDDER_REGISTRY[name] = cls
        return cls
    return decorator


def get_embedder(name: str, **kwargs) -> BaseEmbedder:
    """
    Instantiate a registered embedder, passing ``kwargs`` to its constructor.

    Raises:
        ValueError: If no embedder is registered under ``name``
    """
    try:
        cls = _EMBEDDER_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown embedder '{name}'. Available: {list_embedders()}"
        ) from None
    return cls(**kwargs)


def list_embedders() -> list[str]:
    return sorted(_EMBEDDER_REGISTRY)
