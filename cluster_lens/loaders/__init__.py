"""
Corpus loaders for Cluster-Lens.
"""

from .base import BaseCorpusLoader, get_loader, list_loaders, register_loader
from .reviews import ReviewsCsvLoader
from .text_files import TextFilesLoader

__all__ = [
    "BaseCorpusLoader",
    "get_loader",
    "list_loaders",
    "register_loader",
    "ReviewsCsvLoader",
    "TextFilesLoader",
]
