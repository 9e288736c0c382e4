"""
Corpus loaders turn a data source into a DataFrame of raw documents.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "text", "source")


class BaseCorpusLoader(ABC):
    """
    One raw document per row.

    ``load`` returns at least the REQUIRED_COLUMNS:
    - id: unique string per document
    - text: raw document text, cleaned later by TextCleaner
    - source: corpus identifier (see config.SOURCE_*)

    Extra columns ride along untouched.
    """

    @abstractmethod
    def load(self) -> pd.DataFrame:
        """Read the source and return a validated DataFrame."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key of the corpus, e.g. ``reviews``."""

    def validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Check the required columns and drop rows without text.

        Raises:
            ValueError: If a required column is missing
        """
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Corpus is missing required columns: {missing}")

        n_rows = len(df)
        has_text = df["text"].notna() & (df["text"].astype(str).str.strip() != "")
        df = df.loc[has_text].copy()
        df["id"] = df["id"].astype(str)

        n_dropped = n_rows - len(df)
        if n_dropped:
            logger.warning(f"{self.name}: dropped {n_dropped} of {n_rows} rows with no text")
        logger.info(f"{self.name}: {len(df)} documents")

        return df.reset_index(drop=True)

    @staticmethod
    def _detect_column(columns: Iterable[str], candidates: Iterable[str]) -> Optional[str]:
        """First of ``candidates`` found in ``columns``, ignoring case."""
        by_lower = {c.lower(): c for c in columns}
        for candidate in candidates:
            match = by_lower.get(candidate.lower())
            if match is not None:
                return match
        return None


_LOADER_REGISTRY: dict[str, type[BaseCorpusLoader]] = {}


def register_loader(name: str):
    """
    Class decorator adding a loader to the registry under ``name``.

        @register_loader("reviews")
        class ReviewsCsvLoader(BaseCorpusLoader): ...

    Raises:
        TypeError: If the class is not a BaseCorpusLoader
        ValueError: If ``name`` is taken
    """
    def decorator(cls: type[BaseCorpusLoader]):
        if not (isinstance(cls, type) and issubclass(cls, BaseCorpusLoader)):
            raise TypeError(f"{cls!r} is not a BaseCorpusLoader subclass")
        if name in _LOADER_REGISTRY:
            raise ValueError(
                f"Loader '{name}' is already registered by {_LOADER_REGISTRY[name].__name__}"
            )
        _LOADER_REGISTRY[name] = cls
        return cls
    return decorator


def get_loader(name: str, **kwargs) -> BaseCorpusLoader:
    """
    Instantiate a registered loader, passing ``kwargs`` to its constructor.

    Raises:
        ValueError: If no loader is registered under ``name``
    """
    try:
        cls = _LOADER_REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown loader '{name}'. Available: {list_loaders()}") from None
    return cls(**kwargs)


def list_loaders() -> list[str]:
    return sorted(_LOADER_REGISTRY)
