"""
Corpus preparation: turn raw documents into cleaned token lists and a
word-frequency table.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

import nltk
from nltk.corpus import stopwords as nltk_stopwords

import config

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://\S+|www\.\S+")
_TOKEN_RE = re.compile(r"[^\W\d_]+", re.UNICODE)


def load_stopwords(language: str = config.STOPWORD_LANGUAGE) -> frozenset[str]:
    """
    Load NLTK's stopword list for a language, downloading the corpus once
    if it is not installed yet.
    """
    try:
        words = nltk_stopwords.words(language)
    except LookupError:
        logger.info("NLTK stopwords corpus not found, downloading...")
        nltk.download("stopwords", quiet=True)
        words = nltk_stopwords.words(language)
    return frozenset(w.lower() for w in words)


class TextCleaner:
    """
    Lowercases text, strips URLs and digits, and drops stopwords and
    very short tokens.
    """

    def __init__(
        self,
        stopwords: Optional[Iterable[str]] = None,
        language: str = config.STOPWORD_LANGUAGE,
        min_token_length: int = config.MIN_TOKEN_LENGTH,
        extra_stopwords: Iterable[str] = config.EXTRA_STOPWORDS,
    ):
        """
        Args:
            stopwords: Explicit stopword list; loaded from NLTK for
                ``language`` when omitted
            language: NLTK stopword language
            min_token_length: Shorter tokens are dropped
            extra_stopwords: Additional domain-specific stopwords
        """
        base = load_stopwords(language) if stopwords is None else stopwords
        self.stopwords = frozenset(w.lower() for w in base) | frozenset(
            w.lower() for w in extra_stopwords
        )
        self.min_token_length = min_token_length

    def tokenize(self, text: str) -> list[str]:
        if not isinstance(text, str):
            return []
        text = _URL_RE.sub(" ", text.lower())
        return [
            token for token in _TOKEN_RE.findall(text)
            if len(token) >= self.min_token_length and token not in self.stopwords
        ]


@dataclass(frozen=True)
class WordFrequencyTable:
    """Word -> occurrence count, ordered by first appearance in the corpus."""
    counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "counts", dict(self.counts))

    @classmethod
    def from_documents(cls, documents: Iterable[Iterable[str]]) -> "WordFrequencyTable":
        counter: Counter = Counter()
        for doc in documents:
            counter.update(doc)
        return cls(counts=counter)

    def items(self):
        return self.counts.items()

    def get(self, word: str, default: int = 0) -> int:
        return self.counts.get(word, default)

    def __getitem__(self, word: str) -> int:
        return self.counts[word]

    def __contains__(self, word: object) -> bool:
        return word in self.counts

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self):
        return iter(self.counts)


@dataclass(frozen=True)
class CleanCorpus:
    """Cleaned token documents plus their frequency table."""
    documents: tuple[tuple[str, ...], ...]
    word_freq: WordFrequencyTable

    @property
    def n_documents(self) -> int:
        return len(self.documents)

    @property
    def n_tokens(self) -> int:
        return sum(len(doc) for doc in self.documents)


def prepare_corpus(texts: Iterable[str], cleaner: TextCleaner) -> CleanCorpus:
    """
    Clean raw texts into token documents.

    Documents with no tokens left after cleaning are dropped.
    """
    documents = []
    n_raw = 0
    for text in texts:
        n_raw += 1
        tokens = cleaner.tokenize(text)
        if tokens:
            documents.append(tuple(tokens))

    if n_raw and len(documents) < n_raw:
        logger.info(f"Dropped {n_raw - len(documents)} documents with no tokens after cleaning")

    word_freq = WordFrequencyTable.from_documents(documents)
    logger.info(f"Prepared {len(documents)} documents, {len(word_freq)} distinct words")
    return CleanCorpus(documents=tuple(documents), word_freq=word_freq)
