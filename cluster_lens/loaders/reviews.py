"""
Reviews CSV loader.
Loads free-text reviews (one per row) from a CSV file.
"""

from pathlib import Path
from typing import Optional

import pandas as pd

from .base import BaseCorpusLoader, register_loader
import config


@register_loader("reviews")
class ReviewsCsvLoader(BaseCorpusLoader):
    """
    Loader for a CSV of reviews.

    The text column is auto-detected from TEXT_CANDIDATES. Positive and
    negative review halves (as in hotel review exports) are concatenated
    when both are present. Other columns are kept as metadata.
    """

    TEXT_CANDIDATES = ["review", "text", "content", "comment", "body", "review_text"]
    SPLIT_REVIEW_COLUMNS = ("Positive_Review", "Negative_Review")

    def __init__(
        self,
        csv_path: Optional[Path] = None,
        max_items: Optional[int] = None,
        sep: str = ","
    ):
        """
        Initialize the reviews loader.

        Args:
            csv_path: Path to the CSV file (defaults to config.REVIEWS_CSV_PATH)
            max_items: Optional limit on number of reviews to load
            sep: CSV field separator
        """
        self.csv_path = Path(csv_path) if csv_path else config.REVIEWS_CSV_PATH
        self.max_items = max_items
        self.sep = sep

    @property
    def name(self) -> str:
        return "reviews"

    def load(self) -> pd.DataFrame:
        """
        Load the reviews CSV and normalize to standard format.

        Returns:
            DataFrame with columns: id, text, source (+ original metadata)

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If no text column can be found
        """
        if not self.csv_path.exists():
            raise FileNotFoundError(
                f"Reviews corpus not found at {self.csv_path}\n"
                f"Place a CSV with a 'review' or 'text' column at: {self.csv_path}"
            )

        df = pd.read_csv(self.csv_path, sep=self.sep)
        df = self._normalize_columns(df)

        df["source"] = config.SOURCE_REVIEWS
        df["id"] = [f"review_{i}" for i in range(len(df))]

        if self.max_items is not None:
            df = df.head(self.max_items)

        return self.validate(df)

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Map the detected text column onto 'text'."""
        positive, negative = self.SPLIT_REVIEW_COLUMNS
        if "text" not in df.columns and positive in df.columns and negative in df.columns:
            df["text"] = (
                df[positive].fillna("").astype(str) + " " + df[negative].fillna("").astype(str)
            ).str.strip()
            return df

        text_col = self._detect_column(list(df.columns), self.TEXT_CANDIDATES)
        if text_col is None:
            raise ValueError(
                f"Reviews CSV must have one of {self.TEXT_CANDIDATES} columns. "
                f"Available columns: {list(df.columns)}"
            )

        if text_col != "text":
            df = df.rename(columns={text_col: "text"})
        return df
