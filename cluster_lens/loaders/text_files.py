"""
Plain-text loader.
Treats every non-empty line of every *.txt file in a directory as one document.
"""

from pathlib import Path
from typing import Optional

import pandas as pd

from .base import BaseCorpusLoader, register_loader
import config


@register_loader("text_files")
class TextFilesLoader(BaseCorpusLoader):
    """Loader for a directory of UTF-8 text files, one document per line."""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        pattern: str = "*.txt",
        max_items: Optional[int] = None
    ):
        self.data_dir = Path(data_dir) if data_dir else config.TEXT_CORPUS_DIR
        self.pattern = pattern
        self.max_items = max_items

    @property
    def name(self) -> str:
        return "text_files"

    def load(self) -> pd.DataFrame:
        """
        Read all matching files in name order.

        Raises:
            FileNotFoundError: If the directory is missing or holds no matching files
        """
        files = sorted(self.data_dir.glob(self.pattern)) if self.data_dir.exists() else []
        if not files:
            raise FileNotFoundError(
                f"No {self.pattern} files found in {self.data_dir}"
            )

        records = []
        for path in files:
            with open(path, encoding="utf-8") as f:
                for line_no, line in enumerate(f, 1):
                    if line.strip():
                        records.append({
                            "id": f"{path.stem}_{line_no}",
                            "text": line.strip(),
                            "file": path.name,
                        })

        df = pd.DataFrame(records, columns=["id", "text", "file"])
        df["source"] = config.SOURCE_TEXT_FILES

        if self.max_items is not None:
            df = df.head(self.max_items)

        return self.validate(df)
