"""
Exception types raised by the Cluster-Lens pipeline.
"""

from typing import Optional

import pandas as pd


class ClusterLensError(Exception):
    """Base class for all Cluster-Lens errors."""


class InvalidParameter(ClusterLensError, ValueError):
    """A user-controlled parameter (K, cluster id) is out of range."""


class DegenerateInput(ClusterLensError, ValueError):
    """The input is too small or too flat to cluster, train, or project."""


class EmptySelection(ClusterLensError):
    """
    A drill-down matched no words.

    Not a failure: callers display ``rows`` (an empty table) instead of
    an error dialog.
    """

    def __init__(self, message: str, rows: Optional[pd.DataFrame] = None):
        super().__init__(message)
        self.rows = rows if rows is not None else pd.DataFrame(
            columns=["word", "frequency", "cluster"]
        )
