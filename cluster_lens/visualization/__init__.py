"""
View composition and Plotly charts for Cluster-Lens.
"""

from .views import (
    ALL_CLUSTERS,
    NO_HIGHLIGHT,
    compose_cluster_summary,
    compose_elbow_annotation,
    compose_scatter_view,
    compose_top_words,
)
from .charts import ElbowChartBuilder, ScatterPlotBuilder

__all__ = [
    "ALL_CLUSTERS",
    "NO_HIGHLIGHT",
    "compose_cluster_summary",
    "compose_elbow_annotation",
    "compose_scatter_view",
    "compose_top_words",
    "ElbowChartBuilder",
    "ScatterPlotBuilder",
]
