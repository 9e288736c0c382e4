"""
Interactive Plotly charts for the cluster explorer.
Renders composed view tables; no clustering or projection happens here.
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

import config


def _legend_sort_key(label: str):
    # Numeric cluster ids first in numeric order, then "Others"
    return (0, int(label), "") if label.isdigit() else (1, 0, label)


class ScatterPlotBuilder:
    """
    Builds the 3D Plotly scatter of projected words.

    One trace per legend label, so the legend reads either "1, 2, ..., K"
    or "<highlighted id>, Others".
    """

    AXIS_STYLE = dict(
        showgrid=True,
        gridcolor="rgba(102, 126, 234, 0.2)",
        zeroline=False,
    )

    def __init__(
        self,
        height: int = config.PLOT_HEIGHT,
        width: Optional[int] = None,
        marker_size: int = 4
    ):
        """
        Initialize the scatter plot builder.

        Args:
            height: Plot height in pixels
            width: Plot width in pixels (None lets the container decide)
            marker_size: Marker diameter
        """
        self.height = height
        self.width = width
        self.marker_size = marker_size

    def build(self, view: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
        """
        Build a 3D scatter plot.

        Args:
            view: Composed view records with columns word, PC1, PC2, PC3,
                cluster, color, opacity, legend
            title: Optional figure title

        Returns:
            Plotly Figure object
        """
        fig = go.Figure()

        for label in sorted(view["legend"].unique(), key=_legend_sort_key):
            group = view[view["legend"] == label]
            # Plotly opacity is per trace; group members share it by construction
            opacity = float(group["opacity"].iloc[0])

            fig.add_trace(go.Scatter3d(
                x=group["PC1"],
                y=group["PC2"],
                z=group["PC3"],
                mode="markers",
                marker=dict(
                    color=group["color"].tolist(),
                    size=self.marker_size,
                ),
                opacity=opacity,
                text=self._build_hover_text(group),
                hovertemplate="%{text}<extra></extra>",
                name=label if label == config.OTHERS_LABEL else f"Cluster {label}",
                customdata=group["word"].values,
                legendgroup=label,
            ))

        fig.update_layout(
            title=title,
            height=self.height,
            width=self.width,
            template="plotly_dark",
            paper_bgcolor="rgba(0,0,0,0)",
            scene=dict(
                bgcolor="rgba(17,17,17,0.8)",
                xaxis=dict(title="PC1", **self.AXIS_STYLE),
                yaxis=dict(title="PC2", **self.AXIS_STYLE),
                zaxis=dict(title="PC3", **self.AXIS_STYLE),
            ),
            showlegend=True,
            legend=dict(
                yanchor="top",
                y=0.99,
                xanchor="left",
                x=0.01,
                bgcolor="rgba(0,0,0,0.5)",
                font=dict(size=10)
            ),
            margin=dict(l=0, r=0, t=30, b=0),
        )

        return fig

    def _build_hover_text(self, df: pd.DataFrame) -> list[str]:
        """Build hover text for words."""
        return [
            f"<b>{word}</b><br>Cluster {cluster}"
            for word, cluster in zip(df["word"], df["cluster"])
        ]


class ElbowChartBuilder:
    """Line chart of k-means inertia against K, with the selected K marked."""

    def __init__(self, height: int = config.ELBOW_PLOT_HEIGHT):
        self.height = height

    def build(self, elbow: pd.DataFrame) -> go.Figure:
        """
        Args:
            elbow: Columns k, inertia, selected (see compose_elbow_annotation)
        """
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=elbow["k"],
            y=elbow["inertia"],
            mode="lines+markers",
            line=dict(color="#667eea", width=2),
            marker=dict(size=7),
            name="Within-cluster SS",
            hovertemplate="k=%{x}<br>WSS=%{y:.2f}<extra></extra>",
        ))

        selected = elbow[elbow["selected"]]
        if not selected.empty:
            fig.add_trace(go.Scatter(
                x=selected["k"],
                y=selected["inertia"],
                mode="markers",
                marker=dict(color=config.HIGHLIGHT_COLOR, size=14, symbol="circle-open", line=dict(width=3)),
                name=f"k = {int(selected['k'].iloc[0])}",
                hovertemplate="Selected k=%{x}<extra></extra>",
            ))

        fig.update_layout(
            height=self.height,
            template="plotly_dark",
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(17,17,17,0.8)",
            xaxis=dict(title="Number of clusters (k)", dtick=1),
            yaxis=dict(title="Total within-cluster SS"),
            showlegend=False,
            margin=dict(l=20, r=20, t=30, b=20),
        )
        return fig
