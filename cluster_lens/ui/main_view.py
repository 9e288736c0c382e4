"""Main view UI components (elbow chart, 3D scatter, loading screen)."""

import logging
from typing import TYPE_CHECKING

import streamlit as st

from cluster_lens.errors import DegenerateInput
from cluster_lens.ui.state import AppState
from cluster_lens.ui.styles import render_error, render_warning
from cluster_lens.visualization.charts import ElbowChartBuilder, ScatterPlotBuilder

if TYPE_CHECKING:
    from cluster_lens.core.word_space import WordSpace

logger = logging.getLogger(__name__)


def render_error_banner() -> None:
    """Show the last rejected request, if any."""
    if AppState.has_error():
        render_warning(st.session_state.last_error)


def render_elbow_chart() -> None:
    """Render the elbow curve with the current K marked."""
    outputs = AppState.outputs()
    if outputs is None or outputs.elbow is None:
        return

    st.markdown("### Elbow Curve")
    fig = ElbowChartBuilder().build(outputs.elbow)
    st.plotly_chart(fig, use_container_width=True, key="elbow_chart")


def render_visualization() -> None:
    """Render the 3D PCA scatter colored by cluster."""
    outputs = AppState.outputs()
    if outputs is None:
        return

    st.markdown("### Embedding Space")
    if outputs.render_error:
        render_error(outputs.render_error)
        return
    if outputs.scatter is None:
        return

    fig = ScatterPlotBuilder().build(outputs.scatter)
    st.plotly_chart(fig, use_container_width=True, key="pca_plot_3d")


def render_loading_screen(space: "WordSpace") -> bool:
    """
    Build the word space with a progress display.

    Returns:
        True once the space is ready, False if building failed
    """
    st.markdown("### Training Word Embeddings")
    st.markdown("Cleaning the corpus and training the embedding model. This runs once per corpus.")

    status_text = st.empty()

    try:
        with st.spinner("Working..."):
            space.initialize(progress_callback=status_text.text)
        status_text.empty()
        return True
    except (FileNotFoundError, DegenerateInput) as e:
        st.error(str(e))
    except Exception as e:
        logger.exception("Initialization failed")
        st.error(f"Error during initialization: {e}")
        st.exception(e)
    return False
