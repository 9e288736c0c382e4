"""Sidebar UI components for Cluster-Lens."""

import logging
from typing import TYPE_CHECKING

import streamlit as st

from cluster_lens.core.session import ChangeClusterCount, ChangeHighlight, Phase, RequestDrilldown
from cluster_lens.ui.state import AppState
from cluster_lens.visualization.views import NO_HIGHLIGHT, compose_cluster_summary, is_no_highlight
import config

if TYPE_CHECKING:
    from cluster_lens.core.word_space import WordSpace

logger = logging.getLogger(__name__)


def render_sidebar(space: "WordSpace") -> None:
    """Render the complete sidebar."""
    with st.sidebar:
        render_corpus_info(space)
        st.markdown("---")
        render_cluster_controls(space)
        st.markdown("---")
        render_cluster_summary(space)


def render_corpus_switcher() -> None:
    """Render corpus selector radio buttons."""
    st.markdown("### Corpus")

    available = []
    for key, cfg in config.AVAILABLE_CORPORA.items():
        try:
            if cfg["data_check"]():
                available.append((key, cfg["label"], cfg.get("description", "")))
        except OSError as e:
            logger.debug(f"Corpus {key} check failed: {e}")

    if not available:
        st.warning("No corpora found. Add data to the data/ folder.")
        return

    current = st.session_state.current_corpus
    valid_keys = [k for k, _, _ in available]

    if current not in valid_keys:
        current = available[0][0]
        st.session_state.current_corpus = current

    labels = {k: label for k, label, _ in available}
    selected = st.radio(
        "Select corpus:",
        valid_keys,
        format_func=lambda x: labels[x],
        index=valid_keys.index(current),
        key="corpus_radio",
        help="Switch between text corpora"
    )

    if selected != current:
        st.session_state.current_corpus = selected
        AppState.reset_for_corpus_change()
        st.rerun()


def render_corpus_info(space: "WordSpace") -> None:
    """Render corpus and model statistics."""
    st.markdown("### Corpus Info")
    st.markdown(f"**Documents:** {space.n_documents:,}")
    st.markdown(f"**Vocabulary:** {space.n_words:,} words")
    st.markdown(f"**Model:** `{space.embedder.name}`")


def render_cluster_controls(space: "WordSpace") -> None:
    """Render cluster count, highlight, and drill-down controls."""
    st.markdown("### Clusters")

    state = AppState.session()
    k_max = min(config.CLUSTER_K_MAX, space.n_words)
    if k_max <= config.CLUSTER_K_MIN:
        st.caption(f"Vocabulary too small to vary k (k = {state.k})")
        return

    k = st.slider(
        "Number of clusters (k)",
        min_value=config.CLUSTER_K_MIN,
        max_value=k_max,
        value=min(max(state.k, config.CLUSTER_K_MIN), k_max),
        help="Use the elbow chart to pick a K where the curve flattens"
    )
    if k != state.k:
        AppState.dispatch(ChangeClusterCount(k), space)
        st.rerun()

    options = [NO_HIGHLIGHT] + list(range(1, state.k + 1))
    current = NO_HIGHLIGHT if is_no_highlight(state.highlight) else state.highlight
    highlight = st.selectbox(
        "Highlight cluster",
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda x: x.label if x is NO_HIGHLIGHT else f"Cluster {x}",
    )
    if highlight != current:
        AppState.dispatch(ChangeHighlight(highlight), space)
        st.rerun()

    if st.button("Drill into cluster", type="primary", width="stretch"):
        if state.phase != Phase.DRILLDOWN_REQUESTED:
            AppState.dispatch(RequestDrilldown(), space)
        st.rerun()


def render_cluster_summary(space: "WordSpace") -> None:
    """Render per-cluster sizes and most frequent word."""
    outputs = AppState.outputs()
    if outputs is None or outputs.assignment is None:
        return

    st.markdown("### Cluster Sizes")
    summary = compose_cluster_summary(outputs.assignment, space.word_freq)
    st.dataframe(
        summary.rename(columns={"cluster": "Cluster", "size": "Words", "top_word": "Top word"}),
        hide_index=True,
        width="stretch",
    )
