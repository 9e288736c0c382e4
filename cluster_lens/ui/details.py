"""Drill-down dialog and top-words panel."""

from typing import TYPE_CHECKING

import pandas as pd
import streamlit as st

from cluster_lens.core.session import ApplyDrilldown, DismissDrilldown, Phase
from cluster_lens.ui.state import AppState
from cluster_lens.ui.styles import render_info
from cluster_lens.visualization.views import ALL_CLUSTERS, is_all_clusters
import config

if TYPE_CHECKING:
    from cluster_lens.core.word_space import WordSpace


def render_drilldown(space: "WordSpace") -> None:
    """Open the drill-down dialog once per request."""
    if AppState.session().phase == Phase.DRILLDOWN_REQUESTED:
        # Consumed on open; the dialog stays up through its own reruns
        AppState.dispatch(DismissDrilldown(), space)
        drilldown_dialog(space)


@st.dialog("Top words", width="large")
def drilldown_dialog(space: "WordSpace") -> None:
    """Pick a cluster (or all) and list its words by corpus frequency."""
    state = AppState.session()
    options = [ALL_CLUSTERS] + list(range(1, state.k + 1))
    current = ALL_CLUSTERS if is_all_clusters(state.drilldown_target) else state.drilldown_target

    target = st.selectbox(
        "Cluster",
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda x: x.label if x is ALL_CLUSTERS else f"Cluster {x}",
    )

    if st.button("Apply", type="primary"):
        outputs = AppState.dispatch(ApplyDrilldown(target), space)
        if outputs.error:
            st.error(outputs.error)
            return
        render_top_words_table(outputs.top_words, outputs.notices)


def render_top_words_table(top_words: pd.DataFrame, notices: list[str]) -> None:
    """Render the ranked word table, or a note when it is empty."""
    for notice in notices:
        render_info(notice)
    if top_words is None or top_words.empty:
        return

    st.dataframe(
        top_words.rename(columns={"word": "Word", "frequency": "Frequency", "cluster": "Cluster"}),
        hide_index=True,
        width="stretch",
        height=min(600, 38 + 35 * len(top_words)),
    )


def render_last_drilldown() -> None:
    """Show the most recent drill-down result beside the charts."""
    outputs = AppState.outputs()
    if outputs is None or outputs.top_words is None:
        st.markdown(f"""
        ### Getting Started

        **Pick k:** use the elbow chart and the slider in the sidebar

        **Highlight:** spotlight one cluster; the rest fade to {config.DIM_OPACITY:.0%} opacity

        **Drill down:** list a cluster's words ranked by corpus frequency
        """)
        return

    target = AppState.session().drilldown_target
    title = "All clusters" if is_all_clusters(target) else f"Cluster {target}"
    st.markdown(f"### Top words: {title}")
    render_top_words_table(outputs.top_words, outputs.notices)
