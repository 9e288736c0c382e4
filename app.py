"""
Cluster-Lens: Word Embedding Cluster Explorer
Main Streamlit application.

Run with: streamlit run app.py
"""

import logging

import streamlit as st

from cluster_lens.core.word_space import WordSpace
from cluster_lens.loaders import get_loader
from cluster_lens.ui import details, docs, main_view, sidebar
from cluster_lens.ui.state import AppState, init_session_state
from cluster_lens.ui.styles import inject_styles, render_header
import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Cluster-Lens",
    layout="wide",
    initial_sidebar_state="expanded"
)

inject_styles()
init_session_state()


# -----------------------------------------------------------------------------
# Data Loading - shared by every session
# -----------------------------------------------------------------------------

@st.cache_resource(show_spinner=False)
def get_word_space(corpus_key: str) -> WordSpace:
    """
    Get or create the WordSpace for a corpus.
    Cached so the embedding model is trained once per process.
    """
    loader_name = config.AVAILABLE_CORPORA[corpus_key]["loader"]
    return WordSpace(corpus_loader=get_loader(loader_name))


def has_any_corpus() -> bool:
    for cfg in config.AVAILABLE_CORPORA.values():
        try:
            if cfg["data_check"]():
                return True
        except OSError:
            continue
    return False


# -----------------------------------------------------------------------------
# Main Application
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    render_header()

    if not has_any_corpus():
        st.warning(f"""
        **No corpus found!**

        Add at least one corpus:

        **Reviews:** a CSV with a `review` or `text` column at `{config.REVIEWS_CSV_PATH}`

        **Text files:** one document per line in `*.txt` files under `{config.TEXT_CORPUS_DIR}`
        """)
        st.stop()

    tab_explore, tab_methodology = st.tabs(["Explore", "Methodology"])

    with tab_explore:
        with st.sidebar:
            sidebar.render_corpus_switcher()
            st.markdown("---")

        corpus_key = st.session_state.current_corpus

        space = get_word_space(corpus_key)
        if not space.is_initialized:
            if not main_view.render_loading_screen(space):
                st.stop()
            st.rerun()

        AppState.ensure_rendered(space)

        sidebar.render_sidebar(space)
        main_view.render_error_banner()
        details.render_drilldown(space)

        col_viz, col_details = st.columns([3, 2])

        with col_viz:
            main_view.render_visualization()
            main_view.render_elbow_chart()

        with col_details:
            details.render_last_drilldown()

    with tab_methodology:
        docs.render_methodology_tab()


if __name__ == "__main__":
    main()
