"""
Theme constants and CSS injection for Cluster-Lens.
"""

import html
from dataclasses import dataclass

import streamlit as st

import config


@dataclass(frozen=True)
class Theme:
    """Colors shared by the CSS and the Plotly figures."""
    accent: str = "#14b8a6"
    accent_soft: str = "rgba(20, 184, 166, 0.25)"
    highlight: str = config.HIGHLIGHT_COLOR

    page_top: str = "#0b1120"
    page_bottom: str = "#111827"
    sidebar: str = "rgba(11, 17, 32, 0.96)"

    text: str = "#e5e7eb"
    text_dim: str = "#9ca3af"


THEME = Theme()

# kind -> (background, border, text color)
MESSAGE_STYLES = {
    "error": ("rgba(239, 68, 68, 0.12)", "rgba(239, 68, 68, 0.4)", "#fecaca"),
    "warning": ("rgba(234, 179, 8, 0.12)", "rgba(234, 179, 8, 0.4)", "#fde68a"),
    "info": ("rgba(20, 184, 166, 0.10)", THEME.accent_soft, THEME.text),
}


def _message_css() -> str:
    return "\n".join(
        f"""
    .cl-{kind} {{
        background: {bg};
        border-left: 3px solid {border};
        border-radius: 4px;
        padding: 0.6rem 0.9rem;
        margin: 0.4rem 0;
        color: {fg};
        font-size: 0.88rem;
    }}"""
        for kind, (bg, border, fg) in MESSAGE_STYLES.items()
    )


def get_css() -> str:
    """Build the page stylesheet from the theme."""
    return f"""
<style>
    [data-testid="stAppViewContainer"] {{
        background: linear-gradient(180deg, {THEME.page_top} 0%, {THEME.page_bottom} 100%);
    }}

    [data-testid="stSidebar"] {{
        background: {THEME.sidebar};
        border-right: 1px solid {THEME.accent_soft};
    }}

    .cl-title {{
        color: {THEME.text};
        font-size: 2.2rem;
        font-weight: 700;
        margin-bottom: 0;
    }}

    .cl-title span {{
        color: {THEME.accent};
    }}

    .cl-tagline {{
        color: {THEME.text_dim};
        margin-top: 0.2rem;
    }}
{_message_css()}

    [data-baseweb="tab"][aria-selected="true"] {{
        border-bottom: 2px solid {THEME.accent};
        color: {THEME.accent};
    }}
</style>
"""


def inject_styles() -> None:
    """Inject CSS styles into the Streamlit app."""
    st.markdown(get_css(), unsafe_allow_html=True)


def render_header() -> None:
    st.markdown('<h1 class="cl-title">Cluster<span>-</span>Lens</h1>', unsafe_allow_html=True)
    st.markdown(
        '<p class="cl-tagline">Explore k-means clusters of Word2Vec word embeddings</p>',
        unsafe_allow_html=True,
    )


def _render_message(kind: str, message: str) -> None:
    st.markdown(f'<div class="cl-{kind}">{html.escape(message)}</div>', unsafe_allow_html=True)


def render_error(message: str) -> None:
    """Render a styled error message."""
    _render_message("error", message)


def render_warning(message: str) -> None:
    """Render a styled warning message."""
    _render_message("warning", message)


def render_info(message: str) -> None:
    _render_message("info", message)
