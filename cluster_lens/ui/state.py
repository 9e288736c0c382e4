"""
Centralized session state management for Cluster-Lens.
Keeps one SessionState per browser session and routes user events through
the session state machine.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from cluster_lens.core.session import (
    Event,
    SessionOutputs,
    SessionState,
    recompute,
    render,
)
from cluster_lens.core.word_space import WordSpace
from cluster_lens.errors import InvalidParameter
import config

logger = logging.getLogger(__name__)


@dataclass
class StateDefaults:
    """Default values for all Streamlit session state variables."""
    current_corpus: str = config.DEFAULT_CORPUS
    session: Optional[SessionState] = None
    outputs: Optional[SessionOutputs] = None
    last_error: Optional[str] = None


class AppState:
    """
    Per-browser-session storage. Selections change only through dispatch(),
    which runs the event through the session state machine.
    """

    @classmethod
    def init(cls, default_corpus: str = config.DEFAULT_CORPUS) -> None:
        """Initialize all session state with defaults."""
        defaults = StateDefaults(current_corpus=default_corpus)
        for field_name in defaults.__dataclass_fields__:
            if field_name not in st.session_state:
                st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def reset_for_corpus_change(cls) -> None:
        """Drop selections that belong to the previous corpus."""
        st.session_state.session = None
        st.session_state.outputs = None
        st.session_state.last_error = None

    @staticmethod
    def session() -> SessionState:
        if st.session_state.get("session") is None:
            st.session_state.session = SessionState()
        return st.session_state.session

    @staticmethod
    def outputs() -> Optional[SessionOutputs]:
        return st.session_state.get("outputs")

    @classmethod
    def ensure_rendered(cls, space: WordSpace) -> SessionOutputs:
        """Compose the initial outputs for this session if none exist yet."""
        outputs = cls.outputs()
        if outputs is not None:
            return outputs

        state = cls.session()
        k_limit = min(space.n_words, space.matrix.n_distinct_points)
        if state.k > k_limit:
            # Tiny vocabularies: fall back to the largest K that can be clustered
            state = SessionState(k=max(1, k_limit))
            st.session_state.session = state
        try:
            outputs = render(state, space)
        except InvalidParameter as e:
            logger.warning(f"Initial render failed: {e}")
            outputs = SessionOutputs(error=str(e))
        st.session_state.outputs = outputs
        return outputs

    @classmethod
    def dispatch(cls, event: Event, space: WordSpace) -> SessionOutputs:
        """Run one event through the state machine and store the result."""
        new_state, outputs = recompute(cls.session(), event, space, cls.outputs())
        st.session_state.session = new_state
        st.session_state.outputs = outputs
        if outputs.error:
            cls.set_error(outputs.error)
        else:
            cls.clear_error()
        return outputs

    @classmethod
    def set_error(cls, message: str) -> None:
        """Record an error for display."""
        st.session_state.last_error = message

    @classmethod
    def clear_error(cls) -> None:
        """Clear any recorded error."""
        st.session_state.last_error = None

    @staticmethod
    def has_error() -> bool:
        """True while a rejected request message is pending."""
        return st.session_state.get("last_error") is not None


def init_session_state(default_corpus: str = config.DEFAULT_CORPUS) -> None:
    """Seed st.session_state on the first run of a browser session."""
    AppState.init(default_corpus)
